"""Workload-aware selection: overloaded baristas take quick drinks, underloaded ones take long drinks."""

from __future__ import annotations

from typing import Callable, Optional, Sequence, TypeVar

from cafequeue.config import WorkloadPolicy

T = TypeVar("T")

DEFAULT_POLICY = WorkloadPolicy()


def average_workload(worked_minutes: Sequence[float]) -> float:
    if not worked_minutes:
        return 0.0
    return sum(worked_minutes) / len(worked_minutes)


def workload_ratio(worked: float, average: float) -> float:
    """Worked minutes relative to the cross-barista average (1.0 when nobody has worked yet)."""
    if average == 0:
        return 1.0
    return worked / average


def classify_workload(ratio: float, policy: WorkloadPolicy = DEFAULT_POLICY) -> str:
    if ratio > policy.overloaded_ratio:
        return "overloaded"
    if ratio < policy.underloaded_ratio:
        return "underloaded"
    return "balanced"


def choose_for_workload(
    ranked: Sequence[T],
    ratio: float,
    prep_time: Callable[[T], float],
    policy: WorkloadPolicy = DEFAULT_POLICY,
) -> Optional[int]:
    """
    Pick a candidate index from a list already sorted best-first.

    Args:
        ranked: Candidates, highest priority first
        ratio: Barista workload ratio
        prep_time: Preparation time accessor for a candidate
        policy: Workload thresholds

    Returns:
        Index into ``ranked``, or None when ``ranked`` is empty
    """
    if not ranked:
        return None
    state = classify_workload(ratio, policy)
    if state == "overloaded":
        for idx, item in enumerate(ranked):
            if prep_time(item) <= policy.quick_prep_minutes:
                return idx
    elif state == "underloaded":
        for idx, item in enumerate(ranked):
            if prep_time(item) >= policy.complex_prep_minutes:
                return idx
    return 0
