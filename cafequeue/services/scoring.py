"""Priority scoring for queued orders.

Score = wait + complexity + loyalty + urgency - fairness penalty, with an
extra emergency boost in rush-hour simulation mode.
"""

from __future__ import annotations

from dataclasses import dataclass

from cafequeue.config import PriorityWeights
from cafequeue.domain.catalog import CustomerType, DrinkType, Urgency

DEFAULT_WEIGHTS = PriorityWeights()


@dataclass(frozen=True)
class PriorityBreakdown:
    """Result of one priority computation."""

    wait_component: float
    complexity_component: float
    loyalty_component: float
    urgency_component: float
    fairness_penalty: float
    emergency_boost: float
    score: float
    urgency: Urgency
    reason: str


def calculate_wait_component(elapsed: float, weights: PriorityWeights = DEFAULT_WEIGHTS) -> float:
    """Linear ramp over the saturation window, capped at the wait weight."""
    elapsed = max(0.0, elapsed)
    return min(elapsed / weights.wait_saturation_minutes * weights.wait, weights.wait)


def calculate_complexity_component(drink_type: DrinkType, weights: PriorityWeights = DEFAULT_WEIGHTS) -> float:
    """Shorter drinks score higher (throughput bias)."""
    max_prep = DrinkType.max_preparation_time()
    return (max_prep - drink_type.preparation_time) / max_prep * weights.complexity


def calculate_loyalty_component(customer_type: CustomerType, weights: PriorityWeights = DEFAULT_WEIGHTS) -> float:
    return customer_type.loyalty_bonus / 10.0 * weights.loyalty


def calculate_urgency_component(
    elapsed: float,
    timeout: float,
    weights: PriorityWeights = DEFAULT_WEIGHTS,
) -> tuple[float, Urgency]:
    """
    Urgency ramps linearly over the last minutes before the customer's timeout.

    Returns:
        (component, classification)
    """
    threshold = timeout - weights.urgency_window_minutes
    if elapsed >= timeout:
        return weights.urgency, Urgency.URGENT
    if elapsed >= threshold:
        ratio = (elapsed - threshold) / weights.urgency_window_minutes
        return ratio * weights.urgency, Urgency.ELEVATED
    return 0.0, Urgency.NORMAL


def calculate_fairness_penalty(people_served_ahead: int, weights: PriorityWeights = DEFAULT_WEIGHTS) -> float:
    """Penalty for every skip beyond the free allowance (3 by default)."""
    skips_beyond = max(0, people_served_ahead - weights.fairness_free_skips)
    return skips_beyond * weights.fairness_penalty_per_skip


def _normal_reason(drink_type: DrinkType, customer_type: CustomerType, elapsed: float) -> str:
    if customer_type is CustomerType.PREMIUM:
        return "Premium member priority"
    if drink_type.preparation_time <= 2.0:
        return "Quick order - throughput optimization"
    if elapsed > 3.0:
        return "Wait time accumulating"
    return "Standard priority"


def score_components(
    drink_type: DrinkType,
    customer_type: CustomerType,
    elapsed: float,
    people_served_ahead: int = 0,
    weights: PriorityWeights = DEFAULT_WEIGHTS,
    emergency: bool = False,
) -> PriorityBreakdown:
    """
    Compute the full priority breakdown for one order.

    Args:
        drink_type: Drink ordered
        customer_type: Customer tier
        elapsed: Minutes waited so far
        people_served_ahead: Times a later order was served first
        weights: Scoring weights
        emergency: Rush-hour mode; adds the emergency boost and raises the cap

    Returns:
        PriorityBreakdown with the clamped score
    """
    timeout = customer_type.timeout_minutes

    wait = calculate_wait_component(elapsed, weights)
    complexity = calculate_complexity_component(drink_type, weights)
    loyalty = calculate_loyalty_component(customer_type, weights)
    urgency_points, urgency = calculate_urgency_component(elapsed, timeout, weights)

    if urgency is Urgency.URGENT:
        reason = f"CRITICAL - exceeded timeout ({customer_type.display_name}, {timeout:.1f} min)"
    elif urgency is Urgency.ELEVATED:
        reason = f"Approaching timeout - {timeout - elapsed:.1f} min remaining"
    else:
        reason = _normal_reason(drink_type, customer_type, elapsed)

    penalty = calculate_fairness_penalty(people_served_ahead, weights)
    if penalty > 0:
        reason += f" | Fairness: {people_served_ahead} skipped"

    boost = 0.0
    cap = weights.live_cap
    if emergency:
        cap = weights.simulation_cap
        if elapsed > weights.emergency_after_minutes:
            boost = weights.emergency_boost

    raw = wait + complexity + loyalty + urgency_points + boost - penalty
    score = max(0.0, min(cap, raw))

    return PriorityBreakdown(
        wait_component=wait,
        complexity_component=complexity,
        loyalty_component=loyalty,
        urgency_component=urgency_points,
        fairness_penalty=penalty,
        emergency_boost=boost,
        score=score,
        urgency=urgency,
        reason=reason,
    )


def calculate_priority(order, now: float, weights: PriorityWeights = DEFAULT_WEIGHTS) -> PriorityBreakdown:
    """Priority of a live order at logical time ``now``."""
    return score_components(
        order.drink_type,
        order.customer_type,
        order.wait_time(now),
        order.people_served_ahead,
        weights,
    )
