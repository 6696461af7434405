"""FIFO and SMART dispatch policies."""

from __future__ import annotations

from typing import List, Optional

from cafequeue.config import PriorityWeights, WorkloadPolicy
from cafequeue.domain.catalog import QueueMode
from cafequeue.domain.models import Barista, Order
from cafequeue.services.workload import choose_for_workload, classify_workload

from .base import BaseQueuePolicy, Selection


class FifoPolicy(BaseQueuePolicy):
    """Strict arrival order, no rescoring."""

    mode = QueueMode.FIFO

    def select(self, pending, barista, average_workload, now):
        if not pending:
            return None
        return Selection(pending[0])

    def ordered(self, pending, now):
        return list(pending)


class SmartPolicy(BaseQueuePolicy):
    """
    Weighted priority dispatch with workload balancing.

    Every pending order is rescored against ``now`` before any ordering
    decision; ties go to the lower order id.
    """

    mode = QueueMode.SMART

    def __init__(
        self,
        weights: PriorityWeights | None = None,
        workload: WorkloadPolicy | None = None,
    ):
        self.weights = weights or PriorityWeights()
        self.workload = workload or WorkloadPolicy()

    def rank(self, pending: List[Order], now: float) -> List[Order]:
        for order in pending:
            order.recalculate_priority(now, self.weights)
        return sorted(pending, key=lambda o: (-o.priority_score, o.id))

    def select(
        self,
        pending: List[Order],
        barista: Barista,
        average_workload: float,
        now: float,
    ) -> Optional[Selection]:
        ranked = self.rank(pending, now)
        ratio = barista.workload_ratio(average_workload)
        idx = choose_for_workload(
            ranked, ratio, lambda o: o.drink_type.preparation_time, self.workload
        )
        if idx is None:
            return None
        return Selection(ranked[idx], classify_workload(ratio, self.workload), ratio)

    def ordered(self, pending, now):
        return self.rank(pending, now)


def policy_for(mode: QueueMode, weights: PriorityWeights | None = None, workload: WorkloadPolicy | None = None) -> BaseQueuePolicy:
    if mode is QueueMode.FIFO:
        return FifoPolicy()
    return SmartPolicy(weights, workload)
