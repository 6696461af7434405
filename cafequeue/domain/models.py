"""Order and barista models for the live coffee-shop queue."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from cafequeue.config import PriorityWeights
from cafequeue.services.scoring import DEFAULT_WEIGHTS, PriorityBreakdown, calculate_priority
from cafequeue.services.workload import workload_ratio

from .catalog import CustomerType, DrinkType, Urgency


@dataclass(eq=False)
class Order:
    """
    A customer order waiting for, or served by, a barista.

    Times are logical minutes on the owning queue's clock. The priority
    fields are a cache of ``priority_at(now)`` written by
    ``recalculate_priority``.
    """

    id: int
    drink_type: DrinkType
    customer_type: CustomerType
    created_at: float = 0.0
    priority_score: float = 0.0
    priority_reason: str = ""
    urgency: Urgency = Urgency.NORMAL
    people_served_ahead: int = 0
    estimated_wait: float = 0.0
    completed_at: Optional[float] = None

    def wait_time(self, now: float) -> float:
        return now - self.created_at

    def priority_at(self, now: float, weights: PriorityWeights = DEFAULT_WEIGHTS) -> PriorityBreakdown:
        """Pure projection of this order's priority at ``now``."""
        return calculate_priority(self, now, weights)

    def recalculate_priority(self, now: float, weights: PriorityWeights = DEFAULT_WEIGHTS) -> PriorityBreakdown:
        breakdown = self.priority_at(now, weights)
        self.priority_score = breakdown.score
        self.urgency = breakdown.urgency
        self.priority_reason = breakdown.reason
        return breakdown

    def increment_people_served_ahead(self) -> int:
        self.people_served_ahead += 1
        return self.people_served_ahead

    def mark_completed(self, when: float) -> None:
        if self.completed_at is not None:
            raise RuntimeError(f"Order #{self.id} already completed at {self.completed_at:.1f}")
        self.completed_at = when

    def is_approaching_timeout(self, now: float, window: float = 2.0) -> bool:
        return self.wait_time(now) >= self.customer_type.timeout_minutes - window

    def has_exceeded_timeout(self, now: float) -> bool:
        return self.wait_time(now) >= self.customer_type.timeout_minutes

    @property
    def is_completed(self) -> bool:
        return self.completed_at is not None

    @property
    def total_completion_time(self) -> float:
        """Minutes from creation to completion (0 while open)."""
        if self.completed_at is None:
            return 0.0
        return self.completed_at - self.created_at

    def is_complaint(self, threshold: float = 10.0) -> bool:
        if self.completed_at is None:
            return False
        return self.total_completion_time > threshold

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "drink": self.drink_type.display_name,
            "prep_time": self.drink_type.preparation_time,
            "customer_type": self.customer_type.display_name,
            "created_at": self.created_at,
            "priority_score": round(self.priority_score, 2),
            "priority_reason": self.priority_reason,
            "urgency": self.urgency.value,
            "people_served_ahead": self.people_served_ahead,
            "estimated_wait": round(self.estimated_wait, 2),
            "completed_at": self.completed_at,
        }

    def __repr__(self) -> str:
        return (
            f"<Order(id={self.id}, drink='{self.drink_type.display_name}', "
            f"customer='{self.customer_type.display_name}', score={self.priority_score:.1f})>"
        )


class BaristaStatus(Enum):
    IDLE = "idle"
    BUSY = "busy"


@dataclass(eq=False)
class Barista:
    """A barista with workload tracking for load balancing."""

    id: int
    name: str
    status: BaristaStatus = BaristaStatus.IDLE
    current_order: Optional[Order] = None
    task_started_at: Optional[float] = None
    total_work_minutes: float = 0.0
    orders_completed: int = 0

    def is_idle(self) -> bool:
        return self.status is BaristaStatus.IDLE

    def assign(self, order: Order, now: float) -> None:
        """
        Start working on ``order``.

        Raises:
            RuntimeError: If the barista is already busy
        """
        if not self.is_idle():
            raise RuntimeError(
                f"{self.name} is busy with order #{self.current_order.id}; cannot take order #{order.id}"
            )
        self.current_order = order
        self.status = BaristaStatus.BUSY
        self.task_started_at = now

    def remaining_time(self, now: float) -> float:
        if self.current_order is None or self.task_started_at is None:
            return 0.0
        elapsed = now - self.task_started_at
        return max(0.0, self.current_order.drink_type.preparation_time - elapsed)

    def complete(self) -> Order:
        """
        Finish the current order and go back to idle.

        Raises:
            RuntimeError: If the barista holds no order
        """
        if self.current_order is None:
            raise RuntimeError(f"{self.name} has no order to complete")
        order = self.current_order
        self.total_work_minutes += order.drink_type.preparation_time
        self.orders_completed += 1
        self.current_order = None
        self.status = BaristaStatus.IDLE
        self.task_started_at = None
        return order

    def workload_ratio(self, average_work_minutes: float) -> float:
        return workload_ratio(self.total_work_minutes, average_work_minutes)

    def is_overloaded(self, average_work_minutes: float, threshold: float = 1.2) -> bool:
        return self.workload_ratio(average_work_minutes) > threshold

    def is_underutilized(self, average_work_minutes: float, threshold: float = 0.8) -> bool:
        return self.workload_ratio(average_work_minutes) < threshold

    def __repr__(self) -> str:
        return f"<Barista(id={self.id}, name='{self.name}', status={self.status.value})>"
