"""Order queue with FIFO/SMART dispatch and fairness tracking."""

from __future__ import annotations

import math
import random
import threading
from typing import Dict, List, Optional

from cafequeue.config import QueueConfig
from cafequeue.domain.catalog import CustomerType, DrinkType, QueueMode
from cafequeue.domain.models import Barista, Order
from cafequeue.services.arrivals import arrivals_in_minute, random_drink, sample_customer_type

from .base import BaseQueuePolicy
from .policies import policy_for

FIRST_ORDER_ID = 101


class OrderQueue:
    """
    Pending orders, completed history and the logical clock for one shop.

    All public methods serialize on one re-entrant lock, so a
    recompute-sort-remove sequence in ``select_next`` cannot interleave with
    a submit or a completion.
    """

    def __init__(self, cfg: QueueConfig | None = None, seed: int | None = None):
        self.cfg = cfg or QueueConfig()
        self.rng = random.Random(seed if seed is not None else self.cfg.seed)
        self.lock = threading.RLock()
        self._next_id = FIRST_ORDER_ID
        self._init_state()

    def _init_state(self) -> None:
        self._pending: List[Order] = []
        self._completed: List[Order] = []
        self.clock: float = 0.0
        self.total_orders = 0
        self.timeout_orders = 0
        self.fairness_violations = 0
        self.auto_arrival_enabled = False
        self.mode = QueueMode.parse(self.cfg.default_mode)
        self.policy: BaseQueuePolicy = policy_for(self.mode, self.cfg.weights, self.cfg.workload)

    def submit(self, drink_type, customer_type=None) -> Order:
        """
        Create an order at the current clock and enqueue it.

        Args:
            drink_type: DrinkType or drink name
            customer_type: CustomerType, name, or None for a random tier

        Raises:
            ValueError: If a name does not match a known drink or tier
        """
        drink = DrinkType.parse(drink_type)
        customer = CustomerType.parse(customer_type) if customer_type is not None else None
        with self.lock:
            if customer is None:
                customer = sample_customer_type(self.rng, self.cfg.arrivals.customer_mix)
            order = Order(
                id=self._next_id,
                drink_type=drink,
                customer_type=customer,
                created_at=self.clock,
            )
            self._next_id += 1
            order.recalculate_priority(self.clock, self.cfg.weights)
            self._pending.append(order)
            self.total_orders += 1
            return order

    def add_random_order(self) -> Order:
        with self.lock:
            return self.submit(random_drink(self.rng))

    def add_rush_burst(self) -> List[Order]:
        """Add a short burst of random orders (5-8 by default)."""
        a = self.cfg.arrivals
        with self.lock:
            count = self.rng.randint(a.rush_burst_min, a.rush_burst_max)
            return [self.add_random_order() for _ in range(count)]

    def select_next(self, barista: Barista, average_workload: float) -> Optional[Order]:
        """
        Remove and return the next order for an idle barista.

        Returns:
            The selected order, or None when nothing is pending
        """
        with self.lock:
            if not self._pending:
                return None

            selection = self.policy.select(self._pending, barista, average_workload, self.clock)
            if selection is None:
                return None
            selected = selection.order

            if self.mode is QueueMode.SMART:
                if selection.decision != "balanced":
                    print(
                        f"[INFO] {barista.name} {selection.decision} ({selection.ratio:.1f}x) - "
                        f"picked order #{selected.id} ({selected.drink_type.display_name})"
                    )
                self._record_skips(selected)

            self._pending.remove(selected)
            if self.mode is QueueMode.SMART:
                self.update_estimated_waits()
            return selected

    def _record_skips(self, selected: Order) -> None:
        free_skips = self.cfg.weights.fairness_free_skips
        for order in self._pending:
            if order is selected or order.id >= selected.id:
                continue
            if order.increment_people_served_ahead() == free_skips + 1:
                self.fairness_violations += 1

    def update_estimated_waits(self) -> None:
        """Project a display-only wait for each pending order (cumulative prep / barista count)."""
        with self.lock:
            ranked = sorted(self._pending, key=lambda o: (-o.priority_score, o.id))
            cumulative = 0.0
            for order in ranked:
                cumulative += order.drink_type.preparation_time
                order.estimated_wait = cumulative / self.cfg.baristas

    def withdraw(self, order: Order) -> None:
        """Take a pending order out of the queue without serving it."""
        with self.lock:
            self._pending.remove(order)

    def recalculate_all_priorities(self) -> None:
        with self.lock:
            for order in self._pending:
                order.recalculate_priority(self.clock, self.cfg.weights)

    def advance_clock(self, minutes: float) -> List[Order]:
        """
        Move the logical clock forward and rescore pending orders.

        With auto arrival on, random orders arrive once for every whole
        minute boundary the clock crosses, so fractional steps accumulate.

        Returns:
            Orders created by auto arrival
        """
        if minutes < 0:
            raise ValueError(f"Cannot move the clock backwards ({minutes} min)")
        with self.lock:
            start = self.clock
            self.clock += minutes
            self.recalculate_all_priorities()
            arrived: List[Order] = []
            if self.auto_arrival_enabled:
                a = self.cfg.arrivals
                for minute in range(math.floor(start), math.floor(self.clock)):
                    count = arrivals_in_minute(self.rng, a.rate_per_minute, a.sampler)
                    for _ in range(count):
                        arrived.append(self.add_random_order())
                    if count > 0:
                        print(f"[INFO] Poisson arrival: {count} customers in minute {minute + 1}")
            return arrived

    def complete_order(self, order: Order, completed_at: float | None = None) -> Order:
        """
        Retire an order into the completed history.

        Raises:
            RuntimeError: If the order was already completed
        """
        with self.lock:
            when = self.clock if completed_at is None else completed_at
            order.mark_completed(when)
            if order.wait_time(when) > order.customer_type.timeout_minutes:
                self.timeout_orders += 1
            self._completed.append(order)
            return order

    def set_mode(self, mode) -> QueueMode:
        """Switch between FIFO and SMART (enum or name; ValueError if unknown)."""
        parsed = QueueMode.parse(mode)
        with self.lock:
            self.mode = parsed
            self.policy = policy_for(parsed, self.cfg.weights, self.cfg.workload)
            return parsed

    def set_auto_arrival(self, enabled: bool) -> None:
        with self.lock:
            self.auto_arrival_enabled = bool(enabled)

    def reset(self) -> None:
        """Full state wipe: queues, counters, clock, mode and auto arrival. Order ids keep increasing."""
        with self.lock:
            self._init_state()
        print("[WARN] Order queue reset")

    @property
    def size(self) -> int:
        return len(self._pending)

    def pending_snapshot(self) -> List[Order]:
        """Pending orders in the current policy's service order, freshly scored."""
        with self.lock:
            self.recalculate_all_priorities()
            self.update_estimated_waits()
            return self.policy.ordered(self._pending, self.clock)

    def pending_view(self) -> List[Dict]:
        """Plain-dict rows of the pending snapshot for external serialization."""
        return [order.to_dict() for order in self.pending_snapshot()]

    def completed_orders(self) -> List[Order]:
        with self.lock:
            return list(self._completed)

    def metrics(self) -> Dict:
        with self.lock:
            waits = [o.wait_time(self.clock) for o in self._completed]
            avg_wait = sum(waits) / len(waits) if waits else 0.0
            max_wait = max(waits) if waits else 0.0
            timeout_rate = self.timeout_orders * 100.0 / self.total_orders if self.total_orders else 0.0
            fairness_rate = (
                self.fairness_violations * 100.0 / self.total_orders if self.total_orders else 0.0
            )
            return {
                "avg_wait_time": round(avg_wait, 1),
                "max_wait_time": round(max_wait, 1),
                "timeout_rate": round(timeout_rate, 1),
                "fairness_violation_rate": round(fairness_rate, 1),
                "queue_length": len(self._pending),
                "completed_orders": len(self._completed),
                "total_orders": self.total_orders,
                "current_mode": self.mode.name,
                "auto_arrival_enabled": self.auto_arrival_enabled,
                "clock": self.clock,
            }
