"""CoffeeShop - coordinates the order queue and the baristas tick by tick."""

from __future__ import annotations

from typing import Dict, List, Tuple

from cafequeue.config import QueueConfig
from cafequeue.domain.models import Barista, Order
from cafequeue.services.workload import average_workload

from .queue import OrderQueue


class CoffeeShop:
    """
    Live shop: one order queue and a fixed pool of baristas.

    Each tick advances the queue clock, retires finished drinks and hands
    pending orders to idle baristas. Every sweep holds the queue lock, so at
    most one tick runs at a time.
    """

    def __init__(self, cfg: QueueConfig | None = None, seed: int | None = None):
        self.cfg = cfg or QueueConfig()
        self.queue = OrderQueue(self.cfg, seed=seed)
        self.baristas: List[Barista] = self._make_baristas()
        self.auto_mode = True

    def _make_baristas(self) -> List[Barista]:
        return [Barista(id=i, name=f"Barista {i}") for i in range(1, self.cfg.baristas + 1)]

    def average_workload(self) -> float:
        return average_workload([b.total_work_minutes for b in self.baristas])

    def assign_orders(self) -> List[Tuple[Barista, Order]]:
        """
        Hand the next order to every idle barista.

        Returns:
            (barista, order) pairs assigned in this sweep
        """
        assigned: List[Tuple[Barista, Order]] = []
        with self.queue.lock:
            now = self.queue.clock
            for barista in self.baristas:
                if not barista.is_idle():
                    continue
                order = self.queue.select_next(barista, self.average_workload())
                if order is None:
                    break
                barista.assign(order, now)
                assigned.append((barista, order))
                print(
                    f"[OK] {barista.name} assigned order #{order.id} ({order.drink_type.display_name}) - "
                    f"{order.customer_type.display_name} - priority {order.priority_score:.1f}"
                )
        return assigned

    def check_completed_orders(self) -> List[Order]:
        """Retire every finished drink, then refill idle baristas."""
        finished: List[Order] = []
        with self.queue.lock:
            now = self.queue.clock
            for barista in self.baristas:
                if barista.is_idle() or barista.remaining_time(now) > 0:
                    continue
                order = barista.current_order
                self.queue.complete_order(order)
                barista.complete()
                finished.append(order)
                print(
                    f"[OK] {barista.name} completed order #{order.id} - "
                    f"total time {order.total_completion_time:.1f} min"
                )
            self.assign_orders()
        return finished

    def tick(self, minutes: float = 1) -> List[Order]:
        """
        Advance the shop by ``minutes``: clock, completions, assignments.

        Returns:
            Orders completed during this tick
        """
        with self.queue.lock:
            self.queue.advance_clock(minutes)
            finished = self.check_completed_orders()
            if self.queue.size:
                print(f"[INFO] Simulated {minutes} min | queue: {self.queue.size} orders")
            return finished

    def scheduled_tick(self) -> List[Order]:
        """Tick called by an external timer; does nothing while paused."""
        if not self.auto_mode:
            return []
        return self.tick(1)

    def manual_tick(self) -> List[Order]:
        return self.tick(1)

    def set_auto_mode(self, enabled: bool) -> None:
        self.auto_mode = bool(enabled)
        print(f"[INFO] Auto-simulation {'ENABLED' if self.auto_mode else 'DISABLED'}")

    def complete_all_orders(self) -> List[Order]:
        """Force-finish every in-progress drink."""
        finished: List[Order] = []
        with self.queue.lock:
            for barista in self.baristas:
                if barista.is_idle():
                    continue
                order = barista.current_order
                self.queue.complete_order(order)
                barista.complete()
                finished.append(order)
        return finished

    def reset(self) -> None:
        """Reset the queue and replace the baristas with fresh ones."""
        with self.queue.lock:
            self.queue.reset()
            self.baristas = self._make_baristas()

    def barista_status(self) -> List[Dict]:
        with self.queue.lock:
            now = self.queue.clock
            avg = self.average_workload()
            rows = []
            for b in self.baristas:
                row = {
                    "id": b.id,
                    "name": b.name,
                    "status": b.status.value,
                    "workload_ratio": round(b.workload_ratio(avg), 2),
                    "total_work_minutes": round(b.total_work_minutes, 1),
                    "orders_completed": b.orders_completed,
                    "current_order": None,
                    "order_id": None,
                    "customer_type": None,
                    "time_remaining": 0.0,
                }
                if b.current_order is not None:
                    row["current_order"] = b.current_order.drink_type.display_name
                    row["order_id"] = b.current_order.id
                    row["customer_type"] = b.current_order.customer_type.display_name
                    row["time_remaining"] = round(b.remaining_time(now), 1)
                rows.append(row)
            return rows

    def barista_counts(self) -> Dict[str, int]:
        idle = sum(1 for b in self.baristas if b.is_idle())
        return {"total": len(self.baristas), "idle": idle, "busy": len(self.baristas) - idle}
