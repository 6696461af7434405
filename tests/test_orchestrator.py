"""Tests for CoffeeShop - assignment and completion sweeps over the live queue."""

import pytest

from cafequeue.config import QueueConfig
from cafequeue.domain.catalog import CustomerType, DrinkType
from cafequeue.domain.models import BaristaStatus
from cafequeue.engine.orchestrator import CoffeeShop


def test_shop_starts_with_three_idle_baristas(shop):
    assert [b.name for b in shop.baristas] == ["Barista 1", "Barista 2", "Barista 3"]
    assert shop.barista_counts() == {"total": 3, "idle": 3, "busy": 0}
    assert shop.average_workload() == 0.0


def test_assign_orders_fills_idle_baristas(shop):
    for drink in (DrinkType.LATTE, DrinkType.ESPRESSO, DrinkType.MOCHA, DrinkType.COLD_BREW):
        shop.queue.submit(drink, CustomerType.REGULAR)

    assigned = shop.assign_orders()

    assert len(assigned) == 3
    assert shop.barista_counts()["busy"] == 3
    assert shop.queue.size == 1
    # each barista holds a distinct order
    assert len({order.id for _, order in assigned}) == 3


def test_assign_orders_with_empty_queue(shop):
    assert shop.assign_orders() == []
    assert all(b.is_idle() for b in shop.baristas)


def test_tick_completes_finished_drinks(shop):
    order = shop.queue.submit(DrinkType.COLD_BREW, CustomerType.REGULAR)
    shop.assign_orders()

    finished = shop.tick(1)

    assert finished == [order]
    assert order.completed_at == 1.0
    barista = shop.baristas[0]
    assert barista.is_idle()
    assert barista.total_work_minutes == 1.0
    assert barista.orders_completed == 1
    assert shop.queue.completed_orders() == [order]


def test_tick_keeps_unfinished_drinks(shop):
    order = shop.queue.submit(DrinkType.MOCHA, CustomerType.REGULAR)
    shop.assign_orders()

    for _ in range(5):
        assert shop.tick(1) == []
    assert shop.baristas[0].current_order is order
    assert shop.tick(1) == [order]


def test_freed_barista_picks_up_work_in_same_tick():
    cfg = QueueConfig(baristas=1)
    shop = CoffeeShop(cfg, seed=1)
    cold = shop.queue.submit(DrinkType.COLD_BREW, CustomerType.REGULAR)
    latte = shop.queue.submit(DrinkType.LATTE, CustomerType.REGULAR)

    shop.assign_orders()
    assert shop.baristas[0].current_order is cold

    shop.tick(1)

    assert cold.completed_at == 1.0
    assert shop.baristas[0].status is BaristaStatus.BUSY
    assert shop.baristas[0].current_order is latte
    assert shop.queue.size == 0


def test_scheduled_tick_respects_pause(shop):
    shop.set_auto_mode(False)
    assert shop.scheduled_tick() == []
    assert shop.queue.clock == 0.0

    shop.manual_tick()
    assert shop.queue.clock == 1.0

    shop.set_auto_mode(True)
    shop.scheduled_tick()
    assert shop.queue.clock == 2.0


def test_barista_status_snapshot(shop):
    order = shop.queue.submit(DrinkType.CAPPUCCINO, CustomerType.PREMIUM)
    shop.assign_orders()
    shop.tick(1)

    status = shop.barista_status()

    busy = [row for row in status if row["status"] == "busy"]
    assert len(busy) == 1
    assert busy[0]["order_id"] == order.id
    assert busy[0]["current_order"] == "Cappuccino"
    assert busy[0]["customer_type"] == "Premium Member"
    assert busy[0]["time_remaining"] == pytest.approx(3.0)
    idle = [row for row in status if row["status"] == "idle"]
    assert all(row["current_order"] is None for row in idle)


def test_complete_all_orders(shop):
    for drink in (DrinkType.MOCHA, DrinkType.LATTE):
        shop.queue.submit(drink, CustomerType.REGULAR)
    shop.assign_orders()

    finished = shop.complete_all_orders()

    assert len(finished) == 2
    assert all(b.is_idle() for b in shop.baristas)
    assert len(shop.queue.completed_orders()) == 2


def test_workload_balancing_over_a_busy_hour():
    """Every barista gets work when the queue stays full."""
    shop = CoffeeShop(seed=3)
    for _ in range(40):
        shop.queue.add_random_order()
    shop.assign_orders()
    for _ in range(60):
        shop.tick(1)

    worked = [b.total_work_minutes for b in shop.baristas]
    assert all(w > 0 for w in worked)
    assert sum(b.orders_completed for b in shop.baristas) == len(shop.queue.completed_orders())


def test_reset_replaces_baristas(shop):
    shop.queue.submit(DrinkType.LATTE, CustomerType.REGULAR)
    shop.assign_orders()
    shop.tick(4)

    shop.reset()

    assert shop.queue.size == 0
    assert shop.queue.clock == 0.0
    assert all(b.is_idle() and b.total_work_minutes == 0.0 for b in shop.baristas)
