"""Tests for catalogue parsing, orders and baristas."""

import pytest

from cafequeue.domain.catalog import CustomerType, DrinkType, QueueMode
from cafequeue.domain.models import Barista, BaristaStatus, Order


def test_catalog_parse_names():
    assert DrinkType.parse("cold brew") is DrinkType.COLD_BREW
    assert DrinkType.parse("COLD_BREW") is DrinkType.COLD_BREW
    assert DrinkType.parse("Specialty (Mocha)") is DrinkType.MOCHA
    assert CustomerType.parse("premium") is CustomerType.PREMIUM
    assert CustomerType.parse("New Customer") is CustomerType.NEW
    assert QueueMode.parse("fifo") is QueueMode.FIFO


def test_catalog_parse_unknown():
    with pytest.raises(ValueError, match="DrinkType"):
        DrinkType.parse("frappuccino")
    with pytest.raises(ValueError):
        QueueMode.parse("random")


def test_max_preparation_time():
    assert DrinkType.max_preparation_time() == 6.0


def test_priority_projection_is_pure():
    """priority_at does not touch the cached fields; recalculation is idempotent."""
    order = Order(id=101, drink_type=DrinkType.LATTE, customer_type=CustomerType.REGULAR, created_at=0.0)
    b = order.priority_at(9.0)
    assert order.priority_score == 0.0
    assert b.score > 0.0

    first = order.recalculate_priority(9.0)
    second = order.recalculate_priority(9.0)
    assert first == second
    assert order.priority_score == first.score
    assert order.urgency is first.urgency


def test_order_completion_is_final():
    order = Order(id=1, drink_type=DrinkType.ESPRESSO, customer_type=CustomerType.NEW, created_at=2.0)
    assert not order.is_completed
    assert order.total_completion_time == 0.0
    order.mark_completed(14.5)
    assert order.total_completion_time == 12.5
    assert order.is_complaint()
    with pytest.raises(RuntimeError):
        order.mark_completed(20.0)
    assert order.completed_at == 14.5


def test_timeout_helpers():
    order = Order(id=1, drink_type=DrinkType.ESPRESSO, customer_type=CustomerType.NEW, created_at=0.0)
    assert not order.is_approaching_timeout(5.9)
    assert order.is_approaching_timeout(6.0)
    assert not order.has_exceeded_timeout(7.9)
    assert order.has_exceeded_timeout(8.0)


def test_barista_lifecycle():
    barista = Barista(id=1, name="Barista 1")
    order = Order(id=5, drink_type=DrinkType.CAPPUCCINO, customer_type=CustomerType.REGULAR)

    assert barista.is_idle()
    barista.assign(order, now=3.0)
    assert barista.status is BaristaStatus.BUSY
    assert barista.current_order is order
    assert barista.remaining_time(4.0) == pytest.approx(3.0)
    assert barista.remaining_time(9.0) == 0.0

    done = barista.complete()
    assert done is order
    assert barista.is_idle()
    assert barista.current_order is None
    assert barista.total_work_minutes == 4.0
    assert barista.orders_completed == 1


def test_barista_misuse_raises():
    barista = Barista(id=1, name="Barista 1")
    with pytest.raises(RuntimeError):
        barista.complete()

    barista.assign(Order(id=1, drink_type=DrinkType.LATTE, customer_type=CustomerType.NEW), 0.0)
    try:
        barista.assign(Order(id=2, drink_type=DrinkType.MOCHA, customer_type=CustomerType.NEW), 0.0)
        assert False, "Expected RuntimeError for a busy barista"
    except RuntimeError as e:
        assert "busy" in str(e)
    assert barista.current_order.id == 1


def test_workload_ratio():
    barista = Barista(id=1, name="Barista 1", total_work_minutes=13.0)
    assert barista.workload_ratio(0.0) == 1.0
    assert barista.workload_ratio(10.0) == pytest.approx(1.3)
    assert barista.is_overloaded(10.0)
    assert not barista.is_underutilized(10.0)
    assert Barista(id=2, name="Barista 2", total_work_minutes=5.0).is_underutilized(10.0)
