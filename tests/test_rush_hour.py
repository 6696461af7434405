"""Tests for the rush-hour FIFO vs SMART simulator."""

import pytest

from cafequeue.config import QueueConfig
from cafequeue.domain.catalog import QueueMode
from cafequeue.engine.rush_hour import RushHourSimulator, improvement_pct, run_replications


def test_arrivals_are_strictly_increasing_and_seeded():
    table = RushHourSimulator(seed=42).generate_arrivals()
    again = RushHourSimulator(seed=42).generate_arrivals()

    assert len(table) == 100
    assert all(b > a for a, b in zip(table.arrival_minutes, table.arrival_minutes[1:]))
    assert table.arrival_minutes == again.arrival_minutes
    assert table.drinks == again.drinks
    assert table.customers == again.customers


def test_report_accounts_for_every_order():
    report = RushHourSimulator(seed=42).run()

    for stats in (report.smart, report.fifo):
        assert stats.served + stats.abandoned == 100
        assert stats.complaints >= stats.abandoned
        assert 0.0 <= stats.complaint_rate <= 100.0
        assert 0.0 <= stats.workload_balance <= 100.0
        assert 0.0 <= stats.fairness_violation_rate <= 100.0
        assert len(stats.orders) == 100
        assert sum(row["orders_completed"] for row in stats.barista_workload) == stats.served
        shares = sum(row["workload_share"] for row in stats.barista_workload)
        assert shares == pytest.approx(100.0, abs=0.5)
        assert sum(stats.complaints_by_customer_type.values()) == stats.complaints


def test_both_policies_replay_the_same_arrivals():
    report = RushHourSimulator(seed=5).run()
    smart = report.smart.orders
    fifo = report.fifo.orders
    assert list(smart["arrival_minute"]) == list(fifo["arrival_minute"])
    assert list(smart["drink"]) == list(fifo["drink"])
    assert list(smart["customer_type"]) == list(fifo["customer_type"])


def test_fifo_never_skips_anyone():
    report = RushHourSimulator(seed=9).run()
    assert (report.fifo.orders["skipped_by"] == 0).all()
    assert report.fifo.fairness_violation_rate == 0.0


def test_served_waits_respect_timeouts():
    """Nobody is served after their timeout; abandoned waits reach it."""
    sim = RushHourSimulator(seed=13)
    arrivals = sim.generate_arrivals()
    for mode in (QueueMode.FIFO, QueueMode.SMART):
        result = sim.replay(arrivals, mode)
        for i, customer in enumerate(arrivals.customers):
            if result.served[i]:
                assert result.wait[i] < customer.timeout_minutes
                assert result.total[i] == pytest.approx(result.wait[i] + arrivals.drinks[i].preparation_time)


def test_short_horizon_abandons_leftovers():
    cfg = QueueConfig()
    cfg.rush_hour.horizon_minutes = 5.0
    sim = RushHourSimulator(cfg, seed=4)
    arrivals = sim.generate_arrivals()
    result = sim.replay(arrivals, QueueMode.SMART)

    for i, arrival in enumerate(arrivals.arrival_minutes):
        if arrival <= 5.0 and not result.served[i]:
            waited = 5.0 - arrival
            assert result.wait[i] == pytest.approx(waited)


def test_same_seed_same_report():
    a = RushHourSimulator(seed=77).run().to_dict()
    b = RushHourSimulator(seed=77).run().to_dict()
    assert a["smart"] == b["smart"]
    assert a["fifo"] == b["fifo"]
    assert len(a["order_details"]) == 100


def test_smart_wait_not_worse_than_fifo():
    report = RushHourSimulator(seed=42).run()
    assert report.smart.average_wait <= report.fifo.average_wait
    assert report.wait_time_improvement >= 0.0


def test_improvement_pct():
    assert improvement_pct(10.0, 5.0) == pytest.approx(50.0)
    assert improvement_pct(0.0, 5.0) == 0.0
    assert improvement_pct(4, 6) == pytest.approx(-50.0)


@pytest.mark.slow
def test_replications_one_row_per_seed():
    df = run_replications(None, replications=3, base_seed=42)
    assert list(df["seed"]) == [42, 43, 44]
    for row in df.itertuples():
        assert row.wait_time_improvement == pytest.approx(
            improvement_pct(row.fifo_avg_wait, row.smart_avg_wait)
        )
        assert 0 <= row.smart_complaints <= 100
        assert 0 <= row.fifo_complaints <= 100


def test_metadata_reports_single_horizon():
    report = RushHourSimulator(seed=1).run()
    assert report.metadata["horizon_minutes"] == 180.0
    assert report.metadata["seed"] == 1
