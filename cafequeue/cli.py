"""Command-line interface for the coffee-shop order queue."""

from __future__ import annotations

import argparse

import pandas as pd

from cafequeue.config import load_config
from cafequeue.engine.orchestrator import CoffeeShop
from cafequeue.engine.rush_hour import RushHourSimulator, run_replications
from cafequeue.io.export_csv import export_completed_orders_csv, export_rush_hour_csv, read_rush_hour_csv
from cafequeue.services.analytics import barista_workload_breakdown, detailed_statistics


def _print_policy(label: str, stats) -> None:
    print(f"{label}:")
    print(f"  served={stats.served} abandoned={stats.abandoned}")
    print(f"  avg wait={stats.average_wait:.2f} min, avg total={stats.average_total_time:.2f} min")
    print(f"  complaints={stats.complaints} ({stats.complaint_rate:.1f}%)")
    print(f"  workload balance={stats.workload_balance:.1f}, fairness violations={stats.fairness_violation_rate:.1f}%")


def _cmd_simulate(args: argparse.Namespace) -> None:
    cfg = load_config(args.config)
    if args.orders is not None:
        cfg.rush_hour.orders = args.orders
    if args.horizon is not None:
        cfg.rush_hour.horizon_minutes = args.horizon

    if args.replications > 1:
        df = run_replications(cfg, args.replications, base_seed=args.seed)
        print(df.to_string(index=False))
        print("")
        print(f"Mean SMART wait: {df['smart_avg_wait'].mean():.2f} min")
        print(f"Mean FIFO wait:  {df['fifo_avg_wait'].mean():.2f} min")
        return

    report = RushHourSimulator(cfg, seed=args.seed).run()
    _print_policy("SMART", report.smart)
    _print_policy("FIFO", report.fifo)
    print(f"Wait time improvement: {report.wait_time_improvement:.1f}%")
    print(f"Complaint reduction:   {report.complaint_reduction:.1f}%")
    if args.out:
        export_rush_hour_csv(report, args.out)


def _cmd_demo(args: argparse.Namespace) -> None:
    cfg = load_config(args.config)
    shop = CoffeeShop(cfg, seed=args.seed)
    if args.mode:
        shop.queue.set_mode(args.mode)
    shop.queue.set_auto_arrival(args.auto_arrival)
    for _ in range(args.orders):
        shop.queue.add_random_order()
    shop.assign_orders()
    for _ in range(args.minutes):
        shop.tick(1)

    print("")
    for key, value in shop.queue.metrics().items():
        print(f"{key}: {value}")
    print(pd.DataFrame(barista_workload_breakdown(shop.baristas)).to_string(index=False))
    stats = detailed_statistics(shop.queue, shop.baristas)
    print(f"Complaints: {stats['total_complaints']} ({stats['complaint_rate']}%)")
    if args.out:
        export_completed_orders_csv(shop.queue, args.out)


def _cmd_summarize(args: argparse.Namespace) -> None:
    df = read_rush_hour_csv(args.orders_csv)
    if df.empty:
        print("No orders.")
        return
    served = df[df["served"]]
    by_policy = df.groupby("policy").agg(
        orders=("id", "count"),
        served=("served", "sum"),
        complaints=("complaint", "sum"),
    )
    waits = served.groupby("policy")["wait_time"].mean().rename("avg_wait")
    print("Orders per policy:")
    print(by_policy.join(waits).to_string())
    print("")
    print("Complaints per customer type:")
    print(df[df["complaint"]].groupby(["policy", "customer_type"]).size().unstack(fill_value=0).to_string())


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="cafequeue",
        description="Coffee-shop order queue: SMART priority dispatch vs FIFO",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    s = sub.add_parser("simulate", help="Run the rush-hour FIFO vs SMART comparison")
    s.add_argument("--seed", type=int, default=42)
    s.add_argument("--orders", type=int, help="Number of arrivals (default from config)")
    s.add_argument("--horizon", type=float, help="Horizon in minutes (default from config)")
    s.add_argument("--replications", type=int, default=1, help="Run consecutive seeds")
    s.add_argument("--config", help="Path to config YAML/JSON")
    s.add_argument("--out", help="Optional: export per-order records to CSV")
    s.set_defaults(func=_cmd_simulate)

    d = sub.add_parser("demo", help="Drive the live shop for a few minutes")
    d.add_argument("--seed", type=int, default=42)
    d.add_argument("--orders", type=int, default=10, help="Orders queued before the first tick")
    d.add_argument("--minutes", type=int, default=15)
    d.add_argument("--mode", choices=["fifo", "smart", "FIFO", "SMART"])
    d.add_argument("--auto-arrival", action="store_true")
    d.add_argument("--config", help="Path to config YAML/JSON")
    d.add_argument("--out", help="Optional: export completed orders to CSV")
    d.set_defaults(func=_cmd_demo)

    m = sub.add_parser("summarize", help="Summarize a rush-hour CSV")
    m.add_argument("--orders-csv", required=True)
    m.set_defaults(func=_cmd_summarize)

    args = parser.parse_args(argv)
    args.func(args)


if __name__ == "__main__":
    main()
