"""Analytics over completed orders and barista workload."""

from __future__ import annotations

import random
from typing import Dict, List, Sequence

import pandas as pd

from cafequeue.domain.models import Barista, Order

from .arrivals import random_drink

ORDER_COLUMNS = [
    "id",
    "drink",
    "prep_time",
    "customer_type",
    "created_at",
    "completed_at",
    "total_time",
    "complaint",
    "people_served_ahead",
]


def orders_frame(orders: Sequence[Order], complaint_threshold: float = 10.0) -> pd.DataFrame:
    """Tabulate completed orders, one row each."""
    rows = [
        {
            "id": o.id,
            "drink": o.drink_type.display_name,
            "prep_time": o.drink_type.preparation_time,
            "customer_type": o.customer_type.display_name,
            "created_at": o.created_at,
            "completed_at": o.completed_at,
            "total_time": o.total_completion_time,
            "complaint": o.is_complaint(complaint_threshold),
            "people_served_ahead": o.people_served_ahead,
        }
        for o in orders
    ]
    return pd.DataFrame(rows, columns=ORDER_COLUMNS)


def _completion_stats(df: pd.DataFrame) -> Dict:
    if df.empty:
        return {"avg_completion_time": 0.0, "complaints": 0, "complaint_rate": 0.0}
    complaints = int(df["complaint"].sum())
    return {
        "avg_completion_time": round(float(df["total_time"].mean()), 2),
        "complaints": complaints,
        "complaint_rate": round(complaints * 100.0 / len(df), 1),
    }


def detailed_statistics(queue, baristas: Sequence[Barista]) -> Dict:
    """
    Overall statistics for a live shop.

    Args:
        queue: OrderQueue holding the completed history
        baristas: Baristas whose workload is reported

    Returns:
        Dict with completion time, complaints, workload and queue size
    """
    df = orders_frame(queue.completed_orders())
    stats = _completion_stats(df)
    return {
        "avg_completion_time": stats["avg_completion_time"],
        "total_complaints": stats["complaints"],
        "complaint_rate": stats["complaint_rate"],
        "barista_workload": {b.name: b.total_work_minutes for b in baristas},
        "total_orders_processed": len(df),
        "current_queue_size": queue.size,
    }


def last_orders_statistics(queue, n: int = 100) -> Dict:
    """Completion statistics over the last ``n`` completed orders."""
    df = orders_frame(queue.completed_orders()).tail(n)
    stats = _completion_stats(df)
    stats["orders_analyzed"] = len(df)
    return stats


def barista_workload_breakdown(baristas: Sequence[Barista]) -> List[Dict]:
    rows = []
    for b in baristas:
        avg = b.total_work_minutes / b.orders_completed if b.orders_completed else 0.0
        rows.append({
            "name": b.name,
            "total_work_minutes": round(b.total_work_minutes, 1),
            "orders_completed": b.orders_completed,
            "avg_time_per_order": round(avg, 2),
            "status": b.status.value,
        })
    return rows


def complaints_by_customer_type(orders: Sequence[Order], complaint_threshold: float = 10.0) -> Dict[str, int]:
    df = orders_frame(orders, complaint_threshold)
    if df.empty:
        return {}
    counts = df[df["complaint"]].groupby("customer_type").size()
    return {str(k): int(v) for k, v in counts.items()}


def generate_bulk_orders(queue, count: int, rng: random.Random | None = None) -> List[Order]:
    """
    Submit ``count`` random orders and complete them immediately.

    Each order's total time is its preparation time plus a uniform 2-8
    minute wait; the queue clock does not move.
    """
    rng = rng or queue.rng
    created: List[Order] = []
    with queue.lock:
        for _ in range(count):
            order = queue.submit(random_drink(rng))
            queue.withdraw(order)
            total = order.drink_type.preparation_time + 2.0 + rng.random() * 6.0
            queue.complete_order(order, completed_at=order.created_at + total)
            created.append(order)
    return created
