"""CSV export of completed orders and rush-hour drill-downs."""

from __future__ import annotations

from pathlib import Path

import pandas as pd

from cafequeue.services.analytics import orders_frame


def export_completed_orders_csv(queue, csv_path: str | Path) -> int:
    """
    Export the completed-order history to CSV.

    Args:
        queue: OrderQueue whose history is exported
        csv_path: Output path

    Returns:
        Number of orders exported
    """
    df = orders_frame(queue.completed_orders())
    df.to_csv(csv_path, index=False)
    print(f"[INFO] Exported {len(df)} completed orders to {csv_path}")
    return len(df)


def export_rush_hour_csv(report, csv_path: str | Path, include_fifo: bool = True) -> int:
    """
    Export per-order rush-hour records (SMART, plus FIFO unless disabled).

    Returns:
        Number of rows written
    """
    frames = [report.smart.orders]
    if include_fifo:
        frames.append(report.fifo.orders)
    df = pd.concat(frames, ignore_index=True)
    df.to_csv(csv_path, index=False)
    print(f"[INFO] Exported {len(df)} rush-hour order records to {csv_path}")
    return len(df)


def read_rush_hour_csv(csv_path: str | Path) -> pd.DataFrame:
    df = pd.read_csv(csv_path)
    df.columns = df.columns.str.lower().str.strip()
    return df
