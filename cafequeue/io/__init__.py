"""I/O utilities for configuration and CSV export."""

from .config import QueueConfig, load_config
from .export_csv import export_completed_orders_csv, export_rush_hour_csv, read_rush_hour_csv

__all__ = [
    "QueueConfig",
    "load_config",
    "export_completed_orders_csv",
    "export_rush_hour_csv",
    "read_rush_hour_csv",
]
