"""Dispatch engine: policies, the live order queue, the shop orchestrator and the rush-hour simulator."""

from .base import BaseQueuePolicy, Selection
from .orchestrator import CoffeeShop
from .policies import FifoPolicy, SmartPolicy, policy_for
from .queue import OrderQueue
from .rush_hour import RushHourReport, RushHourSimulator, run_replications

__all__ = [
    "BaseQueuePolicy",
    "CoffeeShop",
    "FifoPolicy",
    "SmartPolicy",
    "policy_for",
    "OrderQueue",
    "RushHourReport",
    "RushHourSimulator",
    "run_replications",
    "Selection",
]
