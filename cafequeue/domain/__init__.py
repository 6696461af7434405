"""Domain models: menu catalogue, orders and baristas."""

from .catalog import CustomerType, DrinkType, QueueMode, Urgency
from .models import Barista, BaristaStatus, Order

__all__ = [
    "CustomerType",
    "DrinkType",
    "QueueMode",
    "Urgency",
    "Barista",
    "BaristaStatus",
    "Order",
]
