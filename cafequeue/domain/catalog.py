"""Menu and customer catalogue: closed sets of drinks, tiers, urgency levels and queue modes."""

from __future__ import annotations

from enum import Enum


def _normalize(name: str) -> str:
    return str(name).strip().upper().replace("-", "_").replace(" ", "_")


class _Lookup(Enum):
    """Enum with case-insensitive lookup by member name or display name."""

    @classmethod
    def parse(cls, value):
        if isinstance(value, cls):
            return value
        if value is None:
            raise ValueError(f"{cls.__name__} is required")
        key = _normalize(value)
        for member in cls:
            if member.name == key:
                return member
            display = getattr(member, "display_name", None)
            if display is not None and _normalize(display) == key:
                return member
        valid = ", ".join(m.name for m in cls)
        raise ValueError(f"Unknown {cls.__name__} '{value}' (expected one of: {valid})")


class DrinkType(_Lookup):
    """Drinks with fixed preparation time (minutes) and complexity score."""

    COLD_BREW = ("Cold Brew", 1.0, 10)
    ESPRESSO = ("Espresso", 2.0, 15)
    AMERICANO = ("Americano", 2.0, 12)
    CAPPUCCINO = ("Cappuccino", 4.0, 20)
    LATTE = ("Latte", 4.0, 18)
    MOCHA = ("Specialty (Mocha)", 6.0, 25)

    def __init__(self, display_name: str, preparation_time: float, complexity_score: int):
        self.display_name = display_name
        self.preparation_time = preparation_time
        self.complexity_score = complexity_score

    @classmethod
    def max_preparation_time(cls) -> float:
        return max(d.preparation_time for d in cls)


class CustomerType(_Lookup):
    """Customer tiers with abandonment timeout (minutes) and loyalty bonus (0-10)."""

    PREMIUM = ("Premium Member", 10.0, 10)
    REGULAR = ("Regular", 10.0, 0)
    NEW = ("New Customer", 8.0, 0)

    def __init__(self, display_name: str, timeout_minutes: float, loyalty_bonus: int):
        self.display_name = display_name
        self.timeout_minutes = timeout_minutes
        self.loyalty_bonus = loyalty_bonus


class Urgency(_Lookup):
    NORMAL = "normal"
    ELEVATED = "elevated"
    URGENT = "urgent"


class QueueMode(_Lookup):
    FIFO = "fifo"    # first in, first out
    SMART = "smart"  # weighted priority with workload balancing
