"""Base queue-policy interface that FIFO and SMART dispatch implement."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, NamedTuple, Optional

from cafequeue.domain.catalog import QueueMode
from cafequeue.domain.models import Barista, Order


class Selection(NamedTuple):
    """An order picked for a barista and the workload state that drove the pick."""

    order: Order
    decision: str = "balanced"
    ratio: float = 1.0


class BaseQueuePolicy(ABC):
    """
    Abstract base class for dispatch policies.

    A policy decides which pending order an idle barista should take next
    and how the pending queue is presented. It never removes orders itself;
    the owning queue does that.
    """

    mode: QueueMode | None = None  # Override in subclasses

    @abstractmethod
    def select(
        self,
        pending: List[Order],
        barista: Barista,
        average_workload: float,
        now: float,
    ) -> Optional[Selection]:
        """
        Choose the next order for ``barista``.

        Args:
            pending: Pending orders in arrival order
            barista: Idle barista asking for work
            average_workload: Mean worked minutes across all baristas
            now: Current logical time (minutes)

        Returns:
            The selection, or None when ``pending`` is empty
        """
        pass

    @abstractmethod
    def ordered(self, pending: List[Order], now: float) -> List[Order]:
        """Return pending orders in the order this policy would serve them."""
        pass
