"""Repository interfaces for Order aggregate."""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..entities.order import Order
from ..events.base import DomainEvent


class OrderRepository(ABC):
    """Abstract repository for Order aggregate persistence."""

    @abstractmethod
    async def get_by_id(self, order_id: str) -> Order:
        """Retrieve order by id.

        Raises:
            NotFound: If no order has this id
        """
        pass

    @abstractmethod
    async def add(self, order: Order) -> Order:
        """Insert a newly created order (used by checkout, not by the engine).

        Returns:
            The stored order (version 1)
        """
        pass

    @abstractmethod
    async def save(self, order: Order, expected_version: int) -> Order:
        """Persist an existing order and its pending domain events in one write.

        The write only happens when the stored version still equals
        expected_version; the stored version is then incremented.

        Raises:
            NotFound: If the order does not exist
            ConcurrencyConflict: If the stored version has moved on
        """
        pass

    @abstractmethod
    async def get_events(self, order_id: str) -> List[DomainEvent]:
        """Return the order's event log, oldest first."""
        pass

    @abstractmethod
    async def list_all(self, limit: Optional[int] = 1000) -> List[Order]:
        """List orders across all distributors, newest first (limit=None returns all)."""
        pass

    @abstractmethod
    async def list_by_distributor(self, distributor_id: str, limit: Optional[int] = 1000) -> List[Order]:
        """List one distributor's orders, newest first (limit=None returns all)."""
        pass
