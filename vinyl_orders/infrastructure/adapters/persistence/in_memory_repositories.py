"""
In-memory repository implementations.

Used by tests and local demos. Orders are stored as deep copies, so a
caller mutating an order it received can never alter stored state.
"""
from copy import deepcopy
from typing import Dict, List, Optional
import logging

from vinyl_orders.domain.entities import Distributor, Order
from vinyl_orders.domain.events import DomainEvent
from vinyl_orders.domain.exceptions import ConcurrencyConflict, NotFound
from vinyl_orders.domain.repositories import DistributorRepository, OrderRepository


logger = logging.getLogger(__name__)


class InMemoryOrderRepository(OrderRepository):
    """In-memory implementation of OrderRepository."""

    def __init__(self):
        self._storage: Dict[str, Order] = {}
        self._events: Dict[str, List[DomainEvent]] = {}
        self.save_calls = 0

    async def get_by_id(self, order_id: str) -> Order:
        order = self._storage.get(order_id)
        if order is None:
            logger.info(f"Order not found in memory: {order_id}")
            raise NotFound(f"Order not found: {order_id}")
        return deepcopy(order)

    async def add(self, order: Order) -> Order:
        if order.id in self._storage:
            raise ValueError(f"Order already exists: {order.id}")
        stored = deepcopy(order)
        stored.version = 1
        self._events[order.id] = list(stored.get_domain_events())
        stored.clear_domain_events()
        self._storage[order.id] = stored
        logger.info(f"Order added to memory: {order.id}")
        return deepcopy(stored)

    async def save(self, order: Order, expected_version: int) -> Order:
        current = self._storage.get(order.id)
        if current is None:
            raise NotFound(f"Order not found: {order.id}")
        if current.version != expected_version:
            raise ConcurrencyConflict(order.id, expected_version, current.version)

        stored = deepcopy(order)
        stored.version = current.version + 1
        self._events.setdefault(order.id, []).extend(stored.get_domain_events())
        stored.clear_domain_events()
        self._storage[order.id] = stored
        self.save_calls += 1

        logger.info(f"Order saved to memory: {order.id} (status: {stored.status.value}, version: {stored.version})")
        return deepcopy(stored)

    async def get_events(self, order_id: str) -> List[DomainEvent]:
        if order_id not in self._storage:
            raise NotFound(f"Order not found: {order_id}")
        return list(self._events.get(order_id, []))

    async def list_all(self, limit: Optional[int] = 1000) -> List[Order]:
        orders = sorted(self._storage.values(), key=lambda o: o.created_at, reverse=True)
        return [deepcopy(o) for o in orders[:limit]]

    async def list_by_distributor(self, distributor_id: str, limit: Optional[int] = 1000) -> List[Order]:
        orders = [o for o in await self.list_all(limit=None) if o.distributor_id == distributor_id]
        return orders[:limit]


class InMemoryDistributorRepository(DistributorRepository):
    """In-memory implementation of DistributorRepository."""

    def __init__(self):
        self._storage: Dict[str, Distributor] = {}

    def add(self, distributor: Distributor) -> None:
        self._storage[distributor.id] = distributor

    async def get_by_id(self, distributor_id: str) -> Distributor:
        distributor = self._storage.get(distributor_id)
        if distributor is None:
            raise NotFound(f"Distributor not found: {distributor_id}")
        return distributor
