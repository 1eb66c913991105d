"""SQLAlchemy implementations of the order engine repositories."""

from typing import List, Optional
import logging

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from vinyl_orders.domain.entities import Distributor, Order
from vinyl_orders.domain.events import DomainEvent
from vinyl_orders.domain.exceptions import ConcurrencyConflict, NotFound
from vinyl_orders.domain.repositories import DistributorRepository, OrderRepository

from .mappers import DistributorMapper, OrderEventMapper, OrderMapper
from .models import DistributorModel, OrderEventModel, OrderModel


logger = logging.getLogger(__name__)


class SqlAlchemyOrderRepository(OrderRepository):
    """
    Concrete implementation of OrderRepository using SQLAlchemy.

    Every save is a single transaction: a conditional UPDATE guarded by
    the version column plus the append of the order's pending events.
    """

    def __init__(self, session_factory: async_sessionmaker) -> None:
        """Initialize repository with a session factory.

        Args:
            session_factory: Factory producing AsyncSession instances
        """
        self._session_factory = session_factory

    async def get_by_id(self, order_id: str) -> Order:
        async with self._session_factory() as session:
            model = await session.get(OrderModel, order_id)
            if model is None:
                raise NotFound(f"Order not found: {order_id}")
            return OrderMapper.to_domain(model)

    async def add(self, order: Order) -> Order:
        async with self._session_factory() as session:
            async with session.begin():
                session.add(OrderMapper.to_persistence(order, version=1))
                await session.flush()
                await self._append_events(session, order.id, order.get_domain_events())

        logger.info(f"Order inserted: {order.id}")
        return await self.get_by_id(order.id)

    async def save(self, order: Order, expected_version: int) -> Order:
        async with self._session_factory() as session:
            async with session.begin():
                result = await session.execute(
                    update(OrderModel)
                    .where(OrderModel.id == order.id, OrderModel.version == expected_version)
                    .values(version=expected_version + 1, **OrderMapper.mutable_values(order))
                    .execution_options(synchronize_session=False)
                )

                if result.rowcount == 0:
                    actual = await session.scalar(
                        select(OrderModel.version).where(OrderModel.id == order.id)
                    )
                    if actual is None:
                        raise NotFound(f"Order not found: {order.id}")
                    logger.warning(
                        f"Version conflict on order {order.id}: expected {expected_version}, found {actual}"
                    )
                    raise ConcurrencyConflict(order.id, expected_version, actual)

                await self._append_events(session, order.id, order.get_domain_events())

        logger.info(f"Order saved: {order.id} (status: {order.status.value}, version: {expected_version + 1})")
        return await self.get_by_id(order.id)

    async def get_events(self, order_id: str) -> List[DomainEvent]:
        async with self._session_factory() as session:
            if await session.get(OrderModel, order_id) is None:
                raise NotFound(f"Order not found: {order_id}")

            result = await session.execute(
                select(OrderEventModel)
                .where(OrderEventModel.order_id == order_id)
                .order_by(OrderEventModel.sequence_number)
            )
            return [OrderEventMapper.to_domain(model) for model in result.scalars().all()]

    async def list_all(self, limit: Optional[int] = 1000) -> List[Order]:
        query = select(OrderModel).order_by(OrderModel.created_at.desc())
        if limit is not None:
            query = query.limit(limit)

        async with self._session_factory() as session:
            result = await session.execute(query)
            return [OrderMapper.to_domain(model) for model in result.scalars().all()]

    async def list_by_distributor(self, distributor_id: str, limit: Optional[int] = 1000) -> List[Order]:
        query = (
            select(OrderModel)
            .where(OrderModel.distributor_id == distributor_id)
            .order_by(OrderModel.created_at.desc())
        )
        if limit is not None:
            query = query.limit(limit)

        async with self._session_factory() as session:
            result = await session.execute(query)
            return [OrderMapper.to_domain(model) for model in result.scalars().all()]

    async def _append_events(self, session: AsyncSession, order_id: str, events: List[DomainEvent]) -> None:
        """Append events after the order's current highest sequence number."""
        if not events:
            return

        current = await session.scalar(
            select(func.max(OrderEventModel.sequence_number)).where(OrderEventModel.order_id == order_id)
        )
        next_sequence = (current or 0) + 1

        for offset, event in enumerate(events):
            session.add(OrderEventMapper.to_persistence(event, order_id, next_sequence + offset))

        await session.flush()


class SqlAlchemyDistributorRepository(DistributorRepository):
    """Concrete implementation of DistributorRepository using SQLAlchemy."""

    def __init__(self, session_factory: async_sessionmaker) -> None:
        self._session_factory = session_factory

    async def get_by_id(self, distributor_id: str) -> Distributor:
        async with self._session_factory() as session:
            model = await session.get(DistributorModel, distributor_id)
            if model is None:
                raise NotFound(f"Distributor not found: {distributor_id}")
            return DistributorMapper.to_domain(model)

    async def add(self, distributor: Distributor) -> Distributor:
        """Insert a distributor (seeding and tests; the engine never writes them)."""
        async with self._session_factory() as session:
            async with session.begin():
                session.add(DistributorMapper.to_persistence(distributor))
        return distributor
