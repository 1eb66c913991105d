"""Pytest configuration and fixtures for integration tests."""

import asyncio

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from api.dependencies import get_lifecycle_service
from api.main import app
from vinyl_orders.application.services import OrderLifecycleService
from vinyl_orders.infrastructure.database import (
    Base,
    SqlAlchemyDistributorRepository,
    SqlAlchemyOrderRepository,
)


# Use in-memory SQLite for testing
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture(scope="function")
async def test_engine():
    """Create test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def test_session_factory(test_engine):
    """Create test session factory."""
    yield async_sessionmaker(test_engine, expire_on_commit=False)


@pytest_asyncio.fixture
async def sql_order_repository(test_session_factory):
    return SqlAlchemyOrderRepository(test_session_factory)


@pytest_asyncio.fixture
async def sql_distributor_repository(test_session_factory, distributor):
    repo = SqlAlchemyDistributorRepository(test_session_factory)
    await repo.add(distributor)
    return repo


@pytest.fixture
def test_client(order_repository, distributor_repository, event_bus, notification_service, clock, paid_order):
    """FastAPI test client backed by the in-memory service."""
    asyncio.run(order_repository.add(paid_order))

    service = OrderLifecycleService(
        order_repository=order_repository,
        distributor_repository=distributor_repository,
        event_bus=event_bus,
        clock=clock,
    )
    app.dependency_overrides[get_lifecycle_service] = lambda: service

    client = TestClient(app)
    yield client

    app.dependency_overrides.clear()
