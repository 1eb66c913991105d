"""Shared fixtures: deterministic clock, actors, orders and in-memory adapters."""

from datetime import datetime, timedelta, timezone

import pytest

from vinyl_orders.application.services import OrderLifecycleService, OrderNotificationHandler
from vinyl_orders.domain.clock import DeterministicClock
from vinyl_orders.domain.entities import Actor, Distributor, Order, OrderItem, WorkerPermissions
from vinyl_orders.domain.enums import OrderStatus, PaymentStatus, UserRole
from vinyl_orders.domain.value_objects import OrderNumber
from vinyl_orders.infrastructure.adapters.notifications import LoggingNotificationService
from vinyl_orders.infrastructure.adapters.persistence import (
    InMemoryDistributorRepository,
    InMemoryOrderRepository,
)
from vinyl_orders.infrastructure.event_bus import InMemoryEventBus


CREATED_AT = datetime(2024, 3, 1, 10, 0, tzinfo=timezone.utc)
NOW = datetime(2024, 3, 2, 12, 0, tzinfo=timezone.utc)

DISTRIBUTOR_ID = "dist-1"
OTHER_DISTRIBUTOR_ID = "dist-2"


@pytest.fixture
def clock():
    return DeterministicClock(NOW)


@pytest.fixture
def distributor():
    """Distributor without a connected Stripe account."""
    return Distributor(
        id=DISTRIBUTOR_ID,
        name="Groove Records",
        contact_email="orders@groove.example",
        order_id_prefix="GRV",
        order_counter=41,
    )


@pytest.fixture
def connected_distributor(distributor):
    return Distributor(
        id=distributor.id,
        name=distributor.name,
        contact_email=distributor.contact_email,
        stripe_connect_account_id="acct_123",
    )


@pytest.fixture
def make_order():
    """Factory for reconciled orders (two items totalling 50000)."""

    def _make_order(
        status=OrderStatus.PENDING,
        order_id="order-1",
        distributor_id=DISTRIBUTOR_ID,
        **overrides,
    ) -> Order:
        items = overrides.pop("items", [
            OrderItem(record_id="rec-1", title="Blue Train", artist="John Coltrane",
                      quantity=2, price_at_time_of_order=15000),
            OrderItem(record_id="rec-2", title="Kind of Blue", artist="Miles Davis",
                      quantity=1, price_at_time_of_order=20000),
        ])
        fields = dict(
            id=order_id,
            order_number=OrderNumber("GRV-00042"),
            distributor_id=distributor_id,
            viewer_id="viewer-1",
            customer_name="Ada Lovelace",
            viewer_email="ada@example.com",
            shipping_address="1 Analytical Way, London",
            items=items,
            total_amount=sum(item.line_total for item in items),
            status=status,
            created_at=CREATED_AT,
            updated_at=CREATED_AT,
        )
        fields.update(overrides)
        return Order(**fields)

    return _make_order


@pytest.fixture
def paid_order(make_order):
    return make_order(
        status=OrderStatus.PAID,
        payment_status=PaymentStatus.PAID,
        platform_fee_amount=2000,
        paid_at=CREATED_AT + timedelta(minutes=5),
        stripe_checkout_session_id="cs_test_a1b2c3d4e5f6g7h8i9j0k1",
        stripe_payment_intent_id="pi_3Nabc",
    )


# =============================================================================
# ACTORS
# =============================================================================

@pytest.fixture
def master():
    return Actor(user_id="master-1", role=UserRole.MASTER, distributor_id=DISTRIBUTOR_ID)


@pytest.fixture
def worker():
    return Actor(
        user_id="worker-1",
        role=UserRole.WORKER,
        distributor_id=DISTRIBUTOR_ID,
        permissions=WorkerPermissions(can_manage_orders=True),
    )


@pytest.fixture
def restricted_worker():
    return Actor(user_id="worker-2", role=UserRole.WORKER, distributor_id=DISTRIBUTOR_ID)


@pytest.fixture
def viewer():
    return Actor(user_id="viewer-1", role=UserRole.VIEWER)


@pytest.fixture
def superadmin():
    return Actor(user_id="admin-1", role=UserRole.SUPERADMIN)


@pytest.fixture
def foreign_master():
    return Actor(user_id="master-2", role=UserRole.MASTER, distributor_id=OTHER_DISTRIBUTOR_ID)


# =============================================================================
# ADAPTERS / SERVICE
# =============================================================================

@pytest.fixture
def order_repository():
    return InMemoryOrderRepository()


@pytest.fixture
def distributor_repository(distributor):
    repo = InMemoryDistributorRepository()
    repo.add(distributor)
    return repo


@pytest.fixture
def event_bus():
    return InMemoryEventBus()


@pytest.fixture
def notification_service(event_bus):
    service = LoggingNotificationService()
    event_bus.subscribe(OrderNotificationHandler(service).handle)
    return service


@pytest.fixture
def service(order_repository, distributor_repository, event_bus, notification_service, clock):
    return OrderLifecycleService(
        order_repository=order_repository,
        distributor_repository=distributor_repository,
        event_bus=event_bus,
        clock=clock,
    )
