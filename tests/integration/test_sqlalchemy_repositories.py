"""Integration tests for the SQLAlchemy repositories (in-memory SQLite)."""

import pytest

from vinyl_orders.application.services import OrderLifecycleService
from vinyl_orders.domain.enums import OrderStatus
from vinyl_orders.domain.events import OrderStatusChangedEvent, SettlementRecordedEvent
from vinyl_orders.domain.exceptions import ConcurrencyConflict, NotFound
from vinyl_orders.domain.value_objects import OrderNumber

from tests.conftest import CREATED_AT, NOW


@pytest.mark.asyncio
async def test_add_and_load_round_trip(sql_order_repository, paid_order):
    stored = await sql_order_repository.add(paid_order)

    assert stored.version == 1
    assert stored.order_number == OrderNumber("GRV-00042")
    assert stored.status == OrderStatus.PAID
    assert stored.platform_fee_amount == 2000
    assert stored.created_at == CREATED_AT
    assert stored.created_at.tzinfo is not None
    assert [item.record_id for item in stored.items] == ["rec-1", "rec-2"]
    assert stored.items_total() == stored.total_amount


@pytest.mark.asyncio
async def test_missing_order(sql_order_repository):
    with pytest.raises(NotFound):
        await sql_order_repository.get_by_id("nope")
    with pytest.raises(NotFound):
        await sql_order_repository.get_events("nope")


@pytest.mark.asyncio
async def test_save_updates_row_and_appends_events(sql_order_repository, make_order):
    order = await sql_order_repository.add(make_order())

    order.status = OrderStatus.PAID
    order.platform_fee_amount = 2000
    order.paid_at = NOW
    order.updated_at = NOW
    order.record_event(OrderStatusChangedEvent(order_id=order.id, previous_status="pending",
                                               new_status="paid", occurred_at=NOW))
    order.record_event(SettlementRecordedEvent(order_id=order.id, total_amount=50000,
                                               platform_fee_amount=2000, distributor_payout=48000,
                                               occurred_at=NOW))
    saved = await sql_order_repository.save(order, expected_version=1)

    assert saved.version == 2
    assert saved.status == OrderStatus.PAID
    assert saved.paid_at == NOW

    events = await sql_order_repository.get_events(order.id)
    assert [type(e) for e in events] == [OrderStatusChangedEvent, SettlementRecordedEvent]
    assert events[1].distributor_payout == 48000
    assert events[0].occurred_at == NOW


@pytest.mark.asyncio
async def test_stale_version_is_rejected(sql_order_repository, make_order):
    order = await sql_order_repository.add(make_order())
    first = await sql_order_repository.get_by_id(order.id)
    second = await sql_order_repository.get_by_id(order.id)

    first.status = OrderStatus.PAID
    await sql_order_repository.save(first, expected_version=first.version)

    second.status = OrderStatus.CANCELLED
    second.record_event(OrderStatusChangedEvent(order_id=order.id, previous_status="pending",
                                                new_status="cancelled"))
    with pytest.raises(ConcurrencyConflict) as exc_info:
        await sql_order_repository.save(second, expected_version=second.version)

    assert exc_info.value.actual_version == 2
    current = await sql_order_repository.get_by_id(order.id)
    assert current.status == OrderStatus.PAID
    assert await sql_order_repository.get_events(order.id) == []


@pytest.mark.asyncio
async def test_save_unknown_order(sql_order_repository, make_order):
    with pytest.raises(NotFound):
        await sql_order_repository.save(make_order(order_id="ghost"), expected_version=1)


@pytest.mark.asyncio
async def test_listing(sql_order_repository, make_order):
    await sql_order_repository.add(make_order(order_id="a", order_number=OrderNumber("GRV-00001")))
    await sql_order_repository.add(make_order(order_id="b", order_number=None, distributor_id="dist-2"))

    assert {o.id for o in await sql_order_repository.list_all()} == {"a", "b"}
    assert [o.id for o in await sql_order_repository.list_by_distributor("dist-2")] == ["b"]


@pytest.mark.asyncio
async def test_distributor_repository(sql_distributor_repository, distributor):
    loaded = await sql_distributor_repository.get_by_id(distributor.id)

    assert loaded == distributor
    with pytest.raises(NotFound):
        await sql_distributor_repository.get_by_id("missing")


@pytest.mark.asyncio
async def test_service_over_sqlalchemy(sql_order_repository, sql_distributor_repository, make_order, master, clock):
    service = OrderLifecycleService(sql_order_repository, sql_distributor_repository, clock=clock)
    order = await sql_order_repository.add(make_order())

    await service.transition(order.id, "paid", master)
    result = await service.transition(order.id, "processing", master)

    assert result.status == OrderStatus.PROCESSING
    assert result.platform_fee_amount == 2000
    assert result.version == 3
    log = await service.get_event_log(order.id, master)
    assert [e.event_type for e in log] == [
        "OrderStatusChangedEvent",
        "SettlementRecordedEvent",
        "OrderStatusChangedEvent",
    ]


@pytest.mark.asyncio
async def test_listing_without_limit(sql_order_repository, make_order):
    for n in range(3):
        await sql_order_repository.add(make_order(order_id=f"o{n}", order_number=None))

    assert len(await sql_order_repository.list_all(limit=1)) == 1
    assert len(await sql_order_repository.list_all(limit=None)) == 3
    assert len(await sql_order_repository.list_by_distributor("dist-1", limit=None)) == 3
