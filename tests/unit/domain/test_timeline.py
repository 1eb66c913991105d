"""Tests for timeline reconstruction and the event-log timeline."""

from datetime import timedelta

import pytest

from vinyl_orders.domain.enums import OrderStatus, PaymentStatus, TimelineStatus
from vinyl_orders.domain.events import (
    OrderShippedEvent,
    OrderStatusChangedEvent,
    SettlementRecordedEvent,
    TrackingUpdatedEvent,
)
from vinyl_orders.domain.exceptions import ValidationError
from vinyl_orders.domain.services import (
    TimelineReconstructor,
    reconstruct_timeline,
    timeline_from_events,
)

from tests.conftest import CREATED_AT, NOW


def _by_id(timeline):
    return {event.id: event for event in timeline}


# =============================================================================
# RECONSTRUCTION
# =============================================================================

def test_pending_order_only_has_order_placed(make_order, distributor):
    timeline = reconstruct_timeline(make_order(), distributor)

    assert [e.id for e in timeline] == ["order_created"]
    placed = timeline[0]
    assert placed.timestamp == CREATED_AT
    assert placed.status == TimelineStatus.COMPLETED
    assert placed.description == "Customer Ada Lovelace placed order #GRV-00042"
    assert placed.details == "2 item(s) - Total: €500.00"


def test_checkout_without_payment_is_awaiting(make_order, distributor):
    order = make_order(status=OrderStatus.AWAITING_PAYMENT, stripe_checkout_session_id="cs_test_short")

    timeline = reconstruct_timeline(order, distributor)

    assert [e.id for e in timeline] == ["order_created", "checkout_created", "payment_pending"]
    assert timeline[1].details == "Session: cs_test_short"
    assert timeline[2].status == TimelineStatus.AWAITING
    assert timeline[2].timestamp is None


def test_long_stripe_references_are_truncated(paid_order, distributor):
    events = _by_id(reconstruct_timeline(paid_order, distributor))
    assert events["checkout_created"].details == "Session: cs_test_a1b2c3d4e5f6..."


def test_scenario_unconnected_distributor_payout_is_awaiting(paid_order, distributor):
    timeline = reconstruct_timeline(paid_order, distributor)
    payout = _by_id(timeline)["distributor_payout"]

    assert payout.status == TimelineStatus.AWAITING
    assert payout.timestamp is None
    assert payout.details == "Payout Amount: €480.00"


def test_connected_distributor_payout_is_completed(paid_order, connected_distributor):
    payout = _by_id(reconstruct_timeline(paid_order, connected_distributor))["distributor_payout"]

    assert payout.status == TimelineStatus.COMPLETED
    assert payout.timestamp == paid_order.paid_at
    assert "Groove Records" in payout.description


def test_paid_order_full_sequence(paid_order, connected_distributor):
    timeline = reconstruct_timeline(paid_order, connected_distributor)

    assert [e.id for e in timeline] == [
        "order_created",
        "checkout_created",
        "payment_completed",
        "platform_fee",
        "distributor_payout",
        "customer_email",
        "distributor_notification",
        "order_processing",
        "order_shipped",
    ]
    events = _by_id(timeline)
    assert events["platform_fee"].details == "Fee Amount: €20.00"
    assert events["order_processing"].title == "Awaiting Processing"
    assert events["order_shipped"].title == "Shipment Pending"
    assert events["order_shipped"].status == TimelineStatus.PENDING
    assert events["distributor_notification"].details == "Sent to: orders@groove.example"


def test_zero_fee_still_emits_platform_fee_step(make_order, distributor):
    order = make_order(
        status=OrderStatus.PAID, payment_status=PaymentStatus.PAID,
        platform_fee_amount=0, paid_at=NOW,
    )
    events = _by_id(reconstruct_timeline(order, distributor))
    assert events["platform_fee"].details == "Fee Amount: €0.00"


def test_scenario_shipped_without_tracking_has_pending_shipping_email(paid_order, distributor):
    paid_order.status = OrderStatus.SHIPPED
    paid_order.shipped_at = NOW
    paid_order.updated_at = NOW

    events = _by_id(reconstruct_timeline(paid_order, distributor))

    assert events["order_processing"].title == "Order Processing"
    assert events["order_shipped"].status == TimelineStatus.COMPLETED
    assert events["shipping_email"].status == TimelineStatus.PENDING
    assert events["shipping_email"].timestamp is None


def test_shipped_with_tracking(paid_order, distributor):
    paid_order.status = OrderStatus.SHIPPED
    paid_order.carrier = "dhl"
    paid_order.tracking_number = "JD014600003"
    paid_order.shipped_at = NOW

    events = _by_id(reconstruct_timeline(paid_order, distributor))

    assert events["order_shipped"].description == "Shipped via DHL"
    assert events["order_shipped"].details == "Tracking: JD014600003"
    assert events["shipping_email"].status == TimelineStatus.COMPLETED
    assert events["shipping_email"].timestamp == NOW


def test_failed_payment(make_order, distributor):
    order = make_order(status=OrderStatus.CANCELLED, payment_status=PaymentStatus.FAILED, updated_at=NOW)

    timeline = reconstruct_timeline(order, distributor)

    assert [e.id for e in timeline] == ["order_created", "payment_failed", "order_cancelled"]
    assert timeline[1].status == TimelineStatus.FAILED
    assert timeline[2].timestamp == NOW


def test_cancelled_after_payment_has_no_shipment_step(paid_order, distributor):
    paid_order.status = OrderStatus.CANCELLED
    ids = [e.id for e in reconstruct_timeline(paid_order, distributor)]

    assert "order_shipped" not in ids
    assert ids[-1] == "order_cancelled"


def test_missing_distributor_treated_as_unconnected(paid_order):
    payout = _by_id(reconstruct_timeline(paid_order, None))["distributor_payout"]
    assert payout.status == TimelineStatus.AWAITING


def test_reconstruction_is_deterministic(paid_order, distributor):
    assert reconstruct_timeline(paid_order, distributor) == reconstruct_timeline(paid_order, distributor)


def test_timestamps_are_never_decreasing(paid_order, connected_distributor):
    paid_order.status = OrderStatus.SHIPPED
    paid_order.tracking_number = "T1"
    paid_order.updated_at = paid_order.paid_at + timedelta(hours=1)
    paid_order.shipped_at = paid_order.paid_at + timedelta(hours=2)

    stamps = [e.timestamp for e in reconstruct_timeline(paid_order, connected_distributor) if e.timestamp]

    assert stamps == sorted(stamps)


def test_currency_symbol_is_configurable(paid_order, distributor):
    events = _by_id(TimelineReconstructor("$").reconstruct(paid_order, distributor))
    assert events["distributor_payout"].details == "Payout Amount: $480.00"


def test_unreconciled_order_raises(make_order, distributor):
    with pytest.raises(ValidationError):
        reconstruct_timeline(make_order(total_amount=1), distributor)


# =============================================================================
# EVENT LOG
# =============================================================================

def test_timeline_from_events_formats_each_event_type():
    events = [
        OrderStatusChangedEvent(order_id="o", previous_status="pending", new_status="paid",
                                actor_id="master-1", occurred_at=NOW),
        SettlementRecordedEvent(order_id="o", total_amount=50000, platform_fee_amount=2000,
                                distributor_payout=48000, occurred_at=NOW),
        TrackingUpdatedEvent(order_id="o", carrier="ups", tracking_number="1Z999", occurred_at=NOW),
        OrderShippedEvent(order_id="o", viewer_email="ada@example.com", carrier="ups",
                          tracking_number="1Z999", occurred_at=NOW),
        OrderStatusChangedEvent(order_id="o", previous_status="processing", new_status="cancelled",
                                occurred_at=NOW),
    ]

    timeline = timeline_from_events(events)

    assert [e.title for e in timeline] == [
        "Status changed to Paid",
        "Settlement Recorded",
        "Tracking Updated",
        "Order Shipped",
        "Status changed to Cancelled",
    ]
    assert timeline[0].id == events[0].event_id
    assert timeline[0].details == "By: master-1"
    assert timeline[1].details == "Payout Amount: €480.00"
    assert timeline[2].description == "Carrier: UPS"
    assert timeline[4].status == TimelineStatus.FAILED


def test_timeline_from_empty_log():
    assert timeline_from_events([]) == []
