"""Tests for the order state machine."""

from datetime import timedelta

import pytest

from vinyl_orders.domain.entities import OrderItem
from vinyl_orders.domain.enums import OrderStatus
from vinyl_orders.domain.events import (
    OrderShippedEvent,
    OrderStatusChangedEvent,
    SettlementRecordedEvent,
)
from vinyl_orders.domain.exceptions import InvalidTransition, ValidationError
from vinyl_orders.domain.services import (
    ALLOWED_TRANSITIONS,
    TERMINAL_STATUSES,
    OrderStateMachine,
)

from tests.conftest import NOW


machine = OrderStateMachine()


# =============================================================================
# GRAPH
# =============================================================================

def test_every_status_has_an_entry_in_the_graph():
    assert set(ALLOWED_TRANSITIONS) == set(OrderStatus)


def test_terminal_statuses_have_no_outbound_edges():
    assert TERMINAL_STATUSES == {OrderStatus.SHIPPED, OrderStatus.CANCELLED}
    for status in TERMINAL_STATUSES:
        assert ALLOWED_TRANSITIONS[status] == frozenset()


def test_on_hold_has_no_inbound_edge_and_only_cancels():
    inbound = [s for s, targets in ALLOWED_TRANSITIONS.items() if OrderStatus.ON_HOLD in targets]
    assert inbound == []
    assert machine.allowed_targets(OrderStatus.ON_HOLD) == {OrderStatus.CANCELLED}


@pytest.mark.parametrize("current, requested", [
    (OrderStatus.PENDING, OrderStatus.PAID),
    (OrderStatus.AWAITING_PAYMENT, OrderStatus.PAID),
    (OrderStatus.PAID, OrderStatus.PROCESSING),
    (OrderStatus.PROCESSING, OrderStatus.SHIPPED),
    (OrderStatus.PENDING, OrderStatus.CANCELLED),
    (OrderStatus.AWAITING_PAYMENT, OrderStatus.CANCELLED),
    (OrderStatus.PAID, OrderStatus.CANCELLED),
    (OrderStatus.PROCESSING, OrderStatus.CANCELLED),
    (OrderStatus.ON_HOLD, OrderStatus.CANCELLED),
])
def test_allowed_edges(current, requested):
    assert machine.is_allowed(current, requested)


@pytest.mark.parametrize("terminal", [OrderStatus.SHIPPED, OrderStatus.CANCELLED])
@pytest.mark.parametrize("requested", list(OrderStatus))
def test_nothing_leaves_a_terminal_state(terminal, requested):
    with pytest.raises(InvalidTransition):
        machine.ensure_allowed(terminal, requested)


@pytest.mark.parametrize("status", list(OrderStatus))
def test_self_transition_is_invalid(status):
    with pytest.raises(InvalidTransition):
        machine.ensure_allowed(status, status)


def test_pending_to_shipped_skips_states_and_is_invalid():
    with pytest.raises(InvalidTransition) as exc_info:
        machine.ensure_allowed(OrderStatus.PENDING, OrderStatus.SHIPPED)

    assert exc_info.value.current_status == "pending"
    assert exc_info.value.requested_status == "shipped"


def test_nothing_enters_on_hold():
    with pytest.raises(InvalidTransition):
        machine.ensure_allowed(OrderStatus.PAID, OrderStatus.ON_HOLD)


# =============================================================================
# APPLY
# =============================================================================

class TestApply:
    """Effects of apply() on the order."""

    def test_entering_paid_stamps_fee_and_paid_at(self, make_order):
        order = make_order(status=OrderStatus.PENDING)

        machine.apply(order, OrderStatus.PAID, now=NOW, actor_id="master-1")

        assert order.status == OrderStatus.PAID
        assert order.platform_fee_amount == 2000
        assert order.paid_at == NOW
        assert order.updated_at == NOW

        events = order.get_domain_events()
        assert [type(e) for e in events] == [OrderStatusChangedEvent, SettlementRecordedEvent]
        assert events[0].previous_status == "pending"
        assert events[0].new_status == "paid"
        assert events[0].actor_id == "master-1"
        assert events[1].distributor_payout == 48000

    def test_existing_fee_and_paid_at_are_kept(self, make_order):
        earlier = NOW - timedelta(days=1)
        order = make_order(status=OrderStatus.AWAITING_PAYMENT, platform_fee_amount=1234, paid_at=earlier)

        machine.apply(order, OrderStatus.PAID, now=NOW)

        assert order.platform_fee_amount == 1234
        assert order.paid_at == earlier
        assert [type(e) for e in order.get_domain_events()] == [OrderStatusChangedEvent]

    def test_entering_shipped_stamps_shipped_at(self, make_order):
        order = make_order(status=OrderStatus.PROCESSING, carrier="dhl", tracking_number="JD0001")

        machine.apply(order, OrderStatus.SHIPPED, now=NOW)

        assert order.shipped_at == NOW
        shipped = order.get_domain_events()[-1]
        assert isinstance(shipped, OrderShippedEvent)
        assert shipped.tracking_number == "JD0001"
        assert shipped.viewer_email == "ada@example.com"

    def test_invalid_edge_leaves_order_untouched(self, make_order):
        order = make_order(status=OrderStatus.PENDING)
        before = make_order(status=OrderStatus.PENDING)

        with pytest.raises(InvalidTransition):
            machine.apply(order, OrderStatus.SHIPPED, now=NOW)

        assert order == before
        assert order.get_domain_events() == []

    def test_unreconciled_order_is_rejected_before_mutation(self, make_order):
        order = make_order(status=OrderStatus.PENDING, total_amount=49999)

        with pytest.raises(ValidationError):
            machine.apply(order, OrderStatus.PAID, now=NOW)

        assert order.status == OrderStatus.PENDING
        assert order.platform_fee_amount is None
        assert order.get_domain_events() == []

    def test_empty_order_with_zero_total_reconciles(self, make_order):
        order = make_order(status=OrderStatus.PENDING, items=[], total_amount=0)

        machine.apply(order, OrderStatus.PAID, now=NOW)

        assert order.platform_fee_amount == 0

    def test_state_machine_uses_injected_calculator(self, make_order):
        from decimal import Decimal
        from vinyl_orders.domain.services import SettlementCalculator

        custom = OrderStateMachine(SettlementCalculator(Decimal("0.10")))
        order = make_order(
            status=OrderStatus.PENDING,
            items=[OrderItem(record_id="r", title="t", artist="a", quantity=1, price_at_time_of_order=1000)],
            total_amount=1000,
        )

        custom.apply(order, OrderStatus.PAID, now=NOW)

        assert order.platform_fee_amount == 100
