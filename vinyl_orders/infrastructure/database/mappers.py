"""Static mappers for domain entities <-> database models."""

from datetime import datetime, timezone
from typing import Optional

from vinyl_orders.domain.entities import Distributor, Order, OrderItem
from vinyl_orders.domain.events import DomainEvent, order_event_from_dict
from vinyl_orders.domain.value_objects import OrderNumber

from .models import DistributorModel, OrderEventModel, OrderItemModel, OrderModel


def _aware(value: Optional[datetime]) -> Optional[datetime]:
    """SQLite drops tzinfo; everything the engine stores is UTC."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class OrderMapper:
    """Static mapper for Order <-> OrderModel with nested items."""

    # Columns a state change may touch; items and identity are immutable
    MUTABLE_FIELDS = (
        "status",
        "payment_status",
        "platform_fee_amount",
        "carrier",
        "tracking_number",
        "tracking_url",
        "updated_at",
        "paid_at",
        "shipped_at",
    )

    @staticmethod
    def to_domain(model: OrderModel) -> Order:
        items = [
            OrderItem(
                record_id=item.record_id,
                title=item.title,
                artist=item.artist,
                quantity=item.quantity,
                price_at_time_of_order=item.price_at_time_of_order,
                cover_url=item.cover_url,
            )
            for item in model.items
        ]

        return Order(
            id=model.id,
            order_number=OrderNumber(model.order_number) if model.order_number else None,
            distributor_id=model.distributor_id,
            viewer_id=model.viewer_id,
            customer_name=model.customer_name,
            viewer_email=model.viewer_email,
            phone_number=model.phone_number,
            shipping_address=model.shipping_address,
            billing_address=model.billing_address,
            items=items,
            total_amount=model.total_amount,
            total_weight=model.total_weight,
            status=model.status,
            payment_status=model.payment_status,
            platform_fee_amount=model.platform_fee_amount,
            stripe_checkout_session_id=model.stripe_checkout_session_id,
            stripe_payment_intent_id=model.stripe_payment_intent_id,
            carrier=model.carrier,
            tracking_number=model.tracking_number,
            tracking_url=model.tracking_url,
            created_at=_aware(model.created_at),
            updated_at=_aware(model.updated_at),
            paid_at=_aware(model.paid_at),
            shipped_at=_aware(model.shipped_at),
            version=model.version,
        )

    @staticmethod
    def to_persistence(entity: Order, version: int) -> OrderModel:
        model = OrderModel(
            id=entity.id,
            order_number=str(entity.order_number) if entity.order_number else None,
            distributor_id=entity.distributor_id,
            viewer_id=entity.viewer_id,
            customer_name=entity.customer_name,
            viewer_email=entity.viewer_email,
            phone_number=entity.phone_number,
            shipping_address=entity.shipping_address,
            billing_address=entity.billing_address,
            total_amount=entity.total_amount,
            total_weight=entity.total_weight,
            stripe_checkout_session_id=entity.stripe_checkout_session_id,
            stripe_payment_intent_id=entity.stripe_payment_intent_id,
            created_at=entity.created_at,
            version=version,
            **OrderMapper.mutable_values(entity),
        )
        model.items = [
            OrderItemModel(
                position=position,
                record_id=item.record_id,
                title=item.title,
                artist=item.artist,
                quantity=item.quantity,
                price_at_time_of_order=item.price_at_time_of_order,
                cover_url=item.cover_url,
            )
            for position, item in enumerate(entity.items)
        ]
        return model

    @staticmethod
    def mutable_values(entity: Order) -> dict:
        values = {name: getattr(entity, name) for name in OrderMapper.MUTABLE_FIELDS}
        values["status"] = entity.status.value
        values["payment_status"] = entity.payment_status.value if entity.payment_status else None
        return values


class DistributorMapper:
    """Static mapper for Distributor <-> DistributorModel."""

    @staticmethod
    def to_domain(model: DistributorModel) -> Distributor:
        return Distributor(
            id=model.id,
            name=model.name,
            contact_email=model.contact_email,
            stripe_connect_account_id=model.stripe_connect_account_id,
            order_id_prefix=model.order_id_prefix,
            order_counter=model.order_counter,
        )

    @staticmethod
    def to_persistence(entity: Distributor) -> DistributorModel:
        return DistributorModel(
            id=entity.id,
            name=entity.name,
            contact_email=entity.contact_email,
            stripe_connect_account_id=entity.stripe_connect_account_id,
            order_id_prefix=entity.order_id_prefix,
            order_counter=entity.order_counter,
        )


class OrderEventMapper:
    """Static mapper for DomainEvent <-> OrderEventModel."""

    @staticmethod
    def to_domain(model: OrderEventModel) -> DomainEvent:
        return order_event_from_dict({
            "event_id": model.event_id,
            "event_type": model.event_type,
            "event_version": model.event_version,
            "aggregate_id": model.order_id,
            "actor_id": model.actor_id,
            "occurred_at": _aware(model.occurred_at),
            "data": model.event_data,
        })

    @staticmethod
    def to_persistence(event: DomainEvent, order_id: str, sequence_number: int) -> OrderEventModel:
        return OrderEventModel(
            event_id=event.event_id,
            order_id=order_id,
            sequence_number=sequence_number,
            event_type=event.event_type,
            event_version=event.event_version,
            actor_id=event.actor_id,
            occurred_at=event.occurred_at,
            event_data=event.get_event_data(),
        )
