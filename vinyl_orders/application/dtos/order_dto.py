"""Application DTOs for order engine operations."""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from vinyl_orders.domain.entities import Order, OrderItem
from vinyl_orders.domain.events import DomainEvent
from vinyl_orders.domain.services import PlatformFeeStats, Settlement, TimelineEvent


class OrderItemDTO(BaseModel):
    """DTO for order item."""

    record_id: str = Field(..., description="Catalog record ID")
    title: str = Field(..., description="Record title")
    artist: str = Field(..., description="Record artist")
    quantity: int = Field(..., gt=0, description="Quantity ordered")
    price_at_time_of_order: int = Field(..., ge=0, description="Unit price snapshot (minor units)")
    cover_url: Optional[str] = Field(None, description="Cover image URL")

    model_config = {"frozen": True}

    @classmethod
    def from_domain(cls, item: OrderItem) -> "OrderItemDTO":
        return cls(
            record_id=item.record_id,
            title=item.title,
            artist=item.artist,
            quantity=item.quantity,
            price_at_time_of_order=item.price_at_time_of_order,
            cover_url=item.cover_url,
        )


class OrderDTO(BaseModel):
    """Response DTO for order details."""

    id: str = Field(..., description="Order ID")
    order_number: Optional[str] = Field(None, description="Human readable order number")
    distributor_id: str = Field(..., description="Owning distributor")
    viewer_id: str = Field(..., description="Buyer user ID")
    customer_name: str
    viewer_email: str
    phone_number: Optional[str] = None
    shipping_address: str
    billing_address: Optional[str] = None
    items: List[OrderItemDTO] = Field(default_factory=list, description="Order items")
    total_amount: int = Field(..., ge=0, description="Order total (minor units)")
    total_weight: Optional[int] = Field(None, description="Weight in grams")
    status: str = Field(..., description="Order status")
    payment_status: Optional[str] = None
    platform_fee_amount: Optional[int] = Field(None, description="Platform fee (minor units)")
    carrier: Optional[str] = None
    tracking_number: Optional[str] = None
    tracking_url: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    paid_at: Optional[datetime] = None
    shipped_at: Optional[datetime] = None
    version: int = Field(..., description="Optimistic concurrency version")

    model_config = {"frozen": True}

    @classmethod
    def from_domain(cls, order: Order) -> "OrderDTO":
        return cls(
            id=order.id,
            order_number=str(order.order_number) if order.order_number else None,
            distributor_id=order.distributor_id,
            viewer_id=order.viewer_id,
            customer_name=order.customer_name,
            viewer_email=order.viewer_email,
            phone_number=order.phone_number,
            shipping_address=order.shipping_address,
            billing_address=order.billing_address,
            items=[OrderItemDTO.from_domain(item) for item in order.items],
            total_amount=order.total_amount,
            total_weight=order.total_weight,
            status=order.status.value,
            payment_status=order.payment_status.value if order.payment_status else None,
            platform_fee_amount=order.platform_fee_amount,
            carrier=order.carrier,
            tracking_number=order.tracking_number,
            tracking_url=order.tracking_url,
            created_at=order.created_at,
            updated_at=order.updated_at,
            paid_at=order.paid_at,
            shipped_at=order.shipped_at,
            version=order.version,
        )


class TransitionRequest(BaseModel):
    """Request DTO for a status transition."""

    status: str = Field(..., description="Requested order status")

    model_config = {"frozen": True}


class TrackingUpdateRequest(BaseModel):
    """Request DTO for fulfillment tracking details."""

    carrier: Optional[str] = Field(None, description="Carrier code, e.g. 'dhl'")
    tracking_number: Optional[str] = None
    tracking_url: Optional[str] = None

    model_config = {"frozen": True}


class TimelineEventDTO(BaseModel):
    """DTO for one timeline milestone."""

    id: str
    title: str
    description: str
    timestamp: Optional[datetime] = None
    status: str
    details: Optional[str] = None

    model_config = {"frozen": True}

    @classmethod
    def from_domain(cls, event: TimelineEvent) -> "TimelineEventDTO":
        return cls(
            id=event.id,
            title=event.title,
            description=event.description,
            timestamp=event.timestamp,
            status=event.status.value,
            details=event.details,
        )


class DomainEventDTO(BaseModel):
    """DTO for a persisted order event."""

    event_id: str
    event_type: str
    event_version: int
    aggregate_id: str
    actor_id: Optional[str] = None
    occurred_at: datetime
    data: Dict[str, Any] = Field(default_factory=dict)

    model_config = {"frozen": True}

    @classmethod
    def from_domain(cls, event: DomainEvent) -> "DomainEventDTO":
        return cls(
            event_id=event.event_id,
            event_type=event.event_type,
            event_version=event.event_version,
            aggregate_id=event.aggregate_id,
            actor_id=event.actor_id,
            occurred_at=event.occurred_at,
            data=event.get_event_data(),
        )


class SettlementDTO(BaseModel):
    """DTO for a settlement split (minor units)."""

    total_amount: int
    platform_fee_amount: int
    distributor_payout: int

    model_config = {"frozen": True}

    @classmethod
    def from_domain(cls, settlement: Settlement) -> "SettlementDTO":
        return cls(
            total_amount=settlement.total_amount,
            platform_fee_amount=settlement.platform_fee_amount,
            distributor_payout=settlement.distributor_payout,
        )


class PlatformFeeStatsDTO(BaseModel):
    """DTO for platform revenue statistics (minor units)."""

    total_revenue: int
    total_platform_fees: int
    total_distributor_payouts: int
    paid_order_count: int
    total_order_count: int

    model_config = {"frozen": True}

    @classmethod
    def from_domain(cls, stats: PlatformFeeStats) -> "PlatformFeeStatsDTO":
        return cls(
            total_revenue=stats.total_revenue,
            total_platform_fees=stats.total_platform_fees,
            total_distributor_payouts=stats.total_distributor_payouts,
            paid_order_count=stats.paid_order_count,
            total_order_count=stats.total_order_count,
        )
