"""
SQLAlchemy ORM Models.

Maps order engine entities to database tables. Money columns hold
integer minor units.
"""
from sqlalchemy import (
    JSON, Column, DateTime, ForeignKey, Index, Integer, String, Text, UniqueConstraint,
)
from sqlalchemy.orm import declarative_base, relationship


Base = declarative_base()


# =============================================================================
# DISTRIBUTOR MODEL
# =============================================================================

class DistributorModel(Base):
    """Distributor (read-only for the engine)."""

    __tablename__ = "distributors"

    id = Column(String(64), primary_key=True)
    name = Column(String(255), nullable=False)
    contact_email = Column(String(255), nullable=False)
    stripe_connect_account_id = Column(String(255), nullable=True)
    order_id_prefix = Column(String(20), nullable=False, default="ORD")
    order_counter = Column(Integer, nullable=False, default=0)

    def __repr__(self):
        return f"<DistributorModel(id={self.id}, name={self.name})>"


# =============================================================================
# ORDER MODEL
# =============================================================================

class OrderModel(Base):
    """Order aggregate root row."""

    __tablename__ = "orders"

    id = Column(String(64), primary_key=True)
    order_number = Column(String(32), nullable=True)
    distributor_id = Column(String(64), ForeignKey("distributors.id"), nullable=False, index=True)

    # Buyer
    viewer_id = Column(String(128), nullable=False, index=True)
    customer_name = Column(String(255), nullable=False)
    viewer_email = Column(String(255), nullable=False)
    phone_number = Column(String(64), nullable=True)
    shipping_address = Column(Text, nullable=False)
    billing_address = Column(Text, nullable=True)

    # Totals (minor units / grams)
    total_amount = Column(Integer, nullable=False)
    total_weight = Column(Integer, nullable=True)

    # Lifecycle
    status = Column(String(32), nullable=False, index=True)
    payment_status = Column(String(16), nullable=True)
    platform_fee_amount = Column(Integer, nullable=True)
    stripe_checkout_session_id = Column(String(255), nullable=True)
    stripe_payment_intent_id = Column(String(255), nullable=True)

    # Fulfillment
    carrier = Column(String(64), nullable=True)
    tracking_number = Column(String(128), nullable=True)
    tracking_url = Column(String(1024), nullable=True)

    # Timestamps
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)
    paid_at = Column(DateTime(timezone=True), nullable=True)
    shipped_at = Column(DateTime(timezone=True), nullable=True)

    # Optimistic concurrency
    version = Column(Integer, nullable=False, default=1)

    items = relationship(
        "OrderItemModel",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItemModel.position",
        lazy="selectin",
    )

    __table_args__ = (
        Index("ix_orders_distributor_created", "distributor_id", "created_at"),
        UniqueConstraint("distributor_id", "order_number", name="uq_orders_distributor_order_number"),
    )

    def __repr__(self):
        return f"<OrderModel(id={self.id}, status={self.status}, version={self.version})>"


class OrderItemModel(Base):
    """Order line item (immutable once the order exists)."""

    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(String(64), ForeignKey("orders.id"), nullable=False, index=True)
    position = Column(Integer, nullable=False)
    record_id = Column(String(128), nullable=False)
    title = Column(String(500), nullable=False)
    artist = Column(String(500), nullable=False)
    quantity = Column(Integer, nullable=False)
    price_at_time_of_order = Column(Integer, nullable=False)
    cover_url = Column(String(1024), nullable=True)

    order = relationship("OrderModel", back_populates="items")


# =============================================================================
# ORDER EVENT LOG
# =============================================================================

class OrderEventModel(Base):
    """
    Append-only order event log.

    Written in the same transaction as the order row it describes.
    """

    __tablename__ = "order_events"

    id = Column(Integer, primary_key=True, autoincrement=True)
    event_id = Column(String(36), unique=True, nullable=False)
    order_id = Column(String(64), ForeignKey("orders.id"), nullable=False, index=True)
    sequence_number = Column(Integer, nullable=False)
    event_type = Column(String(100), nullable=False)
    event_version = Column(Integer, nullable=False, default=1)
    actor_id = Column(String(128), nullable=True)
    occurred_at = Column(DateTime(timezone=True), nullable=False)
    event_data = Column(JSON, nullable=False)

    __table_args__ = (
        UniqueConstraint("order_id", "sequence_number", name="uq_order_events_sequence"),
    )

    def __repr__(self):
        return f"<OrderEventModel(order={self.order_id}, seq={self.sequence_number}, type={self.event_type})>"
