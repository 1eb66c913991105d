"""Distributor entity (read-only for the order engine)."""
from dataclasses import dataclass
from typing import Optional

from ..value_objects import DEFAULT_ORDER_PREFIX, OrderNumber


@dataclass(frozen=True)
class Distributor:
    """
    Seller that owns orders.

    The presence of stripe_connect_account_id is the sole signal that a
    payout can actually be transferred.
    """
    id: str
    name: str
    contact_email: str
    stripe_connect_account_id: Optional[str] = None
    order_id_prefix: str = DEFAULT_ORDER_PREFIX
    order_counter: int = 0

    @property
    def can_receive_payouts(self) -> bool:
        return bool(self.stripe_connect_account_id)

    def next_order_number(self) -> OrderNumber:
        """Order number the next checkout for this distributor will receive."""
        return OrderNumber.from_counter(self.order_id_prefix, self.order_counter + 1)
