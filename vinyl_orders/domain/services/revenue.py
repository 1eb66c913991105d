"""Platform revenue statistics (superadmin dashboard)."""
from dataclasses import dataclass
from typing import Iterable

from ..entities.order import Order


@dataclass(frozen=True)
class PlatformFeeStats:
    """Totals in minor units across a set of orders."""
    total_revenue: int
    total_platform_fees: int
    total_distributor_payouts: int
    paid_order_count: int
    total_order_count: int


def compute_platform_fee_stats(orders: Iterable[Order]) -> PlatformFeeStats:
    """
    Fold orders into platform revenue totals.

    Only orders whose payment succeeded count towards revenue; orders
    without a stamped fee contribute zero fee.
    """
    total_revenue = 0
    total_fees = 0
    paid_count = 0
    total_count = 0

    for order in orders:
        total_count += 1
        if not order.is_payment_confirmed or not order.total_amount:
            continue
        total_revenue += order.total_amount
        total_fees += order.platform_fee_amount or 0
        paid_count += 1

    return PlatformFeeStats(
        total_revenue=total_revenue,
        total_platform_fees=total_fees,
        total_distributor_payouts=total_revenue - total_fees,
        paid_order_count=paid_count,
        total_order_count=total_count,
    )
