"""
Settlement calculator.

Splits an order total into the platform fee and the distributor payout.
Pure and deterministic: no I/O, no shared state.

All amounts are integer minor currency units.
"""
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from ..exceptions import ValidationError
from ..value_objects import ensure_minor_units

# Overridable through EngineSettings.platform_fee_rate
DEFAULT_PLATFORM_FEE_RATE = Decimal("0.04")


@dataclass(frozen=True)
class Settlement:
    """
    Result of a settlement computation.

    Balance equation (MUST ALWAYS HOLD):
        platform_fee_amount + distributor_payout = total_amount
    """
    total_amount: int
    platform_fee_amount: int
    distributor_payout: int


class SettlementCalculator:
    """Computes platform fee / distributor payout for a configured fee rate."""

    def __init__(self, fee_rate: Decimal = DEFAULT_PLATFORM_FEE_RATE):
        fee_rate = Decimal(str(fee_rate))
        if not fee_rate.is_finite() or fee_rate < 0 or fee_rate >= 1:
            raise ValidationError(f"Platform fee rate must be in [0, 1), got {fee_rate}")
        self._fee_rate = fee_rate

    @property
    def fee_rate(self) -> Decimal:
        return self._fee_rate

    def compute(self, total_amount: int) -> Settlement:
        """
        Compute the settlement for an order total.

        The fee is rounded half-up to the smallest currency unit.

        Args:
            total_amount: Order total in minor units

        Returns:
            Settlement with fee and payout

        Raises:
            ValidationError: If total_amount is negative, NaN or not an integer
        """
        total_amount = ensure_minor_units(total_amount, "total_amount")
        fee = int(
            (Decimal(total_amount) * self._fee_rate).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
        )
        return Settlement(
            total_amount=total_amount,
            platform_fee_amount=fee,
            distributor_payout=total_amount - fee,
        )


def compute_settlement(total_amount: int, fee_rate: Decimal = DEFAULT_PLATFORM_FEE_RATE) -> Settlement:
    """Convenience wrapper: SettlementCalculator(fee_rate).compute(total_amount)."""
    return SettlementCalculator(fee_rate).compute(total_amount)
