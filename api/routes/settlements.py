"""Settlement preview endpoint."""
from fastapi import APIRouter, Depends, Query

from api.dependencies import get_settlement_calculator
from vinyl_orders.application.dtos import SettlementDTO
from vinyl_orders.domain.services import SettlementCalculator


router = APIRouter()


@router.get("", response_model=SettlementDTO, summary="Split a total into fee and payout")
async def compute_settlement(
    total_amount: int = Query(..., description="Order total in minor units"),
    calculator: SettlementCalculator = Depends(get_settlement_calculator),
):
    """Platform fee and distributor payout for `total_amount` at the configured rate."""
    return SettlementDTO.from_domain(calculator.compute(total_amount))
