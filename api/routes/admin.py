"""Superadmin endpoints."""
from fastapi import APIRouter, Depends

from api.dependencies import get_actor, get_lifecycle_service
from vinyl_orders.application.dtos import PlatformFeeStatsDTO
from vinyl_orders.application.services import OrderLifecycleService
from vinyl_orders.domain.entities import Actor


router = APIRouter()


@router.get("/revenue", response_model=PlatformFeeStatsDTO, summary="Platform revenue statistics")
async def get_platform_revenue(
    actor: Actor = Depends(get_actor),
    service: OrderLifecycleService = Depends(get_lifecycle_service),
):
    stats = await service.platform_fee_stats(actor)
    return PlatformFeeStatsDTO.from_domain(stats)
