"""
Order lifecycle endpoints.

Reads, status transitions, tracking updates, timeline and event log.
"""
from typing import List
import logging

from fastapi import APIRouter, Depends, status

from api.dependencies import get_actor, get_lifecycle_service
from vinyl_orders.application.dtos import (
    DomainEventDTO,
    OrderDTO,
    TimelineEventDTO,
    TrackingUpdateRequest,
    TransitionRequest,
)
from vinyl_orders.application.services import OrderLifecycleService
from vinyl_orders.domain.entities import Actor


logger = logging.getLogger(__name__)
router = APIRouter()


# =============================================================================
# GET ORDER BY ID
# =============================================================================

@router.get(
    "/{order_id}",
    response_model=OrderDTO,
    status_code=status.HTTP_200_OK,
    summary="Get order by ID",
)
async def get_order(
    order_id: str,
    actor: Actor = Depends(get_actor),
    service: OrderLifecycleService = Depends(get_lifecycle_service),
):
    """
    Get order by ID.

    Orders outside the caller's scope answer 404.
    """
    order = await service.get_order(order_id, actor)
    return OrderDTO.from_domain(order)


# =============================================================================
# STATUS TRANSITION
# =============================================================================

@router.post(
    "/{order_id}/transitions",
    response_model=OrderDTO,
    status_code=status.HTTP_200_OK,
    summary="Change order status",
)
async def transition_order(
    order_id: str,
    request: TransitionRequest,
    actor: Actor = Depends(get_actor),
    service: OrderLifecycleService = Depends(get_lifecycle_service),
):
    """
    Move the order to the requested status.

    **Errors:**
    - 403: role may not change status
    - 404: order missing or out of scope
    - 409: edge not allowed, or the order changed concurrently
    - 422: unknown status or totals do not reconcile
    """
    logger.info(f"Transition requested: order {order_id} -> {request.status} by {actor.user_id}")
    order = await service.transition(order_id, request.status, actor)
    return OrderDTO.from_domain(order)


# =============================================================================
# TRACKING
# =============================================================================

@router.put(
    "/{order_id}/tracking",
    response_model=OrderDTO,
    status_code=status.HTTP_200_OK,
    summary="Update fulfillment tracking",
)
async def update_tracking(
    order_id: str,
    request: TrackingUpdateRequest,
    actor: Actor = Depends(get_actor),
    service: OrderLifecycleService = Depends(get_lifecycle_service),
):
    order = await service.update_tracking(
        order_id,
        actor,
        carrier=request.carrier,
        tracking_number=request.tracking_number,
        tracking_url=request.tracking_url,
    )
    return OrderDTO.from_domain(order)


# =============================================================================
# TIMELINE / EVENT LOG
# =============================================================================

@router.get(
    "/{order_id}/timeline",
    response_model=List[TimelineEventDTO],
    summary="Order activity timeline",
)
async def get_timeline(
    order_id: str,
    actor: Actor = Depends(get_actor),
    service: OrderLifecycleService = Depends(get_lifecycle_service),
):
    """Milestones inferred from the order's current state."""
    timeline = await service.get_timeline(order_id, actor)
    return [TimelineEventDTO.from_domain(event) for event in timeline]


@router.get(
    "/{order_id}/events",
    response_model=List[DomainEventDTO],
    summary="Order event log",
)
async def get_events(
    order_id: str,
    actor: Actor = Depends(get_actor),
    service: OrderLifecycleService = Depends(get_lifecycle_service),
):
    """Persisted order events, oldest first."""
    events = await service.get_event_log(order_id, actor)
    return [DomainEventDTO.from_domain(event) for event in events]
