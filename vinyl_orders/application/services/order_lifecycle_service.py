"""Application service orchestrating the order lifecycle."""

from copy import deepcopy
from typing import List, Optional
import logging

from vinyl_orders.domain.clock import Clock, SystemClock
from vinyl_orders.domain.entities import Actor, Order
from vinyl_orders.domain.enums import OrderStatus
from vinyl_orders.domain.event_bus import EventBus
from vinyl_orders.domain.events import DomainEvent, TrackingUpdatedEvent
from vinyl_orders.domain.exceptions import Forbidden, InvalidTransition, NotFound, ValidationError
from vinyl_orders.domain.repositories import DistributorRepository, OrderRepository
from vinyl_orders.domain.services import (
    OrderStateMachine,
    PlatformFeeStats,
    TimelineEvent,
    TimelineReconstructor,
    TransitionAuthorizer,
    compute_platform_fee_stats,
)
from vinyl_orders.domain.services.timeline import DEFAULT_CURRENCY_SYMBOL

logger = logging.getLogger(__name__)


class OrderLifecycleService:
    """
    Application service for orchestrating order operations.

    Responsibilities:
    - Enforce role and distributor scope via TransitionAuthorizer
    - Apply status changes through OrderStateMachine on a working copy
    - Persist with a single optimistic save per mutation
    - Publish recorded events to the event bus after the save
    """

    def __init__(
        self,
        order_repository: OrderRepository,
        distributor_repository: DistributorRepository,
        event_bus: Optional[EventBus] = None,
        authorizer: Optional[TransitionAuthorizer] = None,
        state_machine: Optional[OrderStateMachine] = None,
        clock: Optional[Clock] = None,
        currency_symbol: str = DEFAULT_CURRENCY_SYMBOL,
    ) -> None:
        """Initialize order lifecycle service.

        Args:
            order_repository: Order persistence port
            distributor_repository: Distributor read port
            event_bus: Receives events after they are persisted (optional)
            authorizer: Role and scope rules
            state_machine: Transition rules (carries the settlement calculator)
            clock: Source of `now` for updated_at / paid_at / shipped_at
            currency_symbol: Symbol used in timeline detail strings
        """
        self._orders = order_repository
        self._distributors = distributor_repository
        self._event_bus = event_bus
        self._authorizer = authorizer or TransitionAuthorizer()
        self._state_machine = state_machine or OrderStateMachine()
        self._clock = clock or SystemClock()
        self._timeline = TimelineReconstructor(currency_symbol)

    # =========================================================================
    # MUTATIONS
    # =========================================================================

    async def transition(self, order_id: str, requested_status, actor: Actor) -> Order:
        """Move an order to `requested_status` on behalf of `actor`.

        Nothing is written unless every check passes; the repository is
        written exactly once on success.

        Returns:
            The persisted order

        Raises:
            ValidationError: Unknown status, or totals do not reconcile
            Forbidden: Actor's role may not change order status
            NotFound: Order missing or outside the actor's scope
            InvalidTransition: Edge not in the state graph
            ConcurrencyConflict: Order changed since it was read
        """
        requested = self._parse_status(requested_status)

        if not self._authorizer.allows(actor, requested):
            logger.warning(
                f"Transition rejected: {actor.role.value} {actor.user_id} may not set "
                f"order {order_id} to '{requested.value}'"
            )
            raise Forbidden(f"Role '{actor.role.value}' may not change order status")

        stored = await self._load_writable(order_id, actor)

        working = deepcopy(stored)
        try:
            self._state_machine.apply(working, requested, now=self._clock.now(), actor_id=actor.user_id)
        except (InvalidTransition, ValidationError) as e:
            logger.warning(f"Transition rejected for order {order_id}: {e}")
            raise

        saved = await self._persist(working, expected_version=stored.version)
        logger.info(
            f"Order {order_id} transitioned {stored.status.value} -> {saved.status.value} by {actor.user_id}"
        )
        return saved

    async def update_tracking(
        self,
        order_id: str,
        actor: Actor,
        carrier: Optional[str] = None,
        tracking_number: Optional[str] = None,
        tracking_url: Optional[str] = None,
    ) -> Order:
        """Record fulfillment tracking details (no status change).

        Raises:
            Forbidden: Actor may not manage orders
            NotFound: Order missing or outside the actor's scope
            InvalidTransition: Order is cancelled
        """
        if not self._authorizer.allows(actor, OrderStatus.SHIPPED):
            logger.warning(f"Tracking update rejected: {actor.role.value} {actor.user_id} on order {order_id}")
            raise Forbidden(f"Role '{actor.role.value}' may not update tracking")

        stored = await self._load_writable(order_id, actor)
        if stored.status == OrderStatus.CANCELLED:
            raise InvalidTransition(
                stored.status.value,
                stored.status.value,
                f"Order {order_id} is cancelled; tracking cannot be updated",
            )

        now = self._clock.now()
        working = deepcopy(stored)
        working.carrier = carrier
        working.tracking_number = tracking_number
        working.tracking_url = tracking_url
        working.updated_at = now
        working.record_event(
            TrackingUpdatedEvent(
                order_id=working.id,
                carrier=carrier,
                tracking_number=tracking_number,
                tracking_url=tracking_url,
                actor_id=actor.user_id,
                occurred_at=now,
            )
        )

        saved = await self._persist(working, expected_version=stored.version)
        logger.info(f"Tracking updated for order {order_id}: {carrier} {tracking_number}")
        return saved

    # =========================================================================
    # READS
    # =========================================================================

    async def get_order(self, order_id: str, actor: Actor) -> Order:
        """Get order by ID within the actor's read scope.

        Raises:
            NotFound: Order missing or outside the actor's scope
        """
        order = await self._orders.get_by_id(order_id)
        if not self._authorizer.can_read(actor, order):
            logger.warning(f"Order {order_id} is outside the scope of {actor.role.value} {actor.user_id}")
            raise NotFound(f"Order not found: {order_id}")
        return order

    async def get_timeline(self, order_id: str, actor: Actor) -> List[TimelineEvent]:
        """Infer the order's milestone timeline."""
        order = await self.get_order(order_id, actor)
        try:
            distributor = await self._distributors.get_by_id(order.distributor_id)
        except NotFound:
            logger.warning(f"Distributor {order.distributor_id} of order {order_id} not found")
            distributor = None
        return self._timeline.reconstruct(order, distributor)

    async def get_event_log(self, order_id: str, actor: Actor) -> List[DomainEvent]:
        """Persisted events of the order, oldest first."""
        await self.get_order(order_id, actor)
        return await self._orders.get_events(order_id)

    async def get_event_timeline(self, order_id: str, actor: Actor) -> List[TimelineEvent]:
        """Timeline built from the persisted event log."""
        return self._timeline.from_events(await self.get_event_log(order_id, actor))

    async def platform_fee_stats(self, actor: Actor) -> PlatformFeeStats:
        """Platform-wide revenue figures (superadmin only).

        Raises:
            Forbidden: Actor is not a superadmin
        """
        if not self._authorizer.can_view_platform_revenue(actor):
            logger.warning(f"Revenue stats rejected for {actor.role.value} {actor.user_id}")
            raise Forbidden("Only superadmins may view platform revenue")
        return compute_platform_fee_stats(await self._orders.list_all(limit=None))

    # =========================================================================
    # HELPERS
    # =========================================================================

    @staticmethod
    def _parse_status(value) -> OrderStatus:
        try:
            return OrderStatus(value)
        except ValueError:
            raise ValidationError(f"Unknown order status: {value!r}")

    async def _load_writable(self, order_id: str, actor: Actor) -> Order:
        """Load an order the actor may mutate.

        Orders outside the read scope look missing; readable orders the
        actor may not write are forbidden.
        """
        order = await self.get_order(order_id, actor)
        if not self._authorizer.can_write(actor, order):
            logger.warning(f"Write rejected: {actor.role.value} {actor.user_id} on order {order_id}")
            raise Forbidden(f"Not allowed to modify order {order_id}")
        return order

    async def _persist(self, working: Order, expected_version: int) -> Order:
        events = working.get_domain_events()
        saved = await self._orders.save(working, expected_version=expected_version)
        working.clear_domain_events()

        if self._event_bus is not None:
            await self._event_bus.publish_all(events)

        return saved
