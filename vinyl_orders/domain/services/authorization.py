"""
Transition authorizer.

Single place that answers "may this actor do X to orders". Every
mutation path (status transitions, tracking updates) and every read
path consults it instead of re-deriving role checks inline.
"""
from ..entities.actor import Actor
from ..entities.order import Order
from ..enums import OrderStatus, UserRole


class TransitionAuthorizer:
    """Role and scope rules for order access."""

    def allows(self, actor: Actor, requested_status: OrderStatus) -> bool:
        """
        Whether the actor's role permits status changes at all.

        Independent of the specific order: the same answer holds for
        every target status and every order state.
        """
        if actor.role == UserRole.MASTER:
            return True
        if actor.role == UserRole.WORKER:
            return bool(actor.permissions.can_manage_orders)
        # Viewers and superadmins are read-only here
        return False

    def can_read(self, actor: Actor, order: Order) -> bool:
        """Read scope: superadmin everything, staff own distributor, viewers own orders."""
        if actor.role == UserRole.SUPERADMIN:
            return True
        if actor.role == UserRole.VIEWER:
            return order.viewer_id == actor.user_id
        return actor.distributor_id is not None and actor.distributor_id == order.distributor_id

    def can_write(self, actor: Actor, order: Order) -> bool:
        """Write scope: never across distributors, whatever the role."""
        if actor.role not in (UserRole.MASTER, UserRole.WORKER):
            return False
        return actor.distributor_id is not None and actor.distributor_id == order.distributor_id

    def can_view_platform_revenue(self, actor: Actor) -> bool:
        return actor.role == UserRole.SUPERADMIN
