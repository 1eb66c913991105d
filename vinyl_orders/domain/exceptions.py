"""
Typed errors raised by the order engine.

Callers (HTTP layer, admin tooling) translate these into user-facing
responses. Storage errors raised by repository adapters are NOT wrapped
and propagate unchanged.
"""


class OrderEngineError(Exception):
    """Base class for all order engine errors."""


class NotFound(OrderEngineError):
    """Order or distributor id does not resolve (or is outside the actor's scope)."""


class Forbidden(OrderEngineError):
    """Actor lacks the role or permission for the requested operation."""


class InvalidTransition(OrderEngineError):
    """Requested status edge does not exist in the state graph."""

    def __init__(self, current_status: str, requested_status: str, message: str = ""):
        self.current_status = current_status
        self.requested_status = requested_status
        super().__init__(
            message
            or f"Cannot transition order from '{current_status}' to '{requested_status}'"
        )


class ValidationError(OrderEngineError):
    """Malformed input, or an order whose totals do not reconcile."""


class ConcurrencyConflict(OrderEngineError):
    """Order was modified by someone else between read and write."""

    def __init__(self, order_id: str, expected_version: int, actual_version: int):
        self.order_id = order_id
        self.expected_version = expected_version
        self.actual_version = actual_version
        super().__init__(
            f"Concurrency conflict on order {order_id}: "
            f"expected version {expected_version}, found {actual_version}"
        )
