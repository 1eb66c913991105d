"""
Event Bus Implementation (Infrastructure Layer).

Notifies registered subscribers about persisted order events.
"""
import inspect
import logging
from typing import Callable, List, Optional

from vinyl_orders.domain.event_bus import EventBus
from vinyl_orders.domain.events.base import DomainEvent

logger = logging.getLogger(__name__)


class InMemoryEventBus(EventBus):
    """
    In-Memory Event Bus Implementation.

    Features:
    - Notifies registered subscribers in registration order
    - Supports sync and async handlers
    - A failing subscriber is logged and does not stop the others

    Events reach the bus only after the repository has stored them, so
    the event log stays the source of truth even when a subscriber fails.
    """

    def __init__(self):
        """Initialize event bus with subscribers."""
        self._subscribers: List[Callable[[DomainEvent], None]] = []

    async def publish(self, event: DomainEvent) -> None:
        """
        Publish a single domain event.

        Args:
            event: Domain event to publish
        """
        logger.info(f"Publishing event: {event.event_type} (aggregate: {event.aggregate_id})")
        await self._notify_subscribers(event)

    async def publish_all(self, events: List[DomainEvent]) -> None:
        """
        Publish multiple domain events in order.

        Args:
            events: List of domain events to publish
        """
        if not events:
            return

        logger.info(f"Publishing {len(events)} events")
        for event in events:
            await self._notify_subscribers(event)

    def subscribe(self, handler: Callable[[DomainEvent], None]) -> None:
        """
        Subscribe to all domain events.

        Args:
            handler: Callback function that receives events
        """
        if handler not in self._subscribers:
            self._subscribers.append(handler)
            logger.info(f"Registered event subscriber: {getattr(handler, '__name__', handler)}")

    def unsubscribe(self, handler: Callable[[DomainEvent], None]) -> None:
        """
        Unsubscribe from domain events.

        Args:
            handler: Callback function to remove
        """
        if handler in self._subscribers:
            self._subscribers.remove(handler)
            logger.info(f"Unregistered event subscriber: {getattr(handler, '__name__', handler)}")

    async def _notify_subscribers(self, event: DomainEvent) -> None:
        """Notify all subscribers about an event."""
        if not self._subscribers:
            return

        logger.debug(f"Notifying {len(self._subscribers)} subscribers about {event.event_type}")

        for subscriber in list(self._subscribers):
            try:
                if inspect.iscoroutinefunction(subscriber):
                    await subscriber(event)
                else:
                    subscriber(event)
            except Exception as e:
                logger.error(
                    f"Subscriber {getattr(subscriber, '__name__', subscriber)} failed: {e}",
                    exc_info=True,
                )


# Global event bus instance
_event_bus_instance: Optional[InMemoryEventBus] = None


def get_event_bus() -> InMemoryEventBus:
    """
    Get or create global event bus instance.

    Returns:
        Global event bus instance
    """
    global _event_bus_instance

    if _event_bus_instance is None:
        _event_bus_instance = InMemoryEventBus()

    return _event_bus_instance
