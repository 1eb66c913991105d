"""
Event Bus Interface (Domain Layer).

Pure interface definition - no implementation details.
"""
from abc import ABC, abstractmethod
from typing import List

from .events.base import DomainEvent


class EventBus(ABC):
    """
    Event Bus Interface.

    Order events are published here after they have been persisted, so
    reactions (customer e-mails, distributor notifications) never run
    for a write that did not happen.
    """

    @abstractmethod
    async def publish(self, event: DomainEvent) -> None:
        """
        Publish a single domain event.

        Args:
            event: Domain event to publish
        """
        pass

    @abstractmethod
    async def publish_all(self, events: List[DomainEvent]) -> None:
        """
        Publish multiple domain events in order.

        Args:
            events: List of domain events to publish
        """
        pass
