"""
Base Domain Event.

All domain events inherit from this base class. Events are append-only
records of state changes, persisted alongside the aggregate that
recorded them.
"""
from dataclasses import dataclass, field, fields
from datetime import datetime, timezone
from typing import Any, Dict, Optional
import uuid

_METADATA_FIELDS = (
    "event_id",
    "event_type",
    "event_version",
    "aggregate_id",
    "aggregate_type",
    "actor_id",
    "occurred_at",
)


@dataclass
class DomainEvent:
    """
    Base class for all domain events.

    Events are immutable records of things that have happened.
    """

    # Event metadata
    event_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    event_type: str = field(init=False)
    event_version: int = 1

    # Aggregate information
    aggregate_id: str = field(default="")
    aggregate_type: str = field(init=False)

    # Who caused it
    actor_id: Optional[str] = None

    # Timestamp
    occurred_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self):
        """Set event type and aggregate type from class name."""
        object.__setattr__(self, "event_type", self.__class__.__name__)
        object.__setattr__(self, "aggregate_type", self._get_aggregate_type())

    def _get_aggregate_type(self) -> str:
        """
        Extract aggregate type from event type.

        Example: OrderStatusChangedEvent -> Order
        """
        event_name = self.__class__.__name__
        if event_name.endswith("Event"):
            event_name = event_name[:-5]

        for i, char in enumerate(event_name):
            if i > 0 and char.isupper():
                return event_name[:i]

        return event_name

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert event to dictionary for serialization.

        Used for event log persistence and API responses.
        """
        return {
            "event_id": self.event_id,
            "event_type": self.event_type,
            "event_version": self.event_version,
            "aggregate_id": self.aggregate_id,
            "aggregate_type": self.aggregate_type,
            "actor_id": self.actor_id,
            "occurred_at": self.occurred_at.isoformat(),
            "data": self.get_event_data(),
        }

    def get_event_data(self) -> Dict[str, Any]:
        """Event-specific payload (every dataclass field that is not metadata)."""
        data = {}
        for f in fields(self):
            if f.name in _METADATA_FIELDS:
                continue
            value = getattr(self, f.name)
            if isinstance(value, datetime):
                data[f.name] = value.isoformat()
            else:
                data[f.name] = value
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DomainEvent":
        """
        Create event from dictionary produced by to_dict().

        Args:
            data: Event data dictionary

        Returns:
            Event instance
        """
        occurred_at = data["occurred_at"]
        if isinstance(occurred_at, str):
            occurred_at = datetime.fromisoformat(occurred_at)

        return cls(
            event_id=data["event_id"],
            event_version=data.get("event_version", 1),
            aggregate_id=data["aggregate_id"],
            actor_id=data.get("actor_id"),
            occurred_at=occurred_at,
            **data.get("data", {}),
        )
