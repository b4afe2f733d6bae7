"""Domain events published to other services."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any
from uuid import uuid4


class EventKinds:
    """Event kind constants."""

    USER_CREATED = "USER_CREATED"


@dataclass(frozen=True)
class DomainEvent:
    """Envelope for an event leaving this service."""

    event_type: str
    source: str
    payload: dict[str, Any] = field(default_factory=dict)
    event_id: str = field(default_factory=lambda: str(uuid4()))
    timestamp: datetime = field(default_factory=datetime.utcnow)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict."""
        return {
            "event_id": self.event_id,
            "event_type": self.event_type,
            "source": self.source,
            "timestamp": self.timestamp.isoformat(),
            **self.payload,
        }
