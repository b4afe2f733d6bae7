"""Event publisher protocol."""

from typing import Any, Protocol


class IEventPublisher(Protocol):
    """Outbound event channel. Publishing is best-effort."""

    async def publish(self, event_kind: str, payload: dict[str, Any]) -> None:
        """Publish an event. Implementations must not raise."""
        ...

    async def close(self) -> None:
        """Release any broker connection."""
        ...
