"""Event publisher implementations.

``RedisEventPublisher`` publishes JSON envelopes on a Redis pub/sub channel.
``NoOpEventPublisher`` stands in when no broker is configured.
"""

from typing import Any

import orjson
import redis.asyncio as redis
import structlog

from domain.entities.event import DomainEvent

logger = structlog.get_logger()


class NoOpEventPublisher:
    """Publisher used when messaging is disabled."""

    async def publish(self, event_kind: str, payload: dict[str, Any]) -> None:
        logger.debug("event_publisher_noop", event_kind=event_kind)

    async def close(self) -> None:
        return None


class RedisEventPublisher:
    """Best-effort publisher on a Redis pub/sub channel."""

    def __init__(self, url: str, channel: str, source: str) -> None:
        self._url = url
        self._channel = channel
        self._source = source
        self._client: redis.Redis | None = None

    async def get_client(self) -> redis.Redis:
        if self._client is None:
            logger.info("event_publisher_connecting", channel=self._channel)
            self._client = redis.from_url(
                self._url,
                socket_connect_timeout=5,
                socket_timeout=5,
                health_check_interval=30,
            )
        return self._client

    async def publish(self, event_kind: str, payload: dict[str, Any]) -> None:
        """Publish an event envelope. Broker errors are logged, not raised."""
        event = DomainEvent(event_type=event_kind, source=self._source, payload=payload)
        try:
            client = await self.get_client()
            receivers = await client.publish(self._channel, orjson.dumps(event.to_dict()))
        except (redis.RedisError, OSError) as exc:
            logger.warning(
                "event_publish_failed",
                event_kind=event_kind,
                event_id=event.event_id,
                error=str(exc),
            )
            return
        logger.info(
            "event_published",
            event_kind=event_kind,
            event_id=event.event_id,
            receivers=receivers,
        )

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
