"""Unit tests for event publishers."""

from unittest.mock import AsyncMock

import orjson
import pytest
import redis.asyncio as redis

from domain.entities.event import EventKinds
from infrastructure.messaging.publisher import NoOpEventPublisher, RedisEventPublisher


@pytest.fixture
def client() -> AsyncMock:
    client = AsyncMock()
    client.publish.return_value = 1
    return client


@pytest.fixture
def publisher(client: AsyncMock) -> RedisEventPublisher:
    publisher = RedisEventPublisher(
        url="redis://localhost:6379/0", channel="user.events", source="user-service"
    )
    publisher._client = client
    return publisher


class TestRedisEventPublisher:
    @pytest.mark.asyncio
    async def test_publishes_envelope_on_channel(
        self, publisher: RedisEventPublisher, client: AsyncMock
    ):
        await publisher.publish(
            EventKinds.USER_CREATED,
            {"user_id": 7, "user_email": "new@example.com", "user_type": "CAREGIVER"},
        )

        client.publish.assert_awaited_once()
        channel, body = client.publish.call_args.args
        message = orjson.loads(body)
        assert channel == "user.events"
        assert message["event_type"] == "USER_CREATED"
        assert message["source"] == "user-service"
        assert message["user_id"] == 7
        assert message["user_email"] == "new@example.com"
        assert message["user_type"] == "CAREGIVER"
        assert message["event_id"]
        assert message["timestamp"]

    @pytest.mark.asyncio
    async def test_broker_error_is_swallowed(
        self, publisher: RedisEventPublisher, client: AsyncMock
    ):
        client.publish.side_effect = redis.ConnectionError("connection refused")

        await publisher.publish(EventKinds.USER_CREATED, {"user_id": 7})

    @pytest.mark.asyncio
    async def test_close_releases_client(
        self, publisher: RedisEventPublisher, client: AsyncMock
    ):
        await publisher.close()

        client.aclose.assert_awaited_once()
        assert publisher._client is None


class TestNoOpEventPublisher:
    @pytest.mark.asyncio
    async def test_publish_does_nothing(self):
        publisher = NoOpEventPublisher()

        await publisher.publish(EventKinds.USER_CREATED, {"user_id": 7})
        await publisher.close()
