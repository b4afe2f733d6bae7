"""Dependency injection factories for API v1."""

from functools import lru_cache
from typing import Callable

from core.config import settings
from domain.repositories.event_publisher import IEventPublisher
from domain.services.profile_service import ProfileService
from infrastructure.database.session import async_session_factory
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork
from infrastructure.messaging.publisher import NoOpEventPublisher, RedisEventPublisher


def get_uow_factory() -> Callable[[], SQLAlchemyUnitOfWork]:
    """Factory for creating Unit of Work instances."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(async_session_factory)

    return factory


@lru_cache
def get_event_publisher() -> IEventPublisher:
    """Redis publisher when a broker is configured, no-op otherwise."""
    if settings.event_broker_url:
        return RedisEventPublisher(
            url=settings.event_broker_url,
            channel=settings.event_channel,
            source=settings.event_source,
        )
    return NoOpEventPublisher()


@lru_cache
def get_profile_service() -> ProfileService:
    """Get Profile service instance."""
    return ProfileService(
        get_uow_factory(),
        event_publisher=get_event_publisher(),
        default_country=settings.default_country,
        max_page_size=settings.search_max_page_size,
    )
