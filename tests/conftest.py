"""Pytest configuration and fixtures."""

import os
import sys
from collections.abc import AsyncGenerator
from pathlib import Path

# Disable rate limiting and point the app at SQLite in tests
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("EVENT_BROKER_URL", "")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import TokenUser
from infrastructure.database.models import Base

# Test database URL (SQLite in memory)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

# Fixed subject for the authenticated test caller
TEST_SUBJECT_ID = "test-subject"


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create a fresh in-memory database per test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create session factory."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Create a fresh database session for each test."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def test_user() -> TokenUser:
    """The authenticated caller used by API tests."""
    return TokenUser(
        subject_id=TEST_SUBJECT_ID,
        email="test@example.com",
        display_name="Test User",
    )


@pytest.fixture
def auth_provider() -> JWTAuthProvider:
    """Create auth provider for testing."""
    return JWTAuthProvider(
        secret_key="test-secret-key",
        algorithm="HS256",
        expire_minutes=30,
    )


@pytest.fixture
def auth_token(auth_provider: JWTAuthProvider, test_user: TokenUser) -> str:
    """Create auth token for test user."""
    return str(auth_provider.create_token(test_user))


@pytest.fixture
def auth_headers(auth_token: str) -> dict[str, str]:
    """Create authorization headers."""
    return {"Authorization": f"Bearer {auth_token}"}


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Create async test client (no auth)."""
    from main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
async def authenticated_client(
    session_factory: async_sessionmaker[AsyncSession],
    test_user: TokenUser,
    auth_provider: JWTAuthProvider,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create authenticated test client with proper database and auth overrides.

    This client:
    - Uses an in-memory SQLite database
    - Overrides auth dependency to return the test user
    - Overrides the profile service to use the test session factory
    """
    from api.dependencies.auth import get_auth_provider, get_current_user
    from api.v1.dependencies import get_profile_service
    from domain.services.profile_service import ProfileService
    from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork
    from infrastructure.messaging.publisher import NoOpEventPublisher
    from main import create_app

    app = create_app()

    # Override auth to return test user directly
    async def override_get_user() -> TokenUser:
        return test_user

    def override_get_auth_provider() -> JWTAuthProvider:
        return auth_provider

    # Create a UoW factory that uses test session
    def test_uow_factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(session_factory)

    def override_get_profile_service() -> ProfileService:
        return ProfileService(test_uow_factory, event_publisher=NoOpEventPublisher())

    app.dependency_overrides[get_current_user] = override_get_user
    app.dependency_overrides[get_auth_provider] = override_get_auth_provider
    app.dependency_overrides[get_profile_service] = override_get_profile_service

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()
