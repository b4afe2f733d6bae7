"""Shared fixtures for unit tests."""

from datetime import datetime
from decimal import Decimal
from typing import Any
from unittest.mock import AsyncMock

import pytest

from domain.entities.profile import Profile, UserRole


class FakeUnitOfWork:
    """Fake Unit of Work with a profile repository mock for unit testing."""

    def __init__(self) -> None:
        self.profiles = AsyncMock()
        self.committed = False
        self.rolled_back = False

    async def commit(self) -> None:
        self.committed = True

    async def rollback(self) -> None:
        self.rolled_back = True

    async def __aenter__(self) -> "FakeUnitOfWork":
        return self

    async def __aexit__(self, *args: Any) -> None:
        pass


def make_profile(**overrides: Any) -> Profile:
    """Build a caregiver profile with identity fields set."""
    values: dict[str, Any] = {
        "id": 1,
        "external_auth_id": "auth0|caregiver-1",
        "email": "caregiver1@example.com",
        "role": UserRole.CAREGIVER,
        "created_at": datetime(2024, 1, 1),
        "updated_at": datetime(2024, 1, 1),
    }
    values.update(overrides)
    return Profile(**values)


def make_complete_caregiver(**overrides: Any) -> Profile:
    """Build a caregiver with every completeness item filled in."""
    values: dict[str, Any] = {
        "full_name": "Li Mei",
        "display_name": "Mei",
        "age": 34,
        "profile_photo_url": "https://cdn.example.com/mei.jpg",
        "primary_phone": "13800138000",
        "wechat_id": "mei_care",
        "city": "Chengdu",
        "province": "Sichuan",
        "years_of_experience": 8,
        "languages": "Mandarin,English",
        "specializations": "elderly care,dementia",
        "about_me": "Patient and reliable.",
        "services_offered": "home care,meal preparation",
        "hourly_rate": Decimal("85.00"),
    }
    values.update(overrides)
    return make_profile(**values)


@pytest.fixture
def uow() -> FakeUnitOfWork:
    """Create a fresh FakeUnitOfWork."""
    return FakeUnitOfWork()


@pytest.fixture
def publisher() -> AsyncMock:
    """An event publisher mock."""
    return AsyncMock()
