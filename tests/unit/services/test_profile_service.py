"""Unit tests for ProfileService."""

from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from core.exceptions import (
    DuplicateIdentityError,
    ErrorCode,
    InvalidFieldValueError,
    InvalidSortError,
    ProfileNotFoundError,
    TypeMismatchError,
    UnknownFieldError,
)
from domain.entities.event import EventKinds
from domain.entities.profile import Profile, UserRole, VerificationStatus
from domain.services.profile_service import ProfileLookup, ProfilePatch, ProfileService
from domain.services.search_filters import SearchParams
from tests.unit.conftest import FakeUnitOfWork, make_complete_caregiver, make_profile


@pytest.fixture
def service(uow: FakeUnitOfWork, publisher: AsyncMock) -> ProfileService:
    return ProfileService(lambda: uow, event_publisher=publisher)


async def _assign_id(profile: Profile) -> Profile:
    profile.id = 7
    return profile


def _echo(profile: Profile) -> Profile:
    return profile


# --- ProfileLookup ---


class TestProfileLookup:
    def test_requires_exactly_one_key(self):
        with pytest.raises(ValueError):
            ProfileLookup()
        with pytest.raises(ValueError):
            ProfileLookup(id=1, external_auth_id="auth0|x")

    def test_str(self):
        assert str(ProfileLookup.by_id(5)) == "5"
        assert str(ProfileLookup.by_external_auth_id("auth0|x")) == "auth0|x"


# --- create ---


class TestCreate:
    @pytest.fixture(autouse=True)
    def _no_duplicates(self, uow: FakeUnitOfWork) -> None:
        uow.profiles.exists_by_external_auth_id.return_value = False
        uow.profiles.exists_by_email.return_value = False
        uow.profiles.create.side_effect = _assign_id

    @pytest.mark.asyncio
    async def test_creates_profile_with_defaults(
        self, service: ProfileService, uow: FakeUnitOfWork
    ):
        result = await service.create(
            external_auth_id="auth0|new",
            email="new@example.com",
            role=UserRole.CAREGIVER,
        )

        assert result.id == 7
        assert result.country == "China"
        assert result.willing_to_relocate is False
        assert result.is_active is True
        assert result.verification_status == VerificationStatus.UNVERIFIED
        assert result.total_reviews == 0
        assert result.last_active_at is not None
        assert result.profile_completion_percentage == 0
        assert uow.committed

    @pytest.mark.asyncio
    async def test_uses_configured_country(self, uow: FakeUnitOfWork, publisher: AsyncMock):
        service = ProfileService(lambda: uow, event_publisher=publisher, default_country="Canada")

        result = await service.create("auth0|new", "new@example.com", UserRole.CLIENT)

        assert result.country == "Canada"

    @pytest.mark.asyncio
    async def test_publishes_user_created(self, service: ProfileService, publisher: AsyncMock):
        await service.create("auth0|new", "new@example.com", UserRole.CLIENT)

        publisher.publish.assert_awaited_once_with(
            EventKinds.USER_CREATED,
            {"user_id": 7, "user_email": "new@example.com", "user_type": "CLIENT"},
        )

    @pytest.mark.asyncio
    async def test_publisher_failure_does_not_fail_creation(
        self, service: ProfileService, publisher: AsyncMock
    ):
        publisher.publish.side_effect = RuntimeError("broker down")

        result = await service.create("auth0|new", "new@example.com", UserRole.CLIENT)

        assert result.id == 7

    @pytest.mark.asyncio
    async def test_duplicate_external_auth_id(
        self, service: ProfileService, uow: FakeUnitOfWork, publisher: AsyncMock
    ):
        uow.profiles.exists_by_external_auth_id.return_value = True

        with pytest.raises(DuplicateIdentityError) as exc_info:
            await service.create("auth0|taken", "new@example.com", UserRole.CLIENT)

        assert exc_info.value.error_code == ErrorCode.DUPLICATE_IDENTITY
        assert exc_info.value.details["field"] == "external auth id"
        uow.profiles.create.assert_not_called()
        publisher.publish.assert_not_called()

    @pytest.mark.asyncio
    async def test_duplicate_email(self, service: ProfileService, uow: FakeUnitOfWork):
        uow.profiles.exists_by_email.return_value = True

        with pytest.raises(DuplicateIdentityError) as exc_info:
            await service.create("auth0|new", "taken@example.com", UserRole.CLIENT)

        assert exc_info.value.message == "User with email already exists"
        assert not uow.committed


# --- reads ---


class TestReads:
    @pytest.mark.asyncio
    async def test_get_by_id(self, service: ProfileService, uow: FakeUnitOfWork):
        uow.profiles.get.return_value = make_profile(id=3)

        result = await service.get_by_id(3)

        assert result.id == 3
        uow.profiles.get.assert_called_once_with(3)

    @pytest.mark.asyncio
    async def test_get_by_id_not_found(self, service: ProfileService, uow: FakeUnitOfWork):
        uow.profiles.get.return_value = None

        with pytest.raises(ProfileNotFoundError) as exc_info:
            await service.get_by_id(404)

        assert exc_info.value.status_code == 404
        assert exc_info.value.details == {"lookup": "404"}

    @pytest.mark.asyncio
    async def test_get_by_external_auth_id_not_found(
        self, service: ProfileService, uow: FakeUnitOfWork
    ):
        uow.profiles.get_by_external_auth_id.return_value = None

        with pytest.raises(ProfileNotFoundError):
            await service.get_by_external_auth_id("auth0|missing")

    @pytest.mark.asyncio
    async def test_featured_caregivers_are_active(
        self, service: ProfileService, uow: FakeUnitOfWork
    ):
        uow.profiles.get_by_role.return_value = [
            make_profile(id=1, is_featured=True),
            make_profile(id=2, is_featured=True, is_active=False),
            make_profile(id=3),
        ]

        result = await service.get_featured_caregivers()

        assert [p.id for p in result] == [1]
        uow.profiles.get_by_role.assert_called_once_with(UserRole.CAREGIVER)

    @pytest.mark.asyncio
    async def test_verified_caregivers(self, service: ProfileService, uow: FakeUnitOfWork):
        uow.profiles.get_by_role.return_value = [
            make_profile(id=1, verification_status=VerificationStatus.VERIFIED),
            make_profile(id=2, verification_status=VerificationStatus.PENDING),
        ]

        result = await service.get_verified_caregivers()

        assert [p.id for p in result] == [1]


# --- update_profile ---


class TestUpdateProfile:
    @pytest.mark.asyncio
    async def test_applies_only_populated_fields(
        self, service: ProfileService, uow: FakeUnitOfWork
    ):
        uow.profiles.get_by_external_auth_id.return_value = make_profile(
            full_name="Li Mei", city="Chengdu"
        )
        uow.profiles.update.side_effect = _echo

        result = await service.update_profile(
            ProfileLookup.by_external_auth_id("auth0|caregiver-1"),
            ProfilePatch(province="Sichuan", age=34),
        )

        assert result.full_name == "Li Mei"
        assert result.city == "Chengdu"
        assert result.province == "Sichuan"
        assert result.age == 34
        assert uow.committed

    @pytest.mark.asyncio
    async def test_recomputes_completeness(self, service: ProfileService, uow: FakeUnitOfWork):
        uow.profiles.get.return_value = make_complete_caregiver(
            hourly_rate=None, profile_completion_percentage=94
        )
        uow.profiles.update.side_effect = _echo

        result = await service.update_profile(
            ProfileLookup.by_id(1), ProfilePatch(hourly_rate=Decimal("90.00"))
        )

        assert result.profile_completion_percentage == 100

    @pytest.mark.asyncio
    async def test_advances_updated_at(self, service: ProfileService, uow: FakeUnitOfWork):
        profile = make_profile()
        before = profile.updated_at
        uow.profiles.get.return_value = profile
        uow.profiles.update.side_effect = _echo

        result = await service.update_profile(ProfileLookup.by_id(1), ProfilePatch(city="Xi'an"))

        assert result.updated_at > before

    @pytest.mark.asyncio
    async def test_not_found(self, service: ProfileService, uow: FakeUnitOfWork):
        uow.profiles.get.return_value = None

        with pytest.raises(ProfileNotFoundError):
            await service.update_profile(ProfileLookup.by_id(9), ProfilePatch(city="Xi'an"))

        uow.profiles.update.assert_not_called()


# --- update_profile_field ---


class TestUpdateProfileField:
    @pytest.mark.asyncio
    async def test_sets_field_and_rescores(self, service: ProfileService, uow: FakeUnitOfWork):
        uow.profiles.get_by_external_auth_id.return_value = make_profile()
        uow.profiles.update.side_effect = _echo

        result = await service.update_profile_field(
            ProfileLookup.by_external_auth_id("auth0|caregiver-1"), "CITY", "Chengdu"
        )

        assert result.city == "Chengdu"
        assert result.profile_completion_percentage == 24

    @pytest.mark.asyncio
    async def test_unknown_field(self, service: ProfileService, uow: FakeUnitOfWork):
        uow.profiles.get.return_value = make_profile()

        with pytest.raises(UnknownFieldError):
            await service.update_profile_field(ProfileLookup.by_id(1), "rating", 5)

        uow.profiles.update.assert_not_called()
        assert not uow.committed

    @pytest.mark.asyncio
    async def test_type_mismatch_leaves_profile_unsaved(
        self, service: ProfileService, uow: FakeUnitOfWork
    ):
        uow.profiles.get.return_value = make_profile(age=30)

        with pytest.raises(TypeMismatchError):
            await service.update_profile_field(ProfileLookup.by_id(1), "age", "thirty")

        uow.profiles.update.assert_not_called()

    @pytest.mark.asyncio
    async def test_out_of_range_value_is_not_saved(
        self, service: ProfileService, uow: FakeUnitOfWork
    ):
        uow.profiles.get.return_value = make_profile(age=30)

        with pytest.raises(InvalidFieldValueError) as exc_info:
            await service.update_profile_field(ProfileLookup.by_id(1), "age", -5)

        assert exc_info.value.error_code == ErrorCode.VALIDATION_ERROR
        uow.profiles.update.assert_not_called()


# --- get_completion ---


class TestGetCompletion:
    @pytest.mark.asyncio
    async def test_scores_current_values_without_saving(
        self, service: ProfileService, uow: FakeUnitOfWork
    ):
        uow.profiles.get_by_external_auth_id.return_value = make_complete_caregiver(
            profile_completion_percentage=0
        )

        assert await service.get_completion("auth0|caregiver-1") == 100
        uow.profiles.update.assert_not_called()


# --- search_caregivers ---


class TestSearchCaregivers:
    @pytest.mark.asyncio
    async def test_filters_caregiver_population(
        self, service: ProfileService, uow: FakeUnitOfWork
    ):
        uow.profiles.get_by_role.return_value = [
            make_profile(id=1, province="Sichuan"),
            make_profile(id=2, province="Yunnan"),
        ]

        result = await service.search_caregivers(SearchParams(province="Sichuan"))

        assert [p.id for p in result.items] == [1]
        assert result.total == 1
        uow.profiles.get_by_role.assert_called_once_with(UserRole.CAREGIVER)

    @pytest.mark.asyncio
    async def test_invalid_sort_fails_before_loading(
        self, service: ProfileService, uow: FakeUnitOfWork
    ):
        with pytest.raises(InvalidSortError):
            await service.search_caregivers(SearchParams(sort="email"))

        uow.profiles.get_by_role.assert_not_called()

    @pytest.mark.asyncio
    async def test_page_size_capped_by_service(self, uow: FakeUnitOfWork, publisher: AsyncMock):
        service = ProfileService(lambda: uow, event_publisher=publisher, max_page_size=10)

        uow.profiles.get_by_role.return_value = [make_profile(id=i) for i in range(1, 16)]

        result = await service.search_caregivers(SearchParams(size=11))

        assert result.size == 10
        assert len(result.items) == 10
        assert result.total == 15
