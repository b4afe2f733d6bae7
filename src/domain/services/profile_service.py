"""Profile service layer with business logic."""

from collections.abc import Callable
from dataclasses import dataclass, fields
from datetime import datetime
from decimal import Decimal
from typing import Any

import structlog

from core.exceptions import DuplicateIdentityError, ProfileNotFoundError
from domain.entities.event import EventKinds
from domain.entities.profile import Profile, UserRole, VerificationStatus
from domain.repositories.event_publisher import IEventPublisher
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services import field_registry
from domain.services.completeness import calculate_completeness, refresh_completeness
from domain.services.search_filters import MAX_PAGE_SIZE, SearchParams, compile_search
from domain.services.search_ranking import SearchPage, rank_and_paginate

logger = structlog.get_logger()


@dataclass(frozen=True)
class ProfileLookup:
    """Key for locating a profile: internal id or external auth id."""

    id: int | None = None
    external_auth_id: str | None = None

    def __post_init__(self) -> None:
        if (self.id is None) == (self.external_auth_id is None):
            raise ValueError("ProfileLookup needs exactly one of id or external_auth_id")

    @classmethod
    def by_id(cls, id: int) -> "ProfileLookup":
        return cls(id=id)

    @classmethod
    def by_external_auth_id(cls, external_auth_id: str) -> "ProfileLookup":
        return cls(external_auth_id=external_auth_id)

    def __str__(self) -> str:
        return str(self.id) if self.id is not None else str(self.external_auth_id)


@dataclass
class ProfilePatch:
    """Bulk partial update. Attributes left as None are not touched."""

    full_name: str | None = None
    display_name: str | None = None
    age: int | None = None
    profile_photo_url: str | None = None
    primary_phone: str | None = None
    wechat_id: str | None = None
    wechat_qr_code_url: str | None = None
    xiaohongshu_handle: str | None = None
    city: str | None = None
    province: str | None = None
    country: str | None = None
    service_areas: str | None = None
    current_location: str | None = None
    willing_to_relocate: bool | None = None
    years_of_experience: int | None = None
    languages: str | None = None
    specializations: str | None = None
    certifications: str | None = None
    services_offered: str | None = None
    hourly_rate: Decimal | None = None
    about_me: str | None = None
    professional_experience: str | None = None
    education_background: str | None = None
    special_skills: str | None = None
    gallery_photos: str | None = None
    certificates_photos: str | None = None

    def changes(self) -> dict[str, Any]:
        """Return the attributes carrying a value."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }

    def apply_to(self, profile: Profile) -> Profile:
        for name, value in self.changes().items():
            setattr(profile, name, value)
        return profile


class ProfileService:
    """Service layer for profile creation, updates, completeness and search."""

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        event_publisher: IEventPublisher,
        default_country: str = "China",
        max_page_size: int = MAX_PAGE_SIZE,
    ) -> None:
        self._uow_factory = uow_factory
        self._events = event_publisher
        self._default_country = default_country
        self._max_page_size = max_page_size

    async def create(
        self,
        external_auth_id: str,
        email: str,
        role: UserRole,
        primary_phone: str | None = None,
        display_name: str | None = None,
    ) -> Profile:
        """Register a new profile.

        Raises:
            DuplicateIdentityError: the external auth id or email is taken.
        """
        async with self._uow_factory() as uow:
            if await uow.profiles.exists_by_external_auth_id(external_auth_id):
                raise DuplicateIdentityError("external auth id", external_auth_id)
            if await uow.profiles.exists_by_email(email):
                raise DuplicateIdentityError("email", email)

            now = datetime.utcnow()
            profile = Profile(
                external_auth_id=external_auth_id,
                email=email,
                role=role,
                primary_phone=primary_phone,
                display_name=display_name,
                country=self._default_country,
                willing_to_relocate=False,
                total_rating=Decimal("0.0"),
                total_reviews=0,
                is_active=True,
                verification_status=VerificationStatus.UNVERIFIED,
                last_active_at=now,
                created_at=now,
                updated_at=now,
            )

            created = await uow.profiles.create(profile)
            await uow.commit()

        logger.info(
            "profile_created",
            profile_id=created.id,
            role=created.role.value,
        )
        await self._publish_created(created)
        return created

    async def get_by_id(self, id: int) -> Profile:
        return await self._get(ProfileLookup.by_id(id))

    async def get_by_external_auth_id(self, external_auth_id: str) -> Profile:
        return await self._get(ProfileLookup.by_external_auth_id(external_auth_id))

    async def get_by_role(self, role: UserRole) -> list[Profile]:
        async with self._uow_factory() as uow:
            return await uow.profiles.get_by_role(role)  # type: ignore[no-any-return]

    async def get_all(self) -> list[Profile]:
        async with self._uow_factory() as uow:
            return await uow.profiles.get_all()  # type: ignore[no-any-return]

    async def get_featured_caregivers(self) -> list[Profile]:
        """Active caregivers flagged as featured."""
        caregivers = await self.get_by_role(UserRole.CAREGIVER)
        return [p for p in caregivers if p.is_featured and p.is_active]

    async def get_verified_caregivers(self) -> list[Profile]:
        """Active caregivers whose identity has been verified."""
        caregivers = await self.get_by_role(UserRole.CAREGIVER)
        return [
            p
            for p in caregivers
            if p.verification_status == VerificationStatus.VERIFIED and p.is_active
        ]

    async def update_profile(self, lookup: ProfileLookup, patch: ProfilePatch) -> Profile:
        """Copy every populated patch attribute onto the profile.

        Raises:
            ProfileNotFoundError: no profile matches ``lookup``.
        """
        async with self._uow_factory() as uow:
            profile = await self._load(uow, lookup)
            changed = patch.changes()
            patch.apply_to(profile)
            updated = await self._save(uow, profile)

        logger.info(
            "profile_updated",
            profile_id=updated.id,
            fields=sorted(changed),
            completeness=updated.profile_completion_percentage,
        )
        return updated

    async def update_profile_field(
        self, lookup: ProfileLookup, field_name: str, value: Any
    ) -> Profile:
        """Set a single registered field from an untyped value.

        Raises:
            ProfileNotFoundError: no profile matches ``lookup``.
            UnknownFieldError: ``field_name`` is not in the registry.
            TypeMismatchError: ``value`` has the wrong kind for the field.
        """
        async with self._uow_factory() as uow:
            profile = await self._load(uow, lookup)
            field_registry.apply(profile, field_name, value)
            updated = await self._save(uow, profile)

        logger.info(
            "profile_field_updated",
            profile_id=updated.id,
            field=field_name,
            completeness=updated.profile_completion_percentage,
        )
        return updated

    async def get_completion(self, external_auth_id: str) -> int:
        """Score the stored profile's current values without persisting."""
        profile = await self.get_by_external_auth_id(external_auth_id)
        return calculate_completeness(profile)

    async def search_caregivers(self, params: SearchParams) -> SearchPage:
        """Run a caregiver search over the stored caregiver population.

        Raises:
            InvalidSearchParameterError: bad paging or minimum experience.
            InvalidSortError: unsupported sort.
        """
        query = compile_search(params, max_page_size=self._max_page_size)
        async with self._uow_factory() as uow:
            candidates = await uow.profiles.get_by_role(UserRole.CAREGIVER)

        result = rank_and_paginate(query, candidates)
        logger.debug(
            "caregiver_search_completed",
            filters=[p.name for p in query.predicates],
            total=result.total,
            page=result.page,
            size=result.size,
        )
        return result

    async def _get(self, lookup: ProfileLookup) -> Profile:
        async with self._uow_factory() as uow:
            return await self._load(uow, lookup)

    async def _load(self, uow: IUnitOfWork, lookup: ProfileLookup) -> Profile:
        if lookup.id is not None:
            profile = await uow.profiles.get(lookup.id)
        else:
            profile = await uow.profiles.get_by_external_auth_id(lookup.external_auth_id)
        if not profile:
            raise ProfileNotFoundError(str(lookup))
        return profile  # type: ignore[no-any-return]

    async def _save(self, uow: IUnitOfWork, profile: Profile) -> Profile:
        refresh_completeness(profile)
        profile.touch()
        updated = await uow.profiles.update(profile)
        await uow.commit()
        return updated  # type: ignore[no-any-return]

    async def _publish_created(self, profile: Profile) -> None:
        """Announce a new profile. Never fails the creation."""
        try:
            await self._events.publish(
                EventKinds.USER_CREATED,
                {
                    "user_id": profile.id,
                    "user_email": profile.email,
                    "user_type": profile.role.value,
                },
            )
        except Exception:
            logger.exception(
                "event_publish_failed",
                event_kind=EventKinds.USER_CREATED,
                profile_id=profile.id,
            )
