"""SQLAlchemy implementation of Profile repository."""

from sqlalchemy import exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.profile import Profile, UserRole, VerificationStatus
from infrastructure.database.models import ProfileModel

# Entity attributes stored in columns of the same name
_PLAIN_COLUMNS: tuple[str, ...] = (
    "external_auth_id",
    "email",
    "full_name",
    "display_name",
    "age",
    "profile_photo_url",
    "primary_phone",
    "wechat_id",
    "wechat_qr_code_url",
    "xiaohongshu_handle",
    "city",
    "province",
    "country",
    "service_areas",
    "current_location",
    "willing_to_relocate",
    "years_of_experience",
    "languages",
    "specializations",
    "certifications",
    "services_offered",
    "hourly_rate",
    "about_me",
    "professional_experience",
    "education_background",
    "special_skills",
    "gallery_photos",
    "certificates_photos",
    "total_rating",
    "total_reviews",
    "profile_completion_percentage",
    "is_featured",
    "is_active",
    "profile_views",
    "last_active_at",
    "created_at",
    "updated_at",
)

# Columns owned by other services or fixed at creation; never written on update
_IMMUTABLE_ON_UPDATE = frozenset(
    {"external_auth_id", "created_at", "total_rating", "total_reviews"}
)


class SQLAlchemyProfileRepository:
    """SQLAlchemy implementation of IProfileRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, id: int) -> Profile | None:
        """Get a profile by internal ID."""
        stmt = select(ProfileModel).where(ProfileModel.id == id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_by_external_auth_id(self, external_auth_id: str) -> Profile | None:
        """Get a profile by external auth ID."""
        stmt = select(ProfileModel).where(ProfileModel.external_auth_id == external_auth_id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_by_role(self, role: UserRole) -> list[Profile]:
        """Get all profiles with a role."""
        stmt = (
            select(ProfileModel)
            .where(ProfileModel.user_type == role.value)
            .order_by(ProfileModel.id)
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def get_all(self) -> list[Profile]:
        """Get all profiles."""
        stmt = select(ProfileModel).order_by(ProfileModel.id)
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars()]

    async def exists_by_external_auth_id(self, external_auth_id: str) -> bool:
        stmt = select(exists().where(ProfileModel.external_auth_id == external_auth_id))
        result = await self._session.execute(stmt)
        return bool(result.scalar())

    async def exists_by_email(self, email: str) -> bool:
        stmt = select(exists().where(ProfileModel.email == email))
        result = await self._session.execute(stmt)
        return bool(result.scalar())

    async def create(self, profile: Profile) -> Profile:
        """Create a new profile."""
        model = self._to_model(profile)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def update(self, profile: Profile) -> Profile:
        """Update an existing profile."""
        stmt = select(ProfileModel).where(ProfileModel.id == profile.id)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if not model:
            raise ValueError(f"Profile {profile.id} not found")

        for name in _PLAIN_COLUMNS:
            if name not in _IMMUTABLE_ON_UPDATE:
                setattr(model, name, getattr(profile, name))
        model.verification_status = profile.verification_status.value

        await self._session.flush()
        return self._to_entity(model)

    def _to_entity(self, model: ProfileModel) -> Profile:
        """Convert ORM model to domain entity."""
        values = {name: getattr(model, name) for name in _PLAIN_COLUMNS}
        return Profile(
            id=model.id,
            role=UserRole(model.user_type),
            verification_status=VerificationStatus(model.verification_status),
            **values,
        )

    def _to_model(self, entity: Profile) -> ProfileModel:
        """Convert domain entity to ORM model."""
        values = {name: getattr(entity, name) for name in _PLAIN_COLUMNS}
        return ProfileModel(
            id=entity.id,
            user_type=entity.role.value,
            verification_status=entity.verification_status.value,
            **values,
        )
