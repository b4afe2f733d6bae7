"""Pydantic schemas for Profile API."""

from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from domain.entities.profile import (
    ABOUT_ME_MAX_LENGTH,
    HANDLE_MAX_LENGTH,
    LOCATION_MAX_LENGTH,
    MAX_AGE,
    MAX_HOURLY_RATE,
    MAX_YEARS_OF_EXPERIENCE,
    MIN_AGE,
    NAME_MAX_LENGTH,
    PHONE_PATTERN,
    REGION_MAX_LENGTH,
    URL_MAX_LENGTH,
    UserRole,
    VerificationStatus,
)


class CamelModel(BaseModel):
    """Base schema using camelCase on the wire, accepting snake_case too."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ProfileCreate(CamelModel):
    """Schema for registering a profile.

    ``external_auth_id`` defaults to the subject of the bearer token.
    """

    external_auth_id: str | None = Field(None, min_length=1, max_length=128)
    email: str = Field(..., min_length=3, max_length=255)
    role: UserRole
    primary_phone: str | None = Field(None, pattern=PHONE_PATTERN)
    display_name: str | None = Field(None, max_length=NAME_MAX_LENGTH)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        """Basic email validation."""
        v = v.strip().lower()
        if "@" not in v or "." not in v.split("@")[-1]:
            raise ValueError("Invalid email address")
        return v


class ProfileUpdate(CamelModel):
    """Schema for a bulk partial update. Null or missing fields are untouched."""

    # Basic information
    full_name: str | None = Field(None, max_length=NAME_MAX_LENGTH)
    display_name: str | None = Field(None, max_length=NAME_MAX_LENGTH)
    age: int | None = Field(None, ge=MIN_AGE, le=MAX_AGE)
    profile_photo_url: str | None = Field(None, max_length=URL_MAX_LENGTH)

    # Contact
    primary_phone: str | None = Field(None, pattern=PHONE_PATTERN)
    wechat_id: str | None = Field(None, max_length=HANDLE_MAX_LENGTH)
    wechat_qr_code_url: str | None = Field(None, max_length=URL_MAX_LENGTH)
    xiaohongshu_handle: str | None = Field(None, max_length=HANDLE_MAX_LENGTH)

    # Location & service
    city: str | None = Field(None, max_length=REGION_MAX_LENGTH)
    province: str | None = Field(None, max_length=REGION_MAX_LENGTH)
    country: str | None = Field(None, max_length=REGION_MAX_LENGTH)
    service_areas: str | None = None
    current_location: str | None = Field(None, max_length=LOCATION_MAX_LENGTH)
    willing_to_relocate: bool | None = None

    # Professional
    years_of_experience: int | None = Field(None, ge=0, le=MAX_YEARS_OF_EXPERIENCE)
    languages: str | None = None
    specializations: str | None = None
    certifications: str | None = None
    services_offered: str | None = None
    hourly_rate: Decimal | None = Field(None, ge=0, le=MAX_HOURLY_RATE)

    # Rich content
    about_me: str | None = Field(None, max_length=ABOUT_ME_MAX_LENGTH)
    professional_experience: str | None = None
    education_background: str | None = None
    special_skills: str | None = None

    # Media
    gallery_photos: str | None = None
    certificates_photos: str | None = None


class FieldUpdateRequest(BaseModel):
    """Schema for a single-field update; the value is checked against the field."""

    value: Any = None


class ProfileResponse(CamelModel):
    """Schema for Profile response."""

    id: int
    external_auth_id: str
    email: str
    role: UserRole

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

    total_rating: Decimal
    total_reviews: int

    profile_completion_percentage: int
    is_featured: bool
    is_active: bool
    verification_status: VerificationStatus
    profile_views: int
    last_active_at: datetime | None = None
    created_at: datetime
    updated_at: datetime


class ProfileDetailResponse(BaseModel):
    """Schema for a single Profile."""

    data: ProfileResponse
    message: str | None = None


class ProfileListResponse(BaseModel):
    """Schema for a list of Profiles."""

    data: list[ProfileResponse]


class CompletionResponse(BaseModel):
    """Schema for a completeness query."""

    data: int = Field(..., ge=0, le=100)
    message: str | None = None
