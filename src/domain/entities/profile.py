"""Profile domain entity."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import StrEnum


class UserRole(StrEnum):
    """Kind of account a profile belongs to. Fixed at creation."""

    CAREGIVER = "CAREGIVER"
    CLIENT = "CLIENT"
    ADMIN = "ADMIN"


class VerificationStatus(StrEnum):
    """Identity verification state, managed by platform staff."""

    UNVERIFIED = "UNVERIFIED"
    PENDING = "PENDING"
    VERIFIED = "VERIFIED"


# Value limits shared by the bulk and single-field update paths.
# String lengths follow the storage column sizes.
PHONE_PATTERN = r"^[+]?[0-9]{10,15}$"
MIN_AGE = 18
MAX_AGE = 100
MAX_YEARS_OF_EXPERIENCE = 50
MAX_HOURLY_RATE = 1000
NAME_MAX_LENGTH = 255
URL_MAX_LENGTH = 500
HANDLE_MAX_LENGTH = 100
REGION_MAX_LENGTH = 100
LOCATION_MAX_LENGTH = 255
ABOUT_ME_MAX_LENGTH = 2000


@dataclass
class Profile:
    """Domain entity for a user profile (caregivers, clients and staff).

    ``id`` is assigned by storage on creation. Multi-value professional
    fields (languages, specializations, services offered, certifications)
    are free-form comma separated text.
    """

    external_auth_id: str
    email: str
    role: UserRole
    id: int | None = None

    # Basic information
    full_name: str | None = None
    display_name: str | None = None
    age: int | None = None
    profile_photo_url: str | None = None

    # Contact
    primary_phone: str | None = None
    wechat_id: str | None = None
    wechat_qr_code_url: str | None = None
    xiaohongshu_handle: str | None = None

    # Location & service
    city: str | None = None
    province: str | None = None
    country: str | None = "China"
    service_areas: str | None = None
    current_location: str | None = None
    willing_to_relocate: bool | None = False

    # Professional
    years_of_experience: int | None = None
    languages: str | None = None
    specializations: str | None = None
    certifications: str | None = None
    services_offered: str | None = None
    hourly_rate: Decimal | None = None

    # Rich content
    about_me: str | None = None
    professional_experience: str | None = None
    education_background: str | None = None
    special_skills: str | None = None

    # Media (CSV or JSON encoded URL lists)
    gallery_photos: str | None = None
    certificates_photos: str | None = None

    # Social proof, owned by the rating service
    total_rating: Decimal = Decimal("0.0")
    total_reviews: int = 0

    # Platform management
    profile_completion_percentage: int = 0
    is_featured: bool = False
    is_active: bool = True
    verification_status: VerificationStatus = VerificationStatus.UNVERIFIED
    profile_views: int = 0
    last_active_at: datetime | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self) -> None:
        """Ensure updated_at is always at least as recent as created_at."""
        if self.updated_at < self.created_at:
            self.updated_at = self.created_at

    @property
    def is_caregiver(self) -> bool:
        return self.role == UserRole.CAREGIVER

    def touch(self) -> None:
        """Stamp the profile as modified now."""
        self.updated_at = datetime.utcnow()
