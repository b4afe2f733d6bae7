"""SQLAlchemy ORM models."""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    BigInteger,
    Boolean,
    CheckConstraint,
    DateTime,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class ProfileModel(Base):
    """User profile model."""

    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint(
            "user_type IN ('CAREGIVER', 'CLIENT', 'ADMIN')",
            name="ck_users_user_type",
        ),
        CheckConstraint(
            "verification_status IN ('UNVERIFIED', 'PENDING', 'VERIFIED')",
            name="ck_users_verification_status",
        ),
        CheckConstraint(
            "profile_completion_percentage BETWEEN 0 AND 100",
            name="ck_users_completion_range",
        ),
    )

    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True,
        autoincrement=True,
    )
    external_auth_id: Mapped[str] = mapped_column(String(128), nullable=False, unique=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    user_type: Mapped[str] = mapped_column(String(20), nullable=False, index=True)

    # Basic information
    full_name: Mapped[str | None] = mapped_column(String(255))
    display_name: Mapped[str | None] = mapped_column(String(255))
    age: Mapped[int | None] = mapped_column(Integer)
    profile_photo_url: Mapped[str | None] = mapped_column(String(500))

    # Contact
    primary_phone: Mapped[str | None] = mapped_column(String(20))
    wechat_id: Mapped[str | None] = mapped_column(String(100))
    wechat_qr_code_url: Mapped[str | None] = mapped_column(String(500))
    xiaohongshu_handle: Mapped[str | None] = mapped_column(String(100))

    # Location & service
    city: Mapped[str | None] = mapped_column(String(100))
    province: Mapped[str | None] = mapped_column(String(100), index=True)
    country: Mapped[str | None] = mapped_column(String(100), default="China")
    service_areas: Mapped[str | None] = mapped_column(Text)
    current_location: Mapped[str | None] = mapped_column(String(255))
    willing_to_relocate: Mapped[bool | None] = mapped_column(Boolean, default=False)

    # Professional
    years_of_experience: Mapped[int | None] = mapped_column(Integer)
    languages: Mapped[str | None] = mapped_column(Text)
    specializations: Mapped[str | None] = mapped_column(Text)
    certifications: Mapped[str | None] = mapped_column(Text)
    services_offered: Mapped[str | None] = mapped_column(Text)
    hourly_rate: Mapped[Decimal | None] = mapped_column(Numeric(10, 2))

    # Rich content
    about_me: Mapped[str | None] = mapped_column(Text)
    professional_experience: Mapped[str | None] = mapped_column(Text)
    education_background: Mapped[str | None] = mapped_column(Text)
    special_skills: Mapped[str | None] = mapped_column(Text)

    # Media
    gallery_photos: Mapped[str | None] = mapped_column(Text)
    certificates_photos: Mapped[str | None] = mapped_column(Text)

    # Social proof
    total_rating: Mapped[Decimal] = mapped_column(
        Numeric(2, 1), nullable=False, default=Decimal("0.0")
    )
    total_reviews: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # Platform management
    profile_completion_percentage: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0
    )
    is_featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    verification_status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="UNVERIFIED"
    )
    profile_views: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    last_active_at: Mapped[datetime | None] = mapped_column(DateTime)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )
