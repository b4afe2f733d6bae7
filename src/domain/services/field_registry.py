"""Registry of profile fields settable through the single-field update path.

The single-field endpoint receives a field name and an untyped JSON value.
Only the fields listed in ``_REGISTERED_FIELDS`` can be reached this way;
identity, role, rating, verification and platform flags are absent on purpose.
"""

import re
from dataclasses import dataclass
from decimal import Decimal
from enum import StrEnum
from typing import Any

from core.exceptions import InvalidFieldValueError, TypeMismatchError, UnknownFieldError
from domain.entities.profile import (
    ABOUT_ME_MAX_LENGTH,
    HANDLE_MAX_LENGTH,
    LOCATION_MAX_LENGTH,
    MAX_AGE,
    MAX_YEARS_OF_EXPERIENCE,
    MIN_AGE,
    NAME_MAX_LENGTH,
    PHONE_PATTERN,
    REGION_MAX_LENGTH,
    URL_MAX_LENGTH,
    Profile,
)


class FieldKind(StrEnum):
    """Declared value kind of a registry field."""

    STRING = "string"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    DECIMAL = "decimal"

    def accepts(self, value: Any) -> bool:
        """Check the dynamic kind of ``value`` against this kind."""
        # bool is an int subclass; never let True/False pass as a number
        if self is FieldKind.BOOLEAN:
            return isinstance(value, bool)
        if isinstance(value, bool):
            return False
        if self is FieldKind.STRING:
            return isinstance(value, str)
        if self is FieldKind.INTEGER:
            return isinstance(value, int)
        return isinstance(value, (int, float, Decimal))

    def coerce(self, value: Any) -> Any:
        if self is FieldKind.DECIMAL and not isinstance(value, Decimal):
            return Decimal(str(value))
        return value


@dataclass(frozen=True, slots=True)
class RegistryField:
    """One externally settable profile attribute.

    Numeric bounds are inclusive. ``max_length`` and ``pattern`` apply to
    string values only.
    """

    name: str
    attribute: str
    kind: FieldKind
    minimum: int | None = None
    maximum: int | None = None
    max_length: int | None = None
    pattern: str | None = None

    def set(self, profile: Profile, value: Any) -> None:
        """Validate ``value`` and assign it; ``None`` clears the field."""
        if value is not None:
            if not self.kind.accepts(value):
                raise TypeMismatchError(self.name, self.kind.value, _kind_name(value))
            self._check_bounds(value)
        setattr(profile, self.attribute, None if value is None else self.kind.coerce(value))

    def _check_bounds(self, value: Any) -> None:
        if self.minimum is not None and value < self.minimum:
            raise InvalidFieldValueError(self.name, f"{self.name} must be >= {self.minimum}")
        if self.maximum is not None and value > self.maximum:
            raise InvalidFieldValueError(self.name, f"{self.name} must be <= {self.maximum}")
        if self.max_length is not None and len(value) > self.max_length:
            raise InvalidFieldValueError(
                self.name, f"{self.name} must be at most {self.max_length} characters"
            )
        if self.pattern is not None and re.fullmatch(self.pattern, value) is None:
            raise InvalidFieldValueError(self.name, f"{self.name} has an invalid format")


_REGISTERED_FIELDS: tuple[RegistryField, ...] = (
    # Basic information
    RegistryField("fullName", "full_name", FieldKind.STRING, max_length=NAME_MAX_LENGTH),
    RegistryField("displayName", "display_name", FieldKind.STRING, max_length=NAME_MAX_LENGTH),
    RegistryField("age", "age", FieldKind.INTEGER, minimum=MIN_AGE, maximum=MAX_AGE),
    RegistryField(
        "profilePhotoUrl", "profile_photo_url", FieldKind.STRING, max_length=URL_MAX_LENGTH
    ),
    # Contact
    RegistryField("primaryPhone", "primary_phone", FieldKind.STRING, pattern=PHONE_PATTERN),
    RegistryField("wechatId", "wechat_id", FieldKind.STRING, max_length=HANDLE_MAX_LENGTH),
    RegistryField(
        "wechatQrCodeUrl", "wechat_qr_code_url", FieldKind.STRING, max_length=URL_MAX_LENGTH
    ),
    RegistryField(
        "xiaohongshuHandle", "xiaohongshu_handle", FieldKind.STRING, max_length=HANDLE_MAX_LENGTH
    ),
    # Location & service
    RegistryField("city", "city", FieldKind.STRING, max_length=REGION_MAX_LENGTH),
    RegistryField("province", "province", FieldKind.STRING, max_length=REGION_MAX_LENGTH),
    RegistryField("country", "country", FieldKind.STRING, max_length=REGION_MAX_LENGTH),
    RegistryField("serviceAreas", "service_areas", FieldKind.STRING),
    RegistryField(
        "currentLocation", "current_location", FieldKind.STRING, max_length=LOCATION_MAX_LENGTH
    ),
    RegistryField("willingToRelocate", "willing_to_relocate", FieldKind.BOOLEAN),
    # Professional
    RegistryField(
        "yearsOfExperience",
        "years_of_experience",
        FieldKind.INTEGER,
        minimum=0,
        maximum=MAX_YEARS_OF_EXPERIENCE,
    ),
    RegistryField("languages", "languages", FieldKind.STRING),
    RegistryField("specializations", "specializations", FieldKind.STRING),
    RegistryField("certifications", "certifications", FieldKind.STRING),
    RegistryField("servicesOffered", "services_offered", FieldKind.STRING),
    # Rich content
    RegistryField("aboutMe", "about_me", FieldKind.STRING, max_length=ABOUT_ME_MAX_LENGTH),
    RegistryField("professionalExperience", "professional_experience", FieldKind.STRING),
    RegistryField("educationBackground", "education_background", FieldKind.STRING),
    RegistryField("specialSkills", "special_skills", FieldKind.STRING),
    # Media
    RegistryField("galleryPhotos", "gallery_photos", FieldKind.STRING),
    RegistryField("certificatesPhotos", "certificates_photos", FieldKind.STRING),
)

FIELD_REGISTRY: dict[str, RegistryField] = {
    entry.name.lower(): entry for entry in _REGISTERED_FIELDS
}


def _kind_name(value: Any) -> str:
    if isinstance(value, bool):
        return FieldKind.BOOLEAN.value
    if isinstance(value, int):
        return FieldKind.INTEGER.value
    if isinstance(value, (float, Decimal)):
        return FieldKind.DECIMAL.value
    if isinstance(value, str):
        return FieldKind.STRING.value
    return type(value).__name__


def resolve(field_name: str) -> RegistryField | None:
    """Look up a registry field by case-insensitive name."""
    return FIELD_REGISTRY.get(field_name.strip().lower())


def apply(profile: Profile, field_name: str, raw_value: Any) -> Profile:
    """Set one registered field on ``profile`` and return it.

    Raises:
        UnknownFieldError: ``field_name`` is not registered.
        TypeMismatchError: ``raw_value`` has the wrong kind for the field.
        InvalidFieldValueError: ``raw_value`` is outside the field's bounds.
    """
    entry = resolve(field_name)
    if entry is None:
        raise UnknownFieldError(field_name)
    entry.set(profile, raw_value)
    return profile
