"""Profile completeness scoring.

The score is the share of expected fields that are populated, as an integer
percentage. Every profile is checked against the identity, basic, contact and
location groups (11 items); caregivers are additionally checked against the
professional group (6 items, 17 total). The item counts are fixed so scores
stay comparable across the population.
"""

from collections.abc import Callable
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from domain.entities.profile import Profile

Check = Callable[[Profile], bool]


def is_present(value: Any) -> bool:
    """A value counts when it is not None and, for strings, not blank."""
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return True


def _field(attribute: str) -> Check:
    return lambda profile: is_present(getattr(profile, attribute))


IDENTITY_CHECKS: tuple[Check, ...] = (
    _field("email"),
    _field("role"),
    _field("external_auth_id"),
)

BASIC_CHECKS: tuple[Check, ...] = (
    _field("full_name"),
    _field("display_name"),
    _field("age"),
    _field("profile_photo_url"),
)

CONTACT_CHECKS: tuple[Check, ...] = (
    _field("primary_phone"),
    lambda p: is_present(p.wechat_id) or is_present(p.xiaohongshu_handle),
)

LOCATION_CHECKS: tuple[Check, ...] = (
    _field("city"),
    _field("province"),
)

CAREGIVER_CHECKS: tuple[Check, ...] = (
    _field("years_of_experience"),
    _field("languages"),
    _field("specializations"),
    _field("about_me"),
    _field("services_offered"),
    _field("hourly_rate"),
)

BASE_CHECKS = IDENTITY_CHECKS + BASIC_CHECKS + CONTACT_CHECKS + LOCATION_CHECKS


def checklist_for(profile: Profile) -> tuple[Check, ...]:
    """Return the checklist that applies to the profile's role."""
    if profile.is_caregiver:
        return BASE_CHECKS + CAREGIVER_CHECKS
    return BASE_CHECKS


def calculate_completeness(profile: Profile) -> int:
    """Compute the 0-100 completeness score without mutating the profile."""
    checks = checklist_for(profile)
    completed = sum(1 for check in checks if check(profile))
    ratio = Decimal(completed * 100) / Decimal(len(checks))
    return int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def refresh_completeness(profile: Profile) -> Profile:
    """Recompute the score from current values and store it on the profile."""
    profile.profile_completion_percentage = calculate_completeness(profile)
    return profile
