"""Pydantic schemas for caregiver search."""

from decimal import Decimal

from pydantic import BaseModel

from api.v1.schemas.profile import CamelModel
from domain.entities.profile import Profile


class CaregiverSummary(CamelModel):
    """Public summary of a caregiver in search results."""

    id: int
    display_name: str | None = None
    photo_url: str | None = None
    province: str | None = None
    languages: str | None = None
    services_offered: str | None = None
    specializations: str | None = None
    years_of_experience: int | None = None
    age: int | None = None
    completeness_percent: int
    aggregate_rating: Decimal
    review_count: int

    @classmethod
    def from_profile(cls, profile: Profile) -> "CaregiverSummary":
        return cls(
            id=profile.id,
            display_name=profile.display_name,
            photo_url=profile.profile_photo_url,
            province=profile.province,
            languages=profile.languages,
            services_offered=profile.services_offered,
            specializations=profile.specializations,
            years_of_experience=profile.years_of_experience,
            age=profile.age,
            completeness_percent=profile.profile_completion_percentage,
            aggregate_rating=profile.total_rating,
            review_count=profile.total_reviews,
        )


class SearchResults(CamelModel):
    """One page of caregiver search results."""

    items: list[CaregiverSummary]
    total: int
    page: int
    size: int


class SearchResultsResponse(BaseModel):
    """Envelope for caregiver search."""

    data: SearchResults
