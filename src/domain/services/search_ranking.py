"""Ranking and pagination of caregiver search results."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from domain.entities.profile import Profile
from domain.services.search_filters import CaregiverQuery, SortOrder


@dataclass
class SearchPage:
    """One page of search results."""

    items: list[Profile] = field(default_factory=list)
    total: int = 0
    page: int = 0
    size: int = 0


def _id_key(profile: Profile) -> int:
    return profile.id if profile.id is not None else 0


def relevance_key(profile: Profile) -> tuple[int, int, int]:
    """Featured active profiles first, then completeness desc, then id asc.

    There is no scoring formula behind "relevance"; this chain keeps the
    ordering deterministic for identical inputs.
    """
    promoted = 0 if (profile.is_active and profile.is_featured) else 1
    return (promoted, -profile.profile_completion_percentage, _id_key(profile))


def order_profiles(profiles: Iterable[Profile], order: SortOrder) -> list[Profile]:
    """Sort ``profiles`` by ``order``. Ties always fall back to id ascending.

    Profiles without a value for the sort field go last, by id.
    """
    field = order.field
    if field is None:
        return sorted(profiles, key=relevance_key)
    extract = field.extract

    by_id = sorted(profiles, key=_id_key)
    with_value: list[tuple[Any, Profile]] = []
    missing: list[Profile] = []
    for profile in by_id:
        value = extract(profile)
        if value is None:
            missing.append(profile)
        else:
            with_value.append((value, profile))

    # list.sort is stable with reverse=True, so equal values keep id order
    with_value.sort(key=lambda pair: pair[0], reverse=order.descending)
    return [profile for _, profile in with_value] + missing


def rank_and_paginate(query: CaregiverQuery, candidates: Iterable[Profile]) -> SearchPage:
    """Filter ``candidates`` by the query, order them and cut one page."""
    matched = [profile for profile in candidates if query.matches(profile)]
    ordered = order_profiles(matched, query.order)
    start = query.offset
    return SearchPage(
        items=ordered[start : start + query.size],
        total=len(matched),
        page=query.page,
        size=query.size,
    )
