"""Caregiver search filter compilation.

Turns raw optional query parameters into a ``CaregiverQuery``: a conjunction
of named predicates plus paging and a resolved sort order. Absent parameters
add no predicate; the caregiver role predicate is always present.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from core.exceptions import InvalidSearchParameterError, InvalidSortError
from domain.entities.profile import Profile, UserRole

DEFAULT_PAGE = 0
DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100
RELEVANCE = "relevance"


@dataclass(frozen=True)
class SearchParams:
    """Raw search input, as received from the caller."""

    province: str | None = None
    languages: str | None = None
    services: str | None = None
    specializations: str | None = None
    min_experience: int | None = None
    available: bool | None = None
    age_min: int | None = None
    age_max: int | None = None
    page: int = DEFAULT_PAGE
    size: int = DEFAULT_PAGE_SIZE
    sort: str = RELEVANCE


@dataclass(frozen=True, slots=True)
class Predicate:
    """A named boolean condition over a profile."""

    name: str
    test: Callable[[Profile], bool]

    def __call__(self, profile: Profile) -> bool:
        return self.test(profile)


@dataclass(frozen=True, slots=True)
class SortField:
    """A sortable profile attribute."""

    name: str
    extract: Callable[[Profile], Any]


@dataclass(frozen=True, slots=True)
class SortOrder:
    """Resolved ordering. ``field`` is None for relevance."""

    field: SortField | None = None
    descending: bool = False

    @property
    def is_relevance(self) -> bool:
        return self.field is None


@dataclass(frozen=True)
class CaregiverQuery:
    """Compiled, validated search."""

    predicates: tuple[Predicate, ...]
    page: int
    size: int
    order: SortOrder

    @property
    def offset(self) -> int:
        return self.page * self.size

    def matches(self, profile: Profile) -> bool:
        return all(predicate(profile) for predicate in self.predicates)


def _folded(value: str | None) -> str | None:
    return value.casefold() if value else None


_SORT_FIELDS: dict[str, SortField] = {
    "age": SortField("age", lambda p: p.age),
    "yearsofexperience": SortField("yearsOfExperience", lambda p: p.years_of_experience),
    "completenesspercent": SortField(
        "completenessPercent", lambda p: p.profile_completion_percentage
    ),
    "rating": SortField("rating", lambda p: p.total_rating),
    "reviewcount": SortField("reviewCount", lambda p: p.total_reviews),
    "hourlyrate": SortField("hourlyRate", lambda p: p.hourly_rate),
    "displayname": SortField("displayName", lambda p: _folded(p.display_name)),
    "createdat": SortField("createdAt", lambda p: p.created_at),
    "lastactiveat": SortField("lastActiveAt", lambda p: p.last_active_at),
}

_SORT_ALIASES: dict[str, str] = {
    "experience": "yearsofexperience",
    "completeness": "completenesspercent",
}

# Named presets carrying their own direction
_SORT_PRESETS: dict[str, SortOrder] = {
    "newest": SortOrder(field=_SORT_FIELDS["createdat"], descending=True),
}


def parse_sort(sort: str | None) -> SortOrder:
    """Parse ``relevance``, a preset, or ``<field>[,asc|desc]``.

    Raises:
        InvalidSortError: unknown field, preset or direction.
    """
    raw = (sort or "").strip()
    if not raw or raw.lower() == RELEVANCE:
        return SortOrder()
    if raw.lower() in _SORT_PRESETS:
        return _SORT_PRESETS[raw.lower()]

    name, _, direction = raw.partition(",")
    key = name.strip().lower()
    key = _SORT_ALIASES.get(key, key)
    field = _SORT_FIELDS.get(key)
    if field is None:
        raise InvalidSortError(raw)

    direction = direction.strip().lower() or "asc"
    if direction not in ("asc", "desc"):
        raise InvalidSortError(raw)
    return SortOrder(field=field, descending=direction == "desc")


def _contains(attribute: str, needle: str) -> Callable[[Profile], bool]:
    folded = needle.casefold()

    def test(profile: Profile) -> bool:
        haystack = getattr(profile, attribute)
        return bool(haystack) and folded in haystack.casefold()

    return test


def _blank_to_none(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    return value.strip()


def compile_search(params: SearchParams, max_page_size: int = MAX_PAGE_SIZE) -> CaregiverQuery:
    """Validate ``params`` and build the predicate set.

    An inverted age range is accepted as given and simply matches nothing.
    A page size above ``max_page_size`` is clamped to it.

    Raises:
        InvalidSearchParameterError: negative page, non-positive page size,
            negative minimum experience.
        InvalidSortError: unsupported sort.
    """
    if params.page < 0:
        raise InvalidSearchParameterError("page", "page must be >= 0")
    if params.size <= 0:
        raise InvalidSearchParameterError("size", "size must be > 0")
    if params.min_experience is not None and params.min_experience < 0:
        raise InvalidSearchParameterError("minExperience", "minExperience must be >= 0")

    order = parse_sort(params.sort)

    predicates: list[Predicate] = [
        Predicate("role", lambda p: p.role == UserRole.CAREGIVER),
    ]

    if params.available is None:
        predicates.append(Predicate("active", lambda p: p.is_active))
    else:
        wanted = params.available
        predicates.append(Predicate("available", lambda p: p.is_active == wanted))

    province = _blank_to_none(params.province)
    if province is not None:
        predicates.append(Predicate("province", lambda p: p.province == province))

    for name, attribute, value in (
        ("languages", "languages", params.languages),
        ("services", "services_offered", params.services),
        ("specializations", "specializations", params.specializations),
    ):
        needle = _blank_to_none(value)
        if needle is not None:
            predicates.append(Predicate(name, _contains(attribute, needle)))

    if params.min_experience is not None:
        minimum = params.min_experience
        predicates.append(
            Predicate(
                "minExperience",
                lambda p: p.years_of_experience is not None and p.years_of_experience >= minimum,
            )
        )

    if params.age_min is not None:
        age_min = params.age_min
        predicates.append(Predicate("ageMin", lambda p: p.age is not None and p.age >= age_min))
    if params.age_max is not None:
        age_max = params.age_max
        predicates.append(Predicate("ageMax", lambda p: p.age is not None and p.age <= age_max))

    return CaregiverQuery(
        predicates=tuple(predicates),
        page=params.page,
        size=min(params.size, max_page_size),
        order=order,
    )

