"""Unit tests for caregiver search filter compilation."""

import pytest

from core.exceptions import ErrorCode, InvalidSearchParameterError, InvalidSortError
from domain.entities.profile import UserRole
from domain.services.search_filters import SearchParams, compile_search, parse_sort
from tests.unit.conftest import make_complete_caregiver, make_profile


def _names(params: SearchParams) -> list[str]:
    return [p.name for p in compile_search(params).predicates]


class TestParseSort:
    @pytest.mark.parametrize("raw", [None, "", "relevance", "RELEVANCE"])
    def test_relevance(self, raw: str | None):
        assert parse_sort(raw).is_relevance

    def test_field_defaults_to_ascending(self):
        order = parse_sort("age")
        assert order.field is not None
        assert order.field.name == "age"
        assert not order.descending

    def test_field_with_direction(self):
        order = parse_sort("rating,desc")
        assert order.field is not None
        assert order.field.name == "rating"
        assert order.descending

    def test_field_name_is_case_insensitive(self):
        order = parse_sort("YearsOfExperience,ASC")
        assert order.field is not None
        assert order.field.name == "yearsOfExperience"

    def test_alias(self):
        order = parse_sort("experience,desc")
        assert order.field is not None
        assert order.field.name == "yearsOfExperience"

    def test_newest_preset(self):
        order = parse_sort("newest")
        assert order.field is not None
        assert order.field.name == "createdAt"
        assert order.descending

    @pytest.mark.parametrize("raw", ["email", "age,sideways", "popularity"])
    def test_unsupported_sort_raises(self, raw: str):
        with pytest.raises(InvalidSortError) as exc_info:
            parse_sort(raw)

        assert exc_info.value.error_code == ErrorCode.INVALID_SORT


class TestCompileSearchValidation:
    def test_negative_page(self):
        with pytest.raises(InvalidSearchParameterError) as exc_info:
            compile_search(SearchParams(page=-1))

        assert exc_info.value.details == {"parameter": "page"}

    @pytest.mark.parametrize("size", [0, -5])
    def test_non_positive_size(self, size: int):
        with pytest.raises(InvalidSearchParameterError):
            compile_search(SearchParams(size=size))

    def test_size_above_cap_is_clamped(self):
        query = compile_search(SearchParams(size=51), max_page_size=50)
        assert query.size == 50

    def test_size_at_cap_is_kept(self):
        assert compile_search(SearchParams(size=50), max_page_size=50).size == 50

    def test_negative_min_experience(self):
        with pytest.raises(InvalidSearchParameterError):
            compile_search(SearchParams(min_experience=-1))

    def test_inverted_age_range_is_accepted(self):
        query = compile_search(SearchParams(age_min=40, age_max=30))
        assert not query.matches(make_profile(age=35))


class TestCompileSearchPredicates:
    def test_no_filters_keeps_role_and_active(self):
        assert _names(SearchParams()) == ["role", "active"]

    def test_blank_text_filters_are_ignored(self):
        assert _names(SearchParams(province="  ", languages="")) == ["role", "active"]

    def test_each_filter_adds_a_predicate(self):
        params = SearchParams(
            province="Sichuan",
            languages="english",
            services="home",
            specializations="dementia",
            min_experience=3,
            available=True,
            age_min=25,
            age_max=45,
        )
        assert _names(params) == [
            "role",
            "available",
            "province",
            "languages",
            "services",
            "specializations",
            "minExperience",
            "ageMin",
            "ageMax",
        ]

    def test_offset(self):
        assert compile_search(SearchParams(page=3, size=10)).offset == 30


class TestPredicateSemantics:
    def test_non_caregivers_never_match(self):
        query = compile_search(SearchParams())
        assert not query.matches(make_profile(role=UserRole.CLIENT))

    def test_inactive_excluded_by_default(self):
        query = compile_search(SearchParams())
        assert not query.matches(make_profile(is_active=False))

    def test_available_false_selects_inactive(self):
        query = compile_search(SearchParams(available=False))
        assert query.matches(make_profile(is_active=False))
        assert not query.matches(make_profile(is_active=True))

    def test_province_is_exact(self):
        query = compile_search(SearchParams(province="Sichuan"))
        assert query.matches(make_profile(province="Sichuan"))
        assert not query.matches(make_profile(province="sichuan"))

    def test_text_filters_match_case_insensitive_substring(self):
        caregiver = make_complete_caregiver()
        query = compile_search(
            SearchParams(languages="ENGLISH", services="meal", specializations="Dementia")
        )
        assert query.matches(caregiver)

    def test_text_filter_does_not_match_missing_field(self):
        query = compile_search(SearchParams(languages="english"))
        assert not query.matches(make_profile(languages=None))

    def test_min_experience_is_inclusive(self):
        query = compile_search(SearchParams(min_experience=5))
        assert query.matches(make_profile(years_of_experience=5))
        assert not query.matches(make_profile(years_of_experience=4))
        assert not query.matches(make_profile(years_of_experience=None))

    def test_age_bounds_are_inclusive(self):
        query = compile_search(SearchParams(age_min=30, age_max=40))
        assert query.matches(make_profile(age=30))
        assert query.matches(make_profile(age=40))
        assert not query.matches(make_profile(age=41))
        assert not query.matches(make_profile(age=None))
