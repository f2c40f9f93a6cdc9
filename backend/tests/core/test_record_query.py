"""Record Query — tests for pure listing-parameter normalisation and page math.

Tests cover:
    - defaults produce a query with every filter stage disabled
    - sort key resolution: first letter upper-cased, unknown keys rejected
    - sort order: only "desc" (any case) sorts descending
    - page/pageSize validation and page_size clamping
    - blank search and blank country entries disable their stages
    - page_offset / total_pages arithmetic
"""

from datetime import date

import pytest

from person_registry.core.domain_types import (
    DeceasedFilter, GenderFilter, SortField, SortOrder,
)
from person_registry.core.errors import QueryParameterError, SortConfigurationError
from person_registry.core.record_query import (
    RecordQuery,
    build_record_query,
    page_offset,
    resolve_sort_field,
    resolve_sort_order,
    total_pages,
)


# ─── build_record_query ──────────────────────────────────────────

def test_defaults_disable_every_filter():
    query = build_record_query()
    assert query == RecordQuery()
    assert query.search is None
    assert query.gender is GenderFilter.ALL
    assert query.deceased is DeceasedFilter.ALL
    assert query.countries == ()
    assert query.sort_field is SortField.ID
    assert query.sort_order is SortOrder.ASC
    assert (query.page, query.page_size) == (1, 10)


def test_empty_search_disables_search_stage():
    assert build_record_query(search="").search is None


def test_whitespace_search_is_kept_as_a_term():
    assert build_record_query(search=" ").search == " "


def test_blank_countries_are_dropped_and_duplicates_collapsed():
    query = build_record_query(countries=["US", "", "  ", "FR", "US"])
    assert query.countries == ("US", "FR")


def test_dates_pass_through():
    query = build_record_query(
        start_date=date(2020, 1, 1), end_date=date(2020, 12, 31),
    )
    assert query.start_date == date(2020, 1, 1)
    assert query.end_date == date(2020, 12, 31)


def test_filters_accept_raw_enum_values():
    query = build_record_query(gender="Female", deceased="ExcludeDeceased")
    assert query.gender is GenderFilter.FEMALE
    assert query.deceased is DeceasedFilter.EXCLUDE_DECEASED


@pytest.mark.parametrize("page", [0, -1])
def test_page_below_one_rejected(page):
    with pytest.raises(QueryParameterError) as exc:
        build_record_query(page=page)
    assert exc.value.parameter == "page"
    assert exc.value.http_status == 400


def test_page_size_below_one_rejected():
    with pytest.raises(QueryParameterError) as exc:
        build_record_query(page_size=0)
    assert exc.value.parameter == "pageSize"


def test_page_size_clamped_to_maximum():
    assert build_record_query(page_size=5000, max_page_size=100).page_size == 100


def test_page_size_below_maximum_untouched():
    assert build_record_query(page_size=25, max_page_size=100).page_size == 25


def test_offset_property_uses_page_math():
    assert build_record_query(page=3, page_size=10).offset == 20


# ─── resolve_sort_field ──────────────────────────────────────────

@pytest.mark.parametrize("sort_by,expected", [
    ("Id", SortField.ID),
    ("id", SortField.ID),
    ("gender", SortField.GENDER),
    ("deceased", SortField.DECEASED),
    ("Deceased", SortField.DECEASED),
])
def test_sort_field_first_letter_normalised(sort_by, expected):
    assert resolve_sort_field(sort_by) is expected


@pytest.mark.parametrize("sort_by", [None, "", "   "])
def test_blank_sort_field_defaults_to_id(sort_by):
    assert resolve_sort_field(sort_by) is SortField.ID


@pytest.mark.parametrize("sort_by", ["ID", "name", "Addresses", "FirstName"])
def test_unknown_sort_field_raises(sort_by):
    with pytest.raises(SortConfigurationError) as exc:
        resolve_sort_field(sort_by)
    assert exc.value.code == "UNKNOWN_SORT_FIELD"
    assert sort_by in exc.value.message


def test_build_record_query_rejects_unknown_sort_field():
    with pytest.raises(SortConfigurationError):
        build_record_query(sort_by="shoeSize")


# ─── resolve_sort_order ──────────────────────────────────────────

@pytest.mark.parametrize("raw", ["desc", "DESC", "Desc"])
def test_desc_any_case_sorts_descending(raw):
    assert resolve_sort_order(raw) is SortOrder.DESC


@pytest.mark.parametrize("raw", ["asc", "", None, "sideways"])
def test_anything_else_sorts_ascending(raw):
    assert resolve_sort_order(raw) is SortOrder.ASC


# ─── pagination math ─────────────────────────────────────────────

def test_page_offset():
    assert page_offset(1, 10) == 0
    assert page_offset(3, 10) == 20


def test_total_pages_rounds_up():
    assert total_pages(25, 10) == 3
    assert total_pages(30, 10) == 3
    assert total_pages(31, 10) == 4


def test_total_pages_zero_when_nothing_matches():
    assert total_pages(0, 10) == 0
