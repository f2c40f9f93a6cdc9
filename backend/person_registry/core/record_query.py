"""Record Query — pure normalisation of listing parameters into a RecordQuery.

Invariants:
    - build_record_query is PURE: validates and normalises, never touches the store
    - Sort keys resolve ONLY through the SortField enumeration (unknown → SortConfigurationError)
    - page and page_size are >= 1 after building; page_size never exceeds max_page_size
    - Blank inputs collapse to "stage disabled" (None / empty tuple / ALL)

Design Decisions:
    - Enumerated sort keys over reflection into arbitrary attributes
    - sort_order: anything other than "desc" (case-insensitive) sorts ascending,
      matching the lenient behaviour callers already depend on
    - page_size clamped rather than rejected: oversized requests still succeed
"""

import math
from dataclasses import dataclass
from datetime import date

from person_registry.core.domain_types import (
    DeceasedFilter, GenderFilter, SortField, SortOrder,
)
from person_registry.core.errors import QueryParameterError, SortConfigurationError


DEFAULT_PAGE: int = 1
DEFAULT_PAGE_SIZE: int = 10
DEFAULT_MAX_PAGE_SIZE: int = 100


@dataclass(frozen=True)
class RecordQuery:
    """Fully-normalised listing request. Each filter is a no-op at its default."""
    search: str | None = None
    gender: GenderFilter = GenderFilter.ALL
    deceased: DeceasedFilter = DeceasedFilter.ALL
    start_date: date | None = None
    end_date: date | None = None
    countries: tuple[str, ...] = ()
    sort_field: SortField = SortField.ID
    sort_order: SortOrder = SortOrder.ASC
    page: int = DEFAULT_PAGE
    page_size: int = DEFAULT_PAGE_SIZE

    @property
    def offset(self) -> int:
        return page_offset(self.page, self.page_size)


def resolve_sort_field(sort_by: str | None) -> SortField:
    """Map a caller-supplied sort key onto SortField.

    The first letter is upper-cased and the rest kept as-is, so "id" and
    "Id" both resolve while "ID" does not.
    """
    if sort_by is None or not sort_by.strip():
        return SortField.ID
    key = sort_by.strip()
    normalised = key[0].upper() + key[1:]
    try:
        return SortField(normalised)
    except ValueError:
        raise SortConfigurationError(
            sort_by, [f.value for f in SortField],
        ) from None


def resolve_sort_order(sort_order: str | None) -> SortOrder:
    if sort_order and sort_order.strip().lower() == SortOrder.DESC.value:
        return SortOrder.DESC
    return SortOrder.ASC


def build_record_query(
    *,
    search: str | None = None,
    gender: GenderFilter = GenderFilter.ALL,
    deceased: DeceasedFilter = DeceasedFilter.ALL,
    start_date: date | None = None,
    end_date: date | None = None,
    countries: list[str] | tuple[str, ...] | None = None,
    sort_by: str | None = SortField.ID.value,
    sort_order: str | None = SortOrder.ASC.value,
    page: int = DEFAULT_PAGE,
    page_size: int = DEFAULT_PAGE_SIZE,
    max_page_size: int = DEFAULT_MAX_PAGE_SIZE,
) -> RecordQuery:
    """Validate and normalise raw listing parameters."""
    if page < 1:
        raise QueryParameterError("page", page)
    if page_size < 1:
        raise QueryParameterError("pageSize", page_size)

    return RecordQuery(
        search=search if search else None,
        gender=GenderFilter(gender),
        deceased=DeceasedFilter(deceased),
        start_date=start_date,
        end_date=end_date,
        countries=_normalise_countries(countries),
        sort_field=resolve_sort_field(sort_by),
        sort_order=resolve_sort_order(sort_order),
        page=page,
        page_size=min(page_size, max_page_size),
    )


def _normalise_countries(countries) -> tuple[str, ...]:
    """Drop blank entries and duplicates, keep first-seen order."""
    if not countries:
        return ()
    seen: dict[str, None] = {}
    for country in countries:
        if country and country.strip():
            seen.setdefault(country, None)
    return tuple(seen)


# ─── Pagination math ─────────────────────────────────────────────

def page_offset(page: int, page_size: int) -> int:
    """Rows to skip before the requested 1-based page."""
    return (page - 1) * page_size


def total_pages(total_count: int, page_size: int) -> int:
    """ceil(total_count / page_size); zero matches means zero pages."""
    return math.ceil(total_count / page_size)
