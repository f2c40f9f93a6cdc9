"""Query Filters — compose a SQLAlchemy Select over Person from a RecordQuery.

Invariants:
    - Stages run in fixed order: search → gender → deceased → date range →
      countries → sort → pagination; each is a no-op at its default
    - Stages combine by AND; inside one child-collection stage ANY matching
      child suffices (EXISTS via relationship.any)
    - A child whose compared column is NULL never contributes a match
    - Start and end date bounds are independent EXISTS clauses — they may be
      satisfied by different date entries of the same record
    - Sorting only through SORT_COLUMNS; ties broken by Person.id ascending

Design Decisions:
    - Date bounds compare against day boundaries (>= start 00:00, < end+1 00:00)
      instead of DATE() casts: same semantics on PostgreSQL and SQLite
    - An end bound of date.max has no following day and keeps only the
      NOT NULL check
    - Search uses icontains(autoescape=True): the term is a literal substring,
      "%" and "_" match themselves
    - Count runs over the filtered statement as a subquery, before sorting and paging
"""

from datetime import date, datetime, time, timedelta

from sqlalchemy import Select, and_, func, or_, select

from person_registry.core.domain_types import (
    DeceasedFilter, GenderFilter, SortField, SortOrder,
)
from person_registry.core.record_query import RecordQuery
from person_registry.models import Address, DateEntry, Person, PersonName


SORT_COLUMNS = {
    SortField.ID: Person.id,
    SortField.GENDER: Person.gender,
    SortField.DECEASED: Person.deceased,
}


def build_statement(query: RecordQuery) -> Select:
    """Filtered, sorted, paginated statement for one page of records."""
    stmt = apply_filters(select(Person), query)
    stmt = apply_sorting(stmt, query)
    return apply_pagination(stmt, query)


def count_statement(query: RecordQuery) -> Select:
    """COUNT(*) over the filtered (unpaginated) set."""
    filtered = apply_filters(select(Person.id), query)
    return select(func.count()).select_from(filtered.subquery())


def apply_filters(stmt: Select, query: RecordQuery) -> Select:
    for stage in (
        _filter_search, _filter_gender, _filter_deceased,
        _filter_date_range, _filter_countries,
    ):
        stmt = stage(stmt, query)
    return stmt


def apply_sorting(stmt: Select, query: RecordQuery) -> Select:
    column = SORT_COLUMNS[query.sort_field]
    ordered = column.desc() if query.sort_order is SortOrder.DESC else column.asc()
    if query.sort_field is SortField.ID:
        return stmt.order_by(ordered)
    return stmt.order_by(ordered, Person.id.asc())


def apply_pagination(stmt: Select, query: RecordQuery) -> Select:
    return stmt.offset(query.offset).limit(query.page_size)


# ─── Filter stages ───────────────────────────────────────────────

def _filter_search(stmt: Select, query: RecordQuery) -> Select:
    if query.search is None:
        return stmt
    term = query.search
    return stmt.where(or_(
        Person.addresses.any(
            Address.address_line.icontains(term, autoescape=True),
        ),
        Person.names.any(or_(
            PersonName.first_name.icontains(term, autoescape=True),
            PersonName.last_name.icontains(term, autoescape=True),
        )),
    ))


def _filter_gender(stmt: Select, query: RecordQuery) -> Select:
    if query.gender is GenderFilter.ALL:
        return stmt
    return stmt.where(Person.gender == query.gender.value)


def _filter_deceased(stmt: Select, query: RecordQuery) -> Select:
    if query.deceased is DeceasedFilter.INCLUDE_DECEASED:
        return stmt.where(Person.deceased.is_(True))
    if query.deceased is DeceasedFilter.EXCLUDE_DECEASED:
        return stmt.where(Person.deceased.is_(False))
    return stmt


def _filter_date_range(stmt: Select, query: RecordQuery) -> Select:
    if query.start_date is not None:
        start = datetime.combine(query.start_date, time.min)
        stmt = stmt.where(Person.dates.any(and_(
            DateEntry.date_value.is_not(None),
            DateEntry.date_value >= start,
        )))
    if query.end_date is not None:
        stmt = stmt.where(Person.dates.any(_before_end_of(query.end_date)))
    return stmt


def _before_end_of(end_date: date):
    # date.max has no following day; every stored date is within it
    if end_date == date.max:
        return DateEntry.date_value.is_not(None)
    end_exclusive = datetime.combine(end_date + timedelta(days=1), time.min)
    return and_(
        DateEntry.date_value.is_not(None),
        DateEntry.date_value < end_exclusive,
    )


def _filter_countries(stmt: Select, query: RecordQuery) -> Select:
    if not query.countries:
        return stmt
    return stmt.where(
        Person.addresses.any(Address.country.in_(query.countries)),
    )
