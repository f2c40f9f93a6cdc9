"""Entity Routes — CRUD and filtered listing of person records.

Invariants:
    - /entities is registered before /{record_id} so the listing path is never
      captured as an id
    - Routes hold no business logic: parse → RecordService → schema
    - Domain errors propagate to the global handlers (404, 400, 500 mapping)
    - POST answers 201 with a Location header pointing at the new record

Design Decisions:
    - Query parameter names keep their camelCase wire spelling via aliases
    - max_page_size read from settings at request time (overridable in tests)
"""

import logging
from datetime import date

from fastapi import APIRouter, Depends, Query, Response, status

from person_registry.api.dependencies import get_record_service
from person_registry.config import Settings, get_settings
from person_registry.core.domain_types import DeceasedFilter, GenderFilter, RecordId
from person_registry.core.record_query import (
    DEFAULT_PAGE, DEFAULT_PAGE_SIZE, build_record_query,
)
from person_registry.schemas.person import (
    PageEnvelope, PersonCreate, PersonRead, PersonUpdate,
)
from person_registry.services.record_service import RecordService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/entity", tags=["entity"])


@router.post(
    "", response_model=PersonRead, status_code=status.HTTP_201_CREATED,
)
async def create_entity(
    body: PersonCreate,
    response: Response,
    service: RecordService = Depends(get_record_service),
):
    """Create a record with its addresses, dates, and names."""
    record = await service.create(body)
    response.headers["Location"] = f"{router.prefix}/{record.id}"
    return PersonRead.model_validate(record)


@router.get("/entities", response_model=PageEnvelope)
async def list_entities(
    search: str | None = Query(None),
    gender: GenderFilter = Query(GenderFilter.ALL),
    deceased: DeceasedFilter = Query(DeceasedFilter.ALL),
    start_date: date | None = Query(None, alias="startDate"),
    end_date: date | None = Query(None, alias="endDate"),
    countries: list[str] | None = Query(None),
    page: int = Query(DEFAULT_PAGE),
    page_size: int = Query(DEFAULT_PAGE_SIZE, alias="pageSize"),
    sort_by: str = Query("Id", alias="sortBy"),
    sort_order: str = Query("asc", alias="sortOrder"),
    service: RecordService = Depends(get_record_service),
    settings: Settings = Depends(get_settings),
):
    """Filtered, sorted, paginated listing."""
    query = build_record_query(
        search=search,
        gender=gender,
        deceased=deceased,
        start_date=start_date,
        end_date=end_date,
        countries=countries,
        sort_by=sort_by,
        sort_order=sort_order,
        page=page,
        page_size=page_size,
        max_page_size=settings.max_page_size,
    )
    return await service.list_records(query)


@router.get("/{record_id}", response_model=PersonRead)
async def get_entity(
    record_id: str, service: RecordService = Depends(get_record_service),
):
    """Get one record with its children."""
    record = await service.get_by_id(RecordId(record_id))
    return PersonRead.model_validate(record)


@router.put("/{record_id}", response_model=PersonRead)
async def update_entity(
    record_id: str,
    body: PersonUpdate,
    service: RecordService = Depends(get_record_service),
):
    """Overwrite scalar fields and merge children by id."""
    record = await service.update(RecordId(record_id), body)
    return PersonRead.model_validate(record)


@router.delete("/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_entity(
    record_id: str, service: RecordService = Depends(get_record_service),
):
    """Delete a record and everything it owns."""
    await service.delete(RecordId(record_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
