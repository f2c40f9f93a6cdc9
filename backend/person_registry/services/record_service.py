"""Record Service — create/read/update/delete/list over the person aggregate.

Invariants:
    - create is the ONLY retry-wrapped operation; each attempt consults the
      fault decision first, builds a fresh aggregate, and rolls back on failure
    - get/update/delete raise ResourceNotFoundError for unknown ids
    - update overwrites deceased and gender unconditionally, then merges each
      child collection by id (unmatched patch ids dropped, omitted children kept)
    - delete removes every child explicitly, then the root, in one commit
    - No partial success: an operation commits once or not at all

Design Decisions:
    - Collaborators injected (repository, retry executor, fault decision):
      the service never touches AsyncSession or sleeps directly
    - Reads are not retried; the asymmetry with create is intentional
    - Returned records are re-read after commit so callers see stored values
"""

import logging

from person_registry.core.domain_types import ChildKind, RecordId
from person_registry.core.errors import ResourceNotFoundError, SimulatedFaultError
from person_registry.core.merge_children import plan_child_updates
from person_registry.core.record_query import RecordQuery, total_pages
from person_registry.core.record_validation import validate_new_record, validate_patch
from person_registry.core.repository_protocols import PersonLike, PersonRepository
from person_registry.infrastructure.retry_executor import (
    FaultDecision, RetryExecutor, never_fail,
)
from person_registry.models import Address, DateEntry, Person, PersonName
from person_registry.schemas.person import (
    PageEnvelope, PersonCreate, PersonRead, PersonUpdate,
)

logger = logging.getLogger(__name__)


class RecordService:
    """Orchestrates record operations over a PersonRepository."""

    def __init__(
        self,
        repository: PersonRepository,
        retry_executor: RetryExecutor,
        fault_decision: FaultDecision = never_fail,
    ):
        self.repository = repository
        self.retry_executor = retry_executor
        self.fault_decision = fault_decision

    async def create(self, payload: PersonCreate) -> PersonLike:
        """Persist a new record with its children, retrying transient failures."""
        validate_new_record(payload)

        async def attempt() -> None:
            if self.fault_decision():
                raise SimulatedFaultError("create")
            try:
                await self.repository.add(_build_person(payload))
                await self.repository.commit()
            except Exception:
                await self.repository.rollback()
                raise

        await self.retry_executor.execute(attempt, operation_name="create")
        logger.info(
            f"Record {payload.id} created", extra={"record_id": payload.id},
        )
        return await self.get_by_id(RecordId(payload.id))

    async def get_by_id(self, record_id: RecordId) -> PersonLike:
        record = await self.repository.get(record_id)
        if record is None:
            raise ResourceNotFoundError("Record", record_id)
        return record

    async def list_records(self, query: RecordQuery) -> PageEnvelope:
        """One page of records matching every active filter."""
        total, rows = await self.repository.find_page(query)
        logger.debug(
            f"Listing page {query.page} ({len(rows)}/{total} records)",
            extra={"total_count": total},
        )
        return PageEnvelope(
            total_count=total,
            total_pages=total_pages(total, query.page_size),
            current_page=query.page,
            page_size=query.page_size,
            entities=[PersonRead.model_validate(row) for row in rows],
        )

    async def update(self, record_id: RecordId, patch: PersonUpdate) -> PersonLike:
        """Overwrite scalars and merge children by id."""
        validate_patch(patch)
        record = await self.get_by_id(record_id)

        record.deceased = patch.deceased
        record.gender = patch.gender.value if patch.gender else None

        for kind in ChildKind:
            plan = plan_child_updates(
                kind,
                [child.id for child in getattr(record, kind.value)],
                [child.model_dump() for child in getattr(patch, kind.value)],
            )
            for update in plan.updates:
                await self.repository.update_child(
                    record_id, kind, update.child_id, update.values,
                )
            if plan.ignored_ids:
                logger.info(
                    f"Ignored unknown {kind.value} ids on record {record_id}: "
                    f"{', '.join(plan.ignored_ids)}",
                    extra={"record_id": record_id},
                )

        await self.repository.commit()
        return await self.get_by_id(record_id)

    async def delete(self, record_id: RecordId) -> None:
        """Remove the record and every child it owns."""
        record = await self.get_by_id(record_id)
        removed = await self.repository.delete_children_of(record)
        await self.repository.delete(record)
        await self.repository.commit()
        logger.info(
            f"Record {record_id} deleted with {removed} children",
            extra={"record_id": record_id},
        )


def _build_person(payload: PersonCreate) -> Person:
    """Fresh ORM aggregate for one create attempt."""
    return Person(
        id=payload.id,
        gender=payload.gender.value if payload.gender else None,
        deceased=payload.deceased,
        addresses=[
            Address(
                id=a.id, address_line=a.address_line,
                city=a.city, country=a.country,
            )
            for a in payload.addresses
        ],
        dates=[
            DateEntry(id=d.id, date_type=d.date_type, date_value=d.date_value)
            for d in payload.dates
        ],
        names=[
            PersonName(id=n.id, first_name=n.first_name, last_name=n.last_name)
            for n in payload.names
        ],
    )
