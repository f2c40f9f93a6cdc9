"""SQL Person Repository — SQLAlchemy implementation of PersonRepository.

Invariants:
    - One repository per AsyncSession (one per request)
    - get() always returns the record with its three collections loaded
    - update_child only touches a child that belongs to the given record
    - delete_children_of marks every child for deletion individually, so the
      root can be removed even where the store has no ON DELETE CASCADE
    - Nothing is committed implicitly — the service decides when to commit

Design Decisions:
    - populate_existing on get(): re-reading after a merge refreshes the
      identity-map copy instead of returning stale collections
    - ORM deletes over bulk DELETE statements: the unit of work orders child
      deletes before the parent and keeps the session consistent
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from person_registry.core.domain_types import ChildId, ChildKind, RecordId
from person_registry.core.record_query import RecordQuery
from person_registry.models import Address, DateEntry, Person, PersonName
from person_registry.services.query_filters import build_statement, count_statement

logger = logging.getLogger(__name__)

CHILD_MODELS = {
    ChildKind.ADDRESS: Address,
    ChildKind.DATE: DateEntry,
    ChildKind.NAME: PersonName,
}


class SqlPersonRepository:
    """Person aggregate persistence over an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def add(self, record: Person) -> None:
        self.db.add(record)
        await self.db.flush()

    async def get(self, record_id: RecordId) -> Person | None:
        result = await self.db.execute(
            select(Person)
            .where(Person.id == record_id)
            .execution_options(populate_existing=True),
        )
        return result.scalar_one_or_none()

    async def find_page(self, query: RecordQuery) -> tuple[int, list[Person]]:
        """Total over the filtered set plus the rows of the requested page."""
        total = (await self.db.execute(count_statement(query))).scalar_one()
        result = await self.db.execute(build_statement(query))
        return total, list(result.scalars().all())

    async def update_child(
        self, record_id: RecordId, kind: ChildKind, child_id: ChildId, values: dict,
    ) -> bool:
        """Overwrite the given fields of one owned child. False if not owned."""
        child = await self.db.get(CHILD_MODELS[kind], child_id)
        if child is None or child.entity_id != record_id:
            return False
        for name, value in values.items():
            setattr(child, name, value)
        return True

    async def delete_children_of(self, record: Person) -> int:
        """Mark every address, date, and name of the record for deletion."""
        removed = 0
        for kind in ChildKind:
            for child in list(getattr(record, kind.value)):
                await self.db.delete(child)
                removed += 1
        return removed

    async def delete(self, record: Person) -> None:
        await self.db.delete(record)

    async def commit(self) -> None:
        await self.db.commit()

    async def rollback(self) -> None:
        await self.db.rollback()
