"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All store IO accessed through the PersonRepository Protocol
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Explicit child operations (update_child, delete_children_of) instead of
      relying on ORM change tracking: merge and cascade stay visible and testable
"""

from typing import Protocol

from person_registry.core.domain_types import ChildId, ChildKind, RecordId
from person_registry.core.record_query import RecordQuery


class PersonLike(Protocol):
    """Structural contract for stored records handed back by a repository."""
    id: str
    gender: str | None
    deceased: bool
    addresses: list
    dates: list
    names: list


class PersonRepository(Protocol):
    """Contract for person aggregate persistence — implemented by shell."""
    async def add(self, record: object) -> None: ...
    async def get(self, record_id: RecordId) -> PersonLike | None: ...
    async def find_page(
        self, query: RecordQuery,
    ) -> tuple[int, list[PersonLike]]: ...
    async def update_child(
        self, record_id: RecordId, kind: ChildKind, child_id: ChildId, values: dict,
    ) -> bool: ...
    async def delete_children_of(self, record: PersonLike) -> int: ...
    async def delete(self, record: PersonLike) -> None: ...
    async def commit(self) -> None: ...
    async def rollback(self) -> None: ...
