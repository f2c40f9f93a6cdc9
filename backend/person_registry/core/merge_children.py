"""Merge-by-id — pure planning of child-collection updates for a record patch.

Invariants:
    - plan_child_updates is PURE: returns a plan, the shell applies it
    - A patch child whose id matches an existing child → update in place
    - A patch child whose id matches nothing → ignored (never inserted)
    - Existing children absent from the patch → untouched (never deleted)
    - Only the fields listed in CHILD_FIELDS are copied; ids never change

Design Decisions:
    - Plan as data (ChildMergePlan) instead of mutating ORM objects: the same
      logic serves any store implementing PersonRepository.update_child
    - Repeated ids in one patch are applied in order, so the last one wins
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from person_registry.core.domain_types import ChildId, ChildKind


CHILD_FIELDS: dict[ChildKind, tuple[str, ...]] = {
    ChildKind.ADDRESS: ("address_line", "city", "country"),
    ChildKind.DATE: ("date_type", "date_value"),
    ChildKind.NAME: ("first_name", "last_name"),
}


@dataclass(frozen=True)
class ChildUpdate:
    child_id: ChildId
    values: dict


@dataclass(frozen=True)
class ChildMergePlan:
    kind: ChildKind
    updates: tuple[ChildUpdate, ...]
    ignored_ids: tuple[ChildId, ...]


def plan_child_updates(
    kind: ChildKind,
    existing_ids: Iterable[str],
    patch_children: Iterable[Mapping],
) -> ChildMergePlan:
    """Match patch children to existing children by id."""
    known = set(existing_ids)
    fields = CHILD_FIELDS[kind]
    updates: list[ChildUpdate] = []
    ignored: list[ChildId] = []
    for child in patch_children:
        child_id = ChildId(child["id"])
        if child_id not in known:
            ignored.append(child_id)
            continue
        updates.append(ChildUpdate(
            child_id=child_id,
            values={name: child.get(name) for name in fields},
        ))
    return ChildMergePlan(
        kind=kind, updates=tuple(updates), ignored_ids=tuple(ignored),
    )
