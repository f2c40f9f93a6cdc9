"""Record Validation — required-field and id-uniqueness checks for incoming aggregates.

Invariants:
    - Record id, every child id, and name first/last are required (non-blank)
    - Child ids are unique within each collection of one payload
    - Raises RecordValidationError naming the offending field path

Design Decisions:
    - Duplicates Pydantic's boundary checks on purpose: RecordService is also
      called directly (tests, scripts) where no schema validation ran
    - Structural access (getattr): works on schemas and ORM objects alike
"""

from person_registry.core.domain_types import ChildKind
from person_registry.core.errors import RecordValidationError


def validate_new_record(record) -> None:
    """Check a record payload before it is persisted."""
    _require(record.id, "Id")
    for kind in ChildKind:
        _validate_children(kind, getattr(record, kind.value) or [])
    for index, name in enumerate(record.names or []):
        _require(name.first_name, f"Names[{index}].FirstName")
        _require(name.last_name, f"Names[{index}].LastName")


def validate_patch(record) -> None:
    """Check an update payload — child ids must be present to be matched."""
    for kind in ChildKind:
        for index, child in enumerate(getattr(record, kind.value) or []):
            _require(child.id, f"{_label(kind)}[{index}].Id")


def _validate_children(kind: ChildKind, children: list) -> None:
    seen: set[str] = set()
    for index, child in enumerate(children):
        path = f"{_label(kind)}[{index}].Id"
        _require(child.id, path)
        if child.id in seen:
            raise RecordValidationError(
                f"Duplicate id '{child.id}' in {_label(kind)}", path,
            )
        seen.add(child.id)


def _require(value: str | None, path: str) -> None:
    if value is None or not str(value).strip():
        raise RecordValidationError(f"{path} is required", path)


def _label(kind: ChildKind) -> str:
    return kind.value.capitalize()
