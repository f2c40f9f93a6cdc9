"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - RecordId wraps the caller-assigned string identity — immutable after creation
    - All valid filter/sort states encoded as Enums — no raw string matching
    - SortField enumerates the ONLY root columns a listing may be ordered by

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders; values match the
      wire representation (e.g. "Male", "IncludeDeceased")
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

RecordId = NewType("RecordId", str)
ChildId = NewType("ChildId", str)


# ─── Enums ───────────────────────────────────────────────────────

class Gender(str, Enum):
    """Stored gender values — maps to DB `gender` column."""
    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"


class GenderFilter(str, Enum):
    """Listing filter on gender. ALL disables the stage."""
    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"
    ALL = "All"


class DeceasedFilter(str, Enum):
    """Listing filter on the deceased flag. ALL disables the stage."""
    INCLUDE_DECEASED = "IncludeDeceased"
    EXCLUDE_DECEASED = "ExcludeDeceased"
    ALL = "All"


class SortField(str, Enum):
    """Accepted sort keys — scalar fields of the root record only."""
    ID = "Id"
    GENDER = "Gender"
    DECEASED = "Deceased"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class ChildKind(str, Enum):
    """Owned child collections of a record."""
    ADDRESS = "addresses"
    DATE = "dates"
    NAME = "names"
