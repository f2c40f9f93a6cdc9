"""ORM Models — SQLAlchemy declarative models for the person aggregate.

Invariants:
    - All models inherit from Base (db/base.py)
    - Person is the aggregate root; every child row is scoped by entity_id

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from person_registry.models.person import Person  # noqa: F401
from person_registry.models.address import Address  # noqa: F401
from person_registry.models.date_entry import DateEntry  # noqa: F401
from person_registry.models.person_name import PersonName  # noqa: F401
