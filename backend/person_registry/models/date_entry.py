"""DateEntry ORM — a typed date event (birth, death, ...) of a person record.

Invariants:
    - Always belongs to a Person (entity_id FK, ON DELETE CASCADE)
    - date_value is a naive timestamp; only its date part is used for filtering
    - A NULL date_value never matches a date-range filter
"""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from person_registry.db.base import Base


class DateEntry(Base):
    __tablename__ = "dates"

    id: Mapped[str] = mapped_column(String(100), primary_key=True)
    entity_id: Mapped[str] = mapped_column(
        String(100), ForeignKey("entities.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    date_type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    date_value: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=False), nullable=True,
    )

    # Relationships
    person: Mapped["Person"] = relationship(
        "Person", back_populates="dates",
    )
