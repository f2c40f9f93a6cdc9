"""PersonName ORM — one name (first + last) of a person record.

Invariants:
    - Always belongs to a Person (entity_id FK, ON DELETE CASCADE)
    - first_name and last_name are non-nullable
"""

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from person_registry.db.base import Base


class PersonName(Base):
    __tablename__ = "names"

    id: Mapped[str] = mapped_column(String(100), primary_key=True)
    entity_id: Mapped[str] = mapped_column(
        String(100), ForeignKey("entities.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    first_name: Mapped[str] = mapped_column(String(200), nullable=False)
    last_name: Mapped[str] = mapped_column(String(200), nullable=False)

    # Relationships
    person: Mapped["Person"] = relationship(
        "Person", back_populates="names",
    )
