"""Address ORM — postal address owned by one person record.

Invariants:
    - Always belongs to a Person (entity_id FK, ON DELETE CASCADE)
    - id is caller-assigned and unique across all addresses
"""

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from person_registry.db.base import Base


class Address(Base):
    __tablename__ = "addresses"

    id: Mapped[str] = mapped_column(String(100), primary_key=True)
    entity_id: Mapped[str] = mapped_column(
        String(100), ForeignKey("entities.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    address_line: Mapped[str | None] = mapped_column(String(500), nullable=True)
    city: Mapped[str | None] = mapped_column(String(200), nullable=True)
    country: Mapped[str | None] = mapped_column(
        String(100), nullable=True, index=True,
    )

    # Relationships
    person: Mapped["Person"] = relationship(
        "Person", back_populates="addresses",
    )
