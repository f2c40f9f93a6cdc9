"""Person ORM — persists the aggregate root of the registry.

Invariants:
    - id is a caller-assigned string primary key, immutable after creation
    - gender is nullable; when set it is one of Gender's values
    - addresses, dates, names are owned exclusively (delete-orphan cascade)

Design Decisions:
    - Table keeps the historical name "entities" so existing data stays readable
    - lazy="selectin" on every collection: a loaded record always carries its
      children, no lazy IO in async context
    - passive_deletes=False: the ORM deletes children itself, so stores without
      ON DELETE CASCADE still end up with no orphans
"""

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from person_registry.db.base import Base


class Person(Base):
    """Person aggregate root — owns addresses, dates, and names."""
    __tablename__ = "entities"

    id: Mapped[str] = mapped_column(String(100), primary_key=True)
    gender: Mapped[str | None] = mapped_column(String(10), nullable=True)
    deceased: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )

    # Relationships
    addresses: Mapped[list["Address"]] = relationship(
        "Address", back_populates="person",
        cascade="all, delete-orphan", lazy="selectin", order_by="Address.id",
    )
    dates: Mapped[list["DateEntry"]] = relationship(
        "DateEntry", back_populates="person",
        cascade="all, delete-orphan", lazy="selectin", order_by="DateEntry.id",
    )
    names: Mapped[list["PersonName"]] = relationship(
        "PersonName", back_populates="person",
        cascade="all, delete-orphan", lazy="selectin", order_by="PersonName.id",
    )
