"""Person Schemas — Pydantic models for the record aggregate and the page envelope.

Invariants:
    - Wire format is PascalCase (Id, AddressLine, DateValue, ...); snake_case
      attribute names are accepted on input as well
    - PersonCreate.Id, every child Id, Names[].FirstName/LastName: non-empty
    - Missing or null child collections are read as empty lists
    - DateValue is stored naive; aware timestamps are converted to UTC first

Design Decisions:
    - alias_generator=to_pascal over per-field aliases: one rule for every model
    - from_attributes on read models: ORM objects validate straight into responses
"""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_pascal

from person_registry.core.domain_types import Gender


class _WireModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_pascal,
        populate_by_name=True,
        from_attributes=True,
    )


# --- Children -----------------------------------------------------------------

class AddressIn(_WireModel):
    id: str = Field(min_length=1, max_length=100)
    address_line: str | None = Field(None, max_length=500)
    city: str | None = Field(None, max_length=200)
    country: str | None = Field(None, max_length=100)


class DateEntryIn(_WireModel):
    id: str = Field(min_length=1, max_length=100)
    date_type: str | None = Field(None, max_length=50)
    date_value: datetime | None = None

    @field_validator("date_value")
    @classmethod
    def to_naive_utc(cls, v: datetime | None) -> datetime | None:
        if v is not None and v.tzinfo is not None:
            return v.astimezone(timezone.utc).replace(tzinfo=None)
        return v


class PersonNameIn(_WireModel):
    id: str = Field(min_length=1, max_length=100)
    first_name: str = Field(min_length=1, max_length=200)
    last_name: str = Field(min_length=1, max_length=200)


# --- Aggregate input ------------------------------------------------------------

class _PersonBody(_WireModel):
    gender: Gender | None = None
    deceased: bool = False
    addresses: list[AddressIn] = Field(default_factory=list)
    dates: list[DateEntryIn] = Field(default_factory=list)
    names: list[PersonNameIn] = Field(default_factory=list)

    @field_validator("addresses", "dates", "names", mode="before")
    @classmethod
    def null_collection_is_empty(cls, v):
        return [] if v is None else v


class PersonCreate(_PersonBody):
    """Record creation — the caller assigns every id."""
    id: str = Field(min_length=1, max_length=100)


class PersonUpdate(_PersonBody):
    """Record patch — scalars overwrite, children merge by id.

    Id in the body is ignored; the path id identifies the record.
    """
    id: str | None = None


# --- Responses ------------------------------------------------------------------

class AddressRead(_WireModel):
    id: str
    address_line: str | None = None
    city: str | None = None
    country: str | None = None


class DateEntryRead(_WireModel):
    id: str
    date_type: str | None = None
    date_value: datetime | None = None


class PersonNameRead(_WireModel):
    id: str
    first_name: str
    last_name: str


class PersonRead(_WireModel):
    id: str
    addresses: list[AddressRead] = Field(default_factory=list)
    dates: list[DateEntryRead] = Field(default_factory=list)
    deceased: bool = False
    gender: str | None = None
    names: list[PersonNameRead] = Field(default_factory=list)


class PageEnvelope(_WireModel):
    """One page of a filtered, sorted listing."""
    total_count: int
    total_pages: int
    current_page: int
    page_size: int
    entities: list[PersonRead]
