"""Person Schemas — wire format and boundary validation.

Invariants:
    - PascalCase keys accepted and emitted; snake_case accepted on input
    - Null collections read as empty lists
    - Required ids and names enforced; Gender limited to Male/Female/Other
    - Aware DateValue normalised to naive UTC
"""

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from person_registry.core.domain_types import Gender
from person_registry.schemas.person import (
    PageEnvelope, PersonCreate, PersonRead, PersonUpdate,
)


_WIRE_RECORD = {
    "Id": "p1",
    "Addresses": [
        {"Id": "a1", "AddressLine": "1 Main St", "City": "Springfield", "Country": "US"},
    ],
    "Dates": [{"Id": "d1", "DateType": "birth", "DateValue": "1990-04-01T00:00:00"}],
    "Deceased": False,
    "Gender": "Female",
    "Names": [{"Id": "n1", "FirstName": "Ada", "LastName": "Lovelace"}],
}


def test_create_parses_pascal_case():
    person = PersonCreate.model_validate(_WIRE_RECORD)
    assert person.id == "p1"
    assert person.gender is Gender.FEMALE
    assert person.addresses[0].address_line == "1 Main St"
    assert person.dates[0].date_value == datetime(1990, 4, 1)
    assert person.names[0].last_name == "Lovelace"


def test_create_accepts_snake_case():
    person = PersonCreate(id="p1", names=[{"id": "n1", "first_name": "A", "last_name": "B"}])
    assert person.names[0].first_name == "A"


def test_null_collections_become_empty():
    person = PersonCreate.model_validate(
        {"Id": "p1", "Addresses": None, "Dates": None, "Names": None},
    )
    assert person.addresses == [] and person.dates == [] and person.names == []


def test_missing_collections_become_empty():
    person = PersonCreate.model_validate({"Id": "p1"})
    assert person.addresses == []
    assert person.deceased is False
    assert person.gender is None


@pytest.mark.parametrize("body", [
    {},
    {"Id": ""},
    {"Id": "p1", "Names": [{"Id": "n1", "FirstName": "A"}]},
    {"Id": "p1", "Names": [{"Id": "n1", "FirstName": "", "LastName": "B"}]},
    {"Id": "p1", "Addresses": [{"City": "Paris"}]},
    {"Id": "p1", "Gender": "All"},
    {"Id": "p1", "Gender": "Unknown"},
])
def test_invalid_create_bodies_rejected(body):
    with pytest.raises(ValidationError):
        PersonCreate.model_validate(body)


def test_aware_date_value_normalised_to_naive_utc():
    tz = timezone(timedelta(hours=2))
    person = PersonCreate.model_validate({
        "Id": "p1",
        "Dates": [{"Id": "d1", "DateValue": datetime(2020, 1, 1, 1, 0, tzinfo=tz).isoformat()}],
    })
    assert person.dates[0].date_value == datetime(2019, 12, 31, 23, 0)


def test_update_does_not_require_id():
    patch = PersonUpdate.model_validate({"Deceased": True})
    assert patch.id is None
    assert patch.deceased is True


def test_read_emits_pascal_case():
    dumped = PersonRead.model_validate(_WIRE_RECORD).model_dump(by_alias=True, mode="json")
    assert list(dumped) == ["Id", "Addresses", "Dates", "Deceased", "Gender", "Names"]
    assert dumped["Addresses"][0] == {
        "Id": "a1", "AddressLine": "1 Main St", "City": "Springfield", "Country": "US",
    }
    assert dumped["Names"][0] == {"Id": "n1", "FirstName": "Ada", "LastName": "Lovelace"}


def test_page_envelope_keys():
    envelope = PageEnvelope(
        total_count=0, total_pages=0, current_page=1, page_size=10, entities=[],
    )
    assert envelope.model_dump(by_alias=True) == {
        "TotalCount": 0, "TotalPages": 0, "CurrentPage": 1,
        "PageSize": 10, "Entities": [],
    }
