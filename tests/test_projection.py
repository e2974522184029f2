"""
Tests for core/projection.py.
"""

from typing import Optional

import pytest
from pydantic import BaseModel

from company_directory.app.core.exceptions import ValidationError
from company_directory.app.core.projection import FieldProjector
from company_directory.app.schemas.location import LocationRead
from company_directory.app.schemas.worker import WorkerRead


class Contact(BaseModel):
    id: int
    display_name: str
    note: Optional[str] = None


def make_worker(**overrides):
    data = {
        "id": 7,
        "first_name": "Jeanne",
        "last_name": "Martin",
        "email": "jeanne@example.com",
        "phone_fixed": "0123456789",
        "phone_mobile": "+33612345678",
        "location_id": 1,
        "service_id": 2,
    }
    data.update(overrides)
    return WorkerRead(**data)


class TestResolve:
    """Field list parsing and validation."""

    def test_no_projection_requested(self):
        projector = FieldProjector(LocationRead)
        assert projector.resolve(None) is None
        assert projector.resolve("") is None
        assert projector.resolve("   ") is None

    def test_match_ignores_case(self):
        projector = FieldProjector(LocationRead)
        assert projector.resolve("City") == ["city"]
        assert projector.resolve("CITY,id") == ["city", "id"]

    def test_match_ignores_underscores(self):
        projector = FieldProjector(WorkerRead)
        assert projector.resolve("FirstName") == ["first_name"]
        assert projector.resolve("firstname, first_name") == ["first_name"]

    def test_names_are_sorted(self):
        projector = FieldProjector(WorkerRead)
        assert projector.resolve("last_name, Email , first_name") == [
            "email", "first_name", "last_name"
        ]

    def test_unknown_field_is_rejected(self):
        projector = FieldProjector(LocationRead)
        with pytest.raises(ValidationError, match="NotAField"):
            projector.resolve("NotAField")

    def test_every_unknown_field_is_reported(self):
        projector = FieldProjector(LocationRead)
        with pytest.raises(ValidationError) as exc_info:
            projector.resolve("city, Foo, Bar")
        assert "Foo, Bar" in str(exc_info.value)
        assert exc_info.value.field == "fields"

    def test_only_separators_is_rejected(self):
        projector = FieldProjector(LocationRead)
        with pytest.raises(ValidationError, match="At least one field"):
            projector.resolve(" , ,")

    def test_ambiguous_model_is_refused(self):
        class Ambiguous(BaseModel):
            first_name: str
            firstname: str

        with pytest.raises(ValueError, match="ambiguous"):
            FieldProjector(Ambiguous)


class TestProject:
    """Projection of records to dicts."""

    def test_items_unchanged_without_fields(self):
        projector = FieldProjector(LocationRead)
        items = [LocationRead(id=1, city="Paris")]
        assert projector.project(items, None) == items

    def test_projection_keeps_only_requested_fields(self):
        projector = FieldProjector(LocationRead)
        items = [LocationRead(id=1, city="Paris"), LocationRead(id=2, city="Lyon")]
        assert projector.project(items, "City") == [{"city": "Paris"}, {"city": "Lyon"}]

    def test_projection_key_order_is_alphabetical(self):
        projector = FieldProjector(WorkerRead)
        projected = projector.project([make_worker()], "service_id,email,FirstName")
        assert list(projected[0]) == ["email", "first_name", "service_id"]
        assert projected[0] == {
            "email": "jeanne@example.com",
            "first_name": "Jeanne",
            "service_id": 2,
        }

    def test_none_values_are_omitted(self):
        projector = FieldProjector(Contact)
        projected = projector.project(
            [Contact(id=1, display_name="A"), Contact(id=2, display_name="B", note="x")],
            "id,note",
        )
        assert projected == [{"id": 1}, {"id": 2, "note": "x"}]

    def test_project_one(self):
        projector = FieldProjector(LocationRead)
        assert projector.project_one(LocationRead(id=3, city="Nantes"), ["id"]) == {"id": 3}

    def test_field_names(self):
        assert FieldProjector(LocationRead).field_names == ["city", "id"]
