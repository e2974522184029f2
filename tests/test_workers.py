"""
Tests for the worker service: field formats, references and filters.
"""

import pytest

from company_directory.app.core.exceptions import ConflictError, NotFoundError, ValidationError
from company_directory.app.schemas.worker import WorkerUpdate


@pytest.fixture
def places(make_location, make_service):
    async def _places():
        paris = await make_location("Paris")
        lyon = await make_location("Lyon")
        accounting = await make_service("Accounting")
        sales = await make_service("Sales")
        return paris, lyon, accounting, sales
    return _places


class TestCreate:
    """Validation on create."""

    @pytest.mark.asyncio
    async def test_create_then_get(self, directory, places, make_worker):
        paris, _, accounting, _ = await places()
        created = await make_worker(paris.id, accounting.id, first_name="Luc")
        fetched = await directory.workers.get_by_id(created.id)
        assert fetched == created
        assert fetched.first_name == "Luc"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "field, value",
        [
            ("first_name", " "),
            ("last_name", ""),
            ("email", "not-an-email"),
            ("email", "a@b"),
            ("phone_fixed", "12ab"),
            ("phone_mobile", "123"),
        ],
    )
    async def test_invalid_formats(self, places, make_worker, field, value):
        paris, _, accounting, _ = await places()
        with pytest.raises(ValidationError) as exc_info:
            await make_worker(paris.id, accounting.id, **{field: value})
        assert exc_info.value.field == field

    @pytest.mark.asyncio
    async def test_missing_location(self, places, make_worker):
        _, _, accounting, _ = await places()
        with pytest.raises(NotFoundError, match="Location with ID 99"):
            await make_worker(99, accounting.id)

    @pytest.mark.asyncio
    async def test_missing_service(self, places, make_worker):
        paris, _, _, _ = await places()
        with pytest.raises(NotFoundError, match="Service with ID 99"):
            await make_worker(paris.id, 99)

    @pytest.mark.asyncio
    async def test_duplicate_email(self, places, make_worker):
        paris, _, accounting, _ = await places()
        await make_worker(paris.id, accounting.id, email="jeanne@example.com")
        with pytest.raises(ConflictError, match="JEANNE@example.com"):
            await make_worker(paris.id, accounting.id, email="JEANNE@example.com")

    @pytest.mark.asyncio
    async def test_duplicate_accented_email(self, directory, places, make_worker):
        paris, _, accounting, _ = await places()
        await make_worker(paris.id, accounting.id, email="Éloïse@example.fr")
        with pytest.raises(ConflictError):
            await make_worker(paris.id, accounting.id, email="éloïse@example.fr")
        assert await directory.workers.exists_by_natural_key("ÉLOÏSE@EXAMPLE.FR")


class TestList:
    """Filtering, search and projection of workers."""

    @pytest.mark.asyncio
    async def test_filter_by_location_and_service(self, directory, places, make_worker):
        paris, lyon, accounting, sales = await places()
        await make_worker(paris.id, accounting.id)
        await make_worker(paris.id, sales.id)
        await make_worker(lyon.id, sales.id)

        _, total = await directory.workers.get_filtered(location_id=paris.id)
        assert total == 2
        _, total = await directory.workers.get_filtered(service_id=sales.id)
        assert total == 2
        items, total = await directory.workers.get_filtered(location_id=paris.id, service_id=sales.id)
        assert total == 1
        assert items[0].location_id == paris.id
        assert items[0].service_id == sales.id

    @pytest.mark.asyncio
    async def test_filtered_lists_are_cached_separately(self, directory, places, make_worker):
        paris, lyon, accounting, _ = await places()
        await make_worker(paris.id, accounting.id)
        _, all_total = await directory.workers.get_filtered()
        _, lyon_total = await directory.workers.get_filtered(location_id=lyon.id)
        assert (all_total, lyon_total) == (1, 0)

    @pytest.mark.asyncio
    async def test_search_covers_names_email_and_phones(self, directory, places, make_worker):
        paris, _, accounting, _ = await places()
        await make_worker(paris.id, accounting.id, last_name="Dupont", email="d@corp.fr")
        await make_worker(paris.id, accounting.id, phone_mobile="+33799999999")

        _, total = await directory.workers.get_filtered(search_term="dupont")
        assert total == 1
        _, total = await directory.workers.get_filtered(search_term="corp.fr")
        assert total == 1
        _, total = await directory.workers.get_filtered(search_term="79999")
        assert total == 1

    @pytest.mark.asyncio
    async def test_projection(self, directory, places, make_worker):
        paris, _, accounting, _ = await places()
        created = await make_worker(paris.id, accounting.id, first_name="Luc", email="luc@example.com")
        items, _ = await directory.workers.get_filtered(fields="Email,first_name")
        assert items == [{"email": "luc@example.com", "first_name": "Luc"}]
        projected = await directory.workers.get_by_id(created.id, "LocationId")
        assert projected == {"location_id": paris.id}


class TestUpdate:
    """Updating workers."""

    @pytest.mark.asyncio
    async def test_move_worker(self, directory, places, make_worker):
        paris, lyon, accounting, _ = await places()
        created = await make_worker(paris.id, accounting.id)
        await directory.workers.get_filtered(location_id=lyon.id)

        payload = created.model_dump()
        payload["location_id"] = lyon.id
        await directory.workers.update(created.id, WorkerUpdate(**payload))

        _, total = await directory.workers.get_filtered(location_id=lyon.id)
        assert total == 1

    @pytest.mark.asyncio
    async def test_move_to_missing_location(self, directory, places, make_worker):
        paris, _, accounting, _ = await places()
        created = await make_worker(paris.id, accounting.id)
        payload = {**created.model_dump(), "location_id": 404}
        with pytest.raises(NotFoundError):
            await directory.workers.update(created.id, WorkerUpdate(**payload))

    @pytest.mark.asyncio
    async def test_email_taken_by_other_worker(self, directory, places, make_worker):
        paris, _, accounting, _ = await places()
        await make_worker(paris.id, accounting.id, email="taken@example.com")
        other = await make_worker(paris.id, accounting.id)
        payload = {**other.model_dump(), "email": "Taken@Example.com"}
        with pytest.raises(ConflictError):
            await directory.workers.update(other.id, WorkerUpdate(**payload))
