"""
Shared fixtures: a temporary SQLite database per test, the services
wired to it with a fresh cache, and a FastAPI test client.
"""

import itertools

import pytest
from fastapi.testclient import TestClient

from company_directory.app.core.config import Settings
from company_directory.app.core.db import init_db
from company_directory.app.main import create_app
from company_directory.app.schemas.location import LocationCreate
from company_directory.app.schemas.service import ServiceCreate
from company_directory.app.schemas.worker import WorkerCreate
from company_directory.app.services.container import build_services


@pytest.fixture
def app_settings(tmp_path):
    return Settings(
        database_url=str(tmp_path / "directory.db"),
        cache_duration_minutes=5,
        max_page_size=100,
        default_page_size=10,
        transfer_timeout_seconds=0,
    )


@pytest.fixture
def directory(app_settings):
    init_db(app_settings.database_url)
    return build_services(app_settings)


@pytest.fixture
def make_location(directory):
    async def _make(city="Paris"):
        return await directory.locations.create(LocationCreate(city=city))
    return _make


@pytest.fixture
def make_service(directory):
    async def _make(name="Accounting"):
        return await directory.services.create(ServiceCreate(name=name))
    return _make


@pytest.fixture
def make_worker(directory):
    counter = itertools.count(1)

    async def _make(location_id, service_id, **overrides):
        n = next(counter)
        data = {
            "first_name": "Jeanne",
            "last_name": f"Martin{n}",
            "email": f"worker{n}@example.com",
            "phone_fixed": "01 23 45 67 89",
            "phone_mobile": "+33612345678",
            "location_id": location_id,
            "service_id": service_id,
        }
        data.update(overrides)
        return await directory.workers.create(WorkerCreate(**data))
    return _make


@pytest.fixture
def client(app_settings):
    with TestClient(create_app(app_settings)) as test_client:
        yield test_client
