"""
Tests for core/config.py and the application factory.
"""

import pytest

from company_directory.app.core.config import Settings
from company_directory.app.core.db import init_db
from company_directory.app.main import create_app
from company_directory.app.schemas.location import LocationCreate
from company_directory.app.services.container import build_services


def test_derived_settings():
    settings = Settings(cache_duration_minutes=2, transfer_timeout_seconds=0)
    assert settings.cache_ttl_seconds == 120
    assert settings.transfer_timeout is None
    assert Settings(transfer_timeout_seconds=12.5).transfer_timeout == 12.5


def test_create_app_uses_given_settings(tmp_path):
    settings = Settings(
        database_url=str(tmp_path / "app.db"),
        max_page_size=20,
        default_page_size=5,
        transfer_timeout_seconds=3,
    )
    app = create_app(settings)
    services = app.state.services
    assert services.locations.repository.database_url == settings.database_url
    assert services.workers.executor.max_page_size == 20
    assert services.workers.default_page_size == 5
    assert services.transfers.timeout == 3
    assert services.locations.cache is services.workers.cache


@pytest.mark.asyncio
async def test_zero_cache_duration_disables_caching(tmp_path):
    settings = Settings(database_url=str(tmp_path / "nocache.db"), cache_duration_minutes=0)
    init_db(settings.database_url)
    services = build_services(settings)

    await services.locations.create(LocationCreate(city="Paris"))
    await services.locations.get_filtered()
    services.locations.repository.insert({"city": "Lyon"})

    _, total = await services.locations.get_filtered()
    assert total == 2
    assert len(services.cache) == 0
