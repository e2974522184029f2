"""
Wiring of repositories, cache and services for one database.

``build_services`` is called by the application factory and by the
tests; every service built by one call shares the same ``ResultCache``
and ``PagedQueryExecutor``.
"""

from dataclasses import dataclass
from typing import Optional

from ..core.cache import ResultCache
from ..core.config import Settings, settings as default_settings
from ..core.query import PagedQueryExecutor
from ..core.repository import SqliteRepository
from .location_service import LocationService
from .service_service import ServiceService
from .transfer_service import WorkerTransferService
from .worker_service import SEARCH_COLUMNS as WORKER_SEARCH_COLUMNS, WorkerService

LOCATION_COLUMNS = ("id", "city")
SERVICE_COLUMNS = ("id", "name")
WORKER_COLUMNS = (
    "id",
    "first_name",
    "last_name",
    "email",
    "phone_fixed",
    "phone_mobile",
    "location_id",
    "service_id",
)


@dataclass
class DirectoryServices:
    cache: ResultCache
    locations: LocationService
    services: ServiceService
    workers: WorkerService
    transfers: WorkerTransferService


def build_services(
    app_settings: Optional[Settings] = None,
    cache: Optional[ResultCache] = None,
) -> DirectoryServices:
    """Create the services for the database named in ``app_settings``."""
    app_settings = app_settings or default_settings
    database_url = app_settings.database_url
    cache = cache if cache is not None else ResultCache(default_ttl=app_settings.cache_ttl_seconds)
    executor = PagedQueryExecutor(max_page_size=app_settings.max_page_size)
    options = {
        "executor": executor,
        "cache_ttl": app_settings.cache_ttl_seconds,
        "default_page_size": app_settings.default_page_size,
    }

    worker_repository = SqliteRepository(
        "workers", WORKER_COLUMNS, WORKER_SEARCH_COLUMNS, database_url=database_url
    )
    locations = LocationService(
        SqliteRepository("locations", LOCATION_COLUMNS, ("city",), database_url=database_url),
        cache,
        dependents=worker_repository,
        **options,
    )
    services = ServiceService(
        SqliteRepository("services", SERVICE_COLUMNS, ("name",), database_url=database_url),
        cache,
        dependents=worker_repository,
        **options,
    )
    workers = WorkerService(worker_repository, cache, locations, services, **options)
    transfers = WorkerTransferService(workers, timeout=app_settings.transfer_timeout)
    return DirectoryServices(
        cache=cache,
        locations=locations,
        services=services,
        workers=workers,
        transfers=transfers,
    )
