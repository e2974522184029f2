"""
FastAPI dependencies shared by the v1 endpoints.

The services are built once by ``create_app`` and stored on
``app.state``; endpoints obtain them through ``Depends`` so tests can
point an application at a temporary database.
"""

from typing import Any, List, Optional

from fastapi import Depends, Request

from ..schemas.common import PagedResponse
from ..services.base_service import CrudService
from ..services.container import DirectoryServices
from ..services.location_service import LocationService
from ..services.service_service import ServiceService
from ..services.transfer_service import WorkerTransferService
from ..services.worker_service import WorkerService


def get_services(request: Request) -> DirectoryServices:
    return request.app.state.services


def get_location_service(services: DirectoryServices = Depends(get_services)) -> LocationService:
    return services.locations


def get_service_service(services: DirectoryServices = Depends(get_services)) -> ServiceService:
    return services.services


def get_worker_service(services: DirectoryServices = Depends(get_services)) -> WorkerService:
    return services.workers


def get_transfer_service(services: DirectoryServices = Depends(get_services)) -> WorkerTransferService:
    return services.transfers


def build_page(
    service: CrudService,
    items: List[Any],
    total_count: int,
    page_number: int,
    page_size: Optional[int] = None,
) -> PagedResponse:
    """Wrap a list result, reporting the page size actually applied."""
    if page_size is None:
        page_size = service.default_page_size
    page_size = service.executor.effective_page_size(page_number, page_size)
    return PagedResponse.build(items, total_count, page_number, page_size)
