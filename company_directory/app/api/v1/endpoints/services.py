"""
Service (department) endpoints for API v1.
"""

from typing import Any, Optional

from fastapi import APIRouter, Depends, Query, Response, status

from company_directory.app.api.dependencies import build_page, get_service_service
from company_directory.app.schemas.common import ExistsResponse, PagedResponse
from company_directory.app.schemas.service import ServiceCreate, ServiceRead, ServiceUpdate
from company_directory.app.services.service_service import ServiceService

router = APIRouter()


@router.get("/", response_model=PagedResponse)
async def list_services(
    search_term: Optional[str] = Query(None),
    fields: Optional[str] = Query(None, examples=["name"]),
    page_number: int = Query(1),
    page_size: Optional[int] = Query(None),
    service: ServiceService = Depends(get_service_service),
) -> PagedResponse:
    """Return one page of services, optionally filtered by name."""
    items, total_count = await service.get_filtered(search_term, fields, page_number, page_size)
    return build_page(service, items, total_count, page_number, page_size)


@router.get("/exists/{name}", response_model=ExistsResponse)
async def service_exists(
    name: str,
    service: ServiceService = Depends(get_service_service),
) -> ExistsResponse:
    return ExistsResponse(exists=await service.exists_by_natural_key(name))


@router.get("/exists-by-id/{service_id}", response_model=ExistsResponse)
async def service_exists_by_id(
    service_id: int,
    service: ServiceService = Depends(get_service_service),
) -> ExistsResponse:
    return ExistsResponse(exists=await service.exists_by_id(service_id))


@router.get("/{service_id}", response_model=None)
async def get_service(
    service_id: int,
    fields: Optional[str] = Query(None),
    service: ServiceService = Depends(get_service_service),
) -> Any:
    return await service.get_by_id(service_id, fields)


@router.post("/", response_model=ServiceRead, status_code=status.HTTP_201_CREATED)
async def create_service(
    service_in: ServiceCreate,
    service: ServiceService = Depends(get_service_service),
) -> ServiceRead:
    return await service.create(service_in)


@router.put("/{service_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_service(
    service_id: int,
    service_in: ServiceUpdate,
    service: ServiceService = Depends(get_service_service),
) -> Response:
    await service.update(service_id, service_in)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{service_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_service(
    service_id: int,
    service: ServiceService = Depends(get_service_service),
) -> Response:
    await service.delete(service_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
