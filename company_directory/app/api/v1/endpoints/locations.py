"""
Location endpoints for API v1.

Locations are the cities the company operates in.  The list endpoint
supports a case-insensitive search on the city, field selection and
pagination; errors raised by the service are turned into HTTP
responses by the handlers registered in ``main.py``.
"""

from typing import Any, Optional

from fastapi import APIRouter, Depends, Query, Response, status

from company_directory.app.api.dependencies import build_page, get_location_service
from company_directory.app.schemas.common import ExistsResponse, PagedResponse
from company_directory.app.schemas.location import LocationCreate, LocationRead, LocationUpdate
from company_directory.app.services.location_service import LocationService

router = APIRouter()


@router.get("/", response_model=PagedResponse)
async def list_locations(
    search_term: Optional[str] = Query(None),
    fields: Optional[str] = Query(None, examples=["city"]),
    page_number: int = Query(1),
    page_size: Optional[int] = Query(None),
    service: LocationService = Depends(get_location_service),
) -> PagedResponse:
    """Return one page of locations, optionally filtered by city."""
    items, total_count = await service.get_filtered(search_term, fields, page_number, page_size)
    return build_page(service, items, total_count, page_number, page_size)


@router.get("/exists/{city}", response_model=ExistsResponse)
async def location_exists(
    city: str,
    service: LocationService = Depends(get_location_service),
) -> ExistsResponse:
    return ExistsResponse(exists=await service.exists_by_natural_key(city))


@router.get("/exists-by-id/{location_id}", response_model=ExistsResponse)
async def location_exists_by_id(
    location_id: int,
    service: LocationService = Depends(get_location_service),
) -> ExistsResponse:
    return ExistsResponse(exists=await service.exists_by_id(location_id))


@router.get("/{location_id}", response_model=None)
async def get_location(
    location_id: int,
    fields: Optional[str] = Query(None),
    service: LocationService = Depends(get_location_service),
) -> Any:
    """Return a location, or only the requested fields of it."""
    return await service.get_by_id(location_id, fields)


@router.post("/", response_model=LocationRead, status_code=status.HTTP_201_CREATED)
async def create_location(
    location_in: LocationCreate,
    service: LocationService = Depends(get_location_service),
) -> LocationRead:
    return await service.create(location_in)


@router.put("/{location_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_location(
    location_id: int,
    location_in: LocationUpdate,
    service: LocationService = Depends(get_location_service),
) -> Response:
    await service.update(location_id, location_in)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{location_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_location(
    location_id: int,
    service: LocationService = Depends(get_location_service),
) -> Response:
    """Delete a location that no worker is attached to."""
    await service.delete(location_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
