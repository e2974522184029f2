"""
Worker endpoints for API v1.

Besides CRUD, workers can be listed per location and/or service and
moved in batches through ``POST /workers/transfer``.  The transfer
route is declared before ``/{worker_id}`` so the literal path wins.
"""

from typing import Any, Optional

from fastapi import APIRouter, Depends, Query, Response, status

from company_directory.app.api.dependencies import (
    build_page,
    get_transfer_service,
    get_worker_service,
)
from company_directory.app.schemas.common import ExistsResponse, PagedResponse
from company_directory.app.schemas.worker import (
    TransferResult,
    WorkerCreate,
    WorkerRead,
    WorkerTransfer,
    WorkerUpdate,
)
from company_directory.app.services.transfer_service import WorkerTransferService
from company_directory.app.services.worker_service import WorkerService

router = APIRouter()


@router.get("/", response_model=PagedResponse)
async def list_workers(
    search_term: Optional[str] = Query(None),
    fields: Optional[str] = Query(None, examples=["first_name,last_name"]),
    page_number: int = Query(1),
    page_size: Optional[int] = Query(None),
    location_id: Optional[int] = Query(None),
    service_id: Optional[int] = Query(None),
    service: WorkerService = Depends(get_worker_service),
) -> PagedResponse:
    """Return one page of workers.

    ``search_term`` matches names, e-mail and phone numbers;
    ``location_id`` and ``service_id`` restrict the list to one
    location or service and can be combined.
    """
    items, total_count = await service.get_filtered(
        search_term,
        fields,
        page_number,
        page_size,
        location_id=location_id,
        service_id=service_id,
    )
    return build_page(service, items, total_count, page_number, page_size)


@router.post("/transfer", response_model=TransferResult)
async def transfer_workers(
    transfer_in: WorkerTransfer,
    transfers: WorkerTransferService = Depends(get_transfer_service),
) -> TransferResult:
    """Move workers to a new location and/or service."""
    return await transfers.transfer(
        transfer_in.worker_ids,
        new_location_id=transfer_in.new_location_id,
        new_service_id=transfer_in.new_service_id,
        allow_partial=transfer_in.allow_partial_transfer,
    )


@router.get("/exists/{email}", response_model=ExistsResponse)
async def worker_exists(
    email: str,
    service: WorkerService = Depends(get_worker_service),
) -> ExistsResponse:
    return ExistsResponse(exists=await service.exists_by_natural_key(email))


@router.get("/exists-by-id/{worker_id}", response_model=ExistsResponse)
async def worker_exists_by_id(
    worker_id: int,
    service: WorkerService = Depends(get_worker_service),
) -> ExistsResponse:
    return ExistsResponse(exists=await service.exists_by_id(worker_id))


@router.get("/{worker_id}", response_model=None)
async def get_worker(
    worker_id: int,
    fields: Optional[str] = Query(None),
    service: WorkerService = Depends(get_worker_service),
) -> Any:
    return await service.get_by_id(worker_id, fields)


@router.post("/", response_model=WorkerRead, status_code=status.HTTP_201_CREATED)
async def create_worker(
    worker_in: WorkerCreate,
    service: WorkerService = Depends(get_worker_service),
) -> WorkerRead:
    return await service.create(worker_in)


@router.put("/{worker_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_worker(
    worker_id: int,
    worker_in: WorkerUpdate,
    service: WorkerService = Depends(get_worker_service),
) -> Response:
    await service.update(worker_id, worker_in)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{worker_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_worker(
    worker_id: int,
    service: WorkerService = Depends(get_worker_service),
) -> Response:
    await service.delete(worker_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
