"""
Pydantic models for workers and worker transfers.

Workers belong to exactly one location and one service.  Field formats
(non-empty names, e-mail and phone shapes) are checked by the worker
service so that every entry point, including transfers, applies the
same rules; these models only enforce types and maximum lengths.
"""

from typing import List, Optional

from pydantic import BaseModel, Field, computed_field


class WorkerBase(BaseModel):
    first_name: str = Field(..., max_length=50, examples=["Jeanne"])
    last_name: str = Field(..., max_length=50, examples=["Martin"])
    email: str = Field(..., max_length=100, examples=["jeanne.martin@example.com"])
    phone_fixed: str = Field(..., max_length=15, examples=["01 23 45 67 89"])
    phone_mobile: str = Field(..., max_length=15, examples=["+33612345678"])
    location_id: int = Field(..., examples=[1])
    service_id: int = Field(..., examples=[1])

    model_config = {
        "str_strip_whitespace": True,
    }


class WorkerCreate(WorkerBase):
    """Schema for creating a worker."""
    pass


class WorkerUpdate(WorkerBase):
    """Full replacement of a worker; ``id`` must match the target."""

    id: int


class WorkerRead(WorkerBase):
    """Schema for reading a worker."""

    id: int

    model_config = {
        "from_attributes": True,
        "str_strip_whitespace": True,
    }


class WorkerTransfer(BaseModel):
    """Request to move workers to a new location and/or service.

    Omitted targets leave the corresponding field of each worker
    unchanged.  With ``allow_partial_transfer`` the batch records
    per-worker failures and carries on; otherwise the first failure
    aborts it.
    """

    worker_ids: List[int] = Field(default_factory=list, examples=[[1, 2, 3]])
    new_location_id: Optional[int] = Field(None, ge=1, examples=[2])
    new_service_id: Optional[int] = Field(None, ge=1, examples=[None])
    allow_partial_transfer: bool = Field(False)


class TransferErrorDetail(BaseModel):
    worker_id: int
    message: str


class TransferResult(BaseModel):
    """Outcome of a worker transfer batch."""

    total_workers: int
    success_count: int
    errors: List[TransferErrorDetail] = Field(default_factory=list)

    @computed_field
    @property
    def failed_count(self) -> int:
        return self.total_workers - self.success_count

    @computed_field
    @property
    def is_complete_success(self) -> bool:
        return self.failed_count == 0
