"""
Pydantic models for services (company departments).
"""

from pydantic import BaseModel, Field


class ServiceBase(BaseModel):
    name: str = Field(..., max_length=100, examples=["Accounting"])

    model_config = {
        "str_strip_whitespace": True,
    }


class ServiceCreate(ServiceBase):
    """Schema for creating a service."""
    pass


class ServiceUpdate(ServiceBase):
    """Full replacement of a service; ``id`` must match the target."""

    id: int


class ServiceRead(ServiceBase):
    """Schema for reading a service."""

    id: int

    model_config = {
        "from_attributes": True,
        "str_strip_whitespace": True,
    }
