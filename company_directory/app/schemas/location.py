"""
Pydantic models for locations.

``LocationBase`` holds the shared fields; ``LocationCreate`` is the
creation payload, ``LocationUpdate`` carries the id of the record being
replaced and ``LocationRead`` is what the services return.
"""

from pydantic import BaseModel, Field


class LocationBase(BaseModel):
    city: str = Field(..., max_length=50, examples=["Paris"])

    model_config = {
        "str_strip_whitespace": True,
    }


class LocationCreate(LocationBase):
    """Schema for creating a location."""
    pass


class LocationUpdate(LocationBase):
    """Full replacement of a location; ``id`` must match the target."""

    id: int


class LocationRead(LocationBase):
    """Schema for reading a location."""

    id: int

    model_config = {
        "from_attributes": True,
        "str_strip_whitespace": True,
    }
