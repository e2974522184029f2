"""
Response envelopes shared by all entity endpoints.
"""

import math
from typing import Any, List

from pydantic import BaseModel, Field


class PagedResponse(BaseModel):
    """One page of a list query.

    ``items`` holds full records, or dicts when a field projection was
    requested.  ``page_size`` is the effective size after clamping.
    """

    page_number: int
    page_size: int
    total_count: int
    total_pages: int
    items: List[Any] = Field(default_factory=list)

    @classmethod
    def build(cls, items: List[Any], total_count: int, page_number: int, page_size: int) -> "PagedResponse":
        return cls(
            page_number=page_number,
            page_size=page_size,
            total_count=total_count,
            total_pages=math.ceil(total_count / page_size) if page_size else 0,
            items=items,
        )


class ExistsResponse(BaseModel):
    exists: bool
