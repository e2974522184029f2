"""
Top-level router for version 1 of the API.

This router aggregates the entity routers under a unified prefix.
When new entities are introduced, include their routers here.
"""

from fastapi import APIRouter

from .endpoints import locations, services, workers

router = APIRouter()

router.include_router(locations.router, prefix="/locations", tags=["locations"])
router.include_router(services.router, prefix="/services", tags=["services"])
router.include_router(workers.router, prefix="/workers", tags=["workers"])
