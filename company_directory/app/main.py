"""
Main entrypoint for the Company Directory API.

This module assembles the FastAPI application, sets up logging, wires
the directory services and includes versioned routers.  The
``create_app`` function builds and configures the app, which is then
instantiated at module import time as ``app``.  Run it with uvicorn or
another ASGI server, e.g.::

    uvicorn company_directory.app.main:app --reload

The application title, version and database location are provided via
``Settings`` from ``core.config``.
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from .api.v1.router import router as v1_router
from .core.config import Settings, settings as default_settings
from .core.db import init_db
from .core.exceptions import (
    ConflictError,
    DirectoryError,
    NotFoundError,
    TransferTimeoutError,
    ValidationError,
)
from .core.logging_config import setup_logging
from .services.container import build_services

logger = logging.getLogger(__name__)

ERROR_STATUS = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ConflictError: status.HTTP_409_CONFLICT,
}


async def directory_error_handler(request: Request, exc: DirectoryError) -> JSONResponse:
    status_code = next(
        (code for error_type, code in ERROR_STATUS.items() if isinstance(exc, error_type)),
        status.HTTP_400_BAD_REQUEST,
    )
    logger.info("%s %s -> %s: %s", request.method, request.url.path, status_code, exc)
    return JSONResponse(status_code=status_code, content={"detail": exc.message})


async def transfer_timeout_handler(request: Request, exc: TransferTimeoutError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_504_GATEWAY_TIMEOUT,
        content={"detail": exc.message},
    )


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    app_settings : Optional[Settings]
        Settings to use instead of the module-level ``settings``, e.g.
        to point a test application at a temporary database.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    app_settings = app_settings or default_settings
    # Initialise logging before anything else so that the services can
    # safely log messages.
    setup_logging(app_settings.log_level, app_settings.log_file)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Creates the database file if needed and applies migrations.
        init_db(app_settings.database_url)
        logger.info("Database ready at %s", app_settings.database_url)
        yield
        await app.state.services.cache.clear()

    app = FastAPI(
        title=app_settings.project_name,
        version=app_settings.api_version,
        debug=app_settings.debug,
        lifespan=lifespan,
    )
    app.state.settings = app_settings
    app.state.services = build_services(app_settings)

    app.add_exception_handler(DirectoryError, directory_error_handler)
    app.add_exception_handler(TransferTimeoutError, transfer_timeout_handler)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        logger.info(
            "%s %s %s (%.1f ms)",
            request.method,
            request.url.path,
            response.status_code,
            (time.perf_counter() - started) * 1000,
        )
        return response

    # Mount versioned routes under /api/v1.
    app.include_router(v1_router, prefix="/api/v1")

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
