"""Entry point for the company directory API.

Serves ``company_directory.app.main:app`` with Uvicorn.  It is intended
to be executed from the project root, for example under Docker, where
you only specify a single Python file to run.

Host and port are read from the environment variables ``API_HOST`` and
``API_PORT``; everything else (database path, cache duration, page
sizes, log level) is configured through the variables documented in
``company_directory/app/core/config.py``.

Usage:
    python run.py
"""
import asyncio
import os

from uvicorn import Config, Server

from company_directory.app.core.config import settings
from company_directory.app.main import app


async def main() -> None:
    """Start the API server using Uvicorn."""
    host = os.getenv("API_HOST", "0.0.0.0")
    port = int(os.getenv("API_PORT", "8000"))
    config = Config(app=app, host=host, port=port, reload=False, log_level=settings.log_level.lower())
    server = Server(config)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
