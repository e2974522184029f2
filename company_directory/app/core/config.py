"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
service starts without any configuration; in a deployment you should
override them via environment variables.
"""

import os
from dataclasses import dataclass
from typing import Optional


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Company Directory API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "false").lower() in {"1", "true", "yes"}
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: Optional[str] = os.getenv("LOG_FILE") or None

    # Path to the SQLite database file.  Relative paths are resolved
    # against the project root by the ``db`` module.
    database_url: str = os.getenv("DATABASE_URL", "company_directory.db")

    # Lifetime of cached query results, in minutes.
    cache_duration_minutes: float = float(os.getenv("CACHE_DURATION_MINUTES", "5"))

    # Pagination bounds.  Requests above ``max_page_size`` are clamped
    # silently; ``default_page_size`` applies when the caller omits it.
    max_page_size: int = int(os.getenv("MAX_PAGE_SIZE", "100"))
    default_page_size: int = int(os.getenv("DEFAULT_PAGE_SIZE", "10"))

    # Upper bound for a whole worker transfer batch, in seconds.  ``0``
    # disables the deadline.
    transfer_timeout_seconds: float = float(os.getenv("TRANSFER_TIMEOUT_SECONDS", "30"))

    @property
    def cache_ttl_seconds(self) -> float:
        return self.cache_duration_minutes * 60

    @property
    def transfer_timeout(self) -> Optional[float]:
        return self.transfer_timeout_seconds if self.transfer_timeout_seconds > 0 else None


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# should be set before importing this module.
settings = Settings()
