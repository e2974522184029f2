"""
Application package initializer.

This package contains the main entrypoint for the API and all of its
submodules.  ``core`` holds configuration, persistence, caching and the
generic query and projection helpers; ``services`` holds the business
logic per entity; ``schemas`` the pydantic payloads; ``api`` the
versioned routers.
"""

from .main import app  # noqa: F401
