"""
Exceptions raised deliberately by the directory services.

``ValidationError``, ``NotFoundError`` and ``ConflictError`` are expected
outcomes that callers handle distinctly; the API layer maps them to
400, 404 and 409 responses.  Anything else is an unexpected failure and
propagates untouched.
"""

from typing import Any, Optional


class DirectoryError(Exception):
    """Base class for expected errors of the directory services."""

    def __init__(self, message: str, field: Optional[str] = None, value: Any = None):
        self.message = message
        self.field = field
        self.value = value
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


class ValidationError(DirectoryError):
    """Malformed or missing input: field format, pagination, id mismatch."""


class NotFoundError(DirectoryError):
    """A referenced entity (by id or as a foreign key target) does not exist."""


class ConflictError(DirectoryError):
    """Duplicate natural key, or a delete blocked by dependent rows."""


class TransferTimeoutError(TimeoutError):
    """A worker transfer batch ran past its deadline."""

    def __init__(self, message: str, processed: int = 0):
        self.message = message
        self.processed = processed
        super().__init__(message)
