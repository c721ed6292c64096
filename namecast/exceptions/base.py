"""Base exception classes for the namecast application.

Every error carries a machine-readable ``code``, a short human-readable
``message`` safe to show to clients, and optional ``details`` that are only
logged.
"""

from typing import Any, Dict, Optional


class NamecastError(Exception):
    """Root of the namecast exception hierarchy."""

    default_code = "NAMECAST_ERROR"

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.code = code or self.default_code
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"


class ValidationError(NamecastError):
    """Input failed validation (client fault)."""

    default_code = "VALIDATION_ERROR"


class ResourceNotFoundError(NamecastError):
    """A requested resource does not exist."""

    default_code = "NOT_FOUND"


__all__ = [
    "NamecastError",
    "ValidationError",
    "ResourceNotFoundError",
]
