"""Custom exceptions for the namecast generation pipeline.

All exceptions carry a short client-safe message; internal detail (paths,
library errors) goes into ``details`` and is only logged.
"""

from namecast.exceptions.base import (
    NamecastError,
    ValidationError,
    ResourceNotFoundError,
)
from namecast.exceptions.session import (
    SessionError,
    SessionNotFoundError,
    InvalidSessionStateError,
    SessionBusyError,
)
from namecast.exceptions.pipeline import (
    UploadError,
    UploadTooLargeError,
    SourceReadError,
    RenderingError,
    ArchiveError,
)

__all__ = [
    # Base exceptions
    "NamecastError",
    "ValidationError",
    "ResourceNotFoundError",
    # Sessions
    "SessionError",
    "SessionNotFoundError",
    "InvalidSessionStateError",
    "SessionBusyError",
    # Pipeline
    "UploadError",
    "UploadTooLargeError",
    "SourceReadError",
    "RenderingError",
    "ArchiveError",
]
