"""Exceptions raised by the extraction, rendering and archive stages."""

from typing import Optional, Dict, Any

from namecast.exceptions.base import NamecastError, ValidationError


class UploadError(ValidationError):
    """Raised when an uploaded file is missing or unusable."""

    default_code = "INVALID_UPLOAD"


class UploadTooLargeError(UploadError):
    """Raised when an uploaded file exceeds the configured size limit."""

    def __init__(self, field: str, limit_mb: int):
        super().__init__(
            code="UPLOAD_TOO_LARGE",
            message=f"Uploaded '{field}' file exceeds {limit_mb} MB",
            details={"field": field, "limit_mb": limit_mb},
        )


class SourceReadError(NamecastError):
    """Raised when a list document cannot be located or read at all."""

    default_code = "SOURCE_READ_ERROR"

    def __init__(self, path: str, reason: str):
        super().__init__(
            message="The list file could not be read",
            details={"path": path, "reason": reason},
        )
        self.path = path


class RenderingError(NamecastError):
    """Raised when a name cannot be composited onto the template."""

    default_code = "RENDERING_ERROR"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, details=details)


class ArchiveError(NamecastError):
    """Raised when the output archive cannot be built."""

    default_code = "ARCHIVE_ERROR"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, details=details)
