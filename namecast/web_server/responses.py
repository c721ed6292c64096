"""Web response helpers.

- success/error envelope formatting
- mapping of namecast exceptions to HTTP status codes
- Pydantic validation error formatting
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi.responses import JSONResponse

from namecast.exceptions import (
    ArchiveError,
    NamecastError,
    RenderingError,
    ResourceNotFoundError,
    SessionBusyError,
    SourceReadError,
    UploadTooLargeError,
    ValidationError,
)
from namecast.validation.models import ErrorResponse

# Server-side failures get a fixed summary instead of the exception message
_GENERIC_MESSAGES = {
    SourceReadError: "Upload failed.",
    RenderingError: "Rendering failed.",
    ArchiveError: "Generation failed.",
}

_RECOVERY = {
    "SESSION_NOT_FOUND": "Upload the template and list again to start a new session.",
    "INVALID_SESSION_STATE": "Upload a template and a list containing at least one name.",
    "SESSION_BUSY": "Wait for the running generation to finish, then retry.",
    "UPLOAD_TOO_LARGE": "Upload a smaller file.",
    "INVALID_UPLOAD": "Send both the 'template' image and the 'list' file.",
    "INVALID_ARGUMENTS": "Correct the request fields listed in 'details' and retry.",
    "ARCHIVE_NOT_FOUND": "Call /api/generate before downloading.",
}
_DEFAULT_RECOVERY = "Retry the request; if it keeps failing, start a new session."


def _model_dump(model: Any) -> Any:
    if hasattr(model, "model_dump"):
        return model.model_dump(mode="json")
    return model


def success(data: Any, message: Optional[str] = None, status_code: int = 200) -> JSONResponse:
    payload: Dict[str, Any] = {"status": "success", "data": _model_dump(data)}
    if message:
        payload["message"] = message
    return JSONResponse(status_code=status_code, content=payload)


def error(
    code: str,
    message: str,
    status_code: int,
    recovery: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None,
) -> JSONResponse:
    error_model = ErrorResponse(
        error_code=code,
        message=message,
        recovery_strategy=recovery or _RECOVERY.get(code, _DEFAULT_RECOVERY),
        details=details,
    )
    payload = {"status": "error", **error_model.model_dump(mode="json", exclude_none=True)}
    return JSONResponse(status_code=status_code, content=payload)


def status_for(exc: NamecastError) -> int:
    if isinstance(exc, SessionBusyError):
        return 409
    if isinstance(exc, UploadTooLargeError):
        return 413
    if isinstance(exc, ResourceNotFoundError):
        return 404
    if isinstance(exc, ValidationError):
        return 400
    return 500


def error_from_exception(exc: NamecastError) -> JSONResponse:
    """Build the client response; internal details never leave the server."""
    message = exc.message
    for exc_type, generic in _GENERIC_MESSAGES.items():
        if isinstance(exc, exc_type):
            message = generic
            break
    return error(code=exc.code, message=message, status_code=status_for(exc))


def validation_error(errors: List[Dict[str, Any]]) -> JSONResponse:
    fields = [".".join(str(part) for part in e.get("loc", ()) if part != "body") for e in errors]
    return error(
        code="INVALID_ARGUMENTS",
        message=f"Request failed validation. {len(errors)} error(s) found.",
        status_code=400,
        details={"fields": [f for f in fields if f]},
    )
