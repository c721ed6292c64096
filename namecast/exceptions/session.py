"""Session-related exceptions."""

from typing import Optional, Dict, Any

from namecast.exceptions.base import ValidationError, ResourceNotFoundError


class SessionError(ValidationError):
    """Base exception for session-related errors."""

    pass


class SessionNotFoundError(ResourceNotFoundError):
    """Raised when a session cannot be found."""

    def __init__(self, session_id: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            code="SESSION_NOT_FOUND",
            message="Invalid session",
            details={"session_id": session_id, **(details or {})},
        )
        self.session_id = session_id


class InvalidSessionStateError(SessionError):
    """Raised when session is in an invalid state for the requested operation."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(code="INVALID_SESSION_STATE", message=message, details=details or {})


class SessionBusyError(SessionError):
    """Raised when a session already has a preview or generation in flight."""

    def __init__(self, session_id: str):
        super().__init__(
            code="SESSION_BUSY",
            message="A generation is already running for this session",
            details={"session_id": session_id},
        )
        self.session_id = session_id
