"""Validation models and helpers."""

from namecast.validation.color_validator import (
    ColorValidationError,
    DEFAULT_COLOR,
    normalize_color,
    to_rgba,
    validate_color,
)
from namecast.validation.models import (
    DEFAULT_FONT_FAMILY,
    DEFAULT_FONT_SIZE,
    ErrorResponse,
    GenerateOutput,
    GenerateRequest,
    OutputFormat,
    OverlaySpec,
    OverlayStyle,
    PreviewOutput,
    PreviewRequest,
    SessionStatusOutput,
    UploadOutput,
)

__all__ = [
    "ColorValidationError",
    "DEFAULT_COLOR",
    "normalize_color",
    "to_rgba",
    "validate_color",
    "DEFAULT_FONT_FAMILY",
    "DEFAULT_FONT_SIZE",
    "ErrorResponse",
    "GenerateOutput",
    "GenerateRequest",
    "OutputFormat",
    "OverlaySpec",
    "OverlayStyle",
    "PreviewOutput",
    "PreviewRequest",
    "SessionStatusOutput",
    "UploadOutput",
]
