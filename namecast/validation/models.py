"""Request and response models using Pydantic v2."""

from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from namecast.validation.color_validator import DEFAULT_COLOR, normalize_color

DEFAULT_FONT_FAMILY = "Arial"
DEFAULT_FONT_SIZE = 48.0


def _lenient_int(value: Any) -> Optional[int]:
    """Parse numbers sent as int, float or numeric string; anything else is None."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if number != number or number in (float("inf"), float("-inf")):
        return None
    return int(number)


class OutputFormat(str, Enum):
    """Artifact formats. PNG is what the compositor emits natively."""

    PNG = "png"
    JPEG = "jpg"

    @classmethod
    def from_value(cls, value: Optional[str]) -> "OutputFormat":
        """``jpg``/``jpeg`` in any case select JPEG, everything else PNG."""
        if value and str(value).strip().lower() in ("jpg", "jpeg"):
            return cls.JPEG
        return cls.PNG

    @property
    def extension(self) -> str:
        return self.value


class OverlayStyle(BaseModel):
    """Position and styling of the name, without the name itself."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True, alias_generator=to_camel)

    x: float = 0.0
    y: float = 0.0
    font_family: str = DEFAULT_FONT_FAMILY
    font_size: float = DEFAULT_FONT_SIZE
    color: str = DEFAULT_COLOR

    @field_validator("x", "y", mode="before")
    @classmethod
    def _coordinate_default(cls, value: Any) -> Any:
        if value is None or value == "":
            return 0.0
        return value

    @field_validator("font_family", mode="before")
    @classmethod
    def _family_default(cls, value: Any) -> str:
        if value is None or not str(value).strip():
            return DEFAULT_FONT_FAMILY
        return str(value).strip()

    @field_validator("font_size", mode="before")
    @classmethod
    def _size_default(cls, value: Any) -> float:
        try:
            size = float(value)
        except (TypeError, ValueError):
            return DEFAULT_FONT_SIZE
        if size != size or size <= 0 or size == float("inf"):
            return DEFAULT_FONT_SIZE
        return size

    @field_validator("color", mode="before")
    @classmethod
    def _color_default(cls, value: Any) -> str:
        return normalize_color(value if isinstance(value, str) else None)

    def with_text(self, text: str) -> "OverlaySpec":
        return OverlaySpec(text=text, **self.model_dump())


class OverlaySpec(OverlayStyle):
    """Overlay style plus the one name to render."""

    text: str = ""


class SessionRequest(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, alias_generator=to_camel)

    session_id: str = Field(min_length=1)


class PreviewRequest(SessionRequest, OverlayStyle):
    """Body of POST /api/preview."""

    index: int = 0

    @field_validator("index", mode="before")
    @classmethod
    def _index_default(cls, value: Any) -> int:
        parsed = _lenient_int(value)
        return parsed if parsed is not None and parsed >= 0 else 0

    def style(self) -> OverlayStyle:
        return OverlayStyle(**self.model_dump(include=set(OverlayStyle.model_fields)))


class GenerateRequest(SessionRequest, OverlayStyle):
    """Body of POST /api/generate."""

    format: Optional[str] = None
    offset: Optional[int] = None
    limit: Optional[int] = None

    @field_validator("offset", "limit", mode="before")
    @classmethod
    def _lenient_numbers(cls, value: Any) -> Optional[int]:
        return _lenient_int(value)

    @property
    def output_format(self) -> OutputFormat:
        return OutputFormat.from_value(self.format)

    def style(self) -> OverlayStyle:
        return OverlayStyle(**self.model_dump(include=set(OverlayStyle.model_fields)))


class ErrorResponse(BaseModel):
    """Error response structure."""

    model_config = ConfigDict(extra="ignore")

    error_code: str
    message: str
    recovery_strategy: str
    details: Optional[dict] = None


class UploadOutput(BaseModel):
    session_id: str
    names_preview: List[str]
    names_total: int
    extraction_status: str
    extraction_reason: Optional[str] = None


class PreviewOutput(BaseModel):
    session_id: str
    name: str
    preview: str


class GenerateOutput(BaseModel):
    session_id: str
    download_url: str
    processed: int
    offset: int
    total: int
    format: str


class SessionStatusOutput(BaseModel):
    session_id: str
    created_at: str
    names_total: int
    has_template: bool
    is_ready: bool
    archive_available: bool
