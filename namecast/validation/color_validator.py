"""Color validation for overlay text.

Accepts anything Pillow's color parser understands: hex (#RGB, #RRGGBB,
#RRGGBBAA), CSS names ("navy"), rgb()/hsl() functions.
"""

from typing import Optional, Dict, Any, Tuple

from PIL import ImageColor

from namecast.exceptions import ValidationError

DEFAULT_COLOR = "#000000"


class ColorValidationError(ValidationError):
    """Raised when color validation fails."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(code="INVALID_COLOR", message=message, details=details)


def validate_color(color: Optional[str]) -> bool:
    """Validate a color value.

    Args:
        color: Color value (CSS name, hex code or color function)

    Returns:
        True if valid, False otherwise. Empty values are valid (default applies).
    """
    if not color or not color.strip():
        return True

    try:
        ImageColor.getrgb(color.strip())
    except ValueError:
        return False
    return True


def normalize_color(color: Optional[str]) -> str:
    """Return the color stripped, or the default black when empty or invalid."""
    if not color or not color.strip() or not validate_color(color):
        return DEFAULT_COLOR
    return color.strip()


def to_rgba(color: str) -> Tuple[int, int, int, int]:
    """Convert a color string to an RGBA tuple.

    Raises:
        ColorValidationError: If color is invalid
    """
    try:
        rgb = ImageColor.getrgb(color.strip())
    except (ValueError, AttributeError):
        raise ColorValidationError(f"Invalid color: {color}")
    if len(rgb) == 3:
        return (rgb[0], rgb[1], rgb[2], 255)
    return rgb  # type: ignore[return-value]
