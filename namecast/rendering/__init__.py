"""Image composition."""

from namecast.rendering.compositor import TextOverlayCompositor, to_jpeg
from namecast.rendering.fonts import FontResolver

__all__ = ["TextOverlayCompositor", "FontResolver", "to_jpeg"]
