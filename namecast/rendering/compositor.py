"""Text overlay compositor.

Renders one name onto a copy of the template: a transparent text layer the
size of the template carries the positioned text, and is composited over
the template at the origin.
"""

import io
from pathlib import Path
from typing import Optional, Tuple, Union

from PIL import Image, ImageDraw, ImageFont, UnidentifiedImageError

from namecast.exceptions import RenderingError
from namecast.logger import Logger, session_logger
from namecast.rendering.fonts import FontResolver
from namecast.validation.color_validator import to_rgba
from namecast.validation.models import OverlaySpec

DEFAULT_CANVAS_SIZE: Tuple[int, int] = (2000, 1000)
JPEG_BACKGROUND = (255, 255, 255)


class TextOverlayCompositor:
    """Composites a single name onto a template image."""

    def __init__(
        self,
        font_resolver: Optional[FontResolver] = None,
        logger: Optional[Logger] = None,
    ):
        self.font_resolver = font_resolver or FontResolver()
        self.logger = logger or session_logger

    def render(
        self,
        template_path: Union[str, Path],
        spec: OverlaySpec,
        destination: Union[str, Path],
    ) -> bytes:
        """
        Render ``spec.text`` onto the template and write a PNG.

        Args:
            template_path: Template image
            spec: Position, font, color and text
            destination: Where to write the PNG

        Returns:
            The PNG bytes that were written

        Raises:
            RenderingError: If the template cannot be read or the output written
        """
        png_bytes = self.render_to_bytes(template_path, spec)
        try:
            Path(destination).write_bytes(png_bytes)
        except OSError as e:
            self.logger.error(
                "Failed to write rendered image", destination=str(destination), error=str(e)
            )
            raise RenderingError("Rendered image could not be saved", details={"error": str(e)})
        return png_bytes

    def render_to_bytes(self, template_path: Union[str, Path], spec: OverlaySpec) -> bytes:
        try:
            with Image.open(template_path) as template:
                template.load()
                base = self._canvas_for(template)
        except (OSError, UnidentifiedImageError, ValueError, Image.DecompressionBombError) as e:
            self.logger.error(
                "Failed to read template",
                template=str(template_path),
                error=str(e),
                error_type=type(e).__name__,
            )
            raise RenderingError("Template image could not be read", details={"error": str(e)})

        try:
            layer = self._text_layer(base.size, spec)
            composed = Image.alpha_composite(base, layer)
            buf = io.BytesIO()
            composed.save(buf, format="PNG")
        except (OSError, ValueError) as e:
            self.logger.error(
                "Composition failed", text=spec.text, error=str(e), error_type=type(e).__name__
            )
            raise RenderingError("Name could not be rendered", details={"error": str(e)})

        self.logger.debug(
            "Name rendered",
            text=spec.text,
            width=base.size[0],
            height=base.size[1],
            size_bytes=buf.tell(),
        )
        return buf.getvalue()

    def _canvas_for(self, template: Image.Image) -> Image.Image:
        width, height = template.size
        if width > 0 and height > 0:
            return template.convert("RGBA")
        canvas = Image.new("RGBA", DEFAULT_CANVAS_SIZE, (255, 255, 255, 255))
        return canvas

    def _text_layer(self, size: Tuple[int, int], spec: OverlaySpec) -> Image.Image:
        layer = Image.new("RGBA", size, (0, 0, 0, 0))
        draw = ImageDraw.Draw(layer)
        font = self.font_resolver.get_font(spec.font_family, spec.font_size)
        fill = to_rgba(spec.color)
        if isinstance(font, ImageFont.FreeTypeFont):
            # "la": x/y is the left edge at the ascender line, like a hanging baseline
            draw.text((spec.x, spec.y), spec.text, font=font, fill=fill, anchor="la")
        else:
            draw.text((spec.x, spec.y), spec.text, font=font, fill=fill)
        return layer


def to_jpeg(png_bytes: bytes, quality: int = 90) -> bytes:
    """Convert a PNG buffer to JPEG, flattening transparency onto white."""
    try:
        with Image.open(io.BytesIO(png_bytes)) as img:
            rgba = img.convert("RGBA")
        flat = Image.new("RGB", rgba.size, JPEG_BACKGROUND)
        flat.paste(rgba, mask=rgba.getchannel("A"))
        buf = io.BytesIO()
        flat.save(buf, format="JPEG", quality=quality)
    except (OSError, ValueError, UnidentifiedImageError) as e:
        raise RenderingError("Image could not be converted to JPEG", details={"error": str(e)})
    return buf.getvalue()
