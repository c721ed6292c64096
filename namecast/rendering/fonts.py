"""Font resolution for the compositor.

Font families are looked up by name in the configured fonts directory,
then through Pillow's own search path, then in a short list of common
system fonts. Pillow's built-in scalable font is the last resort.
"""

import re
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from PIL import ImageFont

from namecast.logger import Logger, session_logger

FontType = Union[ImageFont.FreeTypeFont, ImageFont.ImageFont]

_SYSTEM_FONT_PATHS = [
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/TTF/DejaVuSans.ttf",
    "/usr/share/fonts/dejavu/DejaVuSans.ttf",
    "/Library/Fonts/Arial.ttf",
    "C:/Windows/Fonts/arial.ttf",
]

_FONT_SUFFIXES = (".ttf", ".otf", ".ttc")


def _family_key(name: str) -> str:
    return re.sub(r"[\s_\-]+", "", name).lower()


class FontResolver:
    """Caches fonts per (family, size)."""

    def __init__(
        self,
        fonts_dir: Optional[Union[str, Path]] = None,
        logger: Optional[Logger] = None,
    ):
        self.fonts_dir = Path(fonts_dir) if fonts_dir else None
        self.logger = logger or session_logger
        self._cache: Dict[Tuple[str, int], FontType] = {}
        self._index: Optional[Dict[str, Path]] = None

    def get_font(self, family: str, size: float) -> FontType:
        pixel_size = max(1, int(round(size)))
        key = (_family_key(family), pixel_size)
        if key in self._cache:
            return self._cache[key]

        font = self._load(family, pixel_size)
        self._cache[key] = font
        return font

    def available_families(self) -> List[str]:
        return sorted(path.stem for path in self._font_index().values())

    def _font_index(self) -> Dict[str, Path]:
        if self._index is None:
            self._index = {}
            if self.fonts_dir and self.fonts_dir.is_dir():
                for path in sorted(self.fonts_dir.iterdir()):
                    if path.suffix.lower() in _FONT_SUFFIXES:
                        self._index.setdefault(_family_key(path.stem), path)
        return self._index

    def _load(self, family: str, size: int) -> FontType:
        candidates: List[str] = []
        local = self._font_index().get(_family_key(family))
        if local is not None:
            candidates.append(str(local))
        # Pillow searches the platform font directories for bare filenames
        candidates.append(f"{family}.ttf")
        candidates.extend(p for p in _SYSTEM_FONT_PATHS if Path(p).exists())

        for candidate in candidates:
            try:
                return ImageFont.truetype(candidate, size)
            except OSError:
                continue

        self.logger.warning("Font not found, using built-in font", family=family, size=size)
        return ImageFont.load_default(size=size)
