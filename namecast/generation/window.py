"""Batch window clamping and artifact naming."""

import re
from dataclasses import dataclass
from typing import Optional

_UNSAFE_RUN = re.compile(r"[^A-Za-z0-9_-]+")


@dataclass(frozen=True)
class BatchWindow:
    """Half-open range ``[start, end)`` of name indexes for one call."""

    start: int
    end: int
    total: int

    @classmethod
    def clamp(
        cls,
        total: int,
        offset: Optional[int] = None,
        limit: Optional[int] = None,
        max_batch_size: int = 50,
    ) -> "BatchWindow":
        """
        Build the effective window.

        A missing, zero or negative ``limit`` means "as many as allowed";
        ``max_batch_size`` bounds every window regardless.
        """
        total = max(0, total)
        start = max(0, offset or 0)
        cap = max(1, max_batch_size)
        size = min(limit, cap) if limit is not None and limit > 0 else cap
        end = min(total, start + size)
        if start >= total:
            end = start
        return cls(start=start, end=end, total=total)

    @property
    def count(self) -> int:
        return max(0, self.end - self.start)

    def indexes(self) -> range:
        return range(self.start, self.end) if self.count else range(0)


def slugify_name(name: str) -> str:
    """Replace every run of characters outside ``[A-Za-z0-9_-]`` with ``_``."""
    return _UNSAFE_RUN.sub("_", name)


def artifact_filename(index: int, name: str, extension: str) -> str:
    """File name for the name at 0-based absolute ``index``: ``051-Jane_Doe.png``."""
    return f"{index + 1:03d}-{slugify_name(name)}.{extension}"
