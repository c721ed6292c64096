"""Base types for name extraction strategies."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional


class ContentKind(str, Enum):
    """Declared kind of an uploaded list document."""

    DELIMITED_TEXT = "delimited_text"
    SPREADSHEET = "spreadsheet"
    LEGACY_SPREADSHEET = "legacy_spreadsheet"
    RICH_TEXT = "rich_text"
    PDF = "pdf"
    UNKNOWN = "unknown"


class ExtractionStatus(str, Enum):
    OK = "ok"
    DEGRADED = "degraded"
    UNSUPPORTED = "unsupported"


@dataclass
class ExtractionResult:
    """Names pulled from a document plus how well the extraction went."""

    names: List[str] = field(default_factory=list)
    status: ExtractionStatus = ExtractionStatus.OK
    reason: Optional[str] = None

    @classmethod
    def degraded(cls, reason: str) -> "ExtractionResult":
        return cls(names=[], status=ExtractionStatus.DEGRADED, reason=reason)

    @classmethod
    def unsupported(cls, reason: str) -> "ExtractionResult":
        return cls(names=[], status=ExtractionStatus.UNSUPPORTED, reason=reason)

    @property
    def is_degraded(self) -> bool:
        return self.status != ExtractionStatus.OK


class ExtractionStrategy(ABC):
    """Turns one kind of document into an ordered list of names.

    Subclasses implement ``parse``. ``extract`` wraps it so that a parser
    failure comes back as a degraded result instead of an exception; only
    the caller (``NameExtractor``) deals with unreadable files.
    """

    kind: ContentKind

    def is_available(self) -> bool:
        """Whether the backing parser can run in this environment."""
        return True

    @abstractmethod
    def parse(self, path: Path) -> List[str]:
        """Parse the document at ``path`` and return names in document order."""
        pass

    @abstractmethod
    def get_description(self) -> str:
        pass

    def extract(self, path: Path) -> ExtractionResult:
        if not self.is_available():
            return ExtractionResult.unsupported(f"{self.kind.value} extraction is not available")
        try:
            return ExtractionResult(names=self.parse(path))
        except OSError:
            raise
        except Exception as exc:
            return ExtractionResult.degraded(f"{type(exc).__name__}: {exc}")
