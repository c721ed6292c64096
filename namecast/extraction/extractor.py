"""Name extractor: picks a strategy by content kind and runs it."""

from pathlib import Path
from typing import Dict, Iterable, Optional, Union

from namecast.exceptions import SourceReadError
from namecast.extraction.base import (
    ContentKind,
    ExtractionResult,
    ExtractionStrategy,
)
from namecast.extraction.pdf import PdfStrategy
from namecast.extraction.rich_text import RichTextStrategy
from namecast.extraction.spreadsheet import LegacySpreadsheetStrategy, SpreadsheetStrategy
from namecast.extraction.text import (
    DEFAULT_HEADER_TOKENS,
    DelimitedTextStrategy,
    FallbackTextStrategy,
)
from namecast.logger import Logger, session_logger

_EXTENSION_KINDS: Dict[str, ContentKind] = {
    ".csv": ContentKind.DELIMITED_TEXT,
    ".txt": ContentKind.DELIMITED_TEXT,
    ".xlsx": ContentKind.SPREADSHEET,
    ".xlsm": ContentKind.SPREADSHEET,
    ".xls": ContentKind.LEGACY_SPREADSHEET,
    ".docx": ContentKind.RICH_TEXT,
    ".pdf": ContentKind.PDF,
}


def kind_for_extension(extension: Optional[str]) -> ContentKind:
    """Map a file extension (with or without the dot) to a content kind."""
    if not extension:
        return ContentKind.UNKNOWN
    ext = extension.lower()
    if not ext.startswith("."):
        ext = "." + ext
    return _EXTENSION_KINDS.get(ext, ContentKind.UNKNOWN)


def default_strategies(
    header_tokens: Iterable[str] = DEFAULT_HEADER_TOKENS,
) -> Dict[ContentKind, ExtractionStrategy]:
    header_tokens = frozenset(header_tokens)
    return {
        ContentKind.DELIMITED_TEXT: DelimitedTextStrategy(header_tokens),
        ContentKind.SPREADSHEET: SpreadsheetStrategy(),
        ContentKind.LEGACY_SPREADSHEET: LegacySpreadsheetStrategy(),
        ContentKind.RICH_TEXT: RichTextStrategy(header_tokens),
        ContentKind.PDF: PdfStrategy(header_tokens),
        ContentKind.UNKNOWN: FallbackTextStrategy(header_tokens),
    }


class NameExtractor:
    """Normalizes list documents into an ordered sequence of names."""

    def __init__(
        self,
        strategies: Optional[Dict[ContentKind, ExtractionStrategy]] = None,
        logger: Optional[Logger] = None,
    ):
        self.strategies = strategies if strategies is not None else default_strategies()
        self.logger = logger or session_logger

    def extract(
        self,
        source: Union[str, Path],
        kind: Optional[ContentKind] = None,
        extension: Optional[str] = None,
    ) -> ExtractionResult:
        """
        Extract names from a document.

        Args:
            source: Path to the document
            kind: Declared content kind; derived from ``extension`` (or the
                path suffix) when omitted
            extension: Declared file extension, e.g. ".csv"

        Returns:
            ExtractionResult; parser failures come back with a degraded status

        Raises:
            SourceReadError: If the file does not exist or cannot be opened
        """
        path = Path(source)
        if kind is None:
            kind = kind_for_extension(extension if extension is not None else path.suffix)

        self._check_readable(path)

        strategy = self.strategies.get(kind)
        if strategy is None:
            self.logger.warning("No extraction strategy registered", kind=kind.value)
            return ExtractionResult.unsupported(f"no strategy for {kind.value}")

        try:
            result = strategy.extract(path)
        except OSError as exc:
            raise SourceReadError(str(path), str(exc)) from exc

        if result.is_degraded:
            self.logger.warning(
                "Name extraction degraded, continuing without names",
                kind=kind.value,
                status=result.status.value,
                reason=result.reason,
            )
        else:
            self.logger.info("Names extracted", kind=kind.value, count=len(result.names))
        return result

    def list_strategies(self) -> Dict[str, str]:
        return {kind.value: s.get_description() for kind, s in self.strategies.items()}

    def _check_readable(self, path: Path) -> None:
        if not path.is_file():
            self.logger.error("List file not found", path=str(path))
            raise SourceReadError(str(path), "file does not exist")
        try:
            with path.open("rb"):
                pass
        except OSError as exc:
            self.logger.error("List file not readable", path=str(path), error=str(exc))
            raise SourceReadError(str(path), str(exc)) from exc
