"""Name extraction from list documents.

Each content kind (delimited text, spreadsheet, Word, PDF, unknown) has a
strategy registered with the NameExtractor.
"""

from namecast.extraction.base import (
    ContentKind,
    ExtractionResult,
    ExtractionStatus,
    ExtractionStrategy,
)
from namecast.extraction.extractor import NameExtractor, default_strategies, kind_for_extension
from namecast.extraction.text import DEFAULT_HEADER_TOKENS, parse_names_from_text

__all__ = [
    "ContentKind",
    "ExtractionResult",
    "ExtractionStatus",
    "ExtractionStrategy",
    "NameExtractor",
    "default_strategies",
    "kind_for_extension",
    "DEFAULT_HEADER_TOKENS",
    "parse_names_from_text",
]
