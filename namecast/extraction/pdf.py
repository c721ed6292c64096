"""PDF extraction using pypdf. Best effort: failures degrade to no names."""

from pathlib import Path
from typing import Iterable, List

from pypdf import PdfReader

from namecast.extraction.base import ContentKind, ExtractionStrategy
from namecast.extraction.text import DEFAULT_HEADER_TOKENS, parse_names_from_text


class PdfStrategy(ExtractionStrategy):
    kind = ContentKind.PDF

    def __init__(self, header_tokens: Iterable[str] = DEFAULT_HEADER_TOKENS):
        self.header_tokens = frozenset(header_tokens)

    def parse(self, path: Path) -> List[str]:
        reader = PdfReader(str(path))
        text = "\n".join(page.extract_text() or "" for page in reader.pages)
        return parse_names_from_text(text, self.header_tokens)

    def get_description(self) -> str:
        return "PDF text layer, all pages"
