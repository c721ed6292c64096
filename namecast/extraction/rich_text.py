"""Word document extraction using python-docx."""

from pathlib import Path
from typing import Iterable, List

import docx
from docx.table import Table

from namecast.extraction.base import ContentKind, ExtractionStrategy
from namecast.extraction.text import DEFAULT_HEADER_TOKENS, parse_names_from_text


def docx_plain_text(path: Path) -> str:
    """Body paragraphs and table cells in document order, one block per line."""
    document = docx.Document(str(path))
    lines = []
    for block in document.iter_inner_content():
        if isinstance(block, Table):
            for row in block.rows:
                for cell in row.cells:
                    lines.append(cell.text)
        else:
            lines.append(block.text)
    return "\n".join(lines)


class RichTextStrategy(ExtractionStrategy):
    kind = ContentKind.RICH_TEXT

    def __init__(self, header_tokens: Iterable[str] = DEFAULT_HEADER_TOKENS):
        self.header_tokens = frozenset(header_tokens)

    def parse(self, path: Path) -> List[str]:
        return parse_names_from_text(docx_plain_text(path), self.header_tokens)

    def get_description(self) -> str:
        return "Word document (.docx), paragraphs and table cells"
