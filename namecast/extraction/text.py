"""Delimited text parsing shared by every text-based strategy."""

import re
from pathlib import Path
from typing import FrozenSet, Iterable, List

from namecast.extraction.base import ContentKind, ExtractionResult, ExtractionStrategy

# Header labels that list exports commonly put above the names
DEFAULT_HEADER_TOKENS: FrozenSet[str] = frozenset({"liste", "list", "names", "noms"})

_SEPARATORS = re.compile(r"\r?\n|;|,")
_WHITESPACE = re.compile(r"\s+")


def _normalize_token(token: str) -> str:
    return _WHITESPACE.sub("", token).lower()


def parse_names_from_text(
    text: str, header_tokens: Iterable[str] = DEFAULT_HEADER_TOKENS
) -> List[str]:
    """Split text on newlines, semicolons and commas into trimmed names.

    Empty tokens are dropped, as are tokens matching a header label
    (case and whitespace insensitive).
    """
    denylist = {_normalize_token(t) for t in header_tokens}
    names = []
    for token in _SEPARATORS.split(text or ""):
        token = token.strip()
        if not token:
            continue
        if _normalize_token(token) in denylist:
            continue
        names.append(token)
    return names


class DelimitedTextStrategy(ExtractionStrategy):
    """CSV or plain text lists. Undecodable bytes are replaced, not fatal."""

    kind = ContentKind.DELIMITED_TEXT

    def __init__(self, header_tokens: Iterable[str] = DEFAULT_HEADER_TOKENS):
        self.header_tokens = frozenset(header_tokens)

    def parse(self, path: Path) -> List[str]:
        text = path.read_text(encoding="utf-8-sig", errors="replace")
        return parse_names_from_text(text, self.header_tokens)

    def get_description(self) -> str:
        return "Comma, semicolon or newline separated text"


class FallbackTextStrategy(ExtractionStrategy):
    """Unknown extensions: try strict UTF-8, give up with an empty list."""

    kind = ContentKind.UNKNOWN

    def __init__(self, header_tokens: Iterable[str] = DEFAULT_HEADER_TOKENS):
        self.header_tokens = frozenset(header_tokens)

    def parse(self, path: Path) -> List[str]:
        text = path.read_bytes().decode("utf-8")
        return parse_names_from_text(text, self.header_tokens)

    def extract(self, path: Path) -> ExtractionResult:
        try:
            return ExtractionResult(names=self.parse(path))
        except UnicodeDecodeError:
            return ExtractionResult.unsupported("content is not UTF-8 text")

    def get_description(self) -> str:
        return "Anything else, read as UTF-8 text when possible"
