"""Small text helpers shared by the segmenter and the parsers."""

import re
from typing import List, Sequence

_WHITESPACE = re.compile(r"\s+")


def collapse_whitespace(text: str) -> str:
    """Trim and replace every whitespace run with a single space."""
    if not text:
        return ""
    return _WHITESPACE.sub(" ", text).strip()


def split_lines_any(text: str, line_endings: Sequence[str] = ("\r\n", "\n", "\r")) -> List[str]:
    """Split text into trimmed, non-empty lines.

    Line endings are tried in order and the first one that yields more than one
    line wins, so documents converted on different platforms (or a mix of them)
    split the same way. Falls back to the single trimmed line.
    """
    lines: List[str] = []
    for ending in line_endings:
        lines = [ln.strip() for ln in text.split(ending) if ln.strip()]
        if len(lines) > 1:
            return lines
    return lines
