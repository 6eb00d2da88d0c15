"""Utility functions for issue index."""

from .doi import IssueDoi, JOURNAL_CODES, parse_issue_doi
from .text import collapse_whitespace, split_lines_any

__all__ = [
    'IssueDoi',
    'JOURNAL_CODES',
    'parse_issue_doi',
    'collapse_whitespace',
    'split_lines_any',
]
