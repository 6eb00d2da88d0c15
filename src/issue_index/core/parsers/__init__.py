"""Parsers for article blocks and citation strings."""

from .article_parser import extract_article, normalize_pages, resolve_affiliations
from .reference_parser import (
    SPLIT_RULES,
    SplitRule,
    classify_reference,
    parse_reference,
    parse_references,
    split_title_meta,
)

__all__ = [
    "extract_article",
    "normalize_pages",
    "resolve_affiliations",
    "SPLIT_RULES",
    "SplitRule",
    "classify_reference",
    "parse_reference",
    "parse_references",
    "split_title_meta",
]
