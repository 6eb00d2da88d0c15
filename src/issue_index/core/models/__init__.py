"""Core data models for issue processing."""

from .article import ArticleBlock, ArticleRecord
from .reference import NOT_MENTIONED, ParsedReference, ReferenceType
from .diagnostics import Diagnostic, DiagnosticsCollector, Severity
from .validators import (
    to_str,
    to_list,
    normalize,
)

__all__ = [
    "ArticleBlock",
    "ArticleRecord",
    "NOT_MENTIONED",
    "ParsedReference",
    "ReferenceType",
    "Diagnostic",
    "DiagnosticsCollector",
    "Severity",
    "to_str",
    "to_list",
    "normalize",
]
