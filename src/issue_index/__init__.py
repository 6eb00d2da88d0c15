"""Issue Index - Extraction of article records and references from converted journal issues."""

from .core.config import DEFAULT_CONFIG, PatternConfig
from .core.models import (
    ArticleBlock,
    ArticleRecord,
    Diagnostic,
    DiagnosticsCollector,
    NOT_MENTIONED,
    ParsedReference,
    ReferenceType,
    Severity,
)
from .core.segmenters import segment_document, split_reference_lines
from .core.parsers import classify_reference, extract_article, normalize_pages, parse_reference
from .pipelines import IssueExtraction, NoArticlesFoundError, extract_issue
from .utils import IssueDoi, parse_issue_doi

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_CONFIG",
    "PatternConfig",
    "ArticleBlock",
    "ArticleRecord",
    "Diagnostic",
    "DiagnosticsCollector",
    "NOT_MENTIONED",
    "ParsedReference",
    "ReferenceType",
    "Severity",
    "segment_document",
    "split_reference_lines",
    "classify_reference",
    "extract_article",
    "normalize_pages",
    "parse_reference",
    "IssueExtraction",
    "NoArticlesFoundError",
    "extract_issue",
    "IssueDoi",
    "parse_issue_doi",
]
