"""Pipeline turning the converted text of an issue into article records and parsed references."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from issue_index.core.config import DEFAULT_CONFIG, PatternConfig
from issue_index.core.models import (
    ArticleBlock,
    ArticleRecord,
    Diagnostic,
    DiagnosticsCollector,
    ParsedReference,
    Severity,
)
from issue_index.core.parsers.article_parser import extract_article
from issue_index.core.parsers.reference_parser import parse_references
from issue_index.core.segmenters.document_segmenter import segment_document

_LOGGER = logging.getLogger(__name__)


class NoArticlesFoundError(ValueError):
    """The issue text has no '<<<...>>>' delimited article at all."""


class IssueExtraction(BaseModel):
    """Everything extracted from one issue.

    `articles` and `references` are in source order and aligned:
    `references[i]` holds the parsed citations of `articles[i]`.
    """

    model_config = ConfigDict(frozen=True)

    articles: List[ArticleRecord] = Field(default_factory=list)
    references: List[List[ParsedReference]] = Field(default_factory=list)
    diagnostics: List[Diagnostic] = Field(default_factory=list)

    @property
    def first_doi(self) -> str:
        """First non-empty article DOI, used to look up the issue in the catalog."""
        return next((a.doi for a in self.articles if a.doi), "")

    @property
    def has_errors(self) -> bool:
        return any(d.severity is Severity.ERROR for d in self.diagnostics)


def _process_article(
    block: ArticleBlock, index: int, config: PatternConfig
) -> Tuple[ArticleRecord, List[ParsedReference], List[Diagnostic]]:
    record, diagnostics = extract_article(block, index, config)
    return record, parse_references(record.references, config), diagnostics


def extract_issue(
    text: str,
    config: Optional[PatternConfig] = None,
    collector: Optional[DiagnosticsCollector] = None,
    max_workers: int = 1,
) -> IssueExtraction:
    """Segment the issue, extract every article and parse its references.

    Args:
        text: Plain text of the issue with '<<<' / '>>>' around each reference list.
        config: Pattern tables and thresholds. Defaults to `DEFAULT_CONFIG`.
        collector: Collector to receive the diagnostics; a new one is used if None.
        max_workers: Articles processed in parallel. Output order never depends on it.

    Returns:
        The `IssueExtraction` with records, references and diagnostics.

    Raises:
        NoArticlesFoundError: If no article block is found.
    """
    config = config or DEFAULT_CONFIG
    collector = collector if collector is not None else DiagnosticsCollector()

    blocks = segment_document(text, config)
    if not blocks:
        raise NoArticlesFoundError("No '<<<...>>>' delimited articles found in the document")

    indexed = list(enumerate(blocks, start=1))
    if max_workers > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            results = list(executor.map(lambda item: _process_article(item[1], item[0], config), indexed))
    else:
        results = [_process_article(block, index, config) for index, block in indexed]

    for _, _, diagnostics in results:
        collector.extend(diagnostics)

    extraction = IssueExtraction(
        articles=[record for record, _, _ in results],
        references=[refs for _, refs, _ in results],
        diagnostics=collector.to_list(),
    )
    _LOGGER.info(
        "Extracted %d articles, %d references, %d errors, %d warnings",
        len(extraction.articles),
        sum(len(refs) for refs in extraction.references),
        len(collector.errors),
        len(collector.warnings),
    )
    return extraction
