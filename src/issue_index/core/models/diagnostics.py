"""Diagnostics recorded while extracting articles and references."""

import logging
import threading
from enum import Enum
from typing import Iterable, Iterator, List

from pydantic import BaseModel, ConfigDict, Field

_LOGGER = logging.getLogger(__name__)


class Severity(str, Enum):
    """How bad a failed heuristic is for the record it belongs to."""

    WARNING = "warning"
    ERROR = "error"


class Diagnostic(BaseModel):
    """A non-fatal note about one field of one article.

    `article_index` is 1-based, matching the order of the article in the issue.
    """

    model_config = ConfigDict(frozen=True)

    article_index: int = Field(..., ge=1, description="1-based index of the article in the issue.")
    field: str = Field(..., description="Name of the record field the heuristic was resolving.")
    severity: Severity
    message: str

    @classmethod
    def warning(cls, article_index: int, field: str, message: str) -> "Diagnostic":
        return cls(article_index=article_index, field=field, severity=Severity.WARNING, message=message)

    @classmethod
    def error(cls, article_index: int, field: str, message: str) -> "Diagnostic":
        return cls(article_index=article_index, field=field, severity=Severity.ERROR, message=message)

    def __str__(self) -> str:
        return f"[{self.severity.value}] article {self.article_index}, {self.field}: {self.message}"


class DiagnosticsCollector:
    """Append-only store of diagnostics for one pipeline run.

    Appends are guarded by a lock so per-article work may run in threads;
    the order of diagnostics is not meaningful.
    """

    def __init__(self, diagnostics: Iterable[Diagnostic] = ()):
        self._lock = threading.Lock()
        self._items: List[Diagnostic] = []
        self.extend(diagnostics)

    def append(self, diagnostic: Diagnostic) -> None:
        if diagnostic.severity is Severity.ERROR:
            _LOGGER.error("Article %d, %s: %s", diagnostic.article_index, diagnostic.field, diagnostic.message)
        else:
            _LOGGER.warning("Article %d, %s: %s", diagnostic.article_index, diagnostic.field, diagnostic.message)
        with self._lock:
            self._items.append(diagnostic)

    def extend(self, diagnostics: Iterable[Diagnostic]) -> None:
        for diagnostic in diagnostics:
            self.append(diagnostic)

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.to_list())

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def to_list(self) -> List[Diagnostic]:
        with self._lock:
            return list(self._items)

    def for_article(self, article_index: int) -> List[Diagnostic]:
        return [d for d in self.to_list() if d.article_index == article_index]

    @property
    def errors(self) -> List[Diagnostic]:
        return [d for d in self.to_list() if d.severity is Severity.ERROR]

    @property
    def warnings(self) -> List[Diagnostic]:
        return [d for d in self.to_list() if d.severity is Severity.WARNING]

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)
