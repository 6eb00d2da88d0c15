"""End-to-end pipelines for issue processing."""

from .issue_extraction import IssueExtraction, NoArticlesFoundError, extract_issue

__all__ = ["IssueExtraction", "NoArticlesFoundError", "extract_issue"]
