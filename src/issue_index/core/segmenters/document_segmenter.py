"""Split a converted issue into article blocks and their reference sections."""

import logging
from typing import List, Optional

from ..config import DEFAULT_CONFIG, PatternConfig
from ..models import ArticleBlock

_LOGGER = logging.getLogger(__name__)


def segment_document(text: str, config: Optional[PatternConfig] = None) -> List[ArticleBlock]:
    """Split the full text of an issue into `ArticleBlock`s in document order.

    Each article's reference list is expected inline after its body, wrapped in
    `<<<` and `>>>`. Every delimited section yields exactly one block; text after
    the last `>>>` is not an article. An empty list means no delimiters were found
    and the caller has nothing to extract.
    """
    config = config or DEFAULT_CONFIG
    if not text:
        return []
    blocks = [
        ArticleBlock(article_text=match.group(1), reference_text=match.group(2))
        for match in config.article_separator.finditer(text)
    ]
    _LOGGER.info("Articles found: %d", len(blocks))
    return blocks


def split_reference_lines(reference_text: str, config: Optional[PatternConfig] = None) -> List[str]:
    """Turn a reference section into one raw citation string per line.

    Any line ending convention is accepted. A trailing end-of-references marker
    left on the last line is removed and blank lines are dropped.
    """
    config = config or DEFAULT_CONFIG
    if not reference_text:
        return []
    lines = config.line_separator.split(reference_text)
    if lines and lines[-1].rstrip().endswith(config.reference_end_marker):
        last = lines[-1].rstrip()
        lines[-1] = last[: -len(config.reference_end_marker)]
    return [ln.strip() for ln in lines if ln.strip()]
