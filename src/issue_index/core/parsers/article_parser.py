"""Heuristic extraction of article fields from one article block.

An article block of an issue looks like this once converted to text:

    Smith J.1, Doe A.2 2014. Title of the article // Journal. Vol.23. No.1. P.7-15.
    1 University X, Moscow, Russia. E-mail: smith@example.org
    2 Institute Y, Novosibirsk, Russia.
    doi: 10.15298/rusentj.23.1.01
    Abstract. ...
    Key words: ...
    <<<
    ...references...
    >>>

Every step below is a pure function returning its value together with the
diagnostics it produced; `extract_article` chains them and never raises.
"""

import functools
import logging
import re
from typing import List, Optional, Sequence, Tuple

from ..config import DEFAULT_CONFIG, PatternConfig
from ..models import ArticleBlock, ArticleRecord, Diagnostic
from ..segmenters.document_segmenter import split_reference_lines
from ...utils.text import collapse_whitespace, split_lines_any

_LOGGER = logging.getLogger(__name__)


@functools.lru_cache(maxsize=None)
def _words_pattern(words: Tuple[str, ...]) -> re.Pattern:
    alternatives = "|".join(re.escape(w) for w in sorted(words, key=len, reverse=True))
    return re.compile(rf"(?<!\w)(?:{alternatives})(?!\w)")


def split_abstract_keywords(
    article_text: str, index: int, config: Optional[PatternConfig] = None
) -> Tuple[str, str, List[Diagnostic]]:
    """Return (abstract, keywords, diagnostics).

    The abstract runs from the first "Abstract" marker to the first "Keywords"
    marker, the keywords block is everything after the latter.
    """
    config = config or DEFAULT_CONFIG
    abstract_match = config.abstract_marker.search(article_text)
    if abstract_match is None:
        return "", "", [Diagnostic.error(index, "abstract", "Can't get Abstract from article data")]
    rest = article_text[abstract_match.end():]
    keywords_match = config.keywords_marker.search(rest)
    if keywords_match is None:
        return rest.strip(), "", [
            Diagnostic.warning(index, "keywords", "Keywords marker not found, the rest is taken as abstract")
        ]
    return rest[:keywords_match.start()].strip(), rest[keywords_match.end():].strip(), []


def split_article_lines(article_text: str, config: Optional[PatternConfig] = None) -> List[str]:
    """Trimmed non-empty lines of the article, whatever its line endings."""
    config = config or DEFAULT_CONFIG
    return split_lines_any(article_text, config.line_endings)


def extract_doi(
    lines: Sequence[str], index: int, config: Optional[PatternConfig] = None
) -> Tuple[str, List[Diagnostic]]:
    """Take the DOI from the first line carrying a "doi" marker followed by a digit."""
    config = config or DEFAULT_CONFIG
    for line in lines:
        match = config.doi_marker.search(line)
        if match is not None:
            return line[match.end():].strip(), []
    return "", [Diagnostic.warning(index, "doi", "DOI not found")]


def split_authors_title(
    article_text: str, index: int, config: Optional[PatternConfig] = None
) -> Tuple[Optional[Tuple[str, str]], List[Diagnostic]]:
    """Split at the first 4-digit run, taken to be the publication year.

    A title with an earlier 4-digit number is split at the wrong place; that is
    a known limitation of the layout heuristic.

    Returns:
        ((author_block, title_and_meta), diagnostics), or (None, diagnostics)
        when the article has no year at all.
    """
    config = config or DEFAULT_CONFIG
    match = config.article_year.search(article_text)
    if match is None:
        return None, [
            Diagnostic.error(index, "year", "Something went wrong when splitting author, title and meta by year")
        ]
    return (article_text[:match.start()].strip(), article_text[match.end():]), []


def normalize_pages(text: str, config: Optional[PatternConfig] = None) -> str:
    """Find a page range and zero-pad both ends: `7–15` -> `007-015`; empty if none."""
    config = config or DEFAULT_CONFIG
    match = config.page_range.search(text or "")
    if match is None:
        return ""
    return f"{int(match.group(1)):03d}-{int(match.group(2)):03d}"


def split_title_pages(
    title_and_meta: str, index: int, config: Optional[PatternConfig] = None
) -> Tuple[str, str, List[Diagnostic]]:
    """Return (title, pages, diagnostics) from the text after the year.

    The title ends at the first `//` (or `/` when there is none) and may wrap
    over several lines; the page range is read from what follows. Without any
    separator the title is the first non-empty line.
    """
    config = config or DEFAULT_CONFIG
    if "//" in title_and_meta:
        title, meta = title_and_meta.split("//", 1)
    elif "/" in title_and_meta:
        title, meta = title_and_meta.split("/", 1)
    else:
        lines = [ln for ln in split_lines_any(title_and_meta, config.line_endings) if ln.strip(". ")]
        title = lines[0].strip().lstrip(".") if lines else ""
        return collapse_whitespace(title), "", [
            Diagnostic.warning(index, "pages", "No '//' or '/' after the title, pages not extracted")
        ]

    title = collapse_whitespace(title).strip().lstrip(".").strip()
    pages = normalize_pages(meta, config)
    if not pages:
        first_line = next(iter(split_lines_any(meta, config.line_endings)), "")
        return title, "", [Diagnostic.warning(index, "pages", f"Page range not found in: {first_line}")]
    return title, pages, []


def normalize_authors(author_block: str, config: Optional[PatternConfig] = None) -> List[str]:
    """Split the author block on ", " and drop footnote markers ("Smith J.1,2*" -> "Smith J.")."""
    config = config or DEFAULT_CONFIG
    authors = []
    for name in author_block.split(", "):
        name = config.author_suffix.sub("", collapse_whitespace(name)).strip()
        if name:
            authors.append(name)
    return authors


def extract_affiliation_markers(author_block: str, config: Optional[PatternConfig] = None) -> List[str]:
    """Superscript digits attached to author names, in order of appearance."""
    config = config or DEFAULT_CONFIG
    return [match.group(1) for match in config.affiliation_marker.finditer(author_block)]


def clean_affiliation(text: str, config: Optional[PatternConfig] = None) -> str:
    """Cut an affiliation at its e-mail label, then at ';', and drop the final period."""
    config = config or DEFAULT_CONFIG
    positions = [text.find(label) for label in config.email_labels]
    positions = [p for p in positions if p != -1]
    if positions:
        text = text[:min(positions)]
    text = text.split(";", 1)[0].strip()
    if text.endswith("."):
        text = text[:-1]
    return text.strip()


def is_address_line(line: str, config: Optional[PatternConfig] = None) -> bool:
    """An address or contact line mentions an e-mail, a country or an institution."""
    config = config or DEFAULT_CONFIG
    if "@" in line:
        return True
    lower = line.lower()
    if any(label.lower() in lower for label in config.email_labels):
        return True
    if _words_pattern(tuple(config.countries)).search(line):
        return True
    return _words_pattern(tuple(config.institution_words)).search(line) is not None


def resolve_affiliations(
    author_block: str,
    lines: Sequence[str],
    index: int = 1,
    config: Optional[PatternConfig] = None,
) -> Tuple[List[str], List[Diagnostic]]:
    """Assign one affiliation to every author of the block.

    Each author's first marker digit selects the affiliation line for that
    author's slot; an author without a marker keeps an empty slot.

    Args:
        author_block: Raw author names, possibly with superscript digits.
        lines: Candidate lines following the title line.
        index: 1-based article index used for diagnostics.
        config: Pattern tables. Defaults to `DEFAULT_CONFIG`.

    Returns:
        The affiliations, always as many as there are authors (empty strings
        for unresolved slots), and the diagnostics.
    """
    config = config or DEFAULT_CONFIG
    names = [
        name for name in author_block.split(", ")
        if config.author_suffix.sub("", collapse_whitespace(name)).strip()
    ]
    slots = [""] * len(names)
    markers = [extract_affiliation_markers(name, config) for name in names]
    diagnostics: List[Diagnostic] = []

    if not any(markers):
        address = next((ln for ln in lines if is_address_line(ln, config)), None)
        if address is None:
            return slots, [Diagnostic.warning(index, "affiliations", "No address line found for the authors")]
        shared = clean_affiliation(config.leading_enumeration.sub("", address, count=1), config)
        return [shared] * len(slots), diagnostics

    for slot, author_markers in enumerate(markers):
        if not author_markers:
            continue
        marker = author_markers[0]
        line = next((ln for ln in lines if ln.startswith(marker)), None)
        if line is None:
            diagnostics.append(Diagnostic.warning(index, "affiliations", f"Affiliation not found: {marker}"))
            continue
        slots[slot] = clean_affiliation(line[len(marker):], config)

    if sum(len(m) for m in markers) > len(slots):
        diagnostics.append(
            Diagnostic.error(index, "affiliations", "Authors have more affiliation numbers than affiliations")
        )
    return slots, diagnostics


def _affiliation_candidates(lines: Sequence[str], config: PatternConfig) -> List[str]:
    title_line = next((i for i, ln in enumerate(lines) if config.article_year.search(ln)), None)
    if title_line is None:
        return []
    if "/" not in lines[title_line]:
        # a wrapped title ends on the line carrying the '//' separator
        for i in range(title_line + 1, len(lines)):
            if config.abstract_marker.search(lines[i]):
                break
            if "//" in lines[i]:
                title_line = i
                break
    candidates = []
    for line in lines[title_line + 1:]:
        if config.abstract_marker.search(line):
            break
        candidates.append(line)
    return candidates


def extract_article(
    block: ArticleBlock, index: int, config: Optional[PatternConfig] = None
) -> Tuple[ArticleRecord, List[Diagnostic]]:
    """Build the `ArticleRecord` of one block.

    Missing anchors never abort the article: fields that depend on them stay
    empty and the problem is reported as a diagnostic.
    """
    config = config or DEFAULT_CONFIG
    diagnostics: List[Diagnostic] = []

    references = split_reference_lines(block.reference_text, config)

    abstract, keywords, found = split_abstract_keywords(block.article_text, index, config)
    diagnostics.extend(found)

    lines = split_article_lines(block.article_text, config)
    doi, found = extract_doi(lines, index, config)
    diagnostics.extend(found)

    anchor, found = split_authors_title(block.article_text, index, config)
    diagnostics.extend(found)
    if anchor is None:
        record = ArticleRecord(abstract=abstract, keywords=keywords, doi=doi, references=references)
        return record, diagnostics
    author_block, title_and_meta = anchor

    title, pages, found = split_title_pages(title_and_meta, index, config)
    diagnostics.extend(found)

    authors = normalize_authors(author_block, config)
    affiliations, found = resolve_affiliations(
        author_block, _affiliation_candidates(lines, config), index, config
    )
    diagnostics.extend(found)

    _LOGGER.debug("Article %d: %d authors, %d references", index, len(authors), len(references))
    record = ArticleRecord(
        title=title,
        abstract=abstract,
        keywords=keywords,
        authors=", ".join(authors),
        affiliations=affiliations,
        pages=pages,
        doi=doi,
        references=references,
    )
    return record, diagnostics
