"""Cascade parser splitting one citation string into authors, year, title and meta.

Typical layouts in the issue reference lists:

    Journal article   Abramov S.A. 2014. Ecological differentiation... // Biology Bulletin. Vol.41. P.45-52.
    Book              Bigon M. 1989. [Ecology]. Moscow: Mir. 667 p.
    Book chapter      Nash T.H. 1991. Lichens... // Hutzinger O. (Ed.): Handbook...
    Online resource   GBIF.org 2024. GBIF Occurrence. Available from: https://...
    No authors        A manual of acarology. 2009. 3rd edition. Texas: Press.

The year is the anchor: what precedes it is the author block, what follows it is
split into title and metadata by the first rule of `SPLIT_RULES` that applies.
`meta` is never parsed further.
"""

import logging
from typing import Callable, Iterable, List, NamedTuple, Optional, Tuple

from ..config import DEFAULT_CONFIG, PatternConfig
from ..models import NOT_MENTIONED, ParsedReference, ReferenceType

_LOGGER = logging.getLogger(__name__)

Split = Tuple[str, str]


class SplitRule(NamedTuple):
    """A named title/meta splitter; `apply` returns None when it does not apply."""
    name: str
    apply: Callable[[str, ReferenceType, PatternConfig], Optional[Split]]


def find_year(text: str, config: Optional[PatternConfig] = None) -> Optional[Tuple[int, int, str]]:
    """Locate the year anchor.

    Returns:
        (start, end, year) of the first 4-digit year, where the span also covers an
        edition letter (`2020a`) or a range (`1921-1922`) and `year` keeps only the
        leading four digits. None if the text has no year.
    """
    config = config or DEFAULT_CONFIG
    match = config.reference_year.search(text)
    if match is None:
        return None
    return match.start(), match.end(), match.group(1)


def is_likely_author_block(text: str, config: Optional[PatternConfig] = None) -> bool:
    """Commas or initials ("Z.M.") before the year mean personal authors."""
    config = config or DEFAULT_CONFIG
    text = text.strip()
    if not text:
        return False
    return "," in text or config.initial.search(text) is not None


def _is_url_slashes(text: str, idx: int) -> bool:
    if idx > 0 and text[idx - 1] == ":":
        return True
    token_start = text.rfind(" ", 0, idx) + 1
    return text[token_start:idx].lower().startswith("http")


def find_separator(text: str) -> int:
    """Index of the first `//` that is not part of a URL, or -1."""
    idx = text.find("//")
    while idx != -1:
        if not _is_url_slashes(text, idx):
            return idx
        idx = text.find("//", idx + 2)
    return -1


def find_publisher_pattern(text: str, config: Optional[PatternConfig] = None) -> int:
    """Start of a "City: Publisher" clause that plausibly ends the title, or -1.

    City names often occur inside titles too, so a match only counts when it lies
    before any `//` separator and either past `publisher_min_position` or past
    `publisher_min_position_after_period` with a period in front of it.
    """
    config = config or DEFAULT_CONFIG
    separator = find_separator(text)
    for match in config.publisher.finditer(text):
        start = match.start()
        if separator != -1 and separator < start:
            return -1
        if start > config.publisher_min_position:
            return start
        if start >= config.publisher_min_position_after_period and "." in text[:start]:
            return start
    return -1


def classify_reference(remainder: str, config: Optional[PatternConfig] = None) -> ReferenceType:
    """Guess the publication kind from the text following the year."""
    config = config or DEFAULT_CONFIG
    lower = remainder.lower()
    if any(marker in lower for marker in config.online_markers) or (
        "accessed" in lower and "http" in lower
    ):
        return ReferenceType.ONLINE
    if config.chapter_marker.search(remainder):
        return ReferenceType.CHAPTER
    if find_separator(remainder) != -1:
        return ReferenceType.ARTICLE
    if find_publisher_pattern(remainder, config) != -1:
        return ReferenceType.BOOK
    return ReferenceType.OTHER


def validate_split(title: str, meta: str, config: Optional[PatternConfig] = None) -> bool:
    """Reject splits that leave a tiny title or cut a sentence in half."""
    config = config or DEFAULT_CONFIG
    total = len(title) + len(meta)
    if total > 0 and len(title) / total < config.title_meta_length_ratio:
        return False
    if meta and meta[0].islower():
        return False
    return True


def _clean_meta(meta: str) -> str:
    meta = meta.strip()
    if meta.startswith("//"):
        meta = meta[2:].strip()
    if meta.startswith("."):
        meta = meta[1:].strip()
    return meta


def _is_abbreviation(text: str, period: int, config: PatternConfig) -> bool:
    for abbr in config.abbreviations:
        start = period - len(abbr)
        if start < 0:
            continue
        if text[start:period].lower() == abbr.lower() and (start == 0 or not text[start - 1].isalpha()):
            return True
    return False


def _find_first_marker(text: str, config: PatternConfig, start: int = 0) -> int:
    if start >= len(text):
        return -1
    lower = text.lower()
    positions = [lower.find(marker.lower(), start) for marker in config.publication_markers]
    publisher = config.publisher.search(text, start)
    if publisher is not None:
        positions.append(publisher.start())
    positions = [p for p in positions if p != -1]
    return min(positions) if positions else -1


# ---------- Split rules, in priority order ----------
def _bracketed_title(text: str, reference_type: ReferenceType, config: PatternConfig) -> Optional[Split]:
    if not text.startswith("["):
        return None
    depth = 0
    for i, ch in enumerate(text):
        if ch == "[":
            depth += 1
        elif ch == "]":
            depth -= 1
            if depth == 0:
                title_end = i + 1
                # keep the dot so the title reads "[...]."
                if text[title_end:title_end + 1] == ".":
                    title_end += 1
                return text[:title_end].strip(), _clean_meta(text[title_end:])
    return None


def _chapter_editor(text: str, reference_type: ReferenceType, config: PatternConfig) -> Optional[Split]:
    if reference_type is not ReferenceType.CHAPTER:
        return None
    match = config.editor_clause.search(text)
    if match is None:
        return None
    return text[:match.start()].strip(), text[match.end():].lstrip(" \t./").strip()


def _double_slash(text: str, reference_type: ReferenceType, config: PatternConfig) -> Optional[Split]:
    idx = find_separator(text)
    if idx == -1:
        return None
    return text[:idx].strip(), _clean_meta(text[idx + 2:])


def _publisher(text: str, reference_type: ReferenceType, config: PatternConfig) -> Optional[Split]:
    idx = find_publisher_pattern(text, config)
    if idx == -1:
        return None
    return text[:idx].strip(), text[idx:].strip()


def _publication_marker(text: str, reference_type: ReferenceType, config: PatternConfig) -> Optional[Split]:
    period = text.find(".")
    if period == -1:
        idx = _find_first_marker(text, config, config.min_marker_position)
    else:
        # markers in the first sentence are usually words of the title itself
        start = period + 1
        while start < len(text) and text[start] in " \t":
            start += 1
        idx = _find_first_marker(text, config, start)
    if idx == -1:
        return None
    return text[:idx].strip(), text[idx:].strip()


def _sentence_break(text: str, reference_type: ReferenceType, config: PatternConfig) -> Optional[Split]:
    limit = min(len(text), config.max_title_scan_length)
    for i in range(limit):
        if text[i] != ".":
            continue
        if i < config.min_title_length or _is_abbreviation(text, i, config):
            continue
        j = i + 1
        while j < len(text) and text[j] in " \t":
            j += 1
        if j == i + 1 or j >= len(text):
            continue
        if text[j].isupper() or text[j] in "[(":
            title, meta = text[:i + 1].strip(), text[i + 1:].strip()
            if validate_split(title, meta, config):
                return title, meta
            return None
    return None


SPLIT_RULES: List[SplitRule] = [
    SplitRule("bracketed_title", _bracketed_title),
    SplitRule("chapter_editor", _chapter_editor),
    SplitRule("double_slash", _double_slash),
    SplitRule("publisher", _publisher),
    SplitRule("publication_marker", _publication_marker),
    SplitRule("sentence_break", _sentence_break),
]


def split_title_meta(
    remainder: str,
    reference_type: Optional[ReferenceType] = None,
    config: Optional[PatternConfig] = None,
    rules: Optional[Iterable[SplitRule]] = None,
) -> Split:
    """Split the text after the year into (title, meta).

    Rules are tried in order and the first one producing a non-empty title wins;
    when none does, the whole remainder is the title. An empty remainder gives
    ("", ""); `parse_reference` then falls back to the whole citation.
    """
    config = config or DEFAULT_CONFIG
    text = remainder.strip()
    if not text:
        return "", ""
    if reference_type is None:
        reference_type = classify_reference(text, config)
    for rule in SPLIT_RULES if rules is None else rules:
        result = rule.apply(text, reference_type, config)
        if result is not None and result[0]:
            _LOGGER.debug("Split %r with rule %s", text[:60], rule.name)
            return result
    return text, ""


def parse_reference(raw: str, config: Optional[PatternConfig] = None) -> ParsedReference:
    """Parse one raw citation string. Never raises.

    Args:
        raw: The citation as it appears in the reference list.
        config: Pattern tables and thresholds. Defaults to `DEFAULT_CONFIG`.

    Returns:
        A `ParsedReference`. Without a year, authors and year are "Not mentioned"
        and the whole citation becomes the title. The title is also the whole
        citation when nothing follows the year ("Smith J. 2014."), so it is never
        empty once a year is found.
    """
    config = config or DEFAULT_CONFIG
    ref = config.whitespace.sub(" ", raw or "").strip()

    anchor = find_year(ref, config)
    if anchor is None:
        return ParsedReference(authors=NOT_MENTIONED, year=NOT_MENTIONED, title=ref, meta="")
    start, end, year = anchor

    before_year = ref[:start].strip()
    after_year = ref[end:].lstrip(" \t")
    if after_year.startswith("."):
        after_year = after_year[1:].lstrip(" \t")

    authors = before_year if is_likely_author_block(before_year, config) else NOT_MENTIONED

    reference_type = classify_reference(after_year, config)
    title, meta = split_title_meta(after_year, reference_type, config)
    if not title:
        title = ref

    # Institutional or anonymous works: the text before the year belongs to the meta.
    if authors == NOT_MENTIONED and before_year:
        candidate = before_year.rstrip(".").strip()
        if candidate and candidate.lower() not in meta.lower():
            meta = f"{before_year} {meta}".strip()

    meta = config.leading_editor.sub("", meta, count=1).strip()

    return ParsedReference(
        authors=authors,
        year=year,
        title=title,
        meta=meta,
        reference_type=reference_type,
    )


def parse_references(lines: Iterable[str], config: Optional[PatternConfig] = None) -> List[ParsedReference]:
    """Parse every citation of a reference list, keeping source order."""
    config = config or DEFAULT_CONFIG
    return [parse_reference(line, config) for line in lines]
