"""Read-only pattern tables and thresholds shared by the segmenter and the parsers."""

import re
from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field

# Abbreviations whose period never ends a title ("St. Petersburg", "Vol. 5").
DEFAULT_ABBREVIATIONS = (
    "St", "Vol", "No", "Nos", "Pt", "P", "S", "Bd", "Ed", "Eds",
    "T", "Ch", "Art", "Ph", "Dr", "Mr", "Mrs", "Ms",
)

# Order matters: more specific markers come first.
DEFAULT_PUBLICATION_MARKERS = (
    "available online", "available at", "available from", "available on", "available:",
    "online at", "online:", "internet resource:", "internet resource",
    "accessed on", "accessed", "accessed:", "retrieved", "visited",
    "proceedings of", "proceedings", "journal", "transactions", "bulletin", "annals",
    "vol.", "http://", "https://",
    "moscow:", "st. petersburg:", "leningrad:", "novosibirsk:", "vladivostok:",
    "london:", "new york:", "berlin:", "paris:",
)

DEFAULT_ONLINE_MARKERS = (
    "available from:", "available at:", "available online:", "available on:", "available:",
    "internet resource", "online at", "accessed on:",
)

DEFAULT_EMAIL_LABELS = ("E-mail", "Email", "email", "e-mail")

DEFAULT_COUNTRIES = (
    "Russia", "Russian Federation", "Kazakhstan", "Kyrgyzstan", "Uzbekistan", "Tajikistan",
    "Turkmenistan", "Ukraine", "Belarus", "Armenia", "Azerbaijan", "Georgia", "Moldova",
    "Mongolia", "China", "Japan", "Korea", "Vietnam", "India", "Iran", "Turkey", "Israel",
    "Germany", "Austria", "Switzerland", "France", "Italy", "Spain", "Portugal",
    "United Kingdom", "UK", "Ireland", "Netherlands", "Belgium", "Denmark", "Norway",
    "Sweden", "Finland", "Estonia", "Latvia", "Lithuania", "Poland", "Czech Republic",
    "Czechia", "Slovakia", "Hungary", "Romania", "Bulgaria", "Serbia", "Croatia", "Greece",
    "USA", "U.S.A.", "United States", "Canada", "Mexico", "Brazil", "Argentina", "Chile",
    "Australia", "New Zealand", "South Africa", "Egypt",
)

DEFAULT_INSTITUTION_WORDS = (
    "University", "Institute", "Academy", "Museum", "Department", "Faculty",
    "Laboratory", "College", "Centre", "Center", "Reserve", "Station", "School",
)


class PatternConfig(BaseModel):
    """Compiled patterns, marker tables and tuning thresholds.

    Built once and passed explicitly to `segment_document`, `extract_article` and
    `parse_reference`. Instances are frozen; derive variants with
    `DEFAULT_CONFIG.model_copy(update={...})`. Pattern fields accept plain
    strings, which pydantic compiles.
    """

    model_config = ConfigDict(frozen=True)

    # Document layout
    article_separator: re.Pattern = Field(
        re.compile(r"(.*?)<<<(.*?)>>>", re.S),
        description="Non-greedy article text followed by its '<<<...>>>' reference section.",
    )
    reference_end_marker: str = ">>>"
    line_separator: re.Pattern = re.compile(r"\r\n|\r|\n")
    line_endings: Tuple[str, ...] = ("\r\n", "\n", "\r")

    # Article fields
    abstract_marker: re.Pattern = re.compile(r"\babstract\s*[.:]", re.I)
    keywords_marker: re.Pattern = re.compile(r"\bkey\s?words\s*[.:]", re.I)
    doi_marker: re.Pattern = re.compile(r"\bdoi[\s.:]*(?=\d)", re.I)
    article_year: re.Pattern = re.compile(r"[0-9]{4}")
    page_range: re.Pattern = re.compile(r"([0-9]+)\s*[-‐‑‒–—―]\s*([0-9]+)")
    affiliation_marker: re.Pattern = re.compile(r"(?:[^\W\d_]|\.)(\d)")
    author_suffix: re.Pattern = re.compile(r"(?:\d+,?\*?|\*)+$")
    leading_enumeration: re.Pattern = re.compile(r"^\d+\s*")
    email_labels: Tuple[str, ...] = DEFAULT_EMAIL_LABELS
    countries: Tuple[str, ...] = DEFAULT_COUNTRIES
    institution_words: Tuple[str, ...] = DEFAULT_INSTITUTION_WORDS

    # Reference cascade
    whitespace: re.Pattern = re.compile(r"\s+")
    reference_year: re.Pattern = Field(
        re.compile(r"(?<![0-9])([0-9]{4})(?:([a-zа-яё])(?![^\W\d_]))?(?:\s*[-–—]\s*[0-9]{4}(?![0-9]))?(?![0-9])"),
        description="Year with optional edition letter (2020a, 1999а, 2014г) or range (1921-1922).",
    )
    initial: re.Pattern = Field(
        re.compile(r"[A-ZÀ-ÖØ-ÞА-ЯЁ]\.|\bet\s+al\.|\bи\s+др\."),
        description="An initial (the 'J.' in 'Smith J.') or an 'et al.' / 'и др.' tail.",
    )
    chapter_marker: re.Pattern = re.compile(r"\(\s*(?:eds?|hrsg)\.?\s*\)", re.I)
    editor_clause: re.Pattern = Field(
        re.compile(r"//\s*[^/]+?\s*\(\s*(?:eds?|hrsg)\.?\s*\)\s*[:;.]", re.I),
        description="'// Editor (Ed.):' introducing the book a chapter belongs to.",
    )
    leading_editor: re.Pattern = re.compile(r"^\(\s*(?:eds?|hrsg)\.?\s*\)\s*[:;.]?\s*", re.I)
    publisher: re.Pattern = Field(
        re.compile(r"\b([A-Z][a-zA-Z]+(?:\s+[A-Z][a-zA-Z]+)*(?:,\s+[A-Z][a-zA-Z]+)?)\s*:\s*[A-Z]"),
        description="'City: Publisher' or 'City, State: Publisher'.",
    )
    online_markers: Tuple[str, ...] = DEFAULT_ONLINE_MARKERS
    publication_markers: Tuple[str, ...] = DEFAULT_PUBLICATION_MARKERS
    abbreviations: Tuple[str, ...] = DEFAULT_ABBREVIATIONS

    # Thresholds
    min_title_length: int = Field(15, description="No period split before this many characters.")
    min_marker_position: int = Field(20, description="No marker search before this position when the remainder has no period.")
    max_title_scan_length: int = Field(400, description="Period-split scan stops here.")
    title_meta_length_ratio: float = Field(0.2, description="Title must be at least this share of title+meta.")
    publisher_min_position: int = 30
    publisher_min_position_after_period: int = 15


DEFAULT_CONFIG = PatternConfig()
