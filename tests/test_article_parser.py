"""Tests for the article field extractor."""

import pytest

from issue_index.core.models import ArticleBlock, Severity
from issue_index.core.parsers.article_parser import (
    clean_affiliation,
    extract_affiliation_markers,
    extract_article,
    extract_doi,
    is_address_line,
    normalize_authors,
    normalize_pages,
    resolve_affiliations,
    split_abstract_keywords,
    split_article_lines,
    split_authors_title,
    split_title_pages,
)

ARTICLE = (
    "Smith J.1, Doe A.2 2014. Beetles of the steppe zone // Russian Entomol. J. Vol.23. No.1. P.7–15.\n"
    "1 University X, Moscow, Russia. E-mail: smith@example.org\n"
    "2 Institute Y, Novosibirsk, Russia; doe@example.org\n"
    "doi: 10.15298/rusentj.23.1.01\n"
    "Abstract. The steppe beetles were studied.\n"
    "Key words: beetles, steppe.\n"
)

REFERENCES = "\nAbramov S.A. 2014. Ecological differentiation // Biology Bulletin. Vol.41.\nBigon M. 1989. [Ecology]. Moscow: Mir.\n"


class TestExtractArticle:
    """End-to-end tests on one article block."""

    def test_full_article(self):
        record, diagnostics = extract_article(ArticleBlock(article_text=ARTICLE, reference_text=REFERENCES), 1)

        assert diagnostics == []
        assert record.title == "Beetles of the steppe zone"
        assert record.authors == "Smith J., Doe A."
        assert record.affiliations == ["University X, Moscow, Russia", "Institute Y, Novosibirsk, Russia"]
        assert record.pages == "007-015"
        assert record.doi == "10.15298/rusentj.23.1.01"
        assert record.abstract == "The steppe beetles were studied."
        assert record.keywords == "beetles, steppe."
        assert record.references == [
            "Abramov S.A. 2014. Ecological differentiation // Biology Bulletin. Vol.41.",
            "Bigon M. 1989. [Ecology]. Moscow: Mir.",
        ]

    def test_crlf_article(self):
        record, _ = extract_article(ArticleBlock(article_text=ARTICLE.replace("\n", "\r\n")), 1)

        assert record.affiliations == ["University X, Moscow, Russia", "Institute Y, Novosibirsk, Russia"]
        assert record.doi == "10.15298/rusentj.23.1.01"

    def test_missing_abstract(self):
        """A missing abstract is an error but the rest is still extracted."""
        text = ARTICLE.replace("Abstract. ", "")
        record, diagnostics = extract_article(ArticleBlock(article_text=text), 4)

        assert record.abstract == ""
        assert record.keywords == ""
        assert record.title == "Beetles of the steppe zone"
        assert [(d.article_index, d.field, d.severity) for d in diagnostics] == [(4, "abstract", Severity.ERROR)]

    def test_missing_year(self):
        """Without a year anchor, title, authors and affiliations stay empty."""
        text = "Untitled note\nAbstract. Text.\nKey words: none."
        record, diagnostics = extract_article(ArticleBlock(article_text=text), 2)

        assert record.title == ""
        assert record.authors == ""
        assert record.affiliations == []
        assert record.abstract == "Text."
        fields = {(d.field, d.severity) for d in diagnostics}
        assert ("year", Severity.ERROR) in fields
        assert ("doi", Severity.WARNING) in fields

    def test_shared_affiliation(self):
        text = (
            "Petrov P., Sidorov S. 2015. Ants of Siberia // Russian Entomol. J. Vol.24. P.101-110.\n"
            "Zoological Institute, St. Petersburg, Russia.\n"
            "Abstract. Ants.\n"
            "Key words: ants.\n"
        )
        record, diagnostics = extract_article(ArticleBlock(article_text=text), 1)

        assert record.authors == "Petrov P., Sidorov S."
        assert record.affiliations == ["Zoological Institute, St. Petersburg, Russia"] * 2
        assert record.pages == "101-110"
        assert [d.field for d in diagnostics] == ["doi"]

    def test_wrapped_title(self):
        text = (
            "Smith J.1, Doe A.2 2014. Beetles of the\n"
            "steppe zone // Russian Entomol. J. Vol.23. P.7–15.\n"
            "1 University X, Moscow, Russia.\n"
            "2 Institute Y, Novosibirsk, Russia.\n"
            "doi: 10.15298/rusentj.23.1.01\n"
            "Abstract. Beetles.\n"
            "Key words: beetles.\n"
        )
        record, diagnostics = extract_article(ArticleBlock(article_text=text), 1)

        assert record.title == "Beetles of the steppe zone"
        assert record.pages == "007-015"
        assert record.affiliations == ["University X, Moscow, Russia", "Institute Y, Novosibirsk, Russia"]
        assert diagnostics == []


class TestAbstractKeywords:
    def test_split(self):
        abstract, keywords, diagnostics = split_abstract_keywords("x\nABSTRACT: Text here.\nKeywords. a, b", 1)

        assert (abstract, keywords, diagnostics) == ("Text here.", "a, b", [])

    def test_missing_keywords(self):
        abstract, keywords, diagnostics = split_abstract_keywords("Abstract: Only text.", 1)

        assert abstract == "Only text."
        assert keywords == ""
        assert diagnostics[0].severity is Severity.WARNING
        assert diagnostics[0].field == "keywords"


class TestLines:
    @pytest.mark.parametrize("text", ["a\r\nb\r\n\r\nc", "a\nb\n\nc", "a\rb\rc", "  a \n b\n c  "])
    def test_any_line_ending(self, text):
        assert split_article_lines(text) == ["a", "b", "c"]

    def test_single_line(self):
        assert split_article_lines(" only ") == ["only"]


class TestDoi:
    def test_first_match(self):
        doi, diagnostics = extract_doi(["Title", "DOI: 10.15298/a.1.1.01", "doi 10.1/other"], 1)

        assert doi == "10.15298/a.1.1.01"
        assert diagnostics == []

    def test_missing(self):
        doi, diagnostics = extract_doi(["Title", "No identifier"], 3)

        assert doi == ""
        assert diagnostics[0].field == "doi"
        assert diagnostics[0].article_index == 3


class TestAuthorsTitlePages:
    def test_split_at_first_year(self):
        anchor, diagnostics = split_authors_title("Smith J. 2014. Title", 1)

        assert anchor == ("Smith J.", ". Title")
        assert diagnostics == []

    def test_title_and_pages(self):
        title, pages, diagnostics = split_title_pages(". Title of paper // Journal. P. 7-15.\nnext line 100-200", 1)

        assert (title, pages, diagnostics) == ("Title of paper", "007-015", [])

    def test_single_slash(self):
        title, pages, _ = split_title_pages(". Title of paper / Journal 3: 45–52.", 1)

        assert (title, pages) == ("Title of paper", "045-052")

    def test_wrapped_title(self):
        """The separator is searched past the first line of the title."""
        title, pages, diagnostics = split_title_pages(". A long title that\ncontinues here // Journal. Vol.1. P.7-15.", 1)

        assert (title, pages, diagnostics) == ("A long title that continues here", "007-015", [])

    def test_no_separator(self):
        title, pages, diagnostics = split_title_pages(". Title of paper", 1)

        assert (title, pages) == ("Title of paper", "")
        assert diagnostics[0].field == "pages"


class TestNormalizePages:
    @pytest.mark.parametrize("text", ["7-15", "7–15", "7—15", "P. 7 - 15.", "007-015"])
    def test_variants(self, text):
        assert normalize_pages(text) == "007-015"

    def test_idempotent(self):
        assert normalize_pages(normalize_pages("123-130")) == "123-130"

    def test_no_range(self):
        assert normalize_pages("no pages") == ""


class TestAuthors:
    def test_strip_markers(self):
        assert normalize_authors("Smith J.1,2*, Doe A.2, Roe B.") == ["Smith J.", "Doe A.", "Roe B."]

    def test_markers(self):
        assert extract_affiliation_markers("Smith J.1, Doe A.2") == ["1", "2"]
        assert extract_affiliation_markers("Smith J., Doe A.") == []


class TestAffiliations:
    """Tests for affiliation resolution."""

    def test_enumerated(self):
        affiliations, diagnostics = resolve_affiliations("Smith J.1, Doe A.2", ["1 University X", "2 Institute Y"])

        assert affiliations == ["University X", "Institute Y"]
        assert diagnostics == []

    def test_shared_address(self):
        affiliations, diagnostics = resolve_affiliations("Smith J., Doe A.", ["1 University X, Country"])

        assert affiliations == ["University X, Country", "University X, Country"]
        assert diagnostics == []

    def test_no_address(self):
        affiliations, diagnostics = resolve_affiliations("Smith J., Doe A.", ["Some unrelated line"], 5)

        assert affiliations == ["", ""]
        assert diagnostics[0].severity is Severity.WARNING
        assert diagnostics[0].article_index == 5

    def test_missing_marker_line(self):
        affiliations, diagnostics = resolve_affiliations("Smith J.1, Doe A.3", ["1 University X"])

        assert affiliations == ["University X", ""]
        assert len(diagnostics) == 1
        assert diagnostics[0].severity is Severity.WARNING
        assert "3" in diagnostics[0].message

    def test_author_without_marker(self):
        """Markers go to the slot of the author carrying them."""
        affiliations, diagnostics = resolve_affiliations(
            "Smith J., Doe A.1, Roe B.2", ["1 University X", "2 Institute Y"]
        )

        assert affiliations == ["", "University X", "Institute Y"]
        assert diagnostics == []

    def test_more_markers_than_authors(self):
        """Partial output is kept alongside the error."""
        affiliations, diagnostics = resolve_affiliations("Smith J.1.2", ["1 University X", "2 Institute Y"])

        assert affiliations == ["University X"]
        assert [d.severity for d in diagnostics] == [Severity.ERROR]

    def test_clean_affiliation(self):
        assert clean_affiliation(" University X, Moscow. E-mail: a@b.org") == "University X, Moscow"
        assert clean_affiliation("Institute Y; y@b.org") == "Institute Y"
        assert clean_affiliation("Museum Z, Russia. email a@b.org") == "Museum Z, Russia"

    def test_address_line(self):
        assert is_address_line("Moscow 119991, ivanov@mail.ru")
        assert is_address_line("Zoological Museum, Kazakhstan")
        assert not is_address_line("Abstract text about beetles")
