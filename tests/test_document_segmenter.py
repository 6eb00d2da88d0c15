"""Tests for the document segmenter."""

import pytest

from issue_index.core.segmenters import segment_document, split_reference_lines

ISSUE = (
    "Art one text\n<<<\nRef A 2001.\nRef B 2002.\n>>>\n"
    "Art two text\n<<<\nRef C 2003.\n>>>\n"
    "trailing text"
)


class TestSegmentDocument:
    """Tests for segment_document."""

    def test_blocks_in_order(self):
        blocks = segment_document(ISSUE)

        assert len(blocks) == 2
        assert blocks[0].article_text == "Art one text\n"
        assert blocks[0].reference_text == "\nRef A 2001.\nRef B 2002.\n"
        assert blocks[1].article_text == "\nArt two text\n"
        assert blocks[1].reference_text == "\nRef C 2003.\n"

    @pytest.mark.parametrize("count", [1, 3, 10])
    def test_one_block_per_delimited_section(self, count):
        text = "".join(f"Article {i}\n<<<\nRef {i}\n>>>\n" for i in range(count))
        blocks = segment_document(text)

        assert len(blocks) == count
        assert [b.article_text.strip() for b in blocks] == [f"Article {i}" for i in range(count)]

    def test_no_delimiters(self):
        assert segment_document("Just text without references") == []

    def test_empty(self):
        assert segment_document("") == []

    def test_unclosed_section_is_ignored(self):
        blocks = segment_document("One\n<<<\nRef\n>>>\nTwo\n<<<\nRef without end")

        assert len(blocks) == 1

    def test_empty_reference_section(self):
        blocks = segment_document("Body<<<>>>")

        assert blocks[0].article_text == "Body"
        assert blocks[0].reference_text == ""


class TestSplitReferenceLines:
    """Tests for split_reference_lines."""

    def test_mixed_line_endings(self):
        assert split_reference_lines("Ref A\r\nRef B\rRef C\nRef D") == ["Ref A", "Ref B", "Ref C", "Ref D"]

    def test_trailing_end_marker(self):
        assert split_reference_lines("Ref A\nRef B>>>") == ["Ref A", "Ref B"]

    def test_blank_lines_dropped(self):
        assert split_reference_lines("\n  Ref A  \n\n\nRef B\n") == ["Ref A", "Ref B"]

    def test_empty(self):
        assert split_reference_lines("") == []
