"""Tests for the positional paragraph differ."""

from bicameral.document import TextDocument
from bicameral.tracking.differ import diff_paragraphs, iter_changed_paragraphs


class TestDiffParagraphs:
    """diff_paragraphs contract."""

    def test_first_content_is_whole_document(self):
        assert diff_paragraphs("", "hello\nworld") == "hello\nworld"

    def test_changed_middle_paragraph(self):
        assert diff_paragraphs("a\nb\nc", "a\nX\nc") == "X"

    def test_appended_paragraph(self):
        assert diff_paragraphs("a\nb", "a\nb\nc") == "c"

    def test_identical(self):
        assert diff_paragraphs("a\nb", "a\nb") == ""

    def test_insertion_shifts_later_paragraphs(self):
        """Positional comparison reports every shifted paragraph."""
        assert diff_paragraphs("a\nb\nc", "a\nNEW\nb\nc") == "NEW\nb\nc"

    def test_deleting_last_paragraph_is_no_change(self):
        assert diff_paragraphs("a\nb", "a") == ""

    def test_deleting_two_trailing_paragraphs(self):
        assert diff_paragraphs("a\nb\nc", "a") == "\n"

    def test_accepts_documents_and_lists(self):
        old = TextDocument(("a", "b"))
        assert diff_paragraphs(old, ["a", "B"]) == "B"

    def test_new_empty(self):
        assert diff_paragraphs("", "") == ""


class TestIterChangedParagraphs:
    """Index-level detail."""

    def test_indices(self):
        assert list(iter_changed_paragraphs("a\nb\nc", "A\nb\nC")) == [(0, "A"), (2, "C")]

    def test_missing_on_new_side(self):
        assert list(iter_changed_paragraphs("a\nb", "a")) == [(1, "")]
