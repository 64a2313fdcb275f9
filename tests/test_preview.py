"""Tests for the HTML preview renderer."""

from datetime import datetime

from bicameral.document import Alignment, FontSize, ParagraphStyle, TextDocument
from bicameral.html import PreviewGenerator, PreviewParagraph
from bicameral.tracking.ledger import ChangeLedger


class TestBuildParagraphs:
    """Per-paragraph presentation."""

    def test_styles_applied(self):
        style = ParagraphStyle(alignment=Alignment.CENTER)
        style.set_font_size(1, FontSize.XLARGE)
        paragraphs = PreviewGenerator("a\nb", style).build_paragraphs()
        assert paragraphs == [
            PreviewParagraph("a", "center", "text-base"),
            PreviewParagraph("b", "center", "text-xl"),
        ]

    def test_empty_document_has_one_blank_line(self):
        paragraphs = PreviewGenerator(TextDocument()).build_paragraphs()
        assert len(paragraphs) == 1
        assert paragraphs[0].is_blank

    def test_whitespace_only_paragraph_is_blank(self):
        paragraphs = PreviewGenerator("a\n   \nb").build_paragraphs()
        assert [p.is_blank for p in paragraphs] == [False, True, False]
        assert "<br></p>" in PreviewGenerator("a\n   \nb").generate()


class TestGenerate:
    """Rendered HTML."""

    def test_page(self):
        html = PreviewGenerator("first\n\nthird", version="9.9.9").generate(title="Notes")
        assert "<title>Notes</title>" in html
        assert "text-align: left" in html
        assert "first</p>" in html
        assert "<br></p>" in html
        assert "bicameral 9.9.9" in html
        assert 'class="preview font-sans"' in html

    def test_escapes_text(self):
        html = PreviewGenerator("<script>alert(1)</script>").generate()
        assert "<script>" not in html
        assert "&lt;script&gt;" in html

    def test_font_family_class(self):
        html = PreviewGenerator("x", ParagraphStyle(font_family="serif")).generate()
        assert "font-serif" in html

    def test_changes_listed(self):
        ledger = ChangeLedger()
        change = ledger.propose_change("a", "b", "ada", timestamp=datetime(2024, 3, 4, 5, 6))
        ledger.comment(change.id, "checked")
        html = PreviewGenerator("b").generate(changes=ledger.changes)
        assert f'data-change-id="{change.id}"' in html
        assert "2024-03-04 05:06" in html
        assert "checked" in html
        assert ">pending<" in html

    def test_no_changes_section_by_default(self):
        assert "<h3>Changes</h3>" not in PreviewGenerator("x").generate()
