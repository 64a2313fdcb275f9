"""Tests for the content classifier."""

import pytest

from bicameral.classifier import (
    CONTENT_COLORS,
    Category,
    classify,
    color_for,
    contrast_text_class,
)


class TestClassifyRules:
    """Each rule in isolation."""

    @pytest.mark.parametrize(
        "line, expected",
        [
            ("What happens next?", Category.QUESTION),
            ("Ship it now!", Category.IMPORTANT),
            ("This is CRITICAL for launch", Category.IMPORTANT),
            ("An essential step", Category.IMPORTANT),
            ("Maybe we should wait", Category.IDEA),
            ("A new Concept for onboarding", Category.IDEA),
            ("For example, the login page", Category.DETAIL),
            ("Specifically the footer", Category.DETAIL),
            ("Use fruit, e.g. apples", Category.DETAIL),
            ("Groceries on Tuesday", Category.DEFAULT),
        ],
    )
    def test_single_rule(self, line, expected):
        assert classify(line) is expected

    def test_empty_is_default(self):
        assert classify("") is Category.DEFAULT

    def test_none_is_default(self):
        assert classify(None) is Category.DEFAULT

    def test_non_string_is_default(self):
        """Classification is total; odd input never raises."""
        assert classify(42) is Category.DEFAULT


class TestClassifyPrecedence:
    """Earlier rules win over later ones."""

    def test_question_beats_keyword(self):
        assert classify("Is this key?") is Category.QUESTION

    def test_important_beats_idea(self):
        assert classify("important idea") is Category.IMPORTANT

    def test_idea_beats_detail(self):
        assert classify("perhaps, for example, tomorrow") is Category.IDEA

    def test_exclamation_beats_idea(self):
        assert classify("What an idea!") is Category.IMPORTANT


class TestColors:
    """Category to color mapping."""

    def test_palette(self):
        assert Category.QUESTION.color == "#D946EF"
        assert Category.IMPORTANT.color == "#F97316"
        assert Category.IDEA.color == "#9b87f5"
        assert Category.DETAIL.color == "#D3E4FD"
        assert Category.DEFAULT.color == "#F1F0FB"

    def test_every_category_has_a_color(self):
        assert set(CONTENT_COLORS) == set(Category)

    def test_color_for(self):
        assert color_for("Why?") == Category.QUESTION.color

    def test_contrast_text_on_dark_backgrounds(self):
        for category in (Category.QUESTION, Category.IMPORTANT, Category.IDEA):
            assert contrast_text_class(category.color) == "text-white"

    def test_contrast_text_on_light_backgrounds(self):
        assert contrast_text_class(Category.DETAIL.color) == "text-gray-800"
        assert contrast_text_class(Category.DEFAULT.color) == "text-gray-800"
        assert contrast_text_class(None) == "text-gray-800"
