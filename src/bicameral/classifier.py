"""Content classifier - lexical category and color for a line of text.

Rules are evaluated in order and the first match wins:

1. ``?`` anywhere                          -> QUESTION
2. ``!`` or an emphasis keyword            -> IMPORTANT
3. a tentative keyword                     -> IDEA
4. an elaboration phrase                   -> DETAIL
5. anything else                           -> DEFAULT

Punctuation checks are case-sensitive; keyword checks are not.
"""

from __future__ import annotations

from enum import Enum


class Category(Enum):
    """Content category of a line; each maps to one color."""

    QUESTION = "question"
    IMPORTANT = "important"
    IDEA = "idea"
    DETAIL = "detail"
    DEFAULT = "default"

    @property
    def color(self) -> str:
        """Background color for nodes of this category."""
        return CONTENT_COLORS[self]


CONTENT_COLORS: dict[Category, str] = {
    Category.QUESTION: "#D946EF",  # Magenta pink
    Category.IMPORTANT: "#F97316",  # Bright orange
    Category.IDEA: "#9b87f5",  # Primary purple
    Category.DETAIL: "#D3E4FD",  # Soft blue
    Category.DEFAULT: "#F1F0FB",  # Soft gray
}

IMPORTANT_KEYWORDS = ("important", "critical", "essential", "key")
IDEA_KEYWORDS = ("idea", "concept", "maybe", "perhaps", "could")
DETAIL_KEYWORDS = ("specifically", "in fact", "for example", "e.g.", "i.e.")

# Backgrounds dark enough to need light label text
_DARK_COLORS = frozenset(
    CONTENT_COLORS[c] for c in (Category.IDEA, Category.QUESTION, Category.IMPORTANT)
)


def classify(line: str | None) -> Category:
    """Classify a line of text.

    Total: empty, None or non-string input yields Category.DEFAULT.

    Args:
        line: The text to classify.

    Returns:
        The first matching Category.
    """
    if not line or not isinstance(line, str):
        return Category.DEFAULT

    lowered = line.lower()

    if "?" in line:
        return Category.QUESTION
    if "!" in line or _contains_any(lowered, IMPORTANT_KEYWORDS):
        return Category.IMPORTANT
    if _contains_any(lowered, IDEA_KEYWORDS):
        return Category.IDEA
    if _contains_any(lowered, DETAIL_KEYWORDS):
        return Category.DETAIL
    return Category.DEFAULT


def color_for(line: str | None) -> str:
    """Shortcut for ``classify(line).color``."""
    return classify(line).color


def contrast_text_class(color: str | None) -> str:
    """Text color class that stays readable on the given background."""
    if color in _DARK_COLORS:
        return "text-white"
    return "text-gray-800"


def _contains_any(text: str, needles: tuple[str, ...]) -> bool:
    return any(needle in text for needle in needles)
