"""Document model - paragraphs and per-paragraph presentation.

This module provides the data shared by every view:
- TextDocument: Immutable ordered sequence of paragraph strings
- Alignment / FontSize: Closed vocabularies for paragraph presentation
- ParagraphStyle: Per-index alignment and size overrides with fallbacks
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Iterator


class Alignment(Enum):
    """Horizontal alignment of a paragraph."""

    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"
    JUSTIFY = "justify"


class FontSize(Enum):
    """Relative font size of a paragraph."""

    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"
    XLARGE = "xlarge"

    @property
    def css_class(self) -> str:
        """CSS utility class for this size."""
        return FONT_SIZE_CLASSES[self]


FONT_SIZE_CLASSES: dict[FontSize, str] = {
    FontSize.SMALL: "text-sm",
    FontSize.MEDIUM: "text-base",
    FontSize.LARGE: "text-lg",
    FontSize.XLARGE: "text-xl",
}

FONT_FAMILY_CLASSES: dict[str, str] = {
    "sans": "font-sans",
    "serif": "font-serif",
    "mono": "font-mono",
}

FONT_FAMILY_CSS: dict[str, str] = {
    "sans": "sans-serif",
    "serif": "serif",
    "mono": "monospace",
}


@dataclass(frozen=True)
class TextDocument:
    """Ordered paragraphs; the canonical linear representation.

    An empty sequence and a single empty paragraph are the same
    document and both normalize to ``()``.

    Attributes:
        paragraphs: Paragraph strings in document order.
    """

    paragraphs: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        paragraphs = tuple(self.paragraphs)
        if paragraphs == ("",):
            paragraphs = ()
        object.__setattr__(self, "paragraphs", paragraphs)

    @classmethod
    def from_text(cls, text: str | None) -> TextDocument:
        """Split newline-separated text into a document."""
        if not text:
            return cls()
        return cls(tuple(text.split("\n")))

    @classmethod
    def coerce(cls, value: TextDocument | str | Iterable[str] | None) -> TextDocument:
        """Accept a document, a newline-joined string or a paragraph list."""
        if isinstance(value, TextDocument):
            return value
        if value is None or isinstance(value, str):
            return cls.from_text(value)
        return cls(tuple(value))

    def to_text(self) -> str:
        """Join paragraphs with newlines."""
        return "\n".join(self.paragraphs)

    @property
    def is_empty(self) -> bool:
        return not self.paragraphs

    @property
    def is_blank(self) -> bool:
        """True if every paragraph is whitespace-only (or there are none)."""
        return all(not p.strip() for p in self.paragraphs)

    def __len__(self) -> int:
        return len(self.paragraphs)

    def __iter__(self) -> Iterator[str]:
        return iter(self.paragraphs)

    def __getitem__(self, index: int) -> str:
        return self.paragraphs[index]

    def __str__(self) -> str:
        return self.to_text()


@dataclass
class ParagraphStyle:
    """Per-paragraph alignment and font size, keyed by paragraph index.

    Indices without an override fall back to the document-wide values.

    Attributes:
        font_size: Document-wide font size.
        font_family: Document-wide font family key (sans, serif, mono).
        alignment: Document-wide alignment.
        alignments: Per-index alignment overrides.
        font_sizes: Per-index font size overrides.
    """

    font_size: FontSize = FontSize.MEDIUM
    font_family: str = "sans"
    alignment: Alignment = Alignment.LEFT
    alignments: dict[int, Alignment] = field(default_factory=dict)
    font_sizes: dict[int, FontSize] = field(default_factory=dict)

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> ParagraphStyle:
        """Build the fallback style from the ``[editor]`` config section."""
        editor = config.get("editor", {})
        return cls(
            font_size=FontSize(editor.get("font_size", FontSize.MEDIUM.value)),
            font_family=editor.get("font_family", "sans"),
            alignment=Alignment(editor.get("alignment", Alignment.LEFT.value)),
        )

    def alignment_for(self, index: int) -> Alignment:
        return self.alignments.get(index, self.alignment)

    def font_size_for(self, index: int) -> FontSize:
        return self.font_sizes.get(index, self.font_size)

    def set_alignment(self, index: int, alignment: Alignment | str) -> None:
        self.alignments[index] = Alignment(alignment)

    def set_font_size(self, index: int, size: FontSize | str) -> None:
        self.font_sizes[index] = FontSize(size)

    @property
    def font_family_class(self) -> str:
        return FONT_FAMILY_CLASSES.get(self.font_family, "")

    def copy(self) -> ParagraphStyle:
        """Return an independent copy (override maps are not shared)."""
        return ParagraphStyle(
            font_size=self.font_size,
            font_family=self.font_family,
            alignment=self.alignment,
            alignments=dict(self.alignments),
            font_sizes=dict(self.font_sizes),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict."""
        return {
            "font_size": self.font_size.value,
            "font_family": self.font_family,
            "alignment": self.alignment.value,
            "alignments": {str(i): a.value for i, a in sorted(self.alignments.items())},
            "font_sizes": {str(i): s.value for i, s in sorted(self.font_sizes.items())},
        }
