"""Preview renderer - read-only HTML view of a text document.

Each paragraph becomes a ``<p>`` with its own alignment and size class;
blank paragraphs render as a ``<br>`` so the vertical rhythm matches the
editor. Uses Jinja2 templates.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable

from bicameral import __version__
from bicameral.document import ParagraphStyle, TextDocument

if TYPE_CHECKING:
    from bicameral.tracking.ledger import Change

PARAGRAPH_MARGIN = "0.5em"


@dataclass
class PreviewParagraph:
    """One rendered paragraph."""

    text: str
    alignment: str
    size_class: str

    @property
    def is_blank(self) -> bool:
        return not self.text.strip()


class PreviewGenerator:
    """Renders a TextDocument with its ParagraphStyle as standalone HTML.

    Args:
        document: The document (or newline-joined text) to render.
        style: Paragraph style; the default style when omitted.
        version: Version string for the footer (defaults to the package version).
    """

    def __init__(
        self,
        document: TextDocument | str,
        style: ParagraphStyle | None = None,
        version: str | None = None,
    ) -> None:
        self.document = TextDocument.coerce(document)
        self.style = style if style is not None else ParagraphStyle()
        self.version = version if version is not None else __version__

    def build_paragraphs(self) -> list[PreviewParagraph]:
        # The preview always shows at least one line, like the editor.
        paragraphs = self.document.paragraphs or ("",)
        return [
            PreviewParagraph(
                text=text,
                alignment=self.style.alignment_for(index).value,
                size_class=self.style.font_size_for(index).css_class,
            )
            for index, text in enumerate(paragraphs)
        ]

    def generate(self, title: str = "Preview", changes: Iterable[Change] = ()) -> str:
        """Generate the complete HTML page.

        Args:
            title: Page heading.
            changes: Changes to list under the preview (newest first).

        Returns:
            Complete HTML document as string.
        """
        try:
            from jinja2 import Environment, PackageLoader, select_autoescape

            env = Environment(
                loader=PackageLoader("bicameral.html", "templates"),
                autoescape=select_autoescape(["html", "xml", "j2"]),
            )
            template = env.get_template("preview.html.j2")
        except ImportError:
            raise ImportError(
                "PreviewGenerator requires the preview extra. "
                "Install with: pip install bicameral[preview]"
            )

        return template.render(
            title=title,
            paragraphs=self.build_paragraphs(),
            font_family_class=self.style.font_family_class,
            paragraph_margin=PARAGRAPH_MARGIN,
            changes=list(changes),
            version=self.version,
        )
