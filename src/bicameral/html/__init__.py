"""HTML preview of text documents.

Requires the ``preview`` extra (Jinja2).
"""

from bicameral.html.preview import PreviewGenerator, PreviewParagraph

__all__ = ["PreviewGenerator", "PreviewParagraph"]
