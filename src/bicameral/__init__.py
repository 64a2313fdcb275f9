"""
bicameral - Text and whiteboard views of the same content

Two chambers, one document: a linear text view and a node/edge
whiteboard view that convert into each other without losing
paragraph order, with optional review of incremental edits as
accept/reject change proposals.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("bicameral")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"  # Not installed
__license__ = "MIT"

from bicameral.classifier import Category, classify
from bicameral.document import Alignment, FontSize, ParagraphStyle, TextDocument
from bicameral.graph.converter import to_graph, to_text
from bicameral.tracking.differ import diff_paragraphs
from bicameral.tracking.ledger import Change, ChangeLedger, ChangeStatus

__all__ = [
    "__version__",
    "Alignment",
    "Category",
    "Change",
    "ChangeLedger",
    "ChangeStatus",
    "FontSize",
    "ParagraphStyle",
    "TextDocument",
    "classify",
    "diff_paragraphs",
    "to_graph",
    "to_text",
]
