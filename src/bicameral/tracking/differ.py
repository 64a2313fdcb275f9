"""Paragraph differ - which paragraphs changed between two snapshots.

The comparison is positional: paragraph i of the old text is compared
with paragraph i of the new text. Inserting a paragraph before the end
therefore reports every later paragraph as changed. An LCS-based
paragraph aligner would fix that if diff quality ever matters more than
compatibility with existing change histories.
"""

from __future__ import annotations

from typing import Iterable, Iterator, Union

from bicameral.document import TextDocument

DocumentLike = Union[TextDocument, str, Iterable[str], None]


def iter_changed_paragraphs(old: DocumentLike, new: DocumentLike) -> Iterator[tuple[int, str]]:
    """Yield (index, new_paragraph) for every position that differs.

    A paragraph missing on either side compares as an empty string.
    When the old document is empty, every new paragraph is yielded.
    """
    old_doc = TextDocument.coerce(old)
    new_doc = TextDocument.coerce(new)

    if old_doc.is_empty:
        yield from enumerate(new_doc.paragraphs)
        return

    old_paragraphs = old_doc.paragraphs
    new_paragraphs = new_doc.paragraphs
    for i in range(max(len(old_paragraphs), len(new_paragraphs))):
        before = old_paragraphs[i] if i < len(old_paragraphs) else ""
        after = new_paragraphs[i] if i < len(new_paragraphs) else ""
        if before != after:
            yield i, after


def diff_paragraphs(old: DocumentLike, new: DocumentLike) -> str:
    """Return the changed paragraphs of new, newline-joined.

    Args:
        old: Text before the edit.
        new: Text after the edit.

    Returns:
        The changed paragraphs in index order; "" means no change.

    Example:
        >>> diff_paragraphs("a\\nb\\nc", "a\\nX\\nc")
        'X'
    """
    return "\n".join(text for _, text in iter_changed_paragraphs(old, new))
