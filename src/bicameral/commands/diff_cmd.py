"""
bicameral.commands.diff_cmd - Paragraph diff between two text files.
"""

from __future__ import annotations

import argparse
import json
import sys

from bicameral.commands import read_input
from bicameral.tracking.differ import diff_paragraphs, iter_changed_paragraphs


def run(args: argparse.Namespace) -> int:
    """Run the diff command.

    Text output lists each changed paragraph as ``index: text``; the
    JSON output also carries the newline-joined change text a tracked
    change would record.
    """
    old = read_input(args.old)
    new = read_input(args.new)
    changed = list(iter_changed_paragraphs(old, new))

    if getattr(args, "json", False):
        result = {
            "diff": diff_paragraphs(old, new),
            "changed": [{"index": i, "text": text} for i, text in changed],
            "has_changes": bool(changed),
        }
        print(json.dumps(result, indent=2))
        return 0

    if not changed:
        if not getattr(args, "quiet", False):
            print("No changes", file=sys.stderr)
        return 0

    for index, text in changed:
        print(f"{index + 1}: {text}")
    return 0
