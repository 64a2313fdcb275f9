"""
bicameral.commands.classify_cmd - Show the content category of lines.
"""

from __future__ import annotations

import argparse
import json

from bicameral.classifier import classify


def run(args: argparse.Namespace) -> int:
    """Run the classify command.

    Prints one ``category<TAB>color<TAB>text`` line per argument, or a
    JSON list with -j.
    """
    rows = []
    for text in args.text:
        category = classify(text)
        rows.append({"text": text, "category": category.value, "color": category.color})

    if getattr(args, "json", False):
        print(json.dumps(rows, indent=2))
        return 0

    for row in rows:
        print(f"{row['category']}\t{row['color']}\t{row['text']}")
    return 0
