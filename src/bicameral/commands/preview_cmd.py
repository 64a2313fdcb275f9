"""
bicameral.commands.preview_cmd - Render a text file as HTML.
"""

from __future__ import annotations

import argparse
from pathlib import Path

from bicameral.commands import read_input, settings_for, write_output
from bicameral.document import ParagraphStyle


def run(args: argparse.Namespace) -> int:
    """Run the preview command.

    Paragraph style comes from the ``[editor]`` config section.
    """
    from bicameral.html.preview import PreviewGenerator

    style = ParagraphStyle.from_config(settings_for(args))
    title = "Preview" if args.file == "-" else Path(args.file).name

    html = PreviewGenerator(read_input(args.file), style).generate(title=title)
    write_output(html, args.output)
    if args.output is not None and not getattr(args, "quiet", False):
        print(f"Generated: {args.output}")
    return 0
