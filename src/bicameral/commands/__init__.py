"""
bicameral.commands - CLI command implementations
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any

__all__ = [
    "classify_cmd",
    "config_cmd",
    "convert_cmd",
    "diff_cmd",
    "preview_cmd",
    "serve_cmd",
]


def settings_for(args: argparse.Namespace) -> dict[str, Any]:
    """Effective configuration for a command (loaded by main())."""
    settings = getattr(args, "settings", None)
    if settings is None:
        from bicameral.config import load_config

        settings = load_config(getattr(args, "config", None))
        args.settings = settings
    return settings


def read_input(source: str | Path) -> str:
    """Read a UTF-8 file, or stdin when source is '-'."""
    if str(source) == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def write_output(content: str, output: Path | None) -> None:
    """Write to output, or stdout when output is None."""
    if output is None:
        sys.stdout.write(content)
        if not content.endswith("\n"):
            sys.stdout.write("\n")
        return
    output.write_text(content, encoding="utf-8")
