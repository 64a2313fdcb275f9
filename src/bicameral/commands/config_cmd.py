"""
bicameral.commands.config_cmd - Inspect and create configuration.

- show: print the effective configuration (defaults + file + env)
- path: print the config file in use
- init: write a default ``.bicameral.toml`` in the current directory
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

import tomlkit

from bicameral.commands import settings_for
from bicameral.config import CONFIG_FILENAME, DEFAULT_CONFIG, find_config_file


def run(args: argparse.Namespace) -> int:
    """Run the config command."""
    action = getattr(args, "config_action", None)

    if action == "show":
        return _show(args)
    elif action == "path":
        return _path(args)
    elif action == "init":
        return _init(args)
    else:
        print("Usage: bicameral config <show|path|init>", file=sys.stderr)
        return 1


def _show(args: argparse.Namespace) -> int:
    config = settings_for(args)
    if getattr(args, "json", False):
        print(json.dumps(config, indent=2))
    else:
        print(tomlkit.dumps(config), end="")
    return 0


def _path(args: argparse.Namespace) -> int:
    explicit = getattr(args, "config", None)
    path = explicit if explicit is not None else find_config_file(Path.cwd())
    if path is None:
        print(f"No {CONFIG_FILENAME} found (using defaults)", file=sys.stderr)
        return 1
    print(Path(path).resolve())
    return 0


def _init(args: argparse.Namespace) -> int:
    target = Path.cwd() / CONFIG_FILENAME
    if target.exists() and not getattr(args, "force", False):
        print(f"{target} already exists (use --force to overwrite)", file=sys.stderr)
        return 1

    doc = tomlkit.document()
    doc.add(tomlkit.comment("bicameral configuration"))
    for section, values in DEFAULT_CONFIG.items():
        table = tomlkit.table()
        for key, value in values.items():
            table.add(key, value)
        doc.add(section, table)

    target.write_text(tomlkit.dumps(doc), encoding="utf-8")
    if not getattr(args, "quiet", False):
        print(f"Created {target}")
    return 0
