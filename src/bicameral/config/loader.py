"""
bicameral.config.loader - Find, parse and merge configuration.

Configuration is layered:
1. DEFAULT_CONFIG
2. The nearest ``.bicameral.toml`` (searched upward from the start dir)
3. ``BICAMERAL_<SECTION>_<KEY>`` environment variables
"""

from __future__ import annotations

import copy
import json
import os
import re
from pathlib import Path
from typing import Any

import tomlkit
from tomlkit.exceptions import ParseError

from bicameral.config.defaults import CONFIG_FILENAME, DEFAULT_CONFIG

ENV_PREFIX = "BICAMERAL_"

_INT_RE = re.compile(r"^-?\d+$")


def find_config_file(start_dir: Path) -> Path | None:
    """Find the nearest config file, walking up from start_dir.

    Args:
        start_dir: Directory to start searching from.

    Returns:
        Path to the config file, or None if no file is found.
    """
    current = Path(start_dir).resolve()
    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        if current.parent == current:
            return None
        current = current.parent


def parse_toml_document(content: str, source: str = "<string>") -> dict[str, Any]:
    """Parse TOML text into a plain dict.

    Raises:
        ValueError: If the content is not valid TOML.
    """
    try:
        doc = tomlkit.parse(content)
    except ParseError as e:
        raise ValueError(f"Invalid TOML in {source}: {e}") from e
    return doc.unwrap()


def merge_configs(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep-merge override into a copy of base.

    Nested dicts are merged key by key; any other value in override
    replaces the value in base.
    """
    result = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = copy.deepcopy(value)
    return result


def _try_parse_env_value(value: str) -> Any:
    """Convert an environment variable string to a typed value.

    JSON arrays and objects are decoded, ``true``/``false`` become
    booleans and integers become ints. Anything else (including
    malformed JSON) is returned unchanged.
    """
    stripped = value.strip()
    if stripped.startswith("[") or stripped.startswith("{"):
        try:
            return json.loads(stripped)
        except json.JSONDecodeError:
            return value
    lowered = stripped.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    if _INT_RE.match(stripped):
        return int(stripped)
    return value


def _apply_env_overrides(config: dict[str, Any]) -> dict[str, Any]:
    """Apply BICAMERAL_<SECTION>_<KEY> environment overrides in place.

    The first underscore-separated part after the prefix names the
    section; the remainder (lowercased) is the key, so
    ``BICAMERAL_TRACKING_IDLE_WINDOW_MS`` sets
    ``config["tracking"]["idle_window_ms"]``.
    """
    for name, raw in os.environ.items():
        if not name.startswith(ENV_PREFIX):
            continue
        parts = name[len(ENV_PREFIX) :].lower().split("_", 1)
        if len(parts) != 2 or not parts[0] or not parts[1]:
            continue
        section, key = parts
        target = config.setdefault(section, {})
        if isinstance(target, dict):
            target[key] = _try_parse_env_value(raw)
    return config


def load_config(config_path: Path | None = None, start_dir: Path | None = None) -> dict[str, Any]:
    """Load the effective configuration.

    Args:
        config_path: Explicit config file. When omitted, the nearest
            ``.bicameral.toml`` above start_dir (default: cwd) is used.
        start_dir: Where to start the upward search.

    Returns:
        Merged configuration dict.

    Raises:
        FileNotFoundError: If an explicit config_path does not exist.
        ValueError: If the config file is not valid TOML.
    """
    if config_path is None:
        config_path = find_config_file(start_dir or Path.cwd())
    elif not Path(config_path).is_file():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    config = copy.deepcopy(DEFAULT_CONFIG)
    if config_path is not None:
        content = Path(config_path).read_text(encoding="utf-8")
        config = merge_configs(config, parse_toml_document(content, str(config_path)))

    return _apply_env_overrides(config)
