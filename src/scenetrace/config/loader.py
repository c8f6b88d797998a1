"""
scenetrace.config.loader - Configuration file discovery, parsing and merging.
"""

from __future__ import annotations

import copy
import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

import tomlkit

from scenetrace.config.defaults import DEFAULT_CONFIG

CONFIG_FILE_NAME = ".scenetrace.toml"
ENV_PREFIX = "SCENETRACE_"


def parse_toml(content: str) -> Dict[str, Any]:
    """Parse TOML text into plain Python containers.

    Args:
        content: TOML document text

    Returns:
        Nested dict with tomlkit wrappers removed

    Raises:
        tomlkit.exceptions.ParseError: If the text is not valid TOML
    """
    return tomlkit.parse(content).unwrap()


def find_config_file(start: Path) -> Optional[Path]:
    """Find .scenetrace.toml in start or any of its parents.

    Args:
        start: Directory to begin the search from

    Returns:
        Path to the config file, or None if not found
    """
    current = start.resolve()
    while True:
        candidate = current / CONFIG_FILE_NAME
        if candidate.is_file():
            return candidate
        if current == current.parent:
            return None
        current = current.parent


def merge_configs(defaults: Dict[str, Any], user: Dict[str, Any]) -> Dict[str, Any]:
    """Deep-merge user values over defaults.

    Nested tables are merged key by key; any other value in user
    replaces the default outright (lists are not concatenated).
    """
    merged = copy.deepcopy(defaults)
    for key, value in user.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_configs(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def load_config(config_path: Path) -> Dict[str, Any]:
    """Load a config file and merge it over DEFAULT_CONFIG.

    Raises:
        OSError: If the file cannot be read
        tomlkit.exceptions.ParseError: If the file is not valid TOML
    """
    user = parse_toml(config_path.read_text(encoding="utf-8"))
    return merge_configs(DEFAULT_CONFIG, user)


def _try_parse_env_value(value: str) -> Any:
    """Interpret an environment variable value.

    JSON arrays/objects become lists/dicts, true/false become booleans,
    integers become ints. Anything else (including malformed JSON) is
    returned unchanged.
    """
    stripped = value.strip()
    if stripped[:1] in ("[", "{"):
        try:
            return json.loads(stripped)
        except json.JSONDecodeError:
            return value
    lowered = stripped.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    if stripped.lstrip("-").isdigit():
        return int(stripped)
    return value


def _apply_env_overrides(config: Dict[str, Any]) -> Dict[str, Any]:
    """Apply SCENETRACE_<SECTION>_<KEY> environment overrides in place.

    SCENETRACE_DECLARATIONS_BASE_TYPE=NetworkBehaviour sets
    config["declarations"]["base_type"]. Sections are created on demand.
    """
    for name, raw in os.environ.items():
        if not name.startswith(ENV_PREFIX):
            continue
        remainder = name[len(ENV_PREFIX) :].lower()
        section, sep, key = remainder.partition("_")
        if not sep or not key:
            continue
        table = config.setdefault(section, {})
        if not isinstance(table, dict):
            continue
        table[key] = _try_parse_env_value(raw)
    return config


def get_config(
    config_path: Optional[Path] = None,
    start_dir: Optional[Path] = None,
) -> Dict[str, Any]:
    """Resolve the effective configuration.

    Uses config_path when given, otherwise searches upward from
    start_dir (default: cwd). Falls back to DEFAULT_CONFIG when no file
    exists. Environment overrides are applied last.
    """
    if config_path is None:
        config_path = find_config_file(start_dir or Path.cwd())

    if config_path is not None:
        config = load_config(config_path)
    else:
        config = copy.deepcopy(DEFAULT_CONFIG)

    return _apply_env_overrides(config)
