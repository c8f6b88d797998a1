"""
scenetrace.config - Configuration loading and defaults
"""

from scenetrace.config.defaults import DEFAULT_CONFIG
from scenetrace.config.loader import (
    CONFIG_FILE_NAME,
    _apply_env_overrides,
    _try_parse_env_value,
    find_config_file,
    get_config,
    load_config,
    merge_configs,
    parse_toml,
)

__all__ = [
    "CONFIG_FILE_NAME",
    "DEFAULT_CONFIG",
    "find_config_file",
    "get_config",
    "load_config",
    "merge_configs",
    "parse_toml",
]
