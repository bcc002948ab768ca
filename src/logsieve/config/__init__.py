"""
Configuration management for the logsieve package.

This module loads the optional TOML settings file, merges it with command
line values and validates the result into a RunConfig.
"""

from .loader import SETTINGS_TABLE, load_settings_file, load_toml_file
from .manager import merge_settings, resolve_run_config
from .validators import KNOWN_SETTINGS, validate_locale, validate_run_settings

__all__ = [
    "KNOWN_SETTINGS",
    "SETTINGS_TABLE",
    "load_settings_file",
    "load_toml_file",
    "merge_settings",
    "resolve_run_config",
    "validate_locale",
    "validate_run_settings",
]
