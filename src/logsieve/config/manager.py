"""
Resolution of the final RunConfig.

Precedence, highest first: explicit CLI values, the optional settings file,
built-in defaults.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from ..models import RunConfig
from .loader import load_settings_file
from .validators import validate_run_settings

logger = logging.getLogger(__name__)


def merge_settings(
    file_settings: Mapping[str, Any], cli_settings: Mapping[str, Any]
) -> Dict[str, Any]:
    """
    Overlay CLI values on file settings.

    CLI values of ``None`` mean "not given". An empty CLI pattern list does
    not erase patterns from the file.
    """
    merged: Dict[str, Any] = dict(file_settings)
    for key, value in cli_settings.items():
        if value is None:
            continue
        if key == "patterns" and not value:
            continue
        merged[key] = value
    return merged


def resolve_run_config(
    cli_settings: Mapping[str, Any], config_path: Optional[Path] = None
) -> RunConfig:
    """
    Build the RunConfig for a run.

    Args:
        cli_settings: Values parsed from the command line
        config_path: Optional TOML settings file

    Raises:
        FileNotFoundError: If config_path does not exist
        tomllib.TOMLDecodeError: If the settings file is malformed
        ValidationError: If any value is invalid
    """
    file_settings: Dict[str, Any] = {}
    if config_path is not None:
        file_settings = load_settings_file(config_path)

    config = validate_run_settings(merge_settings(file_settings, cli_settings))
    logger.info(
        f"Resolved configuration: root={config.root_dir}, {len(config.patterns)} patterns, "
        f"{config.threads} threads, locale={config.locale}"
    )
    return config
