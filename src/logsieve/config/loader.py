"""
Configuration file loading utilities.

This module handles loading and parsing the optional TOML settings file.
Settings live in a ``[sieve]`` table:

    [sieve]
    patterns = ["GET /health", "ELB-HealthChecker"]
    threads = 8
    locale = "de_DE"
    log_output = "stdout"
    extensions = [".gz"]
    compression_level = 6
"""

import logging
import tomllib
from pathlib import Path
from typing import Any, Dict

from ..validation import ErrorSeverity, ValidationError, handle_config_error

logger = logging.getLogger(__name__)

SETTINGS_TABLE = "sieve"


def load_toml_file(file_path: Path, description: str = "configuration file") -> Dict[str, Any]:
    """
    Load and parse a TOML file with error handling.

    Args:
        file_path: Path to the TOML file to load
        description: Human-readable description for error messages

    Returns:
        Parsed TOML data as a dictionary

    Raises:
        FileNotFoundError: If the file doesn't exist
        tomllib.TOMLDecodeError: If the file is malformed
    """
    logger.info(f"Loading {description} from: {file_path}")

    if not file_path.exists():
        logger.error(f"{description} not found: {file_path}")
        raise FileNotFoundError(f"{description} not found: {file_path}")

    try:
        with open(file_path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        handle_config_error(
            error=e,
            context=f"parsing {description}",
            severity=ErrorSeverity.CRITICAL,
            reraise=True,
            logger=logger
        )
        raise


def load_settings_file(file_path: Path) -> Dict[str, Any]:
    """
    Load the ``[sieve]`` table of a settings file.

    A file without the table yields an empty dict.

    Raises:
        ValidationError: If ``sieve`` is present but is not a table
    """
    data = load_toml_file(Path(file_path).expanduser(), "settings file")
    settings = data.get(SETTINGS_TABLE, {})
    if not isinstance(settings, dict):
        raise ValidationError(
            f"[{SETTINGS_TABLE}] in {file_path} must be a table",
            field_name=SETTINGS_TABLE,
            value=settings,
        )

    unknown = sorted(set(data) - {SETTINGS_TABLE})
    if unknown:
        logger.warning(f"Ignoring unknown tables in {file_path}: {', '.join(unknown)}")
    return settings
