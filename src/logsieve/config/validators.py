"""
Validation of raw settings into a RunConfig.
"""

import logging
from pathlib import Path
from typing import Any, Dict

from ..models import (
    DEFAULT_COMPRESSION_LEVEL,
    DEFAULT_EXTENSIONS,
    DEFAULT_LOCALE,
    DEFAULT_REFRESH_INTERVAL,
    LogOutput,
    RunConfig,
)
from ..summary import resolve_locale
from ..system import default_worker_count
from ..validation import (
    ValidationError,
    validate_directory,
    validate_enum_choice,
    validate_extensions,
    validate_patterns,
    validate_positive_float,
    validate_positive_integer,
)

logger = logging.getLogger(__name__)

KNOWN_SETTINGS = frozenset({
    "root_dir",
    "patterns",
    "threads",
    "locale",
    "log_output",
    "log_dir",
    "extensions",
    "compression_level",
    "refresh_interval",
    "show_progress",
})

MAX_THREADS = 1024


def validate_locale(locale_id: Any, field_name: str = "locale") -> str:
    """
    Normalise a locale identifier.

    Unknown locales are not fatal: they fall back to the default with a
    warning, matching how the summary formats numbers.
    """
    if not isinstance(locale_id, str) or not locale_id.strip():
        raise ValidationError(
            f"{field_name} must be a non-empty string, got {locale_id!r}",
            field_name=field_name,
            value=locale_id,
        )
    return str(resolve_locale(locale_id.strip()))


def validate_run_settings(settings: Dict[str, Any]) -> RunConfig:
    """
    Validate merged settings and create a RunConfig.

    Args:
        settings: Raw values from the settings file and CLI, CLI taking precedence

    Returns:
        Validated RunConfig instance

    Raises:
        ValidationError: If validation fails
    """
    unknown = sorted(set(settings) - KNOWN_SETTINGS)
    if unknown:
        raise ValidationError(
            f"Unknown settings: {', '.join(unknown)}",
            field_name="settings",
            value=unknown,
        )

    if settings.get("root_dir") is None:
        raise ValidationError("root_dir is required", field_name="root_dir")
    root_dir = validate_directory(settings["root_dir"], field_name="root_dir")

    patterns = validate_patterns(settings.get("patterns"), field_name="patterns")

    threads_value = settings.get("threads")
    if threads_value is None:
        threads = default_worker_count()
        logger.debug(f"threads not set, using {threads} (logical CPU count)")
    else:
        threads = validate_positive_integer(
            threads_value, min_value=1, max_value=MAX_THREADS, field_name="threads"
        )

    log_output = LogOutput(
        validate_enum_choice(
            settings.get("log_output", LogOutput.FILE.value),
            choices=[output.value for output in LogOutput],
            field_name="log_output",
            case_sensitive=False,
        )
    )

    log_dir = Path(settings.get("log_dir") or Path.cwd()).expanduser()

    extensions = validate_extensions(
        settings.get("extensions", list(DEFAULT_EXTENSIONS)), field_name="extensions"
    )

    compression_level = validate_positive_integer(
        settings.get("compression_level", DEFAULT_COMPRESSION_LEVEL),
        min_value=1,
        max_value=9,
        field_name="compression_level",
    )

    refresh_interval = validate_positive_float(
        settings.get("refresh_interval", DEFAULT_REFRESH_INTERVAL),
        min_value=0.05,
        max_value=10.0,
        field_name="refresh_interval",
    )

    show_progress = settings.get("show_progress", True)
    if not isinstance(show_progress, bool):
        raise ValidationError("show_progress must be a boolean", field_name="show_progress")

    return RunConfig(
        root_dir=root_dir,
        patterns=patterns,
        threads=threads,
        locale=validate_locale(settings.get("locale", DEFAULT_LOCALE)),
        log_output=log_output,
        log_dir=log_dir,
        extensions=extensions,
        compression_level=compression_level,
        refresh_interval=refresh_interval,
        show_progress=show_progress,
    )
