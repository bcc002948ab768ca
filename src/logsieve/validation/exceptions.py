"""
Exception taxonomy and error reporting helpers.

This module defines the errors raised across logsieve and the shared
``handle_error`` seam used to log them consistently before re-raising
or exiting.
"""

import logging
import sys
from enum import Enum
from pathlib import Path
from typing import Any, Optional, Union

from ..models.results import ErrorKind

logger = logging.getLogger(__name__)


class ErrorSeverity(Enum):
    """Severity levels for error handling."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class SieveError(Exception):
    """Base class for all logsieve errors."""


class ValidationError(SieveError):
    """
    Exception raised when configuration validation fails.

    This is the exception type used by the validators and the config layer.
    """

    def __init__(self, message: str, field_name: Optional[str] = None,
                 value: Any = None, severity: ErrorSeverity = ErrorSeverity.ERROR):
        super().__init__(message)
        self.field_name = field_name
        self.value = value
        self.severity = severity


class DiscoveryError(SieveError):
    """Raised when the root directory is missing or is not a directory."""

    def __init__(self, message: str, root: Optional[Path] = None):
        super().__init__(message)
        self.root = root


class FileProcessingError(SieveError):
    """
    Per-file failure raised inside the file processor.

    These never escape ``process_file``; they are converted into
    ``FileFailure`` results carrying ``error_kind``.
    """

    error_kind: ErrorKind = ErrorKind.IO_ERROR

    def __init__(self, message: str, path: Optional[Path] = None):
        super().__init__(message)
        self.path = path


class IOCorruptionError(FileProcessingError):
    """Malformed or truncated gzip input."""

    error_kind = ErrorKind.IO_CORRUPTION


class FileIOError(FileProcessingError):
    """Permission, disk or other filesystem failure while rewriting a file."""

    error_kind = ErrorKind.IO_ERROR


class RenameFailureError(FileProcessingError):
    """The atomic replace of the original failed; the original is preserved."""

    error_kind = ErrorKind.RENAME_FAILURE


def handle_error(
    error: Exception,
    context: str,
    severity: Union[ErrorSeverity, str] = ErrorSeverity.ERROR,
    reraise: bool = True,
    logger: Optional[logging.Logger] = None
) -> None:
    """
    Handle errors with consistent logging and optional re-raising.

    Args:
        error: The exception that occurred
        context: Context description of where the error occurred
        severity: Severity level for logging
        reraise: Whether to re-raise the exception after logging
        logger: Logger instance to use (defaults to module logger)
    """
    effective_logger = logger or globals()['logger']

    error_msg = f"Error in {context}: {error}"

    if isinstance(severity, str):
        severity_str = severity.lower()
    else:
        severity_str = severity.value

    if severity_str == "debug":
        effective_logger.debug(error_msg, exc_info=True)
    elif severity_str == "info":
        effective_logger.info(error_msg)
    elif severity_str == "warning":
        effective_logger.warning(error_msg)
    elif severity_str == "error":
        effective_logger.error(error_msg)
    elif severity_str == "critical":
        effective_logger.critical(error_msg, exc_info=True)

    if reraise:
        raise error


def handle_config_error(error: Exception, context: str, **kwargs) -> None:
    """Handle configuration-related errors."""
    handle_error(error, f"config {context}", **kwargs)


def handle_file_error(error: Exception, context: str, **kwargs) -> None:
    """Handle file-related errors."""
    handle_error(error, f"file {context}", **kwargs)


def handle_cli_error(error: Exception, context: str, **kwargs) -> None:
    """Handle CLI-related errors by logging them and exiting."""
    exit_code = kwargs.pop('exit_code', 1)

    severity = kwargs.pop('severity', ErrorSeverity.ERROR)
    handle_error(error, f"CLI {context}", severity=severity, reraise=False, **kwargs)

    sys.exit(exit_code)
