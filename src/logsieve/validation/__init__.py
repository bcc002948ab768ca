"""
Validation and error handling for the logsieve package.

This module provides the exception taxonomy, the shared error reporting
helpers and input validators used by the config layer and the CLI.
"""

from .exceptions import (
    DiscoveryError,
    ErrorSeverity,
    FileIOError,
    FileProcessingError,
    IOCorruptionError,
    RenameFailureError,
    SieveError,
    ValidationError,
    handle_cli_error,
    handle_config_error,
    handle_error,
    handle_file_error,
)
from .validators import (
    validate_directory,
    validate_enum_choice,
    validate_extensions,
    validate_patterns,
    validate_positive_float,
    validate_positive_integer,
)

__all__ = [
    # Errors
    "SieveError",
    "ValidationError",
    "DiscoveryError",
    "FileProcessingError",
    "IOCorruptionError",
    "FileIOError",
    "RenameFailureError",
    "ErrorSeverity",
    # Reporting
    "handle_error",
    "handle_config_error",
    "handle_file_error",
    "handle_cli_error",
    # Validators
    "validate_directory",
    "validate_enum_choice",
    "validate_extensions",
    "validate_patterns",
    "validate_positive_float",
    "validate_positive_integer",
]
