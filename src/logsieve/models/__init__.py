"""
Data models for logsieve.

Configuration Models:
- RunConfig and LogOutput, the resolved settings of a run

Runtime Models:
- FileTask, one discovered file

Result Models:
- FileSuccess / FileFailure (together FileResult) per file
- RunSummary for the whole run
"""

from .config import (
    DEFAULT_COMPRESSION_LEVEL,
    DEFAULT_EXTENSIONS,
    DEFAULT_LOCALE,
    DEFAULT_REFRESH_INTERVAL,
    LogOutput,
    RunConfig,
)
from .results import ErrorKind, FileFailure, FileResult, FileSuccess, RunSummary
from .runtime import FileTask

__all__ = [
    "DEFAULT_COMPRESSION_LEVEL",
    "DEFAULT_EXTENSIONS",
    "DEFAULT_LOCALE",
    "DEFAULT_REFRESH_INTERVAL",
    "LogOutput",
    "RunConfig",
    "FileTask",
    "ErrorKind",
    "FileSuccess",
    "FileFailure",
    "FileResult",
    "RunSummary",
]
