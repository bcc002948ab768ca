"""
Configuration data models.

``RunConfig`` is the fully resolved configuration handed from the CLI layer
to the core. It is built once by ``logsieve.config`` and never mutated
afterwards.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Tuple


DEFAULT_EXTENSIONS: Tuple[str, ...] = (".gz",)
DEFAULT_LOCALE = "en"
DEFAULT_COMPRESSION_LEVEL = 6
DEFAULT_REFRESH_INTERVAL = 0.25


class LogOutput(Enum):
    """Where log records are written."""

    FILE = "file"
    STDOUT = "stdout"


@dataclass(frozen=True)
class RunConfig:
    """
    Resolved configuration for a single sieve run.
    """

    # Directory walked recursively for compressed log files.
    root_dir: Path
    # Literal, case-sensitive substrings; a line containing any of them is dropped.
    patterns: Tuple[str, ...]
    # Number of worker threads, at least 1.
    threads: int
    # Locale identifier used to format the summary numbers (e.g. "en", "de_DE").
    locale: str = DEFAULT_LOCALE
    # Consumed only by the logging setup in the CLI layer.
    log_output: LogOutput = LogOutput.FILE
    log_dir: Path = field(default_factory=Path.cwd)
    extensions: Tuple[str, ...] = DEFAULT_EXTENSIONS
    # gzip level used for the rewritten files (1-9).
    compression_level: int = DEFAULT_COMPRESSION_LEVEL
    # Seconds between live display refreshes.
    refresh_interval: float = DEFAULT_REFRESH_INTERVAL
    show_progress: bool = True
