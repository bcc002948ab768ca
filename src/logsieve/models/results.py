"""
Per-file and per-run result models.

A ``FileResult`` is produced by the file processor for exactly one
``FileTask`` and is then consumed by the progress aggregator and the run
summary. ``RunSummary`` is the immutable snapshot handed back to the caller
once the run ends.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Tuple, Union


class ErrorKind(Enum):
    """Classification of a per-file failure."""

    IO_CORRUPTION = "io_corruption"
    IO_ERROR = "io_error"
    RENAME_FAILURE = "rename_failure"


@dataclass(frozen=True)
class FileSuccess:
    """A file that was filtered and atomically replaced."""

    path: Path
    # Lines read from the decompressed input, including the removed ones.
    lines_total: int
    lines_removed: int
    # Compressed sizes on disk before and after the rewrite.
    bytes_in: int
    bytes_out: int

    @property
    def success(self) -> bool:
        return True

    @property
    def lines_kept(self) -> int:
        return self.lines_total - self.lines_removed


@dataclass(frozen=True)
class FileFailure:
    """A file that could not be rewritten; the original is left untouched."""

    path: Path
    error_kind: ErrorKind
    message: str = ""

    @property
    def success(self) -> bool:
        return False


FileResult = Union[FileSuccess, FileFailure]


@dataclass(frozen=True)
class RunSummary:
    """
    Final, immutable statistics of a sieve run.

    ``files_processed + files_failed + files_skipped == files_total`` holds
    for every summary; ``files_skipped`` is non-zero only when the run was
    cancelled before every task was started.
    """

    files_total: int
    files_processed: int
    files_failed: int
    files_skipped: int
    lines_total: int
    lines_removed: int
    bytes_processed: int
    elapsed_seconds: float
    failures: Tuple[FileFailure, ...] = field(default_factory=tuple)
    cancelled: bool = False

    @property
    def has_failures(self) -> bool:
        return self.files_failed > 0
