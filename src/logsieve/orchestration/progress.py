"""
Thread-safe aggregation of per-file results.

Workers call ``ProgressAggregator.record`` once per finished file; the live
display and the summary read consistent ``ProgressSnapshot`` values. The
lock is held only for counter arithmetic, never across I/O.
"""

import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional

from ..models import FileResult, FileSuccess


@dataclass(frozen=True)
class ProgressSnapshot:
    """Point-in-time copy of the shared progress counters."""

    files_total: int
    files_completed: int
    files_failed: int
    lines_total: int
    lines_removed: int
    bytes_processed: int
    bytes_total: int
    elapsed: float

    @property
    def files_succeeded(self) -> int:
        return self.files_completed - self.files_failed

    @property
    def files_remaining(self) -> int:
        return self.files_total - self.files_completed

    @property
    def is_complete(self) -> bool:
        return self.files_completed >= self.files_total

    @property
    def fraction_complete(self) -> float:
        if self.files_total == 0:
            return 1.0
        return self.files_completed / self.files_total

    @property
    def throughput(self) -> Optional[float]:
        """Compressed bytes processed per second, None before any time has passed."""
        if self.elapsed <= 0:
            return None
        return self.bytes_processed / self.elapsed

    @property
    def eta(self) -> Optional[float]:
        """
        Estimated seconds until every file is done.

        ``remaining * (elapsed / completed)``; None until a file has completed.
        """
        if self.files_completed == 0:
            return None
        return self.files_remaining * (self.elapsed / self.files_completed)


class ProgressAggregator:
    """
    Shared progress counters for one run.

    Created when the file list is known and passed explicitly to the workers
    and the display. Counters only ever grow, and ``files_completed`` can
    never exceed ``files_total``.
    """

    def __init__(
        self,
        files_total: int,
        bytes_total: int = 0,
        clock: Callable[[], float] = time.monotonic,
    ):
        if files_total < 0:
            raise ValueError(f"files_total must be >= 0, got {files_total}")
        self.files_total = files_total
        self.bytes_total = bytes_total
        self._clock = clock
        self._start = clock()
        self._lock = threading.Lock()

        self._files_completed = 0
        self._files_failed = 0
        self._lines_total = 0
        self._lines_removed = 0
        self._bytes_processed = 0

    def record(self, result: FileResult) -> None:
        """
        Fold one file's result into the counters.

        Raises:
            ValueError: If more results are recorded than there are files
        """
        with self._lock:
            if self._files_completed >= self.files_total:
                raise ValueError(
                    f"Recorded more results than files_total ({self.files_total})"
                )
            self._files_completed += 1
            if isinstance(result, FileSuccess):
                self._lines_total += result.lines_total
                self._lines_removed += result.lines_removed
                self._bytes_processed += result.bytes_in
            else:
                self._files_failed += 1

    def snapshot(self) -> ProgressSnapshot:
        with self._lock:
            return ProgressSnapshot(
                files_total=self.files_total,
                files_completed=self._files_completed,
                files_failed=self._files_failed,
                lines_total=self._lines_total,
                lines_removed=self._lines_removed,
                bytes_processed=self._bytes_processed,
                bytes_total=self.bytes_total,
                elapsed=self._clock() - self._start,
            )
