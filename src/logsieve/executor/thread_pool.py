"""
Thread pool used to run per-file work.

``ManagedWorkerPool`` wraps ``ThreadPoolExecutor`` with an explicit
start/shutdown lifecycle and task statistics. The executor's internal work
queue gives the dynamic hand-off the scheduler relies on: a worker that
finishes a file immediately takes the next queued one.
"""

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Set

from ..validation import ErrorSeverity, handle_error

logger = logging.getLogger(__name__)


@dataclass
class WorkerPoolConfig:
    """Configuration for the worker thread pool."""

    max_workers: int = 4
    thread_name_prefix: str = "SieveWorker"
    # How often the scheduler wakes up to check for a shutdown request.
    poll_interval: float = 0.2


class ManagedWorkerPool:
    """
    ThreadPoolExecutor with lifecycle management and task statistics.

    At most ``config.max_workers`` tasks run concurrently. Statistics are
    updated from completion callbacks under a lock and can be read at any
    time with ``get_stats``.
    """

    def __init__(self, config: WorkerPoolConfig):
        """
        Initialize the managed worker pool.

        Args:
            config: Worker pool configuration
        """
        self.config = config
        self.executor: Optional[ThreadPoolExecutor] = None
        self.active_futures: Set[Future] = set()
        self.is_shutdown = False
        self._lock = threading.Lock()

        self.stats = {
            "tasks_submitted": 0,
            "tasks_completed": 0,
            "tasks_failed": 0,
            "tasks_cancelled": 0,
        }

    def start(self) -> None:
        """
        Start the underlying executor.

        Raises:
            RuntimeError: If already started
        """
        if self.executor is not None:
            raise RuntimeError("Worker pool already started")
        if self.config.max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {self.config.max_workers}")

        self.executor = ThreadPoolExecutor(
            max_workers=self.config.max_workers,
            thread_name_prefix=self.config.thread_name_prefix,
        )
        self.is_shutdown = False
        logger.info(f"Started worker pool with {self.config.max_workers} workers")

    def submit(self, fn: Callable, *args, **kwargs) -> Future:
        """
        Submit a task to the pool.

        Raises:
            RuntimeError: If the pool is not started or is shut down
        """
        if self.executor is None:
            raise RuntimeError("Worker pool not started")
        if self.is_shutdown:
            raise RuntimeError("Worker pool is shutdown")

        with self._lock:
            self.stats["tasks_submitted"] += 1

        future = self.executor.submit(fn, *args, **kwargs)
        with self._lock:
            self.active_futures.add(future)
        future.add_done_callback(self._task_completed)
        return future

    def cancel_pending(self) -> int:
        """
        Cancel every task that has not started yet.

        Running tasks are left to finish.

        Returns:
            Number of tasks that were cancelled
        """
        with self._lock:
            futures = list(self.active_futures)
        return sum(1 for future in futures if future.cancel())

    def shutdown(self, wait: bool = True, cancel_futures: bool = False) -> None:
        """
        Shutdown the pool.

        Args:
            wait: Whether to wait for running tasks
            cancel_futures: Whether to cancel queued tasks first
        """
        if self.executor is None or self.is_shutdown:
            return

        try:
            self.is_shutdown = True
            self.executor.shutdown(wait=wait, cancel_futures=cancel_futures)
            if wait:
                logger.info("Worker pool shutdown completed")
            else:
                logger.info("Worker pool shutdown initiated")
        except Exception as e:
            handle_error(
                error=e,
                context="shutting down worker pool",
                severity=ErrorSeverity.WARNING,
                reraise=False,
                logger=logger,
            )
        finally:
            self.executor = None
            with self._lock:
                self.active_futures.clear()

    def get_stats(self) -> Dict[str, Any]:
        """
        Get current pool statistics.

        Returns:
            Dictionary containing usage statistics
        """
        with self._lock:
            stats = self.stats.copy()
            stats["active_futures"] = len(self.active_futures)

        stats["is_shutdown"] = self.is_shutdown
        stats["success_rate"] = (
            stats["tasks_completed"] / max(1, stats["tasks_submitted"]) * 100
        )
        return stats

    def _task_completed(self, future: Future) -> None:
        with self._lock:
            self.active_futures.discard(future)
            if future.cancelled():
                self.stats["tasks_cancelled"] += 1
            elif future.exception() is not None:
                self.stats["tasks_failed"] += 1
            else:
                self.stats["tasks_completed"] += 1

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        # an exception escaping the with-block means nobody will collect the queue
        self.shutdown(wait=True, cancel_futures=exc_type is not None)
