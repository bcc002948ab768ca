"""
Dispatch of file tasks onto the worker pool.
"""

import logging
import threading
from concurrent.futures import FIRST_COMPLETED, Future, wait
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional

from ..models import ErrorKind, FileFailure, FileResult, FileTask
from .thread_pool import ManagedWorkerPool, WorkerPoolConfig

logger = logging.getLogger(__name__)


@dataclass
class ScheduleOutcome:
    """What happened to every task handed to the scheduler."""

    results: List[FileResult] = field(default_factory=list)
    # Tasks never started because shutdown was requested first.
    skipped: List[FileTask] = field(default_factory=list)

    @property
    def cancelled(self) -> bool:
        return bool(self.skipped)


class WorkScheduler:
    """
    Runs a worker function over every task with a bounded thread pool.

    Each task is processed exactly once by exactly one worker and a failing
    task never stops the others. When ``shutdown_event`` is set, tasks that
    have not started are skipped; tasks already running are allowed to
    finish so their output is either fully committed or discarded.
    """

    def __init__(
        self,
        config: WorkerPoolConfig,
        shutdown_event: Optional[threading.Event] = None,
    ):
        self.config = config
        self.shutdown_event = shutdown_event or threading.Event()

    def _run_one(
        self,
        task: FileTask,
        worker: Callable[[FileTask], FileResult],
        on_result: Optional[Callable[[FileResult], None]],
    ) -> Optional[FileResult]:
        if self.shutdown_event.is_set():
            return None

        try:
            result = worker(task)
        except Exception as e:
            logger.error(f"Unexpected error processing {task.path}: {e}", exc_info=True)
            result = FileFailure(path=task.path, error_kind=ErrorKind.IO_ERROR, message=str(e))

        if on_result is not None:
            on_result(result)
        return result

    def run(
        self,
        tasks: Iterable[FileTask],
        worker: Callable[[FileTask], FileResult],
        on_result: Optional[Callable[[FileResult], None]] = None,
    ) -> ScheduleOutcome:
        """
        Process all tasks and block until each has resolved.

        Args:
            tasks: Tasks to process
            worker: Called once per task on a pool thread
            on_result: Called on the worker thread right after each result

        Returns:
            ScheduleOutcome with the results in completion order and the
            tasks skipped due to shutdown
        """
        outcome = ScheduleOutcome()

        with ManagedWorkerPool(self.config) as pool:
            pending: Dict[Future, FileTask] = {
                pool.submit(self._run_one, task, worker, on_result): task for task in tasks
            }
            logger.debug(f"Submitted {len(pending)} tasks to the worker pool")

            shutdown_logged = False
            while pending:
                if self.shutdown_event.is_set() and not shutdown_logged:
                    cancelled = pool.cancel_pending()
                    logger.warning(
                        f"Shutdown requested; cancelled {cancelled} queued files, "
                        f"waiting for files in progress"
                    )
                    shutdown_logged = True

                done, _ = wait(
                    pending,
                    timeout=self.config.poll_interval,
                    return_when=FIRST_COMPLETED,
                )
                for future in done:
                    task = pending.pop(future)
                    if future.cancelled():
                        outcome.skipped.append(task)
                        continue
                    result = future.result()
                    if result is None:
                        outcome.skipped.append(task)
                    else:
                        outcome.results.append(result)

        stats = pool.get_stats()
        logger.debug(
            f"Worker pool finished: {stats['tasks_completed']} completed, "
            f"{stats['tasks_failed']} failed, {stats['tasks_cancelled']} cancelled "
            f"of {stats['tasks_submitted']} submitted ({stats['success_rate']:.1f}% success)"
        )
        if outcome.skipped:
            logger.info(f"{len(outcome.skipped)} files were not processed")
        return outcome
