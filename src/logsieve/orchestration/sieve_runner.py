"""
SieveRunner: coordinates one complete filtering run.

The runner discovers files, creates the shared progress aggregator, runs the
per-file work on the worker pool and turns the final counters into a
RunSummary. Output (progress display, printing) is injected by the caller.
"""

import contextlib
import logging
from typing import Callable, ContextManager, List, Optional

from ..discovery import FileDiscoverer
from ..executor import ScheduleOutcome, WorkScheduler, WorkerPoolConfig
from ..filtering import LineFilter
from ..models import FileFailure, FileResult, FileTask, RunConfig, RunSummary
from ..processing import process_file
from ..summary import build_summary
from .progress import ProgressAggregator
from .shared_state import RuntimeState
from .signal_handler import SignalHandler

logger = logging.getLogger(__name__)

DisplayFactory = Callable[[ProgressAggregator], ContextManager]


class SieveRunner:
    """
    Runs discovery, filtering and summarisation for a RunConfig.

    Example:
        runner = SieveRunner(config)
        summary = runner.run()
    """

    def __init__(
        self,
        config: RunConfig,
        display_factory: Optional[DisplayFactory] = None,
        install_signal_handlers: bool = True,
    ):
        self.config = config
        self.state = RuntimeState()
        self.line_filter = LineFilter(config.patterns)
        self.display_factory = display_factory
        self.install_signal_handlers = install_signal_handlers
        self.signal_handler = SignalHandler(self.state)

    def request_shutdown(self) -> None:
        """Stop handing out new files; files in progress still complete."""
        if not self.state.shutdown_requested.is_set():
            logger.info("Shutdown requested, no new files will be started")
        self.state.shutdown_requested.set()

    def discover(self) -> List[FileTask]:
        """
        Enumerate the target files up front.

        Raises:
            DiscoveryError: If the root directory is missing or not a directory
        """
        discoverer = FileDiscoverer(self.config.root_dir, self.config.extensions)
        tasks, total_size = discoverer.collect()
        self.state.bytes_total = total_size
        return tasks

    def process(self, task: FileTask) -> FileResult:
        return process_file(task, self.line_filter, self.config.compression_level)

    def run(self) -> RunSummary:
        """
        Execute the entire run and return its summary.

        Raises:
            DiscoveryError: Before any file is touched, if the root is invalid
        """
        runner_id = id(self)
        if self.install_signal_handlers:
            self.signal_handler.register_runner(runner_id, self)
            self.signal_handler.setup_signal_handlers()

        try:
            tasks = self.discover()
            if self.line_filter.is_noop:
                logger.warning("No patterns given; files will be recompressed unchanged")

            progress = ProgressAggregator(len(tasks), self.state.bytes_total)

            outcome = self._schedule(tasks, progress)
        finally:
            if self.install_signal_handlers:
                self.signal_handler.cleanup_signal_handlers()
                self.signal_handler.unregister_runner(runner_id)

        failures = [result for result in outcome.results if isinstance(result, FileFailure)]
        summary = build_summary(
            progress.snapshot(),
            failures=failures,
            files_skipped=len(outcome.skipped),
            cancelled=self.state.shutdown_requested.is_set() and outcome.cancelled,
        )
        logger.info(
            f"Run finished: {summary.files_processed} processed, {summary.files_failed} failed, "
            f"{summary.files_skipped} skipped, {summary.lines_removed} of "
            f"{summary.lines_total} lines removed"
        )
        return summary

    def _schedule(self, tasks: List[FileTask], progress: ProgressAggregator) -> ScheduleOutcome:
        if not tasks:
            return ScheduleOutcome()

        scheduler = WorkScheduler(
            WorkerPoolConfig(max_workers=self.config.threads),
            shutdown_event=self.state.shutdown_requested,
        )

        display = (
            self.display_factory(progress) if self.display_factory else contextlib.nullcontext()
        )
        with display:
            return scheduler.run(tasks, self.process, on_result=progress.record)
