"""
Worker pool and task scheduling.

The pool runs per-file work on a fixed number of threads; the scheduler
feeds it tasks, collects results and honours shutdown requests between
files.
"""

from .scheduler import ScheduleOutcome, WorkScheduler
from .thread_pool import ManagedWorkerPool, WorkerPoolConfig

__all__ = [
    "ManagedWorkerPool",
    "ScheduleOutcome",
    "WorkScheduler",
    "WorkerPoolConfig",
]
