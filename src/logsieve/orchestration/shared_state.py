"""
Shared data structures for the orchestration module.

This module defines the runtime state shared between the runner, the
signal handler and the worker pool.
"""

import threading
from dataclasses import dataclass, field


@dataclass
class RuntimeState:
    """
    Runtime state of one sieve run.

    ``shutdown_requested`` is the only cross-thread signal: the signal
    handler sets it, workers check it before starting each file.
    """

    # Combined compressed size of the discovered files.
    bytes_total: int = 0
    shutdown_requested: threading.Event = field(default_factory=threading.Event)
