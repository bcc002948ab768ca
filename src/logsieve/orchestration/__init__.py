"""
Run orchestration: shared runtime state, progress aggregation, signal
handling and the SieveRunner that ties them together.
"""

from .progress import ProgressAggregator, ProgressSnapshot
from .shared_state import RuntimeState
from .sieve_runner import SieveRunner
from .signal_handler import SignalHandler

__all__ = [
    "ProgressAggregator",
    "ProgressSnapshot",
    "RuntimeState",
    "SieveRunner",
    "SignalHandler",
]
