"""
Signal handling for the orchestration module.

SIGINT and SIGTERM are turned into a shutdown request on every registered
runner instead of a KeyboardInterrupt, so files already being rewritten can
finish or discard their temporary output cleanly.
"""

import logging
import signal
import threading
from typing import TYPE_CHECKING, Any, Dict, List

from .shared_state import RuntimeState

if TYPE_CHECKING:
    from .sieve_runner import SieveRunner

logger = logging.getLogger(__name__)

HANDLED_SIGNALS = (signal.SIGINT, signal.SIGTERM)

# Signal handlers cannot be bound to instances, so active runners are kept
# in a module-level registry.
_active_runners: Dict[int, "SieveRunner"] = {}
# Reentrant: the handler runs on the main thread, which may already hold it
# inside register_runner or unregister_runner.
_active_runners_lock = threading.RLock()


def _registered_runners() -> List["SieveRunner"]:
    with _active_runners_lock:
        return list(_active_runners.values())


def request_shutdown_all() -> int:
    """
    Ask every registered runner to stop starting new files.

    Returns:
        Number of runners notified
    """
    runners = _registered_runners()
    for runner in runners:
        runner.request_shutdown()
    return len(runners)


class SignalHandler:
    """
    Installs the process-wide handler for the lifetime of one run.
    """

    def __init__(self, state: RuntimeState):
        self.state = state
        self._previous_handlers: Dict[int, Any] = {}
        self._signal_handlers_set = False

    def setup_signal_handlers(self) -> None:
        """Install the handlers; only possible from the main thread."""
        if threading.current_thread() is not threading.main_thread():
            logger.debug("Signal handlers left alone outside the main thread")
            return
        try:
            for signum in HANDLED_SIGNALS:
                self._previous_handlers[signum] = signal.signal(signum, self._global_signal_handler)
        except (ValueError, OSError) as e:
            logger.warning(f"Could not install signal handlers: {e}")
            self._restore_previous()
            return
        self._signal_handlers_set = True
        logger.debug(f"Handling {', '.join(signal.Signals(s).name for s in HANDLED_SIGNALS)}")

    def cleanup_signal_handlers(self) -> None:
        """Put back whatever handlers were active before setup."""
        if self._signal_handlers_set:
            self._restore_previous()
            self._signal_handlers_set = False

    def _restore_previous(self) -> None:
        while self._previous_handlers:
            signum, previous = self._previous_handlers.popitem()
            if previous is None:
                continue
            try:
                signal.signal(signum, previous)
            except (ValueError, OSError) as e:
                logger.warning(f"Could not restore handler for {signal.Signals(signum).name}: {e}")

    def register_runner(self, runner_id: int, runner: "SieveRunner") -> None:
        with _active_runners_lock:
            _active_runners[runner_id] = runner
        logger.debug(f"Runner {runner_id} will receive shutdown requests")

    def unregister_runner(self, runner_id: int) -> None:
        with _active_runners_lock:
            removed = _active_runners.pop(runner_id, None)
        if removed is not None:
            logger.debug(f"Runner {runner_id} no longer receives shutdown requests")

    @staticmethod
    def _global_signal_handler(signum: int, frame: Any) -> None:
        notified = request_shutdown_all()
        logger.warning(
            f"Received {signal.Signals(signum).name}: letting files in progress finish "
            f"and skipping the rest ({notified} active run(s))"
        )
