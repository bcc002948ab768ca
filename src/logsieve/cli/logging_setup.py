"""
Logging destination setup for the CLI.

``--log-output file`` writes to a timestamped log file which is removed
again if the run produced no log records; ``--log-output stdout`` logs
through a RichHandler whose console is shared with the live progress view.
"""

import logging
import os
import time
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from ..models import LogOutput

LOG_FORMAT = "%(asctime)s [%(levelname)-5.5s] %(name)s:%(filename)s:%(lineno)d\t %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_FILE_SUFFIX = "-sieve.log"


def log_file_name(timestamp: Optional[float] = None) -> str:
    """``YYYY-MM-DD-HH-MM-SS-sieve.log`` for the given (or current) time."""
    stamp = time.strftime("%Y-%m-%d-%H-%M-%S", time.localtime(timestamp))
    return f"{stamp}{LOG_FILE_SUFFIX}"


def setup_logging(
    log_output: LogOutput,
    log_dir: Optional[Path] = None,
    level: Optional[int] = None,
    console: Optional[Console] = None,
) -> Optional[Path]:
    """
    Configure the root logger for a run.

    Existing root handlers are closed and replaced. Unless ``level`` is
    given, the log file only receives warnings and errors (so a clean run
    leaves it empty) while stdout also shows informational messages.

    Returns:
        Path of the log file, or None when logging to stdout
    """
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        handler.close()
        root_logger.removeHandler(handler)

    if log_output is LogOutput.STDOUT:
        root_logger.setLevel(logging.INFO if level is None else level)
        console_handler = RichHandler(
            console=console or Console(),
            show_path=False,
            rich_tracebacks=False,
        )
        console_handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        root_logger.addHandler(console_handler)
        return None

    root_logger.setLevel(logging.WARNING if level is None else level)
    directory = Path(log_dir) if log_dir is not None else Path.cwd()
    directory.mkdir(parents=True, exist_ok=True)
    log_path = directory / log_file_name()

    file_handler = logging.FileHandler(log_path, mode="a", encoding="utf-8")
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    root_logger.addHandler(file_handler)
    return log_path


def cleanup_empty_log_file(log_path: Optional[Path]) -> bool:
    """
    Close file handlers and delete the log file if nothing was written.

    Returns:
        True if the file was removed
    """
    if log_path is None:
        return False

    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        if isinstance(handler, logging.FileHandler) and handler.baseFilename == os.path.abspath(log_path):
            handler.close()
            root_logger.removeHandler(handler)

    if log_path.exists() and log_path.stat().st_size == 0:
        log_path.unlink()
        return True
    return False
