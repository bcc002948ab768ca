"""
logsieve: in-place line filtering for gzip-compressed log archives.

The package is organized into specialized modules:
- discovery: Finding compressed log files below a root directory
- filtering: Literal substring line filter
- processing: Streaming decompress, filter and atomic recompress of one file
- executor: Worker pool and task scheduling
- orchestration: Progress aggregation, signal handling and the run coordinator
- summary: Run summary and locale-aware formatting
- config: TOML settings loading and validation
- validation: Error taxonomy and input validators
- cli: Command-line interface, logging setup and live display

Usage:
    From command line:
        logsieve /var/log/archive "GET /health" "ELB-HealthChecker" --threads 8

    Programmatically:
        from logsieve import SieveRunner, resolve_run_config
        config = resolve_run_config({"root_dir": "/var/log/archive", "patterns": ["noise"]})
        summary = SieveRunner(config).run()
"""

from .config import resolve_run_config
from .discovery import FileDiscoverer, discover_files
from .filtering import LineFilter, should_keep
from .models import (
    ErrorKind,
    FileFailure,
    FileResult,
    FileSuccess,
    FileTask,
    LogOutput,
    RunConfig,
    RunSummary,
)
from .orchestration import ProgressAggregator, ProgressSnapshot, SieveRunner
from .processing import process_file
from .summary import build_summary, format_summary
from .validation import (
    DiscoveryError,
    FileIOError,
    IOCorruptionError,
    RenameFailureError,
    SieveError,
    ValidationError,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "resolve_run_config",
    "FileDiscoverer",
    "discover_files",
    "LineFilter",
    "should_keep",
    "process_file",
    "ProgressAggregator",
    "ProgressSnapshot",
    "SieveRunner",
    "build_summary",
    "format_summary",
    "ErrorKind",
    "FileFailure",
    "FileResult",
    "FileSuccess",
    "FileTask",
    "LogOutput",
    "RunConfig",
    "RunSummary",
    "SieveError",
    "ValidationError",
    "DiscoveryError",
    "IOCorruptionError",
    "FileIOError",
    "RenameFailureError",
]
