"""
Command-line interface for logsieve.

This module parses arguments, resolves the RunConfig, configures logging,
runs the SieveRunner with a live progress view and prints the summary.
"""

import argparse
import logging
import sys
import tomllib
from pathlib import Path
from typing import Any, Dict, List, Optional

from rich.console import Console

from ..config import resolve_run_config
from ..models import LogOutput, RunConfig
from ..orchestration import ProgressAggregator, SieveRunner
from ..summary import format_count, format_summary, resolve_locale
from ..validation import DiscoveryError, ValidationError, handle_cli_error
from .display import LiveProgressDisplay
from .logging_setup import LOG_DATE_FORMAT, LOG_FORMAT, cleanup_empty_log_file, setup_logging

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_CONFIG_ERROR = 1
EXIT_CANCELLED = 130

error_console = Console(stderr=True)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="logsieve",
        description=(
            "Remove every line containing any of PATTERNS from the gzip-compressed "
            "log files under ROOT_DIR, rewriting each file in place."
        ),
    )
    parser.add_argument("root_dir", metavar="ROOT_DIR", help="Root directory")
    parser.add_argument(
        "patterns",
        metavar="PATTERNS",
        nargs="*",
        help="Literal, case-sensitive substrings; matching lines are removed",
    )
    parser.add_argument(
        "--threads",
        type=int,
        default=None,
        help="Number of threads (defaults to number of logical CPUs)",
    )
    parser.add_argument(
        "--log-output",
        choices=[output.value for output in LogOutput],
        default=None,
        help="Log output destination (default: file)",
    )
    parser.add_argument(
        "--log-dir",
        type=Path,
        default=None,
        help="Directory for the log file (default: current directory)",
    )
    parser.add_argument(
        "--locale",
        default=None,
        help="Locale for number formatting (default: en)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="TOML settings file with a [sieve] table",
    )
    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Do not show the live progress display",
    )
    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)


def cli_settings(args: argparse.Namespace) -> Dict[str, Any]:
    """Map parsed arguments onto setting names; None means not given."""
    return {
        "root_dir": args.root_dir,
        "patterns": list(args.patterns),
        "threads": args.threads,
        "log_output": args.log_output,
        "log_dir": args.log_dir,
        "locale": args.locale,
        "show_progress": False if args.no_progress else None,
    }


def run(config: RunConfig, console: Console) -> int:
    """
    Execute a resolved configuration and print its summary.

    Returns:
        Process exit code
    """
    def display_factory(progress: ProgressAggregator) -> LiveProgressDisplay:
        return LiveProgressDisplay(
            progress,
            console=console,
            refresh_interval=config.refresh_interval,
            locale=config.locale,
        )

    runner = SieveRunner(
        config,
        display_factory=display_factory if config.show_progress else None,
    )
    try:
        summary = runner.run()
    except DiscoveryError as e:
        # logging may be going to a file
        error_console.print(f"Error: {e}", style="bold red", markup=False, highlight=False)
        handle_cli_error(error=e, context="file discovery", exit_code=EXIT_CONFIG_ERROR, logger=logger)

    console.print(format_summary(summary, config.locale), markup=False, highlight=False)

    if summary.has_failures:
        failed = format_count(summary.files_failed, resolve_locale(config.locale))
        console.print(f"[yellow]Warning: {failed} file(s) could not be processed.[/yellow]")

    if summary.cancelled:
        return EXIT_CANCELLED
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main command-line entry point.

    Configuration problems (bad root directory, invalid options, unreadable
    settings file) exit with status 1 before any file is touched. A run that
    completes returns 0 even if some files failed; a run cancelled by a signal
    returns 130.
    """
    args = parse_args(argv)

    # until the configured destination is known, report problems on stderr
    logging.basicConfig(
        level=logging.WARNING,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        stream=sys.stderr,
    )

    try:
        config = resolve_run_config(cli_settings(args), config_path=args.config)
    except (ValidationError, FileNotFoundError, tomllib.TOMLDecodeError) as e:
        handle_cli_error(
            error=e,
            context="configuration",
            exit_code=EXIT_CONFIG_ERROR,
            logger=logger,
        )

    console = Console()
    log_path = setup_logging(config.log_output, config.log_dir, console=console)
    try:
        return run(config, console)
    finally:
        cleanup_empty_log_file(log_path)


def main_cli() -> None:
    sys.exit(main())


if __name__ == "__main__":
    main_cli()
