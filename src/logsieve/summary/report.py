"""
Run summary construction and locale-aware formatting.

Both functions are pure: ``build_summary`` turns the final progress snapshot
into a ``RunSummary`` and ``format_summary`` renders it as text. Printing is
left to the caller.
"""

import logging
from typing import TYPE_CHECKING, Iterable, List

from babel import Locale, UnknownLocaleError
from babel.numbers import format_decimal

from ..models import DEFAULT_LOCALE, FileFailure, RunSummary

if TYPE_CHECKING:
    from ..orchestration.progress import ProgressSnapshot

logger = logging.getLogger(__name__)

_BYTE_UNITS = ("B", "KiB", "MiB", "GiB", "TiB")


def resolve_locale(locale_id: str) -> Locale:
    """
    Parse a locale identifier such as ``en``, ``de_DE`` or ``fr-CA``.

    Unknown or malformed identifiers fall back to ``en`` with a warning.
    """
    try:
        return Locale.parse(str(locale_id).replace("-", "_"))
    except (UnknownLocaleError, ValueError, TypeError):
        logger.warning(
            f"Invalid locale string '{locale_id}' provided. Defaulting to '{DEFAULT_LOCALE}'."
        )
        return Locale.parse(DEFAULT_LOCALE)


def build_summary(
    snapshot: "ProgressSnapshot",
    failures: Iterable[FileFailure] = (),
    files_skipped: int = 0,
    cancelled: bool = False,
) -> RunSummary:
    """Freeze the final progress counters and failure list into a RunSummary."""
    failure_list = tuple(sorted(failures, key=lambda failure: str(failure.path)))
    return RunSummary(
        files_total=snapshot.files_total,
        files_processed=snapshot.files_succeeded,
        files_failed=snapshot.files_failed,
        files_skipped=files_skipped,
        lines_total=snapshot.lines_total,
        lines_removed=snapshot.lines_removed,
        bytes_processed=snapshot.bytes_processed,
        elapsed_seconds=snapshot.elapsed,
        failures=failure_list,
        cancelled=cancelled,
    )


def format_count(value: int, locale: Locale) -> str:
    return format_decimal(value, locale=locale)


def format_bytes(value: float, locale: Locale) -> str:
    """Human readable binary size, e.g. ``1,5 MiB`` for ``de``."""
    size = float(value)
    for unit in _BYTE_UNITS:
        if abs(size) < 1024 or unit == _BYTE_UNITS[-1]:
            break
        size /= 1024
    if unit == "B":
        return f"{format_decimal(int(size), locale=locale)} {unit}"
    return f"{format_decimal(size, format='#,##0.0', locale=locale)} {unit}"


def format_duration(seconds: float, locale: Locale) -> str:
    return f"{format_decimal(seconds, format='#,##0.00', locale=locale)} s"


def format_summary(summary: RunSummary, locale_id: str = DEFAULT_LOCALE) -> str:
    """
    Render a RunSummary as a multi-line report.

    Counts use the locale's digit grouping and decimal separator.
    """
    locale = resolve_locale(locale_id)

    lines: List[str] = [
        f"Removed {format_count(summary.lines_removed, locale)} lines from a total of "
        f"{format_count(summary.lines_total, locale)} lines read.",
        f"Files: {format_count(summary.files_processed, locale)} processed, "
        f"{format_count(summary.files_failed, locale)} failed, "
        f"{format_count(summary.files_skipped, locale)} skipped "
        f"(of {format_count(summary.files_total, locale)}).",
        f"Processed {format_bytes(summary.bytes_processed, locale)} in "
        f"{format_duration(summary.elapsed_seconds, locale)}.",
    ]

    if summary.cancelled:
        lines.append("Run was cancelled before all files were processed.")

    if summary.failures:
        lines.append(f"Failures ({format_count(len(summary.failures), locale)}):")
        for failure in summary.failures:
            detail = f": {failure.message}" if failure.message else ""
            lines.append(f"  - {failure.path} [{failure.error_kind.value}]{detail}")

    return "\n".join(lines)
