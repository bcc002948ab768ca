"""
Run summary and report formatting.
"""

from .report import (
    build_summary,
    format_bytes,
    format_count,
    format_duration,
    format_summary,
    resolve_locale,
)

__all__ = [
    "build_summary",
    "format_bytes",
    "format_count",
    "format_duration",
    "format_summary",
    "resolve_locale",
]
