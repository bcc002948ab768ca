"""
Unit tests for run summary construction and formatting.
"""

from pathlib import Path

import pytest

from logsieve.models import ErrorKind, FileFailure, RunSummary
from logsieve.orchestration import ProgressSnapshot
from logsieve.summary import (
    build_summary,
    format_bytes,
    format_count,
    format_duration,
    format_summary,
    resolve_locale,
)


def _snapshot(**overrides):
    values = dict(
        files_total=4,
        files_completed=4,
        files_failed=1,
        lines_total=1234567,
        lines_removed=4321,
        bytes_processed=3 * 1024 * 1024,
        bytes_total=4 * 1024 * 1024,
        elapsed=12.5,
    )
    values.update(overrides)
    return ProgressSnapshot(**values)


def _summary(**overrides):
    values = dict(
        files_total=3,
        files_processed=3,
        files_failed=0,
        files_skipped=0,
        lines_total=1234567,
        lines_removed=4321,
        bytes_processed=1536,
        elapsed_seconds=2.5,
    )
    values.update(overrides)
    return RunSummary(**values)


@pytest.mark.unit
class TestResolveLocale:
    """Test cases for resolve_locale."""

    def test_known_locales(self):
        assert str(resolve_locale("de_DE")) == "de_DE"
        assert str(resolve_locale("fr-CA")) == "fr_CA"

    def test_unknown_locale_falls_back_to_en(self, caplog):
        locale = resolve_locale("zz_QQ")

        assert str(locale) == "en"
        assert "Invalid locale string 'zz_QQ'" in caplog.text

    def test_malformed_locale_falls_back_to_en(self):
        assert str(resolve_locale("not a locale!")) == "en"


@pytest.mark.unit
class TestBuildSummary:
    """Test cases for build_summary."""

    def test_counts_from_snapshot(self):
        failures = [
            FileFailure(path=Path("/b.gz"), error_kind=ErrorKind.IO_ERROR),
            FileFailure(path=Path("/a.gz"), error_kind=ErrorKind.IO_CORRUPTION),
        ]

        summary = build_summary(_snapshot(), failures=failures)

        assert summary.files_total == 4
        assert summary.files_processed == 3
        assert summary.files_failed == 1
        assert summary.files_skipped == 0
        assert summary.lines_total == 1234567
        assert summary.lines_removed == 4321
        assert summary.elapsed_seconds == 12.5
        assert summary.has_failures is True
        assert [f.path for f in summary.failures] == [Path("/a.gz"), Path("/b.gz")]

    def test_file_counts_add_up(self):
        summary = build_summary(
            _snapshot(files_total=10, files_completed=6, files_failed=2),
            files_skipped=4,
            cancelled=True,
        )

        assert (
            summary.files_processed + summary.files_failed + summary.files_skipped
            == summary.files_total
        )
        assert summary.cancelled is True


@pytest.mark.unit
class TestFormatting:
    """Test cases for locale-aware number formatting."""

    def test_format_count_grouping(self):
        assert format_count(1234567, resolve_locale("en")) == "1,234,567"
        assert format_count(1234567, resolve_locale("de")) == "1.234.567"

    def test_format_bytes_units(self):
        en = resolve_locale("en")

        assert format_bytes(512, en) == "512 B"
        assert format_bytes(1536, en) == "1.5 KiB"
        assert format_bytes(3 * 1024 * 1024, en) == "3.0 MiB"
        assert format_bytes(1536, resolve_locale("de")) == "1,5 KiB"

    def test_format_duration(self):
        assert format_duration(2.5, resolve_locale("en")) == "2.50 s"
        assert format_duration(2.5, resolve_locale("de")) == "2,50 s"


@pytest.mark.unit
class TestFormatSummary:
    """Test cases for format_summary."""

    def test_headline_uses_locale(self):
        text = format_summary(_summary(), "en")
        assert text.splitlines()[0] == "Removed 4,321 lines from a total of 1,234,567 lines read."

        german = format_summary(_summary(), "de_DE")
        assert german.splitlines()[0] == "Removed 4.321 lines from a total of 1.234.567 lines read."

    def test_file_and_byte_lines(self):
        lines = format_summary(_summary(), "en").splitlines()

        assert lines[1] == "Files: 3 processed, 0 failed, 0 skipped (of 3)."
        assert lines[2] == "Processed 1.5 KiB in 2.50 s."

    def test_invalid_locale_still_formats(self):
        text = format_summary(_summary(), "xx_INVALID")
        assert text.startswith("Removed 4,321 lines")

    def test_failures_are_listed(self):
        summary = _summary(
            files_processed=2,
            files_failed=1,
            failures=(
                FileFailure(
                    path=Path("/logs/bad.gz"),
                    error_kind=ErrorKind.IO_CORRUPTION,
                    message="not a gzip file",
                ),
            ),
        )

        text = format_summary(summary, "en")

        assert "Failures (1):" in text
        assert "  - /logs/bad.gz [io_corruption]: not a gzip file" in text

    def test_cancelled_run_is_noted(self):
        text = format_summary(_summary(files_processed=1, files_skipped=2, cancelled=True))

        assert "cancelled" in text
        assert "2 skipped" in text

    def test_clean_run_has_no_failure_section(self):
        text = format_summary(_summary())

        assert "Failures" not in text
        assert "cancelled" not in text
