"""
Unit tests for per-file filtering and the atomic gzip rewrite.
"""

import gzip
import logging
import os
import stat
from unittest.mock import patch

import pytest

from logsieve.filtering import LineFilter
from logsieve.models import ErrorKind, FileFailure, FileSuccess, FileTask
from logsieve.processing import AtomicGzipRewrite, process_file
from logsieve.validation import FileIOError, RenameFailureError


def _temp_files(directory):
    return [p for p in directory.iterdir() if p.name.endswith(".tmp")]


@pytest.mark.unit
class TestProcessFile:
    """Test cases for process_file."""

    def test_removes_matching_lines(self, temp_dir, gz_utils):
        path = gz_utils.write_lines(
            temp_dir / "app.log.gz",
            ["GET /", "GET /healthcheck", "POST /x", "GET /healthcheck?v=2"],
        )

        result = process_file(path, LineFilter(["healthcheck"]))

        assert isinstance(result, FileSuccess)
        assert result.success is True
        assert result.lines_total == 4
        assert result.lines_removed == 2
        assert result.lines_kept == 2
        assert gz_utils.read_lines(path) == ["GET /", "POST /x"]

    def test_success_is_logged_with_kept_lines(self, temp_dir, gz_utils, caplog):
        caplog.set_level(logging.DEBUG, logger="logsieve.processing.file_processor")
        path = gz_utils.write_lines(temp_dir / "app.log.gz", ["a", "b", "skip me"])

        process_file(path, LineFilter(["skip"]))

        assert "removed 1 lines of 3 total lines, kept 2" in caplog.text

    def test_accepts_file_task(self, temp_dir, gz_utils):
        path = gz_utils.write_lines(temp_dir / "t.gz", ["a", "b"])
        task = FileTask(path=path, size_bytes=path.stat().st_size)

        result = process_file(task, LineFilter(["a"]))

        assert result.path == path
        assert result.bytes_in == task.size_bytes
        assert result.bytes_out == path.stat().st_size

    def test_no_match_preserves_content(self, temp_dir, gz_utils):
        original = b"one\ntwo\r\nthree"
        path = gz_utils.write_bytes(temp_dir / "keep.gz", original)

        result = process_file(path, LineFilter(["absent"]))

        assert result.lines_total == 3
        assert result.lines_removed == 0
        assert gz_utils.read_bytes(path) == original

    def test_all_lines_removed_yields_valid_empty_gzip(self, temp_dir, gz_utils):
        path = gz_utils.write_lines(temp_dir / "all.gz", ["noise 1", "noise 2"])

        result = process_file(path, LineFilter(["noise"]))

        assert result.lines_removed == 2
        assert gz_utils.read_bytes(path) == b""

    def test_empty_archive(self, temp_dir, gz_utils):
        path = gz_utils.write_bytes(temp_dir / "empty.gz", b"")

        result = process_file(path, LineFilter(["x"]))

        assert isinstance(result, FileSuccess)
        assert result.lines_total == 0
        assert result.lines_removed == 0

    def test_line_endings_and_missing_final_newline(self, temp_dir, gz_utils):
        path = gz_utils.write_bytes(
            temp_dir / "mixed.gz", b"keep\r\ndrop me\r\nkeep too\nlast drop"
        )

        result = process_file(path, LineFilter(["drop"]))

        assert result.lines_total == 4
        assert result.lines_removed == 2
        assert gz_utils.read_bytes(path) == b"keep\r\nkeep too\n"

    def test_idempotent(self, temp_dir, gz_utils):
        path = gz_utils.write_lines(temp_dir / "idem.gz", ["a", "noise", "b"])
        line_filter = LineFilter(["noise"])

        process_file(path, line_filter)
        first = gz_utils.read_bytes(path)
        second_result = process_file(path, line_filter)

        assert second_result.lines_removed == 0
        assert gz_utils.read_bytes(path) == first

    def test_corrupt_file_reports_corruption(self, temp_dir):
        path = temp_dir / "bad.gz"
        garbage = os.urandom(256)
        path.write_bytes(b"not gzip at all" + garbage)

        result = process_file(path, LineFilter(["x"]))

        assert isinstance(result, FileFailure)
        assert result.success is False
        assert result.error_kind == ErrorKind.IO_CORRUPTION
        assert path.read_bytes() == b"not gzip at all" + garbage
        assert _temp_files(temp_dir) == []

    def test_zero_byte_file_reports_corruption(self, temp_dir):
        path = temp_dir / "zero.gz"
        path.write_bytes(b"")

        result = process_file(path, LineFilter(["x"]))

        assert isinstance(result, FileFailure)
        assert result.error_kind == ErrorKind.IO_CORRUPTION
        assert "empty file" in result.message
        assert path.read_bytes() == b""
        assert _temp_files(temp_dir) == []

    def test_truncated_file_reports_corruption(self, temp_dir, gz_utils):
        path = gz_utils.write_lines(temp_dir / "trunc.gz", [f"line {i}" for i in range(500)])
        data = path.read_bytes()
        path.write_bytes(data[: len(data) // 2])

        result = process_file(path, LineFilter(["line 1"]))

        assert result.error_kind == ErrorKind.IO_CORRUPTION
        assert path.read_bytes() == data[: len(data) // 2]
        assert _temp_files(temp_dir) == []

    def test_missing_file_reports_io_error(self, temp_dir):
        result = process_file(temp_dir / "gone.gz", LineFilter(["x"]))

        assert isinstance(result, FileFailure)
        assert result.error_kind == ErrorKind.IO_ERROR

    def test_temp_creation_failure_leaves_original(self, temp_dir, gz_utils):
        path = gz_utils.write_lines(temp_dir / "ro.gz", ["a", "noise"])
        before = path.read_bytes()

        with patch("tempfile.mkstemp", side_effect=PermissionError(13, "Permission denied")):
            result = process_file(path, LineFilter(["noise"]))

        assert result.error_kind == ErrorKind.IO_ERROR
        assert path.read_bytes() == before

    def test_rename_failure_leaves_original(self, temp_dir, gz_utils):
        path = gz_utils.write_lines(temp_dir / "ren.gz", ["a", "noise"])
        before = path.read_bytes()

        with patch("os.replace", side_effect=OSError(18, "Invalid cross-device link")):
            result = process_file(path, LineFilter(["noise"]))

        assert result.error_kind == ErrorKind.RENAME_FAILURE
        assert path.read_bytes() == before
        assert _temp_files(temp_dir) == []

    def test_compression_level_is_applied(self, temp_dir, gz_utils):
        lines = [f"request {i} served from cache" for i in range(2000)]
        fast = gz_utils.write_lines(temp_dir / "fast.gz", lines)
        best = gz_utils.write_lines(temp_dir / "best.gz", lines)

        fast_result = process_file(fast, LineFilter(["absent"]), compression_level=1)
        best_result = process_file(best, LineFilter(["absent"]), compression_level=9)

        assert best_result.bytes_out <= fast_result.bytes_out
        assert gz_utils.read_lines(fast) == gz_utils.read_lines(best)


@pytest.mark.unit
class TestAtomicGzipRewrite:
    """Test cases for AtomicGzipRewrite."""

    def test_commit_replaces_target(self, temp_dir, gz_utils):
        target = gz_utils.write_lines(temp_dir / "t.gz", ["old"])

        with AtomicGzipRewrite(target) as rewrite:
            rewrite.write(b"new\n")
            size = rewrite.commit()

        assert rewrite.committed is True
        assert size == target.stat().st_size
        assert gz_utils.read_bytes(target) == b"new\n"
        assert _temp_files(temp_dir) == []

    def test_exit_without_commit_discards(self, temp_dir, gz_utils):
        target = gz_utils.write_lines(temp_dir / "t.gz", ["old"])

        with AtomicGzipRewrite(target) as rewrite:
            rewrite.write(b"partial\n")
            temp_path = rewrite.temp_path
            assert temp_path.exists()

        assert not temp_path.exists()
        assert gz_utils.read_bytes(target) == b"old\n"

    def test_exception_discards_and_propagates(self, temp_dir, gz_utils):
        target = gz_utils.write_lines(temp_dir / "t.gz", ["old"])

        with pytest.raises(KeyboardInterrupt):
            with AtomicGzipRewrite(target) as rewrite:
                rewrite.write(b"partial\n")
                raise KeyboardInterrupt

        assert _temp_files(temp_dir) == []
        assert gz_utils.read_bytes(target) == b"old\n"

    def test_temp_file_is_sibling_of_target(self, temp_dir, gz_utils):
        target = gz_utils.write_lines(temp_dir / "nested" / "t.gz", ["old"])

        with AtomicGzipRewrite(target) as rewrite:
            assert rewrite.temp_path.parent == target.parent
            assert rewrite.temp_path.name.startswith(".t.gz.")

    def test_permissions_are_preserved(self, temp_dir, gz_utils):
        target = gz_utils.write_lines(temp_dir / "t.gz", ["old"])
        os.chmod(target, 0o640)

        with AtomicGzipRewrite(target) as rewrite:
            rewrite.write(b"new\n")
            rewrite.commit()

        assert stat.S_IMODE(target.stat().st_mode) == 0o640

    def test_gzip_header_carries_target_name(self, temp_dir, gz_utils):
        target = gz_utils.write_lines(temp_dir / "named.log.gz", ["old"])

        with AtomicGzipRewrite(target) as rewrite:
            rewrite.write(b"new\n")
            rewrite.commit()

        raw = target.read_bytes()
        assert b"named.log" in raw[:64]
        assert b".tmp" not in raw[:64]
        with gzip.open(target) as f:
            assert f.read() == b"new\n"

    def test_mkstemp_failure_raises_file_io_error(self, temp_dir):
        with patch("tempfile.mkstemp", side_effect=OSError(28, "No space left on device")):
            with pytest.raises(FileIOError):
                with AtomicGzipRewrite(temp_dir / "t.gz"):
                    pass

    def test_replace_failure_raises_rename_failure(self, temp_dir, gz_utils):
        target = gz_utils.write_lines(temp_dir / "t.gz", ["old"])

        with patch("os.replace", side_effect=OSError(1, "Operation not permitted")):
            with pytest.raises(RenameFailureError) as exc_info:
                with AtomicGzipRewrite(target) as rewrite:
                    rewrite.write(b"new\n")
                    rewrite.commit()

        assert exc_info.value.error_kind == ErrorKind.RENAME_FAILURE
        assert _temp_files(temp_dir) == []
        assert gz_utils.read_bytes(target) == b"old\n"
