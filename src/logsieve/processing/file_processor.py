"""
Per-file decompress, filter and recompress.

``process_file`` never raises for problems with the file itself: every
failure is logged and returned as a ``FileFailure`` so the scheduler can
carry on with the remaining files.
"""

import gzip
import logging
import zlib
from pathlib import Path
from typing import Tuple, Union

from ..filtering import LineFilter
from ..models import DEFAULT_COMPRESSION_LEVEL, FileFailure, FileResult, FileSuccess, FileTask
from ..validation import FileIOError, FileProcessingError, IOCorruptionError
from .atomic_rewrite import AtomicGzipRewrite

logger = logging.getLogger(__name__)

# Raised by gzip/zlib for malformed or truncated input.
CORRUPTION_ERRORS = (gzip.BadGzipFile, EOFError, zlib.error)

GZIP_MAGIC = b"\x1f\x8b"


def _check_gzip_magic(path: Path) -> None:
    # gzip.open treats a zero-byte file as an empty stream; gzip itself does not
    with open(path, "rb") as f:
        magic = f.read(len(GZIP_MAGIC))
    if magic != GZIP_MAGIC:
        detail = "empty file" if not magic else f"bad magic number {magic!r}"
        raise IOCorruptionError(f"Not a gzip file {path}: {detail}", path=path)


def _filter_stream(
    path: Path, line_filter: LineFilter, compression_level: int
) -> Tuple[int, int, int]:
    lines_total = 0
    lines_removed = 0

    try:
        _check_gzip_magic(path)
        with gzip.open(path, "rb") as reader, AtomicGzipRewrite(path, compression_level) as rewrite:
            for line in reader:
                lines_total += 1
                if line_filter.keep(line):
                    rewrite.write(line)
                else:
                    lines_removed += 1
            bytes_out = rewrite.commit()
    except FileProcessingError:
        raise
    except CORRUPTION_ERRORS as e:
        raise IOCorruptionError(f"Corrupt gzip data in {path}: {e}", path=path) from e
    except OSError as e:
        raise FileIOError(f"I/O error on {path}: {e}", path=path) from e

    return lines_total, lines_removed, bytes_out


def process_file(
    task: Union[FileTask, Path, str],
    line_filter: LineFilter,
    compression_level: int = DEFAULT_COMPRESSION_LEVEL,
) -> FileResult:
    """
    Remove every line matching ``line_filter`` from one gzip file, in place.

    The original is only replaced once the complete filtered output has been
    written and closed; on any failure it is left untouched.

    Args:
        task: The file to rewrite
        line_filter: Shared, read-only line filter
        compression_level: gzip level for the rewritten file

    Returns:
        FileSuccess with line and byte counts, or FileFailure with the error kind
    """
    path = task.path if isinstance(task, FileTask) else Path(task)

    try:
        bytes_in = path.stat().st_size
        lines_total, lines_removed, bytes_out = _filter_stream(
            path, line_filter, compression_level
        )
    except FileProcessingError as e:
        logger.warning(f"Error processing {path}: {e}")
        return FileFailure(path=path, error_kind=e.error_kind, message=str(e))
    except OSError as e:
        logger.warning(f"Error processing {path}: {e}")
        return FileFailure(path=path, error_kind=FileIOError.error_kind, message=str(e))

    result = FileSuccess(
        path=path,
        lines_total=lines_total,
        lines_removed=lines_removed,
        bytes_in=bytes_in,
        bytes_out=bytes_out,
    )
    logger.debug(
        f"Processed {path}: removed {lines_removed} lines of {lines_total} total lines, "
        f"kept {result.lines_kept} ({bytes_in} -> {bytes_out} bytes)."
    )
    return result
