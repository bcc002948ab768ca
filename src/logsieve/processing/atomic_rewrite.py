"""
Scoped temporary-file handling for in-place gzip rewrites.
"""

import gzip
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import BinaryIO, Optional

from ..validation import ErrorSeverity, FileIOError, RenameFailureError, handle_file_error

logger = logging.getLogger(__name__)


class AtomicGzipRewrite:
    """
    Compressing writer whose output replaces ``target`` only on ``commit``.

    The temporary file lives in the same directory as ``target`` so the final
    ``os.replace`` stays on one filesystem. Leaving the context without a
    successful ``commit`` (exception, early return, interrupt) deletes the
    temporary file and leaves ``target`` untouched.

    Example:
        with AtomicGzipRewrite(path) as rewrite:
            rewrite.write(b"kept line\\n")
            rewrite.commit()
    """

    def __init__(self, target: Path, compression_level: int = 6):
        self.target = Path(target)
        self.compression_level = compression_level
        self.temp_path: Optional[Path] = None
        self.bytes_written = 0
        self.committed = False
        self._raw: Optional[BinaryIO] = None
        self._gzip: Optional[gzip.GzipFile] = None

    def __enter__(self) -> "AtomicGzipRewrite":
        try:
            fd, temp_name = tempfile.mkstemp(
                dir=self.target.parent,
                prefix=f".{self.target.name}.",
                suffix=".tmp",
            )
        except OSError as e:
            raise FileIOError(
                f"Cannot create temporary file next to {self.target}: {e}",
                path=self.target,
            ) from e

        self.temp_path = Path(temp_name)
        self._raw = os.fdopen(fd, "wb")
        # filename only feeds the gzip header; it must not leak the temp name
        self._gzip = gzip.GzipFile(
            filename=self.target.name,
            mode="wb",
            fileobj=self._raw,
            compresslevel=self.compression_level,
        )
        return self

    def write(self, data: bytes) -> None:
        try:
            self._gzip.write(data)
        except OSError as e:
            raise FileIOError(f"Failed writing {self.temp_path}: {e}", path=self.target) from e

    def _close_streams(self) -> None:
        if self._gzip is not None:
            gzip_file, self._gzip = self._gzip, None
            gzip_file.close()
        if self._raw is not None:
            raw, self._raw = self._raw, None
            try:
                raw.flush()
                os.fsync(raw.fileno())
            finally:
                raw.close()

    def commit(self) -> int:
        """
        Finish the compressed stream and atomically replace the target.

        Returns:
            Size in bytes of the new compressed file

        Raises:
            FileIOError: If flushing the temporary file fails
            RenameFailureError: If the replace itself fails
        """
        try:
            self._close_streams()
            shutil.copymode(self.target, self.temp_path)
            self.bytes_written = self.temp_path.stat().st_size
        except OSError as e:
            raise FileIOError(f"Failed finalizing {self.temp_path}: {e}", path=self.target) from e

        try:
            os.replace(self.temp_path, self.target)
        except OSError as e:
            raise RenameFailureError(
                f"Failed to replace {self.target}: {e}", path=self.target
            ) from e

        self.committed = True
        return self.bytes_written

    def abort(self) -> None:
        """Discard the temporary file, leaving the target as it was."""
        try:
            self._close_streams()
        except OSError as e:
            logger.debug(f"Ignoring close error while discarding {self.temp_path}: {e}")
        if self.temp_path is not None:
            try:
                self.temp_path.unlink(missing_ok=True)
            except OSError as e:
                handle_file_error(
                    error=e,
                    context=f"removing temporary file {self.temp_path}",
                    severity=ErrorSeverity.WARNING,
                    reraise=False,
                    logger=logger,
                )

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        if not self.committed:
            self.abort()
        return False
