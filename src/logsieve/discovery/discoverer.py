"""
Discovery of compressed log files below a root directory.

The walk is lazy: ``iter_files`` yields ``FileTask`` objects as directories
are listed. Unreadable directories and symlink cycles are skipped with a
warning instead of aborting the walk; only a missing or non-directory root
is fatal.
"""

import logging
import os
import stat
from pathlib import Path
from typing import Iterable, Iterator, List, Set, Tuple, Union

from ..models import DEFAULT_EXTENSIONS, FileTask
from ..validation import DiscoveryError

logger = logging.getLogger(__name__)


class FileDiscoverer:
    """
    Walks a directory tree and yields files with a recognised extension.

    Directory symlinks are followed, but each directory (by device and inode)
    is entered at most once, so cycles and aliased directories never yield
    the same file twice. Symlinked files are skipped because replacing them
    would turn the link into a regular file.
    """

    def __init__(
        self,
        root: Union[str, Path],
        extensions: Iterable[str] = DEFAULT_EXTENSIONS,
    ):
        self.root = self._validate_root(root)
        self.extensions: Tuple[str, ...] = tuple(extensions)
        self.warnings: List[str] = []

    @staticmethod
    def _validate_root(root: Union[str, Path]) -> Path:
        path = Path(root).expanduser()
        if not path.exists():
            raise DiscoveryError(f"Root directory does not exist: {path}", root=path)
        if not path.is_dir():
            raise DiscoveryError(f"Root path is not a directory: {path}", root=path)
        return path.resolve()

    def _warn(self, message: str) -> None:
        self.warnings.append(message)
        logger.warning(message)

    def _on_walk_error(self, error: OSError) -> None:
        self._warn(f"Skipping unreadable directory {error.filename}: {error.strerror or error}")

    def iter_files(self) -> Iterator[FileTask]:
        """
        Lazily yield a ``FileTask`` for every matching file.

        Entries are visited in sorted order so the sequence is reproducible
        for an unchanged tree.
        """
        root_stat = os.stat(self.root)
        visited: Set[Tuple[int, int]] = {(root_stat.st_dev, root_stat.st_ino)}

        for dirpath, dirnames, filenames in os.walk(
            self.root, onerror=self._on_walk_error, followlinks=True
        ):
            kept_dirs = []
            for name in sorted(dirnames):
                full_dir = os.path.join(dirpath, name)
                try:
                    dir_stat = os.stat(full_dir)
                except OSError as e:
                    self._warn(f"Skipping unreadable directory {full_dir}: {e}")
                    continue
                key = (dir_stat.st_dev, dir_stat.st_ino)
                if key in visited:
                    self._warn(f"Skipping already visited directory (symlink cycle?): {full_dir}")
                    continue
                visited.add(key)
                kept_dirs.append(name)
            # os.walk only descends into what is left in dirnames
            dirnames[:] = kept_dirs

            for name in sorted(filenames):
                if not name.endswith(self.extensions):
                    continue
                file_path = Path(dirpath) / name
                try:
                    file_stat = file_path.lstat()
                except OSError as e:
                    self._warn(f"Skipping unreadable file {file_path}: {e}")
                    continue
                if stat.S_ISLNK(file_stat.st_mode):
                    logger.debug(f"Skipping symlinked file {file_path}")
                    continue
                if not stat.S_ISREG(file_stat.st_mode):
                    continue
                yield FileTask(path=file_path, size_bytes=file_stat.st_size)

    def __iter__(self) -> Iterator[FileTask]:
        return self.iter_files()

    def collect(self) -> Tuple[List[FileTask], int]:
        """
        Materialise the walk.

        Returns:
            The discovered tasks and their combined compressed size in bytes
        """
        tasks = list(self.iter_files())
        total_size = sum(task.size_bytes for task in tasks)

        if not tasks:
            logger.warning(
                f"No files matching {', '.join(self.extensions)} found under {self.root}"
            )
        else:
            logger.info(f"Discovered {len(tasks)} files ({total_size} bytes) under {self.root}")
        return tasks, total_size


def discover_files(
    root: Union[str, Path],
    extensions: Iterable[str] = DEFAULT_EXTENSIONS,
) -> Iterator[FileTask]:
    """
    Yield matching files below ``root``.

    Raises:
        DiscoveryError: If root is missing or not a directory. Raised
            immediately, not on first iteration.
    """
    return FileDiscoverer(root, extensions).iter_files()
