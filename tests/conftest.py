"""
Pytest configuration and shared fixtures for the logsieve test suite.

This module provides common fixtures, gzip helpers and configuration
for all test modules in the project.
"""

import gzip
import logging
import shutil
import sys
import tempfile
from pathlib import Path
from typing import Iterable, List
from unittest.mock import patch

import pytest
from rich.logging import RichHandler

# Add src to Python path for testing
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


# ============================================================================
# Test Configuration
# ============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")
    config.addinivalue_line("markers", "slow: mark test as slow running")


# ============================================================================
# Core Fixtures
# ============================================================================


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def mock_psutil():
    """Mock psutil.cpu_count for testing without depending on the host."""
    with patch("psutil.cpu_count") as mock_cpu_count:
        mock_cpu_count.return_value = 8
        yield {"cpu_count": mock_cpu_count}


@pytest.fixture
def isolated_root_logger():
    """
    Give the test its own root handler list.

    The CLI logging setup replaces every root handler; patching the list
    keeps those changes from leaking into other tests.
    """
    root_logger = logging.getLogger()
    original_level = root_logger.level

    with patch.object(root_logger, "handlers", []):
        yield root_logger
        for handler in list(root_logger.handlers):
            if isinstance(handler, (logging.FileHandler, RichHandler)):
                handler.close()
                root_logger.removeHandler(handler)

    root_logger.setLevel(original_level)


# ============================================================================
# Test Utilities
# ============================================================================


class GzipUtils:
    """Helpers for creating and reading gzip log files."""

    @staticmethod
    def write_lines(path: Path, lines: Iterable[str], newline: str = "\n",
                    trailing_newline: bool = True, compresslevel: int = 6) -> Path:
        """Write ``lines`` gzip-compressed; the last line optionally lacks a newline."""
        line_list = list(lines)
        text = newline.join(line_list)
        if trailing_newline and line_list:
            text += newline
        return GzipUtils.write_bytes(path, text.encode("utf-8"), compresslevel)

    @staticmethod
    def write_bytes(path: Path, data: bytes, compresslevel: int = 6) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        with gzip.open(path, "wb", compresslevel=compresslevel) as f:
            f.write(data)
        return path

    @staticmethod
    def read_bytes(path: Path) -> bytes:
        with gzip.open(path, "rb") as f:
            return f.read()

    @staticmethod
    def read_lines(path: Path) -> List[str]:
        return GzipUtils.read_bytes(path).decode("utf-8").splitlines()


@pytest.fixture
def gz_utils():
    """Provide gzip helper functions."""
    return GzipUtils


@pytest.fixture
def log_tree(temp_dir):
    """
    A small archive tree with noise lines spread over nested directories.

    Returns the root directory; every file has 10 lines, 3 of them
    containing "healthcheck".
    """
    for relative in ("a.log.gz", "app/b.log.gz", "app/deep/c.log.gz", "db/d.log.gz"):
        lines = []
        for i in range(10):
            if i % 3 == 0 and i:
                lines.append(f"{relative} {i} GET /healthcheck 200")
            else:
                lines.append(f"{relative} {i} INFO request served")
        GzipUtils.write_lines(temp_dir / relative, lines)
    (temp_dir / "app" / "notes.txt").write_text("not a log archive\n")
    return temp_dir


@pytest.fixture
def settings_file(temp_dir):
    """Write a TOML settings file and return its path."""
    import toml

    def _write(settings: dict, name: str = "sieve.toml") -> Path:
        path = temp_dir / name
        with open(path, "w") as f:
            toml.dump({"sieve": settings}, f)
        return path

    return _write
