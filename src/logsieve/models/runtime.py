"""
Runtime data models.

This module contains data structures created during a run, as opposed to
the configuration that drives it.
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class FileTask:
    """
    One discovered file waiting to be filtered.

    Created by the discoverer and consumed exactly once by one worker.
    """

    # Absolute path of the compressed log file.
    path: Path
    # Compressed size at discovery time, used for byte-based progress.
    size_bytes: int = 0
