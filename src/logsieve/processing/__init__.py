"""
In-place filtering of gzip files.
"""

from .atomic_rewrite import AtomicGzipRewrite
from .file_processor import process_file

__all__ = ["AtomicGzipRewrite", "process_file"]
