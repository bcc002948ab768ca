"""
Discovery of compressed log files.
"""

from .discoverer import FileDiscoverer, discover_files

__all__ = ["FileDiscoverer", "discover_files"]
