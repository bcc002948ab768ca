"""
Line filtering.
"""

from .line_filter import LineFilter, should_keep

__all__ = ["LineFilter", "should_keep"]
