"""
System interaction utilities.
"""

from .cpu import FALLBACK_CPU_COUNT, default_worker_count, get_logical_cpu_count

__all__ = [
    "FALLBACK_CPU_COUNT",
    "default_worker_count",
    "get_logical_cpu_count",
]
