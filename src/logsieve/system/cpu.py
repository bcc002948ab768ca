"""
CPU detection used to size the worker pool.
"""

import logging

import psutil

logger = logging.getLogger(__name__)

FALLBACK_CPU_COUNT = 4


def get_logical_cpu_count() -> int:
    """
    Return the number of logical CPUs.

    Falls back to ``FALLBACK_CPU_COUNT`` when psutil cannot determine it.
    """
    try:
        count = psutil.cpu_count(logical=True)
    except Exception as e:
        logger.warning(f"Failed to get CPU count: {e}")
        return FALLBACK_CPU_COUNT

    if not count:
        logger.warning(
            f"psutil could not determine the CPU count, using {FALLBACK_CPU_COUNT}"
        )
        return FALLBACK_CPU_COUNT
    return count


def default_worker_count() -> int:
    """Default size of the worker pool: one thread per logical CPU."""
    return get_logical_cpu_count()
