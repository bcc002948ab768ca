"""
Line filtering by literal substring patterns.

Matching is case-sensitive and literal: characters such as ``*`` or ``.``
have no special meaning. A line is dropped when it contains any pattern.
"""

from typing import AnyStr, Iterable, Sequence, Tuple


def should_keep(line: AnyStr, patterns: Sequence[AnyStr]) -> bool:
    """
    Decide whether a line survives the filter.

    ``line`` and ``patterns`` must be the same type (both ``str`` or both
    ``bytes``). An empty pattern sequence keeps every line.
    """
    return not any(pattern in line for pattern in patterns)


def _strip_terminator(line: bytes) -> bytes:
    if line.endswith(b"\r\n"):
        return line[:-2]
    if line.endswith(b"\n"):
        return line[:-1]
    return line


class LineFilter:
    """
    Byte-level filter shared read-only by all workers.

    Patterns are encoded once to UTF-8 so raw lines from the decompressed
    stream can be matched without decoding. The line terminator is not part
    of the matched text.
    """

    def __init__(self, patterns: Iterable[str] = (), encoding: str = "utf-8"):
        self.patterns: Tuple[str, ...] = tuple(dict.fromkeys(patterns))
        self._encoded: Tuple[bytes, ...] = tuple(
            pattern.encode(encoding) for pattern in self.patterns
        )

    @property
    def is_noop(self) -> bool:
        return not self._encoded

    def keep(self, line: bytes) -> bool:
        if not self._encoded:
            return True
        return should_keep(_strip_terminator(line), self._encoded)

    def __repr__(self) -> str:
        return f"LineFilter(patterns={list(self.patterns)!r})"
