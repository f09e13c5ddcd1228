"""Offset to line/column mapping for scanned source files.

Python 3.11+. Zero external dependencies.
"""

__all__ = ["LineOffsetCache"]


class LineOffsetCache:
    """Maps character offsets to line and column.

    Line starts are recorded once; each lookup is a binary search over
    them. The scanner numbers every call-site of a source file with it.

    Example:
        >>> cache = LineOffsetCache("a\\nb\\nc")
        >>> cache.get_line(0)
        1
        >>> cache.get_line_col(4)
        (3, 1)
    """

    __slots__ = ("_offsets", "_source_len")

    def __init__(self, source: str) -> None:
        """Index the line starts of source.

        Args:
            source: Text to index
        """
        offsets = [0]
        pos = source.find("\n")
        while pos != -1:
            offsets.append(pos + 1)
            pos = source.find("\n", pos + 1)
        self._offsets: tuple[int, ...] = tuple(offsets)
        self._source_len = len(source)

    def get_line_col(self, pos: int) -> tuple[int, int]:
        """1-based (line, column) of pos.

        Out-of-range positions are clamped into the text.
        """
        pos = min(max(pos, 0), self._source_len)

        # last line start <= pos
        left, right = 0, len(self._offsets) - 1
        while left < right:
            mid = (left + right + 1) // 2
            if self._offsets[mid] <= pos:
                left = mid
            else:
                right = mid - 1

        return (left + 1, pos - self._offsets[left] + 1)

    def get_line(self, pos: int) -> int:
        """1-based line of pos."""
        return self.get_line_col(pos)[0]
