"""Source location tracking for parse tree nodes and error messages.

Provides:
- SourceLocation: immutable span of source text with 1-indexed positions
- LineIndex: maps absolute offsets to 1-indexed (line, column) pairs

Offsets are positions in the Python source string (code points).

Thread Safety:
SourceLocation is frozen (immutable) and safe to share across threads.
LineIndex is built once per source and only read afterwards.

"""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """Source span for error messages and literal-text extraction.

    All line/column positions are 1-indexed.

    Attributes:
        lineno: Starting line number (1-indexed)
        col_offset: Starting column (1-indexed)
        offset: Absolute start offset in source
        end_offset: Absolute end offset in source (exclusive)
        end_lineno: Ending line number (optional)
        end_col_offset: Ending column (optional)
        source_file: Source file path (optional)

    Examples:
            >>> loc = SourceLocation(lineno=1, col_offset=1, offset=0, end_offset=5)
            >>> str(loc)
            '1:1'

            >>> loc = SourceLocation(2, 4, source_file="notes.md")
            >>> str(loc)
            'notes.md:2:4'

    """

    lineno: int
    col_offset: int
    offset: int = 0
    end_offset: int = 0
    end_lineno: int | None = None
    end_col_offset: int | None = None
    source_file: str | None = None

    def __str__(self) -> str:
        """Format location for error messages.

        Returns:
            Formatted string like "file.md:10:5" or "10:5"
        """
        if self.source_file:
            return f"{self.source_file}:{self.lineno}:{self.col_offset}"
        return f"{self.lineno}:{self.col_offset}"

    @property
    def span(self) -> tuple[int, int]:
        """Start and end offsets as a (start, end) pair."""
        return (self.offset, self.end_offset)

    def __len__(self) -> int:
        return self.end_offset - self.offset

    @classmethod
    def unknown(cls) -> SourceLocation:
        """Create a placeholder location for synthetic nodes."""
        return cls(lineno=0, col_offset=0)


class LineIndex:
    """Offset to (line, column) mapper for one source string.

    Line starts are computed once; each lookup is a binary search.
    Recognizes "\\n", "\\r\\n" and lone "\\r" as line terminators, the
    same set the grammar treats as line breaks.

    Usage:
            >>> index = LineIndex("ab\\ncd")
            >>> index.position(3)
            (2, 1)
            >>> index.position(5)
            (2, 3)

    """

    __slots__ = ("_line_starts", "_source_len", "_source_file")

    def __init__(self, source: str, source_file: str | None = None) -> None:
        self._source_len = len(source)
        self._source_file = source_file
        starts = [0]
        pos = 0
        n = len(source)
        while pos < n:
            ch = source[pos]
            if ch == "\n":
                starts.append(pos + 1)
            elif ch == "\r":
                if pos + 1 < n and source[pos + 1] == "\n":
                    pos += 1
                starts.append(pos + 1)
            pos += 1
        self._line_starts = starts

    @property
    def line_count(self) -> int:
        return len(self._line_starts)

    def position(self, offset: int) -> tuple[int, int]:
        """Map an absolute offset to a 1-indexed (line, column) pair.

        Offsets past the end of the source clamp to the end position.

        Args:
            offset: Absolute offset into the source

        Returns:
            (lineno, col_offset), both 1-indexed
        """
        offset = max(0, min(offset, self._source_len))
        line = bisect_right(self._line_starts, offset) - 1
        return line + 1, offset - self._line_starts[line] + 1

    def location(self, start: int, end: int) -> SourceLocation:
        """Build a SourceLocation spanning [start, end)."""
        lineno, col = self.position(start)
        end_lineno, end_col = self.position(end)
        return SourceLocation(
            lineno=lineno,
            col_offset=col,
            offset=start,
            end_offset=end,
            end_lineno=end_lineno,
            end_col_offset=end_col,
            source_file=self._source_file,
        )
