"""Per-parse state: source access, node construction and failure tracking.

Grammar rules are methods that take a start position and return either a
Node or None. On None they leave no trace except a failure record, which
is how a failed parse can report the furthest position reached and every
rule tried there.

Thread Safety:
ParseState is created fresh for each parse call and never shared.

"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from md_parser.errors import ParseError
from md_parser.location import LineIndex
from md_parser.nodes import Node
from md_parser.rules import Rule


class ParseState:
    """Shared state for parsing one source string.

    The cursor is the position argument threaded through rule methods;
    this object holds only what the whole parse shares.

    Failure Tracking:
        Each failed rule attempt is recorded at its start position. Only the
        furthest position is kept, along with the rules attempted there in
        first-attempt order. Attempts made inside negative lookaheads are
        not recorded: a lookahead failing is the success case.

    """

    __slots__ = (
        "source",
        "length",
        "source_file",
        "_index",
        "_furthest",
        "_attempted",
        "_lookahead_depth",
    )

    def __init__(self, source: str, source_file: str | None = None) -> None:
        self.source = source
        self.length = len(source)
        self.source_file = source_file
        self._index = LineIndex(source, source_file)
        self._furthest = -1
        self._attempted: list[Rule] = []
        self._lookahead_depth = 0

    # =========================================================================
    # Character access
    # =========================================================================

    def at_end(self, pos: int) -> bool:
        return pos >= self.length

    def peek(self, pos: int) -> str:
        """Character at pos, or "" past the end."""
        return self.source[pos] if pos < self.length else ""

    def startswith(self, literal: str, pos: int) -> bool:
        return self.source.startswith(literal, pos)

    def line_break_len(self, pos: int) -> int:
        """Length of the line break at pos ("\\r\\n", "\\n", "\\r"), 0 if none."""
        ch = self.peek(pos)
        if ch == "\n":
            return 1
        if ch == "\r":
            return 2 if self.peek(pos + 1) == "\n" else 1
        return 0

    # =========================================================================
    # Node construction
    # =========================================================================

    def node(self, rule: Rule, start: int, end: int, children: tuple[Node, ...] = ()) -> Node:
        return Node(rule=rule, location=self._index.location(start, end), children=children)

    # =========================================================================
    # Failure tracking
    # =========================================================================

    def fail(self, rule: Rule, pos: int) -> None:
        """Record that rule failed to match at pos."""
        if self._lookahead_depth:
            return
        if pos > self._furthest:
            self._furthest = pos
            self._attempted = [rule]
        elif pos == self._furthest and rule not in self._attempted:
            self._attempted.append(rule)

    @contextmanager
    def lookahead(self) -> Iterator[None]:
        """Suspend failure tracking for a negative-lookahead probe."""
        self._lookahead_depth += 1
        try:
            yield
        finally:
            self._lookahead_depth -= 1

    @property
    def furthest(self) -> int:
        return self._furthest

    @property
    def attempted(self) -> tuple[Rule, ...]:
        return tuple(self._attempted)

    def position(self, pos: int) -> tuple[int, int]:
        """1-indexed (line, column) of an offset."""
        return self._index.position(pos)

    def hard_error(self, rule: Rule, pos: int, message: str) -> ParseError:
        """Build a ParseError for a committed rule that cannot complete.

        Reported at pos regardless of lookahead nesting. The attempted rules
        are whatever was already recorded at pos, followed by rule.
        """
        attempted = list(self._attempted) if pos == self._furthest else []
        if rule not in attempted:
            attempted.append(rule)
        lineno, col = self._index.position(pos)
        return ParseError(
            message,
            lineno=lineno,
            col_offset=col,
            attempted_rules=tuple(attempted),
            source_file=self.source_file,
            offset=pos,
        )

    def error(self, message: str, pos: int | None = None) -> ParseError:
        """Build a ParseError at the furthest failure (or at pos if nothing failed).

        Args:
            message: Error description
            pos: Fallback position when no failure has been recorded

        Returns:
            ParseError with 1-indexed line/column and attempted rules
        """
        if self._furthest >= 0:
            offset = self._furthest
            attempted = self.attempted
        else:
            offset = pos if pos is not None else 0
            attempted = ()
        lineno, col = self._index.position(offset)
        return ParseError(
            message,
            lineno=lineno,
            col_offset=col,
            attempted_rules=attempted,
            source_file=self.source_file,
            offset=offset,
        )
