"""Block grammar rules for md_parser.

Block structure is line-oriented:

    document       = block* blank_line* EOI
    block          = blank_line* (header | unordered_list | ordered_list | paragraph) blank_line*
    header         = header_start line_content line_end
    unordered_list = unordered_list_point+
    ordered_list   = ordered_list_point+
    paragraph      = paragraph_line+

Alternatives are tried in that order at each block start, so a line that
could be a header or list point never becomes a paragraph line. Blank
lines belong to the block before them (the first block also takes any
leading ones), so block spans tile the document.

Thread Safety:
All methods use instance-local state only.

"""

from __future__ import annotations

from typing import TYPE_CHECKING

from md_parser.rules import Rule

if TYPE_CHECKING:
    from collections.abc import Callable

    from md_parser.nodes import Node
    from md_parser.parsing.state import ParseState

MAX_HEADER_LEVEL = 6
UNORDERED_MARKERS = frozenset("-*")
SEPARATORS = frozenset(" \t")


class BlockRulesMixin:
    """Block rules: document, headers, lists and paragraphs.

    Required Host Attributes:
        - _state: ParseState
        - _block_alternatives: tuple of block content rule methods, in order

    Required Host Methods (from InlineRulesMixin):
        - parse_line_content(pos) -> Node | None
        - parse_digit(pos) -> Node | None

    """

    # Required host attributes (documented, not declared, to avoid override conflicts)
    # _state: ParseState
    # _block_alternatives: tuple[Callable[[int], Node | None], ...]

    # =========================================================================
    # Line helpers (not rules; they produce no nodes)
    # =========================================================================

    def _skip_separators(self, pos: int) -> int:
        state: ParseState = self._state
        while state.peek(pos) in SEPARATORS:
            pos += 1
        return pos

    def _line_end(self, pos: int) -> int | None:
        """line_end = line_break | EOI; returns the position after it."""
        state: ParseState = self._state
        if state.at_end(pos):
            return pos
        width = state.line_break_len(pos)
        if width:
            return pos + width
        return None

    def _blank_line(self, pos: int) -> int | None:
        """Match one whitespace-only line; returns the position after it.

        A trailing run of spaces with no line break counts only if it is
        non-empty, so matching at end of input never loops.
        """
        state: ParseState = self._state
        cur = self._skip_separators(pos)
        width = state.line_break_len(cur)
        if width:
            return cur + width
        if state.at_end(cur) and cur > pos:
            return cur
        return None

    def _skip_blank_lines(self, pos: int) -> int:
        while (end := self._blank_line(pos)) is not None:
            pos = end
        return pos

    # =========================================================================
    # Document and block
    # =========================================================================

    def parse_document(self, pos: int) -> Node | None:
        """document = block* blank_line* EOI"""
        state: ParseState = self._state
        blocks: list[Node] = []
        cur = pos
        while (block := self.parse_block(cur)) is not None:
            blocks.append(block)
            cur = block.end

        cur = self._skip_blank_lines(cur)
        if not state.at_end(cur):
            state.fail(Rule.DOCUMENT, cur)
            return None
        return state.node(Rule.DOCUMENT, pos, cur, tuple(blocks))

    def parse_block(self, pos: int) -> Node | None:
        """block = blank_line* (header | unordered_list | ordered_list | paragraph) blank_line*"""
        state: ParseState = self._state
        start = self._skip_blank_lines(pos)
        for alternative in self._block_alternatives:
            content = alternative(start)
            if content is not None:
                break
        else:
            state.fail(Rule.BLOCK, pos)
            return None

        end = self._skip_blank_lines(content.end)
        return state.node(Rule.BLOCK, pos, end, (content,))

    # =========================================================================
    # Headers
    # =========================================================================

    def parse_header(self, pos: int) -> Node | None:
        """header = header_start line_content line_end"""
        state: ParseState = self._state
        start = self.parse_header_start(pos)
        if start is None:
            state.fail(Rule.HEADER, pos)
            return None

        content = self.parse_line_content(start.end)
        if content is None:
            state.fail(Rule.HEADER, pos)
            return None

        end = self._line_end(content.end)
        if end is None:
            state.fail(Rule.HEADER, pos)
            return None
        return state.node(Rule.HEADER, pos, end, (start, content))

    def parse_header_start(self, pos: int) -> Node | None:
        """header_start = "#"{1,6} !"#" [ \\t]+

        Seven or more '#' is not a header start.
        """
        state: ParseState = self._state
        cur = pos
        while state.peek(cur) == "#":
            cur += 1
        level = cur - pos

        if not 1 <= level <= MAX_HEADER_LEVEL or state.peek(cur) not in SEPARATORS:
            state.fail(Rule.HEADER_START, pos)
            return None
        return state.node(Rule.HEADER_START, pos, self._skip_separators(cur))

    # =========================================================================
    # Lists
    # =========================================================================

    def parse_list_start(self, pos: int) -> Node | None:
        """list_start = ("-" | "*") [ \\t]+ | digit+ "." [ \\t]+"""
        marker = self._unordered_marker(pos)
        if marker is None:
            marker = self._ordered_marker(pos)
        if marker is None:
            self._state.fail(Rule.LIST_START, pos)
        return marker

    def _unordered_marker(self, pos: int) -> Node | None:
        state: ParseState = self._state
        if state.peek(pos) not in UNORDERED_MARKERS:
            return None
        if state.peek(pos + 1) not in SEPARATORS:
            return None
        return state.node(Rule.LIST_START, pos, self._skip_separators(pos + 1))

    def _ordered_marker(self, pos: int) -> Node | None:
        state: ParseState = self._state
        digits: list[Node] = []
        cur = pos
        while (digit := self.parse_digit(cur)) is not None:
            digits.append(digit)
            cur = digit.end

        if not digits or state.peek(cur) != ".":
            return None
        cur += 1
        if state.peek(cur) not in SEPARATORS:
            return None
        return state.node(Rule.LIST_START, pos, self._skip_separators(cur), tuple(digits))

    def parse_unordered_list(self, pos: int) -> Node | None:
        """unordered_list = unordered_list_point+"""
        return self._list(Rule.UNORDERED_LIST, self.parse_unordered_list_point, pos)

    def parse_ordered_list(self, pos: int) -> Node | None:
        """ordered_list = ordered_list_point+"""
        return self._list(Rule.ORDERED_LIST, self.parse_ordered_list_point, pos)

    def _list(self, rule: Rule, parse_point: Callable[[int], Node | None], pos: int) -> Node | None:
        state: ParseState = self._state
        points: list[Node] = []
        cur = pos
        while (point := parse_point(cur)) is not None:
            points.append(point)
            cur = point.end

        if not points:
            state.fail(rule, pos)
            return None
        return state.node(rule, pos, cur, tuple(points))

    def parse_unordered_list_point(self, pos: int) -> Node | None:
        """unordered_list_point = list_start(unordered) line_content line_end"""
        return self._list_point(Rule.UNORDERED_LIST_POINT, self._unordered_marker, pos)

    def parse_ordered_list_point(self, pos: int) -> Node | None:
        """ordered_list_point = list_start(ordered) line_content line_end"""
        return self._list_point(Rule.ORDERED_LIST_POINT, self._ordered_marker, pos)

    def _list_point(
        self, rule: Rule, parse_marker: Callable[[int], Node | None], pos: int
    ) -> Node | None:
        state: ParseState = self._state
        marker = parse_marker(pos)
        if marker is None:
            state.fail(Rule.LIST_START, pos)
            state.fail(rule, pos)
            return None

        content = self.parse_line_content(marker.end)
        if content is None:
            state.fail(rule, pos)
            return None

        end = self._line_end(content.end)
        if end is None:
            state.fail(rule, pos)
            return None
        return state.node(rule, pos, end, (marker, content))

    # =========================================================================
    # Paragraphs
    # =========================================================================

    def parse_paragraph(self, pos: int) -> Node | None:
        """paragraph = paragraph_line+"""
        state: ParseState = self._state
        lines: list[Node] = []
        cur = pos
        while (line := self.parse_paragraph_line(cur)) is not None:
            lines.append(line)
            cur = line.end

        if not lines:
            state.fail(Rule.PARAGRAPH, pos)
            return None
        return state.node(Rule.PARAGRAPH, pos, cur, tuple(lines))

    def parse_paragraph_line(self, pos: int) -> Node | None:
        """paragraph_line = !blank_line !header !list_point line_content line_end"""
        state: ParseState = self._state
        if self._starts_other_block(pos):
            state.fail(Rule.PARAGRAPH_LINE, pos)
            return None

        content = self.parse_line_content(pos)
        if content is None:
            state.fail(Rule.PARAGRAPH_LINE, pos)
            return None

        end = self._line_end(content.end)
        if end is None:
            state.fail(Rule.PARAGRAPH_LINE, pos)
            return None
        return state.node(Rule.PARAGRAPH_LINE, pos, end, (content,))

    def _starts_other_block(self, pos: int) -> bool:
        """Negative lookahead: does a blank line, header or list point start at pos?"""
        state: ParseState = self._state
        with state.lookahead():
            return (
                self._blank_line(pos) is not None
                or self.parse_header(pos) is not None
                or self.parse_unordered_list_point(pos) is not None
                or self.parse_ordered_list_point(pos) is not None
            )
