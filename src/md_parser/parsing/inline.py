"""Inline grammar rules for md_parser.

Matches line content left to right with longest-marker-first precedence:

    line_content = (bold_italic | bold | italic | char)+

Every rule takes a start position and returns a Node spanning what it
consumed, or None having consumed nothing. A marker that cannot be closed
before the end of the line falls back to literal characters, with one
exception: a double marker (``**``) that opens but never closes is a hard
parse failure for the whole document.

Thread Safety:
All methods use instance-local state only.
Safe for concurrent use when each parser instance is used by one thread.

"""

from __future__ import annotations

from typing import TYPE_CHECKING

from md_parser.rules import Rule

if TYPE_CHECKING:
    from md_parser.nodes import Node
    from md_parser.parsing.state import ParseState

DIGITS = frozenset("0123456789")


class InlineRulesMixin:
    """Inline rules: line content, emphasis markers and literal characters.

    Required Host Attributes:
        - _state: ParseState
        - _inline_alternatives: tuple of rule methods tried at each position

    """

    # Required host attributes (documented, not declared, to avoid override conflicts)
    # _state: ParseState
    # _inline_alternatives: tuple[Callable[[int], Node | None], ...]

    def _opens(self, pos: int) -> bool:
        """Whether the character at pos may follow an opening marker.

        An opener must be followed by something other than another '*',
        a line break or the end of input. Whitespace is allowed: a lone
        '*' in running text ("a * b") stays literal because italic finds
        no closer and backtracks.
        """
        ch = self._state.peek(pos)
        return ch != "" and ch != "*" and not self._state.line_break_len(pos)

    def parse_line_content(self, pos: int) -> Node | None:
        """line_content = (bold_italic | bold | italic | char)+"""
        state: ParseState = self._state
        children: list[Node] = []
        cur = pos
        alternatives = self._inline_alternatives
        while True:
            for alternative in alternatives:
                child = alternative(cur)
                if child is not None:
                    break
            else:
                break
            children.append(child)
            cur = child.end

        if not children:
            state.fail(Rule.LINE_CONTENT, pos)
            return None
        return state.node(Rule.LINE_CONTENT, pos, cur, tuple(children))

    def parse_bold_italic(self, pos: int) -> Node | None:
        """bold_italic = "***" (!"***" char)+ "***"

        Tried before bold and italic so ***x*** is a single node rather
        than italic nested in bold.
        """
        state: ParseState = self._state
        if not (state.startswith("***", pos) and self._opens(pos + 3)):
            state.fail(Rule.BOLD_ITALIC, pos)
            return None

        children: list[Node] = []
        cur = pos + 3
        while not state.startswith("***", cur):
            child = self.parse_char(cur)
            if child is None:
                state.fail(Rule.BOLD_ITALIC, pos)
                return None
            children.append(child)
            cur = child.end

        return state.node(Rule.BOLD_ITALIC, pos, cur + 3, tuple(children))

    def parse_bold(self, pos: int) -> Node | None:
        """bold = "**" (!"**" (italic | char))+ "**"

        Once a valid opener has matched there is no backtracking: reaching
        the end of the line without a closing "**" raises ParseError.

        Raises:
            ParseError: Opener matched but no closer before end of line
        """
        state: ParseState = self._state
        if not (state.startswith("**", pos) and self._opens(pos + 2)):
            state.fail(Rule.BOLD, pos)
            return None

        children: list[Node] = []
        cur = pos + 2
        while not state.startswith("**", cur):
            child = self.parse_italic(cur)
            if child is None:
                child = self.parse_char(cur)
            if child is None:
                lineno, col = state.position(pos)
                raise state.hard_error(
                    Rule.BOLD,
                    cur,
                    f"unclosed bold marker '**' opened at {lineno}:{col}",
                )
            children.append(child)
            cur = child.end

        return state.node(Rule.BOLD, pos, cur + 2, tuple(children))

    def parse_italic(self, pos: int) -> Node | None:
        """Match single-marker italic text.

        italic = "*" (!"*" char)+ "*"
        """
        state: ParseState = self._state
        if not (state.peek(pos) == "*" and self._opens(pos + 1)):
            state.fail(Rule.ITALIC, pos)
            return None

        children: list[Node] = []
        cur = pos + 1
        while state.peek(cur) != "*":
            child = self.parse_char(cur)
            if child is None:
                state.fail(Rule.ITALIC, pos)
                return None
            children.append(child)
            cur = child.end

        return state.node(Rule.ITALIC, pos, cur + 1, tuple(children))

    def parse_char(self, pos: int) -> Node | None:
        """char = !line_break ANY"""
        state: ParseState = self._state
        if state.at_end(pos) or state.line_break_len(pos):
            state.fail(Rule.CHAR, pos)
            return None
        return state.node(Rule.CHAR, pos, pos + 1)

    def parse_digit(self, pos: int) -> Node | None:
        """Match one ASCII digit.

        digit = "0".."9"
        """
        state: ParseState = self._state
        if state.peek(pos) not in DIGITS:
            state.fail(Rule.DIGIT, pos)
            return None
        return state.node(Rule.DIGIT, pos, pos + 1)
