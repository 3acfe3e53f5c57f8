"""Backtracking PEG parser producing a parse tree.

Architecture:
The parser uses a mixin-based design, one mixin per grammar level:
- `InlineRulesMixin`: line content and emphasis
- `BlockRulesMixin`: document, headers, lists, paragraphs

Each rule is a method over a start position returning a Node or None.
Ordered choice is a tuple of rule methods tried in turn; a failed
alternative consumes nothing, so the next one starts at the same position.

Thread Safety:
- Parser instances are single-use and hold per-parse state only
- The resulting tree is immutable (frozen dataclasses)

"""

from __future__ import annotations

from collections.abc import Callable

from md_parser.errors import ParseError
from md_parser.nodes import Node, ParseTree
from md_parser.parsing import BlockRulesMixin, InlineRulesMixin, ParseState
from md_parser.rules import Rule
from md_parser.utils.logger import get_logger

logger = get_logger(__name__)

# Rule -> parser method name, for rule-level entry points
_RULE_METHODS: dict[Rule, str] = {
    Rule.DOCUMENT: "parse_document",
    Rule.BLOCK: "parse_block",
    Rule.HEADER: "parse_header",
    Rule.HEADER_START: "parse_header_start",
    Rule.UNORDERED_LIST: "parse_unordered_list",
    Rule.ORDERED_LIST: "parse_ordered_list",
    Rule.UNORDERED_LIST_POINT: "parse_unordered_list_point",
    Rule.ORDERED_LIST_POINT: "parse_ordered_list_point",
    Rule.LIST_START: "parse_list_start",
    Rule.PARAGRAPH: "parse_paragraph",
    Rule.PARAGRAPH_LINE: "parse_paragraph_line",
    Rule.LINE_CONTENT: "parse_line_content",
    Rule.BOLD_ITALIC: "parse_bold_italic",
    Rule.BOLD: "parse_bold",
    Rule.ITALIC: "parse_italic",
    Rule.CHAR: "parse_char",
    Rule.DIGIT: "parse_digit",
}


class Parser(
    InlineRulesMixin,
    BlockRulesMixin,
):
    """Recursive descent (PEG) parser for the supported Markdown subset.

    Usage:
            >>> tree = Parser("# Hello\\n").parse()
            >>> tree.root.children[0].children[0].rule
            Rule.HEADER

            >>> node = Parser("**bold**").parse_rule(Rule.BOLD).root
            >>> node.end
            8

    Thread Safety:
        Parser instances are single-use and not thread-safe. Create one per
        parse operation. The resulting tree is immutable and thread-safe.

    """

    __slots__ = (
        "_source",
        "_source_file",
        "_state",
        "_inline_alternatives",
        "_block_alternatives",
    )

    def __init__(
        self,
        source: str,
        source_file: str | None = None,
    ) -> None:
        """Initialize parser with source text.

        Args:
            source: Markdown source text
            source_file: Optional source file path for error messages

        """
        self._source = source
        self._source_file = source_file
        self._state = ParseState(source, source_file)

        # Ordered choice: longest marker first, literal character last
        self._inline_alternatives: tuple[Callable[[int], Node | None], ...] = (
            self.parse_bold_italic,
            self.parse_bold,
            self.parse_italic,
            self.parse_char,
        )
        self._block_alternatives: tuple[Callable[[int], Node | None], ...] = (
            self.parse_header,
            self.parse_unordered_list,
            self.parse_ordered_list,
            self.parse_paragraph,
        )

    def parse(self) -> ParseTree:
        """Parse the whole source as a document.

        Returns:
            ParseTree rooted at a document node

        Raises:
            ParseError: Input does not match the grammar (no partial tree)
        """
        return self.parse_rule(Rule.DOCUMENT)

    def parse_rule(self, rule: Rule) -> ParseTree:
        """Parse a single grammar rule at the start of the source.

        Any rule in the vocabulary may be used as an entry point. The match
        may be a prefix of the source; only the document rule must consume
        all of it.

        Args:
            rule: Grammar rule to match at offset 0

        Returns:
            ParseTree rooted at a node tagged with rule

        Raises:
            ParseError: Rule does not match at offset 0
        """
        logger.debug("Parsing %s (%d chars)", rule.value, len(self._source))
        method: Callable[[int], Node | None] = getattr(self, _RULE_METHODS[rule])
        try:
            node = method(0)
            if node is None:
                raise self._state.error(f"failed to parse {rule.value}")
        except ParseError as exc:
            logger.debug("Parse failed at %s:%s: %s", exc.lineno, exc.col_offset, exc.message)
            raise
        return ParseTree(source=self._source, root=node, source_file=self._source_file)


__all__ = ["Parser"]
