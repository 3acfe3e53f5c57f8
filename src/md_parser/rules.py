"""Rule vocabulary for the md_parser grammar.

Every node in a parse tree is tagged with exactly one Rule. The enum is
closed: the grammar is fixed and has no extension points.

Thread Safety:
Rule is an enum (inherently immutable).

"""

from enum import Enum


class Rule(Enum):
    """Grammar rules, one per parse tree node kind.

    Values are the rule names used in error messages and serialized trees.

    Organized by category:
    - Document structure (DOCUMENT, BLOCK)
    - Block rules (headers, lists, paragraphs)
    - Inline rules (line content, emphasis, literal characters)

    """

    # Document structure
    DOCUMENT = "document"
    BLOCK = "block"

    # Headers
    HEADER = "header"  # # Heading
    HEADER_START = "header_start"  # 1-6 '#' plus separator

    # Lists
    UNORDERED_LIST = "unordered_list"
    ORDERED_LIST = "ordered_list"
    UNORDERED_LIST_POINT = "unordered_list_point"  # - point or * point
    ORDERED_LIST_POINT = "ordered_list_point"  # 1. point
    LIST_START = "list_start"  # marker plus separator

    # Paragraphs
    PARAGRAPH = "paragraph"
    PARAGRAPH_LINE = "paragraph_line"

    # Inline
    LINE_CONTENT = "line_content"
    BOLD_ITALIC = "bold_italic"  # ***text***
    BOLD = "bold"  # **text**
    ITALIC = "italic"  # *text*
    CHAR = "char"
    DIGIT = "digit"

    def __repr__(self) -> str:
        return f"Rule.{self.name}"


# Rules whose nodes never have children
LEAF_RULES: frozenset[Rule] = frozenset({Rule.CHAR, Rule.DIGIT})

# Rules that wrap inline content in HTML tags
INLINE_FORMAT_RULES: frozenset[Rule] = frozenset({Rule.BOLD_ITALIC, Rule.BOLD, Rule.ITALIC})

# Block content alternatives in the order the grammar tries them
BLOCK_CONTENT_RULES: tuple[Rule, ...] = (
    Rule.HEADER,
    Rule.UNORDERED_LIST,
    Rule.ORDERED_LIST,
    Rule.PARAGRAPH,
)


__all__ = [
    "BLOCK_CONTENT_RULES",
    "INLINE_FORMAT_RULES",
    "LEAF_RULES",
    "Rule",
]
