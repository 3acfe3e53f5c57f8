"""Parse tree nodes for md_parser.

A parse tree is built from a single node type: a tagged variant carrying
the grammar Rule it matched, the source span, and its children. The
renderer dispatches on the tag with ``match node.rule``.

Nodes never copy source text. Literal text is sliced from the source on
demand through the node's span, so every node is paired with its source
via ParseTree.

Tree shape (by rule):
document
└── block*
    ├── header ─ header_start, line_content
    ├── unordered_list ─ unordered_list_point+ ─ list_start, line_content
    ├── ordered_list ─ ordered_list_point+ ─ list_start(digit+), line_content
    └── paragraph ─ paragraph_line+ ─ line_content

line_content
└── (bold_italic | bold | italic | char)+

Thread Safety:
All nodes are frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from md_parser.location import SourceLocation
from md_parser.rules import Rule


@dataclass(frozen=True, slots=True)
class Node:
    """A parse tree node.

    Attributes:
        rule: Grammar rule this node matched
        location: Source span (offset/end_offset) plus 1-indexed positions
        children: Child nodes in document order (empty for leaves)

    """

    rule: Rule
    location: SourceLocation
    children: tuple[Node, ...] = ()

    @property
    def start(self) -> int:
        return self.location.offset

    @property
    def end(self) -> int:
        return self.location.end_offset

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def as_str(self, source: str) -> str:
        """Return the exact source text this node matched."""
        return source[self.location.offset : self.location.end_offset]

    def child_rules(self) -> tuple[Rule, ...]:
        return tuple(child.rule for child in self.children)

    def walk(self) -> Iterator[Node]:
        """Yield this node and all descendants, depth-first, pre-order."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def find_all(self, rule: Rule) -> list[Node]:
        """Return every descendant (including self) tagged with rule."""
        return [node for node in self.walk() if node.rule is rule]


@dataclass(frozen=True, slots=True)
class ParseTree:
    """A parsed root node together with the source it was parsed from.

    Attributes:
        source: Original Markdown text
        root: Root node (a document, or any rule for rule-level parses)
        source_file: Optional path the source was read from

    """

    source: str
    root: Node
    source_file: str | None = None

    @property
    def rule(self) -> Rule:
        return self.root.rule

    def text(self, node: Node | None = None) -> str:
        """Return the source text matched by node (the root by default)."""
        return (node or self.root).as_str(self.source)

    def __iter__(self) -> Iterator[Node]:
        return self.root.walk()


__all__ = ["Node", "ParseTree"]
