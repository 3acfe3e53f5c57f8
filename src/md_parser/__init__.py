"""
md_parser: Markdown subset to HTML converter

A grammar-driven parser for a small Markdown subset (headers, bold,
italic, bold+italic, ordered and unordered lists, paragraphs) and a
tree-walking HTML renderer. Zero runtime dependencies.

Quick Start:
    >>> from md_parser import convert
    >>> convert("# Hello World\\n")
    '<h1>Hello World</h1>\\n'

    >>> # Or parse and render separately
    >>> from md_parser import parse, render
    >>> tree = parse("This is **bold** text\\n")
    >>> render(tree)
    '<p>This is <strong>bold</strong> text</p>\\n'

Errors:
    >>> from md_parser import ParseError
    >>> try:
    ...     convert("**no close\\n")
    ... except ParseError as exc:
    ...     (exc.lineno, exc.col_offset)
    (1, 11)

"""

from md_parser.config import (
    RenderConfig,
    get_render_config,
    render_config_context,
    reset_render_config,
    set_render_config,
)
from md_parser.errors import (
    InvalidStructureError,
    MarkdownError,
    ParseError,
    RenderError,
)
from md_parser.location import LineIndex, SourceLocation
from md_parser.nodes import Node, ParseTree
from md_parser.parser import Parser
from md_parser.renderers.html import HtmlRenderer
from md_parser.renderers.protocol import TreeRenderer
from md_parser.rules import Rule
from md_parser.serialization import from_dict, from_json, to_dict, to_json

__version__ = "0.1.0"


def parse(source: str, *, source_file: str | None = None) -> ParseTree:
    """Parse Markdown source into a parse tree.

    Args:
        source: Markdown source text
        source_file: Optional source file path for error messages

    Returns:
        ParseTree rooted at a document node

    Raises:
        ParseError: Input does not match the grammar

    Example:
        >>> tree = parse("# Hello\\n")
        >>> tree.root.rule
        Rule.DOCUMENT
    """
    return Parser(source, source_file=source_file).parse()


def parse_rule(rule: Rule, source: str) -> ParseTree:
    """Parse a single grammar rule at the start of source.

    The matched node may cover only a prefix of source.

    Example:
        >>> tree = parse_rule(Rule.BOLD, "**bold text**")
        >>> tree.text()
        '**bold text**'
    """
    return Parser(source).parse_rule(rule)


def render(tree: ParseTree, *, config: RenderConfig | None = None) -> str:
    """Render a parse tree to HTML.

    Args:
        tree: Parse tree to render
        config: Render configuration (active ContextVar config if None)

    Raises:
        InvalidStructureError: Tree violates the renderer's shape assumptions
    """
    return HtmlRenderer(config).render(tree)


def convert(markdown_text: str, *, source_file: str | None = None) -> str:
    """Parse Markdown text and return HTML.

    The single entry point for callers that only need text in, text out.

    Raises:
        ParseError: Input does not match the grammar
        InvalidStructureError: Parser produced a tree the renderer rejects
    """
    return render(parse(markdown_text, source_file=source_file))


class Markdown:
    """High-level Markdown processor combining parser and renderer.

    Usage:
        >>> md = Markdown()
        >>> md("This is *italic* text\\n")
        '<p>This is <em>italic</em> text</p>\\n'

        >>> md = Markdown(config=RenderConfig(escape_html=True))
        >>> md("a < b\\n")
        '<p>a &lt; b</p>\\n'

    Thread Safety:
        Configuration is immutable and applied per call via ContextVar.
        Safe to use one instance from multiple threads.

    """

    __slots__ = ("_config",)

    def __init__(self, *, config: RenderConfig | None = None) -> None:
        self._config = config or RenderConfig()

    @property
    def config(self) -> RenderConfig:
        return self._config

    def __call__(self, source: str, *, source_file: str | None = None) -> str:
        """Parse and render Markdown in one call."""
        return self.render(self.parse(source, source_file=source_file))

    def parse(self, source: str, *, source_file: str | None = None) -> ParseTree:
        return Parser(source, source_file=source_file).parse()

    def render(self, tree: ParseTree) -> str:
        with render_config_context(self._config):
            return HtmlRenderer().render(tree)


__all__ = [  # noqa: RUF022 - grouped by category
    # Version
    "__version__",
    # Core API
    "convert",
    "parse",
    "parse_rule",
    "render",
    # Tree
    "Node",
    "ParseTree",
    "Rule",
    "SourceLocation",
    "LineIndex",
    # Parser and renderer
    "Parser",
    "HtmlRenderer",
    "TreeRenderer",
    # Errors
    "MarkdownError",
    "ParseError",
    "RenderError",
    "InvalidStructureError",
    # Configuration (ContextVar-based)
    "RenderConfig",
    "get_render_config",
    "set_render_config",
    "reset_render_config",
    "render_config_context",
    # Serialization
    "to_dict",
    "from_dict",
    "to_json",
    "from_json",
    # High-level
    "Markdown",
]
