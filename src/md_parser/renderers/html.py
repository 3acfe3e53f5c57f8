"""HTML renderer for md_parser parse trees.

Walks the tree depth-first, rendering children before wrapping them in the
tag for their parent's rule. Literal text is emitted verbatim unless
RenderConfig.escape_html is enabled.

Thread Safety:
All per-render state is encapsulated in RenderContext, created fresh for each
render() call. Multiple threads can safely share a single HtmlRenderer instance
and call render() concurrently without synchronization.

"""

import html
from dataclasses import dataclass

from md_parser.config import RenderConfig, get_render_config
from md_parser.errors import InvalidStructureError
from md_parser.nodes import Node, ParseTree
from md_parser.rules import Rule
from md_parser.utils.logger import get_logger

logger = get_logger(__name__)

_HEADER_CHILDREN: tuple[Rule, ...] = (Rule.HEADER_START, Rule.LINE_CONTENT)
_LIST_POINT_CHILDREN: tuple[Rule, ...] = (Rule.LIST_START, Rule.LINE_CONTENT)


def html_escape(s: str) -> str:
    """Escape HTML special characters.

    Escapes <, >, &, " but NOT single quotes.
    """
    return html.escape(s, quote=False).replace('"', "&quot;")


@dataclass(frozen=True, slots=True)
class RenderContext:
    """Per-render state: the source the tree's spans point into, and config."""

    source: str
    config: RenderConfig


class HtmlRenderer:
    """Render a parse tree to HTML.

    Usage:
        >>> from md_parser.parser import Parser
        >>> tree = Parser("# Hello **World**\\n").parse()
        >>> HtmlRenderer().render(tree)
        '<h1>Hello <strong>World</strong></h1>\\n'

    Thread Safety:
        Multiple threads can safely share a single HtmlRenderer instance.
        Each render() call creates an independent RenderContext.
    """

    __slots__ = ("_config",)

    def __init__(self, config: RenderConfig | None = None) -> None:
        """Initialize renderer.

        Args:
            config: Render configuration. When None, the active ContextVar
                config is read at render time.
        """
        self._config = config

    def render(self, tree: ParseTree) -> str:
        """Render a parse tree to an HTML string.

        Args:
            tree: Parse tree (normally rooted at a document node)

        Returns:
            HTML string

        Raises:
            InvalidStructureError: A node's children do not have the shape
                its rule requires
        """
        ctx = RenderContext(source=tree.source, config=self._config or get_render_config())
        return self._render(tree.root, ctx)

    # =========================================================================
    # Dispatch
    # =========================================================================

    def _render(self, node: Node, ctx: RenderContext) -> str:
        """Render a node by dispatching on its rule."""
        match node.rule:
            case Rule.DOCUMENT | Rule.BLOCK | Rule.PARAGRAPH_LINE | Rule.LINE_CONTENT:
                return self._render_children(node, ctx)
            case Rule.HEADER:
                return self._render_header(node, ctx)
            case Rule.UNORDERED_LIST:
                return self._render_list(node, ctx, "ul", Rule.UNORDERED_LIST_POINT)
            case Rule.ORDERED_LIST:
                return self._render_list(node, ctx, "ol", Rule.ORDERED_LIST_POINT)
            case Rule.UNORDERED_LIST_POINT | Rule.ORDERED_LIST_POINT:
                return self._render_list_point(node, ctx)
            case Rule.PARAGRAPH:
                return self._render_paragraph(node, ctx)
            case Rule.BOLD_ITALIC:
                return f"<strong><em>{self._render_children(node, ctx)}</em></strong>"
            case Rule.BOLD:
                return f"<strong>{self._render_children(node, ctx)}</strong>"
            case Rule.ITALIC:
                return f"<em>{self._render_children(node, ctx)}</em>"
            case Rule.CHAR:
                return self._render_text(node, ctx)
            case _:
                if node.is_leaf:
                    return self._render_text(node, ctx)
                # Unmapped rules degrade to their children, never an error
                logger.debug("No HTML mapping for %s; rendering children", node.rule.value)
                return self._render_children(node, ctx)

    def _render_children(self, node: Node, ctx: RenderContext) -> str:
        return "".join(self._render(child, ctx) for child in node.children)

    def _render_text(self, node: Node, ctx: RenderContext) -> str:
        text = node.as_str(ctx.source)
        if ctx.config.escape_html:
            return html_escape(text)
        return text

    # =========================================================================
    # Block rendering
    # =========================================================================

    def _render_header(self, node: Node, ctx: RenderContext) -> str:
        """Render <hN> where N is the number of '#' in the header start."""
        _expect_children(node, _HEADER_CHILDREN)
        header_start, line_content = node.children
        level = len(header_start.as_str(ctx.source).strip())
        content = self._render(line_content, ctx).strip()
        return f"<h{level}>{content}</h{level}>\n"

    def _render_list(self, node: Node, ctx: RenderContext, tag: str, point_rule: Rule) -> str:
        _expect_repeated(node, point_rule)
        items = self._render_children(node, ctx).strip()
        return f"<{tag}>\n{items}\n</{tag}>\n"

    def _render_list_point(self, node: Node, ctx: RenderContext) -> str:
        """Render <li>; the marker child produces no output."""
        _expect_children(node, _LIST_POINT_CHILDREN)
        _marker, line_content = node.children
        content = self._render(line_content, ctx).strip()
        return f"<li>{content}</li>\n"

    def _render_paragraph(self, node: Node, ctx: RenderContext) -> str:
        _expect_repeated(node, Rule.PARAGRAPH_LINE)
        lines = [self._render(line, ctx) for line in node.children]
        content = ctx.config.line_separator.join(lines).strip()
        return f"<p>{content}</p>\n"


# =============================================================================
# Structure checks
# =============================================================================


def _expect_children(node: Node, expected: tuple[Rule, ...]) -> None:
    actual = node.child_rules()
    if actual != expected:
        raise InvalidStructureError(node.rule, expected, actual)


def _expect_repeated(node: Node, rule: Rule) -> None:
    """Require one or more children, all tagged with rule."""
    actual = node.child_rules()
    if not actual or any(child is not rule for child in actual):
        raise InvalidStructureError(node.rule, (rule,), actual)
