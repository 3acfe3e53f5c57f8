"""TreeRenderer protocol: stable interface for parse tree renderers.

Any renderer that implements ``render(tree) -> str`` conforms to this protocol.
The built-in ``HtmlRenderer`` is the reference implementation.

Example:
    from md_parser.renderers.protocol import TreeRenderer

    def render_page(renderer: TreeRenderer, tree: ParseTree) -> str:
        return renderer.render(tree)

"""

from typing import Protocol

from md_parser.nodes import ParseTree


class TreeRenderer(Protocol):
    """Protocol for parse tree renderers."""

    def render(self, tree: ParseTree) -> str:
        """Render a parse tree to a string.

        Args:
            tree: The parse tree to render.

        Returns:
            Rendered string output.

        """
        ...
