"""md_parser renderers.

Renderers convert parse trees into output formats.

Available Renderers:
- HtmlRenderer: Renders a parse tree to HTML

"""

from md_parser.renderers.html import HtmlRenderer
from md_parser.renderers.protocol import TreeRenderer

__all__ = ["HtmlRenderer", "TreeRenderer"]
