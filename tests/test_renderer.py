"""HTML renderer tests, including hand-built trees the parser never produces."""

import logging

import pytest

from md_parser import (
    HtmlRenderer,
    InvalidStructureError,
    LineIndex,
    Node,
    ParseTree,
    RenderConfig,
    RenderError,
    Rule,
    TreeRenderer,
    parse,
    render_config_context,
)


def leaf(index: LineIndex, rule: Rule, start: int, end: int) -> Node:
    return Node(rule, index.location(start, end))


def chars(index: LineIndex, start: int, end: int) -> Node:
    children = tuple(leaf(index, Rule.CHAR, i, i + 1) for i in range(start, end))
    return Node(Rule.LINE_CONTENT, index.location(start, end), children)


class TestBlockOutput:
    """Block-level HTML."""

    @pytest.mark.parametrize("level", range(1, 7))
    def test_header_level(self, level: int) -> None:
        source = "#" * level + "  Title  \n"
        assert HtmlRenderer().render(parse(source)) == f"<h{level}>Title</h{level}>\n"

    def test_list_items_trimmed(self) -> None:
        html = HtmlRenderer().render(parse("-   spaced   \n"))
        assert html == "<ul>\n<li>spaced</li>\n</ul>\n"

    def test_paragraph_trimmed(self) -> None:
        assert HtmlRenderer().render(parse("  padded  \n")) == "<p>padded</p>\n"

    def test_markers_not_rendered(self) -> None:
        html = HtmlRenderer().render(parse("10. ten\n"))
        assert "10." not in html

    def test_nested_inline(self) -> None:
        html = HtmlRenderer().render(parse("**a *b* c**\n"))
        assert html == "<p><strong>a <em>b</em> c</strong></p>\n"


class TestTextEscaping:
    """Literal text is verbatim unless escaping is enabled."""

    def test_verbatim_by_default(self) -> None:
        html = HtmlRenderer().render(parse('<a href="x">\n'))
        assert html == '<p><a href="x"></p>\n'

    def test_escape_from_constructor(self) -> None:
        renderer = HtmlRenderer(RenderConfig(escape_html=True))
        html = renderer.render(parse('<a href="x">\n'))
        assert html == "<p>&lt;a href=&quot;x&quot;&gt;</p>\n"

    def test_escape_from_context(self) -> None:
        tree = parse("&\n")
        with render_config_context(RenderConfig(escape_html=True)):
            assert HtmlRenderer().render(tree) == "<p>&amp;</p>\n"
        assert HtmlRenderer().render(tree) == "<p>&</p>\n"

    def test_constructor_config_wins(self) -> None:
        tree = parse("&\n")
        with render_config_context(RenderConfig(escape_html=True)):
            assert HtmlRenderer(RenderConfig()).render(tree) == "<p>&</p>\n"


class TestHandBuiltTrees:
    """Trees assembled directly from nodes."""

    def test_header_missing_content(self) -> None:
        source = "# "
        index = LineIndex(source)
        header = Node(
            Rule.HEADER,
            index.location(0, 2),
            (leaf(index, Rule.HEADER_START, 0, 2),),
        )
        with pytest.raises(InvalidStructureError) as exc_info:
            HtmlRenderer().render(ParseTree(source, header))
        err = exc_info.value
        assert err.node is Rule.HEADER
        assert err.expected == (Rule.HEADER_START, Rule.LINE_CONTENT)
        assert err.actual == (Rule.HEADER_START,)
        assert isinstance(err, RenderError)
        assert "Invalid structure for 'header'" in str(err)

    def test_empty_list(self) -> None:
        source = ""
        index = LineIndex(source)
        tree = ParseTree(source, Node(Rule.ORDERED_LIST, index.location(0, 0)))
        with pytest.raises(InvalidStructureError) as exc_info:
            HtmlRenderer().render(tree)
        assert exc_info.value.actual == ()
        assert "found [(none)]" in str(exc_info.value)

    def test_list_with_wrong_point_family(self) -> None:
        source = "- a\n"
        index = LineIndex(source)
        point = Node(
            Rule.UNORDERED_LIST_POINT,
            index.location(0, 4),
            (leaf(index, Rule.LIST_START, 0, 2), chars(index, 2, 3)),
        )
        tree = ParseTree(source, Node(Rule.ORDERED_LIST, index.location(0, 4), (point,)))
        with pytest.raises(InvalidStructureError):
            HtmlRenderer().render(tree)

    def test_paragraph_with_non_line_child(self) -> None:
        source = "ab"
        index = LineIndex(source)
        paragraph = Node(Rule.PARAGRAPH, index.location(0, 2), (chars(index, 0, 2),))
        with pytest.raises(InvalidStructureError):
            HtmlRenderer().render(ParseTree(source, paragraph))

    def test_unmapped_leaf_renders_text(self) -> None:
        source = "## "
        index = LineIndex(source)
        tree = ParseTree(source, leaf(index, Rule.HEADER_START, 0, 3))
        assert HtmlRenderer().render(tree) == "## "

    def test_unmapped_interior_renders_children(self, caplog: pytest.LogCaptureFixture) -> None:
        source = "12"
        index = LineIndex(source)
        start = Node(
            Rule.LIST_START,
            index.location(0, 2),
            (leaf(index, Rule.DIGIT, 0, 1), leaf(index, Rule.DIGIT, 1, 2)),
        )
        with caplog.at_level(logging.DEBUG, logger="md_parser"):
            assert HtmlRenderer().render(ParseTree(source, start)) == "12"
        assert "No HTML mapping for list_start" in caplog.text

    def test_inline_root(self) -> None:
        source = "hi"
        index = LineIndex(source)
        italic = Node(Rule.ITALIC, index.location(0, 2), chars(index, 0, 2).children)
        assert HtmlRenderer().render(ParseTree(source, italic)) == "<em>hi</em>"


class TestProtocol:
    """HtmlRenderer satisfies the TreeRenderer protocol."""

    def test_structural_typing(self) -> None:
        def render_with(renderer: TreeRenderer, source: str) -> str:
            return renderer.render(parse(source))

        assert render_with(HtmlRenderer(), "*x*\n") == "<p><em>x</em></p>\n"

    def test_shared_instance(self) -> None:
        renderer = HtmlRenderer()
        first = renderer.render(parse("# A\n"))
        second = renderer.render(parse("# A\n"))
        assert first == second == "<h1>A</h1>\n"
