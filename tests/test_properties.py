"""Property-based tests for parser and renderer invariants using Hypothesis."""

from hypothesis import given, settings
from hypothesis import strategies as st

from md_parser import ParseError, Rule, convert, parse

MARKDOWN_ALPHABET = "ab #*-1.\t\n\r"
SAFE_ALPHABET = "ab #-1.\t\n\r"


class TestParseInvariants:
    """Properties that hold for every input."""

    @given(st.text(alphabet=MARKDOWN_ALPHABET, max_size=200))
    @settings(max_examples=200)
    def test_converts_or_raises_parse_error(self, source: str) -> None:
        """Any input either converts to a string or raises ParseError."""
        try:
            html = convert(source)
        except ParseError as exc:
            assert exc.lineno is not None and exc.lineno >= 1
            assert exc.attempted_rules
        else:
            assert isinstance(html, str)

    @given(st.text(alphabet=SAFE_ALPHABET, max_size=200))
    @settings(max_examples=200)
    def test_without_asterisks_always_parses(self, source: str) -> None:
        parse(source)

    @given(st.text(alphabet=SAFE_ALPHABET, max_size=200))
    @settings(max_examples=100)
    def test_blocks_tile_input(self, source: str) -> None:
        root = parse(source).root
        assert root.location.span == (0, len(source))
        cursor = 0
        for block in root.children:
            assert block.start == cursor
            cursor = block.end
        if root.children:
            assert cursor == len(source)

    @given(st.text(alphabet=SAFE_ALPHABET, max_size=200))
    @settings(max_examples=100)
    def test_every_tag_in_vocabulary(self, source: str) -> None:
        for node in parse(source):
            assert isinstance(node.rule, Rule)
            for child in node.children:
                assert node.start <= child.start <= child.end <= node.end


class TestRenderInvariants:
    """Properties of the HTML output."""

    @given(
        st.integers(min_value=1, max_value=6),
        st.text(alphabet="abc xyz", min_size=1, max_size=40).filter(str.strip),
    )
    def test_header_levels(self, level: int, text: str) -> None:
        html = convert("#" * level + " " + text + "\n")
        assert html == f"<h{level}>{text.strip()}</h{level}>\n"

    @given(st.lists(st.text(alphabet="abc ", min_size=1, max_size=20).filter(str.strip), min_size=1))
    def test_list_items_trimmed(self, items: list[str]) -> None:
        html = convert("".join(f"- {item}\n" for item in items))
        assert html.startswith("<ul>\n") and html.endswith("</ul>\n")
        for item in items:
            assert f"<li>{item.strip()}</li>" in html
