"""Tests for parse tree serialization."""

import json

import pytest

from md_parser import Rule, from_dict, from_json, parse, to_dict, to_json


class TestToDict:
    """Node to dict conversion."""

    def test_leaf_without_source(self) -> None:
        tree = parse("a\n")
        char = tree.root.find_all(Rule.CHAR)[0]
        data = to_dict(char)
        assert data["rule"] == "char"
        assert data["children"] == []
        assert "text" not in data
        assert data["location"]["offset"] == 0
        assert data["location"]["end_offset"] == 1

    def test_leaf_text_with_source(self) -> None:
        tree = parse("a\n")
        data = to_dict(tree.root, tree.source)
        paragraph = data["children"][0]["children"][0]
        assert paragraph["rule"] == "paragraph"
        char = paragraph["children"][0]["children"][0]["children"][0]
        assert (char["rule"], char["text"]) == ("char", "a")

    def test_dict_round_trip(self) -> None:
        tree = parse("# Title\n- a\n")
        assert from_dict(to_dict(tree.root)) == tree.root


class TestFromDict:
    """Validation on deserialization."""

    def test_missing_rule(self) -> None:
        with pytest.raises(ValueError, match="Missing 'rule'"):
            from_dict({"children": []})

    def test_unknown_rule(self) -> None:
        with pytest.raises(ValueError, match="Unknown rule: 'table'"):
            from_dict({"rule": "table"})

    def test_missing_location_defaults(self) -> None:
        node = from_dict({"rule": "digit"})
        assert node.rule is Rule.DIGIT
        assert node.location.span == (0, 0)


class TestJson:
    """Whole-tree JSON."""

    def test_round_trip(self) -> None:
        tree = parse("Some **bold** text\n\n1. one\n", source_file="x.md")
        assert from_json(to_json(tree)) == tree

    def test_deterministic(self) -> None:
        tree = parse("*a*\n")
        assert to_json(tree) == to_json(parse("*a*\n"))
        payload = json.loads(to_json(tree))
        assert list(payload) == sorted(payload)

    def test_include_text(self) -> None:
        text = to_json(parse("é\n"), include_text=True, indent=2)
        assert '"text": "é"' in text

    def test_rejects_non_tree(self) -> None:
        with pytest.raises(ValueError, match="Expected an object"):
            from_json("[1, 2]")
