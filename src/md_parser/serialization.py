"""Parse tree serialization: JSON round-trip for md_parser trees.

Converts nodes to/from JSON-compatible dicts. Useful for:
- Debugging and inspection (``md-parser tree <file>``)
- Golden-file comparisons of grammar output

All output is deterministic (sorted keys).

Example:
    from md_parser import parse
    from md_parser.serialization import to_json, from_json

    tree = parse("# Hello **World**\\n")
    restored = from_json(to_json(tree))
    assert tree == restored

Thread Safety:
    All functions are pure and safe to call from any thread.

"""

import json
from typing import Any

from md_parser.location import SourceLocation
from md_parser.nodes import Node, ParseTree
from md_parser.rules import Rule


def to_dict(node: Node, source: str | None = None) -> dict[str, Any]:
    """Convert a node to a JSON-compatible dict.

    Args:
        node: Any parse tree node.
        source: When given, each leaf also carries its matched ``text``.

    Returns:
        Dict with ``rule``, ``location`` and ``children``.

    """
    result: dict[str, Any] = {
        "rule": node.rule.value,
        "location": _location_to_dict(node.location),
        "children": [to_dict(child, source) for child in node.children],
    }
    if source is not None and node.is_leaf:
        result["text"] = node.as_str(source)
    return result


def _location_to_dict(loc: SourceLocation) -> dict[str, Any]:
    return {
        "lineno": loc.lineno,
        "col_offset": loc.col_offset,
        "offset": loc.offset,
        "end_offset": loc.end_offset,
        "end_lineno": loc.end_lineno,
        "end_col_offset": loc.end_col_offset,
        "source_file": loc.source_file,
    }


def from_dict(data: dict[str, Any]) -> Node:
    """Reconstruct a node from a dict produced by to_dict.

    Raises:
        ValueError: If ``rule`` is missing or not in the rule vocabulary.

    """
    rule_name = data.get("rule")
    if rule_name is None:
        msg = "Missing 'rule' field in serialized node"
        raise ValueError(msg)
    try:
        rule = Rule(rule_name)
    except ValueError:
        msg = f"Unknown rule: {rule_name!r}"
        raise ValueError(msg) from None

    raw_loc = data.get("location") or {}
    location = SourceLocation(
        lineno=raw_loc.get("lineno", 0),
        col_offset=raw_loc.get("col_offset", 0),
        offset=raw_loc.get("offset", 0),
        end_offset=raw_loc.get("end_offset", 0),
        end_lineno=raw_loc.get("end_lineno"),
        end_col_offset=raw_loc.get("end_col_offset"),
        source_file=raw_loc.get("source_file"),
    )
    children = tuple(from_dict(child) for child in data.get("children", ()))
    return Node(rule=rule, location=location, children=children)


def to_json(tree: ParseTree, *, indent: int | None = None, include_text: bool = False) -> str:
    """Serialize a parse tree (with its source) to a JSON string.

    Args:
        tree: Parse tree to serialize.
        indent: JSON indentation level (None for compact).
        include_text: Add matched ``text`` to leaf nodes for readability.

    Returns:
        JSON string.

    """
    payload = {
        "source": tree.source,
        "source_file": tree.source_file,
        "root": to_dict(tree.root, tree.source if include_text else None),
    }
    return json.dumps(payload, sort_keys=True, indent=indent, ensure_ascii=False)


def from_json(data: str) -> ParseTree:
    """Deserialize a parse tree from a JSON string produced by to_json.

    Raises:
        ValueError: If the JSON doesn't contain a serialized tree.

    """
    raw = json.loads(data)
    if not isinstance(raw, dict) or "root" not in raw or "source" not in raw:
        msg = "Expected an object with 'source' and 'root'"
        raise ValueError(msg)
    return ParseTree(
        source=raw["source"],
        root=from_dict(raw["root"]),
        source_file=raw.get("source_file"),
    )


__all__ = ["from_dict", "from_json", "to_dict", "to_json"]
