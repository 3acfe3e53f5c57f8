"""Exception classes for md_parser.

Two error kinds reach callers:
- ParseError: the grammar could not match the input ("your Markdown is invalid")
- InvalidStructureError: the renderer was handed a tree that violates
  its shape assumptions ("the parser produced a tree the renderer can't handle")

Both derive from MarkdownError so callers can catch either with one clause.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from md_parser.rules import Rule


class MarkdownError(Exception):
    """Base exception for all md_parser errors."""

    pass


def _format_rules(rules: Iterable[Rule]) -> str:
    names = [rule.value for rule in rules]
    if not names:
        return ""
    if len(names) == 1:
        return names[0]
    if len(names) == 2:
        return f"{names[0]} or {names[1]}"
    return ", ".join(names[:-1]) + f", or {names[-1]}"


class ParseError(MarkdownError):
    """Error during Markdown parsing.

    Raised when no grammar alternative matches at some position. Carries the
    position of the furthest failure and every rule attempted there, so
    diagnostics can explain *why* the text does not parse.
    """

    def __init__(
        self,
        message: str,
        lineno: int | None = None,
        col_offset: int | None = None,
        attempted_rules: tuple[Rule, ...] = (),
        source_file: str | None = None,
        offset: int | None = None,
    ) -> None:
        """Initialize parse error with optional location.

        Args:
            message: Error description
            lineno: Line number where error occurred (1-indexed)
            col_offset: Column where error occurred (1-indexed)
            attempted_rules: Rules tried at the failure position, in attempt order
            source_file: Path to source file (optional)
            offset: Absolute offset of the failure position (optional)
        """
        self.message = message
        self.lineno = lineno
        self.col_offset = col_offset
        self.attempted_rules = attempted_rules
        self.source_file = source_file
        self.offset = offset

        location = ""
        if source_file:
            location = f"{source_file}:"
        if lineno is not None:
            location += f"{lineno}:"
            if col_offset is not None:
                location += f"{col_offset}:"
        if location:
            location = location.rstrip(":") + " "

        detail = message
        if attempted_rules:
            detail += f" (expected {_format_rules(attempted_rules)})"

        super().__init__(f"{location}{detail}")

    @property
    def line(self) -> int | None:
        return self.lineno

    @property
    def column(self) -> int | None:
        return self.col_offset


class RenderError(MarkdownError):
    """Error during HTML rendering."""

    pass


class InvalidStructureError(RenderError):
    """Parse tree node whose children violate the renderer's expectations.

    Unreachable with a conforming parser; raised instead of rendering a
    malformed tree.
    """

    def __init__(
        self,
        node: Rule,
        expected: tuple[Rule, ...],
        actual: tuple[Rule, ...],
    ) -> None:
        """Initialize structure error.

        Args:
            node: Tag of the offending node
            expected: Child tags the renderer requires
            actual: Child tags actually found
        """
        self.node = node
        self.expected = expected
        self.actual = actual

        expected_str = ", ".join(rule.value for rule in expected) or "(none)"
        actual_str = ", ".join(rule.value for rule in actual) or "(none)"
        super().__init__(
            f"Invalid structure for '{node.value}': expected children "
            f"[{expected_str}], found [{actual_str}]"
        )
