"""Parsing subsystem for md_parser.

Provides mixin classes for the grammar, one per level:
- `InlineRulesMixin`: line content, bold/italic markers, literal characters
- `BlockRulesMixin`: document, blocks, headers, lists, paragraphs

and `ParseState`, the per-parse failure tracker shared by both.

Example:
    >>> from md_parser.parsing import BlockRulesMixin, InlineRulesMixin
    >>> class Parser(InlineRulesMixin, BlockRulesMixin):
    ...     pass

"""

from md_parser.parsing.blocks import BlockRulesMixin
from md_parser.parsing.inline import InlineRulesMixin
from md_parser.parsing.state import ParseState

__all__ = [
    "BlockRulesMixin",
    "InlineRulesMixin",
    "ParseState",
]
