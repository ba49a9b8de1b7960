"""Parsing subsystem for the orger parser.

Provides mixin classes for modular parsing functionality:
- `TokenNavigationMixin`: Token stream traversal
- `BlockParsingMixin`: Block-level content (headings, lists, tables...)
- `InlineParsingMixin`: Inline segmentation of Text leaves

The assembler (`orger.parsing.assembler`) finishes the tree: parent links,
document properties and plugin processors.

Example:
    >>> from orger.parsing import (
    ...     TokenNavigationMixin,
    ...     InlineParsingMixin,
    ...     BlockParsingMixin,
    ... )
    >>> class Parser(TokenNavigationMixin, InlineParsingMixin, BlockParsingMixin):
    ...     pass

"""

from orger.parsing.blocks import BlockParsingMixin
from orger.parsing.inline import InlineParsingMixin
from orger.parsing.token_nav import TokenNavigationMixin

__all__ = [
    "BlockParsingMixin",
    "InlineParsingMixin",
    "TokenNavigationMixin",
]
