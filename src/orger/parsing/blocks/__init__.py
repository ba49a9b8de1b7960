"""Block parsing subsystem for the orger parser.

Provides mixins for parsing block-level Org content:
- Headings and section nesting
- Paragraphs, rules and comments
- Lists (ordered, unordered, descriptive, checkboxes)
- Tables
- Source blocks
- Drawers
- Footnote definitions

"""

from orger.parsing.blocks.code import CodeBlockParsingMixin
from orger.parsing.blocks.core import BlockParsingCoreMixin
from orger.parsing.blocks.drawer import DrawerParsingMixin
from orger.parsing.blocks.footnote import FootnoteParsingMixin
from orger.parsing.blocks.list import ListParsingMixin
from orger.parsing.blocks.table import TableParsingMixin


class BlockParsingMixin(
    BlockParsingCoreMixin,
    ListParsingMixin,
    TableParsingMixin,
    CodeBlockParsingMixin,
    DrawerParsingMixin,
    FootnoteParsingMixin,
):
    """Combined block parsing mixin.

    Combines all block parsing functionality into a single mixin
    that can be inherited by the Parser class.

    Required Host Attributes:
        - _current: Token | None
        - _pos: int
        - _config: ParseConfig
        - _keywords: list[tuple[str, str]]
        - _source_file: str | None

    Required Host Methods:
        - _at_end() -> bool
        - _advance() -> Token | None
        - _at(*types) -> bool
        - _location(first, last) -> SourceLocation | None

    """


__all__ = [
    "BlockParsingCoreMixin",
    "BlockParsingMixin",
    "CodeBlockParsingMixin",
    "DrawerParsingMixin",
    "FootnoteParsingMixin",
    "ListParsingMixin",
    "TableParsingMixin",
]
