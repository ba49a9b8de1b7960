"""Table parsing for the orger parser.

The row directly above the first rule line is the header row. Rule lines
themselves produce no nodes. Short rows are padded with empty cells so every
row has the width of the widest one.
"""

from __future__ import annotations

from orger.nodes import Table, TableCell, TableRow
from orger.parsing.blocks.core import text_children
from orger.tokens import Token, TokenType
from orger.utils.logger import get_logger

logger = get_logger(__name__)


class TableParsingMixin:
    """Mixin for table parsing.

    Required Host Methods:
        - _at(*types) -> bool
        - _advance() -> Token | None
        - _location(first, last) -> SourceLocation | None

    """

    def _parse_table(self) -> Table:
        """Parse consecutive table row and rule lines."""
        first = self._current
        assert first is not None
        rows: list[Token] = []
        header_index: int | None = None
        seen_rule = False
        last = first

        while self._at(TokenType.TABLE_ROW, TokenType.TABLE_RULE):
            token = self._current
            assert token is not None
            last = token
            if token.type == TokenType.TABLE_RULE:
                if not seen_rule and rows:
                    header_index = len(rows) - 1
                seen_rule = True
            else:
                rows.append(token)
            self._advance()

        width = max((len(row.data["cells"]) for row in rows), default=0)
        table = Table(location=self._location(first, last))
        for index, token in enumerate(rows):
            cells: list[str] = list(token.data["cells"])
            if len(cells) < width:
                logger.debug(
                    "Padding table row at line %d from %d to %d cells",
                    token.lineno,
                    len(cells),
                    width,
                )
                cells.extend([""] * (width - len(cells)))

            is_header = index == header_index
            location = self._location(token)
            table.append_child(
                TableRow(
                    location=location,
                    is_header=is_header,
                    children=[
                        TableCell(
                            location=location,
                            is_header=is_header,
                            children=text_children(cell, location),
                        )
                        for cell in cells
                    ],
                )
            )
        return table
