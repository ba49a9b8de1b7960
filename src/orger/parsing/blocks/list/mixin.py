"""List parsing mixin for the orger parser."""

from __future__ import annotations

from orger.nodes import List, ListItem
from orger.parsing.blocks.core import text_children
from orger.parsing.blocks.list.reconstruct import build_list
from orger.tokens import Token, TokenType
from orger.utils.logger import get_logger

logger = get_logger(__name__)


class ListParsingMixin:
    """Mixin for list parsing.

    Collects one run of consecutive list item lines (plus indented
    continuation lines), then rebuilds the nesting from indentation.

    Required Host Methods:
        - _at(*types) -> bool
        - _advance() -> Token | None
        - _location(first, last) -> SourceLocation | None

    """

    def _parse_list(self) -> List:
        first = self._current
        assert first is not None

        items: list[tuple[Token, list[str]]] = []
        last = first
        while True:
            token = self._current
            if self._at(TokenType.LIST_ITEM):
                items.append((token, [token.data["text"]] if token.data["text"] else []))
            elif (
                self._at(TokenType.PARAGRAPH_LINE)
                and token.line_indent > items[-1][0].line_indent
            ):
                # Continuation of the previous item's text
                items[-1][1].append(token.data["text"])
            else:
                break
            last = token
            self._advance()

        records: list[tuple[int, ListItem]] = []
        for token, lines in items:
            location = self._location(token)
            item = ListItem(
                location=location,
                bullet=token.data["bullet"],
                ordered=token.data["ordered"],
                checkbox=token.data["checkbox"],
                term=token.data["term"],
                children=text_children("\n".join(lines), location),
            )
            records.append((token.line_indent, item))

        logger.debug("Reconstructing list of %d items at line %d", len(records), first.lineno)
        return build_list(records, self._location(first, last))
