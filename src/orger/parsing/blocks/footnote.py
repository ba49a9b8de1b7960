"""Footnote definition parsing for the orger parser."""

from __future__ import annotations

from orger.nodes import Footnote
from orger.parsing.blocks.core import text_children
from orger.tokens import TokenType


class FootnoteParsingMixin:
    """Mixin for footnote definitions.

    ``[fn:label] text`` at column 0; the paragraph lines directly below it
    continue the definition.
    """

    def _parse_footnote_def(self) -> Footnote:
        first = self._current
        assert first is not None
        self._advance()

        last = first
        lines = [first.data["text"]] if first.data["text"] else []
        while self._at(TokenType.PARAGRAPH_LINE):
            last = self._current
            lines.append(last.data["text"])
            self._advance()

        location = self._location(first, last)
        return Footnote(
            location=location,
            label=first.data["label"],
            children=text_children("\n".join(lines), location),
        )
