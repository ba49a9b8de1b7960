"""Drawer parsing for the orger parser."""

from __future__ import annotations

from orger.nodes import Drawer
from orger.tokens import TokenType


class DrawerParsingMixin:
    """Mixin for ``:NAME:`` ... ``:END:`` drawers.

    ``:KEY: value`` lines fill ``properties`` (later keys win); every other
    line is kept, stripped, in ``contents``.
    """

    def _parse_drawer(self) -> Drawer:
        first = self._current
        assert first is not None
        self._advance()

        properties: dict[str, str] = {}
        contents: list[str] = []
        while self._at(TokenType.DRAWER_LINE):
            token = self._current
            key = token.get("key")
            if key is not None:
                properties[key] = token.data["value"]
            elif token.value.strip():
                contents.append(token.value.strip())
            self._advance()

        last = self._current
        if self._at(TokenType.DRAWER_END):
            self._advance()

        return Drawer(
            location=self._location(first, last),
            name=first.data["name"],
            properties=properties,
            contents="\n".join(contents),
        )
