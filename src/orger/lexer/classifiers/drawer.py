"""Drawer classifier mixin."""

from __future__ import annotations

import re

from orger.tokens import Token, TokenType

DRAWER_BEGIN_RE = re.compile(r"^[ \t]*:(?P<name>[\w-]+):[ \t]*$")
DRAWER_END_RE = re.compile(r"^[ \t]*:END:[ \t]*$", re.IGNORECASE)
_PROPERTY_RE = re.compile(r"^[ \t]*:(?P<key>[^:\s]+):(?:[ \t]+(?P<value>.*?))?[ \t]*$")


class DrawerClassifierMixin:
    """Mixin providing drawer line classification."""

    def _make_token(
        self,
        token_type: TokenType,
        line: str,
        line_start: int,
        indent: int = 0,
        content_start: int = 0,
        **data: object,
    ) -> Token:
        raise NotImplementedError

    def _try_classify_drawer_begin(
        self, line: str, line_start: int, indent: int, content_start: int
    ) -> Token | None:
        """``:NAME:`` alone on a line (``:END:`` never opens a drawer)."""
        match = DRAWER_BEGIN_RE.match(line)
        if match is None or match.group("name").upper() == "END":
            return None
        return self._make_token(
            TokenType.DRAWER_BEGIN,
            line,
            line_start,
            indent,
            content_start,
            name=match.group("name"),
        )

    def _classify_drawer_line(
        self, line: str, line_start: int, indent: int, content_start: int
    ) -> Token:
        """A line inside a drawer; ``:KEY: value`` lines carry key and value."""
        match = _PROPERTY_RE.match(line)
        if match is None:
            return self._make_token(
                TokenType.DRAWER_LINE, line, line_start, indent, content_start
            )
        return self._make_token(
            TokenType.DRAWER_LINE,
            line,
            line_start,
            indent,
            content_start,
            key=match.group("key"),
            value=match.group("value") or "",
        )
