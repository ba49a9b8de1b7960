"""List item classifier mixin."""

from __future__ import annotations

import re

from orger.tokens import Token, TokenType

# Marker must be followed by whitespace, so +strike+ is never an item
_ITEM_RE = re.compile(r"^[ \t]*(?P<bullet>[-+*]|\d+[.)])[ \t]+(?P<rest>.*)$")
_CHECKBOX_RE = re.compile(r"^\[(?P<box>[ xX-])\](?:[ \t]+|$)")
_TERM_RE = re.compile(r"^(?P<term>.*?\S)[ \t]+::(?:[ \t]+(?P<text>.*)|[ \t]*)$")

_CHECKBOX_STATES = {" ": "unchecked", "x": "checked", "X": "checked", "-": "partial"}


class ListClassifierMixin:
    """Mixin providing list item classification."""

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

    def _try_classify_list_item(
        self, line: str, line_start: int, indent: int, content_start: int
    ) -> Token | None:
        """Try to classify a line as a list item.

        Markers are ``-``, ``+``, ``1.`` or ``1)``; ``*`` only counts when
        indented (at column 0 it starts a heading). An optional checkbox and
        an optional ``term ::`` follow the marker.

        Returns:
            LIST_ITEM token with ``bullet``, ``ordered``, ``checkbox``,
            ``term`` and ``text`` fields, or None.
        """
        match = _ITEM_RE.match(line)
        if match is None:
            return None
        bullet = match.group("bullet")
        if bullet == "*" and indent == 0:
            return None

        rest = match.group("rest")
        checkbox = None
        box_match = _CHECKBOX_RE.match(rest)
        if box_match is not None:
            checkbox = _CHECKBOX_STATES[box_match.group("box")]
            rest = rest[box_match.end() :]

        term = None
        term_match = _TERM_RE.match(rest)
        if term_match is not None:
            term = term_match.group("term")
            rest = term_match.group("text") or ""

        return self._make_token(
            TokenType.LIST_ITEM,
            line,
            line_start,
            indent,
            content_start,
            bullet=bullet,
            ordered=bullet[0].isdigit(),
            checkbox=checkbox,
            term=term,
            text=rest.strip(),
        )
