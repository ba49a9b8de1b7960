"""Token navigation utilities for the orger parser.

Provides mixin for token stream navigation and location building.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from orger.tokens import Token, TokenType

if TYPE_CHECKING:
    from collections.abc import Sequence

    from orger.config import ParseConfig
    from orger.location import SourceLocation


class TokenNavigationMixin:
    """Mixin providing token stream navigation methods.

    Required Host Attributes:
        - _tokens: Sequence[Token]
        - _pos: int
        - _current: Token | None
        - _config: ParseConfig

    """

    _tokens: Sequence[Token]
    _pos: int
    _current: Token | None
    _config: ParseConfig

    def _at_end(self) -> bool:
        """Check if at end of token stream."""
        return self._current is None or self._current.type == TokenType.EOF

    def _advance(self) -> Token | None:
        """Advance to next token and return it."""
        self._pos += 1
        if self._pos < len(self._tokens):
            self._current = self._tokens[self._pos]
        else:
            self._current = None
        return self._current

    def _peek(self, offset: int = 1) -> Token | None:
        """Peek at token at offset from current position."""
        pos = self._pos + offset
        if pos < len(self._tokens):
            return self._tokens[pos]
        return None

    def _at(self, *types: TokenType) -> bool:
        """Whether the current token has one of ``types``."""
        return self._current is not None and self._current.type in types

    def _location(self, first: Token, last: Token | None = None) -> SourceLocation | None:
        """Location spanning ``first``..``last``, or None when disabled."""
        if not self._config.locations:
            return None
        if last is None or last is first:
            return first.location
        return first.location.span_to(last.location)
