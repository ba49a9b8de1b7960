"""Scanners for the inside of bracketed blocks.

Each scanner emits raw content lines until the block's closing line, then
returns the lexer to BLOCK mode. The opening scanner has already verified
that a closing line exists.
"""

from __future__ import annotations

from collections.abc import Iterator

from orger.lexer.classifiers.block import COMMENT_END_RE, SRC_END_RE
from orger.lexer.classifiers.drawer import DRAWER_END_RE
from orger.lexer.modes import LexerMode
from orger.tokens import Token, TokenType


class BracketedScannerMixin:
    """Mixin providing SRC_BLOCK, COMMENT_BLOCK and DRAWER mode scanning."""

    _mode: LexerMode

    def _next_line(self) -> tuple[int, str]:
        raise NotImplementedError

    def _calc_indent(self, line: str) -> tuple[int, int]:
        raise NotImplementedError

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

    def _classify_drawer_line(
        self, line: str, line_start: int, indent: int, content_start: int
    ) -> Token:
        raise NotImplementedError

    def _scan_src_content(self) -> Iterator[Token]:
        """Raw source line, or the #+END_SRC line."""
        line_start, line = self._next_line()
        indent, content_start = self._calc_indent(line)
        if SRC_END_RE.match(line):
            self._mode = LexerMode.BLOCK
            yield self._make_token(TokenType.SRC_END, line, line_start, indent, content_start)
            return
        yield self._make_token(TokenType.SRC_LINE, line, line_start, indent, content_start)

    def _scan_comment_block_content(self) -> Iterator[Token]:
        """Raw comment line, or the #+END_COMMENT line."""
        line_start, line = self._next_line()
        indent, content_start = self._calc_indent(line)
        if COMMENT_END_RE.match(line):
            self._mode = LexerMode.BLOCK
            yield self._make_token(
                TokenType.COMMENT_BLOCK_END, line, line_start, indent, content_start
            )
            return
        yield self._make_token(
            TokenType.COMMENT_BLOCK_LINE, line, line_start, indent, content_start
        )

    def _scan_drawer_content(self) -> Iterator[Token]:
        """Drawer line, or the :END: line."""
        line_start, line = self._next_line()
        indent, content_start = self._calc_indent(line)
        if DRAWER_END_RE.match(line):
            self._mode = LexerMode.BLOCK
            yield self._make_token(TokenType.DRAWER_END, line, line_start, indent, content_start)
            return
        yield self._classify_drawer_line(line, line_start, indent, content_start)
