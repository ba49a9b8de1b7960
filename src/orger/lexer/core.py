"""Line-oriented state-machine lexer.

Each call to a mode scanner consumes exactly one physical line and emits
exactly one Token, so the token stream has one entry per line plus EOF and
lexing always makes forward progress.

Thread Safety:
Lexer instances are single-use. Create one per source string.
All state is instance-local; no shared mutable state.

"""

from __future__ import annotations

import re
from collections.abc import Iterator

from orger.config import ParseConfig, get_parse_config
from orger.errors import GrammarError
from orger.lexer.classifiers import (
    BlockClassifierMixin,
    DrawerClassifierMixin,
    FootnoteClassifierMixin,
    HeadingClassifierMixin,
    KeywordClassifierMixin,
    ListClassifierMixin,
    RuleClassifierMixin,
    TableClassifierMixin,
    build_heading_pattern,
)
from orger.lexer.modes import LexerMode
from orger.lexer.scanners import BlockScannerMixin, BracketedScannerMixin
from orger.tokens import Token, TokenType


class Lexer(
    # Classifiers (pure logic, no position mutation)
    HeadingClassifierMixin,
    RuleClassifierMixin,
    ListClassifierMixin,
    TableClassifierMixin,
    BlockClassifierMixin,
    KeywordClassifierMixin,
    DrawerClassifierMixin,
    FootnoteClassifierMixin,
    # Scanners (mode-specific scanning logic)
    BlockScannerMixin,
    BracketedScannerMixin,
):
    """Line classifier producing one Token per source line.

    Usage:
        >>> lexer = Lexer("* Hello\\n\\nWorld")
        >>> for token in lexer.tokenize():
        ...     print(token)
        Token(HEADING, '* Hello', 1:1)
        Token(BLANK_LINE, '', 2:1)
        Token(PARAGRAPH_LINE, 'World', 3:1)
        Token(EOF, '', 3:1)

    """

    __slots__ = (
        "_source",
        "_source_len",
        "_pos",
        "_lineno",
        "_mode",
        "_source_file",
        "_config",
        "_heading_re",
        "_saved_lineno",
    )

    def __init__(
        self,
        source: str,
        source_file: str | None = None,
        config: ParseConfig | None = None,
        heading_re: re.Pattern[str] | None = None,
    ) -> None:
        """Initialize lexer with source text.

        Args:
            source: Org source text (newlines already normalized to ``\\n``)
            source_file: Optional source file path for error messages
            config: Parse configuration (defaults to the active ContextVar config)
            heading_re: Precompiled heading pattern; built from the config's
                TODO keywords when omitted
        """
        self._source = source
        self._source_len = len(source)
        self._pos = 0
        self._lineno = 1
        self._mode = LexerMode.BLOCK
        self._source_file = source_file
        self._config = config if config is not None else get_parse_config()
        self._heading_re = heading_re or build_heading_pattern(self._config.todo_keywords)
        self._saved_lineno = 1

    def tokenize(self) -> Iterator[Token]:
        """Tokenize source into a token stream.

        Yields:
            One Token per line, then EOF

        Raises:
            UnterminatedBlockError: A source block (or, in strict mode, a
                comment block or drawer) is never closed
        """
        while self._pos < self._source_len:
            before = self._pos
            yield from self._dispatch_mode()
            if self._pos <= before:
                raise GrammarError(
                    "Lexer made no progress",
                    lineno=self._lineno,
                    source_file=self._source_file,
                )

        yield Token(
            type=TokenType.EOF,
            value="",
            _lineno=self._lineno,
            _col=1,
            _start_offset=self._pos,
            _end_offset=self._pos,
            _source_file=self._source_file,
        )

    def _dispatch_mode(self) -> Iterator[Token]:
        """Dispatch to the scanner for the current mode."""
        if self._mode == LexerMode.BLOCK:
            yield from self._scan_block()
        elif self._mode == LexerMode.SRC_BLOCK:
            yield from self._scan_src_content()
        elif self._mode == LexerMode.COMMENT_BLOCK:
            yield from self._scan_comment_block_content()
        elif self._mode == LexerMode.DRAWER:
            yield from self._scan_drawer_content()

    # =========================================================================
    # Line navigation helpers
    # =========================================================================

    def _find_line_end(self, pos: int) -> int:
        """Position of the next \\n at or after pos, or end of source."""
        idx = self._source.find("\n", pos)
        return idx if idx != -1 else self._source_len

    def _next_line(self) -> tuple[int, str]:
        """Consume the current line (and its newline).

        Returns:
            (line_start, line) with the newline excluded
        """
        self._saved_lineno = self._lineno
        line_start = self._pos
        line_end = self._find_line_end(line_start)
        self._pos = line_end
        if self._pos < self._source_len:
            self._pos += 1
            self._lineno += 1
        return line_start, self._source[line_start:line_end]

    def _calc_indent(self, line: str) -> tuple[int, int]:
        """Calculate indent level and content start position.

        Spaces count as 1, tabs expand to next multiple of 4.

        Returns:
            (indent_spaces, content_start_index)
        """
        indent = 0
        pos = 0
        line_len = len(line)
        while pos < line_len:
            char = line[pos]
            if char == " ":
                indent += 1
            elif char == "\t":
                indent += 4 - (indent % 4)
            else:
                break
            pos += 1
        return indent, pos

    def _has_closing_line(self, pattern: re.Pattern[str], *, stop_at_heading: bool) -> bool:
        """Look ahead (without consuming) for a line matching ``pattern``.

        Args:
            pattern: Closing line pattern
            stop_at_heading: Give up at the next heading line
        """
        pos = self._pos
        while pos < self._source_len:
            end = self._find_line_end(pos)
            line = self._source[pos:end]
            if pattern.match(line):
                return True
            if stop_at_heading and self._heading_re.match(line):
                return False
            pos = end + 1
        return False

    def _make_token(
        self,
        token_type: TokenType,
        line: str,
        line_start: int,
        indent: int = 0,
        content_start: int = 0,
        **data: object,
    ) -> Token:
        """Create a Token for the line most recently taken by _next_line."""
        return Token(
            type=token_type,
            value=line,
            _lineno=self._saved_lineno,
            _col=content_start + 1,
            _start_offset=line_start,
            _end_offset=line_start + len(line),
            line_indent=indent,
            data=data,
            _source_file=self._source_file,
        )
