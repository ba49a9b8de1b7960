"""Block mode scanner mixin."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

from orger.errors import UnterminatedBlockError
from orger.lexer.classifiers.block import COMMENT_END_RE, SRC_END_RE
from orger.lexer.classifiers.drawer import DRAWER_END_RE
from orger.lexer.modes import LexerMode
from orger.tokens import Token, TokenType
from orger.utils.logger import get_logger

if TYPE_CHECKING:
    import re

    from orger.config import ParseConfig

logger = get_logger(__name__)


class BlockScannerMixin:
    """Mixin providing block mode scanning logic.

    Scans one line per call:
    1. Take the current line (always advances)
    2. Try classifiers in priority order (pure logic)
    3. Emit the first match, or a paragraph line

    Bracketed constructs look ahead for their closing line before switching
    mode, so an unterminated block is reported at its opening line.

    """

    _mode: LexerMode
    _config: ParseConfig
    _source_file: str | None

    def _next_line(self) -> tuple[int, str]:
        raise NotImplementedError

    def _calc_indent(self, line: str) -> tuple[int, int]:
        raise NotImplementedError

    def _has_closing_line(self, pattern: re.Pattern[str], *, stop_at_heading: bool) -> bool:
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

    # Classifier methods (provided by classifier mixins)
    def _try_classify_heading(self, line: str, line_start: int) -> Token | None:
        raise NotImplementedError

    def _try_classify_rule(
        self, line: str, line_start: int, indent: int, content_start: int
    ) -> Token | None:
        raise NotImplementedError

    def _try_classify_list_item(
        self, line: str, line_start: int, indent: int, content_start: int
    ) -> Token | None:
        raise NotImplementedError

    def _try_classify_table_line(
        self, line: str, line_start: int, indent: int, content_start: int
    ) -> Token | None:
        raise NotImplementedError

    def _try_classify_src_begin(
        self, line: str, line_start: int, indent: int, content_start: int
    ) -> Token | None:
        raise NotImplementedError

    def _try_classify_comment_begin(
        self, line: str, line_start: int, indent: int, content_start: int
    ) -> Token | None:
        raise NotImplementedError

    def _try_classify_keyword(
        self, line: str, line_start: int, indent: int, content_start: int
    ) -> Token | None:
        raise NotImplementedError

    def _try_classify_comment(
        self, line: str, line_start: int, indent: int, content_start: int
    ) -> Token | None:
        raise NotImplementedError

    def _try_classify_drawer_begin(
        self, line: str, line_start: int, indent: int, content_start: int
    ) -> Token | None:
        raise NotImplementedError

    def _try_classify_footnote_def(self, line: str, line_start: int) -> Token | None:
        raise NotImplementedError

    def _scan_block(self) -> Iterator[Token]:
        """Classify one line in BLOCK mode."""
        line_start, line = self._next_line()
        indent, content_start = self._calc_indent(line)
        config = self._config

        if content_start == len(line):
            yield self._make_token(TokenType.BLANK_LINE, line, line_start, indent, content_start)
            return

        first = line[content_start]
        args = (line, line_start, indent, content_start)

        if indent == 0 and first == "*":
            token = self._try_classify_heading(line, line_start)
            if token is not None:
                yield token
                return

        if first == "-":
            token = self._try_classify_rule(*args)
            if token is not None:
                yield token
                return

        if config.parse_lists:
            token = self._try_classify_list_item(*args)
            if token is not None:
                yield token
                return

        if config.parse_tables and first == "|":
            token = self._try_classify_table_line(*args)
            if token is not None:
                yield token
                return

        if first == "#":
            token = self._scan_hash_line(*args)
            if token is not None:
                yield token
                return

        if config.parse_drawers and first == ":":
            token = self._try_classify_drawer_begin(*args)
            if token is not None:
                if self._has_closing_line(DRAWER_END_RE, stop_at_heading=True):
                    self._mode = LexerMode.DRAWER
                    yield token
                    return
                self._unterminated(token, token.data["name"])

        if config.parse_footnotes and indent == 0 and line.startswith("[fn:"):
            token = self._try_classify_footnote_def(line, line_start)
            if token is not None:
                yield token
                return

        yield self._make_token(
            TokenType.PARAGRAPH_LINE,
            line,
            line_start,
            indent,
            content_start,
            text=line[content_start:],
        )

    def _scan_hash_line(
        self, line: str, line_start: int, indent: int, content_start: int
    ) -> Token | None:
        """Classify a line starting with ``#`` (blocks, keywords, comments)."""
        args = (line, line_start, indent, content_start)

        if self._config.parse_code_blocks:
            token = self._try_classify_src_begin(*args)
            if token is not None:
                if not self._has_closing_line(SRC_END_RE, stop_at_heading=False):
                    raise UnterminatedBlockError(
                        "SRC",
                        lineno=token.lineno,
                        col_offset=token.col,
                        source_file=self._source_file,
                    )
                self._mode = LexerMode.SRC_BLOCK
                return token

        token = self._try_classify_comment_begin(*args)
        if token is not None:
            if self._has_closing_line(COMMENT_END_RE, stop_at_heading=False):
                self._mode = LexerMode.COMMENT_BLOCK
                return token
            self._unterminated(token, "COMMENT")
            return None

        return self._try_classify_keyword(*args) or self._try_classify_comment(*args)

    def _unterminated(self, token: Token, block_name: str) -> None:
        """Raise in strict mode; otherwise let the line fall through to text."""
        if self._config.strict:
            raise UnterminatedBlockError(
                block_name,
                lineno=token.lineno,
                col_offset=token.col,
                source_file=self._source_file,
            )
        logger.debug(
            "Unterminated %s block at line %d treated as text", block_name, token.lineno
        )
