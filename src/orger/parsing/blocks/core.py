"""Core block parsing for the orger parser.

Provides block dispatch, heading nesting and the simple blocks (paragraphs,
rules, comments).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from orger.errors import GrammarError
from orger.nodes import Comment, Heading, HorizontalRule, Node, Paragraph, Text
from orger.tokens import Token, TokenType
from orger.utils.logger import get_logger

if TYPE_CHECKING:
    from orger.config import ParseConfig
    from orger.location import SourceLocation

logger = get_logger(__name__)


def text_children(value: str, location: SourceLocation | None) -> list[Node]:
    """A single Text child, or no children for empty text."""
    return [Text(value=value, location=location)] if value else []


class BlockParsingCoreMixin:
    """Core block parsing methods.

    Required Host Attributes:
        - _current: Token | None
        - _pos: int
        - _config: ParseConfig
        - _keywords: list[tuple[str, str]]
        - _source_file: str | None

    Required Host Methods:
        - _at_end() -> bool
        - _advance() -> Token | None
        - _at(*types) -> bool
        - _location(first, last) -> SourceLocation | None
        - _parse_list() -> List
        - _parse_table() -> Table
        - _parse_code_block() -> CodeBlock
        - _parse_drawer() -> Drawer
        - _parse_footnote_def() -> Footnote

    """

    # Required host attributes (documented, not declared, to avoid override conflicts)
    # _current: Token | None
    # _pos: int
    # _config: ParseConfig
    # _keywords: list[tuple[str, str]]
    # _source_file: str | None

    def _parse_blocks(self, max_level: int = 0) -> list[Node]:
        """Parse blocks until EOF or a heading that closes the current section.

        Args:
            max_level: Stop at a heading whose level is <= this (0 = never)

        Raises:
            GrammarError: A block parser failed to consume any token
        """
        blocks: list[Node] = []
        while not self._at_end():
            token = self._current
            assert token is not None
            if (
                max_level
                and token.type == TokenType.HEADING
                and token.data["level"] <= max_level
            ):
                break

            start = self._pos
            block = self._parse_block()
            if self._pos == start:
                raise GrammarError(
                    f"Parser made no progress at {token.type.name}",
                    lineno=token.lineno,
                    col_offset=token.col,
                    source_file=self._source_file,
                )
            if block is not None:
                blocks.append(block)
        return blocks

    def _parse_block(self) -> Node | None:
        """Parse a single block element (None for lines producing no node)."""
        token = self._current
        assert token is not None

        match token.type:
            case TokenType.BLANK_LINE:
                self._advance()
                return None

            case TokenType.HEADING:
                return self._parse_heading()

            case TokenType.HORIZONTAL_RULE:
                self._advance()
                return HorizontalRule(location=self._location(token))

            case TokenType.LIST_ITEM:
                return self._parse_list()

            case TokenType.TABLE_ROW | TokenType.TABLE_RULE:
                return self._parse_table()

            case TokenType.SRC_BEGIN:
                return self._parse_code_block()

            case TokenType.COMMENT_BLOCK_BEGIN:
                return self._parse_comment_block()

            case TokenType.COMMENT:
                return self._parse_comment_lines()

            case TokenType.KEYWORD:
                self._keywords.append((token.data["key"], token.data["value"]))
                self._advance()
                return None

            case TokenType.DRAWER_BEGIN:
                return self._parse_drawer()

            case TokenType.FOOTNOTE_DEF:
                return self._parse_footnote_def()

            case TokenType.PARAGRAPH_LINE:
                return self._parse_paragraph()

            case _:
                return None

    def _parse_heading(self) -> Heading:
        """Parse a heading and its section.

        The section runs until the next heading of the same or a lower level,
        so a heading nests under the nearest preceding heading with a
        smaller level.
        """
        token = self._current
        assert token is not None
        self._advance()

        location = self._location(token)
        level = token.data["level"]
        title = token.data["title"]
        heading = Heading(
            location=location,
            level=level,
            title=title,
            todo_keyword=token.data["todo_keyword"],
            priority=token.data["priority"],
            tags=list(token.data["tags"]),
            title_nodes=text_children(title, location),
        )
        heading.extend_children(self._parse_blocks(max_level=level))
        return heading

    def _parse_paragraph(self) -> Paragraph:
        """Consecutive paragraph lines, each left-trimmed, joined with newlines."""
        first = self._current
        assert first is not None
        last = first
        lines: list[str] = []
        while self._at(TokenType.PARAGRAPH_LINE):
            last = self._current
            assert last is not None
            lines.append(last.data["text"])
            self._advance()

        location = self._location(first, last)
        return Paragraph(location=location, children=text_children("\n".join(lines), location))

    def _parse_comment_lines(self) -> Comment | None:
        """Consecutive ``# text`` lines as one Comment."""
        first = self._current
        assert first is not None
        last = first
        lines: list[str] = []
        while self._at(TokenType.COMMENT):
            last = self._current
            assert last is not None
            lines.append(last.data["text"])
            self._advance()

        if not self._config.preserve_comments:
            return None
        return Comment(location=self._location(first, last), value="\n".join(lines))

    def _parse_comment_block(self) -> Comment | None:
        """``#+BEGIN_COMMENT`` ... ``#+END_COMMENT`` with raw content."""
        first = self._current
        assert first is not None
        self._advance()

        lines: list[str] = []
        while self._at(TokenType.COMMENT_BLOCK_LINE):
            lines.append(self._current.value)  # type: ignore[union-attr]
            self._advance()

        last = self._current
        if self._at(TokenType.COMMENT_BLOCK_END):
            self._advance()

        if not self._config.preserve_comments:
            return None
        return Comment(
            location=self._location(first, last),
            value="\n".join(lines),
            is_block=True,
        )
