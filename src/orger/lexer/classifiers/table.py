"""Table row classifier mixin."""

import re

from orger.tokens import Token, TokenType

_RULE_RE = re.compile(r"^[ \t]*\|[ \t]*-[-+|: \t]*$")


def split_cells(content: str) -> list[str]:
    """Split ``| a | b |`` into stripped cell strings.

    The trailing pipe is optional.
    """
    body = content.strip()[1:]
    if body.endswith("|"):
        body = body[:-1]
    return [cell.strip() for cell in body.split("|")]


class TableClassifierMixin:
    """Mixin providing table line classification."""

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

    def _try_classify_table_line(
        self, line: str, line_start: int, indent: int, content_start: int
    ) -> Token | None:
        """Classify ``|``-prefixed lines as a rule line or a row of cells."""
        if not line[content_start:].startswith("|"):
            return None
        if _RULE_RE.match(line):
            return self._make_token(
                TokenType.TABLE_RULE, line, line_start, indent, content_start
            )
        return self._make_token(
            TokenType.TABLE_ROW,
            line,
            line_start,
            indent,
            content_start,
            cells=split_cells(line[content_start:]),
        )
