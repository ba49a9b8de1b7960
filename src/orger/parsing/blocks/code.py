"""Source block parsing for the orger parser."""

from __future__ import annotations

from orger.nodes import CodeBlock
from orger.tokens import TokenType


class CodeBlockParsingMixin:
    """Mixin for ``#+BEGIN_SRC`` blocks.

    The lexer has already verified that the block is closed, so the content
    lines always end at a SRC_END token. Content is kept verbatim and never
    inline-processed.
    """

    def _parse_code_block(self) -> CodeBlock:
        first = self._current
        assert first is not None
        self._advance()

        lines: list[str] = []
        while self._at(TokenType.SRC_LINE):
            lines.append(self._current.value)
            self._advance()

        last = self._current
        if self._at(TokenType.SRC_END):
            self._advance()

        return CodeBlock(
            location=self._location(first, last),
            language=first.data["language"],
            params=dict(first.data["params"]),
            value="\n".join(lines),
        )
