"""Keyword (#+KEY: value) and comment line classifier mixin."""

import re

from orger.tokens import Token, TokenType

_KEYWORD_RE = re.compile(r"^[ \t]*#\+(?P<key>[A-Za-z][\w-]*):(?:[ \t]+(?P<value>.*?))?[ \t]*$")
_COMMENT_RE = re.compile(r"^[ \t]*#(?:[ \t]+(?P<text>.*?))?[ \t]*$")


class KeywordClassifierMixin:
    """Mixin providing keyword and comment line classification."""

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

    def _try_classify_keyword(
        self, line: str, line_start: int, indent: int, content_start: int
    ) -> Token | None:
        """``#+KEY: value`` (the value may be empty)."""
        match = _KEYWORD_RE.match(line)
        if match is None:
            return None
        return self._make_token(
            TokenType.KEYWORD,
            line,
            line_start,
            indent,
            content_start,
            key=match.group("key"),
            value=match.group("value") or "",
        )

    def _try_classify_comment(
        self, line: str, line_start: int, indent: int, content_start: int
    ) -> Token | None:
        """``# text`` or a lone ``#``; ``#foo`` is not a comment."""
        match = _COMMENT_RE.match(line)
        if match is None:
            return None
        return self._make_token(
            TokenType.COMMENT,
            line,
            line_start,
            indent,
            content_start,
            text=match.group("text") or "",
        )
