"""Bracketed block classifier mixin (#+BEGIN_SRC, #+BEGIN_COMMENT).

Begin and end markers are matched case-insensitively.
"""

from __future__ import annotations

import re

from orger.tokens import Token, TokenType
from orger.utils.logger import get_logger

logger = get_logger(__name__)

SRC_BEGIN_RE = re.compile(r"^[ \t]*#\+begin_src(?:[ \t]+(?P<args>.*?))?[ \t]*$", re.IGNORECASE)
SRC_END_RE = re.compile(r"^[ \t]*#\+end_src[ \t]*$", re.IGNORECASE)
COMMENT_BEGIN_RE = re.compile(r"^[ \t]*#\+begin_comment(?:[ \t].*)?$", re.IGNORECASE)
COMMENT_END_RE = re.compile(r"^[ \t]*#\+end_comment[ \t]*$", re.IGNORECASE)


def parse_src_args(args: str) -> tuple[str | None, dict[str, str]]:
    """Split ``python :results output :exports both`` into language and params.

    A ``:key`` starts a parameter; the words up to the next ``:key`` are its
    value (empty when there are none).

    Examples:
        >>> parse_src_args("python :results output")
        ('python', {'results': 'output'})
    """
    words = args.split()
    language = None
    if words and not words[0].startswith(":"):
        language = words.pop(0)

    params: dict[str, str] = {}
    key: str | None = None
    for word in words:
        if word.startswith(":") and len(word) > 1:
            key = word[1:]
            params[key] = ""
        elif key is not None:
            params[key] = f"{params[key]} {word}" if params[key] else word
        else:
            logger.debug("Ignoring source block switch %r", word)
    return language, params


class BlockClassifierMixin:
    """Mixin providing #+BEGIN_SRC / #+BEGIN_COMMENT classification."""

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

    def _try_classify_src_begin(
        self, line: str, line_start: int, indent: int, content_start: int
    ) -> Token | None:
        """Opening line of a source block, with language and params."""
        match = SRC_BEGIN_RE.match(line)
        if match is None:
            return None
        language, params = parse_src_args(match.group("args") or "")
        return self._make_token(
            TokenType.SRC_BEGIN,
            line,
            line_start,
            indent,
            content_start,
            language=language,
            params=params,
        )

    def _try_classify_comment_begin(
        self, line: str, line_start: int, indent: int, content_start: int
    ) -> Token | None:
        """Opening line of a comment block."""
        if not COMMENT_BEGIN_RE.match(line):
            return None
        return self._make_token(
            TokenType.COMMENT_BLOCK_BEGIN, line, line_start, indent, content_start
        )
