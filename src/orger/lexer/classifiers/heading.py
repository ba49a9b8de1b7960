"""Heading classifier mixin.

The heading rule depends on the configured TODO keywords, so its pattern is
compiled once per Parser by :func:`build_heading_pattern`.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from orger.errors import GrammarError
from orger.tokens import Token, TokenType

# Trailing :tag1:tag2: run, separated from the title by whitespace
_TAGS_RE = re.compile(r"(?:^|[ \t]+)(:(?:[\w@#%]+:)+)[ \t]*$")


def build_heading_pattern(todo_keywords: Iterable[str]) -> re.Pattern[str]:
    """Compile the heading line pattern for a set of TODO keywords.

    Longer keywords are tried first so ``DONE`` never shadows ``DONE-ISH``.

    Raises:
        GrammarError: A keyword is empty or contains whitespace
    """
    keywords = sorted(set(todo_keywords), key=lambda k: (-len(k), k))
    for keyword in keywords:
        if not keyword or any(c.isspace() for c in keyword):
            raise GrammarError(f"Invalid TODO keyword: {keyword!r}")

    todo_part = ""
    if keywords:
        alternatives = "|".join(re.escape(k) for k in keywords)
        todo_part = rf"(?:(?P<todo>{alternatives})(?=[ \t]|$)[ \t]*)?"

    return re.compile(
        rf"^(?P<stars>\*+)[ \t]+{todo_part}"
        r"(?:\[#(?P<priority>[A-Za-z0-9])\](?=[ \t]|$)[ \t]*)?"
        r"(?P<rest>.*)$"
    )


class HeadingClassifierMixin:
    """Mixin providing heading classification."""

    _heading_re: re.Pattern[str]

    def _make_token(
        self,
        token_type: TokenType,
        line: str,
        line_start: int,
        indent: int = 0,
        content_start: int = 0,
        **data: object,
    ) -> Token:
        """Create token for the current line. Implemented by Lexer."""
        raise NotImplementedError

    def _try_classify_heading(self, line: str, line_start: int) -> Token | None:
        """Try to classify a line as a heading.

        Headings start at column 0 with one or more ``*`` followed by
        whitespace. A configured TODO keyword, a ``[#A]`` priority and a
        trailing ``:tag:`` run are split off the title.

        Returns:
            HEADING token if the line is a heading, None otherwise.
        """
        match = self._heading_re.match(line)
        if match is None:
            return None

        rest = match.group("rest")
        tags: list[str] = []
        tag_match = _TAGS_RE.search(rest)
        if tag_match is not None:
            tags = [tag for tag in tag_match.group(1).split(":") if tag]
            rest = rest[: tag_match.start()]

        return self._make_token(
            TokenType.HEADING,
            line,
            line_start,
            level=len(match.group("stars")),
            todo_keyword=match.groupdict().get("todo"),
            priority=match.group("priority"),
            title=rest.strip(),
            tags=tags,
        )
