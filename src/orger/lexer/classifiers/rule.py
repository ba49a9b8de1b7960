"""Horizontal rule classifier mixin."""

import re

from orger.tokens import Token, TokenType

_RULE_RE = re.compile(r"^[ \t]*-{5,}[ \t]*$")


class RuleClassifierMixin:
    """Mixin providing horizontal rule classification."""

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

    def _try_classify_rule(
        self, line: str, line_start: int, indent: int, content_start: int
    ) -> Token | None:
        """Five or more dashes alone on a line."""
        if not _RULE_RE.match(line):
            return None
        return self._make_token(
            TokenType.HORIZONTAL_RULE, line, line_start, indent, content_start
        )
