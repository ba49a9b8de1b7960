"""Footnote definition classifier mixin."""

import re

from orger.tokens import Token, TokenType

_FOOTNOTE_DEF_RE = re.compile(r"^\[fn:(?P<label>[\w-]+)\](?:[ \t]+(?P<text>.*?))?[ \t]*$")


class FootnoteClassifierMixin:
    """Mixin providing footnote definition classification."""

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

    def _try_classify_footnote_def(self, line: str, line_start: int) -> Token | None:
        """Try to classify a line as a footnote definition.

        Format: ``[fn:label] text`` starting at column 0.

        Returns:
            FOOTNOTE_DEF token with ``label`` and ``text`` fields, or None.
        """
        match = _FOOTNOTE_DEF_RE.match(line)
        if match is None:
            return None
        return self._make_token(
            TokenType.FOOTNOTE_DEF,
            line,
            line_start,
            label=match.group("label"),
            text=match.group("text") or "",
        )
