"""Emphasis, code and verbatim passes.

Passes run in a fixed order: bold, italic, underline, strikethrough, code,
verbatim. Each one only rewrites Text left by the passes before it, so kinds
never nest (``*bold /not italic/*`` keeps the slashes literal).

Spans are also narrower than a bare "delimiter, content, delimiter" match:
the content must start and end with non-whitespace, and neither delimiter
may touch a word character on its outer side. ``x*y*z``, ``snake_case_name``
and ``a * b * c`` therefore stay plain text, as they do in Org itself.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from typing import TypeAlias

from orger.location import SourceLocation
from orger.nodes import (
    Bold,
    Code,
    Italic,
    Markup,
    Node,
    Strikethrough,
    Text,
    Underline,
    Verbatim,
)
from orger.parsing.inline.patterns import emphasis_pattern

InlineBuilder: TypeAlias = Callable[[re.Match[str], SourceLocation | None], Node | None]


def markup_builder(cls: type[Markup]) -> InlineBuilder:
    """Builder wrapping the span content in a single Text child."""

    def build(match: re.Match[str], location: SourceLocation | None) -> Node:
        return cls(
            location=location,
            children=[Text(value=match.group("content"), location=location)],
        )

    return build


def literal_builder(cls: type[Code] | type[Verbatim]) -> InlineBuilder:
    """Builder keeping the span content as a raw ``value``."""

    def build(match: re.Match[str], location: SourceLocation | None) -> Node:
        return cls(location=location, value=match.group("content"))

    return build


EMPHASIS_PASSES: list[tuple[re.Pattern[str], InlineBuilder]] = [
    (emphasis_pattern(Bold.delimiter), markup_builder(Bold)),
    (emphasis_pattern(Italic.delimiter), markup_builder(Italic)),
    (emphasis_pattern(Underline.delimiter), markup_builder(Underline)),
    (emphasis_pattern(Strikethrough.delimiter), markup_builder(Strikethrough)),
    (emphasis_pattern(Code.delimiter), literal_builder(Code)),
    (emphasis_pattern(Verbatim.delimiter), literal_builder(Verbatim)),
]
