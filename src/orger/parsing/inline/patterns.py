"""Regular expressions for the inline segmentation passes.

Every pattern matches within a single line of text: no span may contain a
newline, so a paragraph's line structure never affects inline markup.
"""

import re

# [[url][description]] / [[url]], or a bare URL with trailing punctuation left out
LINK_RE = re.compile(
    r"\[\[(?P<url>[^\[\]\n]+)\](?:\[(?P<desc>[^\[\]\n]+)\])?\]"
    r"|(?<![\w/])(?P<bare>(?:(?:https?|ftp)://|mailto:)[^\s<>\[\]]*[^\s<>\[\].,;:!?'\")])"
)

FOOTNOTE_REF_RE = re.compile(r"\[fn:(?P<label>[\w-]+)\]")

# <2024-01-15 Mon 10:00-11:30 +1w -2d> or [2024-01-15 Mon]
TIMESTAMP_RE = re.compile(
    r"(?P<open>[<\[])"
    r"(?P<date>\d{4}-\d{2}-\d{2})"
    r"(?:[ \t]+(?P<day>[^\s\d<>\[\]+-]+))?"
    r"(?:[ \t]+(?P<time>\d{1,2}:\d{2})(?:-(?P<end_time>\d{1,2}:\d{2}))?)?"
    r"(?:[ \t]+(?P<repeater>(?:\.\+|\+\+|\+)\d+[hdwmy]))?"
    r"(?:[ \t]+(?P<warning>--?\d+[hdwmy]))?"
    r"(?P<close>[>\]])"
)


def emphasis_pattern(delimiter: str) -> re.Pattern[str]:
    """Paired-delimiter span pattern.

    Content is non-empty, holds neither the delimiter nor a newline, and
    starts and ends with a non-whitespace character. The delimiters may not
    touch a word character on the outside, so ``snake_case_name`` and
    ``a/b/c`` stay plain text.
    """
    d = re.escape(delimiter)
    return re.compile(rf"(?<!\w){d}(?P<content>[^\s{d}](?:[^{d}\n]*[^\s{d}])?){d}(?!\w)")
