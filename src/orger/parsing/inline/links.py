"""Link and footnote reference passes."""

from __future__ import annotations

import re

from orger.location import SourceLocation
from orger.nodes import FootnoteRef, Link


def build_link(match: re.Match[str], location: SourceLocation | None) -> Link:
    """Link from ``[[url][desc]]``, ``[[url]]`` or a bare URL.

    The description defaults to the url.
    """
    bare = match.group("bare")
    if bare is not None:
        return Link(location=location, url=bare)
    description = match.group("desc")
    return Link(
        location=location,
        url=match.group("url").strip(),
        description=description.strip() if description else None,
    )


def build_footnote_ref(match: re.Match[str], location: SourceLocation | None) -> FootnoteRef:
    return FootnoteRef(location=location, label=match.group("label"))
