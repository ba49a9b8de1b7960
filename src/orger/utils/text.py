"""Text processing utilities for orger.

Example:
    >>> from orger.utils.text import slugify
    >>> slugify("Hello World!")
    'hello-world'
"""

from __future__ import annotations

import html as html_module
import re


def slugify(text: str, separator: str = "-") -> str:
    """Convert text to a URL-safe slug with Unicode support.

    Used for heading anchors and footnote ids in the HTML renderer.

    Args:
        text: Text to slugify
        separator: Character to use between words (default: '-')

    Returns:
        Lowercase slug with Unicode word chars and separators

    Examples:
        >>> slugify("Hello World!")
        'hello-world'
        >>> slugify("Test & Code")
        'test-code'
        >>> slugify("Café")
        'café'
    """
    if not text:
        return ""

    text = html_module.unescape(text).lower().strip()
    text = re.sub(r"[^\w\s-]", "", text)
    text = re.sub(r"[-\s]+", separator, text)
    return text.strip(separator)


def escape_html(text: str) -> str:
    """Escape HTML special characters, including both quote kinds.

    Args:
        text: Text to escape

    Returns:
        Escaped text safe for element content and attribute values

    Examples:
        >>> escape_html("<a href='x'>")
        '&lt;a href=&#x27;x&#x27;&gt;'
    """
    return html_module.escape(text, quote=True)


def indent_lines(text: str, width: int) -> str:
    """Prefix every non-empty line after the first with ``width`` spaces.

    Used by the tree renderers to re-indent multi-line item text.

    Examples:
        >>> indent_lines("a\\nb", 2)
        'a\\n  b'
    """
    if "\n" not in text:
        return text
    pad = " " * width
    first, *rest = text.split("\n")
    return "\n".join([first, *(pad + line if line else line for line in rest)])
