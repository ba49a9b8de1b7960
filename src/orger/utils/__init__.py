"""Utility modules for orger.

Provides:
- text: slugify, escape_html, indent_lines
- logger: get_logger and configure_logging
"""

from orger.utils.logger import configure_logging, get_logger
from orger.utils.text import escape_html, indent_lines, slugify

__all__ = [
    "configure_logging",
    "escape_html",
    "get_logger",
    "indent_lines",
    "slugify",
]
