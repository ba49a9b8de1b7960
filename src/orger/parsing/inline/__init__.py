"""Inline segmentation subsystem for the orger parser.

- core: pass machinery and the InlineParsingMixin
- patterns: span regular expressions
- emphasis / links / special: node builders per pass
"""

from orger.parsing.inline.core import InlineParsingMixin, segment, split_text

__all__ = ["InlineParsingMixin", "segment", "split_text"]
