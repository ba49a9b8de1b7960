"""List parsing subpackage.

- mixin: collects a flat run of list item lines
- reconstruct: rebuilds nesting from indentation
"""

from orger.parsing.blocks.list.mixin import ListParsingMixin
from orger.parsing.blocks.list.reconstruct import build_list, list_type_for

__all__ = ["ListParsingMixin", "build_list", "list_type_for"]
