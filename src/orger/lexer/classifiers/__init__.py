"""Line classifiers for the orger lexer.

Each classifier is a mixin that decides whether a line matches one
construct and, if so, builds its Token. Classifiers never move the lexer.
"""

from orger.lexer.classifiers.block import BlockClassifierMixin
from orger.lexer.classifiers.drawer import DrawerClassifierMixin
from orger.lexer.classifiers.footnote import FootnoteClassifierMixin
from orger.lexer.classifiers.heading import HeadingClassifierMixin, build_heading_pattern
from orger.lexer.classifiers.keyword import KeywordClassifierMixin
from orger.lexer.classifiers.list import ListClassifierMixin
from orger.lexer.classifiers.rule import RuleClassifierMixin
from orger.lexer.classifiers.table import TableClassifierMixin

__all__ = [
    "BlockClassifierMixin",
    "DrawerClassifierMixin",
    "FootnoteClassifierMixin",
    "HeadingClassifierMixin",
    "KeywordClassifierMixin",
    "ListClassifierMixin",
    "RuleClassifierMixin",
    "TableClassifierMixin",
    "build_heading_pattern",
]
