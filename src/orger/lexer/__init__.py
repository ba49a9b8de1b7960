"""Line lexer for Org source.

Classifies each physical line into a Token; the block parser consumes the
resulting stream.
"""

from orger.lexer.classifiers import build_heading_pattern
from orger.lexer.core import Lexer
from orger.lexer.modes import LexerMode

__all__ = ["Lexer", "LexerMode", "build_heading_pattern"]
