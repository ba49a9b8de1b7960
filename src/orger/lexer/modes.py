"""Lexer operating modes.

This module defines the finite state machine modes for the lexer.
"""

from __future__ import annotations

from enum import Enum, auto


class LexerMode(Enum):
    """Lexer operating modes.

    The lexer switches between modes based on context:
    - BLOCK: Between blocks, classifying each line
    - SRC_BLOCK: Inside #+BEGIN_SRC, emitting raw lines
    - COMMENT_BLOCK: Inside #+BEGIN_COMMENT, emitting raw lines
    - DRAWER: Inside :NAME: ... :END:

    """

    BLOCK = auto()
    SRC_BLOCK = auto()
    COMMENT_BLOCK = auto()
    DRAWER = auto()
