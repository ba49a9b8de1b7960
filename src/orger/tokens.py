"""Token and TokenType definitions for the orger lexer.

The lexer classifies each physical line of the source into one Token that
the block parser consumes. Each Token carries the raw line, its classified
fields, and a lazily built source location.

Thread Safety:
Token is frozen (immutable) and safe to share across threads.
TokenType is an enum (inherently immutable).

"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any

from orger.location import SourceLocation


class TokenType(Enum):
    """Line classes produced by the lexer.

    Organized by category:
    - Document structure (EOF, BLANK_LINE, PARAGRAPH_LINE)
    - Outline and lists (headings, list items, rules)
    - Bracketed blocks (source, comment, drawer), each BEGIN/LINE/END
    - Single-line constructs (keywords, comments, tables, footnotes)

    """

    # Document structure
    EOF = auto()
    BLANK_LINE = auto()
    PARAGRAPH_LINE = auto()

    # Outline and lists
    HEADING = auto()  # ** TODO [#A] Title :tag:
    LIST_ITEM = auto()  # - [ ] item, 1. item, term :: desc
    HORIZONTAL_RULE = auto()  # -----

    # Tables
    TABLE_ROW = auto()  # | a | b |
    TABLE_RULE = auto()  # |---+---|

    # Source blocks
    SRC_BEGIN = auto()  # #+BEGIN_SRC python :results output
    SRC_LINE = auto()
    SRC_END = auto()  # #+END_SRC

    # Comment blocks
    COMMENT_BLOCK_BEGIN = auto()  # #+BEGIN_COMMENT
    COMMENT_BLOCK_LINE = auto()
    COMMENT_BLOCK_END = auto()  # #+END_COMMENT

    # Drawers
    DRAWER_BEGIN = auto()  # :PROPERTIES:
    DRAWER_LINE = auto()
    DRAWER_END = auto()  # :END:

    # Single-line constructs
    KEYWORD = auto()  # #+TITLE: value
    COMMENT = auto()  # # text
    FOOTNOTE_DEF = auto()  # [fn:1] text


@dataclass(frozen=True, slots=True)
class Token:
    """A classified source line.

    Attributes:
        type: The token type (from TokenType enum)
        value: The raw line without its newline
        data: Fields extracted by the classifier (heading level, list bullet...)
        _lineno: Line number (1-indexed)
        _col: Column of the first non-blank character (1-indexed)
        _start_offset: Absolute position of the line start in source
        _end_offset: Absolute end position in source (exclusive)
        line_indent: Indent of the line (spaces, tabs expand to 4)
        _source_file: Optional source file path

    Performance:
        SourceLocation is created lazily on first access to `.location`.

    """

    type: TokenType
    value: str
    _lineno: int
    _col: int
    _start_offset: int
    _end_offset: int
    line_indent: int = 0
    data: dict[str, Any] = field(default_factory=dict, compare=False, hash=False)
    _source_file: str | None = None
    _location_cache: SourceLocation | None = field(
        default=None, repr=False, compare=False, hash=False
    )

    @property
    def location(self) -> SourceLocation:
        """Get source location (lazily created and cached)."""
        if self._location_cache is not None:
            return self._location_cache

        loc = SourceLocation(
            lineno=self._lineno,
            col_offset=self._col,
            offset=self._start_offset,
            end_offset=self._end_offset,
            end_lineno=self._lineno,
            end_col_offset=1 + (self._end_offset - self._start_offset),
            source_file=self._source_file,
        )
        # Safe mutation of frozen dataclass cache field (idempotent write)
        object.__setattr__(self, "_location_cache", loc)
        return loc

    def __repr__(self) -> str:
        """Compact repr for debugging."""
        val = self.value
        if len(val) > 20:
            val = val[:17] + "..."
        return f"Token({self.type.name}, {val!r}, {self._lineno}:{self._col})"

    @property
    def lineno(self) -> int:
        """Line number (convenience accessor)."""
        return self._lineno

    @property
    def col(self) -> int:
        """Column offset (convenience accessor)."""
        return self._col

    def get(self, key: str, default: Any = None) -> Any:
        """Classified field lookup."""
        return self.data.get(key, default)
