"""Source location tracking for error messages and debugging.

Provides SourceLocation dataclass for tracking positions in source text.
Attached to AST nodes when ``ParseConfig.locations`` is enabled and carried
by every ParseError raised during parsing.

Locations never take part in node equality: two trees parsed from sources that
differ only in layout compare equal.

"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """Source location for error messages and debugging.

    All line and column positions are 1-indexed; offsets are 0-indexed
    character offsets into the source string.

    Attributes:
        lineno: Starting line number (1-indexed)
        col_offset: Starting column offset (1-indexed)
        offset: Absolute start offset in source
        end_offset: Absolute end offset in source
        end_lineno: Ending line number (optional)
        end_col_offset: Ending column offset (optional)
        source_file: Source file path (optional)

    Examples:
        >>> loc = SourceLocation(lineno=3, col_offset=1)
        >>> str(loc)
        '3:1'

        >>> loc = SourceLocation(1, 1, source_file="notes.org")
        >>> str(loc)
        'notes.org:1:1'

    """

    lineno: int
    col_offset: int
    offset: int = 0
    end_offset: int = 0
    end_lineno: int | None = None
    end_col_offset: int | None = None
    source_file: str | None = None

    def __str__(self) -> str:
        """Format location for error messages.

        Returns:
            Formatted string like "file.org:10:5" or "10:5"
        """
        if self.source_file:
            return f"{self.source_file}:{self.lineno}:{self.col_offset}"
        return f"{self.lineno}:{self.col_offset}"

    def span_to(self, end: SourceLocation) -> SourceLocation:
        """Create a new location spanning from this location to end.

        Args:
            end: Ending location

        Returns:
            New SourceLocation with this start and end's end positions
        """
        return SourceLocation(
            lineno=self.lineno,
            col_offset=self.col_offset,
            offset=self.offset,
            end_offset=end.end_offset or end.offset,
            end_lineno=end.end_lineno or end.lineno,
            end_col_offset=end.end_col_offset or end.col_offset,
            source_file=self.source_file,
        )

    @classmethod
    def unknown(cls) -> SourceLocation:
        """Create an unknown/placeholder location.

        Use for nodes created synthetically (plugins, tests).
        """
        return cls(lineno=0, col_offset=0)
