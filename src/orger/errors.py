"""Exception classes for orger.

Parsing either returns a complete Document or raises exactly one of these;
partial trees are never handed back to the caller.
"""

from __future__ import annotations


class OrgerError(Exception):
    """Base exception for all orger errors.

    Subclass this for specific error categories.
    """

    pass


class ParseError(OrgerError):
    """Error during document parsing.

    Raised when the parser encounters input it cannot recover from.
    """

    def __init__(
        self,
        message: str,
        lineno: int | None = None,
        col_offset: int | None = None,
        source_file: str | None = None,
    ) -> None:
        """Initialize parse error with optional location.

        Args:
            message: Error description
            lineno: Line number where error occurred (1-indexed)
            col_offset: Column offset where error occurred (1-indexed)
            source_file: Path to source file (optional)
        """
        self.message = message
        self.lineno = lineno
        self.col_offset = col_offset
        self.source_file = source_file

        location = ""
        if source_file:
            location = f"{source_file}:"
        if lineno is not None:
            location += f"{lineno}:"
            if col_offset is not None:
                location += f"{col_offset}:"
        if location:
            location = location.rstrip(":") + " "

        super().__init__(f"{location}{message}")


class GrammarError(ParseError):
    """The structural grammar could not be built or could not advance.

    Raised at Parser construction for an unusable configuration (e.g. a TODO
    keyword containing whitespace) and by the block parser's progress guard.
    Fatal: no tree is produced.
    """

    pass


class UnterminatedBlockError(ParseError):
    """A bracketed block was opened but never closed.

    Always raised for ``#+BEGIN_SRC`` without ``#+END_SRC``. Comment blocks and
    drawers only raise this in strict mode.
    """

    def __init__(
        self,
        block_name: str,
        lineno: int | None = None,
        col_offset: int | None = None,
        source_file: str | None = None,
    ) -> None:
        """Initialize with the name of the unclosed block.

        Args:
            block_name: Block name as written (e.g. "SRC", "COMMENT", "PROPERTIES")
            lineno: Line of the opening marker
            col_offset: Column of the opening marker
            source_file: Path to source file (optional)
        """
        self.block_name = block_name
        super().__init__(
            f"Unterminated {block_name} block",
            lineno=lineno,
            col_offset=col_offset,
            source_file=source_file,
        )


class RenderError(OrgerError):
    """Error during rendering.

    Raised when a renderer is handed something it cannot render.
    """

    pass


class PluginError(OrgerError):
    """Error in plugin execution.

    Raised when a tokenizer or processor fails, or when a processor
    tries to remove the document root.
    """

    def __init__(self, plugin_name: str, message: str) -> None:
        """Initialize plugin error.

        Args:
            plugin_name: Name of the failing plugin
            message: Description of the error
        """
        self.plugin_name = plugin_name
        super().__init__(f"Plugin '{plugin_name}': {message}")
