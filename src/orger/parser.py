"""Recursive descent parser producing a typed AST.

Consumes the token stream from Lexer and builds a mutable tree of node
dataclasses.

Architecture:
The parser uses a mixin-based design for separation of concerns:
- `TokenNavigationMixin`: Token stream traversal
- `BlockParsingMixin`: Headings, lists, tables, blocks (structural pass,
  including list reconstruction)
- `InlineParsingMixin`: Inline segmentation of Text leaves

The pipeline for one parse is lex -> structural pass -> inline pass ->
assembly. Any stage may raise; a partially built tree is never returned.

Thread Safety:
- Configuration is read from ContextVar (thread-local) at construction
- Parser instances are single-use; create one per parse

"""

from __future__ import annotations

from orger.config import ParseConfig, get_parse_config
from orger.lexer import Lexer, build_heading_pattern
from orger.nodes import Document
from orger.parsing import (
    BlockParsingMixin,
    InlineParsingMixin,
    TokenNavigationMixin,
)
from orger.parsing.assembler import assemble
from orger.tokens import Token
from orger.utils.logger import get_logger

logger = get_logger(__name__)


class Parser(
    TokenNavigationMixin,
    InlineParsingMixin,
    BlockParsingMixin,
):
    """Recursive descent parser for Org markup.

    Usage:
        >>> parser = Parser("* TODO Write docs")
        >>> doc = parser.parse()
        >>> heading = doc.children[0]
        >>> heading.todo_keyword, heading.title
        ('TODO', 'Write docs')

    Configuration:
        Parser snapshots the ContextVar config when it is constructed. The
        heading grammar is built from the config's TODO keywords at that
        point, so an unusable keyword fails fast with GrammarError.

    """

    __slots__ = (
        "_source",
        "_source_file",
        "_config",
        "_heading_re",
        "_tokens",
        "_pos",
        "_current",
        "_keywords",
    )

    def __init__(
        self,
        source: str,
        source_file: str | None = None,
    ) -> None:
        """Initialize parser with source text.

        Args:
            source: Org source text (any newline convention)
            source_file: Optional source file path for error messages

        Raises:
            GrammarError: The configured TODO keywords are unusable
        """
        self._source = source.replace("\r\n", "\n").replace("\r", "\n")
        self._source_file = source_file
        self._config: ParseConfig = get_parse_config()
        self._heading_re = build_heading_pattern(self._config.todo_keywords)
        self._tokens: list[Token] = []
        self._pos = 0
        self._current: Token | None = None
        self._keywords: list[tuple[str, str]] = []

    @property
    def config(self) -> ParseConfig:
        """The configuration this parser was constructed with."""
        return self._config

    def parse(self) -> Document:
        """Parse source into a Document.

        Returns:
            The assembled Document

        Raises:
            UnterminatedBlockError: A source block is never closed (or, in
                strict mode, a comment block or drawer)
            GrammarError: The block parser could not make progress
            PluginError: A plugin hook failed
        """
        lexer = Lexer(
            self._source,
            self._source_file,
            config=self._config,
            heading_re=self._heading_re,
        )
        self._tokens = list(lexer.tokenize())
        self._pos = 0
        self._current = self._tokens[0] if self._tokens else None
        self._keywords = []
        logger.debug("Lexed %d tokens from %s", len(self._tokens), self._source_file or "<string>")

        location = None
        if self._config.locations and self._tokens:
            location = self._tokens[0].location.span_to(self._tokens[-1].location)
        document = Document(location=location)
        document.extend_children(self._parse_blocks())
        logger.debug("Structural pass produced %d top-level blocks", len(document.children))

        self._segment_document(document)

        return assemble(document, self._keywords, self._config, self._source_file)
