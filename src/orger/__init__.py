"""
orger: Org-mode markup parser with a typed, mutable AST.

Parses Org markup (headings with TODO keywords, priorities and tags; lists
with checkboxes; tables; source blocks; drawers; footnotes; timestamps and
inline emphasis) into a tree of typed nodes, and renders that tree to HTML,
Markdown or back to Org.

Quick Start:
    >>> from orger import parse, render
    >>> doc = parse("* TODO Write the report :work:")
    >>> heading = doc.children[0]
    >>> heading.todo_keyword, heading.title, heading.tags
    ('TODO', 'Write the report', ['work'])
    >>> html = render(doc)

    >>> # Or use the high-level Org class
    >>> from orger import Org
    >>> org = Org(todo_keywords={"TODO", "WAIT", "DONE"}, plugins=["statistics_cookies"])
    >>> html = org("* WAIT Call back")

Installation:
    pip install orger              # Parser and renderers (zero deps)
    pip install orger[syntax]      # + Syntax highlighting via Rosettes
"""

from collections.abc import Iterable
from dataclasses import fields
from typing import Any

from orger.config import (
    ParseConfig,
    get_parse_config,
    parse_config_context,
    reset_parse_config,
    set_parse_config,
)
from orger.errors import (
    GrammarError,
    OrgerError,
    ParseError,
    PluginError,
    RenderError,
    UnterminatedBlockError,
)
from orger.lexer import Lexer
from orger.location import SourceLocation
from orger.nodes import (
    Block,
    Bold,
    Code,
    CodeBlock,
    Comment,
    Container,
    Document,
    Drawer,
    Footnote,
    FootnoteRef,
    Heading,
    HorizontalRule,
    Inline,
    Italic,
    Leaf,
    Link,
    List,
    ListItem,
    Node,
    Paragraph,
    Strikethrough,
    Table,
    TableCell,
    TableRow,
    Text,
    Timestamp,
    Underline,
    Verbatim,
)
from orger.parser import Parser
from orger.plugins import OrgerPlugin, Plugin, Processor, Tokenizer, resolve_plugins
from orger.renderers import (
    RENDERERS,
    ASTRenderer,
    HtmlRenderer,
    MarkdownRenderer,
    OrgRenderer,
)
from orger.serialization import from_dict, from_json, to_dict, to_json
from orger.tokens import Token, TokenType
from orger.visitor import BaseVisitor, transform

__version__ = "0.1.0"


def parse(
    source: str,
    *,
    source_file: str | None = None,
    config: ParseConfig | None = None,
) -> Document:
    """Parse Org source into a typed AST.

    Args:
        source: Org source text
        source_file: Optional source file path for error messages
        config: Parse configuration (defaults to the context's current config)

    Returns:
        Document AST root node

    Raises:
        ParseError: The source could not be parsed (see subclasses)
        PluginError: A plugin hook failed

    Example:
        >>> doc = parse("#+TITLE: Notes\\n\\nSome *bold* text.")
        >>> doc.title
        'Notes'
    """
    if config is None:
        return Parser(source, source_file=source_file).parse()
    with parse_config_context(config):
        return Parser(source, source_file=source_file).parse()


def render(doc: Document, format: str = "html", **options: Any) -> str:
    """Render an AST Document.

    Args:
        doc: Document AST to render
        format: ``"html"``, ``"markdown"`` or ``"org"``
        **options: Renderer options (``full_document``, ``gfm``...)

    Returns:
        Rendered string

    Raises:
        RenderError: Unknown format or a non-Document root

    Example:
        >>> render(parse("Some /text/."), "markdown")
        'Some *text*.\\n'
    """
    renderer_cls = RENDERERS.get(format)
    if renderer_cls is None:
        available = ", ".join(sorted(RENDERERS))
        raise RenderError(f"Unknown format: {format!r}. Available: {available}")
    return renderer_cls(**options).render(doc)


class Org:
    """High-level Org processor combining parser and renderers.

    Usage:
        >>> org = Org()
        >>> html = org("* Hello /World/")

        >>> # Access the AST
        >>> doc = org.parse("** Heading")
        >>> doc.children[0].level
        2

        >>> # Plugins by name or as objects
        >>> org = Org(plugins=["drop_comments"], preserve_comments=True)

    Thread Safety:
        Uses ContextVar for thread-local configuration. Safe to use multiple
        Org instances concurrently from different threads.

    """

    __slots__ = ("_config", "_highlight")

    def __init__(
        self,
        *,
        plugins: Iterable[str | OrgerPlugin] | None = None,
        highlight: bool = False,
        **options: Any,
    ) -> None:
        """Initialize Org processor.

        Args:
            plugins: Plugin names (``"all"`` for every built-in plugin) or
                plugin objects
            highlight: Enable syntax highlighting for source blocks in HTML
            **options: Any ParseConfig field (``strict``, ``todo_keywords``,
                ``parse_tables``...)

        Raises:
            TypeError: An option is not a ParseConfig field
            KeyError: Unknown plugin name
        """
        valid = {f.name for f in fields(ParseConfig)} - {"plugins"}
        unknown = sorted(set(options) - valid)
        if unknown:
            raise TypeError(f"Unknown Org option(s): {', '.join(unknown)}")

        self._highlight = highlight
        # Build immutable config once (thread-safe, reused across calls)
        self._config = ParseConfig.from_dict(
            {**options, "plugins": resolve_plugins(plugins or ())}
        )

    @property
    def config(self) -> ParseConfig:
        return self._config

    def __call__(self, source: str) -> str:
        """Parse and render Org source to HTML in one call."""
        return self.render(self.parse(source))

    def parse(self, source: str, *, source_file: str | None = None) -> Document:
        """Parse Org source into AST.

        Thread Safety:
            Sets config via ContextVar (thread-local). Safe for concurrent use.

        """
        with parse_config_context(self._config):
            return Parser(source, source_file=source_file).parse()

    def parse_many(
        self,
        sources: Iterable[str],
        *,
        source_file: str | None = None,
    ) -> list[Document]:
        """Parse multiple Org sources into AST documents.

        Sets config once, parses all, restores once.

        Example:
            >>> org = Org()
            >>> docs = org.parse_many(["* Doc 1", "* Doc 2", "* Doc 3"])
        """
        with parse_config_context(self._config):
            return [Parser(source, source_file=source_file).parse() for source in sources]

    def render(self, doc: Document, format: str = "html", **options: Any) -> str:
        """Render AST to ``format``.

        HTML output inherits this instance's ``highlight`` setting unless
        ``options`` overrides it.
        """
        if format == "html":
            options.setdefault("highlight", self._highlight)
        return render(doc, format, **options)


__all__ = [  # noqa: RUF022 - grouped by category
    # Version
    "__version__",
    # Core API
    "parse",
    "render",
    # Node base classes
    "Node",
    "Leaf",
    "Container",
    # Block nodes
    "Block",
    "CodeBlock",
    "Comment",
    "Document",
    "Drawer",
    "Footnote",
    "Heading",
    "HorizontalRule",
    "List",
    "ListItem",
    "Paragraph",
    "Table",
    "TableCell",
    "TableRow",
    # Inline nodes
    "Inline",
    "Bold",
    "Code",
    "FootnoteRef",
    "Italic",
    "Link",
    "Strikethrough",
    "Text",
    "Timestamp",
    "Underline",
    "Verbatim",
    # Errors
    "OrgerError",
    "ParseError",
    "GrammarError",
    "UnterminatedBlockError",
    "PluginError",
    "RenderError",
    # Parser components
    "Lexer",
    "Parser",
    # Plugins
    "OrgerPlugin",
    "Plugin",
    "Processor",
    "Tokenizer",
    # Renderers
    "ASTRenderer",
    "HtmlRenderer",
    "MarkdownRenderer",
    "OrgRenderer",
    # Visitor + Transform
    "BaseVisitor",
    "transform",
    # Serialization
    "to_dict",
    "from_dict",
    "to_json",
    "from_json",
    # Configuration (ContextVar-based)
    "ParseConfig",
    "get_parse_config",
    "set_parse_config",
    "reset_parse_config",
    "parse_config_context",
    # Location
    "SourceLocation",
    # Tokens
    "Token",
    "TokenType",
    # High-level
    "Org",
]
