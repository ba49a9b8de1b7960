"""ContextVar-based parse configuration for orger.

Provides thread-local configuration using Python's ContextVars (PEP 567).
Config is set once per Org instance and read by every Parser constructed in
that context. A Parser snapshots the config at construction, so no state is
shared between ``parse`` calls.

Usage:
    # In the Org class
    org = Org(todo_keywords={"TODO", "WAIT", "DONE"})
    doc = org.parse("* WAIT Call back")  # Sets config internally via ContextVar

    # Direct parser usage
    from orger.config import ParseConfig, parse_config_context

    with parse_config_context(ParseConfig(strict=True)):
        doc = Parser(source).parse()

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, fields, replace
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from orger.plugins import OrgerPlugin

DEFAULT_TODO_KEYWORDS: frozenset[str] = frozenset({"TODO", "DONE"})

# camelCase spellings accepted by from_dict
_ALIASES: dict[str, str] = {
    "todoKeywords": "todo_keywords",
    "parseInlineFormatting": "parse_inline_formatting",
    "parseLinks": "parse_links",
    "parseTables": "parse_tables",
    "parseCodeBlocks": "parse_code_blocks",
    "parseLists": "parse_lists",
    "parseTimestamps": "parse_timestamps",
    "parseFootnotes": "parse_footnotes",
    "parseDrawers": "parse_drawers",
    "preserveComments": "preserve_comments",
}


@dataclass(frozen=True, slots=True)
class ParseConfig:
    """Immutable parse configuration.

    Note: source_file is excluded; it is per-call state and stays on the
    Parser instance.

    Attributes:
        strict: Raise on unterminated comment blocks and drawers instead of
            falling back to paragraph text
        todo_keywords: Words recognised as a heading's TODO keyword
        plugins: Plugins contributing inline tokenizers and node processors
        parse_inline_formatting: Emphasis, code and verbatim spans
        parse_links: ``[[url][desc]]`` links and bare URLs
        parse_tables: ``| a | b |`` tables
        parse_code_blocks: ``#+BEGIN_SRC`` blocks
        parse_lists: Bulleted, numbered and descriptive lists
        parse_timestamps: ``<2024-01-15 Mon>`` timestamps
        parse_footnotes: ``[fn:x]`` references and definitions
        parse_drawers: ``:NAME:`` ... ``:END:`` drawers
        preserve_comments: Keep Comment nodes in the tree
        locations: Attach SourceLocation to nodes

    """

    strict: bool = False
    todo_keywords: frozenset[str] = DEFAULT_TODO_KEYWORDS
    plugins: "tuple[OrgerPlugin, ...]" = ()
    parse_inline_formatting: bool = True
    parse_links: bool = True
    parse_tables: bool = True
    parse_code_blocks: bool = True
    parse_lists: bool = True
    parse_timestamps: bool = True
    parse_footnotes: bool = True
    parse_drawers: bool = True
    preserve_comments: bool = True
    locations: bool = True

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> "ParseConfig":
        """Create ParseConfig from dictionary.

        Unknown keys are silently ignored. camelCase option names
        (``todoKeywords``, ``parseLinks``...) are accepted, and list values
        are coerced to the field's container type.

        Example:
            >>> config = ParseConfig.from_dict({
            ...     "todoKeywords": ["TODO", "WAIT"],
            ...     "strict": True,
            ...     "unknown_key": "ignored",
            ... })
            >>> sorted(config.todo_keywords)
            ['TODO', 'WAIT']

        """
        valid_fields = {f.name for f in fields(cls)}
        filtered: dict[str, Any] = {}
        for key, value in config_dict.items():
            key = _ALIASES.get(key, key)
            if key not in valid_fields:
                continue
            if key == "todo_keywords":
                value = frozenset(value)
            elif key == "plugins":
                value = tuple(value)
            filtered[key] = value
        return cls(**filtered)

    def with_todo_keywords(self, *extra: str) -> "ParseConfig":
        """Return a copy whose TODO keyword set also contains ``extra``."""
        return replace(self, todo_keywords=self.todo_keywords | frozenset(extra))


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: ParseConfig = ParseConfig()

_parse_config: ContextVar[ParseConfig] = ContextVar(
    "parse_config",
    default=_DEFAULT_CONFIG,
)


def get_parse_config() -> ParseConfig:
    """Get current parse configuration (thread-local)."""
    return _parse_config.get()


def set_parse_config(config: ParseConfig) -> None:
    """Set parse configuration for current context.

    Args:
        config: ParseConfig instance to use for this context.

    """
    _parse_config.set(config)


def reset_parse_config() -> None:
    """Reset to the default configuration."""
    _parse_config.set(_DEFAULT_CONFIG)


@contextmanager
def parse_config_context(config: ParseConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Restores the previous config even if an exception is raised.

    Example:
        >>> with parse_config_context(ParseConfig(parse_tables=False)):
        ...     doc = Parser("| a | b |").parse()
        >>> # Automatically reset to previous config

    """
    previous = _parse_config.get()
    _parse_config.set(config)
    try:
        yield
    finally:
        _parse_config.set(previous)


__all__ = [
    "DEFAULT_TODO_KEYWORDS",
    "ParseConfig",
    "get_parse_config",
    "parse_config_context",
    "reset_parse_config",
    "set_parse_config",
]
