"""Plugin system for orger.

Plugins extend parsing at two hook points:

1. Tokenizers (inline, before the built-in passes):
   - A pattern plus a ``process(match, context)`` callback
   - Run on Text leaves ahead of links, footnotes, timestamps and emphasis
   - Returning None leaves the match as plain text

2. Processors (after assembly):
   - A node kind (or node class, or ``"*"``) plus ``process(node, context)``
   - Invoked once per matching node, in pre-order over a snapshot of the tree
   - Return the node to keep it, another node (or list of nodes) to replace
     it, or None to remove it

Usage:
    >>> from orger import Org
    >>> from orger.plugins import Plugin, Processor
    >>>
    >>> def shout(node, context):
    ...     node.value = node.value.upper()
    ...     return node
    >>>
    >>> org = Org(plugins=[Plugin("shout", processors=(Processor("text", shout),))])
    >>>
    >>> # Built-in plugins by name
    >>> org = Org(plugins=["drop_comments", "statistics_cookies"])

Any exception raised by a hook is re-raised as PluginError naming the plugin.

"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from orger.config import ParseConfig
    from orger.nodes import Document, Node

__all__ = [
    "BUILTIN_PLUGINS",
    "OrgerPlugin",
    "Plugin",
    "PluginContext",
    "Processor",
    "Tokenizer",
    "get_plugin",
    "register_plugin",
    "resolve_plugins",
]


@dataclass(frozen=True, slots=True)
class PluginContext:
    """What a hook can see about the parse in progress.

    Attributes:
        config: The active ParseConfig
        document: The document being built (partially built for tokenizers)
        source_file: Source file path, if any
        plugin: Name of the plugin being invoked

    """

    config: ParseConfig
    document: Document
    source_file: str | None
    plugin: str


@dataclass(frozen=True, slots=True)
class Tokenizer:
    """Inline tokenizer hook."""

    pattern: str | re.Pattern[str]
    process: Callable[[re.Match[str], PluginContext], Node | None]

    @property
    def compiled(self) -> re.Pattern[str]:
        return re.compile(self.pattern)


@dataclass(frozen=True, slots=True)
class Processor:
    """Post-assembly node processor hook.

    ``node_type`` is a kind string (``"heading"``), a node class, or ``"*"``
    for every node.
    """

    node_type: str | type[Node]
    process: Callable[[Node, PluginContext], Node | list[Node] | None]

    def matches(self, node: Node) -> bool:
        if isinstance(self.node_type, str):
            return self.node_type == "*" or node.kind == self.node_type
        return isinstance(node, self.node_type)


@runtime_checkable
class OrgerPlugin(Protocol):
    """Protocol for orger plugins.

    Thread Safety:
        Plugins must be stateless. All state should be in AST nodes.

    """

    @property
    def name(self) -> str:
        """Plugin identifier."""
        ...

    @property
    def tokenizers(self) -> Sequence[Tokenizer]:
        """Inline tokenizers, applied in order."""
        ...

    @property
    def processors(self) -> Sequence[Processor]:
        """Node processors, applied in order."""
        ...


@dataclass(frozen=True, slots=True)
class Plugin:
    """Plain OrgerPlugin implementation."""

    name: str
    tokenizers: tuple[Tokenizer, ...] = ()
    processors: tuple[Processor, ...] = ()


# Registry of built-in plugins: name -> factory
BUILTIN_PLUGINS: dict[str, Callable[[], OrgerPlugin]] = {}


def register_plugin(
    name: str,
) -> Callable[[Callable[[], OrgerPlugin]], Callable[[], OrgerPlugin]]:
    """Decorator to register a plugin factory.

    Usage:
        @register_plugin("drop_comments")
        def drop_comments() -> Plugin:
            ...

    """

    def decorator(factory: Callable[[], OrgerPlugin]) -> Callable[[], OrgerPlugin]:
        BUILTIN_PLUGINS[name] = factory
        return factory

    return decorator


def get_plugin(name: str) -> OrgerPlugin:
    """Get a plugin instance by name.

    Raises:
        KeyError: If plugin name is not recognized

    """
    if name not in BUILTIN_PLUGINS:
        available = ", ".join(sorted(BUILTIN_PLUGINS.keys()))
        raise KeyError(f"Unknown plugin: {name!r}. Available: {available}")
    return BUILTIN_PLUGINS[name]()


def resolve_plugins(plugins: Iterable[str | OrgerPlugin]) -> tuple[OrgerPlugin, ...]:
    """Turn names (or ``"all"``) and plugin objects into plugin instances.

    Raises:
        KeyError: Unknown plugin name
        TypeError: An entry is neither a name nor an OrgerPlugin

    """
    resolved: list[OrgerPlugin] = []
    for plugin in plugins:
        if plugin == "all":
            resolved.extend(get_plugin(name) for name in BUILTIN_PLUGINS)
        elif isinstance(plugin, str):
            resolved.append(get_plugin(plugin))
        elif isinstance(plugin, OrgerPlugin):
            resolved.append(plugin)
        else:
            raise TypeError(f"Not a plugin: {plugin!r}")
    return tuple(resolved)


# Import built-in plugins to register them
# These imports trigger the @register_plugin decorators
from orger.plugins.comments import drop_comments  # noqa: E402
from orger.plugins.cookies import statistics_cookies  # noqa: E402

__all__ += [
    "drop_comments",
    "statistics_cookies",
]
