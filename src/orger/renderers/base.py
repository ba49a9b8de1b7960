"""Kind-dispatching renderer base.

``BaseRenderer.render_node`` looks up, in order:

1. a per-kind override passed as ``renderers={kind: fn}``
2. a ``render_<kind>`` method on the renderer
3. the fallback: rendered children for containers, ``value`` for leaves

Per-render mutable state lives in a RenderContext created fresh for each
``render()`` call, so one renderer instance can be shared across threads.

"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import TypeAlias

from orger.errors import RenderError
from orger.nodes import Container, Document, Footnote, Node
from orger.utils.logger import get_logger


logger = get_logger(__name__)

RenderFunction: TypeAlias = Callable[[Node, "RenderContext"], str]


@dataclass(slots=True)
class RenderContext:
    """Per-render mutable state.

    Attributes:
        renderer: The renderer doing the work (for recursion from overrides)
        document: Root being rendered
        footnotes: Footnote definitions by label
        footnote_order: Labels in order of first reference
        seen_slugs: Heading anchors already used
        depth: Current list nesting depth

    """

    renderer: BaseRenderer
    document: Document
    footnotes: dict[str, Footnote] = field(default_factory=dict)
    footnote_order: list[str] = field(default_factory=list)
    seen_slugs: set[str] = field(default_factory=set)
    depth: int = 0

    def render(self, node: Node) -> str:
        """Render ``node`` with the same renderer and state."""
        return self.renderer.render_node(node, self)

    def render_all(self, nodes: list[Node]) -> str:
        return "".join(self.renderer.render_node(node, self) for node in nodes)


class BaseRenderer:
    """Base class for renderers dispatching on ``node.kind``.

    Subclasses implement ``render_<kind>(node, ctx) -> str`` for the kinds
    they support; everything else goes through :meth:`render_fallback`.

    """

    __slots__ = ("_overrides",)

    def __init__(self, *, renderers: Mapping[str, RenderFunction] | None = None) -> None:
        """Initialize renderer.

        Args:
            renderers: Per-kind render functions ``fn(node, ctx) -> str``
                taking precedence over the built-in methods
        """
        self._overrides: dict[str, RenderFunction] = dict(renderers or {})

    def render(self, node: Document) -> str:
        """Render a Document.

        Raises:
            RenderError: ``node`` is not a Document
        """
        if not isinstance(node, Document):
            raise RenderError(f"Expected a Document, got {type(node).__name__}")
        ctx = RenderContext(renderer=self, document=node)
        for footnote in node.find_all(Footnote):
            ctx.footnotes.setdefault(footnote.label, footnote)  # type: ignore[union-attr]
        return self.render_node(node, ctx)

    def render_node(self, node: Node, ctx: RenderContext) -> str:
        """Render any node through override, method or fallback."""
        override = self._overrides.get(node.kind)
        if override is not None:
            return override(node, ctx)
        method: RenderFunction | None = getattr(self, f"render_{node.kind}", None)
        if method is None:
            return self.render_fallback(node, ctx)
        return method(node, ctx)

    def render_children(self, node: Node, ctx: RenderContext) -> str:
        """Concatenate rendered ``children`` (title nodes excluded)."""
        if isinstance(node, Container):
            return ctx.render_all(node.children)
        return ""

    def render_fallback(self, node: Node, ctx: RenderContext) -> str:
        """Rendered children for containers, raw ``value`` for leaves."""
        logger.debug("%s has no renderer for %r; using fallback", type(self).__name__, node.kind)
        if isinstance(node, Container):
            return self.render_children(node, ctx)
        return str(getattr(node, "value", ""))
