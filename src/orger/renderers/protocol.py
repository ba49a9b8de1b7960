"""ASTRenderer protocol: stable interface for AST renderers.

Any renderer that implements ``render(document) -> str`` conforms to this
protocol. The built-in HTML, Markdown and Org renderers all do.

Example:
    from orger.renderers.protocol import ASTRenderer

    def render_page(renderer: ASTRenderer, doc: Document) -> str:
        return renderer.render(doc)

"""

from typing import Protocol, runtime_checkable

from orger.nodes import Document


@runtime_checkable
class ASTRenderer(Protocol):
    """Protocol for AST renderers."""

    def render(self, node: Document) -> str:
        """Render a Document AST to a string.

        Args:
            node: The document AST to render.

        Returns:
            Rendered string output.

        """
        ...
