"""orger renderers.

Renderers convert the typed AST into output formats.

Available Renderers:
- HtmlRenderer: HTML with ``org-*`` classes
- MarkdownRenderer: GitHub Flavored Markdown
- OrgRenderer: Org markup (re-parses to an equal tree)

Thread Safety:
All renderers keep per-render state in a RenderContext local to each
render() call. Safe for concurrent use from multiple threads.

"""

from orger.renderers.base import BaseRenderer, RenderContext, RenderFunction
from orger.renderers.html import HtmlRenderer
from orger.renderers.markdown import MarkdownRenderer
from orger.renderers.org import OrgRenderer
from orger.renderers.protocol import ASTRenderer

RENDERERS: dict[str, type[BaseRenderer]] = {
    "html": HtmlRenderer,
    "markdown": MarkdownRenderer,
    "org": OrgRenderer,
}

__all__ = [
    "RENDERERS",
    "ASTRenderer",
    "BaseRenderer",
    "HtmlRenderer",
    "MarkdownRenderer",
    "OrgRenderer",
    "RenderContext",
    "RenderFunction",
]
