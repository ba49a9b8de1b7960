"""HTML renderer using StringBuilder pattern.

Renders the typed AST to HTML. Every element optionally carries an
``org-<kind>`` class so stylesheets can target Org constructs directly.

Thread Safety:
All per-render state is encapsulated in RenderContext, created fresh for each
render() call. Multiple threads can safely share a single HtmlRenderer instance
and call render() concurrently without synchronization.

Single-Pass Heading Decoration:
Heading IDs are generated during the AST walk and made unique per document.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping

from orger.nodes import (
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
    Italic,
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
from orger.highlighting import has_highlighter, highlight
from orger.renderers.base import BaseRenderer, RenderContext, RenderFunction
from orger.stringbuilder import StringBuilder
from orger.utils.logger import get_logger
from orger.utils.text import escape_html
from orger.utils.text import slugify as default_slugify

logger = get_logger(__name__)

_DOCUMENT_STYLE = """\
.org-todo { font-weight: bold; color: #c00; }
.org-done { font-weight: bold; color: #080; }
.org-priority { color: #a60; }
.org-tags { float: right; font-size: 0.8em; color: #666; }
.org-src-block { background: #f5f5f5; padding: 0.5em; overflow-x: auto; }
.org-timestamp { color: #55a; }
.org-drawer { display: none; }
"""

_DONE_KEYWORDS = frozenset({"DONE", "CANCELED", "CANCELLED"})


class HtmlRenderer(BaseRenderer):
    """Render AST to HTML.

    Usage:
        >>> from orger import parse
        >>> doc = parse("* Hello *World*")
        >>> HtmlRenderer(add_type_classes=False).render(doc)
        '<div>\\n<h1 id="hello-world">Hello <strong>World</strong></h1>\\n</div>\\n'

    Thread Safety:
        Multiple threads can safely share a single HtmlRenderer instance.
        Each render() call creates an independent RenderContext, ensuring
        no shared mutable state between concurrent renders.
    """

    __slots__ = (
        "_full_document",
        "_add_type_classes",
        "_add_data_attributes",
        "_preserve_comments",
        "_highlight",
        "_slugify",
    )

    def __init__(
        self,
        *,
        full_document: bool = False,
        add_type_classes: bool = True,
        add_data_attributes: bool = False,
        preserve_comments: bool = True,
        highlight: bool = False,
        slugify: Callable[[str], str] | None = None,
        renderers: Mapping[str, RenderFunction] | None = None,
    ) -> None:
        """Initialize renderer.

        Args:
            full_document: Wrap output in ``<html>`` with head and a stylesheet
            add_type_classes: Add ``org-<kind>`` classes to elements
            add_data_attributes: Add ``data-*`` attributes (todo, priority,
                tags, timestamp fields)
            preserve_comments: Emit Comment nodes as HTML comments
            highlight: Syntax-highlight source blocks that name a language
            slugify: Optional custom slugify function for heading IDs
            renderers: Per-kind render overrides
        """
        super().__init__(renderers=renderers)
        self._full_document = full_document
        self._add_type_classes = add_type_classes
        self._add_data_attributes = add_data_attributes
        self._preserve_comments = preserve_comments
        self._highlight = highlight
        self._slugify = slugify or default_slugify

    def _class(self, *names: str) -> str:
        if not self._add_type_classes:
            return ""
        return f' class="{" ".join(names)}"'

    # =========================================================================
    # Document
    # =========================================================================

    def render_document(self, node: Document, ctx: RenderContext) -> str:
        sb = StringBuilder()
        sb.append(f"<div{self._class('org-document')}>\n")
        sb.append(self.render_children(node, ctx))
        if ctx.footnote_order:
            self._render_footnotes_section(sb, ctx)
        sb.append("</div>\n")
        body = sb.build()

        if not self._full_document:
            return body
        return self._wrap_document(node, body)

    def _wrap_document(self, node: Document, body: str) -> str:
        sb = StringBuilder()
        sb.append_line("<!DOCTYPE html>")
        sb.append_line('<html lang="en">')
        sb.append_line("<head>")
        sb.append_line('<meta charset="utf-8">')
        sb.append_line(f"<title>{escape_html(node.title or 'Untitled')}</title>")
        if node.author:
            sb.append_line(f'<meta name="author" content="{escape_html(node.author)}">')
        sb.append_line("<style>")
        sb.append(_DOCUMENT_STYLE)
        sb.append_line("</style>")
        sb.append_line("</head>")
        sb.append_line("<body>")
        if node.title:
            sb.append_line(f"<h1{self._class('org-title')}>{escape_html(node.title)}</h1>")
        sb.append(body)
        sb.append_line("</body>")
        sb.append_line("</html>")
        return sb.build()

    # =========================================================================
    # Blocks
    # =========================================================================

    def render_heading(self, node: Heading, ctx: RenderContext) -> str:
        """Render heading with a unique ID, then its section content."""
        slug = self._slugify(node.title) or "section"
        original_slug = slug
        counter = 1
        while slug in ctx.seen_slugs:
            slug = f"{original_slug}-{counter}"
            counter += 1
        ctx.seen_slugs.add(slug)

        level = min(node.level, 6)
        attrs = self._class("org-heading", f"org-heading-{level}")
        if self._add_data_attributes:
            if node.todo_keyword:
                attrs += f' data-todo="{escape_html(node.todo_keyword)}"'
            if node.priority:
                attrs += f' data-priority="{escape_html(node.priority)}"'
            if node.tags:
                attrs += f' data-tags="{escape_html(" ".join(node.tags))}"'

        sb = StringBuilder()
        sb.append(f'<h{level}{attrs} id="{escape_html(slug)}">')
        if node.todo_keyword:
            state = "org-done" if node.todo_keyword in _DONE_KEYWORDS else "org-todo"
            sb.append(f'<span class="{state}">{escape_html(node.todo_keyword)}</span> ')
        if node.priority:
            sb.append(f'<span class="org-priority">[#{escape_html(node.priority)}]</span> ')
        if node.title_nodes:
            sb.append(ctx.render_all(node.title_nodes))
        else:
            sb.append(escape_html(node.title))
        if node.tags:
            sb.append(' <span class="org-tags">')
            sb.append(
                "".join(f'<span class="org-tag">{escape_html(tag)}</span>' for tag in node.tags)
            )
            sb.append("</span>")
        sb.append(f"</h{level}>\n")
        sb.append(self.render_children(node, ctx))
        return sb.build()

    def render_paragraph(self, node: Paragraph, ctx: RenderContext) -> str:
        return f"<p{self._class('org-paragraph')}>{self.render_children(node, ctx)}</p>\n"

    def render_list(self, node: List, ctx: RenderContext) -> str:
        """Render ordered, unordered or descriptive list."""
        tag = {"ordered": "ol", "unordered": "ul", "descriptive": "dl"}[node.list_type]
        sb = StringBuilder()
        sb.append(f"<{tag}{self._class('org-list', f'org-{node.list_type}-list')}>\n")
        ctx.depth += 1
        try:
            sb.append(self.render_children(node, ctx))
        finally:
            ctx.depth -= 1
        sb.append(f"</{tag}>\n")
        return sb.build()

    def render_list_item(self, node: ListItem, ctx: RenderContext) -> str:
        """Render list item: checkbox, inline content, then nested lists."""
        inline = [child for child in node.children if not isinstance(child, List)]
        nested = node.nested_lists

        sb = StringBuilder()
        parent = node.parent
        if node.term is not None and isinstance(parent, List) and parent.list_type == "descriptive":
            sb.append(f"<dt{self._class('org-list-term')}>{escape_html(node.term)}</dt>\n")
            sb.append(f"<dd{self._class('org-list-item')}>")
            close = "</dd>\n"
        else:
            sb.append(f"<li{self._class('org-list-item')}>")
            close = "</li>\n"
            if node.term is not None:
                sb.append(f"<strong>{escape_html(node.term)}</strong> :: ")

        if node.checkbox is not None:
            checked = " checked" if node.checkbox == "checked" else ""
            state = f' data-state="{node.checkbox}"' if self._add_data_attributes else ""
            sb.append(
                f'<input type="checkbox"{self._class("org-checkbox")}{state} disabled{checked} /> '
            )
        sb.append(ctx.render_all(inline))
        if nested:
            sb.append("\n")
            sb.append(ctx.render_all(nested))
        sb.append(close)
        return sb.build()

    def render_table(self, node: Table, ctx: RenderContext) -> str:
        head = [row for row in node.children if isinstance(row, TableRow) and row.is_header]
        body = [row for row in node.children if not (isinstance(row, TableRow) and row.is_header)]

        sb = StringBuilder()
        sb.append(f"<table{self._class('org-table')}>\n")
        if head:
            sb.append("<thead>\n").append(ctx.render_all(head)).append("</thead>\n")
        if body:
            sb.append("<tbody>\n").append(ctx.render_all(body)).append("</tbody>\n")
        sb.append("</table>\n")
        return sb.build()

    def render_table_row(self, node: TableRow, ctx: RenderContext) -> str:
        return f"<tr{self._class('org-table-row')}>\n{self.render_children(node, ctx)}</tr>\n"

    def render_table_cell(self, node: TableCell, ctx: RenderContext) -> str:
        tag = "th" if node.is_header else "td"
        return f"<{tag}{self._class('org-table-cell')}>{self.render_children(node, ctx)}</{tag}>\n"

    def render_code_block(self, node: CodeBlock, ctx: RenderContext) -> str:
        if self._highlight and node.language and has_highlighter():
            try:
                return highlight(node.value, node.language) + "\n"
            except Exception:
                logger.debug(
                    "Syntax highlighting failed for language %r", node.language, exc_info=True
                )

        attrs = self._class("org-src-block")
        lang_class = ""
        if node.language:
            attrs += f' data-language="{escape_html(node.language)}"'
            lang_class = f' class="language-{escape_html(node.language)}"'
        if self._add_data_attributes:
            for key, value in node.params.items():
                attrs += f' data-{escape_html(key)}="{escape_html(value)}"'
        return f"<pre{attrs}><code{lang_class}>{escape_html(node.value)}</code></pre>\n"

    def render_comment(self, node: Comment, ctx: RenderContext) -> str:
        if not self._preserve_comments:
            return ""
        # "--" may not appear inside an HTML comment
        return f"<!-- {node.value.replace('--', '- -')} -->\n"

    def render_horizontal_rule(self, node: HorizontalRule, ctx: RenderContext) -> str:
        return f"<hr{self._class('org-horizontal-rule')} />\n"

    def render_drawer(self, node: Drawer, ctx: RenderContext) -> str:
        name = node.name.lower()
        sb = StringBuilder()
        classes = self._class("org-drawer", f"org-drawer-{name}")
        sb.append(f'<div{classes} data-name="{escape_html(node.name)}">\n')
        if node.properties:
            sb.append("<dl>\n")
            for key, value in node.properties.items():
                sb.append(f"<dt>{escape_html(key)}</dt><dd>{escape_html(value)}</dd>\n")
            sb.append("</dl>\n")
        if node.contents:
            sb.append(f"<pre>{escape_html(node.contents)}</pre>\n")
        sb.append("</div>\n")
        return sb.build()

    def render_footnote(self, node: Footnote, ctx: RenderContext) -> str:
        return ""  # Rendered in footnotes section

    def _render_footnotes_section(self, sb: StringBuilder, ctx: RenderContext) -> None:
        """Render referenced definitions, in order of first reference."""
        sb.append(f"<section{self._class('org-footnotes')}>\n")
        sb.append("<ol>\n")
        for label in ctx.footnote_order:
            definition = ctx.footnotes.get(label)
            if definition is None:
                continue
            slug = escape_html(self._slugify(label) or label)
            sb.append(f'<li id="fn-{slug}">')
            sb.append(self.render_children(definition, ctx))
            sb.append(f' <a href="#fnref-{slug}">↩</a></li>\n')
        sb.append("</ol>\n")
        sb.append("</section>\n")

    # =========================================================================
    # Inline
    # =========================================================================

    def render_text(self, node: Text, ctx: RenderContext) -> str:
        return escape_html(node.value)

    def render_bold(self, node: Bold, ctx: RenderContext) -> str:
        return f"<strong{self._class('org-bold')}>{self.render_children(node, ctx)}</strong>"

    def render_italic(self, node: Italic, ctx: RenderContext) -> str:
        return f"<em{self._class('org-italic')}>{self.render_children(node, ctx)}</em>"

    def render_underline(self, node: Underline, ctx: RenderContext) -> str:
        return f"<u{self._class('org-underline')}>{self.render_children(node, ctx)}</u>"

    def render_strikethrough(self, node: Strikethrough, ctx: RenderContext) -> str:
        return f"<del{self._class('org-strikethrough')}>{self.render_children(node, ctx)}</del>"

    def render_code(self, node: Code, ctx: RenderContext) -> str:
        return f"<code{self._class('org-code')}>{escape_html(node.value)}</code>"

    def render_verbatim(self, node: Verbatim, ctx: RenderContext) -> str:
        return f"<code{self._class('org-verbatim')}>{escape_html(node.value)}</code>"

    def render_link(self, node: Link, ctx: RenderContext) -> str:
        href = node.url
        if node.protocol == "file":
            href = href.removeprefix("file:")
        text = node.description or node.url
        return f'<a{self._class("org-link")} href="{escape_html(href)}">{escape_html(text)}</a>'

    def render_footnote_ref(self, node: FootnoteRef, ctx: RenderContext) -> str:
        if node.label not in ctx.footnote_order:
            ctx.footnote_order.append(node.label)
        number = ctx.footnote_order.index(node.label) + 1
        slug = escape_html(self._slugify(node.label) or node.label)
        return (
            f'<sup{self._class("org-footnote-ref")}>'
            f'<a href="#fn-{slug}" id="fnref-{slug}">{number}</a></sup>'
        )

    def render_timestamp(self, node: Timestamp, ctx: RenderContext) -> str:
        stamp = node.date.isoformat()
        if node.time is not None:
            stamp += f"T{node.time.strftime('%H:%M')}"
        attrs = self._class("org-timestamp", f"org-timestamp-{node.timestamp_type}")
        if self._add_data_attributes:
            if node.end_time is not None:
                attrs += f' data-end-time="{node.end_time.strftime("%H:%M")}"'
            if node.repeater:
                attrs += f' data-repeater="{escape_html(node.repeater)}"'
            if node.warning:
                attrs += f' data-warning="{escape_html(node.warning)}"'
        return f'<time{attrs} datetime="{stamp}">{escape_html(node.raw)}</time>'

    def render_fallback(self, node: Node, ctx: RenderContext) -> str:
        if isinstance(node, Container):
            return super().render_fallback(node, ctx)
        return escape_html(super().render_fallback(node, ctx))
