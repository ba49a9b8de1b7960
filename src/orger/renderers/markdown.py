"""Markdown renderer.

Renders the typed AST to CommonMark, with GitHub Flavored Markdown
extensions (strikethrough, task lists, pipe tables) when ``gfm`` is on.
Constructs without a Markdown equivalent degrade to plain text: drawers are
dropped and timestamps keep their Org spelling.
"""

from __future__ import annotations

import json
from collections.abc import Mapping

from orger.nodes import (
    Bold,
    Code,
    CodeBlock,
    Comment,
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
from orger.renderers.base import BaseRenderer, RenderContext, RenderFunction
from orger.stringbuilder import StringBuilder
from orger.utils.text import indent_lines


class MarkdownRenderer(BaseRenderer):
    """Render AST to Markdown.

    Blocks are separated by one blank line; nested lists are indented by
    ``indent_size`` spaces per level.

    Usage:
        >>> from orger import parse
        >>> MarkdownRenderer().render(parse("* Title\\n\\nSome /text/."))
        '# Title\\n\\nSome *text*.\\n'

    """

    __slots__ = (
        "_gfm",
        "_frontmatter",
        "_allow_html",
        "_preserve_line_breaks",
        "_indent_size",
    )

    def __init__(
        self,
        *,
        gfm: bool = True,
        frontmatter: bool = False,
        allow_html: bool = False,
        preserve_line_breaks: bool = False,
        indent_size: int = 2,
        renderers: Mapping[str, RenderFunction] | None = None,
    ) -> None:
        """Initialize renderer.

        Args:
            gfm: Use GFM strikethrough, task list checkboxes and pipe tables
            frontmatter: Emit document properties as a YAML frontmatter block
            allow_html: Use inline HTML where Markdown has no syntax
                (underline; tables when ``gfm`` is off)
            preserve_line_breaks: Keep paragraph line breaks as hard breaks
            indent_size: Spaces per nested list level
            renderers: Per-kind render overrides
        """
        super().__init__(renderers=renderers)
        self._gfm = gfm
        self._frontmatter = frontmatter
        self._allow_html = allow_html
        self._preserve_line_breaks = preserve_line_breaks
        self._indent_size = indent_size

    def _render_blocks(self, nodes: list[Node], ctx: RenderContext) -> str:
        rendered = (ctx.render(node) for node in nodes)
        return "\n\n".join(block for block in rendered if block)

    # =========================================================================
    # Blocks
    # =========================================================================

    def render_document(self, node: Document, ctx: RenderContext) -> str:
        sb = StringBuilder()
        if self._frontmatter and node.properties:
            sb.append_line("---")
            for key, value in node.properties.items():
                # A JSON string is a valid YAML scalar
                sb.append_line(f"{key}: {json.dumps(value, ensure_ascii=False)}")
            sb.append_line("---")
            sb.append_line()
        body = self._render_blocks(node.children, ctx)
        if body:
            sb.append_line(body)
        return sb.build()

    def render_heading(self, node: Heading, ctx: RenderContext) -> str:
        parts = ["#" * min(node.level, 6)]
        if node.todo_keyword:
            parts.append(f"**{node.todo_keyword}**")
        if node.priority:
            parts.append(f"[#{node.priority}]")
        title = ctx.render_all(node.title_nodes) if node.title_nodes else node.title
        if title:
            parts.append(title)
        if node.tags:
            parts.append(f"`:{':'.join(node.tags)}:`")

        line = " ".join(parts)
        body = self._render_blocks(node.children, ctx)
        return f"{line}\n\n{body}" if body else line

    def render_paragraph(self, node: Paragraph, ctx: RenderContext) -> str:
        text = self.render_children(node, ctx)
        if self._preserve_line_breaks:
            text = text.replace("\n", "  \n")
        return text

    def render_list(self, node: List, ctx: RenderContext) -> str:
        """Render list items one per line, nested lists indented."""
        items = [child for child in node.children if isinstance(child, ListItem)]
        lines = []
        for number, item in enumerate(items, start=1):
            marker = f"{number}." if node.ordered else "-"
            lines.append(self._render_item(item, marker, ctx))
        return "\n".join(lines)

    def _render_item(self, item: ListItem, marker: str, ctx: RenderContext) -> str:
        parts = [marker]
        if item.checkbox is not None:
            if self._gfm:
                parts.append("[x]" if item.checkbox == "checked" else "[ ]")
            else:
                parts.append({"checked": "[X]", "unchecked": "[ ]", "partial": "[-]"}[item.checkbox])
        if item.term is not None:
            parts.append(f"**{item.term}**:")

        inline = [child for child in item.children if not isinstance(child, List)]
        text = ctx.render_all(inline)
        if text:
            parts.append(text)

        width = self._indent_size if marker == "-" else max(self._indent_size, len(marker) + 1)
        sb = StringBuilder()
        sb.append(indent_lines(" ".join(parts), width))
        for nested in item.nested_lists:
            rendered = ctx.render(nested)
            sb.append("\n")
            sb.append(" " * width + indent_lines(rendered, width))
        return sb.build()

    def render_list_item(self, node: ListItem, ctx: RenderContext) -> str:
        return self._render_item(node, "1." if node.ordered else "-", ctx)

    def render_table(self, node: Table, ctx: RenderContext) -> str:
        rows = [row for row in node.children if isinstance(row, TableRow)]
        if not rows:
            return ""
        if not self._gfm:
            if self._allow_html:
                return self._render_html_table(rows, ctx)
            return "\n".join(
                " | ".join(ctx.render(cell) for cell in row.children) for row in rows
            )

        # Markdown tables always have a header; the first row stands in
        header_index = next((i for i, row in enumerate(rows) if row.is_header), 0)
        width = node.column_count
        lines = [self._render_row(rows[header_index], width, ctx)]
        lines.append("| " + " | ".join(["---"] * width) + " |")
        lines.extend(
            self._render_row(row, width, ctx) for i, row in enumerate(rows) if i != header_index
        )
        return "\n".join(lines)

    def _render_row(self, row: TableRow, width: int, ctx: RenderContext) -> str:
        cells = [ctx.render(cell).replace("|", "\\|") for cell in row.children]
        cells.extend([""] * (width - len(cells)))
        return "| " + " | ".join(cells) + " |"

    def _render_html_table(self, rows: list[TableRow], ctx: RenderContext) -> str:
        sb = StringBuilder()
        sb.append_line("<table>")
        for row in rows:
            tag = "th" if row.is_header else "td"
            cells = "".join(f"<{tag}>{ctx.render(cell)}</{tag}>" for cell in row.children)
            sb.append_line(f"<tr>{cells}</tr>")
        sb.append("</table>")
        return sb.build()

    def render_table_row(self, node: TableRow, ctx: RenderContext) -> str:
        return self._render_row(node, len(node.children), ctx)

    def render_table_cell(self, node: TableCell, ctx: RenderContext) -> str:
        return self.render_children(node, ctx)

    def render_code_block(self, node: CodeBlock, ctx: RenderContext) -> str:
        fence = "````" if "```" in node.value else "```"
        sb = StringBuilder()
        sb.append_line(f"{fence}{node.language or ''}")
        if node.value:
            sb.append_line(node.value)
        sb.append(fence)
        return sb.build()

    def render_comment(self, node: Comment, ctx: RenderContext) -> str:
        if not self._allow_html:
            return ""
        return f"<!-- {node.value.replace('--', '- -')} -->"

    def render_horizontal_rule(self, node: HorizontalRule, ctx: RenderContext) -> str:
        return "---"

    def render_drawer(self, node: Drawer, ctx: RenderContext) -> str:
        return ""

    def render_footnote(self, node: Footnote, ctx: RenderContext) -> str:
        return f"[^{node.label}]: {self.render_children(node, ctx)}".rstrip()

    # =========================================================================
    # Inline
    # =========================================================================

    def render_text(self, node: Text, ctx: RenderContext) -> str:
        return node.value

    def render_bold(self, node: Bold, ctx: RenderContext) -> str:
        return f"**{self.render_children(node, ctx)}**"

    def render_italic(self, node: Italic, ctx: RenderContext) -> str:
        return f"*{self.render_children(node, ctx)}*"

    def render_underline(self, node: Underline, ctx: RenderContext) -> str:
        text = self.render_children(node, ctx)
        return f"<u>{text}</u>" if self._allow_html else f"_{text}_"

    def render_strikethrough(self, node: Strikethrough, ctx: RenderContext) -> str:
        text = self.render_children(node, ctx)
        if self._gfm:
            return f"~~{text}~~"
        return f"<del>{text}</del>" if self._allow_html else text

    def render_code(self, node: Code, ctx: RenderContext) -> str:
        return _code_span(node.value)

    def render_verbatim(self, node: Verbatim, ctx: RenderContext) -> str:
        return _code_span(node.value)

    def render_link(self, node: Link, ctx: RenderContext) -> str:
        if not node.description or node.description == node.url:
            return f"<{node.url}>"
        return f"[{node.description}]({node.url})"

    def render_footnote_ref(self, node: FootnoteRef, ctx: RenderContext) -> str:
        return f"[^{node.label}]"

    def render_timestamp(self, node: Timestamp, ctx: RenderContext) -> str:
        return node.raw


def _code_span(value: str) -> str:
    """Backtick span long enough to contain any backtick run in ``value``."""
    fence = "`"
    while fence in value:
        fence += "`"
    if value.startswith("`") or value.endswith("`"):
        return f"{fence} {value} {fence}"
    return f"{fence}{value}{fence}"
