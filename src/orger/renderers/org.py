"""Org renderer.

Serializes the typed AST back to Org markup. Output is normalized rather
than byte-identical to the source (keywords first, one blank line between
blocks, two-space list indentation, aligned table rules), but parsing it
again yields a tree equal to the one rendered.
"""

from __future__ import annotations

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
    Markup,
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
from orger.renderers.base import BaseRenderer, RenderContext
from orger.stringbuilder import StringBuilder
from orger.utils.text import indent_lines

_CHECKBOX_MARKS = {"unchecked": "[ ]", "checked": "[X]", "partial": "[-]"}

_LIST_INDENT = 2


class OrgRenderer(BaseRenderer):
    """Render AST to Org markup.

    Usage:
        >>> from orger import parse
        >>> OrgRenderer().render(parse("#+title: Notes\\n* TODO [#A] Task :work:"))
        '#+TITLE: Notes\\n\\n* TODO [#A] Task :work:\\n'

    """

    __slots__ = ()

    def _render_blocks(self, nodes: list[Node], ctx: RenderContext) -> str:
        rendered = (ctx.render(node) for node in nodes)
        return "\n\n".join(block for block in rendered if block)

    # =========================================================================
    # Blocks
    # =========================================================================

    def render_document(self, node: Document, ctx: RenderContext) -> str:
        sections = []
        if node.properties:
            sections.append(
                "\n".join(
                    f"#+{key.upper()}: {value}".rstrip() for key, value in node.properties.items()
                )
            )
        body = self._render_blocks(node.children, ctx)
        if body:
            sections.append(body)
        return "\n\n".join(sections) + "\n" if sections else ""

    def render_heading(self, node: Heading, ctx: RenderContext) -> str:
        parts = ["*" * node.level]
        if node.todo_keyword:
            parts.append(node.todo_keyword)
        if node.priority:
            parts.append(f"[#{node.priority}]")
        title = ctx.render_all(node.title_nodes) if node.title_nodes else node.title
        if title:
            parts.append(title)
        if node.tags:
            parts.append(f":{':'.join(node.tags)}:")
        line = " ".join(parts)
        if len(parts) == 1:
            # "*" alone is not a heading
            line += " "

        body = self._render_blocks(node.children, ctx)
        return f"{line}\n\n{body}" if body else line

    def render_paragraph(self, node: Paragraph, ctx: RenderContext) -> str:
        lines = self.render_children(node, ctx).split("\n")
        # A column-0 "[fn:" line would start a footnote definition
        return "\n".join(" " + line if line.startswith("[fn:") else line for line in lines)

    def render_list(self, node: List, ctx: RenderContext) -> str:
        """Render a list at the current nesting depth.

        A top-level list whose items use ``*`` starts one column in, where
        ``*`` is still a bullet rather than a heading.
        """
        items = [child for child in node.children if isinstance(child, ListItem)]
        base = 0
        if ctx.depth == 0 and any(item.bullet == "*" for item in items):
            base = 1
        indent = base + ctx.depth * _LIST_INDENT

        lines = []
        ctx.depth += 1
        try:
            for item in items:
                lines.append(self._render_item(item, indent, ctx))
        finally:
            ctx.depth -= 1
        return "\n".join(lines)

    def _render_item(self, item: ListItem, indent: int, ctx: RenderContext) -> str:
        parts = [item.bullet]
        if item.checkbox is not None:
            parts.append(_CHECKBOX_MARKS[item.checkbox])
        if item.term is not None:
            parts.append(f"{item.term} ::")

        inline = [child for child in item.children if not isinstance(child, List)]
        text = ctx.render_all(inline)
        if text:
            parts.append(text)

        line = " ".join(parts)
        if len(parts) == 1:
            line += " "
        sb = StringBuilder()
        sb.append(" " * indent + indent_lines(line, indent + _LIST_INDENT))
        for nested in item.nested_lists:
            sb.append("\n")
            sb.append(ctx.render(nested))
        return sb.build()

    def render_list_item(self, node: ListItem, ctx: RenderContext) -> str:
        return self._render_item(node, ctx.depth * _LIST_INDENT, ctx)

    def render_table(self, node: Table, ctx: RenderContext) -> str:
        """Render rows with aligned columns and a rule under the header row."""
        rows = [row for row in node.children if isinstance(row, TableRow)]
        cells = [[ctx.render(cell) for cell in row.children] for row in rows]
        width = node.column_count
        widths = [1] * width
        for row_cells in cells:
            for i, text in enumerate(row_cells):
                widths[i] = max(widths[i], len(text))

        rule = "|" + "+".join("-" * (w + 2) for w in widths) + "|" if widths else "|-|"
        if not rows:
            return rule

        lines = []
        for row, row_cells in zip(rows, cells, strict=True):
            padded = [text.ljust(widths[i]) for i, text in enumerate(row_cells)]
            padded.extend(" " * w for w in widths[len(padded) :])
            lines.append("| " + " | ".join(padded) + " |")
            if row.is_header:
                lines.append(rule)
        return "\n".join(lines)

    def render_table_row(self, node: TableRow, ctx: RenderContext) -> str:
        return "| " + " | ".join(ctx.render(cell) for cell in node.children) + " |"

    def render_table_cell(self, node: TableCell, ctx: RenderContext) -> str:
        return self.render_children(node, ctx)

    def render_code_block(self, node: CodeBlock, ctx: RenderContext) -> str:
        header = ["#+BEGIN_SRC"]
        if node.language:
            header.append(node.language)
        for key, value in node.params.items():
            header.append(f":{key} {value}".rstrip())

        sb = StringBuilder()
        sb.append_line(" ".join(header))
        if node.value:
            sb.append_line(node.value)
        sb.append("#+END_SRC")
        return sb.build()

    def render_comment(self, node: Comment, ctx: RenderContext) -> str:
        if node.is_block:
            sb = StringBuilder()
            sb.append_line("#+BEGIN_COMMENT")
            if node.value:
                sb.append_line(node.value)
            sb.append("#+END_COMMENT")
            return sb.build()
        return "\n".join(f"# {line}".rstrip() for line in node.value.split("\n"))

    def render_horizontal_rule(self, node: HorizontalRule, ctx: RenderContext) -> str:
        return "-----"

    def render_drawer(self, node: Drawer, ctx: RenderContext) -> str:
        sb = StringBuilder()
        sb.append_line(f":{node.name}:")
        for key, value in node.properties.items():
            sb.append_line(f":{key}: {value}".rstrip())
        if node.contents:
            sb.append_line(node.contents)
        sb.append(":END:")
        return sb.build()

    def render_footnote(self, node: Footnote, ctx: RenderContext) -> str:
        return f"[fn:{node.label}] {self.render_children(node, ctx)}".rstrip(" ")

    # =========================================================================
    # Inline
    # =========================================================================

    def render_text(self, node: Text, ctx: RenderContext) -> str:
        return node.value

    def _render_markup(self, node: Markup, ctx: RenderContext) -> str:
        return f"{node.delimiter}{self.render_children(node, ctx)}{node.delimiter}"

    def render_bold(self, node: Bold, ctx: RenderContext) -> str:
        return self._render_markup(node, ctx)

    def render_italic(self, node: Italic, ctx: RenderContext) -> str:
        return self._render_markup(node, ctx)

    def render_underline(self, node: Underline, ctx: RenderContext) -> str:
        return self._render_markup(node, ctx)

    def render_strikethrough(self, node: Strikethrough, ctx: RenderContext) -> str:
        return self._render_markup(node, ctx)

    def render_code(self, node: Code, ctx: RenderContext) -> str:
        return f"~{node.value}~"

    def render_verbatim(self, node: Verbatim, ctx: RenderContext) -> str:
        return f"={node.value}="

    def render_link(self, node: Link, ctx: RenderContext) -> str:
        if not node.description or node.description == node.url:
            return f"[[{node.url}]]"
        return f"[[{node.url}][{node.description}]]"

    def render_footnote_ref(self, node: FootnoteRef, ctx: RenderContext) -> str:
        return f"[fn:{node.label}]"

    def render_timestamp(self, node: Timestamp, ctx: RenderContext) -> str:
        return node.raw
