"""Tests for the HTML renderer."""

from dataclasses import dataclass
from typing import ClassVar

import pytest

from orger import Document, HtmlRenderer, Leaf, Paragraph, RenderError, parse
from orger.highlighting import set_highlighter
from orger.nodes import Node
from orger.renderers.base import RenderContext


def html(source: str, **options: object) -> str:
    options.setdefault("add_type_classes", False)
    return HtmlRenderer(**options).render(parse(source))  # type: ignore[arg-type]


@dataclass(slots=True, kw_only=True)
class Mention(Leaf):
    """A node kind no renderer knows about."""

    kind: ClassVar[str] = "mention"

    value: str = ""


class TestBlocks:
    """Block-level output."""

    def test_paragraph(self) -> None:
        assert html("text") == "<div>\n<p>text</p>\n</div>\n"

    def test_type_classes(self) -> None:
        out = HtmlRenderer().render(parse("text"))
        assert out == '<div class="org-document">\n<p class="org-paragraph">text</p>\n</div>\n'

    def test_heading_decorations(self) -> None:
        out = html("* TODO [#A] Task :work:")
        assert out == (
            '<div>\n<h1 id="task"><span class="org-todo">TODO</span> '
            '<span class="org-priority">[#A]</span> Task '
            '<span class="org-tags"><span class="org-tag">work</span></span></h1>\n</div>\n'
        )

    def test_done_keyword(self) -> None:
        assert '<span class="org-done">DONE</span>' in html("* DONE Task")

    def test_heading_levels_capped(self) -> None:
        out = html("* a\n** b\n******* deep")
        assert '<h1 id="a">' in out
        assert '<h2 id="b">' in out
        assert '<h6 id="deep">' in out

    def test_duplicate_slugs(self) -> None:
        out = html("* A\n* A\n* A")
        assert 'id="a"' in out
        assert 'id="a-1"' in out
        assert 'id="a-2"' in out

    def test_section_content_follows_heading(self) -> None:
        out = html("* Title\nBody")
        assert out == '<div>\n<h1 id="title">Title</h1>\n<p>Body</p>\n</div>\n'

    def test_data_attributes(self) -> None:
        out = html("* TODO [#B] Task :a:b:", add_data_attributes=True)
        assert 'data-todo="TODO" data-priority="B" data-tags="a b"' in out

    def test_custom_slugify(self) -> None:
        out = html("* Hello", slugify=lambda title: "custom")
        assert 'id="custom"' in out

    def test_lists(self) -> None:
        out = html("- a\n  - b\n- c")
        assert out == (
            "<div>\n<ul>\n<li>a\n<ul>\n<li>b</li>\n</ul>\n</li>\n<li>c</li>\n</ul>\n</div>\n"
        )

    def test_ordered_list(self) -> None:
        assert "<ol>\n<li>a</li>\n<li>b</li>\n</ol>" in html("1. a\n2. b")

    def test_checkbox(self) -> None:
        out = html("- [X] done\n- [ ] open")
        assert '<li><input type="checkbox" disabled checked /> done</li>' in out
        assert '<li><input type="checkbox" disabled /> open</li>' in out

    def test_descriptive_list(self) -> None:
        out = html("- term :: meaning")
        assert "<dl>\n<dt>term</dt>\n<dd>meaning</dd>\n</dl>" in out

    def test_table_with_header(self) -> None:
        out = html("| A | B |\n|---+---|\n| 1 | 2 |")
        assert out == (
            "<div>\n<table>\n"
            "<thead>\n<tr>\n<th>A</th>\n<th>B</th>\n</tr>\n</thead>\n"
            "<tbody>\n<tr>\n<td>1</td>\n<td>2</td>\n</tr>\n</tbody>\n"
            "</table>\n</div>\n"
        )

    def test_table_without_header(self) -> None:
        out = html("| a |")
        assert "<thead>" not in out
        assert "<td>a</td>" in out

    def test_code_block(self) -> None:
        out = html("#+BEGIN_SRC python\nprint('<hi>')\n#+END_SRC")
        assert (
            '<pre data-language="python"><code class="language-python">'
            "print(&#x27;&lt;hi&gt;&#x27;)</code></pre>\n"
        ) in out

    def test_code_block_without_language(self) -> None:
        out = html("#+BEGIN_SRC\nx\n#+END_SRC")
        assert "<pre><code>x</code></pre>" in out

    def test_comment(self) -> None:
        assert "<!-- note -->" in html("# note")

    def test_comment_dashes(self) -> None:
        assert "<!-- a - -> b -->" in html("# a --> b")

    def test_comment_dropped(self) -> None:
        assert "<!--" not in html("# note", preserve_comments=False)

    def test_horizontal_rule(self) -> None:
        assert "<hr />" in html("-----")

    def test_drawer(self) -> None:
        out = html("* H\n:PROPERTIES:\n:ID: abc\n:END:")
        assert '<div data-name="PROPERTIES">\n<dl>\n<dt>ID</dt><dd>abc</dd>\n</dl>\n</div>' in out


class TestFootnotes:
    """Footnote references and the trailing footnotes section."""

    def test_reference_and_section(self) -> None:
        out = html("Text[fn:1].\n\n[fn:1] The note.")
        assert '<sup><a href="#fn-1" id="fnref-1">1</a></sup>' in out
        assert (
            '<section>\n<ol>\n<li id="fn-1">The note. <a href="#fnref-1">↩</a></li>\n'
            "</ol>\n</section>\n</div>\n"
        ) in out

    def test_numbered_by_first_reference(self) -> None:
        out = html("a[fn:x] b[fn:y] c[fn:x]\n\n[fn:y] Y.\n\n[fn:x] X.")
        assert '<a href="#fn-x" id="fnref-x">1</a>' in out
        assert '<a href="#fn-y" id="fnref-y">2</a>' in out
        assert out.index('<li id="fn-x">') < out.index('<li id="fn-y">')

    def test_unreferenced_definitions_omitted(self) -> None:
        out = html("plain\n\n[fn:1] Orphan.")
        assert "<section>" not in out
        assert "Orphan" not in out


class TestInline:
    """Inline output."""

    def test_emphasis(self) -> None:
        out = html("*b* /i/ _u_ +s+ ~c~ =v=")
        assert out == (
            "<div>\n<p><strong>b</strong> <em>i</em> <u>u</u> <del>s</del> "
            "<code>c</code> <code>v</code></p>\n</div>\n"
        )

    def test_escaping(self) -> None:
        assert html('a < b & "c"') == "<div>\n<p>a &lt; b &amp; &quot;c&quot;</p>\n</div>\n"

    def test_link(self) -> None:
        out = html("[[https://orgmode.org][Org <mode>]]")
        assert '<a href="https://orgmode.org">Org &lt;mode&gt;</a>' in out

    def test_file_link(self) -> None:
        assert '<a href="notes.org">Notes</a>' in html("[[file:notes.org][Notes]]")

    def test_timestamp(self) -> None:
        out = html("<2024-01-15 Mon 10:00>")
        assert '<time datetime="2024-01-15T10:00">&lt;2024-01-15 Mon 10:00&gt;</time>' in out

    def test_timestamp_classes(self) -> None:
        out = HtmlRenderer().render(parse("[2024-01-15]"))
        assert 'class="org-timestamp org-timestamp-inactive" datetime="2024-01-15"' in out

    def test_timestamp_data_attributes(self) -> None:
        out = html("<2024-01-15 Mon 10:00-11:00 +1w -2d>", add_data_attributes=True)
        assert 'data-end-time="11:00" data-repeater="+1w" data-warning="-2d"' in out


class TestDocument:
    """Full-page output and dispatch."""

    def test_full_document(self) -> None:
        out = html("#+TITLE: Notes <1>\n#+AUTHOR: Ann\n\nBody", full_document=True)
        assert out.startswith("<!DOCTYPE html>\n")
        assert "<title>Notes &lt;1&gt;</title>" in out
        assert '<meta name="author" content="Ann">' in out
        assert "<h1>Notes &lt;1&gt;</h1>" in out
        assert out.endswith("</body>\n</html>\n")

    def test_untitled_document(self) -> None:
        assert "<title>Untitled</title>" in html("Body", full_document=True)

    def test_rejects_non_document(self) -> None:
        with pytest.raises(RenderError, match="Expected a Document"):
            HtmlRenderer().render(Paragraph())  # type: ignore[arg-type]

    def test_unknown_kind_uses_fallback(self) -> None:
        doc = Document(children=[Paragraph(children=[Mention(value="<@ann>")])])
        out = HtmlRenderer(add_type_classes=False).render(doc)
        assert out == "<div>\n<p>&lt;@ann&gt;</p>\n</div>\n"

    def test_override(self) -> None:
        def bold(node: Node, ctx: RenderContext) -> str:
            return f"<b>{ctx.render_all(node.children)}</b>"  # type: ignore[attr-defined]

        out = html("*x*", renderers={"bold": bold})
        assert "<p><b>x</b></p>" in out

    def test_override_for_custom_kind(self) -> None:
        doc = Document(children=[Paragraph(children=[Mention(value="ann")])])
        renderer = HtmlRenderer(
            add_type_classes=False,
            renderers={"mention": lambda node, ctx: f"@{node.value}"},  # type: ignore[attr-defined]
        )
        assert "<p>@ann</p>" in renderer.render(doc)

    def test_renderer_is_reusable(self) -> None:
        renderer = HtmlRenderer(add_type_classes=False)
        doc = parse("* A\n\nx[fn:1]\n\n[fn:1] n")
        assert renderer.render(doc) == renderer.render(doc)


class TestHighlighting:
    """Source blocks go through the configured highlighter."""

    def test_custom_highlighter(self) -> None:
        set_highlighter(lambda code, language: f'<pre class="hl-{language}">{code}</pre>')
        try:
            out = html("#+BEGIN_SRC python\nx = 1\n#+END_SRC", highlight=True)
        finally:
            set_highlighter(None)
        assert '<pre class="hl-python">x = 1</pre>\n' in out

    def test_highlight_off_by_default(self) -> None:
        set_highlighter(lambda code, language: "HIGHLIGHTED")
        try:
            out = html("#+BEGIN_SRC python\nx = 1\n#+END_SRC")
        finally:
            set_highlighter(None)
        assert "HIGHLIGHTED" not in out

    def test_failing_highlighter_falls_back(self) -> None:
        def broken(code: str, language: str) -> str:
            raise RuntimeError("no")

        set_highlighter(broken)
        try:
            out = html("#+BEGIN_SRC python\nx = 1\n#+END_SRC", highlight=True)
        finally:
            set_highlighter(None)
        assert '<code class="language-python">x = 1</code>' in out
