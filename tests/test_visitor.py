"""Tests for BaseVisitor and transform."""

import pytest

from orger import Bold, Document, Heading, Paragraph, Text, parse
from orger.nodes import Comment, Node
from orger.visitor import BaseVisitor, transform


class HeadingCollector(BaseVisitor[None]):
    def __init__(self) -> None:
        self.titles: list[str] = []

    def visit_heading(self, node: Heading) -> None:
        self.titles.append(node.title)


class KindRecorder(BaseVisitor[None]):
    def __init__(self) -> None:
        self.kinds: list[str] = []

    def visit_default(self, node: Node) -> None:
        self.kinds.append(node.kind)


class TestBaseVisitor:
    """Dispatch and automatic child walking."""

    def test_collect_headings(self) -> None:
        collector = HeadingCollector()
        collector.visit(parse("* A\n** B\ntext\n* C"))
        assert collector.titles == ["A", "B", "C"]

    def test_default_sees_every_kind(self) -> None:
        recorder = KindRecorder()
        recorder.visit(parse("* H *b*\n- item"))
        assert recorder.kinds == [
            "document",
            "heading",
            "text",
            "bold",
            "text",
            "list",
            "list_item",
            "text",
        ]

    def test_return_value(self) -> None:
        class Counter(BaseVisitor[int]):
            def visit_document(self, node: Document) -> int:
                return len(node.children)

        assert Counter().visit(parse("a\n\nb")) == 2

    def test_visit_may_detach(self) -> None:
        class Stripper(BaseVisitor[None]):
            def visit_comment(self, node: Comment) -> None:
                node.detach()

        doc = parse("# one\n\ntext\n\n# two")
        Stripper().visit(doc)
        assert [type(node) for node in doc.children] == [Paragraph]


class TestTransform:
    """In-place bottom-up rewriting."""

    def test_demote_headings(self) -> None:
        def demote(node: Node) -> Node:
            if isinstance(node, Heading):
                node.level += 1
            return node

        doc = parse("* A\n** B")
        result = transform(doc, demote)
        assert result is doc
        assert doc.children[0].level == 2
        assert doc.children[0].children[0].level == 3

    def test_replace_node(self) -> None:
        def unbold(node: Node) -> Node:
            if isinstance(node, Bold):
                return Text(value=node.text_content().upper())
            return node

        doc = transform(parse("a *b* c"), unbold)
        paragraph = doc.children[0]
        assert paragraph.children[1] == Text(value="B")
        assert paragraph.children[1].parent is paragraph

    def test_remove_node(self) -> None:
        doc = transform(parse("# c\n\ntext"), lambda node: None if node.kind == "comment" else node)
        assert [node.kind for node in doc.children] == ["paragraph"]

    def test_bottom_up(self) -> None:
        seen: list[str] = []

        def record(node: Node) -> Node:
            seen.append(node.kind)
            return node

        transform(parse("*b*"), record)
        assert seen == ["text", "bold", "paragraph", "document"]

    def test_title_nodes_transformed(self) -> None:
        def shout(node: Node) -> Node:
            if isinstance(node, Text):
                node.value = node.value.upper()
            return node

        doc = transform(parse("* quiet"), shout)
        assert doc.children[0].title_nodes == [Text(value="QUIET")]

    def test_replace_root(self) -> None:
        replacement = Document()
        assert transform(parse("x"), lambda n: replacement if n.kind == "document" else n) is (
            replacement
        )

    def test_cannot_remove_root(self) -> None:
        with pytest.raises(TypeError, match="cannot remove root"):
            transform(parse("x"), lambda node: None if node.kind == "document" else node)

    def test_root_must_stay_document(self) -> None:
        with pytest.raises(TypeError):
            transform(parse("x"), lambda node: Paragraph() if node.kind == "document" else node)
