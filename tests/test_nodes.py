"""Tests for the mutable AST node model."""

import datetime

import pytest

from orger.location import SourceLocation
from orger.nodes import (
    Bold,
    CodeBlock,
    Document,
    Heading,
    Link,
    List,
    ListItem,
    Paragraph,
    Text,
    Timestamp,
)

LOC = SourceLocation(lineno=1, col_offset=1)


class TestParentReferences:
    """Parent back-references follow ownership."""

    def test_children_adopted_on_construction(self) -> None:
        """Children passed to the constructor point back at their container."""
        text = Text(value="hi")
        para = Paragraph(children=[text])
        assert text.parent is para

    def test_append_child_sets_parent(self) -> None:
        doc = Document()
        para = Paragraph()
        doc.append_child(para)
        assert para.parent is doc
        assert doc.children == [para]

    def test_append_moves_from_previous_parent(self) -> None:
        """A node never has two owners."""
        first = Paragraph()
        second = Paragraph()
        doc = Document(children=[first, second])
        text = Text(value="moving")
        first.append_child(text)

        second.append_child(text)

        assert text.parent is second
        assert first.children == []
        assert second.children == [text]
        assert doc.children == [first, second]

    def test_remove_child(self) -> None:
        text = Text(value="x")
        para = Paragraph(children=[text])
        assert para.remove_child(text) is text
        assert text.parent is None
        assert para.children == []

    def test_remove_missing_child_returns_none(self) -> None:
        para = Paragraph()
        assert para.remove_child(Text(value="stranger")) is None

    def test_remove_uses_identity_not_equality(self) -> None:
        """Equal siblings are told apart by identity."""
        a = Text(value="same")
        b = Text(value="same")
        para = Paragraph(children=[a, b])
        para.remove_child(b)
        assert para.children[0] is a
        assert len(para.children) == 1

    def test_replace_child_with_node(self) -> None:
        old = Text(value="old")
        new = Text(value="new")
        para = Paragraph(children=[old])
        assert para.replace_child(old, new) is old
        assert para.children == [new]
        assert new.parent is para
        assert old.parent is None

    def test_replace_child_with_list(self) -> None:
        old = Text(value="old")
        para = Paragraph(children=[Text(value="a"), old, Text(value="z")])
        para.replace_child(old, [Text(value="b"), Text(value="c")])
        assert [child.value for child in para.children] == ["a", "b", "c", "z"]
        assert all(child.parent is para for child in para.children)

    def test_insert_child(self) -> None:
        para = Paragraph(children=[Text(value="b")])
        para.insert_child(0, Text(value="a"))
        assert [child.value for child in para.children] == ["a", "b"]

    def test_append_existing_child_moves_it(self) -> None:
        """Re-appending a child moves it instead of duplicating it."""
        a = Text(value="a")
        b = Text(value="b")
        para = Paragraph(children=[a, b])
        para.append_child(a)
        assert [child.value for child in para.children] == ["b", "a"]
        assert a.parent is para

    def test_insert_existing_child(self) -> None:
        a, b, c = Text(value="a"), Text(value="b"), Text(value="c")
        para = Paragraph(children=[a, b, c])
        para.insert_child(3, a)
        assert [child.value for child in para.children] == ["b", "c", "a"]
        para.insert_child(0, a)
        assert [child.value for child in para.children] == ["a", "b", "c"]
        assert a.parent is para

    def test_title_node_moved_into_children(self) -> None:
        """A node appended to its own heading leaves title_nodes."""
        title = Text(value="Title")
        heading = Heading(level=1, title_nodes=[title])
        heading.append_child(title)
        assert heading.title_nodes == []
        assert len(heading.children) == 1
        assert heading.children[0] is title
        assert title.parent is heading

    def test_replace_child_with_existing_sibling(self) -> None:
        a, b, c = Text(value="a"), Text(value="b"), Text(value="c")
        para = Paragraph(children=[a, b, c])
        assert para.replace_child(a, b) is a
        assert [child.value for child in para.children] == ["b", "c"]
        assert a.parent is None
        assert b.parent is para

    def test_replace_child_keeping_old(self) -> None:
        """Listing the replaced node among the replacements inserts siblings."""
        old = Text(value="old")
        extra = Text(value="extra")
        para = Paragraph(children=[old])
        para.replace_child(old, [old, extra])
        assert [child.value for child in para.children] == ["old", "extra"]
        assert old.parent is para
        assert extra.parent is para

    def test_set_children_releases_old(self) -> None:
        old = Text(value="old")
        para = Paragraph(children=[old])
        para.set_children([Text(value="new")])
        assert old.parent is None
        assert para.children[0].parent is para

    def test_detach(self) -> None:
        text = Text(value="x")
        para = Paragraph(children=[text])
        assert text.detach() is text
        assert text.parent is None
        assert para.children == []

    def test_detach_when_detached_is_noop(self) -> None:
        text = Text(value="x")
        assert text.detach() is text

    def test_depth_and_path(self) -> None:
        text = Text(value="x")
        para = Paragraph(children=[text])
        doc = Document(children=[para])
        assert doc.depth == 0
        assert text.depth == 2
        assert text.path() == [doc, para, text]

    def test_index_of(self) -> None:
        a = Text(value="a")
        b = Text(value="b")
        para = Paragraph(children=[a, b])
        assert para.index_of(b) == 1
        assert para.index_of(Text(value="b")) == -1

    def test_title_nodes_owned_by_heading(self) -> None:
        """Title nodes belong to the heading but are not section content."""
        title = Text(value="Title")
        heading = Heading(level=1, title="Title", title_nodes=[title])
        assert title.parent is heading
        assert heading.children == []
        assert list(heading.iter_children()) == [title]

    def test_remove_title_node(self) -> None:
        title = Text(value="Title")
        heading = Heading(level=1, title="Title", title_nodes=[title])
        heading.remove_child(title)
        assert heading.title_nodes == []

    def test_attach_parents_rewires_subtree(self) -> None:
        text = Text(value="x")
        para = Paragraph(children=[text])
        doc = Document(children=[para])
        text._parent = None
        doc.attach_parents()
        assert text.parent is para


class TestEquality:
    """Equality ignores location and parents."""

    def test_location_excluded(self) -> None:
        assert Text(value="x", location=LOC) == Text(value="x")

    def test_parent_excluded(self) -> None:
        attached = Text(value="x")
        Paragraph(children=[attached])
        assert attached == Text(value="x")

    def test_payload_compared(self) -> None:
        assert Heading(level=1, title="a") != Heading(level=2, title="a")

    def test_kind_compared(self) -> None:
        assert Paragraph() != Document()


class TestClone:
    """Cloning re-parents copies to the clone."""

    def test_deep_clone(self) -> None:
        para = Paragraph(children=[Text(value="a"), Bold(children=[Text(value="b")])])
        doc = Document(children=[para], properties={"title": "T"})

        copy = doc.clone(deep=True)

        assert copy == doc
        assert copy.parent is None
        assert copy.children[0] is not para
        assert copy.children[0].parent is copy
        assert copy.children[0].children[1].children[0].parent is copy.children[0].children[1]

    def test_clone_copies_mutable_payload(self) -> None:
        doc = Document(properties={"title": "T"})
        copy = doc.clone()
        copy.properties["title"] = "changed"
        assert doc.properties["title"] == "T"

    def test_shallow_clone_drops_children(self) -> None:
        para = Paragraph(children=[Text(value="a")])
        copy = para.clone()
        assert copy.children == []
        assert para.children[0].parent is para

    def test_clone_of_attached_node_starts_detached(self) -> None:
        text = Text(value="a")
        para = Paragraph(children=[text])
        copy = text.clone()
        assert copy.parent is None
        assert para.children == [text]

    def test_shallow_heading_clone_keeps_title(self) -> None:
        heading = Heading(
            level=2,
            title="T",
            tags=["x"],
            title_nodes=[Text(value="T")],
            children=[Paragraph()],
        )
        copy = heading.clone()
        assert copy.title_nodes == [Text(value="T")]
        assert copy.title_nodes[0].parent is copy
        assert copy.children == []
        copy.tags.append("y")
        assert heading.tags == ["x"]


class TestTraversal:
    """walk, find_all, find_one and text_content."""

    def _doc(self) -> Document:
        return Document(
            children=[
                Heading(level=1, title="H", title_nodes=[Text(value="H")]),
                Paragraph(children=[Text(value="a "), Bold(children=[Text(value="b")])]),
            ]
        )

    def test_walk_is_preorder(self) -> None:
        doc = self._doc()
        kinds = [node.kind for node in doc.walk()]
        assert kinds == ["document", "heading", "text", "paragraph", "text", "bold", "text"]

    def test_find_all_by_kind_and_class(self) -> None:
        doc = self._doc()
        assert len(doc.find_all("text")) == 3
        assert doc.find_all(Bold) == [Bold(children=[Text(value="b")])]

    def test_find_one(self) -> None:
        doc = self._doc()
        assert doc.find_one("bold") is doc.children[1].children[1]
        assert doc.find_one("table") is None

    def test_text_content(self) -> None:
        doc = self._doc()
        assert doc.children[1].text_content() == "a b"


class TestNodeFields:
    """Kind-specific fields and derived properties."""

    def test_link_description_defaults_to_url(self) -> None:
        link = Link(url="https://example.com")
        assert link.description == "https://example.com"
        assert link.protocol == "https"

    def test_link_without_scheme(self) -> None:
        link = Link(url="./notes.org", description="Notes")
        assert link.protocol is None
        assert link.text_content() == "Notes"

    def test_list_item_checked(self) -> None:
        assert ListItem(checkbox="checked").checked is True
        assert ListItem(checkbox="unchecked").checked is False
        assert ListItem(checkbox="partial").checked is None
        assert ListItem().checked is None

    def test_nested_lists(self) -> None:
        nested = List()
        item = ListItem(children=[Text(value="a"), nested])
        assert item.nested_lists == [nested]

    def test_list_ordered(self) -> None:
        assert List(list_type="ordered").ordered
        assert not List(list_type="descriptive").ordered

    def test_document_properties(self) -> None:
        doc = Document()
        doc.set_property("TITLE", "Notes").set_property("Author", "Ann")
        assert doc.title == "Notes"
        assert doc.author == "Ann"
        assert doc.date is None
        assert doc.get_property("title") == "Notes"
        assert doc.get_property("missing", "x") == "x"

    def test_code_block_text_content(self) -> None:
        assert CodeBlock(value="x = 1", language="python").text_content() == "x = 1"

    def test_timestamp_text_content(self) -> None:
        stamp = Timestamp(
            raw="<2024-01-15 Mon>",
            timestamp_type="active",
            date=datetime.date(2024, 1, 15),
        )
        assert stamp.text_content() == "<2024-01-15 Mon>"

    def test_kw_only(self) -> None:
        with pytest.raises(TypeError):
            Text("positional")  # type: ignore[misc]
