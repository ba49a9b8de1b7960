"""Typed AST nodes for orger.

All AST nodes are slotted, keyword-only dataclasses. Unlike a frozen AST, the
tree is mutable: the parser builds it in place (structural pass, then list
reconstruction, then inline segmentation) and plugin processors may rewrite it
after assembly. Renderers only read it.

Ownership flows strictly parent -> children. Every node keeps a *weak*
back-reference to its parent for traversal and removal; the back-reference is
never followed when cloning, comparing or serializing.

Node Hierarchy:
Node (base)
├── Leaf (never has children)
│   ├── Text, Code, Verbatim
│   ├── Link, FootnoteRef, Timestamp
│   └── CodeBlock, Comment, HorizontalRule, Drawer
└── Container (always exposes ``children``)
    ├── Document
    ├── Heading
    ├── Paragraph
    ├── Markup: Bold, Italic, Underline, Strikethrough
    ├── List, ListItem
    ├── Table, TableRow, TableCell
    └── Footnote

Equality:
``location`` and the parent reference are excluded from comparison, so two
trees are equal when their shape and payloads are equal, wherever they came
from in the source.

"""

import datetime
import weakref
from collections.abc import Iterator
from dataclasses import dataclass, field, fields
from typing import ClassVar, Literal, Self, TypeAlias

from orger.location import SourceLocation

ListType: TypeAlias = Literal["ordered", "unordered", "descriptive"]
CheckboxState: TypeAlias = Literal["unchecked", "checked", "partial"]


# =============================================================================
# Base Node
# =============================================================================


@dataclass(slots=True, kw_only=True, weakref_slot=True)
class Node:
    """Base class for all AST nodes.

    ``kind`` is the tagged-variant discriminator used by renderers and plugin
    processors (``"heading"``, ``"list_item"``, ...).

    """

    kind: ClassVar[str] = "node"

    location: SourceLocation | None = field(default=None, compare=False)
    _parent: "weakref.ReferenceType[Container] | None" = field(
        default=None, init=False, repr=False, compare=False
    )

    @property
    def parent(self) -> "Container | None":
        """The owning container, or None for a root or detached node."""
        ref = self._parent
        return ref() if ref is not None else None

    @property
    def depth(self) -> int:
        """Number of ancestors (0 for the root)."""
        depth = 0
        current = self.parent
        while current is not None:
            depth += 1
            current = current.parent
        return depth

    def iter_children(self) -> Iterator["Node"]:
        """Yield direct children (none for leaves)."""
        return iter(())

    def walk(self) -> Iterator["Node"]:
        """Yield this node and all descendants in pre-order."""
        yield self
        for child in self.iter_children():
            yield from child.walk()

    def find_all(self, kind: "str | type[Node]") -> list["Node"]:
        """Find all nodes of a kind in this subtree (including self).

        Args:
            kind: Kind string (``"bold"``) or node class (``Bold``)
        """
        return [node for node in self.walk() if _matches(node, kind)]

    def find_one(self, kind: "str | type[Node]") -> "Node | None":
        """Find the first node of a kind in pre-order, or None."""
        for node in self.walk():
            if _matches(node, kind):
                return node
        return None

    def path(self) -> list["Node"]:
        """Nodes from the root down to (and including) this node."""
        path: list[Node] = [self]
        current = self.parent
        while current is not None:
            path.append(current)
            current = current.parent
        path.reverse()
        return path

    def detach(self) -> Self:
        """Remove this node from its parent (no-op when already detached)."""
        parent = self.parent
        if parent is not None:
            parent.remove_child(self)
        return self

    def text_content(self) -> str:
        """Concatenated plain text of this subtree."""
        return "".join(child.text_content() for child in self.iter_children())

    def attach_parents(self) -> None:
        """Re-wire parent back-references for the whole subtree, top-down."""
        for child in self.iter_children():
            child._parent = weakref.ref(self)  # type: ignore[arg-type]
            child.attach_parents()

    def clone(self, deep: bool = False) -> Self:
        """Copy this node.

        A shallow clone copies the node's own payload and leaves it without
        children; a deep clone copies the whole subtree. Cloned children are
        always re-parented to the clone, never to the original, and the clone
        itself starts detached.

        Args:
            deep: Whether to clone children recursively
        """
        kwargs = {}
        for f in fields(self):
            if not f.init:
                continue
            value = getattr(self, f.name)
            if f.name == "children":
                value = [child.clone(deep=True) for child in value] if deep else []
            elif f.name == "title_nodes":
                value = [child.clone(deep=True) for child in value]
            elif isinstance(value, list):
                value = list(value)
            elif isinstance(value, dict):
                value = dict(value)
            kwargs[f.name] = value
        return type(self)(**kwargs)


def _matches(node: Node, kind: "str | type[Node]") -> bool:
    if isinstance(kind, str):
        return node.kind == kind
    return isinstance(node, kind)


@dataclass(slots=True, kw_only=True)
class Leaf(Node):
    """A node that never has children."""


@dataclass(slots=True, kw_only=True)
class Container(Node):
    """A node owning an ordered list of children.

    Mutation helpers keep parent back-references in sync and look children up
    by identity (siblings may compare equal).

    """

    children: list[Node] = field(default_factory=list)

    def __post_init__(self) -> None:
        for child in self.iter_children():
            previous = child.parent
            if previous is not None and previous is not self:
                previous._forget(child)
            child._parent = weakref.ref(self)

    def iter_children(self) -> Iterator[Node]:
        for slot in self._child_lists():
            yield from slot

    def _child_lists(self) -> tuple[list[Node], ...]:
        return (self.children,)

    def _adopt(self, child: Node) -> None:
        # Vacates whatever slot child holds, one of ours included
        previous = child.parent
        if previous is not None:
            previous._forget(child)
        child._parent = weakref.ref(self)

    def _forget(self, child: Node) -> bool:
        for slot in self._child_lists():
            for i, existing in enumerate(slot):
                if existing is child:
                    del slot[i]
                    return True
        return False

    def index_of(self, child: Node) -> int:
        """Index of ``child`` in ``children`` by identity, or -1."""
        for i, existing in enumerate(self.children):
            if existing is child:
                return i
        return -1

    def append_child(self, child: Node) -> Node:
        """Append a child, detaching it from any previous slot.

        Appending an existing child moves it to the end.
        """
        self._adopt(child)
        self.children.append(child)
        return child

    def extend_children(self, children: "list[Node] | tuple[Node, ...]") -> None:
        """Append several children in order."""
        for child in children:
            self.append_child(child)

    def set_children(self, children: "list[Node]") -> None:
        """Replace all children at once."""
        for old in self.children:
            old._parent = None
        self.children = []
        self.extend_children(children)

    def insert_child(self, index: int, child: Node) -> Node:
        """Insert a child at ``index``, detaching it from any previous slot.

        ``index`` counts positions before the move, so re-inserting an
        existing child lands it in front of whatever sat at ``index``.
        """
        current = self.index_of(child) if child.parent is self else -1
        self._adopt(child)
        if 0 <= current < index:
            index -= 1
        self.children.insert(index, child)
        return child

    def remove_child(self, child: Node) -> Node | None:
        """Remove a child; returns it, or None when it is not a child."""
        if not self._forget(child):
            return None
        child._parent = None
        return child

    def replace_child(self, old: Node, new: "Node | list[Node]") -> Node | None:
        """Replace ``old`` with one node or a sequence of nodes in the same slot.

        ``old`` may itself appear among the replacements (to insert siblings
        around it); replacements already held elsewhere, in this node or any
        other, are moved.

        Returns:
            The replaced node, or None when ``old`` is not a child
        """
        replacements: list[Node] = []
        for node in new if isinstance(new, list) else [new]:
            if not any(node is seen for seen in replacements):
                replacements.append(node)
        keeps_old = any(node is old for node in replacements)

        for slot in self._child_lists():
            if not any(existing is old for existing in slot):
                continue
            for node in replacements:
                if node is not old:
                    self._adopt(node)
            # Adopting a sibling shifts the index of old
            i = next(j for j, existing in enumerate(slot) if existing is old)
            slot[i : i + 1] = replacements
            if not keeps_old:
                old._parent = None
            return old
        return None


# =============================================================================
# Inline Nodes
# =============================================================================


@dataclass(slots=True, kw_only=True)
class Text(Leaf):
    """Plain text content.

    Org: any run of characters not claimed by markup.

    """

    kind: ClassVar[str] = "text"

    value: str = ""

    def text_content(self) -> str:
        return self.value


@dataclass(slots=True, kw_only=True)
class Markup(Container):
    """Base for paired-delimiter emphasis containing a single Text."""

    delimiter: ClassVar[str] = ""


@dataclass(slots=True, kw_only=True)
class Bold(Markup):
    """Bold text. Org: *bold*"""

    kind: ClassVar[str] = "bold"
    delimiter: ClassVar[str] = "*"


@dataclass(slots=True, kw_only=True)
class Italic(Markup):
    """Italic text. Org: /italic/"""

    kind: ClassVar[str] = "italic"
    delimiter: ClassVar[str] = "/"


@dataclass(slots=True, kw_only=True)
class Underline(Markup):
    """Underlined text. Org: _underline_"""

    kind: ClassVar[str] = "underline"
    delimiter: ClassVar[str] = "_"


@dataclass(slots=True, kw_only=True)
class Strikethrough(Markup):
    """Struck-through text. Org: +deleted+"""

    kind: ClassVar[str] = "strikethrough"
    delimiter: ClassVar[str] = "+"


@dataclass(slots=True, kw_only=True)
class Code(Leaf):
    """Inline code. Org: ~code~"""

    kind: ClassVar[str] = "code"
    delimiter: ClassVar[str] = "~"

    value: str = ""

    def text_content(self) -> str:
        return self.value


@dataclass(slots=True, kw_only=True)
class Verbatim(Leaf):
    """Inline verbatim. Org: =verbatim="""

    kind: ClassVar[str] = "verbatim"
    delimiter: ClassVar[str] = "="

    value: str = ""

    def text_content(self) -> str:
        return self.value


@dataclass(slots=True, kw_only=True)
class Link(Leaf):
    """Hyperlink.

    Org: [[url][description]], [[url]] or a bare URL.
    ``description`` defaults to ``url``; ``protocol`` is the URL scheme when
    one is present (``https``, ``file``, ``mailto``...).

    """

    kind: ClassVar[str] = "link"

    url: str
    description: str | None = None
    protocol: str | None = None

    def __post_init__(self) -> None:
        if not self.description:
            self.description = self.url
        if self.protocol is None:
            scheme, sep, _ = self.url.partition(":")
            if sep and scheme.isalpha():
                self.protocol = scheme.lower()

    def text_content(self) -> str:
        return self.description or self.url


@dataclass(slots=True, kw_only=True)
class FootnoteRef(Leaf):
    """Footnote reference. Org: [fn:label]"""

    kind: ClassVar[str] = "footnote_ref"

    label: str


@dataclass(slots=True, kw_only=True)
class Timestamp(Leaf):
    """Timestamp.

    Org: <2024-01-15 Mon 10:00-11:30 +1w> (active) or [2024-01-15 Mon] (inactive).
    ``raw`` keeps the source spelling for round-tripping.

    """

    kind: ClassVar[str] = "timestamp"

    raw: str
    timestamp_type: Literal["active", "inactive"]
    date: datetime.date
    time: datetime.time | None = None
    end_time: datetime.time | None = None
    repeater: str | None = None
    warning: str | None = None

    def text_content(self) -> str:
        return self.raw


# PEP 695 type alias for inline elements
Inline: TypeAlias = (
    Text
    | Bold
    | Italic
    | Underline
    | Strikethrough
    | Code
    | Verbatim
    | Link
    | FootnoteRef
    | Timestamp
)


# =============================================================================
# Block Nodes
# =============================================================================


@dataclass(slots=True, kw_only=True)
class Heading(Container):
    """Heading (section).

    Org: ** TODO [#A] Title :tag1:tag2:

    ``children`` holds the section content, including sub-headings of greater
    level. ``title_nodes`` holds the inline segmentation of ``title``; those
    nodes are owned by the heading but are not section content.

    """

    kind: ClassVar[str] = "heading"

    level: int
    title: str = ""
    todo_keyword: str | None = None
    priority: str | None = None
    tags: list[str] = field(default_factory=list)
    title_nodes: list[Node] = field(default_factory=list)

    def _child_lists(self) -> tuple[list[Node], ...]:
        return (self.title_nodes, self.children)

    def set_title_nodes(self, nodes: list[Node]) -> None:
        """Replace the inline title nodes, re-parenting them to this heading."""
        for old in self.title_nodes:
            old._parent = None
        self.title_nodes = []
        for node in nodes:
            self._adopt(node)
            self.title_nodes.append(node)


@dataclass(slots=True, kw_only=True)
class Paragraph(Container):
    """Paragraph. Org: lines of text separated by blank lines."""

    kind: ClassVar[str] = "paragraph"


@dataclass(slots=True, kw_only=True)
class List(Container):
    """Ordered, unordered or descriptive list.

    ``list_type`` is decided by the first item's marker.

    """

    kind: ClassVar[str] = "list"

    list_type: ListType = "unordered"

    @property
    def ordered(self) -> bool:
        return self.list_type == "ordered"


@dataclass(slots=True, kw_only=True)
class ListItem(Container):
    """List item.

    Org: ``- [X] term :: text`` or ``1. text``

    Children are the item's inline content followed by any nested Lists.
    ``checkbox`` keeps the tri-state token; ``checked`` maps it onto the
    strict boolean model (partial -> None).

    """

    kind: ClassVar[str] = "list_item"

    bullet: str = "-"
    ordered: bool = False
    checkbox: CheckboxState | None = None
    term: str | None = None

    @property
    def checked(self) -> bool | None:
        if self.checkbox == "checked":
            return True
        if self.checkbox == "unchecked":
            return False
        return None

    @property
    def nested_lists(self) -> list["List"]:
        return [child for child in self.children if isinstance(child, List)]


@dataclass(slots=True, kw_only=True)
class TableCell(Container):
    """Table cell. Org: | cell |"""

    kind: ClassVar[str] = "table_cell"

    is_header: bool = False


@dataclass(slots=True, kw_only=True)
class TableRow(Container):
    """Table row. A header row is the one directly above the first rule line."""

    kind: ClassVar[str] = "table_row"

    is_header: bool = False


@dataclass(slots=True, kw_only=True)
class Table(Container):
    """Table.

    Org:
        | A | B |
        |---+---|
        | 1 | 2 |

    """

    kind: ClassVar[str] = "table"

    @property
    def column_count(self) -> int:
        return max((len(row.children) for row in self.children), default=0)


@dataclass(slots=True, kw_only=True)
class CodeBlock(Leaf):
    """Source block; content is raw and never inline-processed.

    Org:
        #+BEGIN_SRC python :results output
        print("hi")
        #+END_SRC

    """

    kind: ClassVar[str] = "code_block"

    value: str = ""
    language: str | None = None
    params: dict[str, str] = field(default_factory=dict)

    def text_content(self) -> str:
        return self.value


@dataclass(slots=True, kw_only=True)
class Comment(Leaf):
    """Comment line (``# text``) or ``#+BEGIN_COMMENT`` block."""

    kind: ClassVar[str] = "comment"

    value: str = ""
    is_block: bool = False

    def text_content(self) -> str:
        return ""


@dataclass(slots=True, kw_only=True)
class HorizontalRule(Leaf):
    """Horizontal rule. Org: five or more dashes."""

    kind: ClassVar[str] = "horizontal_rule"


@dataclass(slots=True, kw_only=True)
class Drawer(Leaf):
    """Drawer.

    Org:
        :PROPERTIES:
        :ID: abc
        :END:

    ``:KEY: value`` lines land in ``properties``; any other lines are kept
    verbatim in ``contents``.

    """

    kind: ClassVar[str] = "drawer"

    name: str
    properties: dict[str, str] = field(default_factory=dict)
    contents: str = ""

    def text_content(self) -> str:
        return ""


@dataclass(slots=True, kw_only=True)
class Footnote(Container):
    """Footnote definition. Org: [fn:label] Footnote text."""

    kind: ClassVar[str] = "footnote"

    label: str


@dataclass(slots=True, kw_only=True)
class Document(Container):
    """Root document node.

    ``properties`` holds document-level metadata from ``#+KEY: value`` lines
    with lowercased keys (title, author, date, and any custom key).

    """

    kind: ClassVar[str] = "document"

    properties: dict[str, str] = field(default_factory=dict)

    def get_property(self, key: str, default: str | None = None) -> str | None:
        return self.properties.get(key.lower(), default)

    def set_property(self, key: str, value: str) -> Self:
        self.properties[key.lower()] = value
        return self

    @property
    def title(self) -> str | None:
        return self.properties.get("title")

    @property
    def author(self) -> str | None:
        return self.properties.get("author")

    @property
    def date(self) -> str | None:
        return self.properties.get("date")


# PEP 695 type alias for block elements
Block: TypeAlias = (
    Heading
    | Paragraph
    | List
    | ListItem
    | Table
    | TableRow
    | TableCell
    | CodeBlock
    | Comment
    | HorizontalRule
    | Drawer
    | Footnote
)


NODE_CLASSES: dict[str, type[Node]] = {
    cls.kind: cls
    for cls in (
        Document,
        Heading,
        Paragraph,
        Text,
        Bold,
        Italic,
        Underline,
        Strikethrough,
        Code,
        Verbatim,
        Link,
        List,
        ListItem,
        Table,
        TableRow,
        TableCell,
        CodeBlock,
        Comment,
        HorizontalRule,
        Drawer,
        Footnote,
        FootnoteRef,
        Timestamp,
    )
}
"""Kind string -> node class, for serialization and kind-keyed hooks."""
