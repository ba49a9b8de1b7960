"""AST Visitor and Transformer for orger.

Provides a base visitor class with match-based dispatch and an in-place
transform function for rewriting the mutable AST.

Example: collect all headings:

    class HeadingCollector(BaseVisitor[None]):
        def __init__(self) -> None:
            self.headings: list[Heading] = []

        def visit_heading(self, node: Heading) -> None:
            self.headings.append(node)

    collector = HeadingCollector()
    collector.visit(doc)

Example: demote every heading:

    def demote(node: Node) -> Node:
        if isinstance(node, Heading):
            node.level += 1
        return node

    transform(doc, demote)

Thread Safety:
    Visitors are NOT shared across threads by default (they may accumulate
    mutable state). Create a new visitor per thread. transform() mutates the
    tree it is given.

"""

from collections.abc import Callable
from typing import Generic, TypeVar

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


T = TypeVar("T")


class BaseVisitor(Generic[T]):
    """Base AST visitor with match-based dispatch.

    Subclass and override ``visit_*`` methods for node types you care about.
    Unhandled node types fall through to ``visit_default``. Children
    (including a heading's title nodes) are walked automatically after the
    ``visit_*`` call.

    Type parameter ``T`` is the return type of visit methods (use ``None``
    for side-effect-only visitors).

    """

    def visit(self, node: Node) -> T:
        """Dispatch to the appropriate ``visit_*`` method.

        Walks children automatically after the visit method returns.

        """
        result = self._dispatch(node)
        self._walk_children(node)
        return result

    def visit_default(self, node: Node) -> T:
        """Called for node types without a specific ``visit_*`` method.

        Override this for catch-all behavior. Default returns None
        (suitable for ``BaseVisitor[None]``).

        """
        return None  # type: ignore[return-value]

    # -- Block visitors --------------------------------------------------------

    def visit_document(self, node: Document) -> T:
        return self.visit_default(node)

    def visit_heading(self, node: Heading) -> T:
        return self.visit_default(node)

    def visit_paragraph(self, node: Paragraph) -> T:
        return self.visit_default(node)

    def visit_list(self, node: List) -> T:
        return self.visit_default(node)

    def visit_list_item(self, node: ListItem) -> T:
        return self.visit_default(node)

    def visit_table(self, node: Table) -> T:
        return self.visit_default(node)

    def visit_table_row(self, node: TableRow) -> T:
        return self.visit_default(node)

    def visit_table_cell(self, node: TableCell) -> T:
        return self.visit_default(node)

    def visit_code_block(self, node: CodeBlock) -> T:
        return self.visit_default(node)

    def visit_comment(self, node: Comment) -> T:
        return self.visit_default(node)

    def visit_horizontal_rule(self, node: HorizontalRule) -> T:
        return self.visit_default(node)

    def visit_drawer(self, node: Drawer) -> T:
        return self.visit_default(node)

    def visit_footnote(self, node: Footnote) -> T:
        return self.visit_default(node)

    # -- Inline visitors -------------------------------------------------------

    def visit_text(self, node: Text) -> T:
        return self.visit_default(node)

    def visit_bold(self, node: Bold) -> T:
        return self.visit_default(node)

    def visit_italic(self, node: Italic) -> T:
        return self.visit_default(node)

    def visit_underline(self, node: Underline) -> T:
        return self.visit_default(node)

    def visit_strikethrough(self, node: Strikethrough) -> T:
        return self.visit_default(node)

    def visit_code(self, node: Code) -> T:
        return self.visit_default(node)

    def visit_verbatim(self, node: Verbatim) -> T:
        return self.visit_default(node)

    def visit_link(self, node: Link) -> T:
        return self.visit_default(node)

    def visit_footnote_ref(self, node: FootnoteRef) -> T:
        return self.visit_default(node)

    def visit_timestamp(self, node: Timestamp) -> T:
        return self.visit_default(node)

    # -- Internal dispatch -----------------------------------------------------

    def _dispatch(self, node: Node) -> T:
        """Match-based dispatch to visit_* methods."""
        match node:
            case Document():
                return self.visit_document(node)
            case Heading():
                return self.visit_heading(node)
            case Paragraph():
                return self.visit_paragraph(node)
            case List():
                return self.visit_list(node)
            case ListItem():
                return self.visit_list_item(node)
            case Table():
                return self.visit_table(node)
            case TableRow():
                return self.visit_table_row(node)
            case TableCell():
                return self.visit_table_cell(node)
            case CodeBlock():
                return self.visit_code_block(node)
            case Comment():
                return self.visit_comment(node)
            case HorizontalRule():
                return self.visit_horizontal_rule(node)
            case Drawer():
                return self.visit_drawer(node)
            case Footnote():
                return self.visit_footnote(node)
            case Text():
                return self.visit_text(node)
            case Bold():
                return self.visit_bold(node)
            case Italic():
                return self.visit_italic(node)
            case Underline():
                return self.visit_underline(node)
            case Strikethrough():
                return self.visit_strikethrough(node)
            case Code():
                return self.visit_code(node)
            case Verbatim():
                return self.visit_verbatim(node)
            case Link():
                return self.visit_link(node)
            case FootnoteRef():
                return self.visit_footnote_ref(node)
            case Timestamp():
                return self.visit_timestamp(node)
            case _:
                return self.visit_default(node)

    def _walk_children(self, node: Node) -> None:
        """Recursively visit child nodes.

        Iterates over a snapshot so visit methods may detach the node they
        are given.
        """
        for child in list(node.iter_children()):
            self.visit(child)


def transform(doc: Document, fn: Callable[[Node], Node | None]) -> Document:
    """Apply a function to every node in the AST, rewriting it in place.

    The function ``fn`` is called bottom-up: children are transformed first,
    then the parent is transformed with its new children. This ensures ``fn``
    always receives nodes with already-transformed children.

    Return the node itself to keep it, another node to replace it, or
    ``None`` to remove it from the tree. The root Document cannot be removed;
    returning anything but a Document for it raises TypeError.

    Args:
        doc: The document to transform.
        fn: Function that receives a node and returns a (possibly new) node,
            or None to remove the node from the tree.

    Returns:
        The transformed Document (``doc`` itself unless ``fn`` replaced it).

    """
    result = _transform_node(doc, fn)
    if result is None or not isinstance(result, Document):
        msg = "transform fn must return a Document for the root (cannot remove root)"
        raise TypeError(msg)
    result.attach_parents()
    return result


def _transform_node(node: Node, fn: Callable[[Node], Node | None]) -> Node | None:
    """Transform a single node bottom-up: children first, then self."""
    if isinstance(node, Container):
        for child in list(node.iter_children()):
            result = _transform_node(child, fn)
            if result is None:
                node.remove_child(child)
            elif result is not child:
                node.replace_child(child, result)
    return fn(node)


__all__ = ["BaseVisitor", "transform"]
