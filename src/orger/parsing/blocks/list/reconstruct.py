"""Nested list reconstruction from a flat run of indented items.

The block parser hands over each list run as ``(depth, ListItem)`` records
in source order; this module rebuilds the nesting.

Invariant:
    Item i becomes a child of item j exactly when j precedes i, j's depth is
    smaller than i's, and no item between them has a depth <= j's depth.

"""

from __future__ import annotations

from collections.abc import Sequence

from orger.location import SourceLocation
from orger.nodes import List, ListItem, ListType


def list_type_for(item: ListItem) -> ListType:
    """List type implied by an item's own marker."""
    if item.term is not None:
        return "descriptive"
    return "ordered" if item.ordered else "unordered"


def build_list(
    records: Sequence[tuple[int, ListItem]],
    location: SourceLocation | None = None,
) -> List:
    """Rebuild nested Lists from ``(depth, item)`` records.

    Uses a stack of ``(depth, list)`` frames:

    - deeper item: open a List under the previous item, typed by the new
      item's marker
    - shallower item: pop frames deeper than it; when the frame left on top
      is still shallower than the item, the list just popped is reopened at
      the item's depth
    - same depth: append to the current List

    Every item's ``ordered`` flag is made uniform with its List.

    Args:
        records: Non-empty sequence of (indent depth, item)
        location: Location of the whole run, for the outer List

    Returns:
        The outermost List
    """
    first_depth, first_item = records[0]
    root = List(location=location, list_type=list_type_for(first_item))
    stack: list[tuple[int, List]] = [(first_depth, root)]
    previous: ListItem | None = None

    for depth, item in records:
        top_depth = stack[-1][0]
        if depth > top_depth and previous is not None:
            nested = List(location=item.location, list_type=list_type_for(item))
            previous.append_child(nested)
            stack.append((depth, nested))
        elif depth < top_depth:
            popped: List | None = None
            while len(stack) > 1 and stack[-1][0] > depth:
                popped = stack.pop()[1]
            if popped is not None and stack[-1][0] < depth:
                stack.append((depth, popped))
            elif stack[-1][0] > depth:
                # Shallower than the first item: the outer List takes its depth
                stack[-1] = (depth, stack[-1][1])

        current = stack[-1][1]
        item.ordered = current.ordered
        current.append_child(item)
        previous = item

    return root
