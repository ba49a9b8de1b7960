"""Statistics cookie plugin.

Fills ``[/]`` and ``[%]`` cookies in heading titles from the checkboxes of
the items in that heading's own lists (nested sections are not counted):

    * Groceries [/]          ->  * Groceries [1/3]
    - [X] milk
    - [ ] eggs
    - [-] bread

Partially checked items count as not done.
"""

from __future__ import annotations

import re

from orger.nodes import Heading, List, ListItem, Node, Text
from orger.plugins import Plugin, PluginContext, Processor, register_plugin

_COOKIE_RE = re.compile(r"\[(?:\d*/\d*|\d*%)\]")


def _checkbox_counts(heading: Heading) -> tuple[int, int]:
    done = total = 0
    for child in heading.children:
        if not isinstance(child, List):
            continue
        for item in child.children:
            if isinstance(item, ListItem) and item.checkbox is not None:
                total += 1
                done += item.checkbox == "checked"
    return done, total


def _fill(cookie: re.Match[str], done: int, total: int) -> str:
    if cookie.group(0).endswith("%]"):
        percent = done * 100 // total if total else 0
        return f"[{percent}%]"
    return f"[{done}/{total}]"


def _update_cookies(node: Node, context: PluginContext) -> Node:
    assert isinstance(node, Heading)
    if not _COOKIE_RE.search(node.title):
        return node

    done, total = _checkbox_counts(node)
    node.title = _COOKIE_RE.sub(lambda m: _fill(m, done, total), node.title)
    for title_node in node.title_nodes:
        if isinstance(title_node, Text):
            title_node.value = _COOKIE_RE.sub(lambda m: _fill(m, done, total), title_node.value)
    return node


@register_plugin("statistics_cookies")
def statistics_cookies() -> Plugin:
    return Plugin(name="statistics_cookies", processors=(Processor(Heading, _update_cookies),))
