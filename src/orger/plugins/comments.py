"""Drop-comments plugin.

Removes every Comment node after assembly, for output where comments must
not leak (the ``preserve_comments`` option does the same at parse time).
"""

from __future__ import annotations

from orger.nodes import Node
from orger.plugins import Plugin, PluginContext, Processor, register_plugin


def _drop(node: Node, context: PluginContext) -> None:
    return None


@register_plugin("drop_comments")
def drop_comments() -> Plugin:
    return Plugin(name="drop_comments", processors=(Processor("comment", _drop),))
