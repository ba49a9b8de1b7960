"""Document assembly.

Finishes the tree produced by the structural and inline passes:

1. wire parent back-references top-down
2. merge ``#+KEY: value`` lines into Document.properties (lowercased keys,
   later lines win)
3. run plugin processors
4. wire parent back-references again

"""

from __future__ import annotations

from collections.abc import Sequence

from orger.config import ParseConfig
from orger.errors import PluginError
from orger.nodes import Document, Node
from orger.plugins import OrgerPlugin, PluginContext, Processor
from orger.utils.logger import get_logger

logger = get_logger(__name__)


def assemble(
    document: Document,
    keywords: Sequence[tuple[str, str]],
    config: ParseConfig,
    source_file: str | None = None,
) -> Document:
    """Finish ``document`` in place and return it (or its replacement)."""
    document.attach_parents()

    for key, value in keywords:
        document.set_property(key, value)

    for plugin in config.plugins:
        for processor in plugin.processors:
            context = PluginContext(
                config=config,
                document=document,
                source_file=source_file,
                plugin=plugin.name,
            )
            document = _run_processor(document, plugin, processor, context)

    document.attach_parents()
    return document


def _attached(node: Node, document: Document) -> bool:
    """Whether ``node`` is still reachable from ``document``."""
    return node.path()[0] is document


def _run_processor(
    document: Document,
    plugin: OrgerPlugin,
    processor: Processor,
    context: PluginContext,
) -> Document:
    """Invoke one processor over a pre-order snapshot of the tree.

    Nodes removed or replaced by an earlier call (together with their
    subtrees) are skipped.
    """
    snapshot = [node for node in document.walk() if processor.matches(node)]
    logger.debug(
        "Running %s processor for %r on %d nodes", plugin.name, processor.node_type, len(snapshot)
    )

    for node in snapshot:
        if not _attached(node, document):
            continue
        try:
            result = processor.process(node, context)
        except PluginError:
            raise
        except Exception as e:
            raise PluginError(plugin.name, f"processor failed on {node.kind}: {e}") from e

        if result is node:
            continue

        if node is document:
            if not isinstance(result, Document):
                raise PluginError(plugin.name, "the document root cannot be removed or replaced")
            document = result
            context = PluginContext(
                config=context.config,
                document=document,
                source_file=context.source_file,
                plugin=context.plugin,
            )
            continue

        parent = node.parent
        if parent is None:
            raise PluginError(plugin.name, f"{node.kind} node lost its parent during processing")
        if result is None:
            parent.remove_child(node)
        else:
            parent.replace_child(node, result)

    return document
