"""Inline segmentation for the orger parser.

Runs after the structural pass. Every Text leaf directly inside a Paragraph,
Heading title, TableCell, ListItem or Footnote is rewritten into a sequence
of sibling nodes by a fixed series of passes:

1. plugin tokenizers
2. links
3. footnote references
4. timestamps
5. bold, italic, underline, strikethrough, code, verbatim

Each pass only splits Text nodes; nodes produced by earlier passes pass
through untouched. Unmatched delimiters stay literal and empty Text
segments are never produced.

"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, TypeAlias

from orger.errors import PluginError
from orger.nodes import Footnote, Heading, ListItem, Node, Paragraph, TableCell, Text
from orger.parsing.inline.emphasis import EMPHASIS_PASSES, InlineBuilder
from orger.parsing.inline.links import build_footnote_ref, build_link
from orger.parsing.inline.patterns import FOOTNOTE_REF_RE, LINK_RE, TIMESTAMP_RE
from orger.parsing.inline.special import build_timestamp
from orger.plugins import PluginContext
from orger.utils.logger import get_logger

if TYPE_CHECKING:
    from orger.config import ParseConfig
    from orger.location import SourceLocation
    from orger.nodes import Document
    from orger.plugins import OrgerPlugin, Tokenizer

logger = get_logger(__name__)

InlinePass: TypeAlias = tuple[re.Pattern[str], InlineBuilder]


def split_text(nodes: list[Node], pattern: re.Pattern[str], build: InlineBuilder) -> list[Node]:
    """Apply one pass: split every Text in ``nodes`` around ``pattern`` matches.

    Args:
        nodes: Sibling nodes from the previous pass
        pattern: Span pattern for this pass
        build: Turns a match into a node, or None to leave it as text

    Returns:
        New sibling list (untouched nodes are reused)
    """
    result: list[Node] = []
    for node in nodes:
        if not isinstance(node, Text):
            result.append(node)
            continue

        text = node.value
        pos = 0
        replaced = False
        for match in pattern.finditer(text):
            if match.end() == match.start():
                continue
            replacement = build(match, node.location)
            if replacement is None:
                continue
            if match.start() > pos:
                result.append(Text(value=text[pos : match.start()], location=node.location))
            result.append(replacement)
            pos = match.end()
            replaced = True

        if not replaced:
            result.append(node)
        elif pos < len(text):
            result.append(Text(value=text[pos:], location=node.location))
    return result


def segment(nodes: list[Node], passes: list[InlinePass]) -> list[Node]:
    """Run all passes in order over a sibling list."""
    for pattern, build in passes:
        nodes = split_text(nodes, pattern, build)
    return nodes


class InlineParsingMixin:
    """Inline segmentation over the structural tree.

    Required Host Attributes:
        - _config: ParseConfig
        - _source_file: str | None

    """

    _config: ParseConfig
    _source_file: str | None

    def _inline_passes(self, document: Document) -> list[InlinePass]:
        """Passes enabled by the config, in application order."""
        config = self._config
        passes: list[InlinePass] = []
        for plugin in config.plugins:
            for tokenizer in plugin.tokenizers:
                passes.append(
                    (tokenizer.compiled, self._tokenizer_builder(plugin, tokenizer, document))
                )
        if config.parse_links:
            passes.append((LINK_RE, build_link))
        if config.parse_footnotes:
            passes.append((FOOTNOTE_REF_RE, build_footnote_ref))
        if config.parse_timestamps:
            passes.append((TIMESTAMP_RE, build_timestamp))
        if config.parse_inline_formatting:
            passes.extend(EMPHASIS_PASSES)
        return passes

    def _tokenizer_builder(
        self, plugin: OrgerPlugin, tokenizer: Tokenizer, document: Document
    ) -> InlineBuilder:
        """Wrap a plugin tokenizer so failures surface as PluginError."""
        context = PluginContext(
            config=self._config,
            document=document,
            source_file=self._source_file,
            plugin=plugin.name,
        )

        def build(match: re.Match[str], location: SourceLocation | None) -> Node | None:
            try:
                node = tokenizer.process(match, context)
            except PluginError:
                raise
            except Exception as e:
                raise PluginError(plugin.name, f"tokenizer failed: {e}") from e
            if node is not None and node.location is None:
                node.location = location
            return node

        return build

    def _segment_document(self, document: Document) -> None:
        """Rewrite the Text leaves of every inline-bearing container."""
        passes = self._inline_passes(document)
        if not passes:
            return

        for node in list(document.walk()):
            if isinstance(node, Heading):
                node.set_title_nodes(segment(node.title_nodes, passes))
            elif isinstance(node, Paragraph | TableCell | ListItem | Footnote):
                node.set_children(segment(node.children, passes))
