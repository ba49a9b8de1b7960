"""AST serialization: JSON round-trip for orger AST nodes.

Converts typed AST nodes to/from JSON-compatible dicts. Useful for:
- Caching parsed documents to disk
- Handing trees to tools in other languages
- Debugging and inspection

All output is deterministic (sorted keys). Parent back-references are never
serialized; they are rebuilt when a tree is loaded.

Example:
    from orger import parse
    from orger.serialization import to_json, from_json

    doc = parse("* Hello *World*")
    json_str = to_json(doc)
    restored = from_json(json_str)
    assert doc == restored

Thread Safety:
    All functions are pure; safe to call from any thread.

"""

import datetime
import json
from dataclasses import fields
from typing import Any

from orger.location import SourceLocation
from orger.nodes import NODE_CLASSES, Document, Node

# Registry of node class names to classes for deserialization
_NODE_TYPES: dict[str, type[Node]] = {cls.__name__: cls for cls in NODE_CLASSES.values()}


def to_dict(node: Node) -> dict[str, Any]:
    """Convert an AST node to a JSON-compatible dict.

    Includes a ``_type`` discriminator field for deserialization.
    Recursively serializes child nodes, dates and SourceLocation objects.

    Args:
        node: Any orger AST node.

    Returns:
        Dict with ``_type`` and all node fields.

    """
    result: dict[str, Any] = {"_type": type(node).__name__}

    for f in fields(node):
        if not f.init:
            continue
        result[f.name] = _serialize_value(getattr(node, f.name))

    return result


def _serialize_value(value: Any) -> Any:
    """Serialize a single field value."""
    if isinstance(value, Node):
        return to_dict(value)
    if isinstance(value, SourceLocation):
        return {
            "_type": "SourceLocation",
            "lineno": value.lineno,
            "col_offset": value.col_offset,
            "offset": value.offset,
            "end_offset": value.end_offset,
            "end_lineno": value.end_lineno,
            "end_col_offset": value.end_col_offset,
            "source_file": value.source_file,
        }
    # datetime.datetime is never stored on nodes, so date and time are distinct
    if isinstance(value, datetime.date):
        return {"_type": "date", "value": value.isoformat()}
    if isinstance(value, datetime.time):
        return {"_type": "time", "value": value.isoformat()}
    if isinstance(value, list | tuple):
        return [_serialize_value(item) for item in value]
    if isinstance(value, dict):
        return {key: _serialize_value(item) for key, item in value.items()}
    # Primitives: str, int, bool, None
    return value


def from_dict(data: dict[str, Any]) -> Node:
    """Reconstruct a typed AST node from a dict.

    Uses the ``_type`` discriminator to determine the node class.
    Children are re-parented to the node being built.

    Args:
        data: Dict with ``_type`` and node fields (as produced by to_dict).

    Returns:
        Typed AST node.

    Raises:
        ValueError: If ``_type`` is missing or unknown.

    """
    type_name = data.get("_type")
    if type_name is None:
        msg = "Missing '_type' field in serialized node"
        raise ValueError(msg)

    node_cls = _NODE_TYPES.get(type_name)
    if node_cls is None:
        msg = f"Unknown node type: {type_name!r}"
        raise ValueError(msg)

    kwargs: dict[str, Any] = {}
    for f in fields(node_cls):
        if not f.init or f.name not in data:
            continue
        kwargs[f.name] = _deserialize_value(data[f.name])

    try:
        return node_cls(**kwargs)
    except TypeError as e:
        msg = f"Invalid fields for {type_name}: {e}"
        raise ValueError(msg) from e


def _deserialize_value(value: Any) -> Any:
    """Deserialize a single field value."""
    if isinstance(value, dict):
        type_name = value.get("_type")
        if type_name == "SourceLocation":
            return SourceLocation(
                lineno=value["lineno"],
                col_offset=value["col_offset"],
                offset=value.get("offset", 0),
                end_offset=value.get("end_offset", 0),
                end_lineno=value.get("end_lineno"),
                end_col_offset=value.get("end_col_offset"),
                source_file=value.get("source_file"),
            )
        if type_name == "date":
            return datetime.date.fromisoformat(value["value"])
        if type_name == "time":
            return datetime.time.fromisoformat(value["value"])
        if type_name is not None:
            return from_dict(value)
        return {key: _deserialize_value(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_deserialize_value(item) for item in value]
    return value


def to_json(doc: Document, *, indent: int | None = None) -> str:
    """Serialize a Document AST to a JSON string.

    Output is deterministic (sorted keys).

    Args:
        doc: Document to serialize.
        indent: JSON indentation level (None for compact).

    Returns:
        JSON string.

    """
    return json.dumps(to_dict(doc), sort_keys=True, indent=indent, ensure_ascii=False)


def from_json(data: str) -> Document:
    """Deserialize a Document AST from a JSON string.

    Args:
        data: JSON string (as produced by to_json).

    Returns:
        Document AST node with parent references rebuilt.

    Raises:
        ValueError: If the JSON doesn't represent a Document.

    """
    raw = json.loads(data)
    if not isinstance(raw, dict):
        msg = f"Expected a JSON object, got {type(raw).__name__}"
        raise ValueError(msg)
    node = from_dict(raw)
    if not isinstance(node, Document):
        msg = f"Expected Document, got {type(node).__name__}"
        raise ValueError(msg)
    node.attach_parents()
    return node


__all__ = ["from_dict", "from_json", "to_dict", "to_json"]
