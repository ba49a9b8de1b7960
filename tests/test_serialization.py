"""Tests for AST serialization (to_dict, from_dict, to_json, from_json)."""

import datetime
import json

import pytest

from orger import parse
from orger.nodes import Heading, Link, Paragraph, Text, Timestamp
from orger.serialization import from_dict, from_json, to_dict, to_json

SAMPLE = """\
#+TITLE: Sample

* TODO [#A] Plan :work:
:PROPERTIES:
:ID: abc
:END:
Meet <2024-01-15 Mon 10:00-11:30 +1w> about [[https://x.org][X]][fn:1].

- [X] done
  - nested
- term :: meaning

| A | B |
|---+---|
| 1 | 2 |

#+BEGIN_SRC python :results output
print("hi")
#+END_SRC

[fn:1] The note.
"""


class TestRoundTrip:
    """JSON round-trips give back an equal tree."""

    def test_json_round_trip(self) -> None:
        doc = parse(SAMPLE)
        restored = from_json(to_json(doc))
        assert restored == doc

    def test_dict_round_trip(self) -> None:
        doc = parse("* Hello *World*")
        assert from_dict(to_dict(doc)) == doc

    def test_parents_rebuilt(self) -> None:
        restored = from_json(to_json(parse(SAMPLE)))
        for node in restored.walk():
            for child in node.iter_children():
                assert child.parent is node

    def test_locations_kept(self) -> None:
        doc = parse("* Title\nBody", source_file="a.org")
        restored = from_json(to_json(doc))
        paragraph = restored.children[0].children[0]
        assert isinstance(paragraph, Paragraph)
        assert paragraph.location == doc.children[0].children[0].location
        assert paragraph.location.source_file == "a.org"

    def test_timestamp_values(self) -> None:
        restored = from_json(to_json(parse("<2024-01-15 Mon 10:00-11:30>")))
        stamp = restored.find_one(Timestamp)
        assert isinstance(stamp, Timestamp)
        assert stamp.date == datetime.date(2024, 1, 15)
        assert stamp.time == datetime.time(10, 0)
        assert stamp.end_time == datetime.time(11, 30)


class TestFormat:
    """Shape of the serialized output."""

    def test_type_discriminator(self) -> None:
        data = to_dict(Text(value="x"))
        assert data == {"_type": "Text", "location": None, "value": "x"}

    def test_heading_fields(self) -> None:
        data = to_dict(parse("* TODO Task :a:").children[0])
        assert data["_type"] == "Heading"
        assert data["todo_keyword"] == "TODO"
        assert data["tags"] == ["a"]
        assert data["title_nodes"][0]["_type"] == "Text"
        assert "_parent" not in data

    def test_dates_are_tagged(self) -> None:
        data = to_dict(parse("[2024-01-15 Mon 09:30]").find_one(Timestamp))
        assert data["date"] == {"_type": "date", "value": "2024-01-15"}
        assert data["time"] == {"_type": "time", "value": "09:30:00"}

    def test_deterministic(self) -> None:
        assert to_json(parse(SAMPLE)) == to_json(parse(SAMPLE))

    def test_indent(self) -> None:
        assert "\n" in to_json(parse("x"), indent=2)
        assert "\n" not in to_json(parse("x"))

    def test_valid_json(self) -> None:
        assert json.loads(to_json(parse(SAMPLE)))["_type"] == "Document"


class TestErrors:
    """Malformed input raises ValueError."""

    def test_missing_type(self) -> None:
        with pytest.raises(ValueError, match="Missing '_type'"):
            from_dict({"value": "x"})

    def test_unknown_type(self) -> None:
        with pytest.raises(ValueError, match="Unknown node type: 'Widget'"):
            from_dict({"_type": "Widget"})

    def test_invalid_fields(self) -> None:
        with pytest.raises(ValueError, match="Invalid fields for Link"):
            from_dict({"_type": "Link"})

    def test_not_an_object(self) -> None:
        with pytest.raises(ValueError, match="Expected a JSON object"):
            from_json("[]")

    def test_not_a_document(self) -> None:
        with pytest.raises(ValueError, match="Expected Document, got Heading"):
            from_json(json.dumps(to_dict(Heading(level=1))))

    def test_single_node(self) -> None:
        link = from_dict(to_dict(Link(url="https://x.org")))
        assert link == Link(url="https://x.org")
