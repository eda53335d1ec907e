"""Tests for goteo.serialization: node JSON round-trip."""

import json

import pytest

from goteo import parse
from goteo.location import SourceLocation
from goteo.nodes import Document, FencedCode, Link, Paragraph, Strong, Text
from goteo.serialization import from_dict, from_json, to_dict, to_json

_LOC = SourceLocation(lineno=1, end_lineno=1)


class TestRoundTrip:
    """Parsed replies survive a JSON round-trip."""

    @pytest.mark.parametrize(
        "source",
        [
            "# Hello **World**",
            "1. a\n2. *b*\n\n- `c`\n* [d](e)",
            "```py\nx = 1\n\n```",
            "```\nunterminated",
        ],
    )
    def test_parsed_document(self, source: str) -> None:
        doc = parse(source, source_file="reply.md")
        assert from_json(to_json(doc)) == doc

    def test_fence_lines_come_back_as_tuple(self) -> None:
        fence = FencedCode(_LOC, "sh", ("a", "b"), terminated=False)
        restored = from_dict(to_dict(fence))
        assert restored == fence
        assert isinstance(restored.lines, tuple)


class TestFormat:
    """Shape of the serialized data."""

    def test_type_discriminator(self) -> None:
        data = to_dict(Paragraph(_LOC, "**x**", (Strong("x"),)))
        assert data["_type"] == "Paragraph"
        assert data["children"] == [{"_type": "Strong", "content": "x"}]
        assert data["location"]["_type"] == "SourceLocation"

    def test_link_fields(self) -> None:
        assert to_dict(Link("t", "u")) == {"_type": "Link", "text": "t", "url": "u"}

    def test_json_is_deterministic(self) -> None:
        doc = parse("- a\n- b")
        assert to_json(doc) == to_json(parse("- a\n- b"))
        assert list(json.loads(to_json(doc))) == sorted(json.loads(to_json(doc)))

    def test_indent(self) -> None:
        doc = Document(_LOC, (Paragraph(_LOC, "a", (Text("a"),)),))
        assert "\n" in to_json(doc, indent=2)


class TestErrors:
    """Invalid input raises ValueError."""

    def test_missing_type(self) -> None:
        with pytest.raises(ValueError, match="Missing '_type'"):
            from_dict({"content": "x"})

    def test_unknown_type(self) -> None:
        with pytest.raises(ValueError, match="Unknown node type"):
            from_dict({"_type": "Table"})

    def test_from_json_requires_document(self) -> None:
        with pytest.raises(ValueError, match="Expected Document"):
            from_json(json.dumps({"_type": "Text", "content": "x"}))
