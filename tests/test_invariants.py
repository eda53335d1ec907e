"""Property-based tests for parser and streaming invariants using Hypothesis.

These tests check properties that must hold for any input:
1. Segmentation is total: every line lands in exactly one block
2. Blocks reconstruct their source lines, minus list markers and fences
3. Tokenization is lossless
4. Parsing is pure, and incremental parsing equals a full parse
5. Streaming delivers growing prefixes and finishes exactly once
"""

import math

from hypothesis import given, settings
from hypothesis import strategies as st

from goteo import parse, parse_incremental, segment, tokenize
from goteo.config import StreamConfig
from goteo.nodes import (
    BlankLine,
    CodeSpan,
    Emphasis,
    FencedCode,
    Heading,
    Inline,
    Link,
    List,
    Paragraph,
    Strong,
    Text,
)
from goteo.parsing.blocks import ORDERED_MARKER, trim_line
from goteo.streaming import StreamingEngine, VirtualClock

# Markdown-heavy alphabet so structure actually shows up
markdownish = st.text(alphabet="ab 1.#-*`[]()\n\t\u3000\u00a0\ufeff", max_size=300)
plain = st.text(alphabet="abc xyz\n", max_size=200)


def _unparse(span: Inline) -> str:
    match span:
        case Text():
            return span.content
        case Strong():
            return f"**{span.content}**"
        case Emphasis():
            return f"*{span.content}*"
        case CodeSpan():
            return f"`{span.code}`"
        case Link():
            return f"[{span.text}]({span.url})"
    raise AssertionError(span)


class TestSegmentation:
    """Block segmentation invariants."""

    @given(markdownish)
    @settings(max_examples=300)
    def test_every_line_in_exactly_one_block(self, source: str) -> None:
        blocks = segment(source)
        if not source:
            assert blocks == ()
            return

        expected_line = 1
        for block in blocks:
            assert block.location.lineno == expected_line
            assert block.location.end_lineno >= block.location.lineno
            expected_line = block.location.end_lineno + 1
        assert expected_line == source.count("\n") + 2

    @given(markdownish)
    @settings(max_examples=300)
    def test_blocks_reconstruct_source_lines(self, source: str) -> None:
        lines = source.split("\n")
        for block in segment(source):
            loc = block.location
            raw = lines[loc.lineno - 1 : loc.end_lineno]
            assert source[loc.offset : loc.end_offset] == "\n".join(raw)

            match block:
                case Paragraph():
                    assert raw == [block.text]
                case Heading():
                    assert raw == ["#" * block.level + " " + block.text]
                case BlankLine():
                    assert trim_line(raw[0]) == ""
                case List():
                    assert len(raw) == len(block.items)
                    for line, item in zip(raw, block.items, strict=True):
                        stripped = trim_line(line)
                        if block.ordered:
                            match = ORDERED_MARKER.match(stripped)
                            assert match is not None
                            assert stripped[match.end() :] == item.text
                        else:
                            assert stripped[:2] in ("- ", "* ")
                            assert stripped[2:] == item.text
                case FencedCode():
                    inner = raw[1:-1] if block.terminated else raw[1:]
                    assert list(block.lines) == inner

    @given(plain)
    @settings(max_examples=200)
    def test_plain_text_is_one_paragraph_per_line(self, source: str) -> None:
        blocks = segment(source)
        if not source:
            return
        for line, block in zip(source.split("\n"), blocks, strict=True):
            if line.strip():
                assert isinstance(block, Paragraph)
                assert block.text == line
            else:
                assert isinstance(block, BlankLine)


class TestTokenization:
    """Inline tokenization invariants."""

    @given(st.text(alphabet="ab *`[]()", max_size=200))
    @settings(max_examples=300)
    def test_tokenize_is_lossless(self, text: str) -> None:
        spans = tokenize(text)
        assert "".join(_unparse(span) for span in spans) == text

    @given(st.text(alphabet="ab *`[]()", max_size=200))
    @settings(max_examples=100)
    def test_text_spans_are_never_empty(self, text: str) -> None:
        assert all(span.content for span in tokenize(text) if isinstance(span, Text))


class TestPurity:
    """Parsing is deterministic and incremental parsing agrees with it."""

    @given(markdownish)
    @settings(max_examples=100)
    def test_parse_twice_is_equal(self, source: str) -> None:
        assert parse(source) == parse(source)

    @given(markdownish, st.data())
    @settings(max_examples=200)
    def test_incremental_equals_full_parse(self, source: str, data: st.DataObject) -> None:
        cuts = sorted(data.draw(st.lists(st.integers(0, len(source)), max_size=6)))
        previous_source = ""
        previous = parse("")
        for cut in [*cuts, len(source)]:
            prefix = source[:cut]
            doc = parse_incremental(prefix, previous, previous_source)
            assert doc == parse(prefix)
            previous, previous_source = doc, prefix


class TestStreaming:
    """Streaming invariants."""

    @given(st.text(max_size=60), st.integers(min_value=1, max_value=7))
    @settings(max_examples=100)
    def test_prefix_sequence(self, text: str, chunk_size: int) -> None:
        clock = VirtualClock()
        engine = StreamingEngine(StreamConfig(chunk_size=chunk_size), scheduler=clock)
        calls: list[tuple[str, bool]] = []

        engine.start(text, "m", lambda t, done: calls.append((t, done)))
        ticks = clock.run_until_idle()

        assert ticks == max(1, math.ceil(len(text) / chunk_size))
        assert len(calls) == ticks
        assert calls[-1] == (text, True)
        assert all(not done for _, done in calls[:-1])
        lengths = [len(t) for t, _ in calls]
        assert lengths == sorted(set(lengths))
        assert all(text.startswith(t) for t, _ in calls)
