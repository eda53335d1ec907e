"""Benchmark re-parsing a streamed reply on every tick.

Compares parse_incremental against a full parse of each prefix, the work a
display layer does while a reply is typed out.

Run with:
    pytest benchmarks/benchmark_streaming.py -v --benchmark-only
"""

import pytest

from goteo import parse
from goteo.incremental import parse_incremental

_CHUNK = 64


def _prefixes(text: str) -> list[str]:
    return [text[:end] for end in range(_CHUNK, len(text), _CHUNK)] + [text]


@pytest.mark.benchmark(group="streamed-prefixes")
def test_benchmark_incremental_prefixes(benchmark, long_reply):
    """parse_incremental over every prefix."""
    prefixes = _prefixes(long_reply)

    def run():
        doc, previous_source = parse(""), ""
        for prefix in prefixes:
            doc = parse_incremental(prefix, doc, previous_source)
            previous_source = prefix
        return doc

    assert benchmark(run) == parse(long_reply)


@pytest.mark.benchmark(group="streamed-prefixes")
def test_benchmark_full_prefixes(benchmark, long_reply):
    """Full parse of every prefix (baseline)."""
    prefixes = _prefixes(long_reply)

    def run():
        for prefix in prefixes:
            parse(prefix)

    benchmark(run)


@pytest.mark.benchmark(group="parse")
def test_benchmark_parse_long_reply(benchmark, long_reply):
    benchmark(parse, long_reply)
