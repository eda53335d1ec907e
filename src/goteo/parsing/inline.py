"""Inline tokenizer: second parsing pass.

Turns the raw text of one block into a sequence of inline spans.

Rules are tried in a fixed priority order on every iteration:

1. Strong    ``**text**``
2. Emphasis  ``*text*``
3. CodeSpan  ```code```
4. Link      ``[text](url)``

The first rule that matches *anywhere* in the remaining text wins, even if
a lower-priority rule matches further left. Text before the winning match
becomes a Text span and scanning resumes after the match. So in
``"a *b* c **d** e"`` the Strong rule wins and ``*b*`` stays plain text:

    >>> tokenize("a *b* c **d** e")
    (Text(content='a *b* c '), Strong(content='d'), Text(content=' e'))

The rules are kept as an ordered table rather than one combined regex so
that this ordering is explicit.

Thread Safety:
tokenize() is a pure function over module-level compiled patterns.

"""

from __future__ import annotations

import re
from collections.abc import Callable
from typing import TypeAlias

from goteo.nodes import CodeSpan, Emphasis, Inline, Link, Strong, Text

SpanBuilder: TypeAlias = Callable[[re.Match[str]], Inline]

INLINE_RULES: tuple[tuple[str, re.Pattern[str], SpanBuilder], ...] = (
    ("strong", re.compile(r"\*\*(.+?)\*\*"), lambda m: Strong(m.group(1))),
    ("emphasis", re.compile(r"\*(.+?)\*"), lambda m: Emphasis(m.group(1))),
    ("code", re.compile(r"`(.+?)`"), lambda m: CodeSpan(m.group(1))),
    ("link", re.compile(r"\[(.+?)\]\((.+?)\)"), lambda m: Link(m.group(1), m.group(2))),
)


def tokenize(text: str) -> tuple[Inline, ...]:
    """Tokenize block text into inline spans.

    Args:
        text: Raw text of a heading, paragraph or list item

    Returns:
        Spans in source order. Empty text gives an empty tuple; text with no
        recognised syntax gives a single Text span.

    """
    spans: list[Inline] = []
    remaining = text

    while remaining:
        match = _first_rule_match(remaining)
        if match is None:
            spans.append(Text(remaining))
            break

        found, build = match
        if found.start() > 0:
            spans.append(Text(remaining[: found.start()]))
        spans.append(build(found))
        remaining = remaining[found.end() :]

    return tuple(spans)


def _first_rule_match(text: str) -> tuple[re.Match[str], SpanBuilder] | None:
    """Return the match of the highest-priority rule that matches anywhere."""
    for _name, pattern, build in INLINE_RULES:
        found = pattern.search(text)
        if found is not None:
            return found, build
    return None
