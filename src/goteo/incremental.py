"""Incremental re-parsing for growing reply text.

While a reply streams in, each new prefix extends the previous one. Only the
last line of the previous text can change, and every line segments on its
own except for the runs that continue through it. So only the tail is
re-parsed:

1. Check that the new source extends the previous source.
2. The last previous block holds the previous final line and may change.
3. The block before it may change too, since a list run ends at the first
   line that does not match. Appending to that line can turn it into a
   continuation of the run (``"- a\\n-"`` + ``" b"``).
4. Re-parse from the start of that block to the end of the new source.
5. Shift the re-parsed blocks' locations to absolute positions and splice
   them after the reused blocks.

The result is always equal to ``parse(new_source)``. Reused blocks are the
same objects as in ``previous``.

Fallback:
    Any source that does not extend ``previous_source`` (an edit rather than
    an append) is parsed in full.

Thread Safety:
    ``parse_incremental`` is a pure function. Safe to call from any thread.

"""

from __future__ import annotations

from dataclasses import replace

from goteo.nodes import Block, Document, List
from goteo.parser import build_document, parse

# Trailing blocks that appended text can change
_UNSTABLE_TAIL = 2


def parse_incremental(
    new_source: str,
    previous: Document,
    previous_source: str,
    *,
    source_file: str | None = None,
) -> Document:
    """Parse text that grew by appending, reusing unaffected blocks.

    Args:
        new_source: The complete new text.
        previous: The Document parsed from ``previous_source``.
        previous_source: The text ``previous`` was parsed from.
        source_file: Optional source name recorded in locations.

    Returns:
        A Document equal to ``parse(new_source)``.

    """
    if not new_source.startswith(previous_source):
        return parse(new_source, source_file=source_file)

    if new_source == previous_source:
        return previous

    keep = len(previous.children) - _UNSTABLE_TAIL
    if keep <= 0:
        return parse(new_source, source_file=source_file)

    old_blocks = previous.children
    resume = old_blocks[keep].location
    region = parse(new_source[resume.offset :], source_file=source_file)
    tail = tuple(_shift(block, resume.lineno - 1, resume.offset) for block in region.children)

    return build_document(new_source, (*old_blocks[:keep], *tail), source_file)


def _shift(block: Block, lines: int, chars: int) -> Block:
    """Move a block and its list items from region to absolute coordinates."""
    moved = replace(block, location=block.location.shifted(lines, chars))  # type: ignore[arg-type]
    if isinstance(moved, List):
        items = tuple(
            replace(item, location=item.location.shifted(lines, chars)) for item in moved.items
        )
        moved = replace(moved, items=items)
    return moved
