"""Parser combining block segmentation and inline tokenization.

Usage:
    >>> from goteo.parser import parse
    >>> doc = parse("## Plan\\n- **fast**")
    >>> doc.children[1].items[0].children
    (Strong(content='fast'),)

Thread Safety:
parse() holds no state between calls. Configuration is read from the
current context (see goteo.config).

"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace

from goteo.location import SourceLocation
from goteo.nodes import Block, Document, Heading, List, ListItem, Paragraph
from goteo.parsing import segment, tokenize


def parse(source: str, *, source_file: str | None = None) -> Document:
    """Parse reply text into a Document.

    Args:
        source: Raw reply text, complete or a streaming prefix
        source_file: Optional source name recorded in locations

    Returns:
        Document whose blocks have their inline spans filled in

    """
    blocks = resolve_inlines(segment(source, source_file=source_file))
    return build_document(source, blocks, source_file)


def resolve_inlines(blocks: Iterable[Block]) -> tuple[Block, ...]:
    """Fill in ``children`` of every text-bearing block."""
    return tuple(_resolve(block) for block in blocks)


def build_document(
    source: str, blocks: tuple[Block, ...], source_file: str | None = None
) -> Document:
    """Wrap top-level blocks in a Document spanning all of ``source``."""
    loc = SourceLocation(
        lineno=1,
        end_lineno=source.count("\n") + 1,
        offset=0,
        end_offset=len(source),
        source_file=source_file,
    )
    return Document(location=loc, children=blocks)


def _resolve(block: Block) -> Block:
    match block:
        case Heading() | Paragraph() | ListItem():
            return replace(block, children=tokenize(block.text))
        case List():
            return replace(block, items=tuple(_resolve(item) for item in block.items))  # type: ignore[misc]
        case _:
            return block
