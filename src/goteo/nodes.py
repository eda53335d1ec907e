"""Typed node tree for goteo.

All nodes are frozen dataclasses with slots, so a parsed reply can be shared
between the streaming engine, renderers and caches without copying, and
compared structurally with ``==``.

Node Hierarchy:
Node (base)
├── Block (block-level units, carry a SourceLocation)
│   ├── Document
│   ├── Heading
│   ├── Paragraph
│   ├── List
│   ├── ListItem
│   ├── FencedCode
│   └── BlankLine
└── Inline (spans inside a block's text)
    ├── Text
    ├── Strong
    ├── Emphasis
    ├── CodeSpan
    └── Link

Blocks that hold raw text (Heading, Paragraph, ListItem) keep it in ``text``.
``children`` holds the inline spans for that text: empty when produced by
``segment()``, filled in by ``parse()``.

"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, TypeAlias

from goteo.location import SourceLocation

# =============================================================================
# Base Node
# =============================================================================


@dataclass(frozen=True, slots=True)
class Node:
    """Base class for all nodes."""


# =============================================================================
# Inline Nodes
# =============================================================================


@dataclass(frozen=True, slots=True)
class Text(Node):
    """Plain text run.

    Also the fallback for any span syntax that did not match.

    """

    content: str


@dataclass(frozen=True, slots=True)
class Strong(Node):
    """Bold text.

    Markdown: **text**
    HTML: <strong>text</strong>

    """

    content: str


@dataclass(frozen=True, slots=True)
class Emphasis(Node):
    """Italic text.

    Markdown: *text*
    HTML: <em>text</em>

    """

    content: str


@dataclass(frozen=True, slots=True)
class CodeSpan(Node):
    """Inline code.

    Markdown: `code`
    HTML: <code>code</code>

    """

    code: str


@dataclass(frozen=True, slots=True)
class Link(Node):
    """Hyperlink.

    Markdown: [text](url)
    HTML: <a href="url">text</a>

    """

    text: str
    url: str


Inline: TypeAlias = Text | Strong | Emphasis | CodeSpan | Link


# =============================================================================
# Block Nodes
# =============================================================================


@dataclass(frozen=True, slots=True)
class Heading(Node):
    """ATX heading, levels 1 to 3.

    Markdown: # Title, ## Title, ### Title
    HTML: <h1>Title</h1>

    """

    location: SourceLocation
    level: Literal[1, 2, 3]
    text: str
    children: tuple[Inline, ...] = ()


@dataclass(frozen=True, slots=True)
class Paragraph(Node):
    """A single line of text.

    Consecutive text lines are never merged; each is its own paragraph.

    """

    location: SourceLocation
    text: str
    children: tuple[Inline, ...] = ()


@dataclass(frozen=True, slots=True)
class ListItem(Node):
    """List item with its marker stripped."""

    location: SourceLocation
    text: str
    children: tuple[Inline, ...] = ()


@dataclass(frozen=True, slots=True)
class List(Node):
    """Run of consecutive ordered or unordered list items.

    Markdown: - item / * item / 1. item
    HTML: <ul>/<ol> with <li> children

    """

    location: SourceLocation
    items: tuple[ListItem, ...]
    ordered: bool = False


@dataclass(frozen=True, slots=True)
class FencedCode(Node):
    """Fenced code block.

    ``lines`` are the verbatim content lines between the fence markers.
    ``terminated`` is False when the closing fence was missing and the
    block was closed at end of input, which is the normal state of a code
    block in a reply that is still streaming.

    """

    location: SourceLocation
    language: str
    lines: tuple[str, ...]
    terminated: bool = True

    @property
    def code(self) -> str:
        """Code content as a single string."""
        return "\n".join(self.lines)


@dataclass(frozen=True, slots=True)
class BlankLine(Node):
    """Empty or whitespace-only line.

    HTML: <br />

    """

    location: SourceLocation


@dataclass(frozen=True, slots=True)
class Document(Node):
    """Root node holding the top-level blocks of one reply."""

    location: SourceLocation
    children: tuple[Block, ...]


Block: TypeAlias = Heading | Paragraph | List | ListItem | FencedCode | BlankLine | Document
