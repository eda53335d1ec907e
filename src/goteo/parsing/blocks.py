"""Block segmenter: first parsing pass.

Splits raw reply text into an ordered sequence of block nodes with a
single forward scan over its lines. There is no backtracking and no
lookahead beyond the run being consumed.

Classification order for the line under the cursor:
1. Code fence    - stripped line starts with three backticks
2. Heading       - raw line starts with "# ", "## " or "### "
3. Ordered list  - stripped line matches ORDERED_MARKER; consecutive lines grouped
4. Bullet list   - stripped line starts with "- " or "* "; consecutive lines grouped
5. Blank line    - stripped line is empty
6. Paragraph     - anything else, one block per line

"Stripped" means trimmed with trim_line(), which removes Unicode spaces
(including U+3000 and U+00A0) and the byte order mark.

Segmentation is total: every line lands in exactly one block and nothing
raises. An unterminated fence is closed at end of input.

Thread Safety:
segment() keeps all scan state in a per-call _Scanner. Safe to call
concurrently.

"""

from __future__ import annotations

import re

from goteo.config import get_parse_config
from goteo.location import SourceLocation
from goteo.nodes import (
    BlankLine,
    Block,
    FencedCode,
    Heading,
    List,
    ListItem,
    Paragraph,
)
from goteo.utils.logger import get_logger

logger = get_logger(__name__)

# Characters trimmed from both ends of a line: Unicode space separators,
# line terminators and the byte order mark. Unlike str.strip() this keeps
# the C0 separators \x1c-\x1f and NEL \x85, and drops \ufeff.
WHITESPACE = (
    "\t\n\v\f\r \u00a0\u1680"
    + "".join(chr(c) for c in range(0x2000, 0x200B))
    + "\u2028\u2029\u202f\u205f\u3000\ufeff"
)

FENCE_MARKER = "```"
ORDERED_MARKER = re.compile(f"[0-9]+\\.[{WHITESPACE}]")
BULLET_MARKERS = ("- ", "* ")

# (prefix, level); prefixes have distinct lengths so order is irrelevant
HEADING_MARKERS: tuple[tuple[str, int], ...] = (("# ", 1), ("## ", 2), ("### ", 3))


def trim_line(line: str) -> str:
    """Strip WHITESPACE from both ends of ``line``."""
    return line.strip(WHITESPACE)


def segment(text: str, *, source_file: str | None = None) -> tuple[Block, ...]:
    """Split text into top-level blocks.

    Args:
        text: Raw reply text, possibly a partial prefix of a streaming reply
        source_file: Optional source name recorded in block locations

    Returns:
        Blocks in source order. Text-bearing blocks have empty ``children``;
        use ``goteo.parse`` to also tokenize inline spans.

    Example:
        >>> segment("1. a\\n2. b")[0].items[1].text
        'b'

    """
    if not text:
        return ()
    return tuple(_Scanner(text, source_file).scan())


class _Scanner:
    """Per-call cursor over the lines of one text."""

    __slots__ = ("_lines", "_starts", "_source_file", "_default_language")

    def __init__(self, text: str, source_file: str | None) -> None:
        self._lines = text.split("\n")
        self._source_file = source_file
        self._default_language = get_parse_config().default_language

        # Absolute offset of each line start
        starts: list[int] = []
        offset = 0
        for line in self._lines:
            starts.append(offset)
            offset += len(line) + 1
        self._starts = starts

    def scan(self) -> list[Block]:
        blocks: list[Block] = []
        pos = 0
        while pos < len(self._lines):
            block, pos = self._classify(pos)
            blocks.append(block)
        return blocks

    def _classify(self, pos: int) -> tuple[Block, int]:
        """Classify the line at ``pos`` and return (block, next position)."""
        return (
            self._try_fence(pos)
            or self._try_heading(pos)
            or self._try_ordered_list(pos)
            or self._try_bullet_list(pos)
            or self._try_blank(pos)
            or self._paragraph(pos)
        )

    # =========================================================================
    # Classifiers
    # =========================================================================

    def _try_fence(self, pos: int) -> tuple[Block, int] | None:
        stripped = trim_line(self._lines[pos])
        if not stripped.startswith(FENCE_MARKER):
            return None

        language = trim_line(stripped[len(FENCE_MARKER) :]) or self._default_language

        end = pos + 1
        while end < len(self._lines) and not trim_line(self._lines[end]).startswith(FENCE_MARKER):
            end += 1
        content = tuple(self._lines[pos + 1 : end])

        terminated = end < len(self._lines)
        if terminated:
            # Closing marker is consumed but not part of the content
            end += 1

        location = self._location(pos, end)
        if not terminated:
            logger.debug("Code fence at line %s closed at end of input", location)
        return FencedCode(location, language, content, terminated), end

    def _try_heading(self, pos: int) -> tuple[Block, int] | None:
        line = self._lines[pos]
        for prefix, level in HEADING_MARKERS:
            if line.startswith(prefix):
                heading = Heading(self._location(pos, pos + 1), level, line[len(prefix) :])  # type: ignore[arg-type]
                return heading, pos + 1
        return None

    def _try_ordered_list(self, pos: int) -> tuple[Block, int] | None:
        items: list[ListItem] = []
        end = pos
        while end < len(self._lines):
            stripped = trim_line(self._lines[end])
            match = ORDERED_MARKER.match(stripped)
            if match is None:
                break
            items.append(ListItem(self._location(end, end + 1), stripped[match.end() :]))
            end += 1

        if not items:
            return None
        return List(self._location(pos, end), tuple(items), ordered=True), end

    def _try_bullet_list(self, pos: int) -> tuple[Block, int] | None:
        items: list[ListItem] = []
        end = pos
        while end < len(self._lines):
            stripped = trim_line(self._lines[end])
            if not stripped.startswith(BULLET_MARKERS):
                break
            items.append(ListItem(self._location(end, end + 1), stripped[2:]))
            end += 1

        if not items:
            return None
        return List(self._location(pos, end), tuple(items), ordered=False), end

    def _try_blank(self, pos: int) -> tuple[Block, int] | None:
        if trim_line(self._lines[pos]):
            return None
        return BlankLine(self._location(pos, pos + 1)), pos + 1

    def _paragraph(self, pos: int) -> tuple[Block, int]:
        return Paragraph(self._location(pos, pos + 1), self._lines[pos]), pos + 1

    # =========================================================================
    # Helpers
    # =========================================================================

    def _location(self, start: int, end: int) -> SourceLocation:
        """Location of lines ``start`` up to (not including) ``end``."""
        last = end - 1
        return SourceLocation(
            lineno=start + 1,
            end_lineno=end,
            offset=self._starts[start],
            end_offset=self._starts[last] + len(self._lines[last]),
            source_file=self._source_file,
        )
