"""Source location tracking for block nodes.

Provides SourceLocation, the line and offset span a block was segmented from.
Used by incremental re-parsing to decide which blocks can be reused.

Thread Safety:
SourceLocation is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """Line and offset span of a block in its source text.

    Lines are 1-indexed and inclusive. Offsets are absolute character
    positions; ``end_offset`` is exclusive and stops before the newline
    that terminates the block's last line.

    Attributes:
        lineno: First line of the block (1-indexed)
        end_lineno: Last line of the block (1-indexed, inclusive)
        offset: Absolute start offset in the source
        end_offset: Absolute end offset in the source (exclusive)
        source_file: Source file path (optional)

    Examples:
        >>> loc = SourceLocation(lineno=3, end_lineno=5, offset=10, end_offset=42)
        >>> str(loc)
        '3'
        >>> str(SourceLocation(1, 1, 0, 4, "reply.md"))
        'reply.md:1'

    """

    lineno: int
    end_lineno: int
    offset: int = 0
    end_offset: int = 0
    source_file: str | None = None

    def __str__(self) -> str:
        """Format location for log and error messages."""
        if self.source_file:
            return f"{self.source_file}:{self.lineno}"
        return f"{self.lineno}"

    def shifted(self, lines: int, chars: int) -> SourceLocation:
        """Return a copy moved down by ``lines`` lines and ``chars`` characters."""
        return SourceLocation(
            lineno=self.lineno + lines,
            end_lineno=self.end_lineno + lines,
            offset=self.offset + chars,
            end_offset=self.end_offset + chars,
            source_file=self.source_file,
        )

    @classmethod
    def unknown(cls) -> SourceLocation:
        """Create a placeholder location for synthetically built nodes."""
        return cls(lineno=0, end_lineno=0)
