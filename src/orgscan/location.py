"""Source positions and spans for scanned items.

Every item carries a Span covering exactly the source text it was built
from. Spans are line based: a span starts at column 0 of its first line and
ends just past the last character of its last line, separator excluded.

Thread Safety:
Position and Span are frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Position:
    """A point in the source.

    Attributes:
        line: Line number (1-indexed)
        column: Character offset within the line (0-indexed)
        offset: Absolute byte offset into the UTF-8 source

    Examples:
            >>> Position(line=3, column=0)
        Position(line=3, column=0, offset=0)

    """

    line: int
    column: int
    offset: int = 0

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


@dataclass(frozen=True, slots=True)
class Span:
    """Range of source text an item was derived from.

    Attributes:
        start: First position covered (always column 0)
        end: Position just past the last covered character
        source_file: Source file path (optional, for messages)

    Examples:
            >>> span = Span(Position(1, 0, 0), Position(2, 5, 11), "index.org")
            >>> str(span)
            'index.org:1:0-2:5'
            >>> span.lines
            2

    """

    start: Position
    end: Position
    source_file: str | None = None

    def __str__(self) -> str:
        text = f"{self.start}-{self.end}"
        if self.source_file:
            return f"{self.source_file}:{text}"
        return text

    @property
    def lines(self) -> int:
        """Number of source lines covered."""
        return self.end.line - self.start.line + 1

    def extend_to(self, end: Position) -> Span:
        """Return a copy of this span ending at ``end``."""
        return Span(self.start, end, self.source_file)

    def slice(self, source: bytes) -> bytes:
        """Return the bytes of ``source`` covered by this span."""
        return source[self.start.offset : self.end.offset]
