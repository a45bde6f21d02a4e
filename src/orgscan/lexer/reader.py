"""Line reader over a growable input buffer.

Splits fed bytes into lines on ``\\n`` without looking past the current
line. Bytes not yet followed by a separator are retained and re-read as a
(possibly longer) line once more input arrives or the input is finished.

Complexity:
Each fed byte is searched for a separator once: the scan cursor remembers
how far the retained tail has already been searched. Consumed lines are
dropped from the buffer in bulk at the next feed, so only the unterminated
tail is ever moved.

"""

from __future__ import annotations

from dataclasses import dataclass

from orgscan.errors import InvalidEncodingError, StreamClosedError
from orgscan.location import Position


@dataclass(frozen=True, slots=True)
class Line:
    """One source line, separator excluded.

    Attributes:
        number: Line number (1-indexed)
        text: Decoded line content
        offset: Absolute byte offset of the line's first byte
        byte_length: Encoded length of ``text``

    """

    number: int
    text: str
    offset: int
    byte_length: int

    @property
    def length(self) -> int:
        """Line length in characters."""
        return len(self.text)

    @property
    def start(self) -> Position:
        return Position(self.number, 0, self.offset)

    @property
    def end(self) -> Position:
        """Position just past the last character of the line."""
        return Position(self.number, len(self.text), self.offset + self.byte_length)


class LineReader:
    """Incremental line splitter.

    Usage:
            >>> reader = LineReader()
            >>> reader.feed(b"one\\ntw")
            >>> reader.advance().text
            'one'
            >>> reader.advance() is None  # "tw" is retained
            True
            >>> reader.feed(b"o")
            >>> reader.finish()
            >>> reader.advance().text
            'two'

    Thread Safety:
        Not thread-safe. Owned by a single Scanner.

    """

    __slots__ = (
        "_buffer",
        "_base",  # Absolute offset of _buffer[0]
        "_pos",  # Start of the current line within _buffer
        "_scan",  # Separator search resumes here (>= _pos)
        "_lineno",
        "_finished",
        "_exhausted",
        "_source_file",
    )

    def __init__(self, source_file: str | None = None) -> None:
        self._source_file = source_file
        self.reset()

    def reset(self) -> None:
        """Discard all buffered input and start over at line 1."""
        self._buffer = bytearray()
        self._base = 0
        self._pos = 0
        self._scan = 0
        self._lineno = 0
        self._finished = False
        self._exhausted = False

    @property
    def lineno(self) -> int:
        """Number of the last line returned (0 before the first)."""
        return self._lineno

    @property
    def exhausted(self) -> bool:
        """True once the final line has been returned after finish()."""
        return self._exhausted

    @property
    def pending(self) -> int:
        """Bytes buffered but not yet returned as a line."""
        return len(self._buffer) - self._pos

    def feed(self, data: bytes | str) -> None:
        """Append input.

        Raises:
            StreamClosedError: finish() was already called.
            InvalidEncodingError: ``data`` is a str that cannot be encoded.
        """
        if self._finished:
            raise StreamClosedError("Cannot feed a finished reader")
        if isinstance(data, str):
            try:
                data = data.encode("utf-8")
            except UnicodeEncodeError as exc:
                raise InvalidEncodingError(
                    f"cannot encode input as UTF-8: {exc.reason}",
                    source_file=self._source_file,
                ) from exc
        if self._pos:
            del self._buffer[: self._pos]
            self._base += self._pos
            self._scan -= self._pos
            self._pos = 0
        self._buffer += data

    def finish(self) -> None:
        """Mark end of input; the retained tail becomes the final line."""
        self._finished = True

    def advance(self) -> Line | None:
        """Return the next complete line, or None if none is available.

        Before finish(), None means "need more input". After finish(), the
        retained tail is returned once as the final line (empty when the
        input ended with a separator), then None forever. Empty input has
        no lines at all.

        Raises:
            InvalidEncodingError: The line is not valid UTF-8.
        """
        if self._exhausted:
            return None
        buffer = self._buffer
        eol = buffer.find(b"\n", self._scan)
        if eol != -1:
            return self._take(eol, 1)

        self._scan = len(buffer)
        if not self._finished:
            return None
        self._exhausted = True
        if self._base + len(buffer) == 0:
            return None
        return self._take(len(buffer), 0)

    def _take(self, end: int, separator: int) -> Line:
        start = self._pos
        raw = bytes(self._buffer[start:end])
        offset = self._base + start
        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise InvalidEncodingError(
                f"invalid UTF-8 in line: {exc.reason}",
                lineno=self._lineno + 1,
                offset=offset + exc.start,
                source_file=self._source_file,
            ) from exc

        self._lineno += 1
        self._pos = end + separator
        self._scan = self._pos
        return Line(self._lineno, text, offset, end - start)
