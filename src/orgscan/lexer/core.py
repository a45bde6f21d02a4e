"""Incremental scanner: line classification and block accumulation.

Feeds lines from the LineReader through the classifiers and the state
machine in orgscan.lexer.modes, and pushes finalized items onto an
ItemStream.

Input may arrive in any number of pieces. Only complete lines are
processed by feed(); an unterminated tail waits for the next feed() or
for finalize(). Splitting the input at any byte boundary produces the
same items as feeding it whole.

Thread Safety:
Scanner instances are single-producer. Do not call feed()/finalize() from
more than one thread. Consumers may drain the stream from other threads.

"""

from __future__ import annotations

from orgscan.config import ScanConfig, get_scan_config
from orgscan.errors import ScannerFinalizedError
from orgscan.items import Comment, Headline, Item, Keyword, Text
from orgscan.lexer.classifiers import (
    CommentMatch,
    HeadlineMatch,
    KeywordMatch,
    classify_line,
)
from orgscan.lexer.modes import ScanState, transition
from orgscan.lexer.reader import Line, LineReader
from orgscan.location import Span
from orgscan.stream import ItemStream
from orgscan.utils.logger import get_logger

logger = get_logger(__name__)


class _PendingBlock:
    """A comment or text block still being accumulated.

    Owned exclusively by the Scanner and only ever appended to.
    """

    __slots__ = ("state", "parts", "span")

    def __init__(self, state: ScanState, line: Line, body: str, source_file: str | None) -> None:
        self.state = state
        self.parts = [body]
        self.span = Span(line.start, line.end, source_file)

    def append(self, line: Line, body: str) -> None:
        self.parts.append(body)
        self.span = self.span.extend_to(line.end)

    def build(self) -> Comment | Text:
        body = "\n".join(self.parts)
        if self.state is ScanState.IN_COMMENT:
            return Comment(span=self.span, body=body)
        return Text(span=self.span, body=body)


class Scanner:
    """Streaming scanner for outline markup.

    Usage:
            >>> scanner = Scanner(ItemStream(capacity=0))
            >>> scanner.feed("#+TITLE: My Blog\\n* Heading One")
            1
            >>> scanner.finalize()
            1
            >>> for item in scanner.stream:
            ...     print(item)
        Keyword[TITLE: 'My Blog'; 1:0-1:16]
        Headline[1, 'Heading One', []; 2:0-2:13]

    """

    __slots__ = (
        "_reader",
        "_stream",
        "_state",
        "_pending",
        "_source_file",
        "_config",
        "_finalized",
    )

    def __init__(
        self,
        stream: ItemStream | None = None,
        *,
        source_file: str | None = None,
        config: ScanConfig | None = None,
    ) -> None:
        """Create a scanner.

        Args:
            stream: Output stream; a new one sized from config if omitted
            source_file: Path recorded on every span (optional)
            config: Scan configuration; the active context config if omitted
        """
        self._config = config if config is not None else get_scan_config()
        self._source_file = source_file if source_file is not None else self._config.source_file
        self.reset(stream)

    def reset(self, stream: ItemStream | None = None) -> None:
        """Start over with a fresh reader, IDLE state and a new stream."""
        self._reader = LineReader(self._source_file)
        self._stream = stream if stream is not None else ItemStream(self._config.stream_capacity)
        self._state = ScanState.IDLE
        self._pending: _PendingBlock | None = None
        self._finalized = False

    @property
    def stream(self) -> ItemStream:
        return self._stream

    @property
    def state(self) -> ScanState:
        return self._state

    @property
    def finalized(self) -> bool:
        return self._finalized

    @property
    def cancelled(self) -> bool:
        return self._stream.cancelled

    @property
    def source_file(self) -> str | None:
        return self._source_file

    def cancel(self) -> None:
        """Stop producing; equivalent to cancelling the stream."""
        self._stream.cancel()

    def feed(self, data: bytes | str) -> int:
        """Append input and process every complete line in it.

        An unterminated trailing line is retained and never emitted here.

        Returns:
            Number of items pushed onto the stream.

        Raises:
            ScannerFinalizedError: finalize() was already called.
            InvalidEncodingError: A complete line is not valid UTF-8.
        """
        if self._finalized:
            raise ScannerFinalizedError("Cannot feed a finalized scanner")
        if self._stream.cancelled:
            return 0
        self._reader.feed(data)
        return self._consume()

    def finalize(self) -> int:
        """Process the retained tail, flush the open block, close the stream.

        Must be called exactly once, after the last feed().

        Returns:
            Number of items pushed onto the stream.

        Raises:
            ScannerFinalizedError: finalize() was already called.
            InvalidEncodingError: The final line is not valid UTF-8.
        """
        if self._finalized:
            raise ScannerFinalizedError("Scanner already finalized")
        self._finalized = True
        emitted = 0
        try:
            if not self._stream.cancelled:
                self._reader.finish()
                emitted = self._consume()
                if self._pending is not None:
                    emitted += self._close_block()
        finally:
            self._pending = None
            self._state = ScanState.IDLE
            self._stream.close()
        logger.debug("Finalized after %d lines", self._reader.lineno)
        return emitted

    def _consume(self) -> int:
        emitted = 0
        while not self._stream.cancelled:
            line = self._reader.advance()
            if line is None:
                break
            emitted += self._step(line)
        return emitted

    def _step(self, line: Line) -> int:
        """Apply one line to the state machine."""
        classified = classify_line(line.text)
        next_state, close_open_block = transition(self._state, classified.kind)

        emitted = 0
        if close_open_block:
            emitted += self._close_block()

        match classified.match:
            case KeywordMatch(key=key, value=value):
                emitted += self._emit(Keyword(span=self._line_span(line), key=key, value=value))
            case HeadlineMatch(level=level, body=body, tags=tags):
                emitted += self._emit(
                    Headline(span=self._line_span(line), level=level, body=body, tags=tags)
                )
            case CommentMatch(body=body):
                self._accumulate(ScanState.IN_COMMENT, line, body)
            case None:
                self._accumulate(ScanState.IN_TEXT, line, line.text)

        self._state = next_state
        return emitted

    def _line_span(self, line: Line) -> Span:
        return Span(line.start, line.end, self._source_file)

    def _accumulate(self, state: ScanState, line: Line, body: str) -> None:
        if self._pending is None:
            self._pending = _PendingBlock(state, line, body, self._source_file)
        else:
            self._pending.append(line, body)

    def _close_block(self) -> int:
        pending = self._pending
        self._pending = None
        if pending is None:
            return 0
        return self._emit(pending.build())

    def _emit(self, item: Item) -> int:
        if not self._stream.put(item):
            logger.debug("Stream cancelled; dropping %s", item)
            return 0
        logger.debug("Emitted %s", item)
        return 1
