"""Bounded hand-off channel between the scanner and its consumers.

The scanner is the single producer: it pushes finalized items with put()
and calls close() exactly once after the last one. Consumers drain with
get() or plain iteration until closure is observed.

Backpressure:
With a non-zero capacity, put() blocks while the buffer is full until a
consumer takes an item. A capacity of 0 makes the stream unbounded, which
is what single-threaded callers (feed everything, then drain) need.

Cancellation:
A consumer that stops early calls cancel(). Buffered items are dropped,
a producer blocked in put() wakes up, and every later put() returns False
so the producer knows to stop feeding lines.

Thread Safety:
One producer thread and any number of consumer threads. All state is
guarded by a single Condition.

"""

from __future__ import annotations

import threading
import time
from collections import deque
from collections.abc import Iterator

from orgscan.config import get_scan_config
from orgscan.errors import StreamClosedError, StreamTimeoutError
from orgscan.items import Item


class ItemStream:
    """Ordered, closable, cancellable stream of items.

    Usage:
            >>> stream = ItemStream(capacity=0)
            >>> stream.put(item)
            True
            >>> stream.close()
            >>> list(stream)
        [item]

    """

    __slots__ = (
        "_capacity",
        "_items",
        "_cond",
        "_closed",
        "_cancelled",
    )

    def __init__(self, capacity: int | None = None) -> None:
        """Create a stream.

        Args:
            capacity: Maximum buffered items before put() blocks; 0 for no
                limit. Defaults to the active ScanConfig.stream_capacity.
        """
        if capacity is None:
            capacity = get_scan_config().stream_capacity
        if capacity < 0:
            msg = f"capacity must be >= 0, got {capacity}"
            raise ValueError(msg)
        self._capacity = capacity
        self._items: deque[Item] = deque()
        self._cond = threading.Condition()
        self._closed = False
        self._cancelled = False

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def closed(self) -> bool:
        """True once the producer has signalled the end of items."""
        return self._closed

    @property
    def cancelled(self) -> bool:
        """True once a consumer has asked the producer to stop."""
        return self._cancelled

    def __len__(self) -> int:
        with self._cond:
            return len(self._items)

    def _full(self) -> bool:
        return self._capacity > 0 and len(self._items) >= self._capacity

    def put(self, item: Item) -> bool:
        """Push an item, blocking while the stream is full.

        Returns:
            True if the item was queued, False if the stream was cancelled.

        Raises:
            StreamClosedError: The stream was already closed.
        """
        with self._cond:
            if self._closed:
                raise StreamClosedError("Cannot put to a closed stream")
            while self._full() and not self._cancelled:
                self._cond.wait()
            if self._cancelled:
                return False
            self._items.append(item)
            self._cond.notify_all()
            return True

    def close(self) -> None:
        """Signal that no further items will be produced.

        Buffered items remain available to consumers.

        Raises:
            StreamClosedError: The stream was already closed.
        """
        with self._cond:
            if self._closed:
                raise StreamClosedError("Stream already closed")
            self._closed = True
            self._cond.notify_all()

    def cancel(self) -> None:
        """Stop consuming early and release the producer."""
        with self._cond:
            self._cancelled = True
            self._items.clear()
            self._cond.notify_all()

    def get(self, timeout: float | None = None) -> Item | None:
        """Take the next item.

        Args:
            timeout: Seconds to wait for an item; None waits indefinitely.

        Returns:
            The next item, or None once the stream is closed and drained
            (or cancelled).

        Raises:
            StreamTimeoutError: No item arrived within ``timeout``.
        """
        deadline = None if timeout is None else time.monotonic() + timeout
        with self._cond:
            while not self._items and not self._closed and not self._cancelled:
                if deadline is None:
                    self._cond.wait()
                    continue
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    raise StreamTimeoutError(f"No item within {timeout}s")
                self._cond.wait(remaining)
            if self._cancelled or not self._items:
                return None
            item = self._items.popleft()
            self._cond.notify_all()
            return item

    def drain(self) -> list[Item]:
        """Consume every remaining item until the stream closes."""
        return list(self)

    def __iter__(self) -> Iterator[Item]:
        while (item := self.get()) is not None:
            yield item

    def __enter__(self) -> ItemStream:
        return self

    def __exit__(self, *exc_info: object) -> None:
        with self._cond:
            finished = self._closed and not self._items
        if not finished:
            self.cancel()

    def __repr__(self) -> str:
        state = "cancelled" if self._cancelled else "closed" if self._closed else "open"
        return f"ItemStream({state}, {len(self._items)}/{self._capacity or 'inf'})"
