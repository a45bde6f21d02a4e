"""
orgscan: incremental scanner for Org-style outline markup

Turns outline text (headlines, #+KEY: keywords, # comments, body text)
into an ordered stream of typed, span-tagged items. It is the content
ingestion front end of a static site generator; rendering lives elsewhere.

Quick Start:
    >>> from orgscan import scan
    >>> for item in scan("#+TITLE: My Blog\\n** Heading :tag1:tag2:"):
    ...     print(item)
    Keyword[TITLE: 'My Blog'; 1:0-1:16]
    Headline[2, 'Heading', [tag1, tag2]; 2:0-2:22]

Streaming:
    >>> from orgscan import Scanner, ItemStream
    >>> scanner = Scanner(ItemStream(capacity=0))
    >>> scanner.feed("# first half of a li")
    0
    >>> scanner.feed("ne\\n")
    0
    >>> scanner.finalize()
    2

Producer thread with backpressure:
    >>> from orgscan import iter_items
    >>> for item in iter_items(chunks, capacity=16):
    ...     render(item)

"""

import threading
from collections.abc import Iterable, Iterator

from orgscan.config import (
    ScanConfig,
    get_scan_config,
    reset_scan_config,
    scan_config_context,
    set_scan_config,
)
from orgscan.errors import (
    DocumentLoadError,
    InvalidEncodingError,
    OrgScanError,
    ScannerFinalizedError,
    StreamClosedError,
    StreamTimeoutError,
)
from orgscan.items import Comment, Headline, Item, ItemBase, ItemType, Keyword, Text
from orgscan.lexer import LineReader, Scanner, ScanState
from orgscan.location import Position, Span
from orgscan.stream import ItemStream
from orgscan.utils.logger import get_logger

__version__ = "0.1.0"

logger = get_logger(__name__)


def scan(source: str | bytes, *, source_file: str | None = None) -> list[Item]:
    """Scan a complete document.

    Args:
        source: Document text (str, or UTF-8 bytes)
        source_file: Optional source file path recorded on spans

    Returns:
        Items in source order.

    Raises:
        InvalidEncodingError: A line is not valid UTF-8.
    """
    return scan_chunks((source,), source_file=source_file)


def scan_chunks(
    chunks: Iterable[str | bytes],
    *,
    source_file: str | None = None,
) -> list[Item]:
    """Scan a document supplied in sequential pieces.

    Pieces may split lines (or UTF-8 characters) anywhere; the result is
    identical to scanning the concatenation.

    Args:
        chunks: Sequential pieces of the document
        source_file: Optional source file path recorded on spans

    Returns:
        Items in source order.
    """
    scanner = Scanner(ItemStream(capacity=0), source_file=source_file)
    for chunk in chunks:
        scanner.feed(chunk)
    scanner.finalize()
    return scanner.stream.drain()


def iter_items(
    chunks: Iterable[str | bytes],
    *,
    capacity: int | None = None,
    source_file: str | None = None,
) -> Iterator[Item]:
    """Scan in a producer thread and yield items as they are finalized.

    The producer may run ahead by at most ``capacity`` items. Closing the
    generator early (break, exception, garbage collection) cancels the
    stream and joins the producer thread, so no production loop leaks.

    Args:
        chunks: Sequential pieces of the document, consumed by the producer
        capacity: Stream buffer size; defaults to ScanConfig.stream_capacity
        source_file: Optional source file path recorded on spans

    Yields:
        Items in source order.

    Raises:
        InvalidEncodingError: Re-raised from the producer after the items
            preceding the bad line have been yielded.
    """
    stream = ItemStream(capacity)
    scanner = Scanner(stream, source_file=source_file)
    failure: list[Exception] = []

    def produce() -> None:
        try:
            for chunk in chunks:
                if scanner.cancelled:
                    logger.debug("Consumer cancelled; producer stopping")
                    break
                scanner.feed(chunk)
            scanner.finalize()
        except Exception as exc:
            failure.append(exc)
        finally:
            if not stream.closed:
                stream.close()

    producer = threading.Thread(target=produce, name="orgscan-producer", daemon=True)
    producer.start()
    try:
        yield from stream
    finally:
        stream.cancel()
        producer.join()
    if failure:
        raise failure[0]


__all__ = [
    # Main API
    "iter_items",
    "scan",
    "scan_chunks",
    # Core classes
    "ItemStream",
    "LineReader",
    "ScanState",
    "Scanner",
    # Items
    "Comment",
    "Headline",
    "Item",
    "ItemBase",
    "ItemType",
    "Keyword",
    "Text",
    # Location
    "Position",
    "Span",
    # Configuration
    "ScanConfig",
    "get_scan_config",
    "reset_scan_config",
    "scan_config_context",
    "set_scan_config",
    # Errors
    "DocumentLoadError",
    "InvalidEncodingError",
    "OrgScanError",
    "ScannerFinalizedError",
    "StreamClosedError",
    "StreamTimeoutError",
    # Version
    "__version__",
]
