"""Content loading: read source documents and scan them.

The entry points a site build uses to turn an ``.org`` file into items.
They own all file I/O; the scanner itself never touches the filesystem.

Example:
    >>> from orgscan.loader import load_document
    >>> items = load_document("content/homepage.org")

"""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path
from typing import BinaryIO, TypeAlias

from orgscan import iter_items, scan_chunks
from orgscan.config import get_scan_config
from orgscan.errors import DocumentLoadError
from orgscan.items import Item
from orgscan.utils.logger import get_logger

logger = get_logger(__name__)

PathLike: TypeAlias = str | os.PathLike[str]


def read_document(path: PathLike) -> bytes:
    """Read a whole source document.

    Raises:
        DocumentLoadError: The file cannot be read.
    """
    try:
        return Path(path).read_bytes()
    except OSError as exc:
        raise DocumentLoadError(os.fspath(path), exc.strerror or str(exc)) from exc


def _split(data: bytes, chunk_size: int) -> Iterator[bytes]:
    for start in range(0, len(data), chunk_size):
        yield data[start : start + chunk_size]


def load_document(path: PathLike, *, chunk_size: int | None = None) -> list[Item]:
    """Read a document into memory and scan it in ``chunk_size`` pieces.

    Args:
        path: Document path
        chunk_size: Bytes per feed; defaults to ScanConfig.chunk_size

    Returns:
        Items in source order.

    Raises:
        DocumentLoadError: The file cannot be read.
        InvalidEncodingError: The document is not valid UTF-8.
    """
    size = chunk_size or get_scan_config().chunk_size
    data = read_document(path)
    items = scan_chunks(_split(data, size), source_file=os.fspath(path))
    logger.info("Loaded %s: %d bytes, %d items", os.fspath(path), len(data), len(items))
    return items


def _read_chunks(handle: BinaryIO, chunk_size: int, path: str) -> Iterator[bytes]:
    while True:
        try:
            chunk = handle.read(chunk_size)
        except OSError as exc:
            raise DocumentLoadError(path, exc.strerror or str(exc)) from exc
        if not chunk:
            return
        yield chunk


def iter_document(
    path: PathLike,
    *,
    chunk_size: int | None = None,
    capacity: int | None = None,
) -> Iterator[Item]:
    """Stream a document from disk, yielding items as they are finalized.

    The file is read by the producer thread of iter_items(); closing this
    generator early cancels the scan and closes the file.

    Args:
        path: Document path
        chunk_size: Bytes per read; defaults to ScanConfig.chunk_size
        capacity: Stream buffer size; defaults to ScanConfig.stream_capacity

    Raises:
        DocumentLoadError: The file cannot be opened or read.
        InvalidEncodingError: The document is not valid UTF-8.
    """
    name = os.fspath(path)
    size = chunk_size or get_scan_config().chunk_size
    try:
        handle = open(path, "rb")
    except OSError as exc:
        raise DocumentLoadError(name, exc.strerror or str(exc)) from exc
    with handle:
        yield from iter_items(_read_chunks(handle, size, name), capacity=capacity, source_file=name)


def log_document(path: PathLike) -> int:
    """Scan a document and log every item at INFO level.

    Returns:
        Number of items logged.
    """
    count = 0
    for item in iter_document(path):
        logger.info("%s", item)
        count += 1
    return count
