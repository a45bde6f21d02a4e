"""Exception classes for orgscan.

Classification itself never fails: unrecognized lines become Text.
The errors below cover undecodable input, misuse of the scanner and
stream lifecycle, and loader I/O.
"""

from __future__ import annotations


class OrgScanError(Exception):
    """Base exception for all orgscan errors.

    Subclass this for specific error categories.
    """

    pass


class InvalidEncodingError(OrgScanError, ValueError):
    """A source line is not valid UTF-8.

    Fatal for the document: the scanner stops at the offending line.
    """

    def __init__(
        self,
        message: str,
        lineno: int | None = None,
        offset: int | None = None,
        source_file: str | None = None,
    ) -> None:
        """Initialize encoding error with optional location.

        Args:
            message: Error description
            lineno: Line number of the undecodable line (1-indexed)
            offset: Absolute byte offset of the first bad byte
            source_file: Path to source file (optional)
        """
        self.message = message
        self.lineno = lineno
        self.offset = offset
        self.source_file = source_file

        location = ""
        if source_file:
            location = f"{source_file}:"
        if lineno is not None:
            location += f"{lineno}:"
        if location:
            location = location.rstrip(":") + " "

        super().__init__(f"{location}{message}")


class ScannerFinalizedError(OrgScanError):
    """Input was fed to a scanner that has already been finalized."""

    pass


class StreamClosedError(OrgScanError):
    """An item was pushed to a stream that has already been closed."""

    pass


class StreamTimeoutError(OrgScanError, TimeoutError):
    """No item arrived on the stream within the requested timeout."""

    pass


class DocumentLoadError(OrgScanError):
    """A source document could not be read.

    Always chained from the underlying OSError.
    """

    def __init__(self, path: str, message: str) -> None:
        """Initialize load error.

        Args:
            path: Path of the document that failed to load
            message: Description of the failure
        """
        self.path = path
        super().__init__(f"Cannot load '{path}': {message}")
