"""
Error types for importgraph.

All errors raised by the scanning pipeline derive from ImportGraphError,
so callers can catch the whole family at one seam (the CLI does).

Severity:
    - DiscoveryError aborts the whole build.
    - ReadError, MalformedImportError and NormalizationError are local to
      one file (or one import entry) and are recorded on the ScanResult
      unless the builder runs with fail_fast=True.
"""

from typing import Optional


class ImportGraphError(Exception):
    """Base class for all importgraph errors."""


class DiscoveryError(ImportGraphError):
    """The scan root is missing, not a directory, or unreadable."""


class ReadError(ImportGraphError):
    """
    A source file could not be opened or fully read.

    Attributes:
        path: The file that failed to read
    """

    def __init__(self, path: str, message: str) -> None:
        super().__init__(f"{path}: {message}")
        self.path = path


class MalformedImportError(ImportGraphError):
    """
    An import marker was found but never closed before end-of-content.

    Attributes:
        offset: Byte offset where the unterminated import string begins
    """

    def __init__(self, offset: int, path: Optional[str] = None) -> None:
        location = f"{path}: " if path else ""
        super().__init__(
            f"{location}unterminated import string starting at byte {offset}"
        )
        self.offset = offset
        self.path = path


class NormalizationError(ImportGraphError, ValueError):
    """
    A path or import string normalized to nothing.

    Attributes:
        raw: The offending input
    """

    def __init__(self, raw: str) -> None:
        super().__init__(f"cannot normalize {raw!r}: no path components")
        self.raw = raw
