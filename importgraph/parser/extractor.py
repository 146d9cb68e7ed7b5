"""
Textual Import Extractor

This module provides the import-scanning functionality for importgraph,
pulling the literal targets of @import("...") declarations out of raw
file content.

Key Components:
    - ImportExtractor: Configurable marker scanner
    - extract_imports: Main entry point returning a list of import strings
    - extract_records: Entry point yielding ImportRecords with byte offsets

Design Decisions:
    - Pure substring scan, no tokenizer: a marker inside a comment or a
      string literal is reported as a real import
    - Every match captures the bytes up to the next double quote
    - Scanning resumes right after each marker, so a marker that sits
      inside a captured target is reported too
    - Each extract() call is an independent pass over the buffer
    - The search for the closing quote is bounded by the buffer end

Limitation:
    Escaped quotes and nested quotes are not understood.
"""

import logging
from typing import Iterator, Optional

from importgraph.errors import MalformedImportError
from importgraph.models import ImportRecord

logger = logging.getLogger(__name__)

IMPORT_MARKER = b'@import("'
CLOSING_QUOTE = b'"'


class ImportExtractor:
    """
    Scans raw bytes for a fixed import marker.

    Attributes:
        marker: Byte sequence that precedes a quoted import target
        strict: When True, an unterminated import raises MalformedImportError;
            when False, extraction stops quietly at that occurrence

    Usage:
        extractor = ImportExtractor()
        for target in extractor.extract(content):
            print(target)
    """

    def __init__(self, marker: bytes = IMPORT_MARKER, strict: bool = True) -> None:
        if not marker:
            raise ValueError("import marker must be non-empty")
        self.marker = marker
        self.strict = strict

    def _scan(self, content: bytes, path: Optional[str]) -> Iterator[tuple[int, bytes]]:
        """Yield (offset, raw bytes) for every terminated import, in source order."""
        position = 0
        end = len(content)

        while position < end:
            found = content.find(self.marker, position)
            if found == -1:
                return

            start = found + len(self.marker)
            close = content.find(CLOSING_QUOTE, start)
            if close == -1:
                if self.strict:
                    raise MalformedImportError(start, path=path)
                logger.warning(
                    "Unterminated import at byte %d%s, stopping extraction",
                    start,
                    f" in {path}" if path else "",
                )
                return

            yield start, content[start:close]
            position = start

    def extract(self, content: bytes, path: Optional[str] = None) -> Iterator[str]:
        """
        Yield the import strings referenced by content.

        Args:
            content: Raw file content
            path: Source path, used only in error messages

        Yields:
            Import strings in source order, duplicates preserved

        Raises:
            MalformedImportError: In strict mode, when a marker is never closed
        """
        for _, raw in self._scan(content, path):
            yield raw.decode("utf-8", errors="replace")

    def extract_records(
        self,
        content: bytes,
        importer: Optional[str] = None,
        path: Optional[str] = None,
    ) -> Iterator[ImportRecord]:
        """
        Yield an ImportRecord per import occurrence.

        Args:
            content: Raw file content
            importer: Normalized id of the file being scanned
            path: Source path, used only in error messages

        Yields:
            ImportRecords carrying the raw text and its byte offset
        """
        for offset, raw in self._scan(content, path):
            yield ImportRecord(
                raw=raw.decode("utf-8", errors="replace"),
                offset=offset,
                importer=importer,
            )


def extract_imports(
    content: bytes,
    marker: bytes = IMPORT_MARKER,
    strict: bool = True,
    path: Optional[str] = None,
) -> list[str]:
    """
    Extract all import strings from raw content.

    Args:
        content: Raw file content
        marker: Marker preceding each quoted import target
        strict: Raise on an unterminated import instead of stopping
        path: Source path for error messages

    Returns:
        Import strings in source order

    Example:
        >>> extract_imports(b'const std = @import("std");')
        ['std']
    """
    extractor = ImportExtractor(marker=marker, strict=strict)
    return list(extractor.extract(content, path=path))


def extract_records(
    content: bytes,
    importer: Optional[str] = None,
    marker: bytes = IMPORT_MARKER,
    strict: bool = True,
) -> list[ImportRecord]:
    """Extract ImportRecords from raw content."""
    extractor = ImportExtractor(marker=marker, strict=strict)
    return list(extractor.extract_records(content, importer=importer))
