"""
Parser module for importgraph.

This module provides the textual marker scan that extracts import
targets from raw source file content.
"""

from importgraph.parser.extractor import (
    IMPORT_MARKER,
    ImportExtractor,
    extract_imports,
    extract_records,
)

__all__ = [
    "IMPORT_MARKER",
    "ImportExtractor",
    "extract_imports",
    "extract_records",
]
