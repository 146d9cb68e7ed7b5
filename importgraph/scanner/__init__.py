"""Scanner module for discovering source files."""

from .discovery import (
    DEFAULT_EXTENSIONS,
    FileScanner,
    get_relative_path,
    iter_source_files,
)

__all__ = [
    "DEFAULT_EXTENSIONS",
    "FileScanner",
    "get_relative_path",
    "iter_source_files",
]
