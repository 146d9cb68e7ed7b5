"""File discovery for scanning source trees."""

import logging
import os
from pathlib import Path
from typing import Iterator, Optional, Set

from importgraph.errors import DiscoveryError

logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS = {".zig"}


def iter_source_files(
    root: Path | str,
    extensions: Optional[Set[str]] = None,
    exclude_dirs: Optional[Set[str]] = None,
) -> Iterator[Path]:
    """
    Lazily iterate over source files in a directory tree.

    Only regular files are yielded; symlinks, devices and directories are
    not, and symlinked directories are not descended. Entries are visited
    in sorted-name order.

    Args:
        root: Root directory to scan.
        extensions: File suffixes to include. If None, uses DEFAULT_EXTENSIONS.
        exclude_dirs: Directory names to prune. If None, nothing is pruned.

    Yields:
        Path objects for matching files.

    Raises:
        DiscoveryError: If root is missing, not a directory, or unreadable.
    """
    if extensions is None:
        extensions = DEFAULT_EXTENSIONS
    if exclude_dirs is None:
        exclude_dirs = set()

    root = Path(root)
    if not root.exists():
        raise DiscoveryError(f"Directory not found: {root}")
    if not root.is_dir():
        raise DiscoveryError(f"Not a directory: {root}")

    try:
        top = _sorted_entries(root)
    except OSError as e:
        raise DiscoveryError(f"Cannot read directory {root}: {e}") from e

    yield from _walk(top, extensions, exclude_dirs)


def _sorted_entries(directory: Path) -> list[os.DirEntry]:
    with os.scandir(directory) as it:
        return sorted(it, key=lambda entry: entry.name)


def _walk(
    entries: list[os.DirEntry],
    extensions: Set[str],
    exclude_dirs: Set[str],
) -> Iterator[Path]:
    for entry in entries:
        if entry.is_dir(follow_symlinks=False):
            if entry.name in exclude_dirs:
                continue
            try:
                children = _sorted_entries(Path(entry.path))
            except OSError as e:
                logger.warning("Skipping unreadable directory %s: %s", entry.path, e)
                continue
            yield from _walk(children, extensions, exclude_dirs)
        elif entry.is_file(follow_symlinks=False):
            if Path(entry.name).suffix in extensions:
                yield Path(entry.path)


class FileScanner:
    """
    Reusable scanner bound to an extension filter and exclusion set.

    Usage:
        scanner = FileScanner(extensions={".zig"})
        for path in scanner.scan("src"):
            ...
    """

    def __init__(
        self,
        extensions: Optional[Set[str]] = None,
        exclude_dirs: Optional[Set[str]] = None,
    ) -> None:
        self.extensions = set(extensions) if extensions else set(DEFAULT_EXTENSIONS)
        self.exclude_dirs = set(exclude_dirs) if exclude_dirs else set()

    def scan(self, root: Path | str) -> Iterator[Path]:
        """Yield matching source files under root."""
        return iter_source_files(root, self.extensions, self.exclude_dirs)


def get_relative_path(file_path: Path, root: Path) -> Path:
    """Get the path relative to root, falling back to the path itself."""
    try:
        return file_path.relative_to(root)
    except ValueError:
        return file_path
