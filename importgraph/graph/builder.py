"""
Graph Builder for importgraph

This module drives the scan pipeline: discover files, read them, extract
import strings, normalize ids, and insert edges into a DependencyGraph.

Design Decisions:
    - One file at a time, synchronously, in scanner order
    - Edges are inserted as add_edge(importer, imported), so a module's
      import count is the number of distinct files importing it
    - A file's imports are fully extracted before any of them touch the
      graph, so a malformed file contributes nothing
    - Per-file failures are recorded on the ScanResult and skipped unless
      fail_fast is set; discovery failures always abort

Pipeline:
    Input: Root directory (or an in-memory mapping of path -> bytes)
    Transformation: scan -> read -> extract -> normalize -> add_edge
    Output: ScanResult wrapping the populated DependencyGraph
"""

import logging
import os
import time
from pathlib import Path
from typing import Mapping, Optional, Set

from importgraph.errors import (
    ImportGraphError,
    MalformedImportError,
    NormalizationError,
    ReadError,
)
from importgraph.graph.dependency_graph import DependencyGraph
from importgraph.models import ScanResult
from importgraph.parser.extractor import IMPORT_MARKER, ImportExtractor
from importgraph.paths.normalizer import normalize_path
from importgraph.scanner.discovery import FileScanner, get_relative_path

logger = logging.getLogger(__name__)


def read_source(file_path: Path) -> bytes:
    """
    Read a file's full contents.

    Raises:
        ReadError: If the file cannot be opened or read, or fewer bytes
            arrive than its reported size
    """
    try:
        with open(file_path, "rb") as f:
            expected = os.fstat(f.fileno()).st_size
            content = f.read()
    except OSError as e:
        raise ReadError(str(file_path), e.strerror or str(e)) from e

    if len(content) < expected:
        raise ReadError(
            str(file_path),
            f"incomplete read ({len(content)} of {expected} bytes)",
        )
    return content


class GraphBuilder:
    """
    Builds a DependencyGraph from source files.

    Attributes:
        fail_fast: Re-raise per-file errors instead of recording them

    Usage:
        builder = GraphBuilder(exclude_dirs={"zig-cache"})
        result = builder.build_result("./my-project")
        print(result.node_count, result.edge_count)
    """

    def __init__(
        self,
        extensions: Optional[Set[str]] = None,
        exclude_dirs: Optional[Set[str]] = None,
        marker: bytes = IMPORT_MARKER,
        fail_fast: bool = False,
    ) -> None:
        self.fail_fast = fail_fast
        self._scanner = FileScanner(extensions=extensions, exclude_dirs=exclude_dirs)
        self._extractor = ImportExtractor(marker=marker, strict=True)

    def build(self, directory: Path | str) -> DependencyGraph:
        """Scan directory and return only the graph."""
        return self.build_result(directory).graph

    def build_result(self, directory: Path | str) -> ScanResult:
        """
        Scan a directory tree and build its import graph.

        Args:
            directory: Root of the source tree; ids are derived from paths
                relative to it

        Returns:
            ScanResult with the graph, counters and recorded errors

        Raises:
            DiscoveryError: If the root cannot be scanned
            ImportGraphError: Any per-file error, when fail_fast is set
        """
        start_time = time.time()
        directory = Path(directory)
        result = ScanResult(graph=DependencyGraph())

        for file_path in self._scanner.scan(directory):
            relative = get_relative_path(file_path, directory).as_posix()
            logger.debug("Reading file %s", relative)

            try:
                content = read_source(file_path)
            except ReadError as e:
                self._record(result, relative, e)
                continue

            self._add_source(result, relative, content)

        result.scan_time_seconds = time.time() - start_time
        return result

    def build_from_sources(self, files: Mapping[str, bytes]) -> ScanResult:
        """
        Build a graph from in-memory file contents.

        Args:
            files: Mapping of relative path to raw content, processed in
                mapping order

        Returns:
            ScanResult with the graph, counters and recorded errors
        """
        start_time = time.time()
        result = ScanResult(graph=DependencyGraph())

        for path, content in files.items():
            self._add_source(result, path, content)

        result.scan_time_seconds = time.time() - start_time
        return result

    def _add_source(self, result: ScanResult, path: str, content: bytes) -> None:
        if not content:
            logger.debug("Skipping empty file %s", path)
            result.files_skipped += 1
            return

        try:
            file_id = normalize_path(path)
            imports = list(self._extractor.extract(content, path=path))
        except (NormalizationError, MalformedImportError) as e:
            self._record(result, path, e)
            return

        graph = result.graph
        graph.add_node(file_id)

        for raw in imports:
            try:
                target = normalize_path(raw)
            except NormalizationError as e:
                self._record(result, path, e)
                continue

            logger.debug("%s imports %s", file_id, target)
            graph.add_edge(file_id, target)

        result.files_scanned += 1

    def _record(self, result: ScanResult, path: str, error: ImportGraphError) -> None:
        if self.fail_fast:
            raise error
        logger.warning("Skipping %s: %s", path, error)
        result.errors.append((path, str(error)))


def build_graph_from_directory(
    directory: Path | str,
    extensions: Optional[Set[str]] = None,
    exclude_dirs: Optional[Set[str]] = None,
    marker: bytes = IMPORT_MARKER,
    fail_fast: bool = False,
) -> ScanResult:
    """
    Build a DependencyGraph from all source files in a directory.

    Args:
        directory: Path to the directory to scan
        extensions: File suffixes to include (default: .zig)
        exclude_dirs: Directory names to skip
        marker: Import marker to scan for
        fail_fast: Abort on the first per-file error

    Returns:
        ScanResult containing the graph and any recorded errors

    Example:
        >>> result = build_graph_from_directory("./my_project")
        >>> print(f"{result.node_count} modules in {result.files_scanned} files")
    """
    builder = GraphBuilder(
        extensions=extensions,
        exclude_dirs=exclude_dirs,
        marker=marker,
        fail_fast=fail_fast,
    )
    return builder.build_result(directory)


def build_graph(directory: Path | str, **kwargs) -> DependencyGraph:
    """Build and return just the graph for a directory tree."""
    return build_graph_from_directory(directory, **kwargs).graph


def build_graph_from_sources(
    files: Mapping[str, bytes],
    marker: bytes = IMPORT_MARKER,
    fail_fast: bool = False,
) -> ScanResult:
    """
    Build a DependencyGraph from in-memory sources.

    Example:
        >>> result = build_graph_from_sources({
        ...     "pkg/a.zig": b'const b = @import("pkg/b.zig");',
        ...     "pkg/b.zig": b"pub fn f() void {}",
        ... })
        >>> result.graph.get_import_count("pkg/b")
        1
    """
    builder = GraphBuilder(marker=marker, fail_fast=fail_fast)
    return builder.build_from_sources(files)
