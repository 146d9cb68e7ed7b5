"""
Core Data Models for importgraph

This module defines the data structures shared across the pipeline:
- NodeId: Normalized identity of one source module
- ImportRecord: One import occurrence found in a file
- ScanResult: Aggregate outcome of scanning a directory tree

Edge direction convention:
    Edges run from the importing module to the imported module. A node's
    adjacency set therefore holds the modules it imports, and its import
    count is the number of distinct files importing it.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from importgraph.graph.dependency_graph import DependencyGraph


NodeId = str


@dataclass(frozen=True)
class ImportRecord:
    """
    A single import occurrence extracted from a source file.

    Attributes:
        raw: The literal text between the marker and the closing quote
        offset: Byte offset of the import string within the file
        importer: Normalized id of the importing file, if known
    """

    raw: str
    offset: int
    importer: Optional[NodeId] = None


@dataclass
class ScanResult:
    """
    Result of scanning a directory tree.

    Attributes:
        graph: The populated dependency graph
        files_scanned: Number of source files read into the graph
        files_skipped: Number of zero-length files ignored
        errors: (path, message) pairs for files or entries that were skipped
        scan_time_seconds: Total time taken for the scan
    """

    graph: "DependencyGraph"
    files_scanned: int = 0
    files_skipped: int = 0
    errors: list[tuple[str, str]] = field(default_factory=list)
    scan_time_seconds: float = 0.0

    @property
    def node_count(self) -> int:
        """Total number of modules in the graph."""
        return self.graph.node_count

    @property
    def edge_count(self) -> int:
        """Total number of distinct import edges."""
        return self.graph.edge_count

    @property
    def error_count(self) -> int:
        """Number of recorded errors."""
        return len(self.errors)
