"""
Graph module for importgraph.

This module provides the NetworkX-backed dependency graph and the
builder that populates it from a source tree.
"""

from importgraph.graph.dependency_graph import DependencyGraph, ImportGraph
from importgraph.graph.builder import (
    GraphBuilder,
    build_graph,
    build_graph_from_directory,
    build_graph_from_sources,
    read_source,
)

__all__ = [
    "DependencyGraph",
    "ImportGraph",
    "GraphBuilder",
    "build_graph",
    "build_graph_from_directory",
    "build_graph_from_sources",
    "read_source",
]
