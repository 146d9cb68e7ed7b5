"""
importgraph

Builds a directed module dependency graph from a tree of Zig source
files by scanning their @import declarations.
"""

from importgraph.models import ImportRecord, NodeId, ScanResult

__all__ = ["ImportRecord", "NodeId", "ScanResult"]
__version__ = "0.1.0"
