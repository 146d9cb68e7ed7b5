"""
Paths module for importgraph.

This module canonicalizes file paths and import strings into the
stable node identities used by the dependency graph.
"""

from importgraph.paths.normalizer import (
    PathNormalizer,
    normalize_path,
    split_components,
)

__all__ = [
    "PathNormalizer",
    "normalize_path",
    "split_components",
]
