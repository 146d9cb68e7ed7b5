"""
Node identity normalization.

Turns a raw file path ("src/graph/graph.zig") or import string
("graph/graph.zig", "std") into the NodeId used as a graph key.

Rule:
    Drop the extension of the last component, then keep at most the last
    two path components joined by "/". "src/graph/graph.zig" and the
    import "graph/graph.zig" both become "graph/graph"; "std" stays "std".

Limitation:
    Two distinct modules sharing both their parent directory name and file
    name collapse into one node.
"""

import posixpath
import re

from importgraph.errors import NormalizationError
from importgraph.models import NodeId

_SEPARATORS = re.compile(r"[\\/]")


def split_components(raw: str) -> list[str]:
    """Split on "/" and "\\", dropping empty components."""
    return [part for part in _SEPARATORS.split(raw) if part]


def normalize_path(raw: str, separator: str = "/") -> NodeId:
    """
    Normalize a raw path or import string into a NodeId.

    Args:
        raw: File path or import target text
        separator: String used to join the two kept components

    Returns:
        "parent/stem" when at least two components exist, otherwise "stem"

    Raises:
        NormalizationError: If raw has no path components

    Example:
        >>> normalize_path("src/graph/graph.zig")
        'graph/graph'
        >>> normalize_path("std")
        'std'
    """
    components = split_components(raw)
    if not components:
        raise NormalizationError(raw)

    stem, _ = posixpath.splitext(components[-1])
    components[-1] = stem

    if len(components) > 1:
        return separator.join(components[-2:])
    return components[0]


class PathNormalizer:
    """
    Callable wrapper around normalize_path with a fixed join separator.

    Usage:
        normalize = PathNormalizer()
        node_id = normalize("pkg/a.zig")
    """

    def __init__(self, separator: str = "/") -> None:
        if not separator:
            raise ValueError("separator must be non-empty")
        self.separator = separator

    def normalize(self, raw: str) -> NodeId:
        return normalize_path(raw, separator=self.separator)

    __call__ = normalize
