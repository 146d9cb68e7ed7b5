"""
Dependency Graph for importgraph

This module defines the directed module graph built from import
declarations, backed by a NetworkX DiGraph.

Design Decisions:
    - Nodes are normalized module ids (strings)
    - Edges run from the importing module to the imported module, so a
      node's successors are the modules it imports and its predecessors
      are the modules importing it
    - Each node carries an "import_count" attribute: the number of distinct
      predecessors inserted via add_edge
    - An edge bumps the count only the first time it is ever inserted;
      re-inserting it, even after remove_edge, changes nothing
    - Structural removals leave counts untouched; call
      recompute_import_counts() afterwards to resynchronize them

Graph Properties:
    - Directed, unweighted
    - May have cycles (they are neither detected nor rejected)
    - Built once by the builder, read-only afterwards by convention
"""

from typing import Iterator, Protocol

import networkx as nx

from importgraph.models import NodeId

IMPORT_COUNT = "import_count"


class ImportGraph(Protocol):
    """
    Capability set consumers of a built graph are written against.

    Implementations:
        - DependencyGraph (NetworkX-backed)
    """

    def add_node(self, node_id: NodeId) -> None: ...

    def add_edge(self, from_id: NodeId, to_id: NodeId) -> bool: ...

    def remove_node(self, node_id: NodeId) -> None: ...

    def remove_edge(self, from_id: NodeId, to_id: NodeId) -> None: ...

    def get_import_count(self, node_id: NodeId) -> int: ...

    def get_adjacent_nodes(self, node_id: NodeId) -> set[NodeId]: ...

    def get_all_nodes(self) -> Iterator[NodeId]: ...

    def has_node(self, node_id: NodeId) -> bool: ...

    def has_edge(self, from_id: NodeId, to_id: NodeId) -> bool: ...


class DependencyGraph:
    """
    A directed import graph over normalized module ids.

    Wraps a NetworkX DiGraph to provide:
    - Idempotent node and edge insertion
    - Per-node import counts kept in step with distinct edges
    - Structural removal for programmatic graph editing
    - Flat reporting helpers (import count table, dependency levels)

    Attributes:
        graph: The underlying NetworkX DiGraph

    Usage:
        graph = DependencyGraph()
        graph.add_edge("main", "std")      # "main" imports "std"
        graph.get_import_count("std")      # 1
        graph.get_adjacent_nodes("main")   # {"std"}
    """

    def __init__(self) -> None:
        """Initialize an empty dependency graph."""
        self._graph: nx.DiGraph = nx.DiGraph()
        self._counted: set[tuple[NodeId, NodeId]] = set()

    @property
    def graph(self) -> nx.DiGraph:
        """Access the underlying NetworkX graph."""
        return self._graph

    @property
    def node_count(self) -> int:
        """Return the number of nodes in the graph."""
        return self._graph.number_of_nodes()

    @property
    def edge_count(self) -> int:
        """Return the number of distinct edges in the graph."""
        return self._graph.number_of_edges()

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._graph

    def __len__(self) -> int:
        return self.node_count

    def add_node(self, node_id: NodeId) -> None:
        """
        Add a node with a zero import count if it is not already present.

        Args:
            node_id: Normalized module id

        Raises:
            ValueError: If node_id is empty
        """
        if not node_id:
            raise ValueError("node id must be a non-empty string")
        if node_id not in self._graph:
            self._graph.add_node(node_id, **{IMPORT_COUNT: 0})

    def add_edge(self, from_id: NodeId, to_id: NodeId) -> bool:
        """
        Add a directed edge, creating either endpoint if needed.

        The import count of to_id is incremented only the first time this
        exact edge is inserted. Both ids are checked before the graph is
        touched, so a rejected call leaves no stray node behind.

        Args:
            from_id: Source node (the importing module, by convention)
            to_id: Target node (the imported module, by convention)

        Returns:
            True if the edge was inserted, False if it already existed

        Raises:
            ValueError: If either id is empty
        """
        if not from_id or not to_id:
            raise ValueError("node id must be a non-empty string")

        self.add_node(from_id)
        self.add_node(to_id)

        if self._graph.has_edge(from_id, to_id):
            return False

        self._graph.add_edge(from_id, to_id)
        if (from_id, to_id) not in self._counted:
            self._counted.add((from_id, to_id))
            self._graph.nodes[to_id][IMPORT_COUNT] += 1
        return True

    def remove_node(self, node_id: NodeId) -> None:
        """
        Remove a node, its outgoing set, and every edge pointing at it.

        Import counts of the remaining nodes are left as they were.
        Unknown ids are ignored.
        """
        if node_id in self._graph:
            self._graph.remove_node(node_id)

    def remove_edge(self, from_id: NodeId, to_id: NodeId) -> None:
        """
        Remove an edge without touching any import count.

        The edge stays counted, so adding it back does not bump to_id's
        count again. Missing edges are ignored.
        """
        if self._graph.has_edge(from_id, to_id):
            self._graph.remove_edge(from_id, to_id)

    def get_import_count(self, node_id: NodeId) -> int:
        """
        Return the stored import count of a node.

        Returns:
            The count, or 0 if the node is unknown
        """
        if node_id not in self._graph:
            return 0
        return self._graph.nodes[node_id].get(IMPORT_COUNT, 0)

    def get_adjacent_nodes(self, node_id: NodeId) -> set[NodeId]:
        """
        Return a copy of a node's outgoing adjacency set.

        Returns:
            Successor ids, or an empty set if the node is unknown
        """
        if node_id not in self._graph:
            return set()
        return set(self._graph.successors(node_id))

    def get_importers(self, node_id: NodeId) -> set[NodeId]:
        """Modules that import node_id (its predecessors)."""
        if node_id not in self._graph:
            return set()
        return set(self._graph.predecessors(node_id))

    def get_dependencies(self, node_id: NodeId) -> set[NodeId]:
        """Modules that node_id imports (its adjacency set)."""
        return self.get_adjacent_nodes(node_id)

    def get_all_nodes(self) -> Iterator[NodeId]:
        """
        Iterate over all node ids.

        Yields:
            Each node id once, in insertion order
        """
        yield from list(self._graph.nodes)

    def has_node(self, node_id: NodeId) -> bool:
        return node_id in self._graph

    def has_edge(self, from_id: NodeId, to_id: NodeId) -> bool:
        return self._graph.has_edge(from_id, to_id)

    def recompute_import_counts(self) -> None:
        """Reset every node's import count to its current in-degree."""
        self._counted = set(self._graph.edges())
        for node_id, degree in self._graph.in_degree():
            self._graph.nodes[node_id][IMPORT_COUNT] = degree

    def import_counts(self) -> dict[NodeId, int]:
        """
        Flat per-node import count table.

        Returns:
            Mapping of node id to stored import count
        """
        return {
            node_id: data.get(IMPORT_COUNT, 0)
            for node_id, data in self._graph.nodes(data=True)
        }

    def dependency_levels(self) -> dict[int, list[NodeId]]:
        """
        Group nodes by import count.

        Returns:
            Mapping of import count to the sorted ids sharing it, keyed in
            ascending order
        """
        levels: dict[int, list[NodeId]] = {}
        for node_id, count in self.import_counts().items():
            levels.setdefault(count, []).append(node_id)
        return {level: sorted(levels[level]) for level in sorted(levels)}

    def clear(self) -> None:
        """Remove all nodes and edges from the graph."""
        self._graph.clear()
        self._counted.clear()
