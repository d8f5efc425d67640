"""Weighted directed graph over dense integer node ids.

This module provides the adjacency-list graph every planning algorithm
reads. Nodes are the integers ``0..n-1``; tasks carry no payload here and
callers map ids to task metadata themselves.

Outgoing edges keep insertion order. That order drives DFS exploration
and Kahn queue order, so SCC numbering and topological tie-breaking are
deterministic for a given edge list.

Time Complexity:
- Edge addition: O(1)
- Neighbor lookup: O(out-degree)
- Transpose: O(V + E)

Space Complexity: O(V + E)
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from taskplan.services.planning.exceptions import GraphFrozenError, NodeOutOfRangeError


@dataclass(frozen=True, slots=True)
class Edge:
    """Directed, weighted edge ``source -> target``."""

    source: int
    target: int
    weight: int = 1

    def __str__(self) -> str:
        return f"{self.source}->{self.target}({self.weight})"


class Graph:
    """Append-only directed graph with integer edge weights.

    Edges may be added until ``freeze()`` is called; afterwards the graph
    is read-only and can be shared across repeated algorithm runs.
    Parallel edges and self-loops are permitted.

    Example:
        >>> graph = Graph(3)
        >>> graph.add_edge(0, 1, 5)
        >>> graph.add_edge(1, 2, 2)
        >>> [str(e) for e in graph.neighbors(0)]
        ['0->1(5)']
    """

    __slots__ = ("_adjacency", "_directed", "_edge_count", "_frozen", "_n")

    def __init__(self, n: int, directed: bool = True) -> None:
        if n < 0:
            raise ValueError(f"Node count must be non-negative, got {n}")
        self._n = n
        self._directed = directed
        self._adjacency: list[list[Edge]] = [[] for _ in range(n)]
        self._edge_count = 0
        self._frozen = False

    @classmethod
    def from_edges(
        cls,
        n: int,
        edges: Iterable[tuple[int, int, int]],
        directed: bool = True,
    ) -> Graph:
        """Build and freeze a graph from ``(u, v, w)`` triples."""
        graph = cls(n, directed=directed)
        for u, v, w in edges:
            graph.add_edge(u, v, w)
        graph.freeze()
        return graph

    @property
    def node_count(self) -> int:
        """Get the number of nodes in the graph."""
        return self._n

    @property
    def edge_count(self) -> int:
        """Get the number of edges, parallel edges included."""
        return self._edge_count

    @property
    def is_directed(self) -> bool:
        return self._directed

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    def add_edge(self, u: int, v: int, weight: int = 1) -> None:
        """Append a directed edge ``u -> v``.

        Args:
            u: Source node id.
            v: Target node id.
            weight: Integer edge weight (may be negative).

        Raises:
            NodeOutOfRangeError: If ``u`` or ``v`` is outside [0, n).
            GraphFrozenError: If the graph has been frozen.
        """
        if self._frozen:
            raise GraphFrozenError(u, v)
        self._validate_node(u, "source")
        self._validate_node(v, "target")
        self._adjacency[u].append(Edge(u, v, weight))
        self._edge_count += 1

    def neighbors(self, node: int) -> tuple[Edge, ...]:
        """Get outgoing edges of ``node`` in insertion order.

        Raises:
            NodeOutOfRangeError: If ``node`` is outside [0, n).
        """
        self._validate_node(node)
        return tuple(self._adjacency[node])

    def out_degree(self, node: int) -> int:
        self._validate_node(node)
        return len(self._adjacency[node])

    def edges(self) -> Iterator[Edge]:
        """Iterate every edge, by source id then insertion order."""
        for adjacency in self._adjacency:
            yield from adjacency

    def transpose(self) -> Graph:
        """Return a frozen copy with every edge reversed, weights preserved."""
        transposed = Graph(self._n, directed=True)
        for edge in self.edges():
            transposed.add_edge(edge.target, edge.source, edge.weight)
        transposed.freeze()
        return transposed

    def freeze(self) -> None:
        """Make the graph read-only. Idempotent."""
        self._frozen = True

    def _validate_node(self, node: int, role: str = "node") -> None:
        if node < 0 or node >= self._n:
            raise NodeOutOfRangeError(node, self._n, role)

    def __contains__(self, node: object) -> bool:
        return isinstance(node, int) and 0 <= node < self._n

    def __len__(self) -> int:
        return self._n

    def __repr__(self) -> str:
        return (
            f"Graph(nodes={self._n}, edges={self._edge_count}, "
            f"directed={self._directed})"
        )


__all__ = ["Edge", "Graph"]
