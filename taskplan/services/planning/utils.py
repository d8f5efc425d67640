"""Graph construction from descriptors and summary statistics."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from taskplan.services.planning.graph import Graph

if TYPE_CHECKING:
    from taskplan.schemas.graph import GraphDescriptor


@dataclass(frozen=True)
class GraphStats:
    """Size, weight range and density of a graph.

    ``min_weight``/``max_weight`` are ``None`` for a graph without edges.
    """

    node_count: int
    edge_count: int
    min_weight: int | None
    max_weight: int | None
    density: float

    def __str__(self) -> str:
        return (
            f"GraphStats{{nodes={self.node_count}, edges={self.edge_count}, "
            f"weight=[{self.min_weight},{self.max_weight}], density={self.density:.3f}}}"
        )


def create_graph(descriptor: GraphDescriptor) -> Graph:
    """Build a frozen graph from a validated descriptor.

    Raises:
        NodeOutOfRangeError: If any edge endpoint is outside [0, n).
    """
    return Graph.from_edges(
        descriptor.n,
        ((edge.u, edge.v, edge.w) for edge in descriptor.edges),
        directed=descriptor.directed,
    )


def calculate_density(graph: Graph) -> float:
    """Edges over the maximum possible edge count (self-loops excluded)."""
    n = graph.node_count
    if n <= 1:
        return 0.0
    max_edges = n * (n - 1) if graph.is_directed else n * (n - 1) // 2
    return graph.edge_count / max_edges


def has_self_loops(graph: Graph) -> bool:
    return any(edge.source == edge.target for edge in graph.edges())


def get_graph_stats(graph: Graph) -> GraphStats:
    weights = [edge.weight for edge in graph.edges()]
    return GraphStats(
        node_count=graph.node_count,
        edge_count=graph.edge_count,
        min_weight=min(weights) if weights else None,
        max_weight=max(weights) if weights else None,
        density=calculate_density(graph),
    )


__all__ = [
    "GraphStats",
    "calculate_density",
    "create_graph",
    "get_graph_stats",
    "has_self_loops",
]
