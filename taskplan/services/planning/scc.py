"""Strongly connected components (Kosaraju) and graph condensation.

Cyclic task groups are collapsed into single components so the remaining
dependency structure is a DAG that can be ordered and measured.

Algorithm:
1. DFS over nodes ``0..n-1``; record nodes in post-order (finishing order).
2. Transpose the graph.
3. Pop nodes in reverse finishing order; each DFS on the transpose from
   an unvisited node yields one component.

Both DFS passes use an explicit stack of ``(node, edge cursor)`` frames,
so graph depth is bounded by memory rather than the interpreter's
recursion limit.

Time Complexity: O(V + E)
Space Complexity: O(V + E)
"""

from __future__ import annotations

from dataclasses import dataclass, field

from taskplan.core.logging import get_logger
from taskplan.services.planning.graph import Edge, Graph
from taskplan.services.planning.metrics import Metrics

logger = get_logger(__name__)


@dataclass
class SCCResult:
    """Outcome of a component search.

    Attributes:
        components: Node ids per component, in second-pass visitation order.
            Component ids are the list indices.
        component_ids: Component id of every original node.
        condensation: Frozen graph over component ids with at most one edge
            per ordered component pair.
        metrics: Work counters of this run.
    """

    components: list[list[int]]
    component_ids: list[int]
    condensation: Graph
    metrics: Metrics = field(default_factory=Metrics)

    @property
    def component_count(self) -> int:
        return len(self.components)

    def component_of(self, node: int) -> int:
        """Get the component id containing ``node``."""
        return self.component_ids[node]

    def cycle_components(self) -> list[int]:
        """Ids of components holding more than one task."""
        return [cid for cid, nodes in enumerate(self.components) if len(nodes) > 1]


class StronglyConnectedComponents:
    """Kosaraju component search over a directed graph.

    Example:
        >>> graph = Graph.from_edges(3, [(0, 1, 1), (1, 2, 1), (2, 0, 1)])
        >>> result = StronglyConnectedComponents(graph).find_sccs()
        >>> result.components
        [[0, 2, 1]]
    """

    def __init__(self, graph: Graph) -> None:
        self.graph = graph

    def find_sccs(self) -> SCCResult:
        """Compute components, node membership and the condensation graph.

        Returns:
            SCCResult for this graph. An empty graph yields no components.
        """
        metrics = Metrics()
        metrics.start_timer()

        n = self.graph.node_count
        adjacency = [self.graph.neighbors(u) for u in range(n)]

        visited = [False] * n
        finish_order: list[int] = []
        for start in range(n):
            if not visited[start]:
                self._visit(start, adjacency, visited, finish_order, metrics)

        transposed = self.graph.transpose()
        reverse_adjacency = [transposed.neighbors(u) for u in range(n)]

        visited = [False] * n
        component_ids = [-1] * n
        components: list[list[int]] = []
        while finish_order:
            node = finish_order.pop()
            if visited[node]:
                continue
            component: list[int] = []
            self._visit(node, reverse_adjacency, visited, component, metrics, preorder=True)
            for member in component:
                component_ids[member] = len(components)
            components.append(component)

        condensation = self._condense(components, component_ids, adjacency)
        metrics.stop_timer()

        logger.debug(
            "SCC detection completed",
            extra={
                "context": {
                    "nodes": n,
                    "components": len(components),
                    **metrics.as_dict(),
                }
            },
        )
        return SCCResult(components, component_ids, condensation, metrics)

    @staticmethod
    def _visit(
        start: int,
        adjacency: list[tuple[Edge, ...]],
        visited: list[bool],
        out: list[int],
        metrics: Metrics,
        preorder: bool = False,
    ) -> None:
        """Iterative DFS from ``start``.

        Appends reached nodes to ``out`` in preorder (component collection)
        or post-order (finishing order).
        """
        visited[start] = True
        metrics.dfs_visits += 1
        if preorder:
            out.append(start)

        stack: list[tuple[int, int]] = [(start, 0)]
        while stack:
            node, cursor = stack[-1]
            edges = adjacency[node]
            if cursor == len(edges):
                stack.pop()
                if not preorder:
                    out.append(node)
                continue

            stack[-1] = (node, cursor + 1)
            metrics.edge_traversals += 1
            target = edges[cursor].target
            if not visited[target]:
                visited[target] = True
                metrics.dfs_visits += 1
                if preorder:
                    out.append(target)
                stack.append((target, 0))

    @staticmethod
    def _condense(
        components: list[list[int]],
        component_ids: list[int],
        adjacency: list[tuple[Edge, ...]],
    ) -> Graph:
        # First edge seen between two components keeps its weight; later
        # parallel edges are dropped, not merged.
        condensation = Graph(len(components), directed=True)
        for source_comp, members in enumerate(components):
            seen_targets: set[int] = set()
            for u in members:
                for edge in adjacency[u]:
                    target_comp = component_ids[edge.target]
                    if target_comp != source_comp and target_comp not in seen_targets:
                        condensation.add_edge(source_comp, target_comp, edge.weight)
                        seen_targets.add(target_comp)
        condensation.freeze()
        return condensation


__all__ = ["SCCResult", "StronglyConnectedComponents"]
