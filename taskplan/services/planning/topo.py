"""Topological ordering with Kahn's algorithm.

The sorter is meant for condensation graphs, which are acyclic by
construction. A cycle is still reported, but as an empty order rather
than an exception: callers check ``is_empty`` before using the order, and
the path engine rejects an order whose length does not match the graph.

Time Complexity: O(V + E)
Space Complexity: O(V)
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field

from taskplan.core.logging import get_logger
from taskplan.services.planning.graph import Graph
from taskplan.services.planning.metrics import Metrics

logger = get_logger(__name__)


@dataclass
class TopologicalOrder:
    """A linear order of graph nodes plus the work it took to compute.

    An empty ``order`` on a non-empty graph means the graph has a cycle.
    """

    order: list[int]
    metrics: Metrics = field(default_factory=Metrics)

    @property
    def is_empty(self) -> bool:
        return not self.order

    def position(self, node: int) -> int:
        """Index of ``node`` in the order. Raises ValueError if absent."""
        return self.order.index(node)

    def __len__(self) -> int:
        return len(self.order)

    def __iter__(self) -> Iterator[int]:
        return iter(self.order)

    def __getitem__(self, index: int) -> int:
        return self.order[index]


class TopologicalSorter:
    """Kahn's algorithm over a directed graph.

    Example:
        >>> graph = Graph.from_edges(4, [(0, 1, 1), (0, 2, 1), (1, 3, 1), (2, 3, 1)])
        >>> TopologicalSorter(graph).topological_order().order
        [0, 1, 2, 3]
    """

    def __init__(self, graph: Graph) -> None:
        self.graph = graph

    def topological_order(self) -> TopologicalOrder:
        """Compute a topological order.

        Zero in-degree nodes are seeded in id order and processed FIFO, so
        the result is deterministic for a fixed adjacency order.

        Returns:
            TopologicalOrder; its order is empty when the graph has a cycle.
        """
        metrics = Metrics()
        metrics.start_timer()

        n = self.graph.node_count
        in_degree = [0] * n
        for edge in self.graph.edges():
            in_degree[edge.target] += 1

        queue: deque[int] = deque()
        for node in range(n):
            if in_degree[node] == 0:
                queue.append(node)
                metrics.queue_pushes += 1

        result: list[int] = []
        while queue:
            node = queue.popleft()
            metrics.queue_pops += 1
            result.append(node)

            for edge in self.graph.neighbors(node):
                in_degree[edge.target] -= 1
                if in_degree[edge.target] == 0:
                    queue.append(edge.target)
                    metrics.queue_pushes += 1

        metrics.stop_timer()

        if len(result) != n:
            logger.debug(
                "Topological sort found a cycle",
                extra={"context": {"nodes": n, "ordered": len(result)}},
            )
            return TopologicalOrder([], metrics)

        logger.debug(
            "Topological sort completed",
            extra={"context": {"nodes": n, **metrics.as_dict()}},
        )
        return TopologicalOrder(result, metrics)

    def is_dag(self) -> bool:
        """Check acyclicity by recomputing the sort (not cached).

        An empty graph is trivially acyclic even though its order is empty.
        """
        if self.graph.node_count == 0:
            return True
        return not self.topological_order().is_empty

    @staticmethod
    def task_order(
        components: Sequence[Sequence[int]],
        component_order: Sequence[int],
    ) -> list[int]:
        """Expand a component order into the original task execution order."""
        tasks: list[int] = []
        for component_id in component_order:
            tasks.extend(components[component_id])
        return tasks


__all__ = ["TopologicalOrder", "TopologicalSorter"]
