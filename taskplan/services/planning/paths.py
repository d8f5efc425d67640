"""Single-source shortest and longest paths over a DAG.

Distances are relaxed in topological order, starting at the source's
position: nodes ordered before the source can never be reached from it
and are skipped. The longest-path variant yields the critical path, the
dependency chain that bounds the minimum completion span.

Unreachable nodes hold ``None`` rather than an extreme integer. Relaxation
never does arithmetic on an unreachable distance, so "unreachable" cannot
turn into a finite-looking value.

Time Complexity: O(V + E)
Space Complexity: O(V)
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum

from taskplan.core.logging import get_logger
from taskplan.services.planning.exceptions import (
    InvalidTopologicalOrderError,
    NodeOutOfRangeError,
    PathsNotComputedError,
)
from taskplan.services.planning.graph import Graph
from taskplan.services.planning.metrics import Metrics

logger = get_logger(__name__)

Distance = int | None


class PathMode(str, Enum):
    SHORTEST = "shortest"
    LONGEST = "longest"


@dataclass
class PathResult:
    """Distances and predecessor links from one source.

    Attributes:
        source: Source node id.
        mode: Whether distances are minimal or maximal.
        distances: Per-node distance, ``None`` when unreachable.
        predecessors: Per-node predecessor on the best path, ``None`` for the
            source and unreachable nodes.
        metrics: Work counters of this run.
    """

    source: int
    mode: PathMode
    distances: list[Distance]
    predecessors: list[int | None]
    metrics: Metrics = field(default_factory=Metrics)

    def is_reachable(self, node: int) -> bool:
        return self.distances[node] is not None

    def path_to(self, target: int) -> list[int]:
        """Reconstruct the best path from the source to ``target``.

        Returns:
            Node ids from source to target, or an empty list when
            ``target`` is unreachable.
        """
        if target < 0 or target >= len(self.distances):
            raise NodeOutOfRangeError(target, len(self.distances), "target")
        if self.distances[target] is None:
            return []

        path: list[int] = []
        node: int | None = target
        while node is not None:
            path.append(node)
            node = self.predecessors[node]
        path.reverse()
        return path


@dataclass
class CriticalPath:
    """Maximum-weight path from the source to its farthest reachable node.

    ``distances`` are the longest distances the path was selected from.
    """

    length: int
    path: list[int]
    distances: list[Distance] = field(default_factory=list)
    metrics: Metrics = field(default_factory=Metrics)

    def __str__(self) -> str:
        return f"CriticalPath{{length={self.length}, path={self.path}}}"


class DAGPathFinder:
    """Shortest/longest path engine for an acyclic graph.

    The finder remembers its most recent computation so that
    ``reconstruct_path`` can be called after ``shortest_paths`` or
    ``longest_paths``.

    Example:
        >>> graph = Graph.from_edges(4, [(0, 1, 5), (0, 2, 3), (1, 3, 2), (2, 3, 1)])
        >>> order = [0, 1, 2, 3]
        >>> finder = DAGPathFinder(graph)
        >>> finder.shortest_paths(0, order).distances
        [0, 5, 3, 4]
        >>> finder.reconstruct_path(3)
        [0, 2, 3]
        >>> finder.find_critical_path(0, order).path
        [0, 1, 3]
    """

    def __init__(self, graph: Graph) -> None:
        self.graph = graph
        self._last: PathResult | None = None

    @property
    def last_result(self) -> PathResult | None:
        return self._last

    def shortest_paths(self, source: int, order: Sequence[int]) -> PathResult:
        """Compute minimum distances from ``source``.

        Args:
            source: Source node id.
            order: Topological order covering every node.

        Raises:
            NodeOutOfRangeError: If ``source`` is outside [0, n).
            InvalidTopologicalOrderError: If ``order`` does not cover the
                graph or does not contain ``source``.
        """
        return self._compute(source, order, PathMode.SHORTEST)

    def longest_paths(self, source: int, order: Sequence[int]) -> PathResult:
        """Compute maximum distances from ``source``. Same contract as shortest."""
        return self._compute(source, order, PathMode.LONGEST)

    def reconstruct_path(self, target: int) -> list[int]:
        """Reconstruct the path to ``target`` from the most recent computation.

        Raises:
            PathsNotComputedError: If no path computation has run yet.
        """
        if self._last is None:
            raise PathsNotComputedError()
        return self._last.path_to(target)

    def find_critical_path(self, source: int, order: Sequence[int]) -> CriticalPath:
        """Find the longest path from ``source`` to its farthest reachable node.

        Ties go to the lowest node id, the source included. When the source
        itself is selected, the critical path has length 0 and no nodes.
        """
        result = self.longest_paths(source, order)

        critical_node: int | None = None
        max_distance = 0
        for node, distance in enumerate(result.distances):
            if distance is not None and (critical_node is None or distance > max_distance):
                critical_node = node
                max_distance = distance

        # Source is always reachable, so critical_node is set here.
        if critical_node is None or critical_node == source:
            return CriticalPath(0, [], result.distances, result.metrics)

        return CriticalPath(
            max_distance,
            result.path_to(critical_node),
            result.distances,
            result.metrics,
        )

    def _compute(self, source: int, order: Sequence[int], mode: PathMode) -> PathResult:
        start_index = self._validate(source, order)

        metrics = Metrics()
        metrics.start_timer()

        n = self.graph.node_count
        distances: list[Distance] = [None] * n
        predecessors: list[int | None] = [None] * n
        distances[source] = 0

        longest = mode is PathMode.LONGEST
        for index in range(start_index, len(order)):
            u = order[index]
            dist_u = distances[u]
            if dist_u is None:
                continue

            for edge in self.graph.neighbors(u):
                metrics.relax_operations += 1
                candidate = dist_u + edge.weight
                current = distances[edge.target]
                if (
                    current is None
                    or (longest and candidate > current)
                    or (not longest and candidate < current)
                ):
                    distances[edge.target] = candidate
                    predecessors[edge.target] = u

        metrics.stop_timer()

        result = PathResult(source, mode, distances, predecessors, metrics)
        self._last = result

        logger.debug(
            f"{mode.value.capitalize()} paths computed",
            extra={
                "context": {
                    "source": source,
                    "reachable": sum(d is not None for d in distances),
                    **metrics.as_dict(),
                }
            },
        )
        return result

    def _validate(self, source: int, order: Sequence[int]) -> int:
        n = self.graph.node_count
        if source < 0 or source >= n:
            raise NodeOutOfRangeError(source, n, "source")
        if len(order) != n:
            raise InvalidTopologicalOrderError(
                "graph may contain cycles",
                expected_length=n,
                actual_length=len(order),
            )
        try:
            return list(order).index(source)
        except ValueError:
            raise InvalidTopologicalOrderError(
                "source node not found in topological order",
                source=source,
            ) from None


__all__ = ["CriticalPath", "DAGPathFinder", "Distance", "PathMode", "PathResult"]
