"""Planning engine custom exceptions.

All planning failures are deterministic logic errors local to a single
graph, so every exception carries a machine-readable ``error_code`` and a
``details`` dictionary for the CLI report and the HTTP error body.

A cycle in an input that is expected to be acyclic is deliberately not an
exception: the topological sorter signals it with an empty order.
"""

from typing import Any


class PlanningError(Exception):
    """Base exception for planning errors.

    Attributes:
        message: Human-readable error message.
        error_code: Machine-readable error code for API responses.
        details: Additional error context as dictionary.
    """

    def __init__(
        self,
        message: str,
        error_code: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Serialize the error for API responses and reports."""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class NodeOutOfRangeError(PlanningError):
    """Raised when an edge endpoint, query node or source lies outside [0, n).

    Attributes:
        node: The offending node id.
        node_count: Number of nodes in the graph.
    """

    def __init__(self, node: int, node_count: int, role: str = "node") -> None:
        super().__init__(
            message=f"{role.capitalize()} {node} is out of range [0, {node_count - 1}]",
            error_code="NODE_OUT_OF_RANGE",
            details={"node": node, "node_count": node_count, "role": role},
        )
        self.node = node
        self.node_count = node_count
        self.role = role


class InvalidTopologicalOrderError(PlanningError):
    """Raised when a topological order cannot drive a path computation.

    Either the order does not cover every node (typically the empty order
    of a cyclic graph) or it does not contain the source node.
    """

    def __init__(self, reason: str, **details: Any) -> None:
        super().__init__(
            message=f"Invalid topological order: {reason}",
            error_code="INVALID_TOPOLOGICAL_ORDER",
            details={"reason": reason, **details},
        )
        self.reason = reason


class PathsNotComputedError(PlanningError):
    """Raised when a path is reconstructed before any path computation ran."""

    def __init__(self) -> None:
        super().__init__(
            message="Must compute paths before reconstructing",
            error_code="PATHS_NOT_COMPUTED",
        )


class GraphFrozenError(PlanningError):
    """Raised when an edge is added to a graph that has been frozen."""

    def __init__(self, source: int, target: int) -> None:
        super().__init__(
            message=f"Cannot add edge {source} -> {target}: graph is frozen",
            error_code="GRAPH_FROZEN",
            details={"source": source, "target": target},
        )


class GraphLoadError(PlanningError):
    """Raised when a graph descriptor file is missing or malformed.

    Attributes:
        path: The descriptor path that failed to load.
    """

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(
            message=f"Failed to load graph from {path}: {reason}",
            error_code="GRAPH_LOAD_FAILED",
            details={"path": path, "reason": reason},
        )
        self.path = path


class GraphTooLargeError(PlanningError):
    """Raised when a submitted graph exceeds configured size limits.

    Attributes:
        current: Current count.
        limit: Maximum allowed limit.
        metric: Type of metric (nodes, edges).
    """

    def __init__(self, current: int, limit: int, metric: str = "nodes") -> None:
        super().__init__(
            message=f"Graph too large: {current} {metric} (limit: {limit})",
            error_code="GRAPH_TOO_LARGE",
            details={"current": current, "limit": limit, "metric": metric},
        )
        self.current = current
        self.limit = limit
        self.metric = metric


__all__ = [
    "GraphFrozenError",
    "GraphLoadError",
    "GraphTooLargeError",
    "InvalidTopologicalOrderError",
    "NodeOutOfRangeError",
    "PathsNotComputedError",
    "PlanningError",
]
