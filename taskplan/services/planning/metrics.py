"""Work counters and timing for a single algorithm invocation.

Every algorithm creates its own ``Metrics`` and returns it inside its
result, so counters never leak between unrelated runs.
"""

import time
from dataclasses import asdict, dataclass, field
from typing import Any


@dataclass
class Metrics:
    """Counters and elapsed time captured during one algorithm run.

    Attributes:
        dfs_visits: Nodes visited by depth-first search (per pass).
        edge_traversals: Edges examined during depth-first search.
        queue_pushes: Nodes enqueued by Kahn's algorithm.
        queue_pops: Nodes dequeued by Kahn's algorithm.
        relax_operations: Edges examined during path relaxation.
        elapsed_ns: Wall time between ``start_timer`` and ``stop_timer``.
    """

    dfs_visits: int = 0
    edge_traversals: int = 0
    queue_pushes: int = 0
    queue_pops: int = 0
    relax_operations: int = 0
    elapsed_ns: int = 0

    _started_at: int | None = field(default=None, repr=False, compare=False)

    def start_timer(self) -> None:
        self._started_at = time.perf_counter_ns()

    def stop_timer(self) -> None:
        if self._started_at is not None:
            self.elapsed_ns = time.perf_counter_ns() - self._started_at
            self._started_at = None

    @property
    def elapsed_ms(self) -> float:
        return self.elapsed_ns / 1_000_000

    @property
    def queue_operations(self) -> int:
        return self.queue_pushes + self.queue_pops

    @property
    def total_operations(self) -> int:
        """Sum of every counter, used for cross-algorithm comparisons."""
        return (
            self.dfs_visits
            + self.edge_traversals
            + self.queue_pushes
            + self.queue_pops
            + self.relax_operations
        )

    def reset(self) -> None:
        self.dfs_visits = 0
        self.edge_traversals = 0
        self.queue_pushes = 0
        self.queue_pops = 0
        self.relax_operations = 0
        self.elapsed_ns = 0
        self._started_at = None

    def as_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data.pop("_started_at")
        data["elapsed_ms"] = self.elapsed_ms
        return data

    def __str__(self) -> str:
        return (
            f"Metrics[time={self.elapsed_ms:.3f}ms, dfsVisits={self.dfs_visits}, "
            f"edges={self.edge_traversals}, queueOps=(push={self.queue_pushes}, "
            f"pop={self.queue_pops}), relax={self.relax_operations}]"
        )


__all__ = ["Metrics"]
