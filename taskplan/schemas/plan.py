"""Plan result schemas.

Distances are ``None`` for components unreachable from the source
component. Exported files render them as ``"UNREACHABLE"``.
"""

from __future__ import annotations

from pydantic import Field, computed_field

from taskplan.schemas.base import BaseSchema
from taskplan.services.planning.metrics import Metrics


class ComponentSchema(BaseSchema):
    """One strongly connected component (cyclic task group or single task)."""

    id: int = Field(..., ge=0, description="Component id")
    size: int = Field(..., ge=1, description="Number of tasks in the component")
    nodes: list[int] = Field(..., description="Task ids in discovery order")
    is_cycle: bool = Field(..., description="Whether the component holds a cycle")


class CondensationEdgeSchema(BaseSchema):
    source: int
    target: int
    weight: int


class CriticalPathSchema(BaseSchema):
    """Critical path over components, plus the task sequence it expands to."""

    length: int = Field(..., description="Total weight of the critical path")
    path: list[int] = Field(
        default_factory=list,
        description="Component ids from the source component",
    )
    task_path: list[int] = Field(
        default_factory=list,
        description="Task ids of the components on the path, in order",
    )


class StageMetrics(BaseSchema):
    """Counters and timing of one algorithm stage."""

    time_ms: float = Field(default=0.0, ge=0)
    dfs_visits: int = 0
    edge_traversals: int = 0
    queue_pushes: int = 0
    queue_pops: int = 0
    relax_operations: int = 0

    @classmethod
    def from_metrics(cls, metrics: Metrics) -> StageMetrics:
        return cls(
            time_ms=metrics.elapsed_ms,
            dfs_visits=metrics.dfs_visits,
            edge_traversals=metrics.edge_traversals,
            queue_pushes=metrics.queue_pushes,
            queue_pops=metrics.queue_pops,
            relax_operations=metrics.relax_operations,
        )

    @property
    def operations(self) -> int:
        return (
            self.dfs_visits
            + self.edge_traversals
            + self.queue_pushes
            + self.queue_pops
            + self.relax_operations
        )


class AlgorithmMetrics(BaseSchema):
    """Per-stage metrics of a plan run. Path stages are absent for empty graphs."""

    scc: StageMetrics = Field(default_factory=StageMetrics)
    topological_sort: StageMetrics = Field(default_factory=StageMetrics)
    shortest_paths: StageMetrics | None = None
    longest_paths: StageMetrics | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def path_time_ms(self) -> float:
        return sum(
            stage.time_ms
            for stage in (self.shortest_paths, self.longest_paths)
            if stage is not None
        )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total_time_ms(self) -> float:
        return self.scc.time_ms + self.topological_sort.time_ms + self.path_time_ms

    @property
    def path_operations(self) -> int:
        return sum(
            stage.relax_operations
            for stage in (self.shortest_paths, self.longest_paths)
            if stage is not None
        )


class PlanResult(BaseSchema):
    """Complete execution plan for one task graph."""

    name: str = Field(..., description="Dataset or request name")

    # Input summary
    node_count: int = Field(..., ge=0)
    edge_count: int = Field(..., ge=0)
    directed: bool = True
    density: float = Field(default=0.0, ge=0)
    min_weight: int | None = None
    max_weight: int | None = None
    original_source: int | None = Field(
        default=None,
        description="Source task id (None for an empty graph)",
    )
    source_component: int | None = Field(
        default=None,
        description="Component containing the source task",
    )
    is_dag: bool = Field(
        ...,
        description="Whether the input graph itself is acyclic",
    )

    # Components and order
    components: list[ComponentSchema] = Field(default_factory=list)
    component_ids: list[int] = Field(
        default_factory=list,
        description="Component id of every task",
    )
    condensation_edges: list[CondensationEdgeSchema] = Field(default_factory=list)
    component_order: list[int] = Field(default_factory=list)
    task_order: list[int] = Field(default_factory=list)

    # Paths over the condensation
    shortest_distances: list[int | None] = Field(default_factory=list)
    longest_distances: list[int | None] = Field(default_factory=list)
    critical_path: CriticalPathSchema = Field(
        default_factory=lambda: CriticalPathSchema(length=0),
    )

    metrics: AlgorithmMetrics = Field(default_factory=AlgorithmMetrics)

    @property
    def component_count(self) -> int:
        return len(self.components)

    @property
    def cycle_component_count(self) -> int:
        return sum(1 for component in self.components if component.is_cycle)

    @property
    def has_cycles(self) -> bool:
        return not self.is_dag
