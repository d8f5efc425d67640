"""Plan pipeline service.

Runs the full planning pipeline for one task graph and for batches of
dataset files:

    descriptor -> Graph -> SCC + condensation -> topological order
               -> shortest paths -> critical path -> PlanResult

Errors are local to one graph. ``build_plan`` propagates them;
``process_datasets`` logs a failed dataset and moves on to the next.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING

from taskplan.core.logging import LogContext, get_logger
from taskplan.schemas.plan import (
    AlgorithmMetrics,
    ComponentSchema,
    CondensationEdgeSchema,
    CriticalPathSchema,
    PlanResult,
    StageMetrics,
)
from taskplan.services.planning.exceptions import (
    InvalidTopologicalOrderError,
    NodeOutOfRangeError,
    PlanningError,
)
from taskplan.services.planning.loader import load_graph_descriptor
from taskplan.services.planning.paths import DAGPathFinder
from taskplan.services.planning.scc import StronglyConnectedComponents
from taskplan.services.planning.topo import TopologicalSorter
from taskplan.services.planning.utils import (
    create_graph,
    get_graph_stats,
    has_self_loops,
)

if TYPE_CHECKING:
    from taskplan.schemas.graph import GraphDescriptor
    from taskplan.services.export import ResultExporter

logger = get_logger(__name__)


class PlanService:
    """Build execution plans and optionally export them.

    Args:
        exporter: When given, every successful plan from ``process_file``
            and ``process_datasets`` is exported, and batch runs also
            produce summary reports.
    """

    def __init__(self, exporter: ResultExporter | None = None) -> None:
        self.exporter = exporter

    def build_plan(self, descriptor: GraphDescriptor, name: str = "graph") -> PlanResult:
        """Run the planning pipeline on one descriptor.

        Args:
            descriptor: Validated graph descriptor.
            name: Name used in logs, reports and export file names.

        Returns:
            The complete plan.

        Raises:
            NodeOutOfRangeError: If an edge endpoint or the source is
                outside [0, n). An empty graph accepts only
                source 0.
            InvalidTopologicalOrderError: If the condensation is not acyclic.
        """
        if not descriptor.directed:
            logger.warning(
                f"{name}: undirected flag ignored, edges are planned as directed",
                extra={"context": {"dataset": name}},
            )

        graph = create_graph(descriptor)
        stats = get_graph_stats(graph)
        n = graph.node_count

        # An empty graph has no valid source; only the default 0 is let through.
        if not 0 <= descriptor.source < n and not (n == 0 and descriptor.source == 0):
            raise NodeOutOfRangeError(descriptor.source, n, "source")

        logger.info(
            f"Planning {name}: {stats.node_count} tasks, {stats.edge_count} dependencies",
            extra={"context": {"dataset": name, "density": stats.density}},
        )

        # Stage 1: cyclic task groups
        scc = StronglyConnectedComponents(graph).find_sccs()
        components = [
            ComponentSchema(id=cid, size=len(nodes), nodes=nodes, is_cycle=len(nodes) > 1)
            for cid, nodes in enumerate(scc.components)
        ]
        is_dag = not scc.cycle_components() and not has_self_loops(graph)

        # Stage 2: order of the condensation
        topo = TopologicalSorter(scc.condensation).topological_order()
        if topo.is_empty and scc.component_count > 0:
            raise InvalidTopologicalOrderError(
                "condensation graph is not acyclic",
                components=scc.component_count,
            )

        plan = PlanResult(
            name=name,
            node_count=stats.node_count,
            edge_count=stats.edge_count,
            directed=descriptor.directed,
            density=stats.density,
            min_weight=stats.min_weight,
            max_weight=stats.max_weight,
            is_dag=is_dag,
            components=components,
            component_ids=scc.component_ids,
            condensation_edges=[
                CondensationEdgeSchema(source=e.source, target=e.target, weight=e.weight)
                for e in scc.condensation.edges()
            ],
            component_order=topo.order,
            task_order=TopologicalSorter.task_order(scc.components, topo.order),
            metrics=AlgorithmMetrics(
                scc=StageMetrics.from_metrics(scc.metrics),
                topological_sort=StageMetrics.from_metrics(topo.metrics),
            ),
        )

        if n == 0:
            logger.info(f"{name}: empty graph, nothing to schedule")
            return plan

        # Stage 3: distances from the source component
        source_component = scc.component_of(descriptor.source)
        finder = DAGPathFinder(scc.condensation)
        shortest = finder.shortest_paths(source_component, topo.order)
        critical = finder.find_critical_path(source_component, topo.order)

        plan.original_source = descriptor.source
        plan.source_component = source_component
        plan.shortest_distances = shortest.distances
        plan.longest_distances = critical.distances
        plan.critical_path = CriticalPathSchema(
            length=critical.length,
            path=critical.path,
            task_path=TopologicalSorter.task_order(scc.components, critical.path),
        )
        plan.metrics.shortest_paths = StageMetrics.from_metrics(shortest.metrics)
        plan.metrics.longest_paths = StageMetrics.from_metrics(critical.metrics)

        logger.info(
            f"{name}: {scc.component_count} components, "
            f"critical path length {critical.length}",
            extra={
                "context": {
                    "dataset": name,
                    "components": scc.component_count,
                    "cycle_components": plan.cycle_component_count,
                    "critical_path": critical.path,
                    "total_time_ms": plan.metrics.total_time_ms,
                }
            },
        )
        return plan

    def process_file(self, path: str | Path) -> PlanResult:
        """Load, plan and (if configured) export one descriptor file."""
        file_path = Path(path)
        with LogContext(logger, dataset=file_path.name):
            descriptor = load_graph_descriptor(file_path)
            plan = self.build_plan(descriptor, name=file_path.stem)
            if self.exporter is not None:
                self.exporter.export_plan(plan)
        return plan

    def process_datasets(self, paths: Iterable[str | Path]) -> list[PlanResult]:
        """Plan every dataset, skipping the ones that fail.

        Returns:
            Plans of the datasets that succeeded, in input order.
        """
        plans: list[PlanResult] = []
        failed = 0
        for path in paths:
            try:
                plans.append(self.process_file(path))
            except PlanningError as e:
                failed += 1
                logger.error(
                    f"Error processing {path}: {e.message}",
                    exc_info=True,
                    extra={"context": {"dataset": str(path), **e.to_dict()}},
                )
            except OSError as e:
                failed += 1
                logger.error(
                    f"Error exporting results for {path}: {e}",
                    exc_info=True,
                    extra={"context": {"dataset": str(path), "error": str(e)}},
                )

        if self.exporter is not None and plans:
            self.exporter.create_summary_reports(plans)

        logger.info(
            f"Processed {len(plans)} dataset(s), {failed} failed",
            extra={"context": {"succeeded": len(plans), "failed": failed}},
        )
        return plans


__all__ = ["PlanService"]
