"""Export plan results to JSON and CSV files.

Layout under the results directory::

    results/
        json/<name>_full.json
        csv/<name>_metrics.csv
        csv/<name>_components.csv
        csv/<name>_paths.csv
        summary.csv
        summary.json

Unreachable distances are written as ``UNREACHABLE``.
"""

from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Any

from taskplan.core.logging import get_logger
from taskplan.schemas.plan import PlanResult

logger = get_logger(__name__)

UNREACHABLE = "UNREACHABLE"


def _display_distances(distances: list[int | None]) -> list[int | str]:
    return [UNREACHABLE if d is None else d for d in distances]


class ResultExporter:
    """Write per-plan and summary reports below ``base_dir``."""

    def __init__(self, base_dir: str | Path = "results") -> None:
        self.base_dir = Path(base_dir)
        self.json_dir = self.base_dir / "json"
        self.csv_dir = self.base_dir / "csv"
        self.json_dir.mkdir(parents=True, exist_ok=True)
        self.csv_dir.mkdir(parents=True, exist_ok=True)

    def export_plan(self, plan: PlanResult) -> list[Path]:
        """Export one plan as JSON plus three CSV files.

        Returns:
            Paths of the files written.
        """
        written = [
            self._export_plan_json(plan),
            self._export_metrics_csv(plan),
            self._export_components_csv(plan),
            self._export_paths_csv(plan),
        ]
        logger.info(
            f"Results exported for: {plan.name}",
            extra={"context": {"dataset": plan.name, "files": [str(p) for p in written]}},
        )
        return written

    def create_summary_reports(self, plans: list[PlanResult]) -> tuple[Path, Path]:
        """Write ``summary.csv`` and ``summary.json`` across all plans."""
        csv_path = self._create_summary_csv(plans)
        json_path = self._create_summary_json(plans)
        logger.info(
            "Summary reports created",
            extra={"context": {"datasets": len(plans), "results_dir": str(self.base_dir)}},
        )
        return csv_path, json_path

    def _export_plan_json(self, plan: PlanResult) -> Path:
        data = plan.model_dump(mode="json")
        data["shortest_distances"] = _display_distances(plan.shortest_distances)
        data["longest_distances"] = _display_distances(plan.longest_distances)

        path = self.json_dir / f"{plan.name}_full.json"
        path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        return path

    def _export_metrics_csv(self, plan: PlanResult) -> Path:
        path = self.csv_dir / f"{plan.name}_metrics.csv"
        metrics = plan.metrics
        common = [
            plan.component_count,
            plan.original_source if plan.original_source is not None else "",
            plan.has_cycles,
            plan.critical_path.length,
        ]

        with path.open("w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(
                [
                    "algorithm",
                    "time_ms",
                    "operations",
                    "components",
                    "source",
                    "has_cycles",
                    "critical_path_length",
                ]
            )
            writer.writerow(
                [
                    "SCC",
                    f"{metrics.scc.time_ms:.3f}",
                    metrics.scc.dfs_visits + metrics.scc.edge_traversals,
                    *common,
                ]
            )
            writer.writerow(
                [
                    "TopologicalSort",
                    f"{metrics.topological_sort.time_ms:.3f}",
                    metrics.topological_sort.queue_pushes + metrics.topological_sort.queue_pops,
                    *common,
                ]
            )
            if metrics.shortest_paths is not None:
                writer.writerow(
                    [
                        "PathFinding",
                        f"{metrics.path_time_ms:.3f}",
                        metrics.path_operations,
                        *common,
                    ]
                )
            writer.writerow(
                [
                    "TOTAL",
                    f"{metrics.total_time_ms:.3f}",
                    metrics.scc.operations
                    + metrics.topological_sort.operations
                    + metrics.path_operations,
                    *common,
                ]
            )
        return path

    def _export_components_csv(self, plan: PlanResult) -> Path:
        path = self.csv_dir / f"{plan.name}_components.csv"
        with path.open("w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(["component_id", "size", "node_list", "is_cycle"])
            for component in plan.components:
                writer.writerow(
                    [component.id, component.size, str(component.nodes), component.is_cycle]
                )
        return path

    def _export_paths_csv(self, plan: PlanResult) -> Path:
        path = self.csv_dir / f"{plan.name}_paths.csv"
        with path.open("w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(
                [
                    "component_id",
                    "shortest_distance",
                    "longest_distance",
                    "reachable",
                    "is_source_component",
                ]
            )
            for cid, (shortest, longest) in enumerate(
                zip(plan.shortest_distances, plan.longest_distances, strict=True)
            ):
                reachable = shortest is not None and longest is not None
                writer.writerow(
                    [
                        cid,
                        shortest if reachable else UNREACHABLE,
                        longest if reachable else UNREACHABLE,
                        reachable,
                        cid == plan.source_component,
                    ]
                )
        return path

    def _create_summary_csv(self, plans: list[PlanResult]) -> Path:
        path = self.base_dir / "summary.csv"
        with path.open("w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(
                [
                    "filename",
                    "nodes",
                    "edges",
                    "components",
                    "source",
                    "scc_time_ms",
                    "topo_time_ms",
                    "path_time_ms",
                    "total_time_ms",
                    "critical_path_length",
                    "has_cycles",
                ]
            )
            for plan in plans:
                metrics = plan.metrics
                writer.writerow(
                    [
                        plan.name,
                        plan.node_count,
                        plan.edge_count,
                        plan.component_count,
                        plan.original_source if plan.original_source is not None else "",
                        f"{metrics.scc.time_ms:.3f}",
                        f"{metrics.topological_sort.time_ms:.3f}",
                        f"{metrics.path_time_ms:.3f}",
                        f"{metrics.total_time_ms:.3f}",
                        plan.critical_path.length,
                        plan.has_cycles,
                    ]
                )
        return path

    def _create_summary_json(self, plans: list[PlanResult]) -> Path:
        count = len(plans)
        dag_count = sum(1 for plan in plans if plan.is_dag)

        def average(values: list[float]) -> float:
            return sum(values) / count if count else 0.0

        summary: dict[str, Any] = {
            "total_datasets": count,
            "datasets": [
                {
                    "filename": plan.name,
                    "nodes": plan.node_count,
                    "edges": plan.edge_count,
                    "components": plan.component_count,
                    "source": plan.original_source,
                    "scc_time_ms": plan.metrics.scc.time_ms,
                    "topo_time_ms": plan.metrics.topological_sort.time_ms,
                    "total_time_ms": plan.metrics.total_time_ms,
                    "critical_path_length": plan.critical_path.length,
                    "has_cycles": plan.has_cycles,
                }
                for plan in plans
            ],
            "statistics": {
                "average_nodes": average([p.node_count for p in plans]),
                "average_edges": average([p.edge_count for p in plans]),
                "average_components": average([p.component_count for p in plans]),
                "average_scc_time_ms": average([p.metrics.scc.time_ms for p in plans]),
                "average_topo_time_ms": average(
                    [p.metrics.topological_sort.time_ms for p in plans]
                ),
                "average_path_time_ms": average([p.metrics.path_time_ms for p in plans]),
                "average_total_time_ms": average([p.metrics.total_time_ms for p in plans]),
                "dag_count": dag_count,
                "cyclic_count": count - dag_count,
                "dag_percentage": dag_count * 100.0 / count if count else 0.0,
            },
        }

        path = self.base_dir / "summary.json"
        path.write_text(json.dumps(summary, indent=2), encoding="utf-8")
        return path


__all__ = ["UNREACHABLE", "ResultExporter"]
