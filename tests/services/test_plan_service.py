"""Tests for the plan pipeline service.

Covers single-graph planning on the reference scenarios, validation
failures, empty graphs and batch runs with failing datasets.
"""

import json
import logging
from pathlib import Path
from typing import Any

import pytest

from taskplan.schemas.graph import GraphDescriptor
from taskplan.services.export import ResultExporter
from taskplan.services.plan_service import PlanService
from taskplan.services.planning.exceptions import NodeOutOfRangeError


def make_descriptor(n: int, edges: list[tuple[int, int, int]], **kwargs: Any) -> GraphDescriptor:
    return GraphDescriptor(
        n=n,
        edges=[{"u": u, "v": v, "w": w} for u, v, w in edges],
        **kwargs,
    )


MIXED_EDGES = [
    (0, 1, 1),
    (1, 2, 1),
    (2, 0, 1),
    (2, 3, 4),
    (3, 4, 2),
    (4, 5, 1),
    (5, 4, 1),
    (1, 6, 1),
    (6, 5, 1),
]


class TestBuildPlan:
    """Tests for planning one descriptor."""

    def test_diamond_plan(self, descriptor_data: dict[str, Any]) -> None:
        plan = PlanService().build_plan(
            GraphDescriptor.model_validate(descriptor_data), name="diamond"
        )

        assert plan.name == "diamond"
        assert plan.is_dag
        assert not plan.has_cycles
        assert plan.component_count == 4
        assert plan.original_source == 0
        assert plan.source_component == 0
        assert plan.component_order == [0, 2, 1, 3]
        assert plan.task_order == [0, 1, 2, 3]
        # Components are [[0], [2], [1], [3]]
        assert plan.shortest_distances == [0, 3, 5, 4]
        assert plan.longest_distances == [0, 3, 5, 7]
        assert plan.critical_path.length == 7
        assert plan.critical_path.path == [0, 2, 3]
        assert plan.critical_path.task_path == [0, 1, 3]

    def test_mixed_plan(self) -> None:
        plan = PlanService().build_plan(make_descriptor(7, MIXED_EDGES), name="mixed")

        assert not plan.is_dag
        assert plan.cycle_component_count == 2
        assert [c.nodes for c in plan.components] == [[0, 2, 1], [6], [3], [4, 5]]
        assert plan.component_ids == [0, 0, 0, 2, 3, 3, 1]
        assert [(e.source, e.target, e.weight) for e in plan.condensation_edges] == [
            (0, 2, 4),
            (0, 1, 1),
            (1, 3, 1),
            (2, 3, 2),
        ]
        assert plan.component_order == [0, 2, 1, 3]
        assert plan.task_order == [0, 2, 1, 3, 6, 4, 5]
        assert plan.shortest_distances == [0, 1, 4, 2]
        assert plan.longest_distances == [0, 1, 4, 6]
        assert plan.critical_path.path == [0, 2, 3]
        assert plan.critical_path.task_path == [0, 2, 1, 3, 4, 5]

    def test_cycle_plan(self) -> None:
        plan = PlanService().build_plan(
            make_descriptor(3, [(0, 1, 1), (1, 2, 1), (2, 0, 1)]), name="cycle"
        )

        assert plan.has_cycles
        assert plan.component_count == 1
        assert plan.component_order == [0]
        assert plan.shortest_distances == [0]
        assert plan.critical_path.length == 0
        assert plan.critical_path.path == []

    def test_source_component_follows_source_task(self) -> None:
        plan = PlanService().build_plan(
            make_descriptor(5, [(0, 1, 1), (2, 3, 1), (3, 4, 1)], source=0)
        )

        # Components are [[2], [3], [4], [0], [1]]
        assert plan.source_component == 3
        assert plan.shortest_distances == [None, None, None, 0, 1]
        assert plan.critical_path.length == 1
        assert plan.critical_path.task_path == [0, 1]

    def test_self_loop_is_not_a_dag(self) -> None:
        plan = PlanService().build_plan(make_descriptor(2, [(0, 0, 1), (0, 1, 2)]))

        assert not plan.is_dag
        assert plan.cycle_component_count == 0

    def test_metrics_are_recorded_per_stage(self, descriptor_data: dict[str, Any]) -> None:
        plan = PlanService().build_plan(GraphDescriptor.model_validate(descriptor_data))
        metrics = plan.metrics

        assert metrics.scc.dfs_visits == 8
        assert metrics.scc.edge_traversals == 8
        assert metrics.topological_sort.queue_pushes == 4
        assert metrics.shortest_paths is not None
        assert metrics.shortest_paths.relax_operations == 4
        assert metrics.longest_paths is not None
        assert metrics.path_operations == 8
        assert metrics.total_time_ms >= 0

    def test_empty_graph(self) -> None:
        plan = PlanService().build_plan(make_descriptor(0, []), name="empty")

        assert plan.is_dag
        assert plan.components == []
        assert plan.component_order == []
        assert plan.source_component is None
        assert plan.original_source is None
        assert plan.shortest_distances == []
        assert plan.critical_path.length == 0
        assert plan.metrics.shortest_paths is None

    def test_source_out_of_range(self) -> None:
        with pytest.raises(NodeOutOfRangeError) as exc_info:
            PlanService().build_plan(make_descriptor(2, [(0, 1, 1)], source=2))
        assert exc_info.value.role == "source"

    def test_empty_graph_rejects_non_default_source(self) -> None:
        with pytest.raises(NodeOutOfRangeError) as exc_info:
            PlanService().build_plan(make_descriptor(0, [], source=5))
        assert exc_info.value.node == 5
        assert exc_info.value.node_count == 0

    def test_edge_out_of_range(self) -> None:
        with pytest.raises(NodeOutOfRangeError):
            PlanService().build_plan(make_descriptor(2, [(0, 3, 1)]))

    def test_undirected_flag_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="taskplan.services.plan_service"):
            plan = PlanService().build_plan(
                make_descriptor(2, [(0, 1, 1)], directed=False), name="undirected"
            )

        assert not plan.directed
        assert "undirected flag ignored" in caplog.text


class TestProcessDatasets:
    """Tests for file and batch processing."""

    def test_process_file_uses_file_stem(self, descriptor_file: Path) -> None:
        plan = PlanService().process_file(descriptor_file)

        assert plan.name == "diamond"
        assert plan.critical_path.length == 7

    def test_failed_dataset_is_skipped(self, descriptor_file: Path, tmp_path: Path) -> None:
        bad = tmp_path / "bad.json"
        bad.write_text(json.dumps({"n": 1, "edges": [{"u": 0, "v": 4}]}), encoding="utf-8")
        missing = tmp_path / "missing.json"

        plans = PlanService().process_datasets([bad, descriptor_file, missing])

        assert [plan.name for plan in plans] == ["diamond"]

    def test_export_and_summary(self, descriptor_file: Path, tmp_path: Path) -> None:
        results_dir = tmp_path / "results"
        service = PlanService(exporter=ResultExporter(results_dir))

        plans = service.process_datasets([descriptor_file])

        assert len(plans) == 1
        assert (results_dir / "json" / "diamond_full.json").exists()
        assert (results_dir / "csv" / "diamond_metrics.csv").exists()
        assert (results_dir / "summary.csv").exists()
        assert (results_dir / "summary.json").exists()

    def test_no_summary_when_every_dataset_fails(self, tmp_path: Path) -> None:
        results_dir = tmp_path / "results"
        service = PlanService(exporter=ResultExporter(results_dir))

        assert service.process_datasets([tmp_path / "missing.json"]) == []
        assert not (results_dir / "summary.csv").exists()

    def test_non_utf8_dataset_is_skipped(self, descriptor_file: Path, tmp_path: Path) -> None:
        binary = tmp_path / "binary.json"
        binary.write_bytes(b'{"n": 1}\xff\xfe')

        plans = PlanService().process_datasets([binary, descriptor_file])

        assert [plan.name for plan in plans] == ["diamond"]

    def test_export_failure_is_logged_and_skipped(
        self,
        descriptor_file: Path,
        tmp_path: Path,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        exporter = ResultExporter(tmp_path / "results")
        # A plain file where the JSON directory should be makes every write fail
        exporter.json_dir.rmdir()
        exporter.json_dir.write_text("", encoding="utf-8")
        other = tmp_path / "other.json"
        other.write_text(descriptor_file.read_text(encoding="utf-8"), encoding="utf-8")

        with caplog.at_level(logging.ERROR, logger="taskplan.services.plan_service"):
            plans = PlanService(exporter=exporter).process_datasets([descriptor_file, other])

        assert plans == []
        messages = [record.getMessage() for record in caplog.records]
        assert sum("Error exporting results" in message for message in messages) == 2
