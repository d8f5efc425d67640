"""Tests for graph descriptor and plan result schemas."""

import pytest
from pydantic import ValidationError

from taskplan.schemas.graph import EdgeSchema, GraphDescriptor
from taskplan.schemas.plan import (
    AlgorithmMetrics,
    ComponentSchema,
    PlanResult,
    StageMetrics,
)
from taskplan.services.planning.metrics import Metrics


class TestGraphDescriptor:
    def test_edge_weight_defaults_to_one(self) -> None:
        assert EdgeSchema(u=0, v=1).w == 1

    def test_negative_node_count_rejected(self) -> None:
        with pytest.raises(ValidationError):
            GraphDescriptor(n=-1)

    def test_edges_parsed_from_dicts(self, descriptor_data: dict) -> None:
        descriptor = GraphDescriptor.model_validate(descriptor_data)

        assert descriptor.edge_count == 4
        assert isinstance(descriptor.edges[0], EdgeSchema)
        assert descriptor.edges[1].w == 3


class TestStageMetrics:
    def test_from_metrics(self) -> None:
        metrics = Metrics(dfs_visits=3, edge_traversals=2, elapsed_ns=1_500_000)
        stage = StageMetrics.from_metrics(metrics)

        assert stage.time_ms == pytest.approx(1.5)
        assert stage.dfs_visits == 3
        assert stage.operations == 5

    def test_algorithm_totals(self) -> None:
        metrics = AlgorithmMetrics(
            scc=StageMetrics(time_ms=1.0),
            topological_sort=StageMetrics(time_ms=0.5),
            shortest_paths=StageMetrics(time_ms=0.25, relax_operations=3),
            longest_paths=StageMetrics(time_ms=0.25, relax_operations=3),
        )

        assert metrics.path_time_ms == pytest.approx(0.5)
        assert metrics.total_time_ms == pytest.approx(2.0)
        assert metrics.path_operations == 6
        assert "total_time_ms" in metrics.model_dump()

    def test_path_stages_optional(self) -> None:
        metrics = AlgorithmMetrics()
        assert metrics.path_time_ms == 0.0
        assert metrics.path_operations == 0


class TestPlanResult:
    def test_cycle_counts(self) -> None:
        plan = PlanResult(
            name="plan",
            node_count=3,
            edge_count=3,
            is_dag=False,
            components=[
                ComponentSchema(id=0, size=2, nodes=[0, 1], is_cycle=True),
                ComponentSchema(id=1, size=1, nodes=[2], is_cycle=False),
            ],
        )

        assert plan.component_count == 2
        assert plan.cycle_component_count == 1
        assert plan.has_cycles
        assert plan.critical_path.length == 0

    def test_component_size_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            ComponentSchema(id=0, size=0, nodes=[], is_cycle=False)
