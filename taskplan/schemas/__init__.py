"""Pydantic schemas for graph descriptors and plan results."""

from taskplan.schemas.base import BaseSchema
from taskplan.schemas.graph import EdgeSchema, GraphDescriptor
from taskplan.schemas.plan import (
    AlgorithmMetrics,
    ComponentSchema,
    CondensationEdgeSchema,
    CriticalPathSchema,
    PlanResult,
    StageMetrics,
)

__all__ = [
    "AlgorithmMetrics",
    "BaseSchema",
    "ComponentSchema",
    "CondensationEdgeSchema",
    "CriticalPathSchema",
    "EdgeSchema",
    "GraphDescriptor",
    "PlanResult",
    "StageMetrics",
]
