"""Graph descriptor schemas.

A descriptor is the in-memory (or JSON) form of a task graph::

    {
        "directed": true,
        "n": 4,
        "edges": [{"u": 0, "v": 1, "w": 3}, ...],
        "source": 0,
        "weight_model": "edge"
    }

Schema validation covers shape and types only. Range checks of edge
endpoints and the source are made by the planning engine, which raises
``NodeOutOfRangeError`` instead of silently dropping anything.
"""

from __future__ import annotations

from pydantic import Field

from taskplan.schemas.base import BaseSchema


class EdgeSchema(BaseSchema):
    """Weighted dependency ``u -> v``."""

    u: int = Field(..., description="Source task id", examples=[0])
    v: int = Field(..., description="Target task id", examples=[1])
    w: int = Field(default=1, description="Edge weight (duration)", examples=[3])

    def __str__(self) -> str:
        return f"{self.u}->{self.v}({self.w})"


class GraphDescriptor(BaseSchema):
    """Task graph submitted for planning."""

    directed: bool = Field(
        default=True,
        description="Directed flag; edges are always planned as directed",
    )
    n: int = Field(
        ...,
        ge=0,
        description="Number of tasks; task ids are 0..n-1",
        examples=[4],
    )
    edges: list[EdgeSchema] = Field(
        default_factory=list,
        description="Dependency edges",
    )
    source: int = Field(
        default=0,
        description="Task id the schedule starts from",
        examples=[0],
    )
    weight_model: str | None = Field(
        default=None,
        description="How weights are interpreted (informational)",
        examples=["edge"],
    )

    @property
    def edge_count(self) -> int:
        return len(self.edges)
