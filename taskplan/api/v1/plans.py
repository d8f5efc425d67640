"""Plans API Router.

REST endpoints that run the planning pipeline on a submitted graph
descriptor. Planning errors are deterministic, so they map to client
errors (422, or 413 for oversized graphs) with the error code, message
and details of the underlying ``PlanningError``.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, HTTPException, Query, status

from taskplan.core.config import settings
from taskplan.core.logging import get_logger
from taskplan.schemas.graph import GraphDescriptor
from taskplan.schemas.plan import CriticalPathSchema, PlanResult
from taskplan.services.plan_service import PlanService
from taskplan.services.planning.exceptions import GraphTooLargeError, PlanningError

router = APIRouter()

logger = get_logger(__name__)


def _check_limits(descriptor: GraphDescriptor) -> None:
    if descriptor.n > settings.MAX_NODES:
        raise GraphTooLargeError(descriptor.n, settings.MAX_NODES, "nodes")
    if descriptor.edge_count > settings.MAX_EDGES:
        raise GraphTooLargeError(descriptor.edge_count, settings.MAX_EDGES, "edges")


def _plan_or_raise(descriptor: GraphDescriptor, name: str) -> PlanResult:
    try:
        _check_limits(descriptor)
        return PlanService().build_plan(descriptor, name=name)
    except GraphTooLargeError as e:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=e.to_dict(),
        ) from e
    except PlanningError as e:
        logger.warning(
            f"Plan request rejected: {e.message}",
            extra={"context": {"plan": name, "error_code": e.error_code}},
        )
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=e.to_dict(),
        ) from e


@router.post(
    "",
    response_model=PlanResult,
    summary="Build Execution Plan",
    description="Detect cyclic task groups, order them and compute distances "
    "and the critical path from the source task.",
    responses={
        200: {"description": "Plan computed"},
        413: {"description": "Graph exceeds configured size limits"},
        422: {"description": "Invalid graph (node out of range, invalid order)"},
    },
)
async def create_plan(
    descriptor: GraphDescriptor,
    name: Annotated[str, Query(description="Name reported in the plan")] = "graph",
) -> PlanResult:
    """Run the full planning pipeline on a graph descriptor."""
    return _plan_or_raise(descriptor, name)


@router.post(
    "/critical-path",
    response_model=CriticalPathSchema,
    summary="Get Critical Path",
    description="Compute only the critical path of the condensed task graph.",
    responses={
        200: {"description": "Critical path computed"},
        413: {"description": "Graph exceeds configured size limits"},
        422: {"description": "Invalid graph"},
    },
)
async def get_critical_path(descriptor: GraphDescriptor) -> CriticalPathSchema:
    """Return the critical path (component ids and task ids) of a graph."""
    return _plan_or_raise(descriptor, "critical-path").critical_path
