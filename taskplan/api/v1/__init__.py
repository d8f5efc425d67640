"""API v1 routing configuration."""

from fastapi import APIRouter

from taskplan.api.v1 import plans

router = APIRouter()

router.include_router(plans.router, prefix="/plans", tags=["Plans"])


@router.get("/status", tags=["Status"])
async def api_status() -> dict[str, str]:
    """API v1 status check."""
    return {"status": "ok", "version": "v1"}
