"""Service metadata endpoint tests: health, root info, v1 status and OpenAPI."""

import pytest
from httpx import AsyncClient

from taskplan import __version__
from taskplan.core.config import settings


@pytest.mark.asyncio
async def test_health_check(async_client: AsyncClient) -> None:
    response = await async_client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


@pytest.mark.asyncio
async def test_root_reports_planner_identity(async_client: AsyncClient) -> None:
    response = await async_client.get("/")

    assert response.status_code == 200
    assert response.json() == {
        "name": settings.PROJECT_NAME,
        "version": __version__,
        "docs": "/docs",
    }
    assert settings.PROJECT_NAME == "Task Planner API"


@pytest.mark.asyncio
async def test_status_served_under_configured_prefix(async_client: AsyncClient) -> None:
    response = await async_client.get(f"{settings.API_V1_PREFIX}/status")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "version": "v1"}

    unprefixed = await async_client.get("/status")
    assert unprefixed.status_code == 404


@pytest.mark.asyncio
async def test_openapi_lists_plan_routes(async_client: AsyncClient) -> None:
    response = await async_client.get(f"{settings.API_V1_PREFIX}/openapi.json")

    assert response.status_code == 200
    schema = response.json()
    assert schema["info"]["title"] == settings.PROJECT_NAME
    assert schema["info"]["version"] == __version__
    paths = schema["paths"]
    assert f"{settings.API_V1_PREFIX}/plans" in paths
    assert f"{settings.API_V1_PREFIX}/plans/critical-path" in paths
