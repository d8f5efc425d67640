"""pytest configuration and shared fixtures.

Provides the async HTTP client for API tests and the reference task
graphs used across the planning engine tests.
"""

import json
from collections.abc import AsyncGenerator
from pathlib import Path
from typing import Any, cast

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from starlette.types import ASGIApp

from taskplan.main import app
from taskplan.services.planning.graph import Graph

# =============================================================================
# PYTEST CONFIGURATION
# =============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers",
        "slow: marks tests as slow (deselect with '-m \"not slow\"')",
    )
    config.addinivalue_line(
        "markers",
        "integration: marks tests as integration tests",
    )


# =============================================================================
# HTTP CLIENT
# =============================================================================


@pytest_asyncio.fixture(scope="function")
async def async_client() -> AsyncGenerator[AsyncClient]:
    """Async HTTP client for testing API endpoints.

    Uses ASGI transport to test the FastAPI app without running a server.
    """
    transport = ASGITransport(app=cast("ASGIApp", app))
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


# =============================================================================
# GRAPH FIXTURES
# =============================================================================


@pytest.fixture
def empty_graph() -> Graph:
    """Graph with no nodes."""
    return Graph.from_edges(0, [])


@pytest.fixture
def cycle_graph() -> Graph:
    """Three-task cycle: 0 -> 1 -> 2 -> 0 with equal weights."""
    return Graph.from_edges(3, [(0, 1, 1), (1, 2, 1), (2, 0, 1)])


@pytest.fixture
def chain_graph() -> Graph:
    """Linear chain 0 -> 1 -> 2 -> 3 with weights 2, 3, 1."""
    return Graph.from_edges(4, [(0, 1, 2), (1, 2, 3), (2, 3, 1)])


@pytest.fixture
def diamond_graph() -> Graph:
    """Diamond: 0 -> 1 (5), 0 -> 2 (3), 1 -> 3 (2), 2 -> 3 (1)."""
    return Graph.from_edges(4, [(0, 1, 5), (0, 2, 3), (1, 3, 2), (2, 3, 1)])


@pytest.fixture
def disconnected_graph() -> Graph:
    """Disconnected pair: 0 -> 1 and 2 -> 3 -> 4."""
    return Graph.from_edges(5, [(0, 1, 1), (2, 3, 1), (3, 4, 1)])


@pytest.fixture
def mixed_graph() -> Graph:
    """Two cycles joined by a chain.

    Cycle A: 0 -> 1 -> 2 -> 0, bridge 2 -> 3 (4), task 3 -> 4 (2),
    cycle B: 4 -> 5 -> 4, plus a detour 1 -> 6 (1) -> 5 (1).
    """
    return Graph.from_edges(
        7,
        [
            (0, 1, 1),
            (1, 2, 1),
            (2, 0, 1),
            (2, 3, 4),
            (3, 4, 2),
            (4, 5, 1),
            (5, 4, 1),
            (1, 6, 1),
            (6, 5, 1),
        ],
    )


@pytest.fixture
def descriptor_data() -> dict[str, Any]:
    """Raw descriptor for the diamond graph."""
    return {
        "directed": True,
        "n": 4,
        "edges": [
            {"u": 0, "v": 1, "w": 5},
            {"u": 0, "v": 2, "w": 3},
            {"u": 1, "v": 3, "w": 2},
            {"u": 2, "v": 3, "w": 1},
        ],
        "source": 0,
        "weight_model": "edge",
    }


@pytest.fixture
def descriptor_file(tmp_path: Path, descriptor_data: dict[str, Any]) -> Path:
    """Descriptor file for the diamond graph."""
    path = tmp_path / "diamond.json"
    path.write_text(json.dumps(descriptor_data), encoding="utf-8")
    return path
