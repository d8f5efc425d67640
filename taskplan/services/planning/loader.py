"""Load graph descriptors from JSON files."""

from __future__ import annotations

from pathlib import Path

from pydantic import ValidationError

from taskplan.core.logging import get_logger
from taskplan.schemas.graph import GraphDescriptor
from taskplan.services.planning.exceptions import GraphLoadError
from taskplan.services.planning.graph import Graph
from taskplan.services.planning.utils import create_graph

logger = get_logger(__name__)


def load_graph_descriptor(path: str | Path) -> GraphDescriptor:
    """Read and validate a JSON graph descriptor.

    Args:
        path: Path to the descriptor file.

    Returns:
        The validated descriptor.

    Raises:
        GraphLoadError: If the file is missing, unreadable or invalid.
    """
    file_path = Path(path)
    try:
        raw = file_path.read_text(encoding="utf-8")
    except OSError as e:
        raise GraphLoadError(str(file_path), e.strerror or str(e)) from e
    except UnicodeDecodeError as e:
        raise GraphLoadError(str(file_path), f"not UTF-8 text: {e.reason}") from e

    try:
        descriptor = GraphDescriptor.model_validate_json(raw)
    except ValidationError as e:
        raise GraphLoadError(
            str(file_path),
            f"{e.error_count()} validation error(s): {e.errors()[0]['msg']}",
        ) from e

    logger.debug(
        f"Loaded graph descriptor {file_path.name}",
        extra={
            "context": {
                "path": str(file_path),
                "nodes": descriptor.n,
                "edges": descriptor.edge_count,
            }
        },
    )
    return descriptor


def load_graph(path: str | Path) -> Graph:
    """Load a descriptor file and build its frozen graph."""
    return create_graph(load_graph_descriptor(path))


__all__ = ["load_graph", "load_graph_descriptor"]
