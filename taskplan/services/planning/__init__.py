"""Planning engine package.

Components:
- Graph: append-only weighted directed graph over dense integer ids
- Metrics: per-run work counters and timing
- StronglyConnectedComponents: Kosaraju SCC search and condensation
- TopologicalSorter: Kahn ordering of the condensation
- DAGPathFinder: shortest/longest paths and critical path
- PerformanceAnalyzer: cross-graph cost comparison
- Loader and utilities: descriptor loading, stats, density

Example:
    >>> from taskplan.services.planning import (
    ...     DAGPathFinder, Graph, StronglyConnectedComponents, TopologicalSorter,
    ... )
    >>> graph = Graph.from_edges(3, [(0, 1, 2), (1, 2, 3)])
    >>> scc = StronglyConnectedComponents(graph).find_sccs()
    >>> order = TopologicalSorter(scc.condensation).topological_order()
    >>> DAGPathFinder(scc.condensation).find_critical_path(0, order.order).length
    5
"""

from taskplan.services.planning.analyzer import PerformanceAnalyzer, PerformanceResult
from taskplan.services.planning.exceptions import (
    GraphFrozenError,
    GraphLoadError,
    GraphTooLargeError,
    InvalidTopologicalOrderError,
    NodeOutOfRangeError,
    PathsNotComputedError,
    PlanningError,
)
from taskplan.services.planning.graph import Edge, Graph
from taskplan.services.planning.loader import load_graph, load_graph_descriptor
from taskplan.services.planning.metrics import Metrics
from taskplan.services.planning.paths import (
    CriticalPath,
    DAGPathFinder,
    PathMode,
    PathResult,
)
from taskplan.services.planning.scc import SCCResult, StronglyConnectedComponents
from taskplan.services.planning.topo import TopologicalOrder, TopologicalSorter
from taskplan.services.planning.utils import (
    GraphStats,
    calculate_density,
    create_graph,
    get_graph_stats,
    has_self_loops,
)

__all__ = [
    # Data structures
    "Edge",
    "Graph",
    "Metrics",
    # Algorithms
    "CriticalPath",
    "DAGPathFinder",
    "PathMode",
    "PathResult",
    "SCCResult",
    "StronglyConnectedComponents",
    "TopologicalOrder",
    "TopologicalSorter",
    # Analysis
    "PerformanceAnalyzer",
    "PerformanceResult",
    # Loading and utilities
    "GraphStats",
    "calculate_density",
    "create_graph",
    "get_graph_stats",
    "has_self_loops",
    "load_graph",
    "load_graph_descriptor",
    # Exceptions
    "GraphFrozenError",
    "GraphLoadError",
    "GraphTooLargeError",
    "InvalidTopologicalOrderError",
    "NodeOutOfRangeError",
    "PathsNotComputedError",
    "PlanningError",
]
