"""Task planner: dependency-aware execution plans for weighted task graphs."""

__version__ = "0.1.0"
