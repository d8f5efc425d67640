"""HTTP surface of the task planner, organized by API version."""
