"""collabboard: project-scoped kanban boards."""

__version__ = "1.0.0"
