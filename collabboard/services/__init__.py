"""Domain services for projects and kanban boards."""
