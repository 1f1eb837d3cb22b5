"""Taskboard - terminal kanban board with deadline-aware columns."""

__version__ = "0.1.0"
