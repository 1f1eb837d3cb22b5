"""
FILE: taskboard/core/exceptions.py
PURPOSE: Custom exception classes for error handling
EXPORTS:
  - TaskboardError (base exception)
  - TaskNotFoundError
  - ColumnNotFoundError
  - InvalidDeadlineError
  - ValidationError
  - SerializationError
DEPENDENCIES:
  - typing (stdlib)
NOTES:
  - All exceptions inherit from TaskboardError for easy catching
  - Exceptions include context (IDs, field errors) for helpful error messages
  - Engine and store raise these, CLI and REPL catch and display
"""

from typing import Dict


class TaskboardError(Exception):
    """Base exception for all Taskboard errors."""
    pass


class TaskNotFoundError(TaskboardError):
    """Task with given ID isn't on the board (or not in the given column)."""

    def __init__(self, task_id: str):
        self.task_id = task_id
        super().__init__(f"Task {task_id} not found")


class ColumnNotFoundError(TaskboardError):
    """Column with given ID doesn't exist."""

    def __init__(self, column_id: str):
        self.column_id = column_id
        super().__init__(f"Column {column_id} not found")


class InvalidDeadlineError(TaskboardError):
    """Deadline input could not be parsed."""

    def __init__(self, value: str):
        self.value = value
        super().__init__(
            f"Invalid deadline '{value}'. Use YYYY-MM-DD or YYYY-MM-DD HH:MM"
        )


class ValidationError(TaskboardError):
    """
    Task edit failed field validation.

    Attributes:
        errors: Mapping of field name ("title", "description", "deadline")
                to a user-facing message
    """

    def __init__(self, errors: Dict[str, str]):
        self.errors = dict(errors)
        details = "; ".join(f"{field}: {msg}" for field, msg in self.errors.items())
        super().__init__(f"Task is invalid ({details})")


class SerializationError(TaskboardError):
    """Board snapshot could not be encoded, decoded or written."""

    def __init__(self, message: str):
        super().__init__(message)
