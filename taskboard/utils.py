"""
FILE: taskboard/utils.py
PURPOSE: Lookup helpers shared by CLI and REPL
EXPORTS:
  - find_column(board, ref) -> Column | None
  - find_column_or_raise(board, ref) -> Column
  - find_task_or_raise(board, ref) -> (Column, int, Task)
  - parse_position(value) -> int
  - parse_task_ids(id_string) -> List[str]
DEPENDENCIES:
  - taskboard.core.models (Board, Column, Task)
  - taskboard.core.exceptions (ColumnNotFoundError, TaskNotFoundError)
NOTES:
  - Columns match by id or title, case-insensitive ("done", "In Progress")
  - Tasks match by full id, by id without the "task-" prefix,
    or by a unique id suffix (the short id shown on screen)
  - Positions are 1-based for users, 0-based for the engine
"""

from typing import List, Optional, Tuple

from .core.constants import TASK_ID_PREFIX
from .core.exceptions import ColumnNotFoundError, TaskNotFoundError
from .core.models import Board, Column, Task


def find_column(board: Board, ref: str) -> Optional[Column]:
    """Column by id or title (case-insensitive), None if no match."""
    wanted = ref.strip().lower()
    for column in board.columns:
        if column.id.lower() == wanted or column.title.lower() == wanted:
            return column
    return None


def find_column_or_raise(board: Board, ref: str) -> Column:
    """
    Column by id or title, raising error if not found.

    Raises:
        ColumnNotFoundError: If no column matches (message lists valid ids)
    """
    column = find_column(board, ref)
    if column is None:
        available = ", ".join(board.column_ids())
        raise ColumnNotFoundError(f"{ref} (available: {available})")
    return column


def find_task_or_raise(board: Board, ref: str) -> Tuple[Column, int, Task]:
    """
    Task by full id, bare number, or unique suffix.

    Raises:
        TaskNotFoundError: If nothing matches or the suffix is ambiguous
    """
    ref = ref.strip().lstrip("#")
    if not ref:
        raise TaskNotFoundError(ref)

    for candidate in (ref, f"{TASK_ID_PREFIX}{ref}"):
        found = board.find_task(candidate)
        if found is not None:
            return found

    matches = [(c, t) for c, t in board.iter_tasks() if t.id.endswith(ref)]
    if len(matches) != 1:
        raise TaskNotFoundError(ref)

    column, task = matches[0]
    return column, column.index_of(task.id), task


def parse_position(value: str) -> int:
    """
    Convert a 1-based position typed by the user to a 0-based index.

    Raises:
        ValueError: If value isn't a positive integer
    """
    position = int(value)
    if position < 1:
        raise ValueError(f"Position must be 1 or greater, got {position}")
    return position - 1


def parse_task_ids(id_string: str) -> List[str]:
    """
    Parse comma-separated task refs.

    Args:
        id_string: Comma-separated refs (e.g., "123456,654321")

    Returns:
        List of refs, blanks dropped
    """
    refs = [ref.strip() for ref in id_string.split(",")]
    return [ref for ref in refs if ref]
