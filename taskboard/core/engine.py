"""
FILE: taskboard/core/engine.py
PURPOSE: Move engine - every board transition (add, edit, delete, move, clear)
EXPORTS:
  - add_task(board, column_id, now) -> (Board, Task)
  - validate_patch(patch, current, now) -> Dict[str, str]
  - update_task(board, column_id, task_id, patch, now) -> Board
  - delete_task(board, column_id, task_id) -> Board
  - begin_edit(board, column_id, task_id) -> Board
  - cancel_edit(board, column_id, task_id) -> Board
  - move_task(board, task_id, target_column_id, target_index) -> Board
  - clear_all_tasks(board) -> Board
  - resolve_drop(board, over_id) -> DropTarget | None
  - apply_drop(board, active_id, over_id) -> Board
DEPENDENCIES:
  - taskboard.core.models (Board, Column, Task, TaskPatch, DropTarget)
  - taskboard.core.ordering (sort_by_deadline)
  - taskboard.core.exceptions (TaskNotFoundError, ColumnNotFoundError, ValidationError)
  - logging, dataclasses, datetime (stdlib)
NOTES:
  - Pure functions: the input board is never mutated
  - A transition that changes nothing returns the same Board object
  - Deadline sort is re-applied after add, update and cross-column moves only
  - Explicit operations on unknown ids raise; drops on unknown targets are no-ops
"""

import logging
from dataclasses import replace
from datetime import datetime
from typing import Dict, Optional, Tuple

from .models import (
    Board,
    Column,
    DropTarget,
    Task,
    TaskPatch,
    has_content,
    new_draft_task,
)
from .ordering import sort_by_deadline
from .exceptions import ColumnNotFoundError, TaskNotFoundError, ValidationError


logger = logging.getLogger(__name__)


def _require_column(board: Board, column_id: str) -> Column:
    column = board.get_column(column_id)
    if column is None:
        raise ColumnNotFoundError(column_id)
    return column


# --- Task Lifecycle ---


def add_task(
    board: Board,
    column_id: str,
    now: Optional[datetime] = None,
) -> Tuple[Board, Task]:
    """
    Add a new draft task to a column.

    Args:
        board: Current board
        column_id: Column to add the task to
        now: Creation time (defaults to datetime.now())

    Returns:
        (new board, the draft task)

    Raises:
        ColumnNotFoundError: If column_id doesn't exist

    Notes:
        - Draft has empty title/description, no deadline, is_editing=True
        - Column is re-sorted, so the draft lands after every dated task
    """
    column = _require_column(board, column_id)
    task = new_draft_task(now)

    updated = replace(column, tasks=sort_by_deadline(column.tasks + (task,)))
    logger.debug("Added draft %s to %s", task.id, column_id)
    return board.with_column(updated), task


def validate_patch(
    patch: TaskPatch,
    current: Optional[Task] = None,
    now: Optional[datetime] = None,
) -> Dict[str, str]:
    """
    Check a task edit before it is saved.

    Args:
        patch: Fields the user entered
        current: Task being edited (used to spot an unchanged deadline)
        now: Reference time for the past-deadline check

    Returns:
        Field name -> message for every invalid field (empty if valid)

    Notes:
        - Title, description and deadline are all required
        - A deadline that changes to a moment already past is rejected;
          keeping an existing (now overdue) deadline is allowed
    """
    errors: Dict[str, str] = {}

    if not (patch.title or "").strip():
        errors["title"] = "Title is required"

    if not (patch.description or "").strip():
        errors["description"] = "Description is required"

    if patch.deadline is None:
        errors["deadline"] = "Deadline is required"
    else:
        changed = current is None or current.deadline != patch.deadline
        reference = now or datetime.now()
        if changed and patch.deadline < reference:
            errors["deadline"] = "Deadline cannot be in the past"

    return errors


def update_task(
    board: Board,
    column_id: str,
    task_id: str,
    patch: TaskPatch,
    now: Optional[datetime] = None,
) -> Board:
    """
    Save edited fields onto a task.

    Args:
        board: Current board
        column_id: Column holding the task
        task_id: Task to update
        patch: New title, description and deadline
        now: Reference time for validation

    Returns:
        New board with the task updated and the column re-sorted

    Raises:
        TaskNotFoundError: If the task isn't in that column
        ValidationError: If the patch fails validation (board unchanged)

    Notes:
        - id and created_at are preserved
        - Clears is_editing
        - Trims whitespace from title and description
    """
    column = board.get_column(column_id)
    index = column.index_of(task_id) if column else None
    if column is None or index is None:
        raise TaskNotFoundError(task_id)

    current = column.tasks[index]
    errors = validate_patch(patch, current=current, now=now)
    if errors:
        raise ValidationError(errors)

    updated_task = replace(
        current,
        title=patch.title.strip(),
        description=patch.description.strip(),
        deadline=patch.deadline,
        is_editing=False,
    )
    tasks = column.tasks[:index] + (updated_task,) + column.tasks[index + 1:]
    return board.with_column(replace(column, tasks=sort_by_deadline(tasks)))


def delete_task(board: Board, column_id: str, task_id: str) -> Board:
    """
    Remove a task from a column.

    Returns:
        New board without the task, or the same board if it wasn't there
    """
    column = board.get_column(column_id)
    if column is None or column.index_of(task_id) is None:
        return board

    remaining = tuple(t for t in column.tasks if t.id != task_id)
    return board.with_column(replace(column, tasks=remaining))


def begin_edit(board: Board, column_id: str, task_id: str) -> Board:
    """Reopen a task for editing. Unknown or already-editing task: no-op."""
    column = board.get_column(column_id)
    index = column.index_of(task_id) if column else None
    if column is None or index is None or column.tasks[index].is_editing:
        return board

    task = column.tasks[index]
    tasks = column.tasks[:index] + (replace(task, is_editing=True),) + column.tasks[index + 1:]
    return board.with_column(replace(column, tasks=tasks))


def cancel_edit(board: Board, column_id: str, task_id: str) -> Board:
    """
    Abandon editing a task.

    Notes:
        - A task with no saved content is deleted (drafts don't linger)
        - Otherwise the saved content stays and is_editing is cleared
        - Unknown task: no-op
    """
    column = board.get_column(column_id)
    index = column.index_of(task_id) if column else None
    if column is None or index is None:
        return board

    task = column.tasks[index]
    if not has_content(task):
        return delete_task(board, column_id, task_id)
    if not task.is_editing:
        return board

    tasks = column.tasks[:index] + (replace(task, is_editing=False),) + column.tasks[index + 1:]
    return board.with_column(replace(column, tasks=tasks))


def clear_all_tasks(board: Board) -> Board:
    """Empty every column, keeping column ids, titles and order."""
    if all(not c.tasks for c in board.columns):
        return board
    return replace(board, columns=tuple(replace(c, tasks=()) for c in board.columns))


# --- Moving ---


def move_task(
    board: Board,
    task_id: str,
    target_column_id: str,
    target_index: Optional[int] = None,
) -> Board:
    """
    Move a task within or across columns (the drag-and-drop primitive).

    Args:
        board: Current board
        task_id: Task to move
        target_column_id: Destination column
        target_index: Destination position for a same-column reorder

    Returns:
        New board, or the same board when nothing changes

    Raises:
        TaskNotFoundError: If no column holds task_id
        ColumnNotFoundError: If target_column_id doesn't exist

    Notes:
        - Same column + index: manual reorder, task ends at target_index
          (clamped to the list), no deadline sort
        - Same column without index, or same index: no-op
        - Other column: appended then target re-sorted; index ignored;
          source needs no re-sort since removal keeps relative order
    """
    found = board.find_task(task_id)
    if found is None:
        raise TaskNotFoundError(task_id)
    source, index, task = found
    target = _require_column(board, target_column_id)

    if target.id == source.id:
        if target_index is None:
            return board
        new_index = max(0, min(target_index, len(source.tasks) - 1))
        if new_index == index:
            return board
        tasks = list(source.tasks)
        tasks.pop(index)
        tasks.insert(new_index, task)
        logger.debug("Reordered %s in %s: %d -> %d", task_id, source.id, index, new_index)
        return board.with_column(replace(source, tasks=tuple(tasks)))

    new_source = replace(source, tasks=tuple(t for t in source.tasks if t.id != task_id))
    new_target = replace(target, tasks=sort_by_deadline(target.tasks + (task,)))
    logger.debug("Moved %s from %s to %s", task_id, source.id, target.id)
    return board.with_column(new_source).with_column(new_target)


def resolve_drop(board: Board, over_id: Optional[str]) -> Optional[DropTarget]:
    """
    Work out what a drop landed on.

    Args:
        board: Current board
        over_id: Id under the pointer at release (column id or task id)

    Returns:
        DropTarget, or None if over_id names neither a column nor a task

    Notes:
        - Column ids win: a drop on a column body appends (index=None)
        - Otherwise search tasks: a drop on a task carries its column and index
    """
    if over_id is None:
        return None
    if board.get_column(over_id) is not None:
        return DropTarget(column_id=over_id)

    found = board.find_task(over_id)
    if found is None:
        return None
    column, index, _ = found
    return DropTarget(column_id=column.id, index=index)


def apply_drop(board: Board, active_id: str, over_id: Optional[str]) -> Board:
    """
    Commit the end of a drag gesture.

    Args:
        board: Current board
        active_id: Task being dragged
        over_id: Column or task id under the pointer, None if released outside

    Returns:
        New board, or the same board for every no-op case

    Notes:
        - No-op: released outside, self-drop, unresolvable target,
          unknown active task, drop on the task's own column body
        - Drop on a task in the same column: reorder to that task's index
        - Drop on another column or a task in it: cross-column move
    """
    if over_id is None or active_id == over_id:
        return board

    found = board.find_task(active_id)
    target = resolve_drop(board, over_id)
    if found is None or target is None:
        logger.debug("Ignoring drop of %s on %s", active_id, over_id)
        return board

    source = found[0]
    if target.column_id == source.id:
        if target.index is None:
            return board
        return move_task(board, active_id, source.id, target.index)

    return move_task(board, active_id, target.column_id)
