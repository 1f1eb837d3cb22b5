"""
FILE: taskboard/core/drag.py
PURPOSE: Three-phase drag intent (begin, hover, commit) over the move engine
EXPORTS:
  - DragSession (class)
DEPENDENCIES:
  - taskboard.core.engine (move_task, apply_drop)
  - taskboard.core.models (Board, DropTarget)
  - taskboard.core.exceptions (TaskNotFoundError, ColumnNotFoundError)
NOTES:
  - Only commit()/drop() touch the board; hover() is highlight state
  - Releasing outside a target or on an unknown id is a no-op, not an error
  - Session is cleared after every commit, drop or cancel
"""

import logging
from typing import Optional

from . import engine
from .models import Board, DropTarget
from .exceptions import ColumnNotFoundError, TaskNotFoundError


logger = logging.getLogger(__name__)


class DragSession:
    """
    Tracks one drag gesture for a presentation layer.

    Attributes:
        active_task_id: Task picked up by begin(), or None
        hover_target: Last target passed to hover(), or None
    """

    def __init__(self):
        self.active_task_id: Optional[str] = None
        self.hover_target: Optional[DropTarget] = None

    @property
    def is_dragging(self) -> bool:
        return self.active_task_id is not None

    def begin(self, task_id: str) -> None:
        """Pick up a task."""
        self.active_task_id = task_id
        self.hover_target = None

    def hover(self, target_column_id: Optional[str], target_index: Optional[int] = None) -> None:
        """Highlight a target. Never changes the board."""
        if not self.is_dragging:
            return
        if target_column_id is None:
            self.hover_target = None
        else:
            self.hover_target = DropTarget(column_id=target_column_id, index=target_index)

    def cancel(self) -> None:
        """Abandon the gesture."""
        self.active_task_id = None
        self.hover_target = None

    def commit(
        self,
        board: Board,
        task_id: str,
        target_column_id: Optional[str],
        target_index: Optional[int] = None,
    ) -> Board:
        """
        Finish the gesture by moving the task.

        Args:
            board: Current board
            task_id: Task being dropped
            target_column_id: Destination column, None if released outside
            target_index: Destination index for a same-column reorder

        Returns:
            New board, or the same board if the drop resolves to nothing
        """
        self.cancel()
        if target_column_id is None:
            return board

        try:
            return engine.move_task(board, task_id, target_column_id, target_index)
        except (TaskNotFoundError, ColumnNotFoundError) as e:
            logger.debug("Drag commit ignored: %s", e)
            return board

    def drop(self, board: Board, over_id: Optional[str]) -> Board:
        """
        Finish the gesture on a raw drop id (column or task under the pointer).

        Returns:
            New board, or the same board for a no-op drop
        """
        task_id = self.active_task_id
        self.cancel()
        if task_id is None:
            return board
        return engine.apply_drop(board, task_id, over_id)
