"""
FILE: taskboard/core/analytics.py
PURPOSE: Read-only statistics derived from the board
EXPORTS:
  - Analytics (frozen dataclass)
  - compute_analytics(board, now) -> Analytics
DEPENDENCIES:
  - taskboard.core.models (Board, is_visible)
  - taskboard.core.constants (column ids)
  - dataclasses, datetime, math (stdlib)
NOTES:
  - Only "real" tasks are counted (see models.is_visible)
  - Deadline stats compare against `now`: point-in-time, not archival
"""

import math
from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from .constants import COLUMN_DONE, COLUMN_IN_PROGRESS, COLUMN_REVIEW, COLUMN_TODO
from .models import Board, is_visible


def _round_half_up(value: float) -> int:
    # Python's round() is banker's rounding; percentages round .5 up
    return int(math.floor(value + 0.5))


def _percent(part: int, whole: int) -> int:
    if whole <= 0:
        return 0
    return _round_half_up(part / whole * 100)


@dataclass(frozen=True)
class Analytics:
    """Board statistics at one instant."""

    total_tasks: int = 0
    todo_tasks: int = 0
    in_progress_tasks: int = 0
    review_tasks: int = 0
    completed_tasks: int = 0
    completion_percentage: int = 0
    overdue_tasks: int = 0
    completed_early_tasks: int = 0
    efficiency_rate: int = 0
    urgency_index: str = "None"
    tasks_per_column: float = 0.0

    def share(self, column_id: str) -> int:
        """Percentage of all tasks sitting in one of the standard columns."""
        counts = {
            COLUMN_TODO: self.todo_tasks,
            COLUMN_IN_PROGRESS: self.in_progress_tasks,
            COLUMN_REVIEW: self.review_tasks,
            COLUMN_DONE: self.completed_tasks,
        }
        return _percent(counts.get(column_id, 0), self.total_tasks)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _urgency(total: int, overdue: int, in_progress: int, todo: int) -> str:
    if total == 0:
        return "None"
    if overdue > 0:
        return "High"
    if in_progress > todo:
        return "Medium"
    return "Low"


def compute_analytics(board: Board, now: Optional[datetime] = None) -> Analytics:
    """
    Derive statistics from the current board.

    Args:
        board: Board to summarize
        now: Reference instant for overdue/early checks (defaults to datetime.now())

    Returns:
        Analytics record

    Notes:
        - completion_percentage is 0 for an empty board
        - overdue: outside "done", deadline strictly before now
        - completed early: inside "done", deadline strictly after now
        - efficiency_rate: (completed - overdue) / total, as a percentage
    """
    reference = now or datetime.now()

    counts: Dict[str, int] = {}
    total = 0
    overdue = 0
    early = 0

    for column, task in board.iter_tasks():
        if not is_visible(task):
            continue
        total += 1
        counts[column.id] = counts.get(column.id, 0) + 1

        if task.deadline is None:
            continue
        if column.id == COLUMN_DONE:
            if task.deadline > reference:
                early += 1
        elif task.deadline < reference:
            overdue += 1

    todo = counts.get(COLUMN_TODO, 0)
    in_progress = counts.get(COLUMN_IN_PROGRESS, 0)
    review = counts.get(COLUMN_REVIEW, 0)
    completed = counts.get(COLUMN_DONE, 0)
    column_count = len(board.columns)

    return Analytics(
        total_tasks=total,
        todo_tasks=todo,
        in_progress_tasks=in_progress,
        review_tasks=review,
        completed_tasks=completed,
        completion_percentage=_percent(completed, total),
        overdue_tasks=overdue,
        completed_early_tasks=early,
        efficiency_rate=_percent(completed - overdue, total),
        urgency_index=_urgency(total, overdue, in_progress, todo),
        tasks_per_column=total / column_count if column_count else 0.0,
    )
