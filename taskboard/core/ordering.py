"""
FILE: taskboard/core/ordering.py
PURPOSE: Deadline sort policy for column task lists
EXPORTS:
  - compare_deadlines(a, b) -> int
  - sort_by_deadline(tasks) -> Tuple[Task, ...]
DEPENDENCIES:
  - functools (cmp_to_key)
  - taskboard.core.models (Task)
NOTES:
  - Dated tasks first, earliest deadline first
  - Undated tasks last, in their existing order
  - sorted() is stable, so ties keep encounter order
  - Not applied to same-column drag reorders (explicit user order wins)
"""

from functools import cmp_to_key
from typing import Iterable, Tuple

from .models import Task


def compare_deadlines(a: Task, b: Task) -> int:
    """Comparator: negative if a sorts before b."""
    if a.deadline and b.deadline:
        if a.deadline < b.deadline:
            return -1
        if a.deadline > b.deadline:
            return 1
        return 0
    if a.deadline and not b.deadline:
        return -1
    if not a.deadline and b.deadline:
        return 1
    return 0


def sort_by_deadline(tasks: Iterable[Task]) -> Tuple[Task, ...]:
    """
    Order tasks by the deadline sort policy.

    Args:
        tasks: Tasks in their current order

    Returns:
        New tuple in policy order (input untouched)
    """
    return tuple(sorted(tasks, key=cmp_to_key(compare_deadlines)))
