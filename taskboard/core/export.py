"""
FILE: taskboard/core/export.py
PURPOSE: Deterministic tabular export of the board
EXPORTS:
  - EXPORT_HEADER: CSV header row
  - ExportRow (NamedTuple)
  - iter_export_rows(board) -> Iterator[ExportRow]
  - render_csv(board) -> str
  - default_export_filename(today) -> str
DEPENDENCIES:
  - csv, io, datetime (stdlib)
  - taskboard.core.models (Board, is_visible)
  - taskboard.core.dates (format_export_deadline)
NOTES:
  - Row order: column order, then in-column task order
  - Drafts are skipped (visibility rule)
  - Every cell is quoted
"""

import csv
import io
from datetime import date
from typing import Iterator, NamedTuple, Optional

from .constants import EXPORT_FILENAME_FORMAT
from .dates import format_export_deadline
from .models import Board, is_visible


EXPORT_HEADER = ("Column", "Task ID", "Title", "Description", "Deadline")


class ExportRow(NamedTuple):
    column_title: str
    task_id: str
    title: str
    description: str
    deadline: str


def iter_export_rows(board: Board) -> Iterator[ExportRow]:
    """Yield one row per real task, in board order."""
    for column, task in board.iter_tasks():
        if not is_visible(task):
            continue
        yield ExportRow(
            column_title=column.title,
            task_id=task.id,
            title=task.title,
            description=task.description,
            deadline=format_export_deadline(task.deadline),
        )


def render_csv(board: Board) -> str:
    """Board as CSV text (header + one row per real task)."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(EXPORT_HEADER)
    writer.writerows(iter_export_rows(board))
    return buffer.getvalue()


def default_export_filename(today: Optional[date] = None) -> str:
    """E.g. "project-tasks-2024-01-10.csv"."""
    return (today or date.today()).strftime(EXPORT_FILENAME_FORMAT)
