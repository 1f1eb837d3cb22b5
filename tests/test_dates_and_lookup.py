"""
Tests for deadline parsing and the column/task lookup helpers.
"""

from datetime import datetime, time

import pytest

from taskboard.core.dates import format_deadline, parse_deadline
from taskboard.core.exceptions import ColumnNotFoundError, InvalidDeadlineError, TaskNotFoundError
from taskboard.formatting import format_due, short_id
from taskboard.utils import find_column, find_column_or_raise, find_task_or_raise, parse_position
from conftest import NOW, make_board, make_task


# --- deadlines ---


def test_date_only_is_due_at_noon():
    assert parse_deadline("2024-01-20") == datetime(2024, 1, 20, 12, 0)
    assert parse_deadline("2024-01-20", default_time=time(9, 0)) == datetime(2024, 1, 20, 9, 0)


@pytest.mark.parametrize("text", ["2024-01-20 17:30", "2024-01-20T17:30", "2024-01-20T17:30:00"])
def test_date_and_time(text):
    assert parse_deadline(text) == datetime(2024, 1, 20, 17, 30)


def test_blank_means_no_deadline():
    assert parse_deadline(None) is None
    assert parse_deadline("   ") is None


def test_garbage_deadline():
    with pytest.raises(InvalidDeadlineError):
        parse_deadline("next tuesday")


def test_format_deadline():
    assert format_deadline(datetime(2024, 1, 10, 12, 0)) == "Jan 10, 2024 12:00 PM"
    assert format_deadline(None) == "-"


def test_format_due_relative():
    assert format_due(None, NOW) == "no deadline"
    assert format_due(NOW.replace(hour=12), NOW) == "due in 3 hours"
    assert format_due(datetime(2024, 1, 11, 12, 0), NOW) == "due tomorrow"
    assert format_due(datetime(2024, 1, 8, 9, 0), NOW) == "overdue by 2 days"


# --- lookups ---


def test_find_column_by_id_or_title():
    board = make_board()

    assert find_column(board, "in-progress").id == "in-progress"
    assert find_column(board, "In Progress").id == "in-progress"
    assert find_column(board, "DONE").id == "done"
    assert find_column(board, "backlog") is None

    with pytest.raises(ColumnNotFoundError) as exc_info:
        find_column_or_raise(board, "backlog")
    assert "todo" in str(exc_info.value)


def test_find_task_by_full_or_short_id():
    board = make_board(todo=[make_task("task-1704844800123")], done=[make_task("task-1704844800999")])

    assert find_task_or_raise(board, "task-1704844800123")[2].id == "task-1704844800123"
    assert find_task_or_raise(board, "1704844800123")[2].id == "task-1704844800123"
    assert find_task_or_raise(board, "800999")[0].id == "done"
    assert find_task_or_raise(board, "#800123")[1] == 0
    assert short_id("task-1704844800123") == "800123"


def test_find_task_ambiguous_or_missing():
    board = make_board(todo=[make_task("task-1000042"), make_task("task-2000042")])

    with pytest.raises(TaskNotFoundError):
        find_task_or_raise(board, "0042")
    with pytest.raises(TaskNotFoundError):
        find_task_or_raise(board, "777")
    with pytest.raises(TaskNotFoundError):
        find_task_or_raise(board, "")


def test_parse_position():
    assert parse_position("1") == 0
    assert parse_position("3") == 2
    with pytest.raises(ValueError):
        parse_position("0")
    with pytest.raises(ValueError):
        parse_position("first")
