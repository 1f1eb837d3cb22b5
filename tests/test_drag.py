"""
Tests for the three-phase drag gesture (begin / hover / commit).
"""

from datetime import timedelta

from taskboard.core.drag import DragSession
from conftest import NOW, make_board, make_task


def test_hover_never_changes_board():
    board = make_board(todo=[make_task("task-1")])
    drag = DragSession()

    drag.begin("task-1")
    drag.hover("done")
    drag.hover("review", 0)

    assert drag.is_dragging
    assert drag.hover_target.column_id == "review"
    assert drag.hover_target.index == 0
    assert board.get_column("todo").tasks[0].id == "task-1"


def test_hover_ignored_when_not_dragging():
    drag = DragSession()

    drag.hover("done")

    assert drag.hover_target is None


def test_commit_moves_and_ends_gesture():
    board = make_board(todo=[make_task("task-1")])
    drag = DragSession()
    drag.begin("task-1")

    moved = drag.commit(board, "task-1", "done")

    assert moved.get_column("done").tasks[0].id == "task-1"
    assert not drag.is_dragging
    assert drag.hover_target is None


def test_commit_outside_is_noop():
    board = make_board(todo=[make_task("task-1")])
    drag = DragSession()
    drag.begin("task-1")

    assert drag.commit(board, "task-1", None) is board
    assert not drag.is_dragging


def test_commit_unknown_ids_are_noops():
    """Stale ids at drop time don't raise."""
    board = make_board(todo=[make_task("task-1")])
    drag = DragSession()

    assert drag.commit(board, "task-gone", "done") is board
    assert drag.commit(board, "task-1", "archive") is board


def test_commit_same_column_same_index_is_noop():
    board = make_board(todo=[make_task("task-1"), make_task("task-2")])
    drag = DragSession()
    drag.begin("task-2")

    assert drag.commit(board, "task-2", "todo", 1) is board


def test_drop_on_task_in_other_column():
    board = make_board(
        todo=[make_task("task-a")],
        review=[make_task("task-b", deadline=NOW + timedelta(days=1))],
    )
    drag = DragSession()
    drag.begin("task-a")

    moved = drag.drop(board, "task-b")

    assert [t.id for t in moved.get_column("review").tasks] == ["task-b", "task-a"]
    assert not drag.is_dragging


def test_drop_without_begin_is_noop():
    board = make_board(todo=[make_task("task-1")])

    assert DragSession().drop(board, "done") is board


def test_cancel_clears_state():
    drag = DragSession()
    drag.begin("task-1")
    drag.hover("done")

    drag.cancel()

    assert not drag.is_dragging
    assert drag.hover_target is None
