"""
Tests for REPL command handlers driven through execute_command.
"""

import io
import json

import pytest
from prompt_toolkit.formatted_text import fragment_list_to_text, to_formatted_text
from rich.console import Console

from taskboard.core.models import Board, Column
from taskboard.core.store import MemoryStore, SnapshotStore, ThemePreference
from taskboard.repl.main import execute_command, format_prompt, get_bottom_toolbar
from taskboard.repl.parser import parse_command
from taskboard.repl.session import ReplSession
from conftest import make_board, make_task


@pytest.fixture
def kv():
    return MemoryStore()


@pytest.fixture
def session(kv):
    console = Console(file=io.StringIO(), width=120, color_system=None)
    return ReplSession(SnapshotStore(kv), console=console)


def run(session, line):
    """Execute one REPL line, return what it printed."""
    start = len(session.console.file.getvalue())
    execute_command(parse_command(line), session)
    return session.console.file.getvalue()[start:]


def titles(session, column_id):
    return [t.title for t in session.board.get_column(column_id).tasks]


# --- tasks ---


def test_add_with_all_fields(session, kv):
    output = run(session, 'add todo -t "Write docs" -d "Usage" -D 2099-06-01')

    assert "Created task" in output
    assert titles(session, "todo") == ["Write docs"]
    assert not session.board.get_column("todo").tasks[0].is_editing
    assert session.dirty
    # Nothing written until save
    assert kv.get("boardState") is None


def test_add_without_fields_leaves_draft(session):
    output = run(session, "add review")

    task = session.board.get_column("review").tasks[0]
    assert task.is_editing
    assert "Draft" in output

    run(session, f'edit {task.id} -t Check -d "API diff" -D 2099-06-01')

    saved = session.board.find_task(task.id)[2]
    assert saved.title == "Check"
    assert not saved.is_editing


def test_add_invalid_keeps_draft_until_cancel(session):
    output = run(session, "add todo -t Title")

    assert "Task not saved" in output
    assert "description" in output
    draft = session.board.get_column("todo").tasks[0]
    assert draft.is_editing and draft.title == ""

    output = run(session, f"cancel {draft.id}")

    assert "Discarded" in output
    assert session.board.get_column("todo").tasks == ()


def test_add_unknown_column(session):
    output = run(session, "add backlog")

    assert "not found" in output
    assert not session.dirty


def test_edit_without_fields_reopens(session):
    session.board = make_board(todo=[make_task("task-1000001")])

    run(session, "edit 000001")

    assert session.board.find_task("task-1000001")[2].is_editing

    output = run(session, "cancel 000001")
    assert "Stopped editing" in output
    assert session.board.find_task("task-1000001")[2].title == "Task"


def test_edit_reopen_keeps_position_and_is_idempotent(session):
    session.board = make_board(todo=[make_task("task-1000001"), make_task("task-1000002")])

    run(session, "edit 000002")
    reopened = session.board

    assert [t.id for t in reopened.get_column("todo").tasks] == ["task-1000001", "task-1000002"]
    assert session.dirty

    run(session, "edit 000002")
    assert session.board is reopened


def test_markup_in_titles_prints_literally(session):
    output = run(session, 'add todo -t "[/]" -d "[bold]x" -D 2099-06-01')

    assert "[/]" in output
    task = session.board.get_column("todo").tasks[0]
    ref = task.id[-6:]

    for line in ("ls", "ls todo", f"show {ref}", f"grab {ref}", "hover done", "drop"):
        run(session, line)

    assert "[/]" in run(session, f"rm {ref}")


def test_markup_in_errors_prints_literally(session):
    assert "[/bold]" in run(session, "show [/bold]")
    assert "[/]" in run(session, "[/]")


def test_edit_bad_deadline(session):
    session.board = make_board(todo=[make_task("task-1000001")])

    output = run(session, "edit 000001 -D whenever")

    assert "Invalid deadline" in output


def test_rm_comma_separated(session):
    session.board = make_board(todo=[make_task("task-1000001"), make_task("task-1000002"), make_task("task-1000003")])

    run(session, "rm 000001,000003")

    assert [t.id for t in session.board.get_column("todo").tasks] == ["task-1000002"]


def test_mv_and_reorder(session):
    session.board = make_board(todo=[
        make_task("task-1000001", title="A"),
        make_task("task-1000002", title="B"),
    ])

    output = run(session, "mv 000002 todo -p 1")
    assert "position 1" in output
    assert titles(session, "todo") == ["B", "A"]

    output = run(session, "mv 000001 in progress")
    assert "Moved" in output
    assert titles(session, "in-progress") == ["A"]

    output = run(session, "mv 000001 in-progress")
    assert "already there" in output


def test_show(session):
    session.board = make_board(done=[make_task("task-1000001", description="All the details")])

    assert "All the details" in run(session, "show 000001")
    assert json.loads(run(session, "show 000001 --json"))["id"] == "task-1000001"


# --- drag ---


def test_grab_hover_drop_on_hover_target(session):
    session.board = make_board(todo=[make_task("task-1000001", title="A")])

    run(session, "grab 000001")
    assert session.drag.is_dragging
    assert "dragging 000001" in session.get_prompt()

    run(session, "hover review")
    assert titles(session, "review") == []  # hover doesn't move

    output = run(session, "drop")

    assert "Dropped" in output
    assert titles(session, "review") == ["A"]
    assert not session.drag.is_dragging


def test_drop_on_task_reorders_same_column(session):
    session.board = make_board(todo=[
        make_task("task-1000001", title="A"),
        make_task("task-1000002", title="B"),
        make_task("task-1000003", title="C"),
    ])

    run(session, "grab 000003")
    run(session, "drop 000001")

    assert titles(session, "todo") == ["C", "A", "B"]


def test_drop_on_own_column_is_noop(session):
    session.board = make_board(todo=[make_task("task-1000001"), make_task("task-1000002")])
    before = session.board

    run(session, "grab 000001")
    output = run(session, "drop todo")

    assert "nothing moved" in output
    assert session.board is before
    assert not session.dirty


def test_release_moves_nothing(session):
    session.board = make_board(todo=[make_task("task-1000001")])
    before = session.board

    run(session, "grab 000001")
    run(session, "hover done")
    run(session, "release")

    assert session.board is before
    assert not session.drag.is_dragging


def test_hover_and_drop_need_a_grab(session):
    assert "Nothing grabbed" in run(session, "hover done")
    assert "Nothing grabbed" in run(session, "drop done")


# --- board ---


def test_collapse_all_keeps_todo_open(session):
    run(session, "collapse all")

    assert session.collapsed == {"in-progress", "review", "done"}

    run(session, "expand review")
    assert "review" not in session.collapsed

    run(session, "expand all")
    assert session.collapsed == set()

    run(session, "collapse Done")
    assert session.collapsed == {"done"}
    assert "collapsed" in run(session, "ls")


def test_collapse_is_not_saved(session, kv):
    run(session, "collapse done")

    assert not session.dirty


def test_ls_column_and_json(session):
    session.board = make_board(review=[make_task("task-1000001", title="Check PR")])

    assert "Check PR" in run(session, "ls review")
    data = json.loads(run(session, "ls --json"))
    assert data[2]["tasks"][0]["title"] == "Check PR"


def test_stats_json(session):
    session.board = make_board(todo=[make_task("task-1")], done=[make_task("task-2")])

    stats = json.loads(run(session, "stats --json"))

    assert stats["total_tasks"] == 2
    assert stats["completion_percentage"] == 50


def test_export_writes_file(session, tmp_path):
    session.board = make_board(todo=[make_task("task-1000001", title="Exported")])
    target = tmp_path / "tasks.csv"

    run(session, f"export {target}")

    assert '"To Do","task-1000001","Exported"' in target.read_text(encoding="utf-8")


def test_clear_confirmation(session, monkeypatch):
    session.board = make_board(todo=[make_task("task-1")])

    monkeypatch.setattr("builtins.input", lambda prompt="": "n")
    assert "Cancelled" in run(session, "clear")
    assert titles(session, "todo") == ["Task"]

    run(session, "clear --yes")
    assert all(c.tasks == () for c in session.board.columns)


def test_theme_toggle_and_save(session, kv):
    run(session, "theme toggle")

    assert session.theme.dark
    assert session.dirty

    output = run(session, "save")

    assert "saved" in output
    assert kv.get("darkMode") == "true"
    assert json.loads(kv.get("boardState"))[0]["id"] == "todo"
    assert not session.dirty


def test_theme_invalid(session):
    assert "Invalid theme" in run(session, "theme sepia")
    assert not session.theme.dark


def test_session_starts_from_saved_board(kv):
    board = make_board(done=[make_task("task-1", title="Saved earlier")])
    SnapshotStore(kv).save(board, ThemePreference(dark=True))

    session = ReplSession(SnapshotStore(kv), console=Console(file=io.StringIO()))

    assert session.board == board
    assert session.theme.dark


# --- system ---


def test_exit_warns_once_on_unsaved_changes(session):
    run(session, "add todo")

    assert execute_command(parse_command("exit"), session) is True
    assert "unsaved changes" in session.console.file.getvalue()
    assert execute_command(parse_command("quit"), session) is False


def test_exit_clean_session(session):
    assert execute_command(parse_command("exit"), session) is False


def test_unknown_command(session):
    assert "Unknown command" in run(session, "fly")


def test_help_lists_drag_commands(session):
    output = run(session, "help")

    for command in ("grab", "hover", "drop", "release", "collapse", "save"):
        assert command in output


# --- prompt / toolbar ---


def plain(formatted):
    return fragment_list_to_text(to_formatted_text(formatted))


def test_toolbar_shows_column_titles_verbatim(session):
    session.board = Board(columns=(
        Column(id="rnd", title="R&D <next>", tasks=(make_task("task-1"),)),
    ))

    text = plain(get_bottom_toolbar(session))

    assert "R&D <next> 1" in text
    assert "0 overdue" in text


def test_prompt_while_dragging_escapes_task_id(session):
    session.board = make_board(todo=[make_task("task-<&>123")])
    session.drag.begin("task-<&>123")

    assert plain(format_prompt(session)) == "board:[dragging <&>123]> "
