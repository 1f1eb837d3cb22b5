"""Tests for REPL autocomplete."""

# Path setup handled by conftest.py
from prompt_toolkit.document import Document

from taskboard.core.store import MemoryStore, SnapshotStore
from taskboard.repl.completer import create_completer
from taskboard.repl.session import ReplSession
from conftest import make_board, make_task


def complete(completer, text):
    doc = Document(text, cursor_position=len(text))
    return [c.text for c in completer.get_completions(doc, None)]


def session_with_tasks():
    session = ReplSession(SnapshotStore(MemoryStore()))
    session.board = make_board(
        todo=[make_task("task-1704844800123", title="Write docs")],
        review=[make_task("task-1704844800456", title="Check PR")],
    )
    return session


def test_command_completion():
    completer = create_completer()

    assert "grab" in complete(completer, "gr")
    assert set(complete(completer, "ex")) == {"export", "exit", "expand"}
    assert "mv" in complete(completer, "m")
    print("✓ Command completion works")


def test_task_ids_after_task_commands():
    completer = create_completer(session_with_tasks())

    assert set(complete(completer, "show ")) == {"800123", "800456"}
    assert complete(completer, "grab 8001") == ["800123"]
    assert complete(completer, "rm 800") != []
    print("✓ Task id completion works")


def test_columns_after_add_and_mv():
    completer = create_completer(session_with_tasks())

    assert complete(completer, "add ") == ["todo", "in-progress", "review", "done"]
    assert complete(completer, "add in") == ["in-progress"]
    assert complete(completer, "mv 800123 d") == ["done"]
    print("✓ Column completion works")


def test_collapse_offers_all():
    completer = create_completer(session_with_tasks())

    assert "all" in complete(completer, "collapse ")
    assert "all" not in complete(completer, "add ")


def test_drop_targets_include_columns_and_tasks():
    completer = create_completer(session_with_tasks())

    options = complete(completer, "drop ")

    assert "review" in options
    assert "800456" in options


def test_flag_completion():
    completer = create_completer()

    assert set(complete(completer, "add todo --")) == {"--title", "--description", "--deadline"}
    assert complete(completer, "mv 123 todo --p") == ["--position"]
    assert complete(completer, "ls --") == ["--json"]


def test_theme_values():
    assert complete(create_completer(), "theme ") == ["light", "dark", "toggle"]


def test_no_board_no_task_suggestions():
    assert complete(create_completer(), "show ") == []
