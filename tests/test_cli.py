"""
Tests for the one-shot CLI commands.

Each test gets its own $TASKBOARD_HOME (see conftest.isolated_store).
"""

import csv
import io
import json

from typer.testing import CliRunner

from taskboard import __version__
from taskboard.cli.main import app
from taskboard.core.store import open_default_store


runner = CliRunner()


def invoke(*args, input=None):
    return runner.invoke(app, list(args), input=input)


def add(column, title, description="Details", deadline="2099-06-01"):
    result = invoke("add", column, "-t", title, "-d", description, "-D", deadline, "--json")
    assert result.exit_code == 0, result.output
    return json.loads(result.stdout)


def board_json():
    result = invoke("ls", "--json")
    assert result.exit_code == 0, result.output
    return json.loads(result.stdout)


def column_titles(data, column_id):
    column = next(c for c in data if c["id"] == column_id)
    return [t["title"] for t in column["tasks"]]


def test_version():
    result = invoke("version")

    assert result.exit_code == 0
    assert f"Taskboard v{__version__}" in result.stdout


def test_add_creates_and_persists_task():
    task = add("todo", "Write docs", "Usage section", "2099-06-01")

    assert task["title"] == "Write docs"
    assert task["deadline"] == "2099-06-01T12:00:00"
    assert task["isEditing"] is False

    # Written to the store, not just printed
    board = open_default_store().load()
    assert board.find_task(task["id"]) is not None


def test_add_by_column_title():
    add("In Progress", "Refactor")

    assert column_titles(board_json(), "in-progress") == ["Refactor"]


def test_add_missing_fields_fails_and_writes_nothing():
    result = invoke("add", "todo", "-t", "Only a title")

    assert result.exit_code == 1
    assert "Task not saved" in result.output
    assert "description" in result.output
    assert all(c["tasks"] == [] for c in board_json())


def test_add_past_deadline_rejected():
    result = invoke("add", "todo", "-t", "Late", "-d", "x", "-D", "2000-01-01")

    assert result.exit_code == 1
    assert "past" in result.output


def test_add_unknown_column():
    result = invoke("add", "backlog", "-t", "x", "-d", "y", "-D", "2099-01-01")

    assert result.exit_code == 1
    assert "backlog" in result.output


def test_add_invalid_deadline():
    result = invoke("add", "todo", "-t", "x", "-d", "y", "-D", "soon")

    assert result.exit_code == 1
    assert "Invalid deadline" in result.output


def test_tasks_sorted_by_deadline():
    add("todo", "Later", deadline="2099-07-01")
    add("todo", "Sooner", deadline="2099-06-01")

    assert column_titles(board_json(), "todo") == ["Sooner", "Later"]


def test_edit_updates_fields():
    task = add("todo", "Draft")

    result = invoke("edit", task["id"][-6:], "--title", "Final", "--json")

    assert result.exit_code == 0, result.output
    edited = json.loads(result.stdout)
    assert edited["title"] == "Final"
    assert edited["description"] == "Details"
    assert edited["createdAt"] == task["createdAt"]


def test_edit_unknown_task():
    result = invoke("edit", "999999", "--title", "x")

    assert result.exit_code == 1
    assert "not found" in result.output


def test_mv_across_columns():
    task = add("todo", "Ship it")

    result = invoke("mv", task["id"], "done")

    assert result.exit_code == 0, result.output
    assert "Moved" in result.stdout
    data = board_json()
    assert column_titles(data, "todo") == []
    assert column_titles(data, "done") == ["Ship it"]


def test_mv_reorder_within_column():
    add("todo", "First", deadline="2099-06-01")
    second = add("todo", "Second", deadline="2099-07-01")

    result = invoke("mv", second["id"], "todo", "--position", "1")

    assert result.exit_code == 0, result.output
    assert "position 1" in result.stdout
    assert column_titles(board_json(), "todo") == ["Second", "First"]


def test_mv_same_place_is_noop():
    task = add("todo", "Stay")

    result = invoke("mv", task["id"], "todo")

    assert result.exit_code == 0
    assert "already there" in result.stdout


def test_mv_bad_position():
    task = add("todo", "Stay")

    result = invoke("mv", task["id"], "todo", "--position", "0")

    assert result.exit_code == 1


def test_rm():
    task = add("review", "Remove me")

    result = invoke("rm", task["id"])

    assert result.exit_code == 0
    assert column_titles(board_json(), "review") == []


def test_show_json():
    task = add("todo", "Inspect")

    result = invoke("show", task["id"], "--json")

    assert result.exit_code == 0
    assert json.loads(result.stdout)["id"] == task["id"]


def test_show_panel():
    task = add("todo", "Inspect", "Look closely")

    result = invoke("show", task["id"])

    assert result.exit_code == 0
    assert "Look closely" in result.stdout


def test_titles_with_markup_print_literally():
    result = invoke("add", "todo", "-t", "[/]", "-d", "[bold]x", "-D", "2099-01-01")

    assert result.exit_code == 0, result.output
    assert "[/]" in result.stdout
    assert column_titles(board_json(), "todo") == ["[/]"]

    task_id = board_json()[0]["tasks"][0]["id"]
    for args in (("show", task_id), ("ls",), ("ls", "--column", "todo"), ("edit", task_id, "-t", "[red]")):
        result = invoke(*args)
        assert result.exit_code == 0, result.output

    result = invoke("rm", task_id)
    assert result.exit_code == 0, result.output
    assert "[red]" in result.stdout


def test_error_with_markup_prints_literally():
    result = invoke("edit", "[/bold]", "--title", "x")

    assert result.exit_code == 1
    assert "[/bold]" in result.output


def test_ls_table_and_column():
    add("todo", "Visible task")

    assert "To Do" in invoke("ls").stdout
    result = invoke("ls", "--column", "todo")
    assert result.exit_code == 0
    assert "Visible task" in result.stdout
    assert invoke("ls", "--column", "nowhere").exit_code == 1


def test_stats_json():
    task = add("todo", "One")
    add("todo", "Two")
    invoke("mv", task["id"], "done")

    result = invoke("stats", "--json")

    assert result.exit_code == 0
    stats = json.loads(result.stdout)
    assert stats["total_tasks"] == 2
    assert stats["completed_tasks"] == 1
    assert stats["completion_percentage"] == 50
    assert stats["completed_early_tasks"] == 1


def test_export_to_stdout():
    add("todo", "Exported", "Row")

    result = invoke("export", "-o", "-")

    assert result.exit_code == 0
    rows = list(csv.reader(io.StringIO(result.stdout)))
    assert rows[0] == ["Column", "Task ID", "Title", "Description", "Deadline"]
    assert rows[1][0] == "To Do"
    assert rows[1][2:] == ["Exported", "Row", "2099-06-01 12:00:00"]


def test_export_to_file(tmp_path):
    add("todo", "Exported")
    target = tmp_path / "out.csv"

    result = invoke("export", "--output", str(target))

    assert result.exit_code == 0
    assert "Exported" in target.read_text(encoding="utf-8")


def test_clear_requires_confirmation():
    add("todo", "Keep me")

    declined = invoke("clear", input="n\n")
    assert declined.exit_code == 1
    assert column_titles(board_json(), "todo") == ["Keep me"]

    accepted = invoke("clear", "--yes")
    assert accepted.exit_code == 0
    assert [c["id"] for c in board_json()] == ["todo", "in-progress", "review", "done"]
    assert all(c["tasks"] == [] for c in board_json())


def test_theme_roundtrip():
    assert "light" in invoke("theme").stdout

    result = invoke("theme", "dark")

    assert result.exit_code == 0
    assert open_default_store().load_theme().dark
    assert "dark" in invoke("theme").stdout


def test_theme_survives_board_changes():
    invoke("theme", "dark")

    add("todo", "After theme")

    assert open_default_store().load_theme().dark


def test_theme_invalid():
    result = invoke("theme", "sepia")

    assert result.exit_code == 1


def test_no_command_launches_repl():
    result = invoke(input="exit\n")

    assert result.exit_code == 0, result.output
    assert "Taskboard REPL" in result.stdout
    assert "Goodbye!" in result.stdout
