"""
FILE: taskboard/cli/commands/tasks.py
PURPOSE: Task commands (add, edit, rm, mv, show)
"""

from dataclasses import replace
from typing import Optional

import typer
from rich.markup import escape

from ..main import app, console, error_console, open_store, persist, exit_with_error
from ...core import engine
from ...core.dates import parse_deadline
from ...core.exceptions import TaskboardError
from ...core.models import TaskPatch
from ...formatting import BoardFormatter, build_theme, short_id
from ...utils import find_column_or_raise, find_task_or_raise, parse_position


@app.command()
def add(
    column: str = typer.Argument(..., help="Column id or title (e.g. todo, \"In Progress\")"),
    title: str = typer.Option("", "--title", "-t", help="Task title"),
    description: str = typer.Option("", "--description", "-d", help="Task description"),
    deadline: Optional[str] = typer.Option(None, "--deadline", "-D", help="YYYY-MM-DD [HH:MM]"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Create a new task.

    Title, description and deadline are all required; a deadline given as a
    date only is due at noon.

    Example:
        taskboard add todo -t "Write docs" -d "Usage section" -D 2025-03-01
        taskboard add review -t "Check PR" -d "API changes" -D "2025-03-01 17:30"
    """
    store = open_store()
    board = store.load()

    try:
        target = find_column_or_raise(board, column)
        patch = TaskPatch(title=title, description=description, deadline=parse_deadline(deadline))

        # Create the draft, then save the entered fields onto it.
        # If validation fails nothing is written, so the draft is discarded.
        board, draft = engine.add_task(board, target.id)
        board = engine.update_task(board, target.id, draft.id, patch)
    except TaskboardError as e:
        exit_with_error(e)

    persist(store, board)

    _, _, task = board.find_task(draft.id)
    if json_output:
        console.print_json(task.to_json())
    else:
        console.print(
            f"[green]✓ Created task [bold]#{short_id(task.id)}[/bold] in {escape(target.title)}:[/green] {escape(task.title)}"
        )


@app.command()
def edit(
    task_ref: str = typer.Argument(..., help="Task id (or the short id shown by ls)"),
    title: Optional[str] = typer.Option(None, "--title", "-t", help="New title"),
    description: Optional[str] = typer.Option(None, "--description", "-d", help="New description"),
    deadline: Optional[str] = typer.Option(None, "--deadline", "-D", help="New deadline YYYY-MM-DD [HH:MM]"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Update a task. Fields not given keep their current value.

    Example:
        taskboard edit 123456 --title "Write better docs"
        taskboard edit 123456 -D "2025-04-01 09:00"
    """
    store = open_store()
    board = store.load()

    try:
        column, _, task = find_task_or_raise(board, task_ref)
        patch = TaskPatch.from_task(task)
        if title is not None:
            patch = replace(patch, title=title)
        if description is not None:
            patch = replace(patch, description=description)
        if deadline is not None:
            patch = replace(patch, deadline=parse_deadline(deadline))

        board = engine.update_task(board, column.id, task.id, patch)
    except TaskboardError as e:
        exit_with_error(e)

    persist(store, board)

    _, _, updated = board.find_task(task.id)
    if json_output:
        console.print_json(updated.to_json())
    else:
        console.print(f"[green]✓ Updated task [bold]#{short_id(updated.id)}[/bold]:[/green] {escape(updated.title)}")


@app.command()
def rm(
    task_ref: str = typer.Argument(..., help="Task id (or short id)"),
):
    """
    Delete a task permanently.

    Example:
        taskboard rm 123456
    """
    store = open_store()
    board = store.load()

    try:
        column, _, task = find_task_or_raise(board, task_ref)
    except TaskboardError as e:
        exit_with_error(e)

    persist(store, engine.delete_task(board, column.id, task.id))
    console.print(f"[green]✓ Deleted task [bold]#{short_id(task.id)}[/bold]:[/green] {escape(task.title)}")


@app.command()
def mv(
    task_ref: str = typer.Argument(..., help="Task id (or short id)"),
    column: str = typer.Argument(..., help="Target column id or title"),
    position: Optional[int] = typer.Option(
        None, "--position", "-p", help="1-based position when reordering within the same column"
    ),
):
    """
    Move a task to another column, or reorder it within its column.

    Moving to another column re-sorts that column by deadline.
    Reordering within a column keeps your order.

    Example:
        taskboard mv 123456 in-progress
        taskboard mv 123456 todo --position 1
    """
    store = open_store()
    board = store.load()

    try:
        source, _, task = find_task_or_raise(board, task_ref)
        target = find_column_or_raise(board, column)
        index = parse_position(str(position)) if position is not None else None
    except ValueError as e:
        error_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    except TaskboardError as e:
        exit_with_error(e)

    try:
        moved = engine.move_task(board, task.id, target.id, index)
    except TaskboardError as e:
        exit_with_error(e)

    if moved is board:
        console.print(f"[dim]Task #{short_id(task.id)} is already there[/dim]")
        return

    persist(store, moved)
    if source.id == target.id:
        _, new_index, _ = moved.find_task(task.id)
        console.print(f"[green]✓ Reordered [bold]#{short_id(task.id)}[/bold] to position {new_index + 1}[/green]")
    else:
        console.print(f"[green]✓ Moved [bold]#{short_id(task.id)}[/bold] to {escape(target.title)}[/green]")


@app.command()
def show(
    task_ref: str = typer.Argument(..., help="Task id (or short id)"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    View full task details.

    Example:
        taskboard show 123456
    """
    store = open_store()
    board = store.load()

    try:
        column, _, task = find_task_or_raise(board, task_ref)
    except TaskboardError as e:
        exit_with_error(e)

    if json_output:
        console.print_json(task.to_json())
        return

    with console.use_theme(build_theme(store.load_theme())):
        console.print(BoardFormatter.task_panel(task, column))
