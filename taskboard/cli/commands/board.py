"""
FILE: taskboard/cli/commands/board.py
PURPOSE: Board-wide commands (ls, stats, export, clear, theme)
"""

import json
from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape

from ..main import app, console, error_console, open_store, persist, exit_with_error
from ...core import engine
from ...core.analytics import compute_analytics
from ...core.constants import THEME_DARK, THEME_LIGHT
from ...core.export import default_export_filename, render_csv
from ...core.exceptions import TaskboardError
from ...core.store import ThemePreference
from ...formatting import BoardFormatter, build_theme
from ...utils import find_column_or_raise


@app.command()
def ls(
    column: Optional[str] = typer.Option(None, "--column", "-c", help="Show one column in detail"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Show the board.

    Example:
        taskboard ls
        taskboard ls --column done
        taskboard ls --json
    """
    store = open_store()
    board = store.load()

    if json_output:
        console.print_json(BoardFormatter.board_to_json(board))
        return

    with console.use_theme(build_theme(store.load_theme())):
        if column:
            try:
                selected = find_column_or_raise(board, column)
            except TaskboardError as e:
                exit_with_error(e)
            console.print(BoardFormatter.create_column_table(selected))
        else:
            console.print(BoardFormatter.create_board_table(board))


@app.command()
def stats(
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Show board analytics (progress, deadlines, productivity).

    Example:
        taskboard stats
        taskboard stats --json
    """
    store = open_store()
    analytics = compute_analytics(store.load())

    if json_output:
        console.print_json(json.dumps(analytics.to_dict()))
        return

    with console.use_theme(build_theme(store.load_theme())):
        console.print(BoardFormatter.analytics_panel(analytics))


@app.command()
def export(
    output: Optional[str] = typer.Option(
        None, "--output", "-o", help="CSV file to write ('-' for stdout, default project-tasks-<date>.csv)"
    ),
):
    """
    Export every task as CSV (column, id, title, description, deadline).

    Example:
        taskboard export
        taskboard export -o tasks.csv
        taskboard export -o -
    """
    content = render_csv(open_store().load())

    if output == "-":
        typer.echo(content, nl=False)
        return

    path = Path(output) if output else Path(default_export_filename())
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        error_console.print(f"[red]Error:[/red] Could not write {escape(str(path))}: {escape(str(e))}")
        raise typer.Exit(1)

    console.print(f"[green]✓ Exported board to[/green] {escape(str(path))}")


@app.command()
def clear(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
):
    """
    Delete every task. Columns stay.

    Example:
        taskboard clear
        taskboard clear --yes
    """
    if not yes:
        typer.confirm("Delete ALL tasks from every column?", abort=True)

    store = open_store()
    board = store.load()
    cleared = engine.clear_all_tasks(board)

    if cleared is not board:
        persist(store, cleared)
    console.print("[green]✓ All tasks cleared[/green]")


@app.command()
def theme(
    name: Optional[str] = typer.Argument(None, help="light or dark (omit to show current)"),
):
    """
    Show or change the color theme.

    Example:
        taskboard theme
        taskboard theme dark
    """
    store = open_store()

    if name is None:
        console.print(f"Theme: {store.load_theme().name}")
        return

    if name.lower() not in (THEME_LIGHT, THEME_DARK):
        error_console.print(f"[red]Error:[/red] Invalid theme '{escape(name)}'. Must be one of: light, dark")
        raise typer.Exit(1)

    preference = ThemePreference.from_name(name)
    try:
        store.save_theme(preference)
    except TaskboardError as e:
        exit_with_error(e)

    console.print(f"[green]✓ Theme set to {preference.name}[/green]")
