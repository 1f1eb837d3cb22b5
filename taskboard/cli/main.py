"""
FILE: taskboard/cli/main.py
PURPOSE: Typer-based CLI for one-shot board commands
EXPORTS:
  - app (Typer application)
  - main() (entry point)
  - console, error_console (Rich consoles shared by command modules)
  - open_store() - Snapshot store used by commands
  - persist(store, board) - Save board (and theme) or exit with an error
  - exit_with_error(e) - Print a TaskboardError and exit 1
  - version() - Show version
  - repl() - Launch interactive REPL
  - add() - Create a task in a column
  - edit() - Update a task's fields
  - rm() - Delete a task
  - mv() - Move or reorder a task
  - show() - View full task details
  - ls() - Show the board
  - stats() - Show analytics
  - export() - Export the board as CSV
  - clear() - Delete every task
  - theme() - Show or change the light/dark preference
DEPENDENCIES:
  - typer (CLI framework)
  - rich (formatted output)
  - taskboard.core (engine, store, analytics)
  - taskboard.repl (interactive mode)
NOTES:
  - Every command loads the saved board, applies one change, and saves it back
  - Commands that change nothing don't write
  - Error messages go to stderr
  - Exit codes: 0=success, 1=error
  - --verbose turns on debug logging (stderr)
"""

import logging
import sys
from typing import NoReturn

# Fix Windows console encoding for Unicode characters
if sys.platform == "win32":
    import io
    sys.stdout = io.TextIOWrapper(sys.stdout.buffer, encoding='utf-8')
    sys.stderr = io.TextIOWrapper(sys.stderr.buffer, encoding='utf-8')

import typer
from rich.console import Console
from rich.markup import escape

from .. import __version__
from ..core.exceptions import TaskboardError, ValidationError
from ..core.models import Board
from ..core.store import SnapshotStore, open_default_store

# Typer app setup
app = typer.Typer(
    name="taskboard",
    help="Terminal kanban board with deadline-aware columns",
    add_completion=False,
)

# Rich console for formatted output
console = Console()
error_console = Console(stderr=True)


def configure_logging(verbose: bool) -> None:
    """Send log records to stderr; DEBUG when verbose, else WARNING."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def open_store() -> SnapshotStore:
    """Snapshot store for this invocation (honours $TASKBOARD_HOME)."""
    return open_default_store()


def exit_with_error(e: TaskboardError) -> NoReturn:
    """Print an error (with field details for validation failures) and exit 1."""
    if isinstance(e, ValidationError):
        error_console.print("[red]Error:[/red] Task not saved")
        for field, message in e.errors.items():
            error_console.print(f"  [yellow]{escape(field)}[/yellow]: {escape(message)}")
    else:
        error_console.print(f"[red]Error:[/red] {escape(str(e))}")
    raise typer.Exit(1)


def persist(store: SnapshotStore, board: Board) -> None:
    """Save the board together with the current theme preference."""
    try:
        store.save(board, store.load_theme())
    except TaskboardError as e:
        exit_with_error(e)


@app.callback(invoke_without_command=True)
def default_command(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
):
    """
    Default callback - launches REPL when no command is specified.

    If a subcommand is invoked, this only sets up logging.
    If no subcommand is invoked (just 'taskboard'), launch the REPL.
    """
    configure_logging(verbose)

    if ctx.invoked_subcommand is None:
        from ..repl import main as repl_main
        try:
            repl_main()
        except TaskboardError as e:
            error_console.print(f"[red]Error starting REPL:[/red] {escape(str(e))}")
            raise typer.Exit(1)


# Import command modules to register commands with app
# Commands are decorated with @app.command() in their modules
from .commands import (
    # System commands
    version,
    repl,
    # Task commands
    add,
    edit,
    rm,
    mv,
    show,
    # Board commands
    ls,
    stats,
    export,
    clear,
    theme,
)


def main():
    """Main entry point for CLI."""
    app()


if __name__ == "__main__":
    main()
