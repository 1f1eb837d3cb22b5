"""
FILE: taskboard/cli/commands/system.py
PURPOSE: System commands (version, repl)
"""

import typer
from rich.markup import escape

# Import shared objects from main module
# These will be available after main.py imports this module
from ..main import app, console, error_console, __version__
from ...core.exceptions import TaskboardError


@app.command()
def version():
    """Show Taskboard version."""
    console.print(f"Taskboard v{__version__}")


@app.command()
def repl():
    """
    Launch interactive REPL mode.

    The REPL keeps the board in memory for the session:
    - Command history (up/down arrows)
    - Autocomplete (Tab key) for commands, columns and task ids
    - Drag-style moves (grab / hover / drop)
    - Changes are written only when you type 'save'
    - Exit with Ctrl+D or type 'exit'

    Example:
        taskboard repl
    """
    # Import here to avoid loading REPL dependencies for one-shot commands
    from ...repl import main as repl_main

    try:
        repl_main()
    except TaskboardError as e:
        error_console.print(f"[red]Error starting REPL:[/red] {escape(str(e))}")
        raise typer.Exit(1)
