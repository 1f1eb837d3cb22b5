"""
FILE: taskboard/repl/commands/system.py
PURPOSE: System command handlers for REPL (help, exit)
"""

from ..parser import ParseResult
from ..session import ReplSession


HELP_TEXT = """
[bold cyan]Tasks:[/bold cyan]

  [cyan]add <column> [-t T] [-d D] [-D WHEN][/cyan]   Start a task (all three fields save it)
  [cyan]edit <id> [-t T] [-d D] [-D WHEN][/cyan]      Change a task's fields
  [cyan]cancel <id>[/cyan]                            Stop editing (empty drafts are removed)
  [cyan]rm <id>[,<id>...][/cyan]                      Delete task(s)
  [cyan]mv <id> <column> [-p N][/cyan]                Move a task, or reorder it within its column
  [cyan]show <id> [--json][/cyan]                     View full task details

[bold cyan]Drag:[/bold cyan]

  [cyan]grab <id>[/cyan]                              Pick up a task
  [cyan]hover <column|id>[/cyan]                      Preview where it would land
  [cyan]drop [<column|id>][/cyan]                     Drop it (on a column, a task, or the hover target)
  [cyan]release[/cyan]                                Let go without moving

[bold cyan]Board:[/bold cyan]

  [cyan]ls [<column>] [--json][/cyan]                 Show the board or one column
  [cyan]stats [--json][/cyan]                         Progress, deadlines and productivity
  [cyan]export [<file>][/cyan]                        Write tasks as CSV
  [cyan]clear [--yes][/cyan]                          Delete every task
  [cyan]collapse <column>|all[/cyan]                  Fold columns (all keeps To Do open)
  [cyan]expand <column>|all[/cyan]                    Unfold columns
  [cyan]theme [light|dark|toggle][/cyan]              Show or change the color theme
  [cyan]save[/cyan]                                   Write board and theme to disk
  [cyan]help[/cyan]                                   Show this help
  [cyan]exit[/cyan] or [cyan]quit[/cyan]                          Exit REPL

[bold cyan]Deadlines:[/bold cyan]

  [dim]2025-03-01          (due at noon)
  "2025-03-01 17:30"
  2025-03-01T17:30[/dim]

[bold cyan]Examples:[/bold cyan]

  [dim]add todo -t "Write docs" -d "Usage section" -D 2025-03-01
  mv 123456 in-progress
  grab 123456
  drop review
  save[/dim]
"""


def handle_help_command(result: ParseResult, session: ReplSession) -> None:
    """Handle 'help' command - show available commands."""
    session.console.print(HELP_TEXT)


def handle_exit_command(result: ParseResult, session: ReplSession) -> bool:
    """
    Handle 'exit'/'quit'.

    With unsaved changes the first exit only warns; a second exit quits.

    Returns:
        True if the REPL should stop
    """
    if session.dirty and not session.exit_warned:
        session.exit_warned = True
        session.console.print("[yellow]You have unsaved changes.[/yellow] Type 'save', or 'exit' again to discard them")
        return False
    session.console.print("[dim]Goodbye![/dim]")
    return True
