"""
FILE: taskboard/repl/main.py
PURPOSE: Interactive REPL for the board with prompt-toolkit
EXPORTS:
  - main() - Entry point for REPL mode
  - run_repl(session) - Main REPL loop
  - execute_command(result, session) -> bool
  - format_prompt(session), get_bottom_toolbar(session)
DEPENDENCIES:
  - prompt_toolkit (REPL interface, history, completion)
  - rich (formatted output)
  - taskboard.core (store, analytics)
  - taskboard.repl.parser, completer, session, commands
NOTES:
  - The board lives in a ReplSession for the whole run; 'save' writes it
  - Bottom toolbar shows per-column counts, overdue tasks and unsaved state
  - Prompt shows the task being dragged
  - Ctrl+D or "exit"/"quit" to exit
  - Falls back to plain input() without a TTY
"""

import logging
import sys
from typing import Callable, Dict, Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.formatted_text import HTML
from prompt_toolkit.history import InMemoryHistory
from rich.markup import escape

from ..core.analytics import compute_analytics
from ..core.exceptions import TaskboardError
from ..core.store import open_default_store
from .completer import create_completer
from .parser import ParseResult, parse_command
from .session import ReplSession
from .commands import (
    # Task handlers
    handle_add_command,
    handle_edit_command,
    handle_cancel_command,
    handle_rm_command,
    handle_mv_command,
    handle_show_command,
    # Board handlers
    handle_ls_command,
    handle_stats_command,
    handle_export_command,
    handle_clear_command,
    handle_collapse_command,
    handle_expand_command,
    handle_theme_command,
    handle_save_command,
    # Drag handlers
    handle_grab_command,
    handle_hover_command,
    handle_drop_command,
    handle_release_command,
    # System handlers
    handle_help_command,
    handle_exit_command,
)


logger = logging.getLogger(__name__)


HANDLERS: Dict[str, Callable[[ParseResult, ReplSession], None]] = {
    "add": handle_add_command,
    "edit": handle_edit_command,
    "cancel": handle_cancel_command,
    "rm": handle_rm_command,
    "mv": handle_mv_command,
    "show": handle_show_command,
    "view": handle_show_command,
    "ls": handle_ls_command,
    "stats": handle_stats_command,
    "export": handle_export_command,
    "clear": handle_clear_command,
    "collapse": handle_collapse_command,
    "expand": handle_expand_command,
    "theme": handle_theme_command,
    "save": handle_save_command,
    "grab": handle_grab_command,
    "hover": handle_hover_command,
    "drop": handle_drop_command,
    "release": handle_release_command,
    "help": handle_help_command,
}


def format_prompt(session: ReplSession) -> HTML:
    """
    Prompt with unsaved marker and drag state.

    Returns:
        HTML prompt: "board> ", "board*> " or "board:[dragging 123456]> "
    """
    marker = "<yellow>*</yellow>" if session.dirty else ""
    if session.drag.is_dragging:
        held = session.drag.active_task_id[-6:]
        return HTML(f"<b>board{marker}:[<cyan>dragging {{}}</cyan>]&gt; </b>").format(held)
    return HTML(f"<b>board{marker}&gt; </b>")


def get_bottom_toolbar(session: ReplSession) -> HTML:
    """Per-column counts, overdue tasks and save state."""
    analytics = compute_analytics(session.board)
    counts = " | ".join(
        f"{column.title} {len(column.visible_tasks())}" for column in session.board.columns
    )
    text = f"{counts} | {analytics.overdue_tasks} overdue"
    if session.dirty:
        text += " | unsaved"
    return HTML("<style bg='#444444' fg='#ffffff'> {} </style>").format(text)


def execute_command(result: ParseResult, session: ReplSession) -> bool:
    """
    Execute a parsed command.

    Returns:
        True to continue REPL loop, False to exit
    """
    command = result.command

    if command in ("exit", "quit"):
        return not handle_exit_command(result, session)

    if not command:
        return True

    handler = HANDLERS.get(command)
    if handler:
        handler(result, session)
    else:
        session.console.print(f"[red]Unknown command:[/red] {escape(command)}")
        session.console.print("[dim]Type 'help' for available commands[/dim]")
    session.console.print()
    return True


def run_repl(session: Optional[ReplSession] = None) -> None:
    """
    Main REPL loop.

    Exits on:
    - Ctrl+D (EOFError)
    - "exit" or "quit" commands
    """
    session = session or ReplSession(open_default_store())

    has_tty = sys.stdin.isatty() and sys.stdout.isatty()
    prompt_session = None
    use_simple_input = not has_tty

    if has_tty:
        try:
            prompt_session = PromptSession(
                history=InMemoryHistory(),
                completer=create_completer(session),
                complete_while_typing=True,
                bottom_toolbar=lambda: get_bottom_toolbar(session),
            )
        except Exception as e:
            session.console.print(f"[yellow]Warning:[/yellow] Running in simple input mode: {escape(str(e))}")
            use_simple_input = True

    session.console.print("[bold cyan]Taskboard REPL[/bold cyan] - Type 'help' for commands, 'exit' to quit")
    if use_simple_input:
        session.console.print("[dim](Running in simple mode - no autocomplete)[/dim]")
    session.console.print()

    while True:
        user_input = ""
        try:
            if use_simple_input or prompt_session is None:
                user_input = input(session.get_prompt())
            else:
                user_input = prompt_session.prompt(lambda: format_prompt(session))

            if not execute_command(parse_command(user_input), session):
                break

        except KeyboardInterrupt:
            if session.drag.is_dragging:
                session.drag.cancel()
                session.console.print("[dim]^C Drag cancelled[/dim]")
            else:
                session.console.print("[dim]^C (Press Ctrl+D or type 'exit' to quit)[/dim]")
            continue
        except EOFError:
            session.console.print()
            if session.dirty:
                session.console.print("[yellow]Unsaved changes discarded[/yellow]")
            session.console.print("[dim]Goodbye![/dim]")
            break
        except TaskboardError as e:
            session.console.print(f"[red]Error:[/red] {escape(str(e))}")
        except Exception as e:
            logger.exception("Command failed: %s", user_input)
            session.console.print(f"[red]Unexpected error:[/red] {escape(str(e))}")


def main() -> None:
    """
    Entry point for REPL mode.

    Called when user runs: taskboard repl
    """
    run_repl()


if __name__ == "__main__":
    main()
