"""
FILE: taskboard/repl/commands/board.py
PURPOSE: Board-wide command handlers for REPL
  (ls, stats, export, clear, collapse, expand, theme, save)
"""

import json
from pathlib import Path

from rich.markup import escape

from ..parser import ParseResult
from ..session import ReplSession
from ...core import engine
from ...core.analytics import compute_analytics
from ...core.constants import THEME_DARK, THEME_LIGHT
from ...core.exceptions import TaskboardError
from ...core.export import default_export_filename, render_csv
from ...core.store import ThemePreference
from ...formatting import BoardFormatter
from ...utils import find_column_or_raise
from .tasks import print_error


def ask_confirmation(prompt: str) -> bool:
    """Yes/no question on stdin; anything but y/yes means no."""
    try:
        answer = input(f"{prompt} [y/N]: ").strip().lower()
    except EOFError:
        return False
    return answer in ("y", "yes")


def handle_ls_command(result: ParseResult, session: ReplSession) -> None:
    """
    Handle 'ls' command - show the board, or one column in detail.

    Usage:
        ls
        ls done
        ls --json
    """
    if result.flags.get("json"):
        session.console.print_json(BoardFormatter.board_to_json(session.board))
        return

    if result.args:
        try:
            column = find_column_or_raise(session.board, " ".join(result.args))
        except TaskboardError as e:
            print_error(session, e)
            return
        session.console.print(BoardFormatter.create_column_table(column))
        return

    session.console.print(BoardFormatter.create_board_table(session.board, collapsed=session.collapsed))


def handle_stats_command(result: ParseResult, session: ReplSession) -> None:
    """
    Handle 'stats' command - show board analytics.

    Usage:
        stats
        stats --json
    """
    analytics = compute_analytics(session.board)
    if result.flags.get("json"):
        session.console.print_json(json.dumps(analytics.to_dict()))
        return
    session.console.print(BoardFormatter.analytics_panel(analytics))


def handle_export_command(result: ParseResult, session: ReplSession) -> None:
    """
    Handle 'export' command - write the board as CSV.

    Usage:
        export                  # project-tasks-<date>.csv
        export tasks.csv
    """
    path = Path(result.args[0]) if result.args else Path(default_export_filename())
    try:
        path.write_text(render_csv(session.board), encoding="utf-8")
    except OSError as e:
        session.console.print(f"[red]Error:[/red] Could not write {escape(str(path))}: {escape(str(e))}")
        return
    session.console.print(f"[green]✓ Exported board to[/green] {escape(str(path))}")


def handle_clear_command(result: ParseResult, session: ReplSession) -> None:
    """
    Handle 'clear' command - delete every task, keeping the columns.

    Usage:
        clear
        clear --yes
    """
    if not result.flags.get("yes") and not ask_confirmation("Delete ALL tasks from every column?"):
        session.console.print("[dim]Cancelled[/dim]")
        return

    session.drag.cancel()
    session.apply(engine.clear_all_tasks(session.board))
    session.console.print("[green]✓ All tasks cleared[/green]")


def _collapse_target(result: ParseResult, session: ReplSession):
    """Column id named by the command, "all", or None after printing an error."""
    if not result.args:
        session.console.print(f"[red]Error:[/red] Usage: {result.command} <column>|all")
        return None
    ref = " ".join(result.args)
    if ref.lower() == "all":
        return "all"
    try:
        return find_column_or_raise(session.board, ref).id
    except TaskboardError as e:
        print_error(session, e)
        return None


def handle_collapse_command(result: ParseResult, session: ReplSession) -> None:
    """
    Handle 'collapse' command - fold columns in the board view.

    Usage:
        collapse done
        collapse all          # every column except To Do
    """
    target = _collapse_target(result, session)
    if target is None:
        return
    if target == "all":
        session.collapse_all()
        session.console.print("[green]✓ Collapsed all columns except To Do[/green]")
        return
    session.collapsed.add(target)
    session.console.print(f"[green]✓ Collapsed {escape(target)}[/green]")


def handle_expand_command(result: ParseResult, session: ReplSession) -> None:
    """
    Handle 'expand' command - unfold columns in the board view.

    Usage:
        expand done
        expand all
    """
    target = _collapse_target(result, session)
    if target is None:
        return
    if target == "all":
        session.expand_all()
        session.console.print("[green]✓ Expanded all columns[/green]")
        return
    session.collapsed.discard(target)
    session.console.print(f"[green]✓ Expanded {escape(target)}[/green]")


def handle_theme_command(result: ParseResult, session: ReplSession) -> None:
    """
    Handle 'theme' command - show, set or toggle light/dark.

    Usage:
        theme
        theme dark
        theme toggle
    """
    if not result.args:
        session.console.print(f"Theme: [cyan]{session.theme.name}[/cyan]")
        return

    name = result.args[0].lower()
    if name == "toggle":
        session.set_theme(session.theme.toggled())
    elif name in (THEME_LIGHT, THEME_DARK):
        session.set_theme(ThemePreference.from_name(name))
    else:
        session.console.print(f"[red]Error:[/red] Invalid theme '{escape(name)}'")
        session.console.print("[dim]Valid themes: light, dark, toggle[/dim]")
        return

    session.console.print(f"[green]✓ Theme set to {session.theme.name}[/green]")


def handle_save_command(result: ParseResult, session: ReplSession) -> None:
    """
    Handle 'save' command - write board and theme to the store.

    Usage:
        save
    """
    try:
        session.save()
    except TaskboardError as e:
        print_error(session, e)
        return
    session.console.print("[green]✓ Board saved[/green]")
