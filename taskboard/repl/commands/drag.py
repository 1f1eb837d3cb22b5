"""
FILE: taskboard/repl/commands/drag.py
PURPOSE: Drag gesture handlers for REPL (grab, hover, drop, release)
NOTES:
  - grab picks up a task, hover shows where it would land,
    drop commits, release lets go without moving anything
  - Targets are a column (append) or a task (take its place)
  - Only drop changes the board
"""

from rich.markup import escape

from ..parser import ParseResult
from ..session import ReplSession
from ...core.exceptions import TaskboardError
from ...formatting import short_id
from ...utils import find_column, find_task_or_raise
from .tasks import print_error


def _resolve_over_id(session: ReplSession, ref: str) -> str:
    """
    Id under the pointer for a typed target.

    A column id/title gives the column id, a task ref gives the full task id.
    Anything else comes back unchanged and drops as a no-op.
    """
    column = find_column(session.board, ref)
    if column is not None:
        return column.id
    try:
        _, _, task = find_task_or_raise(session.board, ref)
    except TaskboardError:
        return ref
    return task.id


def handle_grab_command(result: ParseResult, session: ReplSession) -> None:
    """
    Handle 'grab' command - pick up a task.

    Usage:
        grab 123456
    """
    if not result.args:
        session.console.print("[red]Error:[/red] Usage: grab <id>")
        return

    try:
        column, _, task = find_task_or_raise(session.board, result.args[0])
    except TaskboardError as e:
        print_error(session, e)
        return

    session.drag.begin(task.id)
    session.console.print(
        f"[cyan]Holding #{short_id(task.id)}[/cyan] from {escape(column.title)}. "
        "[dim]hover/drop <column|id> to place it, release to let go[/dim]"
    )


def handle_hover_command(result: ParseResult, session: ReplSession) -> None:
    """
    Handle 'hover' command - preview a drop target.

    Usage:
        hover review
        hover 654321
    """
    if not session.drag.is_dragging:
        session.console.print("[dim]Nothing grabbed. Use 'grab <id>' first[/dim]")
        return
    if not result.args:
        session.drag.hover(None)
        session.console.print("[dim]Not over anything[/dim]")
        return

    ref = " ".join(result.args)
    column = find_column(session.board, ref)
    if column is not None:
        session.drag.hover(column.id)
        session.console.print(f"[cyan]Over {escape(column.title)}[/cyan] (end of column)")
        return

    try:
        column, index, task = find_task_or_raise(session.board, ref)
    except TaskboardError as e:
        print_error(session, e)
        return

    session.drag.hover(column.id, index)
    session.console.print(f"[cyan]Over #{short_id(task.id)}[/cyan] in {escape(column.title)} (position {index + 1})")


def handle_drop_command(result: ParseResult, session: ReplSession) -> None:
    """
    Handle 'drop' command - finish the drag.

    Usage:
        drop review        # drop on a column
        drop 654321        # drop on a task
        drop               # drop where you last hovered
    """
    if not session.drag.is_dragging:
        session.console.print("[dim]Nothing grabbed. Use 'grab <id>' first[/dim]")
        return

    task_id = session.drag.active_task_id
    if result.args:
        board = session.drag.drop(session.board, _resolve_over_id(session, " ".join(result.args)))
    else:
        target = session.drag.hover_target
        if target is None:
            board = session.drag.commit(session.board, task_id, None)
        else:
            board = session.drag.commit(session.board, task_id, target.column_id, target.index)

    if not session.apply(board):
        session.console.print(f"[dim]Dropped #{short_id(task_id)}; nothing moved[/dim]")
        return

    column, index, _ = session.board.find_task(task_id)
    session.console.print(
        f"[green]✓ Dropped [bold]#{short_id(task_id)}[/bold] in {escape(column.title)} at position {index + 1}[/green]"
    )


def handle_release_command(result: ParseResult, session: ReplSession) -> None:
    """
    Handle 'release' command - let go outside any target.

    Usage:
        release
    """
    if not session.drag.is_dragging:
        session.console.print("[dim]Nothing grabbed[/dim]")
        return
    task_id = session.drag.active_task_id
    session.apply(session.drag.drop(session.board, None))
    session.console.print(f"[dim]Released #{short_id(task_id)}; nothing moved[/dim]")
