"""
FILE: taskboard/repl/commands/tasks.py
PURPOSE: Task command handlers for REPL (add, edit, cancel, rm, mv, show)
NOTES:
  - Handlers change session.board only; 'save' writes to disk
  - A task left in editing state stays on the board until edited or cancelled
"""

from dataclasses import replace

from rich.markup import escape

from ..parser import ParseResult
from ..session import ReplSession
from ...core import engine
from ...core.dates import parse_deadline
from ...core.exceptions import TaskboardError, ValidationError
from ...core.models import TaskPatch
from ...formatting import BoardFormatter, short_id
from ...utils import find_column_or_raise, find_task_or_raise, parse_position, parse_task_ids


FIELD_FLAGS = ("title", "description", "deadline")


def print_error(session: ReplSession, e: TaskboardError) -> None:
    """Show an error; validation failures list each field."""
    if isinstance(e, ValidationError):
        session.console.print("[red]Error:[/red] Task not saved")
        for name, message in e.errors.items():
            session.console.print(f"  [yellow]{escape(name)}[/yellow]: {escape(message)}")
    else:
        session.console.print(f"[red]Error:[/red] {escape(str(e))}")


def _patch_from_flags(result: ParseResult, patch: TaskPatch) -> TaskPatch:
    """Overlay --title/--description/--deadline onto a patch."""
    title = result.flag_text("title")
    if title is not None:
        patch = replace(patch, title=title)
    description = result.flag_text("description")
    if description is not None:
        patch = replace(patch, description=description)
    deadline = result.flag_text("deadline")
    if deadline is not None:
        patch = replace(patch, deadline=parse_deadline(deadline))
    return patch


def handle_add_command(result: ParseResult, session: ReplSession) -> None:
    """
    Handle 'add' command - start a new task in a column.

    Usage:
        add todo                                   # empty draft, fill in with edit
        add todo -t "Write docs" -d "Usage" -D 2025-03-01
    """
    if not result.args:
        session.console.print("[red]Error:[/red] Usage: add <column> [--title T] [--description D] [--deadline WHEN]")
        return

    try:
        column = find_column_or_raise(session.board, result.args[0])
    except TaskboardError as e:
        print_error(session, e)
        return

    board, draft = engine.add_task(session.board, column.id)
    session.apply(board)

    if not any(name in result.flags for name in FIELD_FLAGS):
        session.console.print(
            f"[green]✓ Draft [bold]#{short_id(draft.id)}[/bold] added to {escape(column.title)}[/green]"
        )
        session.console.print(
            f"[dim]Fill it in with: edit {short_id(draft.id)} --title ... --description ... --deadline ...[/dim]"
        )
        return

    try:
        patch = _patch_from_flags(result, TaskPatch.from_task(draft))
        session.apply(engine.update_task(session.board, column.id, draft.id, patch))
    except TaskboardError as e:
        print_error(session, e)
        session.console.print(
            f"[dim]Draft #{short_id(draft.id)} is still open: 'edit {short_id(draft.id)} ...' "
            f"to fix it or 'cancel {short_id(draft.id)}' to drop it[/dim]"
        )
        return

    _, _, task = session.board.find_task(draft.id)
    session.console.print(
        f"[green]✓ Created task [bold]#{short_id(task.id)}[/bold] in {escape(column.title)}:[/green] {escape(task.title)}"
    )


def handle_edit_command(result: ParseResult, session: ReplSession) -> None:
    """
    Handle 'edit' command - save new field values onto a task.

    Usage:
        edit 123456 --title "New title"
        edit 123456 -D "2025-04-01 09:00"
        edit 123456                         # reopen for editing
    """
    if not result.args:
        session.console.print("[red]Error:[/red] Usage: edit <id> [--title T] [--description D] [--deadline WHEN]")
        return

    try:
        column, _, task = find_task_or_raise(session.board, result.args[0])
    except TaskboardError as e:
        print_error(session, e)
        return

    if not any(name in result.flags for name in FIELD_FLAGS):
        session.apply(engine.begin_edit(session.board, column.id, task.id))
        session.console.print(f"[dim]Editing #{short_id(task.id)}; give --title, --description or --deadline[/dim]")
        return

    try:
        patch = _patch_from_flags(result, TaskPatch.from_task(task))
        session.apply(engine.update_task(session.board, column.id, task.id, patch))
    except TaskboardError as e:
        print_error(session, e)
        return

    _, _, updated = session.board.find_task(task.id)
    session.console.print(f"[green]✓ Updated task [bold]#{short_id(updated.id)}[/bold]:[/green] {escape(updated.title)}")


def handle_cancel_command(result: ParseResult, session: ReplSession) -> None:
    """
    Handle 'cancel' command - abandon editing a task.

    An empty draft is removed; a saved task keeps its content.

    Usage:
        cancel 123456
    """
    if not result.args:
        session.console.print("[red]Error:[/red] Usage: cancel <id>")
        return

    try:
        column, _, task = find_task_or_raise(session.board, result.args[0])
    except TaskboardError as e:
        print_error(session, e)
        return

    before = session.board
    session.apply(engine.cancel_edit(before, column.id, task.id))

    if session.board.find_task(task.id) is None:
        session.console.print(f"[green]✓ Discarded draft #{short_id(task.id)}[/green]")
    elif session.board is not before:
        session.console.print(f"[green]✓ Stopped editing #{short_id(task.id)}[/green]")
    else:
        session.console.print(f"[dim]Task #{short_id(task.id)} isn't being edited[/dim]")


def handle_rm_command(result: ParseResult, session: ReplSession) -> None:
    """
    Handle 'rm' command - delete one or more tasks.

    Usage:
        rm 123456
        rm 123456,654321
    """
    if not result.args:
        session.console.print("[red]Error:[/red] Usage: rm <id>[,<id>...]")
        return

    for ref in parse_task_ids(result.args[0]):
        try:
            column, _, task = find_task_or_raise(session.board, ref)
        except TaskboardError as e:
            print_error(session, e)
            continue

        session.apply(engine.delete_task(session.board, column.id, task.id))
        session.console.print(f"[green]✓ Deleted task [bold]#{short_id(task.id)}[/bold]:[/green] {escape(task.title)}")


def handle_mv_command(result: ParseResult, session: ReplSession) -> None:
    """
    Handle 'mv' command - move a task to a column or reorder it.

    Usage:
        mv 123456 review
        mv 123456 todo --position 1
    """
    if len(result.args) < 2:
        session.console.print("[red]Error:[/red] Usage: mv <id> <column> [--position N]")
        return

    position = result.flags.get("position")
    try:
        source, _, task = find_task_or_raise(session.board, result.args[0])
        target = find_column_or_raise(session.board, " ".join(result.args[1:]))
        index = parse_position(position) if isinstance(position, str) else None
    except ValueError as e:
        session.console.print(f"[red]Error:[/red] {escape(str(e))}")
        return
    except TaskboardError as e:
        print_error(session, e)
        return

    if not session.apply(engine.move_task(session.board, task.id, target.id, index)):
        session.console.print(f"[dim]Task #{short_id(task.id)} is already there[/dim]")
        return

    if source.id == target.id:
        _, new_index, _ = session.board.find_task(task.id)
        session.console.print(f"[green]✓ Reordered [bold]#{short_id(task.id)}[/bold] to position {new_index + 1}[/green]")
    else:
        session.console.print(f"[green]✓ Moved [bold]#{short_id(task.id)}[/bold] to {escape(target.title)}[/green]")


def handle_show_command(result: ParseResult, session: ReplSession) -> None:
    """
    Handle 'show' command - view full task details.

    Usage:
        show 123456
        show 123456 --json
    """
    if not result.args:
        session.console.print("[red]Error:[/red] Usage: show <id>")
        return

    try:
        column, _, task = find_task_or_raise(session.board, result.args[0])
    except TaskboardError as e:
        print_error(session, e)
        return

    if result.flags.get("json"):
        session.console.print_json(task.to_json())
        return

    session.console.print(BoardFormatter.task_panel(task, column))
