"""
FILE: taskboard/formatting.py
PURPOSE: Shared formatting utilities for CLI and REPL output
EXPORTS:
  - build_theme(preference) -> rich Theme
  - short_id(task_id) -> str
  - format_due(deadline, now) -> str
  - BoardFormatter: Class for rendering boards, tasks and analytics
DEPENDENCIES:
  - rich (tables, panels, themes)
  - json (for JSON serialization)
  - taskboard.core (models, analytics, dates, store.ThemePreference)
NOTES:
  - Centralized formatting logic for consistency
  - Used by both CLI and REPL
  - Drafts are never rendered (visibility rule)
  - Theme preference only swaps the rich palette
"""

import json
from datetime import datetime
from typing import Iterable, List, Optional

from rich.console import Group
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

from .core.analytics import Analytics
from .core.constants import COLUMN_DONE
from .core.dates import format_deadline
from .core.models import Board, Column, Task
from .core.store import ThemePreference


LIGHT_STYLES = {
    "column.title": "bold blue",
    "task.id": "cyan",
    "task.title": "black",
    "task.editing": "italic yellow",
    "task.overdue": "bold red",
    "task.due": "magenta",
    "task.early": "green",
    "muted": "dim",
}

DARK_STYLES = {
    "column.title": "bold bright_cyan",
    "task.id": "bright_cyan",
    "task.title": "bright_white",
    "task.editing": "italic bright_yellow",
    "task.overdue": "bold bright_red",
    "task.due": "bright_magenta",
    "task.early": "bright_green",
    "muted": "grey50",
}


def build_theme(preference: Optional[ThemePreference] = None) -> Theme:
    """Rich theme for the light or dark palette."""
    dark = preference.dark if preference else False
    return Theme(DARK_STYLES if dark else LIGHT_STYLES)


def short_id(task_id: str) -> str:
    """Last six characters of a task id - enough to tell tasks apart on screen."""
    return task_id[-6:]


def format_due(deadline: Optional[datetime], now: Optional[datetime] = None) -> str:
    """
    Describe a deadline relative to now.

    Examples:
        "due in 3 hours", "due tomorrow", "due in 4 days", "due Jan 15",
        "overdue by 2 days", "no deadline"
    """
    if deadline is None:
        return "no deadline"

    now = now or datetime.now()
    seconds = (deadline - now).total_seconds()

    if seconds < 0:
        late = -seconds
        if late < 3600:
            minutes = max(1, int(late / 60))
            return f"overdue by {minutes} minute{'s' if minutes != 1 else ''}"
        if late < 86400:
            hours = int(late / 3600)
            return f"overdue by {hours} hour{'s' if hours != 1 else ''}"
        days = int(late / 86400)
        return f"overdue by {days} day{'s' if days != 1 else ''}"

    if seconds < 3600:
        minutes = int(seconds / 60)
        if minutes < 1:
            return "due now"
        return f"due in {minutes} minute{'s' if minutes != 1 else ''}"
    if seconds < 86400:
        hours = int(seconds / 3600)
        return f"due in {hours} hour{'s' if hours != 1 else ''}"
    if seconds < 2 * 86400:
        return "due tomorrow"

    days = int(seconds / 86400)
    if days < 7:
        return f"due in {days} days"
    if deadline.year == now.year:
        return f"due {deadline.strftime('%b %d')}"
    return f"due {deadline.strftime('%b %d, %Y')}"


class BoardFormatter:
    """Centralized board display formatting."""

    @staticmethod
    def task_text(task: Task, column_id: str, now: Optional[datetime] = None) -> Text:
        """One task as a short multi-line block for a board cell."""
        now = now or datetime.now()
        text = Text()
        text.append(f"#{short_id(task.id)} ", style="task.id")

        if task.is_editing and not task.title:
            text.append("(editing)", style="task.editing")
        else:
            text.append(task.title or "(untitled)", style="task.title")

        if task.deadline is not None:
            if column_id == COLUMN_DONE:
                style = "task.early" if task.deadline > now else "muted"
            else:
                style = "task.overdue" if task.deadline < now else "task.due"
            text.append(f"\n  {format_due(task.deadline, now)}", style=style)

        return text

    @staticmethod
    def create_board_table(
        board: Board,
        collapsed: Iterable[str] = (),
        title: str = "Board",
        now: Optional[datetime] = None,
    ) -> Table:
        """
        Create Rich table with one table column per board column.

        Args:
            board: Board to display
            collapsed: Column ids to show folded (count only)
            title: Table title
            now: Reference time for due labels

        Returns:
            Rich Table object ready for display
        """
        collapsed = set(collapsed)
        table = Table(title=title, show_header=True, expand=True, show_lines=False)

        cells = []
        for column in board.columns:
            visible = column.visible_tasks()
            marker = "▸ " if column.id in collapsed else ""
            table.add_column(
                f"{marker}{escape(column.title)} ({len(visible)})",
                header_style="column.title",
                ratio=1,
            )

            if column.id in collapsed:
                cells.append(Text("collapsed", style="muted"))
            elif not visible:
                cells.append(Text("No tasks", style="muted"))
            else:
                blocks: List[Text] = [BoardFormatter.task_text(t, column.id, now) for t in visible]
                cells.append(Group(*blocks))

        table.add_row(*cells)
        return table

    @staticmethod
    def create_column_table(column: Column, now: Optional[datetime] = None) -> Table:
        """Detailed table for a single column."""
        now = now or datetime.now()
        table = Table(title=escape(column.title), show_header=True, header_style="column.title")
        table.add_column("#", style="muted", width=3)
        table.add_column("ID", style="task.id", no_wrap=True)
        table.add_column("Title")
        table.add_column("Deadline")
        table.add_column("Due")

        for position, task in enumerate(column.visible_tasks(), start=1):
            table.add_row(
                str(position),
                task.id,
                Text(task.title or "(editing)"),
                format_deadline(task.deadline),
                format_due(task.deadline, now),
            )
        return table

    @staticmethod
    def task_panel(task: Task, column: Column, now: Optional[datetime] = None) -> Panel:
        """Full details of one task."""
        body = Text()
        body.append("ID: ", style="bold")
        body.append(f"{task.id}\n", style="task.id")
        body.append("Column: ", style="bold")
        body.append(f"{column.title}\n")
        body.append("Deadline: ", style="bold")
        body.append(f"{format_deadline(task.deadline)} ({format_due(task.deadline, now)})\n")
        body.append("Created: ", style="bold")
        body.append(f"{task.created_at.strftime('%Y-%m-%d %H:%M')}\n")
        if task.is_editing:
            body.append("Editing\n", style="task.editing")
        body.append("\n")
        body.append(task.description or "(no description)")
        return Panel(body, title=escape(task.title or "(untitled)"), expand=False)

    @staticmethod
    def analytics_panel(analytics: Analytics) -> Panel:
        """Progress, status breakdown, deadline stats and productivity insights."""
        table = Table.grid(padding=(0, 2))
        table.add_column(style="bold")
        table.add_column()

        table.add_row(
            "Completion",
            f"{analytics.completion_percentage}% "
            f"({analytics.completed_tasks}/{analytics.total_tasks})",
        )
        table.add_row("", "")
        table.add_row("To Do", f"{analytics.todo_tasks} ({analytics.share('todo')}%)")
        table.add_row(
            "In Progress",
            f"{analytics.in_progress_tasks} ({analytics.share('in-progress')}%)",
        )
        table.add_row("Review", f"{analytics.review_tasks} ({analytics.share('review')}%)")
        table.add_row("Done", f"{analytics.completed_tasks} ({analytics.share('done')}%)")
        table.add_row("", "")
        table.add_row("Overdue", Text(str(analytics.overdue_tasks), style="task.overdue"))
        table.add_row("Completed early", Text(str(analytics.completed_early_tasks), style="task.early"))
        table.add_row("", "")
        table.add_row("Efficiency rate", f"{analytics.efficiency_rate}%")
        table.add_row("Urgency index", analytics.urgency_index)
        table.add_row("Tasks per column", f"{analytics.tasks_per_column:g}")

        return Panel(table, title="Analytics", expand=False)

    @staticmethod
    def board_to_json(board: Board, include_drafts: bool = False) -> str:
        """
        Board as a JSON array string (column order, then task order).

        Args:
            board: Board to serialize
            include_drafts: Keep tasks that fail the visibility rule
        """
        columns = []
        for column in board.columns:
            tasks = column.tasks if include_drafts else column.visible_tasks()
            columns.append({
                "id": column.id,
                "title": column.title,
                "tasks": [t.to_dict() for t in tasks],
            })
        return json.dumps(columns, indent=2)
