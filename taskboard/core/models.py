"""
FILE: taskboard/core/models.py
PURPOSE: Domain models for tasks, columns, and the board
EXPORTS:
  - Task (frozen dataclass)
  - TaskPatch (frozen dataclass)
  - Column (frozen dataclass)
  - Board (frozen dataclass)
  - DropTarget (frozen dataclass)
  - new_task_id() -> str
  - new_draft_task(now) -> Task
  - default_board() -> Board
  - has_content(task) -> bool
  - is_visible(task) -> bool
DEPENDENCIES:
  - dataclasses (stdlib)
  - datetime, time, json (stdlib)
  - taskboard.core.constants (column layout, id prefix)
  - taskboard.core.dates (timestamp codec)
NOTES:
  - All models are immutable; use dataclasses.replace() or Board helpers
  - All models have to_dict()/from_dict() for snapshot serialization
  - Snapshot keys are camelCase (createdAt, isEditing)
  - Timestamps stored as ISO-8601 strings
"""

import json
import time
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Dict, Iterator, Optional, Tuple

from .constants import DEFAULT_COLUMNS, TASK_ID_PREFIX
from .dates import format_timestamp, parse_timestamp


_last_id_ns = 0


def new_task_id() -> str:
    """
    Generate a unique task id from the high-resolution clock.

    Ids are strictly increasing within the process, so two tasks created
    within the same clock tick still get distinct ids.
    """
    global _last_id_ns
    ns = time.time_ns()
    if ns <= _last_id_ns:
        ns = _last_id_ns + 1
    _last_id_ns = ns
    return f"{TASK_ID_PREFIX}{ns}"


def _field(data: Dict[str, Any], key: str, kind: type, default: Any) -> Any:
    """Snapshot value of the given JSON type; missing or null gives default."""
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, kind):
        raise TypeError(f"{key} must be {kind.__name__}, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class Task:
    """A task with title, description, and optional deadline."""

    id: str
    title: str = ""
    description: str = ""
    deadline: Optional[datetime] = None
    created_at: datetime = field(default_factory=datetime.now)
    is_editing: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert task to a JSON-ready dict (snapshot shape)."""
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "deadline": format_timestamp(self.deadline) if self.deadline else None,
            "createdAt": format_timestamp(self.created_at),
            "isEditing": self.is_editing,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Task":
        """
        Build a task from its snapshot dict.

        Raises:
            KeyError: If "id" is missing
            TypeError: If a field has the wrong JSON type
            ValueError: If a timestamp is malformed
        """
        title = _field(data, "title", str, "")
        description = _field(data, "description", str, "")
        deadline = _field(data, "deadline", str, None)
        created_at = _field(data, "createdAt", str, None)
        return cls(
            id=str(data["id"]),
            title=title,
            description=description,
            deadline=parse_timestamp(deadline) if deadline else None,
            created_at=parse_timestamp(created_at) if created_at else datetime.now(),
            is_editing=_field(data, "isEditing", bool, False),
        )

    def to_json(self) -> str:
        """Serialize task to JSON string."""
        return json.dumps(self.to_dict(), indent=2)


@dataclass(frozen=True)
class TaskPatch:
    """User-edited task fields, applied by engine.update_task()."""

    title: str = ""
    description: str = ""
    deadline: Optional[datetime] = None

    @classmethod
    def from_task(cls, task: Task) -> "TaskPatch":
        """Start a patch from a task's current values."""
        return cls(title=task.title, description=task.description, deadline=task.deadline)


def new_draft_task(now: Optional[datetime] = None) -> Task:
    """Create an empty task in editing state."""
    return Task(
        id=new_task_id(),
        created_at=now or datetime.now(),
        is_editing=True,
    )


def has_content(task: Task) -> bool:
    """True if any of title, description, deadline is set."""
    return bool(task.title or task.description or task.deadline)


def is_visible(task: Task) -> bool:
    """
    Visibility rule: a task is "real" if it has content or is being edited.

    Drafts (no content, not editing) are excluded from rendering,
    export and analytics.
    """
    return has_content(task) or task.is_editing


@dataclass(frozen=True)
class Column:
    """A workflow column (e.g., To Do, In Progress, Done)."""

    id: str
    title: str
    tasks: Tuple[Task, ...] = ()

    def index_of(self, task_id: str) -> Optional[int]:
        """Position of task in this column, or None."""
        return next((i for i, t in enumerate(self.tasks) if t.id == task_id), None)

    def visible_tasks(self) -> Tuple[Task, ...]:
        """Tasks that pass the visibility rule, in column order."""
        return tuple(t for t in self.tasks if is_visible(t))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "tasks": [t.to_dict() for t in self.tasks],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Column":
        return cls(
            id=str(data["id"]),
            title=str(data.get("title") or data["id"]),
            tasks=tuple(Task.from_dict(t) for t in data.get("tasks") or []),
        )


@dataclass(frozen=True)
class DropTarget:
    """
    Where a dragged task was released.

    Attributes:
        column_id: Column the drop lands in
        index: Position of the task dropped on, or None for a drop on the
               column body (append semantics)
    """

    column_id: str
    index: Optional[int] = None


@dataclass(frozen=True)
class Board:
    """Ordered columns and their tasks. Never mutated; helpers return copies."""

    columns: Tuple[Column, ...] = ()

    def column_ids(self) -> Tuple[str, ...]:
        return tuple(c.id for c in self.columns)

    def get_column(self, column_id: str) -> Optional[Column]:
        """Column by id, or None."""
        return next((c for c in self.columns if c.id == column_id), None)

    def find_task(self, task_id: str) -> Optional[Tuple[Column, int, Task]]:
        """
        Locate a task by scanning every column.

        Returns:
            (column, index, task) if found, None otherwise
        """
        for column in self.columns:
            index = column.index_of(task_id)
            if index is not None:
                return column, index, column.tasks[index]
        return None

    def iter_tasks(self) -> Iterator[Tuple[Column, Task]]:
        """All tasks in column order, then in-column order."""
        for column in self.columns:
            for task in column.tasks:
                yield column, task

    def with_column(self, column: Column) -> "Board":
        """Copy of the board with the same-id column replaced."""
        return replace(
            self,
            columns=tuple(column if c.id == column.id else c for c in self.columns),
        )

    def to_list(self) -> list:
        """Snapshot shape: a list of column dicts."""
        return [c.to_dict() for c in self.columns]

    @classmethod
    def from_list(cls, data: list) -> "Board":
        """
        Build a board from its snapshot list.

        Raises:
            TypeError, KeyError, ValueError: If the payload is ill-shaped
        """
        if not isinstance(data, list):
            raise TypeError("board snapshot must be a list of columns")
        return cls(columns=tuple(Column.from_dict(c) for c in data))


def default_board() -> Board:
    """Fresh board: the four standard columns, all empty."""
    return Board(columns=tuple(Column(id=cid, title=title) for cid, title in DEFAULT_COLUMNS))
