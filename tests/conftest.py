"""Shared pytest configuration and fixtures for tests."""

import sys
import io
from datetime import datetime
from pathlib import Path

import pytest

# Fix Windows console encoding
if sys.platform == "win32":
    sys.stdout = io.TextIOWrapper(sys.stdout.buffer, encoding='utf-8')
    sys.stderr = io.TextIOWrapper(sys.stderr.buffer, encoding='utf-8')

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from taskboard.core.models import Board, Column, Task, default_board  # noqa: E402


NOW = datetime(2024, 1, 10, 9, 0)


@pytest.fixture
def now():
    """Fixed reference time for deadline checks."""
    return NOW


def make_task(task_id, title="Task", description="Details", deadline=None, is_editing=False):
    """Saved task with content; pass title="" etc. for drafts."""
    return Task(
        id=task_id,
        title=title,
        description=description,
        deadline=deadline,
        created_at=datetime(2024, 1, 1, 8, 0),
        is_editing=is_editing,
    )


def make_board(**columns):
    """
    Default board with tasks placed per column.

    Usage:
        make_board(todo=[t1, t2], done=[t3])
    """
    keyed = {k.replace("_", "-"): tuple(v) for k, v in columns.items()}
    board = default_board()
    return Board(columns=tuple(
        Column(id=c.id, title=c.title, tasks=keyed.get(c.id, ())) for c in board.columns
    ))


@pytest.fixture(autouse=True)
def isolated_store(monkeypatch, tmp_path):
    """Point the on-disk store at a temporary directory for every test."""
    home = tmp_path / "taskboard-home"
    monkeypatch.setenv("TASKBOARD_HOME", str(home))
    yield home
