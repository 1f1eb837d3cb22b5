"""
FILE: taskboard/repl/session.py
PURPOSE: Explicit state for one interactive session
EXPORTS:
  - ReplSession (class)
DEPENDENCIES:
  - rich (console)
  - taskboard.core (models, drag, store)
  - taskboard.formatting (themed console)
NOTES:
  - Passed to every handler; there is no module-level REPL state
  - The board is replaced wholesale after each transition (never mutated)
  - Collapsed columns and the theme are UI state, not part of the board
  - Nothing is written to disk until save()
"""

from typing import Optional, Set

from rich.console import Console

from ..core.constants import COLUMN_TODO
from ..core.drag import DragSession
from ..core.models import Board
from ..core.store import SnapshotStore, ThemePreference
from ..formatting import build_theme


class ReplSession:
    """
    Everything the REPL knows between commands.

    Attributes:
        store: Snapshot store the session loads from and saves to
        board: Current board value
        theme: Current theme preference
        drag: In-progress drag gesture
        collapsed: Column ids shown folded
        dirty: True when the board or theme changed since the last save
        console: Rich console using the current theme
    """

    def __init__(self, store: SnapshotStore, console: Optional[Console] = None):
        self.store = store
        self.board: Board = store.load()
        self.theme: ThemePreference = store.load_theme()
        self.drag = DragSession()
        self.collapsed: Set[str] = set()
        self.dirty = False
        self.exit_warned = False
        self.console = console or Console()
        self.console.push_theme(build_theme(self.theme))

    def apply(self, board: Board) -> bool:
        """
        Replace the current board.

        Returns:
            True if the board changed
        """
        if board is self.board:
            return False
        self.board = board
        self.dirty = True
        self.exit_warned = False
        return True

    def set_theme(self, theme: ThemePreference) -> None:
        if theme == self.theme:
            return
        self.theme = theme
        self.dirty = True
        self.console.pop_theme()
        self.console.push_theme(build_theme(theme))

    def save(self) -> None:
        """
        Persist board and theme together.

        Raises:
            SerializationError: If the write fails (session state is kept)
        """
        self.store.save(self.board, self.theme)
        self.dirty = False
        self.exit_warned = False

    def collapse_all(self) -> None:
        """Collapse every column except To Do, which always stays open."""
        self.collapsed = {cid for cid in self.board.column_ids() if cid != COLUMN_TODO}

    def expand_all(self) -> None:
        self.collapsed = set()

    def get_prompt(self) -> str:
        """
        Plain prompt string for simple (non-TTY) input mode.

        Returns:
            "board> ", "board*> " with unsaved changes,
            or "board:[dragging 123456]> " mid-drag
        """
        marker = "*" if self.dirty else ""
        if self.drag.is_dragging:
            return f"board{marker}:[dragging {self.drag.active_task_id[-6:]}]> "
        return f"board{marker}> "
