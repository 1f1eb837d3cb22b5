"""
FILE: taskboard/repl/completer.py
PURPOSE: Autocomplete for REPL commands and arguments
EXPORTS:
  - TaskboardCompleter (Completer for command/arg completion)
  - create_completer(session) -> TaskboardCompleter
DEPENDENCIES:
  - prompt_toolkit.completion (Completer, Completion)
NOTES:
  - Command names at the start of the line
  - Task short ids for commands whose first argument is a task
  - Column ids after add/ls/collapse/expand, and after a task id for mv
  - Columns and task ids for hover/drop targets
  - Theme names after theme, flags after "--"
  - Task and column suggestions come from the live session board
  - Case-insensitive matching
"""

from typing import Iterable, Optional

from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.document import Document

from ..formatting import short_id
from .session import ReplSession


class TaskboardCompleter(Completer):
    """
    Context-aware completer for the board REPL.

    Attributes:
        session: Session whose board feeds column and task suggestions
            (None gives command and flag completion only)
    """

    COMMANDS = [
        "add", "edit", "cancel", "rm", "mv", "show",
        "grab", "hover", "drop", "release",
        "ls", "stats", "export", "clear", "collapse", "expand",
        "theme", "save", "help", "exit", "quit",
    ]

    COMMAND_DESCRIPTIONS = {
        "add": "Start a task in a column",
        "edit": "Change a task's fields",
        "cancel": "Stop editing a task",
        "rm": "Delete task",
        "mv": "Move or reorder a task",
        "show": "View full task details",
        "grab": "Pick up a task",
        "hover": "Preview a drop target",
        "drop": "Drop the grabbed task",
        "release": "Let go without moving",
        "ls": "Show the board",
        "stats": "Show analytics",
        "export": "Write tasks as CSV",
        "clear": "Delete every task",
        "collapse": "Fold a column",
        "expand": "Unfold a column",
        "theme": "Light or dark colors",
        "save": "Write board to disk",
        "help": "Show available commands",
        "exit": "Exit REPL",
        "quit": "Exit REPL",
    }

    COMMAND_FLAGS = {
        "add": ["--title", "--description", "--deadline"],
        "edit": ["--title", "--description", "--deadline"],
        "mv": ["--position"],
        "show": ["--json"],
        "ls": ["--json"],
        "stats": ["--json"],
        "clear": ["--yes"],
    }

    FLAG_DESCRIPTIONS = {
        "--title": "Task title",
        "--description": "Task description",
        "--deadline": "YYYY-MM-DD [HH:MM]",
        "--position": "1-based position in the column",
        "--json": "Output as JSON",
        "--yes": "Skip confirmation",
    }

    THEME_VALUES = ["light", "dark", "toggle"]

    TASK_FIRST = {"edit", "cancel", "rm", "mv", "show", "grab"}
    COLUMN_FIRST = {"add", "ls", "collapse", "expand"}
    TARGET_FIRST = {"hover", "drop"}

    def __init__(self, session: Optional[ReplSession] = None):
        self.session = session

    def get_completions(
        self, document: Document, complete_event
    ) -> Iterable[Completion]:
        """
        Generate completions based on current input.

        Yields:
            Completion objects for matching suggestions
        """
        text = document.text_before_cursor
        words = text.split()
        at_new_word = text.endswith(" ")

        if not words or (not at_new_word and len(words) == 1):
            yield from self._complete_commands(words[0] if words else "")
            return

        command = words[0].lower()
        current = "" if at_new_word else words[-1]
        # Position of the word being completed (1 = first argument)
        position = len(words) if at_new_word else len(words) - 1

        if current.startswith("-"):
            yield from self._complete_flags(command, current)
            return

        if position == 1:
            if command in self.TASK_FIRST:
                yield from self._complete_task_ids(current)
            elif command in self.COLUMN_FIRST:
                yield from self._complete_columns(current, include_all=command in ("collapse", "expand"))
            elif command in self.TARGET_FIRST:
                yield from self._complete_columns(current)
                yield from self._complete_task_ids(current)
            elif command == "theme":
                yield from self._complete_values(self.THEME_VALUES, current)
            return

        if position == 2 and command == "mv":
            yield from self._complete_columns(current)

    def _complete_commands(self, word: str) -> Iterable[Completion]:
        word_lower = word.lower()
        for command in self.COMMANDS:
            if command.startswith(word_lower):
                yield Completion(
                    command,
                    start_position=-len(word),
                    display=command,
                    display_meta=self.COMMAND_DESCRIPTIONS.get(command, ""),
                )

    def _complete_flags(self, command: str, word: str) -> Iterable[Completion]:
        word_lower = word.lower()
        for flag in self.COMMAND_FLAGS.get(command, []):
            if flag.startswith(word_lower):
                yield Completion(
                    flag,
                    start_position=-len(word),
                    display=flag,
                    display_meta=self.FLAG_DESCRIPTIONS.get(flag, ""),
                )

    @staticmethod
    def _complete_values(values, word: str) -> Iterable[Completion]:
        word_lower = word.lower()
        for value in values:
            if value.startswith(word_lower):
                yield Completion(value, start_position=-len(word), display=value)

    def _complete_columns(self, word: str, include_all: bool = False) -> Iterable[Completion]:
        """Column ids from the session board, with the title as meta."""
        word_lower = word.lower()
        if self.session is not None:
            for column in self.session.board.columns:
                if column.id.startswith(word_lower):
                    yield Completion(
                        column.id,
                        start_position=-len(word),
                        display=column.id,
                        display_meta=column.title,
                    )
        if include_all and "all".startswith(word_lower):
            yield Completion("all", start_position=-len(word), display="all", display_meta="Every column")

    def _complete_task_ids(self, word: str) -> Iterable[Completion]:
        """Short task ids with title and column as meta."""
        if self.session is None:
            return
        word_lower = word.lower().lstrip("#")
        for column, task in self.session.board.iter_tasks():
            ref = short_id(task.id)
            if ref.startswith(word_lower):
                title = task.title.strip() or "(editing)"
                display_title = title if len(title) <= 40 else title[:37] + "..."
                yield Completion(
                    ref,
                    start_position=-len(word),
                    display=ref,
                    display_meta=f"{display_title} [{column.id}]",
                )


def create_completer(session: Optional[ReplSession] = None) -> TaskboardCompleter:
    """
    Create a completer bound to a REPL session.

    Usage:
        completer = create_completer(session)
        prompt = PromptSession(completer=completer)
    """
    return TaskboardCompleter(session)
