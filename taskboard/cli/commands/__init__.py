"""
FILE: taskboard/cli/commands/__init__.py
PURPOSE: CLI command modules
"""

# Export all command handlers for easy importing
from .tasks import (
    add,
    edit,
    rm,
    mv,
    show,
)
from .board import (
    ls,
    stats,
    export,
    clear,
    theme,
)
from .system import (
    version,
    repl,
)

__all__ = [
    "add",
    "edit",
    "rm",
    "mv",
    "show",
    "ls",
    "stats",
    "export",
    "clear",
    "theme",
    "version",
    "repl",
]
