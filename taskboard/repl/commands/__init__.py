"""
FILE: taskboard/repl/commands/__init__.py
PURPOSE: REPL command handler modules
"""

# Export all command handlers for easy importing
from .tasks import (
    handle_add_command,
    handle_edit_command,
    handle_cancel_command,
    handle_rm_command,
    handle_mv_command,
    handle_show_command,
)
from .board import (
    handle_ls_command,
    handle_stats_command,
    handle_export_command,
    handle_clear_command,
    handle_collapse_command,
    handle_expand_command,
    handle_theme_command,
    handle_save_command,
)
from .drag import (
    handle_grab_command,
    handle_hover_command,
    handle_drop_command,
    handle_release_command,
)
from .system import (
    handle_help_command,
    handle_exit_command,
)

__all__ = [
    "handle_add_command",
    "handle_edit_command",
    "handle_cancel_command",
    "handle_rm_command",
    "handle_mv_command",
    "handle_show_command",
    "handle_ls_command",
    "handle_stats_command",
    "handle_export_command",
    "handle_clear_command",
    "handle_collapse_command",
    "handle_expand_command",
    "handle_theme_command",
    "handle_save_command",
    "handle_grab_command",
    "handle_hover_command",
    "handle_drop_command",
    "handle_release_command",
    "handle_help_command",
    "handle_exit_command",
]
