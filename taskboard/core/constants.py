"""
FILE: taskboard/core/constants.py
PURPOSE: Constants used throughout the application
EXPORTS:
  - COLUMN_TODO, COLUMN_IN_PROGRESS, COLUMN_REVIEW, COLUMN_DONE: Column ids
  - DEFAULT_COLUMNS: (id, title) pairs for a fresh board, in display order
  - BOARD_STATE_KEY, THEME_KEY: Keys in the key-value store
  - STORE_HOME_ENV, DEFAULT_STORE_DIRNAME, STORE_FILENAME: Store location
  - Date formats used for input, display and export
DEPENDENCIES:
  - datetime (stdlib)
NOTES:
  - Centralized constants to avoid magic strings
  - Column ids are stable and order-significant; titles are display-only
"""

from datetime import time

# Column ids
COLUMN_TODO = "todo"
COLUMN_IN_PROGRESS = "in-progress"
COLUMN_REVIEW = "review"
COLUMN_DONE = "done"

# Fresh board layout
DEFAULT_COLUMNS = (
    (COLUMN_TODO, "To Do"),
    (COLUMN_IN_PROGRESS, "In Progress"),
    (COLUMN_REVIEW, "Review"),
    (COLUMN_DONE, "Done"),
)

# Key-value store keys
BOARD_STATE_KEY = "boardState"
THEME_KEY = "darkMode"

# Store location (overridable via environment)
STORE_HOME_ENV = "TASKBOARD_HOME"
DEFAULT_STORE_DIRNAME = ".taskboard"
STORE_FILENAME = "store.json"

# Task id prefix
TASK_ID_PREFIX = "task-"

# Dates
DEFAULT_DEADLINE_TIME = time(12, 0)
DEADLINE_INPUT_FORMATS = (
    "%Y-%m-%d %H:%M",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%dT%H:%M",
    "%Y-%m-%dT%H:%M:%S",
)
DATE_INPUT_FORMAT = "%Y-%m-%d"
DEADLINE_DISPLAY_FORMAT = "%b %d, %Y %I:%M %p"
EXPORT_DEADLINE_FORMAT = "%Y-%m-%d %H:%M:%S"
EXPORT_FILENAME_FORMAT = "project-tasks-%Y-%m-%d.csv"

# Themes
THEME_LIGHT = "light"
THEME_DARK = "dark"
