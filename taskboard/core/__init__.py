"""
FILE: taskboard/core/__init__.py
PURPOSE: Board state engine - models, ordering, moves, analytics, snapshots
NOTES:
  - No presentation code lives here; CLI and REPL render what these modules return
"""
