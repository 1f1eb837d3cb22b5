"""
FILE: taskboard/repl/__init__.py
PURPOSE: Interactive REPL mode for the board
EXPORTS:
  - main() - Entry point for REPL
"""

from .main import main

__all__ = ["main"]
