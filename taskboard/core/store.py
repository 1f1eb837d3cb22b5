"""
FILE: taskboard/core/store.py
PURPOSE: Key-value persistence and board snapshot save/restore
EXPORTS:
  - KeyValueStore (Protocol: get/set of strings)
  - MemoryStore (dict-backed store)
  - JsonFileStore (single JSON file store)
  - ThemePreference (dataclass)
  - SnapshotStore (save/load of board + theme)
  - board_to_json(board) -> str
  - board_from_json(text) -> Board
  - get_store_dir() -> Path
  - get_store_path() -> Path
  - open_default_store() -> SnapshotStore
DEPENDENCIES:
  - json, os, tempfile, pathlib, logging (stdlib)
  - taskboard.core.models (Board, default_board)
  - taskboard.core.constants (keys, paths)
  - taskboard.core.exceptions (SerializationError)
NOTES:
  - Store file lives at ~/.taskboard/store.json ($TASKBOARD_HOME overrides)
  - Auto-creates the directory on first write
  - load() never raises: missing or corrupt snapshots fall back to the default board
  - save() raises SerializationError; callers' in-memory board is untouched
  - Writes go to a temp file then os.replace() so a failed write can't truncate the store
"""

import json
import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Protocol

from .constants import (
    BOARD_STATE_KEY,
    DEFAULT_STORE_DIRNAME,
    STORE_FILENAME,
    STORE_HOME_ENV,
    THEME_DARK,
    THEME_KEY,
    THEME_LIGHT,
)
from .exceptions import SerializationError
from .models import Board, default_board


logger = logging.getLogger(__name__)


def get_store_dir() -> Path:
    """Data directory: $TASKBOARD_HOME if set, else ~/.taskboard."""
    override = os.environ.get(STORE_HOME_ENV)
    if override:
        return Path(override).expanduser()
    return Path.home() / DEFAULT_STORE_DIRNAME


def get_store_path() -> Path:
    return get_store_dir() / STORE_FILENAME


# --- Key-Value Stores ---


class KeyValueStore(Protocol):
    """Synchronous string key-value store (localStorage-like)."""

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class MemoryStore:
    """In-memory store, used for tests and throwaway sessions."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileStore:
    """
    Key-value store persisted as one JSON object on disk.

    get() tolerates a missing or unreadable file (returns None);
    set() raises OSError if the file can't be written.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable store %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring store %s: expected a JSON object", self.path)
            return {}
        return data

    def get(self, key: str) -> Optional[str]:
        value = self._read().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value

        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=".store-", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
            os.replace(tmp_name, self.path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise


# --- Board Codec ---


def board_to_json(board: Board) -> str:
    """
    Encode a board snapshot.

    Raises:
        SerializationError: If the board can't be encoded
    """
    try:
        return json.dumps(board.to_list())
    except (TypeError, ValueError) as e:
        raise SerializationError(f"Could not encode board: {e}") from e


def board_from_json(text: str) -> Board:
    """
    Decode a board snapshot.

    Raises:
        SerializationError: If text isn't valid JSON, is ill-shaped,
            has no columns, or repeats a task id
    """
    try:
        board = Board.from_list(json.loads(text))
    except (TypeError, KeyError, ValueError, AttributeError) as e:
        raise SerializationError(f"Could not decode board: {e}") from e

    if not board.columns:
        raise SerializationError("Could not decode board: no columns")

    seen = set()
    for _, task in board.iter_tasks():
        if task.id in seen:
            raise SerializationError(f"Could not decode board: duplicate task id {task.id}")
        seen.add(task.id)

    return board


# --- Snapshot Store ---


@dataclass(frozen=True)
class ThemePreference:
    """Light/dark preference, stored as "true"/"false" (dark mode on/off)."""

    dark: bool = False

    @property
    def name(self) -> str:
        return THEME_DARK if self.dark else THEME_LIGHT

    def toggled(self) -> "ThemePreference":
        return ThemePreference(dark=not self.dark)

    @classmethod
    def from_name(cls, name: str) -> "ThemePreference":
        return cls(dark=name.strip().lower() == THEME_DARK)

    def encode(self) -> str:
        return "true" if self.dark else "false"

    @classmethod
    def decode(cls, value: Optional[str]) -> "ThemePreference":
        # Anything but an explicit "true" means light mode
        return cls(dark=value == "true")


class SnapshotStore:
    """Saves and restores the board (and theme) through a KeyValueStore."""

    def __init__(self, kv: KeyValueStore):
        self.kv = kv

    def save(self, board: Board, theme: Optional[ThemePreference] = None) -> None:
        """
        Persist the board, and the theme preference when given.

        Raises:
            SerializationError: If encoding or writing fails
        """
        payload = board_to_json(board)
        try:
            self.kv.set(BOARD_STATE_KEY, payload)
        except OSError as e:
            raise SerializationError(f"Could not save board: {e}") from e
        logger.debug("Saved board snapshot (%d bytes)", len(payload))

        if theme is not None:
            self.save_theme(theme)

    def load(self) -> Board:
        """Restore the board; falls back to the default board, never raises."""
        raw = self.kv.get(BOARD_STATE_KEY)
        if raw is None:
            return default_board()

        try:
            return board_from_json(raw)
        except SerializationError as e:
            logger.warning("%s; starting from an empty board", e)
            return default_board()

    def save_theme(self, theme: ThemePreference) -> None:
        """
        Persist the theme preference.

        Raises:
            SerializationError: If writing fails
        """
        try:
            self.kv.set(THEME_KEY, theme.encode())
        except OSError as e:
            raise SerializationError(f"Could not save theme preference: {e}") from e

    def load_theme(self) -> ThemePreference:
        return ThemePreference.decode(self.kv.get(THEME_KEY))


def open_default_store() -> SnapshotStore:
    """Snapshot store backed by the on-disk JSON file."""
    return SnapshotStore(JsonFileStore(get_store_path()))
