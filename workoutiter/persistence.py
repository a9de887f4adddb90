"""Reading and writing the workout list, the window position and the error log."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any

WORKOUTS_JSON = "workouts.json"
WINDOW_JSON = "window.json"
ERROR_LOG = "error.log"

_INDEX_MIN = -128
_INDEX_MAX = 127


class PersistenceError(Exception):
    """Raised when stored state cannot be read, written or validated."""

    def __init__(self, message: str, exit_code: int = 1) -> None:
        super().__init__(message)
        self.exit_code = exit_code


def _as_number(value: Any, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise PersistenceError(f"invalid type for {name}: expected a number")
    return float(value)


def _require_mapping(data: Any, what: str) -> dict:
    if not isinstance(data, dict):
        raise PersistenceError(f"invalid {what}: expected an object")
    return data


def _require_key(data: dict, key: str) -> Any:
    if key not in data:
        raise PersistenceError(f"missing field `{key}`")
    return data[key]


@dataclass
class Position:
    """A window position on screen."""

    x: float = 0.0
    y: float = 0.0

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: Any) -> Position:
        mapping = _require_mapping(data, "position")
        return cls(
            _as_number(_require_key(mapping, "x"), "x"),
            _as_number(_require_key(mapping, "y"), "y"),
        )


@dataclass
class WorkoutsState:
    """The stored list of workouts and the index of the current one."""

    index: int = 0
    workouts: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"index": self.index, "workouts": list(self.workouts)}

    @classmethod
    def from_dict(cls, data: Any) -> WorkoutsState:
        mapping = _require_mapping(data, "workouts state")
        index = _require_key(mapping, "index")
        if isinstance(index, bool) or not isinstance(index, int):
            raise PersistenceError("invalid type for index: expected an integer")
        if not _INDEX_MIN <= index <= _INDEX_MAX:
            raise PersistenceError(f"invalid value for index: {index} is out of range")
        workouts = _require_key(mapping, "workouts")
        if not isinstance(workouts, list) or not all(isinstance(w, str) for w in workouts):
            raise PersistenceError("invalid type for workouts: expected a list of strings")
        return cls(index=index, workouts=list(workouts))


@dataclass
class WindowState:
    """The stored window position."""

    position: Position = field(default_factory=Position)

    def to_dict(self) -> dict:
        return {"position": self.position.to_dict()}

    @classmethod
    def from_dict(cls, data: Any) -> WindowState:
        mapping = _require_mapping(data, "window state")
        return cls(Position.from_dict(_require_key(mapping, "position")))


def validate_workouts_state(state: WorkoutsState) -> WorkoutsState:
    """Return the state unchanged, or raise if its index does not fit the list."""
    count = len(state.workouts)
    index = state.index
    if index < 0 or (count == 0 and index != 0) or (count > 0 and index >= count):
        raise PersistenceError("invalid workouts.json: index out of range", exit_code=3)
    return state


def validate_window_state(state: WindowState) -> WindowState:
    """Return the state unchanged, or raise if the position is negative."""
    if state.position.x < 0.0 or state.position.y < 0.0:
        raise PersistenceError("invalid window.json: negative position(s)")
    return state


def _dump(data: dict) -> str:
    return json.dumps(data, separators=(",", ":"), ensure_ascii=False)


class Storage:
    """The files the application keeps in one directory."""

    def __init__(self, directory: str | os.PathLike = ".") -> None:
        self.directory = Path(directory)
        self.workouts_path = self.directory / WORKOUTS_JSON
        self.window_path = self.directory / WINDOW_JSON
        self.error_log_path = self.directory / ERROR_LOG

    def read_workouts_state(self) -> WorkoutsState:
        """Read the workouts, creating an empty file first if there is none."""
        try:
            if not self.workouts_path.exists():
                self.write_workouts_state(WorkoutsState())
        except PersistenceError as error:
            raise PersistenceError(str(error), exit_code=1) from error

        try:
            data = json.loads(self.workouts_path.read_text(encoding="utf-8"))
            state = WorkoutsState.from_dict(data)
        except (OSError, ValueError, PersistenceError) as error:
            raise PersistenceError(str(error), exit_code=2) from error

        return validate_workouts_state(state)

    def write_workouts_state(self, state: WorkoutsState) -> None:
        try:
            self.workouts_path.write_text(_dump(state.to_dict()), encoding="utf-8")
        except OSError as error:
            raise PersistenceError(str(error)) from error

    def read_window_state(self) -> Position | None:
        """Return the stored window position, or None if absent or unusable."""
        try:
            if not self.window_path.exists():
                return None
            data = json.loads(self.window_path.read_text(encoding="utf-8"))
            state = validate_window_state(WindowState.from_dict(data))
        except (OSError, ValueError, PersistenceError) as error:
            print(error)
            return None
        return state.position

    def write_window_state(self, position: Position) -> None:
        try:
            self.window_path.write_text(
                _dump(WindowState(position).to_dict()), encoding="utf-8"
            )
        except OSError as error:
            raise PersistenceError(str(error)) from error

    def log_error(self, message: str) -> None:
        """Print the message and append it, timestamped, to the error log."""
        print(message)
        now = datetime.now()
        timestamp = now.strftime("%Y-%m-%d %H:%M:%S") + f".{now.microsecond // 1000:03d}"
        try:
            with self.error_log_path.open("a", encoding="utf-8") as log:
                log.write(f"{timestamp}  -  {message}\n")
        except OSError as error:
            raise PersistenceError(str(error)) from error