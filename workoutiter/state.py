"""Application state: the workout list, the current workout and the settings editor."""

from __future__ import annotations

import enum
import uuid
from collections.abc import Iterable
from dataclasses import dataclass, field, replace

from workoutiter.persistence import PersistenceError, Position, Storage, WorkoutsState

CLEARANCE_MESSAGE = "Removing all workouts. Are you sure?"
EMPTY_WORKOUT_TEXT = "<empty>"


class OperationFlags(enum.Flag):
    """Which editing operations the settings page currently allows."""

    NONE = 0
    CAN_ADD = 1
    CAN_UPDATE = 1 << 1
    CAN_DELETE = 1 << 2
    CAN_CLEAR = 1 << 3
    CAN_MOVE_UP = 1 << 4
    CAN_MOVE_DOWN = 1 << 5


class Page(enum.Enum):
    MAIN = "main"
    SETTINGS = "settings"


@dataclass(frozen=True)
class Workout:
    """One workout entry; its identity is its id, not its text."""

    text: str
    id: uuid.UUID = field(default_factory=uuid.uuid4)


class ConfirmationTopic(enum.Enum):
    WORKOUT_DELETION = "workout_deletion"
    CLEARANCE = "clearance"


@dataclass(frozen=True)
class ConfirmationPayload:
    """What a confirmation dialog asks about and how it was answered."""

    topic: ConfirmationTopic
    message: str | None = None
    confirmed: bool = False

    def confirm(self) -> ConfirmationPayload:
        """Return the same payload marked as confirmed."""
        return replace(self, confirmed=True)


@dataclass(frozen=True)
class MainViewModel:
    workout: str
    has_next: bool
    selected_number: int
    total: int


@dataclass(frozen=True)
class SettingsViewModel:
    workouts: list[Workout]
    workout_selection: Workout | None
    workout_input: str | None
    operation_flags: OperationFlags


class AppState:
    """The whole state of the application and the operations on it."""

    def __init__(
        self,
        workouts: Iterable[Workout] = (),
        workout_index: int = 0,
        window_position: Position | None = None,
        storage: Storage | None = None,
    ) -> None:
        self.workouts: list[Workout] = list(workouts)
        self.workout_index = workout_index
        self.window_position = window_position
        self.storage = storage
        self.current_page = Page.MAIN
        self.show_confirmation: ConfirmationTopic | None = None
        self.workout_selection: Workout | None = None
        self.workout_input: str | None = None
        self.operation_flags = (
            OperationFlags.CAN_CLEAR if self.workouts else OperationFlags.NONE
        )

    @classmethod
    def from_storage(cls, storage: Storage) -> AppState:
        """Load the workouts and the window position from the given storage."""
        stored = storage.read_workouts_state()
        return cls(
            workouts=[Workout(text) for text in stored.workouts],
            workout_index=stored.index,
            window_position=storage.read_window_state(),
            storage=storage,
        )

    # Navigation

    def next_workout(self) -> None:
        count = len(self.workouts)
        if count > 0:
            self.workout_index = (self.workout_index + 1) % count
            self._write_workouts_state()

    def open_settings(self) -> None:
        self.current_page = Page.SETTINGS

    def close_settings(self) -> None:
        self.current_page = Page.MAIN
        self._reset_input()
        self._update_operation_flags()

    # Confirmation

    def initiate_workout_deletion(self) -> None:
        self.show_confirmation = ConfirmationTopic.WORKOUT_DELETION

    def initiate_clearance(self) -> None:
        self.show_confirmation = ConfirmationTopic.CLEARANCE

    def pending_confirmation(self) -> ConfirmationPayload | None:
        """The payload of the dialog to show, or None if none is pending."""
        topic = self.show_confirmation
        if topic is None:
            return None
        message = CLEARANCE_MESSAGE if topic is ConfirmationTopic.CLEARANCE else None
        return ConfirmationPayload(topic, message)

    def close_confirmation_dialog(self, payload: ConfirmationPayload) -> None:
        self.show_confirmation = None
        if not payload.confirmed:
            return
        if payload.topic is ConfirmationTopic.WORKOUT_DELETION:
            self._delete_workout()
        else:
            self._clear_workouts()

    # Editing

    def select_workout(self, workout: Workout | None) -> None:
        """Select a workout, or deselect it when it is already selected."""
        selected = self.workout_selection
        if selected is not None and workout is not None and selected.id == workout.id:
            self.workout_selection = None
        else:
            self.workout_selection = workout

        if self.workout_selection is not None:
            self.workout_input = self.workout_selection.text

        self._update_operation_flags()

    def set_workout_input(self, text: str | None) -> None:
        self.workout_input = text
        self._update_operation_flags()

    def add_workout(self) -> None:
        text = self.get_valid_input()
        if text is None:
            return
        self.workouts.append(Workout(text))
        self.workout_input = None
        self._update_operation_flags()
        self._write_workouts_state()

    def update_workout(self) -> None:
        text = self.get_valid_input()
        if text is None or self.workout_selection is None:
            return
        position = self._position_of(self.workout_selection)
        if position is None:
            return
        self.workouts[position] = replace(self.workouts[position], text=text)
        self._update_operation_flags()
        self._write_workouts_state()

    def move_workout_up(self) -> None:
        position = self._selected_position()
        if position is None or position <= 0:
            return
        self._move(position, position - 1)

    def move_workout_down(self) -> None:
        position = self._selected_position()
        if position is None or position >= len(self.workouts) - 1:
            return
        self._move(position, position + 1)

    # Window

    def window_moved(self, x: float, y: float) -> None:
        self.window_position = Position(x, y)

    def save_window_position(self) -> None:
        """Store the last known window position, logging any failure."""
        if self.window_position is None or self.storage is None:
            return
        try:
            self.storage.write_window_state(self.window_position)
        except PersistenceError as error:
            self._log_error(str(error))

    # Queries

    def has_unique_input(self) -> bool:
        text = self.workout_input
        return text is not None and all(w.text != text for w in self.workouts)

    def get_valid_input(self) -> str | None:
        text = self.workout_input
        if not text or any(w.text == text for w in self.workouts):
            return None
        return text

    def main_view_model(self) -> MainViewModel:
        total = len(self.workouts)
        if 0 <= self.workout_index < total:
            workout = self.workouts[self.workout_index].text
        else:
            workout = EMPTY_WORKOUT_TEXT
        return MainViewModel(
            workout=workout,
            has_next=total > 1,
            selected_number=0 if total == 0 else self.workout_index + 1,
            total=total,
        )

    def settings_view_model(self) -> SettingsViewModel:
        return SettingsViewModel(
            workouts=list(self.workouts),
            workout_selection=self.workout_selection,
            workout_input=self.workout_input,
            operation_flags=self.operation_flags,
        )

    # Internals

    def _move(self, source: int, target: int) -> None:
        workout = self.workouts.pop(source)
        self.workouts.insert(target, workout)
        self._update_operation_flags()
        self._write_workouts_state()

    def _delete_workout(self) -> None:
        position = self._selected_position()
        if position is None:
            return
        del self.workouts[position]
        if position <= self.workout_index:
            self.workout_index = max(self.workout_index - 1, 0)
        self._reset_input()
        self._update_operation_flags()
        self._write_workouts_state()

    def _clear_workouts(self) -> None:
        self.workouts.clear()
        self.workout_index = 0
        self._reset_input()
        self._update_operation_flags()
        self._write_workouts_state()

    def _reset_input(self) -> None:
        self.workout_selection = None
        self.workout_input = None

    def _position_of(self, workout: Workout) -> int | None:
        return next(
            (i for i, w in enumerate(self.workouts) if w.id == workout.id), None
        )

    def _selected_position(self) -> int | None:
        if self.workout_selection is None:
            return None
        return self._position_of(self.workout_selection)

    def _update_operation_flags(self) -> None:
        unique = self.has_unique_input()
        selected = self.workout_selection is not None
        position = self._selected_position()
        candidates = {
            OperationFlags.CAN_ADD: unique,
            OperationFlags.CAN_UPDATE: selected and unique,
            OperationFlags.CAN_DELETE: selected,
            OperationFlags.CAN_CLEAR: bool(self.workouts),
            OperationFlags.CAN_MOVE_UP: position is not None and position > 0,
            OperationFlags.CAN_MOVE_DOWN: position is not None
            and position < len(self.workouts) - 1,
        }
        flags = OperationFlags.NONE
        for flag, enabled in candidates.items():
            if enabled:
                flags |= flag
        self.operation_flags = flags

    def _write_workouts_state(self) -> None:
        if self.storage is None:
            return
        state = WorkoutsState(
            index=self.workout_index, workouts=[w.text for w in self.workouts]
        )
        try:
            self.storage.write_workouts_state(state)
        except PersistenceError as error:
            self._log_error(str(error))

    def _log_error(self, message: str) -> None:
        if self.storage is None:
            return
        try:
            self.storage.log_error(message)
        except PersistenceError:
            pass