import json

import pytest

from workoutiter.persistence import Position, Storage, WorkoutsState
from workoutiter.state import (
    AppState,
    ConfirmationPayload,
    ConfirmationTopic,
    OperationFlags,
    Page,
    Workout,
)


def _state(*texts, **kwargs):
    return AppState(workouts=[Workout(t) for t in texts], **kwargs)


def test_has_unique_input_given_unique_input_should_be_true():
    state = _state("workout1", "workout2")
    state.workout_input = "workout3"
    assert state.has_unique_input() is True


def test_has_unique_input_given_existing_input_should_be_false():
    state = _state("workout1", "workout2")
    state.workout_input = "workout2"
    assert state.has_unique_input() is False


def test_get_valid_input_given_valid_input_should_return_input():
    state = _state("workout1", "workout3")
    state.workout_input = "workout4"
    assert state.get_valid_input() == "workout4"


def test_get_valid_input_given_empty_input_should_return_none():
    state = _state("workout1", "workout2")
    state.workout_input = ""
    assert state.get_valid_input() is None


def test_get_valid_input_given_existing_input_should_return_none():
    state = _state("workout1", "workout2")
    state.workout_input = "workout1"
    assert state.get_valid_input() is None


def test_initial_flags_depend_on_workouts():
    assert _state("a").operation_flags == OperationFlags.CAN_CLEAR
    assert _state().operation_flags == OperationFlags.NONE


def test_next_workout_wraps_around():
    state = _state("a", "b", "c", workout_index=2)
    state.next_workout()
    assert state.workout_index == 0
    state.next_workout()
    assert state.workout_index == 1


def test_next_workout_on_empty_list_keeps_index():
    state = _state()
    state.next_workout()
    assert state.workout_index == 0


def test_main_view_model_empty():
    model = _state().main_view_model()
    assert model.workout == "<empty>"
    assert model.has_next is False
    assert model.selected_number == 0
    assert model.total == 0


def test_main_view_model_with_workouts():
    model = _state("a", "b", workout_index=1).main_view_model()
    assert model.workout == "b"
    assert model.has_next is True
    assert model.selected_number == 2
    assert model.total == 2


def test_open_and_close_settings_resets_input():
    state = _state("a")
    state.open_settings()
    assert state.current_page is Page.SETTINGS
    state.select_workout(state.workouts[0])
    state.close_settings()
    assert state.current_page is Page.MAIN
    assert state.workout_selection is None
    assert state.workout_input is None
    assert state.operation_flags == OperationFlags.CAN_CLEAR


def test_select_workout_sets_input_and_toggles():
    state = _state("a", "b")
    first = state.workouts[0]
    state.select_workout(first)
    assert state.workout_selection == first
    assert state.workout_input == "a"
    assert state.operation_flags == (
        OperationFlags.CAN_DELETE | OperationFlags.CAN_CLEAR | OperationFlags.CAN_MOVE_DOWN
    )
    state.select_workout(first)
    assert state.workout_selection is None
    assert state.workout_input == "a"


def test_select_other_workout_replaces_selection():
    state = _state("a", "b")
    state.select_workout(state.workouts[0])
    state.select_workout(state.workouts[1])
    assert state.workout_selection == state.workouts[1]
    assert OperationFlags.CAN_MOVE_UP in state.operation_flags
    assert OperationFlags.CAN_MOVE_DOWN not in state.operation_flags


def test_set_workout_input_updates_flags():
    state = _state("a")
    state.set_workout_input("b")
    assert OperationFlags.CAN_ADD in state.operation_flags
    assert OperationFlags.CAN_UPDATE not in state.operation_flags
    state.set_workout_input("a")
    assert OperationFlags.CAN_ADD not in state.operation_flags


def test_add_workout_appends_and_persists(tmp_path):
    storage = Storage(tmp_path)
    state = AppState(storage=storage)
    state.set_workout_input("push ups")
    state.add_workout()
    assert [w.text for w in state.workouts] == ["push ups"]
    assert state.workout_input is None
    assert storage.read_workouts_state() == WorkoutsState(0, ["push ups"])


def test_add_duplicate_workout_is_ignored():
    state = _state("a")
    state.set_workout_input("a")
    state.add_workout()
    assert [w.text for w in state.workouts] == ["a"]


def test_update_workout_replaces_text_and_keeps_id():
    state = _state("a", "b")
    original = state.workouts[1]
    state.select_workout(original)
    state.set_workout_input("c")
    state.update_workout()
    assert [w.text for w in state.workouts] == ["a", "c"]
    assert state.workouts[1].id == original.id


def test_update_without_selection_does_nothing():
    state = _state("a")
    state.set_workout_input("c")
    state.update_workout()
    assert [w.text for w in state.workouts] == ["a"]


def test_move_workout_up_and_down():
    state = _state("a", "b", "c")
    state.select_workout(state.workouts[1])
    state.move_workout_up()
    assert [w.text for w in state.workouts] == ["b", "a", "c"]
    state.move_workout_up()
    assert [w.text for w in state.workouts] == ["b", "a", "c"]
    state.move_workout_down()
    state.move_workout_down()
    assert [w.text for w in state.workouts] == ["a", "c", "b"]
    state.move_workout_down()
    assert [w.text for w in state.workouts] == ["a", "c", "b"]


def test_pending_confirmation_messages():
    state = _state("a")
    assert state.pending_confirmation() is None
    state.initiate_clearance()
    assert state.pending_confirmation() == ConfirmationPayload(
        ConfirmationTopic.CLEARANCE, "Removing all workouts. Are you sure?"
    )
    state.initiate_workout_deletion()
    assert state.pending_confirmation() == ConfirmationPayload(
        ConfirmationTopic.WORKOUT_DELETION, None
    )


def test_confirm_marks_payload_confirmed():
    payload = ConfirmationPayload(ConfirmationTopic.CLEARANCE)
    assert payload.confirmed is False
    assert payload.confirm().confirmed is True
    assert payload.confirm().topic is ConfirmationTopic.CLEARANCE


def test_cancelled_clearance_keeps_workouts():
    state = _state("a", "b")
    state.initiate_clearance()
    state.close_confirmation_dialog(state.pending_confirmation())
    assert state.show_confirmation is None
    assert len(state.workouts) == 2


def test_confirmed_clearance_empties_list():
    state = _state("a", "b", workout_index=1)
    state.initiate_clearance()
    state.close_confirmation_dialog(state.pending_confirmation().confirm())
    assert state.workouts == []
    assert state.workout_index == 0
    assert state.operation_flags == OperationFlags.NONE


@pytest.mark.parametrize(
    "index, delete_at, expected_index",
    [(2, 0, 1), (2, 2, 1), (0, 0, 0), (0, 2, 0)],
)
def test_confirmed_deletion_adjusts_index(index, delete_at, expected_index):
    state = _state("a", "b", "c", workout_index=index)
    state.select_workout(state.workouts[delete_at])
    state.initiate_workout_deletion()
    state.close_confirmation_dialog(state.pending_confirmation().confirm())
    assert len(state.workouts) == 2
    assert state.workout_index == expected_index
    assert state.workout_selection is None


def test_from_storage_and_window_position(tmp_path):
    (tmp_path / "workouts.json").write_text(
        json.dumps({"index": 1, "workouts": ["a", "b"]}), encoding="utf-8"
    )
    storage = Storage(tmp_path)
    state = AppState.from_storage(storage)
    assert [w.text for w in state.workouts] == ["a", "b"]
    assert state.workout_index == 1
    assert state.window_position is None
    state.window_moved(10.0, 20.0)
    state.save_window_position()
    assert storage.read_window_state() == Position(10.0, 20.0)


def test_settings_view_model_reflects_state():
    state = _state("a")
    state.select_workout(state.workouts[0])
    model = state.settings_view_model()
    assert [w.text for w in model.workouts] == ["a"]
    assert model.workout_selection == state.workouts[0]
    assert model.workout_input == "a"
    assert model.operation_flags == state.operation_flags