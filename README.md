# workoutiter

A small desktop window that shows one workout at a time from your own list.
Press **Next** to move on to the next one. The list wraps around, so you work
through your workouts in a fixed order across sessions.

## Installing

```
pip install .
```

The window uses Tkinter, which ships with most Python installations. The
package has no other dependencies.

## Running

```
workoutiter
workoutiter --data-dir ~/workouts
```

`--data-dir` names the directory that holds the state files. It defaults to
the current working directory.

The main page shows the current workout, a **Next** button and a footer such
as `2 from 5`. **Next** is enabled only when there is more than one workout.
When the list is empty, the page shows `<empty>` and `0 from 0`.

The **S** button (tooltip "Settings") opens the settings page. On that page
you can:

- type a new workout and **Add** it, or press Enter in the input field. Empty
  text is refused, and so is text that matches an existing workout exactly.
- click a workout in the list to select it and copy its text into the input
  field. Click it again to deselect it.
- edit the text and **Update** the selected workout. The new text must also be
  non-empty and differ from every workout in the list.
- move the selected workout up (↑) or down (↓).
- delete the selected workout with **X**, or remove all workouts with
  **Clear**. Both ask for confirmation first.

Buttons are disabled while their action is not possible. **Ok** returns to the
main page and clears the selection and the input.

If the environment variable `UI_DEV` is `true` (in any case), the layout
containers are drawn in random colours, which helps when working on the
layout.

## Files

The program keeps three files in the data directory:

- `workouts.json` holds the list of workouts and the index of the current one,
  for example `{"index":0,"workouts":["Push-ups","Squats"]}`. An empty file of
  this kind is created on first start. The program saves it after every
  change.
- `window.json` holds the last window position. It is written when the window
  is closed. A missing, unreadable or negative position is ignored.
- `error.log` collects timestamped messages whenever saving state fails.

If `workouts.json` cannot be set up, the program prints the error and exits
with one of these codes instead of opening a window:

| Code | Cause |
| ---- | ----- |
| 1 | The file could not be created. |
| 2 | The file could not be read or parsed. |
| 3 | The stored index lies outside the list. |

## Using it as a library

The state logic in `workoutiter.state` and the file handling in
`workoutiter.persistence` do not depend on the user interface:

```python
from workoutiter.persistence import Storage
from workoutiter.state import AppState

state = AppState.from_storage(Storage("."))
state.open_settings()
state.set_workout_input("Push-ups")
state.add_workout()
state.close_settings()
print(state.main_view_model())
```

An `AppState` created without a `Storage` keeps everything in memory and
writes nothing. `Storage` raises `PersistenceError` when it fails. For
failures at startup, the error's `exit_code` gives the code listed in the
table above.

## Tests

```
pip install ".[test]"
pytest
```