"""The Tk user interface: main page, settings page and confirmation dialog."""

from __future__ import annotations

import argparse
import os
import random
from collections.abc import Callable, Mapping
from typing import Any

from workoutiter.persistence import PersistenceError, Storage
from workoutiter.state import (
    AppState,
    ConfirmationPayload,
    OperationFlags,
    Page,
)

APP_TITLE = "Workout Iterator"
DEFAULT_CONFIRMATION_TEXT = "Are you sure?"

WINDOW_WIDTH = 500
WINDOW_HEIGHT = 300
HEADER_HEIGHT = 50
FOOTER_HEIGHT = 40
SETTINGS_FOOTER_HEIGHT = 50
SPACING_S = 5
SPACING_M = 10
SPACING_X = 15
SPACING_XL = 20
SPACING_XXL = 30
DIALOG_WIDTH = 230
DIALOG_HEIGHT = 130

LIST_BACKGROUND = (20, 20, 20)
DIALOG_BORDER = (130, 130, 130)


def footer_text(number: int, total: int) -> str:
    """The text under the main page: the current workout's number and the total."""
    return f"{number} from {total}"


def confirmation_text(payload: ConfirmationPayload) -> str:
    """The question a confirmation dialog asks."""
    return payload.message if payload.message is not None else DEFAULT_CONFIRMATION_TEXT


def is_ui_dev(environ: Mapping[str, str] | None = None) -> bool:
    """Whether UI_DEV is set to true, which colours the layout containers."""
    if environ is None:
        environ = os.environ
    return environ.get("UI_DEV", "").lower() == "true"


def _rgb(red: int, green: int, blue: int) -> str:
    return f"#{red:02x}{green:02x}{blue:02x}"


def _random_colour() -> str:
    return _rgb(random.randint(0, 255), random.randint(0, 255), random.randint(0, 255))


class _Tooltip:
    """A small label shown to the left of a widget while the pointer is over it."""

    def __init__(self, widget: Any, text: str) -> None:
        import tkinter as tk

        self._widget = widget
        self._label = tk.Label(
            widget.master, text=text, font=("TkDefaultFont", 10), relief="solid", bd=1
        )
        widget.bind("<Enter>", self._show, add="+")
        widget.bind("<Leave>", self._hide, add="+")

    def _show(self, _event: Any = None) -> None:
        self._label.place(
            in_=self._widget, relx=0.0, rely=0.5, x=-SPACING_S, anchor="e"
        )

    def _hide(self, _event: Any = None) -> None:
        self._label.place_forget()


class WorkoutIteratorApp:
    """Widgets bound to an AppState; every user action updates the state and redraws."""

    def __init__(self, root: Any, state: AppState) -> None:
        import tkinter as tk

        self._tk = tk
        self.root = root
        self.state = state
        self._dev = is_ui_dev(os.environ)
        self._dialog: Any = None
        self._suppress_input = False
        self._input_var = tk.StringVar(master=root)
        self._input_var.trace_add("write", self._on_input_changed)

        self._main_page = self._build_main_page()
        self._settings_page = self._build_settings_page()

        root.protocol("WM_DELETE_WINDOW", self.close)
        root.bind("<Configure>", self._on_configure)
        self.refresh()

    # Layout

    def _container(self, parent: Any, **options: Any) -> Any:
        frame = self._tk.Frame(parent, **options)
        if self._dev:
            frame.configure(bg=_random_colour())
        return frame

    def _build_main_page(self) -> Any:
        tk = self._tk
        page = tk.Frame(self.root, width=WINDOW_WIDTH, height=WINDOW_HEIGHT)
        page.pack_propagate(False)

        header = self._container(page, height=HEADER_HEIGHT)
        header.pack(side="top", fill="x")
        header.pack_propagate(False)
        settings_button = tk.Button(
            header, text="S", command=lambda: self._do(self.state.open_settings)
        )
        settings_button.pack(side="right", padx=(0, SPACING_M))
        _Tooltip(settings_button, "Settings")

        footer = self._container(page, height=FOOTER_HEIGHT)
        footer.pack(side="bottom", fill="x")
        footer.pack_propagate(False)
        self._footer_label = tk.Label(footer, anchor="w")
        self._footer_label.pack(side="left", padx=(SPACING_M, 0))

        body = self._container(page)
        body.pack(side="top", fill="both", expand=True, pady=SPACING_XL)
        self._workout_label = tk.Label(body, font=("TkDefaultFont", 28))
        self._workout_label.pack(expand=True)
        self._next_button = tk.Button(
            body,
            text="Next",
            padx=SPACING_XXL,
            pady=SPACING_X,
            command=lambda: self._do(self.state.next_workout),
        )
        self._next_button.pack(expand=True)
        return page

    def _build_settings_page(self) -> Any:
        tk = self._tk
        page = tk.Frame(self.root, width=WINDOW_WIDTH, height=WINDOW_HEIGHT)
        page.pack_propagate(False)

        footer = self._container(page, height=SETTINGS_FOOTER_HEIGHT)
        footer.pack(side="bottom", fill="x")
        footer.pack_propagate(False)
        tk.Button(
            footer, text="Ok", command=lambda: self._do(self.state.close_settings)
        ).pack(side="right", padx=(0, SPACING_M))

        body = tk.Frame(page, height=WINDOW_HEIGHT - SETTINGS_FOOTER_HEIGHT)
        body.pack(side="top", fill="both", expand=True, padx=SPACING_S, pady=SPACING_S)

        list_frame = tk.Frame(
            body,
            width=WINDOW_WIDTH // 2 - 2 * SPACING_S,
            height=WINDOW_HEIGHT - SETTINGS_FOOTER_HEIGHT - 2 * SPACING_S,
            bg=_rgb(*LIST_BACKGROUND),
        )
        list_frame.pack(side="left", fill="y", padx=SPACING_S, pady=SPACING_S)
        list_frame.pack_propagate(False)
        scrollbar = tk.Scrollbar(list_frame, orient="vertical")
        scrollbar.pack(side="right", fill="y")
        self._listbox = tk.Listbox(
            list_frame,
            bg=_rgb(*LIST_BACKGROUND),
            fg="white",
            selectbackground=_rgb(70, 70, 70),
            selectforeground="white",
            activestyle="none",
            exportselection=False,
            yscrollcommand=scrollbar.set,
        )
        self._listbox.pack(side="left", fill="both", expand=True, padx=(0, SPACING_X))
        scrollbar.configure(command=self._listbox.yview)
        self._listbox.bind("<ButtonRelease-1>", self._on_list_click)
        self._listbox.bind("<Button-1>", lambda _event: "break")

        panel = tk.Frame(body)
        panel.pack(side="left", fill="both", expand=True, padx=SPACING_S, pady=SPACING_S)

        self._entry = tk.Entry(panel, textvariable=self._input_var)
        self._entry.pack(side="top", fill="x", pady=(0, SPACING_S))
        self._entry.bind("<Return>", self._on_submit)

        add_update_row = tk.Frame(panel)
        add_update_row.pack(side="top", anchor="w", pady=(0, SPACING_M + SPACING_S))
        self._add_button = tk.Button(
            add_update_row, text="Add", command=lambda: self._do(self.state.add_workout)
        )
        self._add_button.pack(side="left", padx=(0, SPACING_S))
        self._update_button = tk.Button(
            add_update_row,
            text="Update",
            command=lambda: self._do(self.state.update_workout),
        )
        self._update_button.pack(side="left")

        edit_row = tk.Frame(panel)
        edit_row.pack(side="top", anchor="w", pady=(0, SPACING_M + SPACING_S))
        self._move_up_button = tk.Button(
            edit_row, text="\u2191", command=lambda: self._do(self.state.move_workout_up)
        )
        self._move_up_button.pack(side="left", padx=(0, SPACING_S))
        self._move_down_button = tk.Button(
            edit_row,
            text="\u2193",
            command=lambda: self._do(self.state.move_workout_down),
        )
        self._move_down_button.pack(side="left", padx=(0, SPACING_M + SPACING_S))
        self._delete_button = tk.Button(
            edit_row,
            text="X",
            command=lambda: self._do(self.state.initiate_workout_deletion),
        )
        self._delete_button.pack(side="left")

        self._clear_button = tk.Button(
            panel, text="Clear", command=lambda: self._do(self.state.initiate_clearance)
        )
        self._clear_button.pack(side="top", anchor="w")
        return page

    # Redrawing

    def refresh(self) -> None:
        """Redraw every widget from the current state."""
        if self.state.current_page is Page.MAIN:
            self._settings_page.pack_forget()
            self._main_page.pack(fill="both", expand=True)
        else:
            self._main_page.pack_forget()
            self._settings_page.pack(fill="both", expand=True)

        self._refresh_main()
        self._refresh_settings()
        self._refresh_dialog()

    def _refresh_main(self) -> None:
        model = self.state.main_view_model()
        self._workout_label.configure(text=model.workout)
        self._footer_label.configure(text=footer_text(model.selected_number, model.total))
        self._set_enabled(self._next_button, model.has_next)

    def _refresh_settings(self) -> None:
        model = self.state.settings_view_model()

        self._listbox.delete(0, "end")
        for workout in model.workouts:
            self._listbox.insert("end", workout.text)
        self._listbox.selection_clear(0, "end")
        if model.workout_selection is not None:
            for index, workout in enumerate(model.workouts):
                if workout.id == model.workout_selection.id:
                    self._listbox.selection_set(index)
                    self._listbox.see(index)
                    break

        desired = model.workout_input or ""
        if self._input_var.get() != desired:
            self._suppress_input = True
            try:
                self._input_var.set(desired)
            finally:
                self._suppress_input = False

        flags = model.operation_flags
        self._set_enabled(self._add_button, OperationFlags.CAN_ADD in flags)
        self._set_enabled(self._update_button, OperationFlags.CAN_UPDATE in flags)
        self._set_enabled(self._move_up_button, OperationFlags.CAN_MOVE_UP in flags)
        self._set_enabled(self._move_down_button, OperationFlags.CAN_MOVE_DOWN in flags)
        self._set_enabled(self._delete_button, OperationFlags.CAN_DELETE in flags)
        self._set_enabled(self._clear_button, OperationFlags.CAN_CLEAR in flags)

    def _refresh_dialog(self) -> None:
        payload = self.state.pending_confirmation()
        if payload is None:
            self._destroy_dialog()
        elif self._dialog is None:
            self._open_dialog(payload)

    def _set_enabled(self, widget: Any, enabled: bool) -> None:
        widget.configure(state="normal" if enabled else "disabled")

    # Confirmation dialog

    def _open_dialog(self, payload: ConfirmationPayload) -> None:
        tk = self._tk
        dialog = tk.Toplevel(self.root)
        dialog.transient(self.root)
        dialog.resizable(False, False)
        dialog.configure(
            bg="black",
            highlightthickness=2,
            highlightbackground=_rgb(*DIALOG_BORDER),
            padx=SPACING_M,
            pady=SPACING_M,
        )
        x = self.root.winfo_rootx() + (WINDOW_WIDTH - DIALOG_WIDTH) // 2
        y = self.root.winfo_rooty() + (WINDOW_HEIGHT - DIALOG_HEIGHT) // 2
        dialog.geometry(f"{DIALOG_WIDTH}x{DIALOG_HEIGHT}+{x}+{y}")

        content = tk.Frame(dialog, bg="black")
        content.pack(expand=True)
        tk.Label(content, text=confirmation_text(payload), bg="black", fg="white").pack(
            side="top", pady=(0, SPACING_XL)
        )
        buttons = tk.Frame(content, bg="black")
        buttons.pack(side="top")
        tk.Button(
            buttons, text="Ok", command=lambda: self._close_dialog(payload.confirm())
        ).pack(side="left", padx=(0, SPACING_XL))
        tk.Button(
            buttons, text="Cancel", command=lambda: self._close_dialog(payload)
        ).pack(side="left")

        dialog.protocol("WM_DELETE_WINDOW", lambda: self._close_dialog(payload))
        self._dialog = dialog
        try:
            dialog.grab_set()
        except tk.TclError:
            pass

    def _close_dialog(self, payload: ConfirmationPayload) -> None:
        self._destroy_dialog()
        self.state.close_confirmation_dialog(payload)
        self.refresh()

    def _destroy_dialog(self) -> None:
        if self._dialog is not None:
            dialog, self._dialog = self._dialog, None
            dialog.destroy()

    # Events

    def _do(self, action: Callable[..., None], *args: Any) -> None:
        action(*args)
        self.refresh()

    def _on_input_changed(self, *_args: Any) -> None:
        if self._suppress_input:
            return
        value = self._input_var.get()
        self.state.set_workout_input(value or None)
        self.refresh()

    def _on_submit(self, _event: Any = None) -> str:
        if OperationFlags.CAN_ADD in self.state.operation_flags:
            self._do(self.state.add_workout)
        return "break"

    def _on_list_click(self, event: Any) -> str:
        index = self._listbox.nearest(event.y)
        workouts = self.state.workouts
        if 0 <= index < len(workouts) and self._listbox.bbox(index) is not None:
            self._do(self.state.select_workout, workouts[index])
        return "break"

    def _on_configure(self, event: Any) -> None:
        if event.widget is self.root:
            self.state.window_moved(
                float(self.root.winfo_x()), float(self.root.winfo_y())
            )

    def close(self) -> None:
        """Store the window position and close the window."""
        self.state.save_window_position()
        self._destroy_dialog()
        self.root.destroy()


def main(argv: list[str] | None = None) -> int:
    """Start the application; returns the process exit code."""
    parser = argparse.ArgumentParser(prog="workoutiter", description=APP_TITLE)
    parser.add_argument(
        "--data-dir",
        default=".",
        help="directory holding workouts.json, window.json and error.log",
    )
    args = parser.parse_args(argv)

    storage = Storage(args.data_dir)
    try:
        state = AppState.from_storage(storage)
    except PersistenceError as error:
        print(error)
        return error.exit_code

    import tkinter as tk

    root = tk.Tk()
    root.title(APP_TITLE)
    geometry = f"{WINDOW_WIDTH}x{WINDOW_HEIGHT}"
    if state.window_position is not None:
        geometry += f"+{int(state.window_position.x)}+{int(state.window_position.y)}"
    root.geometry(geometry)
    root.resizable(False, False)
    WorkoutIteratorApp(root, state)
    root.mainloop()
    return 0