from __future__ import annotations

import tkinter as tk
from tkinter import ttk
from typing import Callable, Optional


class AddTaskDialog(tk.Toplevel):
    """Modal dialog to enter a new task (UI-only).

    ``on_save`` receives ``(title, description)`` and returns an error message
    to display, or ``None`` when the task was accepted and the dialog may close.
    """

    OnSave = Optional[Callable[[str, str], Optional[str]]]
    OnVoid = Optional[Callable[[], None]]

    def __init__(
        self,
        parent: tk.Misc,
        *,
        on_save: OnSave = None,
        on_close: OnVoid = None,
    ) -> None:
        super().__init__(parent)
        self.title("New task")
        self.transient(parent)
        self.resizable(False, False)

        self._on_save = on_save
        self._on_close = on_close
        self.protocol("WM_DELETE_WINDOW", self._on_close_clicked)

        self.title_var = tk.StringVar(value="")
        self.error_var = tk.StringVar(value="")

        self._build_ui()
        self.grab_set()
        self.focus_set()

    def _build_ui(self) -> None:
        pad = dict(padx=8, pady=6)
        ttk.Label(self, text="Title:").grid(row=0, column=0, sticky="w", **pad)
        ttk.Entry(self, textvariable=self.title_var, width=40).grid(row=0, column=1, sticky="ew", **pad)
        ttk.Label(self, text="Description:").grid(row=1, column=0, sticky="nw", **pad)
        self.txt_description = tk.Text(self, width=40, height=6)
        self.txt_description.grid(row=1, column=1, sticky="nsew", **pad)
        ttk.Label(self, textvariable=self.error_var, foreground="#b42318").grid(
            row=2, column=0, columnspan=2, sticky="w", padx=8
        )

        buttons = ttk.Frame(self)
        buttons.grid(row=3, column=0, columnspan=2, sticky="e", **pad)
        ttk.Button(buttons, text="Cancel", command=self._on_close_clicked).pack(side=tk.RIGHT)
        ttk.Button(buttons, text="Save", command=self._on_save_clicked).pack(side=tk.RIGHT, padx=(0, 6))

    def _on_save_clicked(self) -> None:
        if not self._on_save:
            self.destroy()
            return
        description = self.txt_description.get("1.0", tk.END)
        error = self._on_save(self.title_var.get(), description)
        if error:
            self.error_var.set(error)
            return
        self.destroy()

    def _on_close_clicked(self) -> None:
        if self._on_close:
            self._on_close()
        self.destroy()
