from __future__ import annotations

import tkinter as tk
from tkinter import ttk


class TaskDetailDialog(tk.Toplevel):
    """Read-only task detail window. Content arrives via ``show_task``."""

    def __init__(self, parent: tk.Misc, task_id: str) -> None:
        super().__init__(parent)
        self.title("Task details")
        self.transient(parent)
        self.task_id = task_id

        self.title_var = tk.StringVar(value="Loading…")
        self.description_var = tk.StringVar(value="")
        self.status_var = tk.StringVar(value="")

        pad = dict(padx=10, pady=4)
        ttk.Label(self, textvariable=self.title_var, font=("TkDefaultFont", 12, "bold")).pack(anchor="w", **pad)
        ttk.Label(self, textvariable=self.description_var, wraplength=360, justify="left").pack(anchor="w", **pad)
        ttk.Label(self, textvariable=self.status_var).pack(anchor="w", **pad)
        ttk.Button(self, text="Close", command=self.destroy).pack(anchor="e", **pad)

    def show_task(self, title: str, description: str, completed: bool) -> None:
        self.title_var.set(title or "(untitled)")
        self.description_var.set(description)
        self.status_var.set("Completed" if completed else "Active")

    def show_missing(self) -> None:
        self.title_var.set("Task not found")
        self.description_var.set("")
        self.status_var.set("")
