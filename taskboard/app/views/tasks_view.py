"""
TasksView
---------
Tkinter frame that implements the ``TasksView`` port. This file contains only
View code: no repository access, no filtering. User actions are forwarded to
the presenter bound through ``set_presenter``; navigation requests are
forwarded to callbacks injected by the app.
"""
from __future__ import annotations

import tkinter as tk
from tkinter import ttk
from typing import Callable, Optional, Sequence

from taskboard.domain.entities import Task, TasksFilterType
from taskboard.viewmodels.tasks_vm import EMPTY_MESSAGES, MESSAGES, TasksVM


class TasksView(ttk.Frame):
    """Task list with filter selector, loading label and status bar."""

    OnVoid = Optional[Callable[[], None]]
    OnTaskId = Optional[Callable[[str], None]]

    _FILTER_CHOICES = (
        ("All", TasksFilterType.ALL_TASKS),
        ("Active", TasksFilterType.ACTIVE_TASKS),
        ("Completed", TasksFilterType.COMPLETED_TASKS),
    )

    def __init__(
        self,
        parent: tk.Misc,
        *,
        vm: Optional[TasksVM] = None,
        on_show_add_task: OnVoid = None,
        on_show_task_details: OnTaskId = None,
        **kwargs,
    ) -> None:
        super().__init__(parent, **kwargs)
        self.vm = vm or TasksVM()
        self._presenter = None
        self._on_show_add_task = on_show_add_task
        self._on_show_task_details = on_show_task_details
        self._destroyed = False

        self.filter_var = tk.StringVar(value=self._FILTER_CHOICES[0][0])
        self.filter_label_var = tk.StringVar(value=self.vm.filter_title)
        self.loading_var = tk.StringVar(value="")
        self.status_var = tk.StringVar(value="Ready.")
        self.empty_var = tk.StringVar(value="")

        self._build_ui()

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------
    def _build_ui(self) -> None:
        self.columnconfigure(0, weight=1)
        self.rowconfigure(2, weight=1)

        toolbar = ttk.Frame(self)
        toolbar.grid(row=0, column=0, sticky="ew", padx=4, pady=4)
        ttk.Label(toolbar, text="Show:").pack(side=tk.LEFT)
        self.cmb_filter = ttk.Combobox(
            toolbar,
            textvariable=self.filter_var,
            values=[label for label, _ in self._FILTER_CHOICES],
            state="readonly",
            width=12,
        )
        self.cmb_filter.pack(side=tk.LEFT, padx=(4, 12))
        self.cmb_filter.bind("<<ComboboxSelected>>", self._on_filter_selected)
        ttk.Button(toolbar, text="Add", command=self._on_add_click).pack(side=tk.LEFT, padx=(0, 6))
        ttk.Button(toolbar, text="Toggle done", command=self._on_toggle_click).pack(side=tk.LEFT, padx=(0, 6))
        ttk.Button(toolbar, text="Clear completed", command=self._on_clear_click).pack(side=tk.LEFT, padx=(0, 6))
        ttk.Button(toolbar, text="Refresh", command=self._on_refresh_click).pack(side=tk.LEFT)
        ttk.Label(toolbar, textvariable=self.loading_var).pack(side=tk.RIGHT)

        ttk.Label(self, textvariable=self.filter_label_var, font=("TkDefaultFont", 11, "bold")).grid(
            row=1, column=0, sticky="w", padx=8
        )

        self.tree = ttk.Treeview(
            self,
            columns=("done", "title"),
            show="headings",
            selectmode="browse",
            height=14,
        )
        self.tree.heading("done", text="")
        self.tree.heading("title", text="Task")
        self.tree.column("done", width=40, anchor="center", stretch=False)
        self.tree.column("title", width=420, anchor="w")
        self.tree.grid(row=2, column=0, sticky="nsew", padx=4)
        self.tree.bind("<Double-1>", self._on_row_double_click)

        self.lbl_empty = ttk.Label(self, textvariable=self.empty_var, anchor="center")

        status = ttk.Frame(self)
        status.grid(row=3, column=0, sticky="ew", padx=8, pady=(4, 8))
        ttk.Label(status, textvariable=self.status_var).pack(side=tk.LEFT)

    # ------------------------------------------------------------------
    # TasksView port
    # ------------------------------------------------------------------
    def set_presenter(self, presenter) -> None:
        self._presenter = presenter

    def is_active(self) -> bool:
        if self._destroyed:
            return False
        try:
            return bool(self.winfo_exists())
        except tk.TclError:
            return False

    def set_loading_indicator(self, active: bool) -> None:
        self.loading_var.set("Loading…" if active else "")

    def show_tasks(self, tasks: Sequence[Task]) -> None:
        rows = self.vm.set_tasks(tasks)
        self.tree.delete(*self.tree.get_children())
        for row in rows:
            self.tree.insert("", tk.END, iid=row.task_id, values=(row.done_mark, row.title))
        self.lbl_empty.grid_remove()
        self.tree.grid()

    def show_no_tasks(self) -> None:
        self._show_empty(TasksFilterType.ALL_TASKS)

    def show_no_active_tasks(self) -> None:
        self._show_empty(TasksFilterType.ACTIVE_TASKS)

    def show_no_completed_tasks(self) -> None:
        self._show_empty(TasksFilterType.COMPLETED_TASKS)

    def show_all_filter_label(self) -> None:
        self.filter_label_var.set(self.vm.set_filter_title(TasksFilterType.ALL_TASKS))

    def show_active_filter_label(self) -> None:
        self.filter_label_var.set(self.vm.set_filter_title(TasksFilterType.ACTIVE_TASKS))

    def show_completed_filter_label(self) -> None:
        self.filter_label_var.set(self.vm.set_filter_title(TasksFilterType.COMPLETED_TASKS))

    def show_loading_tasks_error(self) -> None:
        self.set_loading_indicator(False)
        self.status_var.set(MESSAGES["load_error"])

    def show_task_marked_complete(self) -> None:
        self.status_var.set(MESSAGES["marked_complete"])

    def show_task_marked_active(self) -> None:
        self.status_var.set(MESSAGES["marked_active"])

    def show_completed_tasks_cleared(self) -> None:
        self.status_var.set(MESSAGES["cleared"])

    def show_successfully_saved_message(self) -> None:
        self.status_var.set(MESSAGES["saved"])

    def show_add_task(self) -> None:
        if self._on_show_add_task:
            self._on_show_add_task()

    def show_task_details_ui(self, task_id: str) -> None:
        if self._on_show_task_details:
            self._on_show_task_details(task_id)

    # ------------------------------------------------------------------
    # Widget lifecycle
    # ------------------------------------------------------------------
    def destroy(self) -> None:
        self._destroyed = True
        super().destroy()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _show_empty(self, filtering: TasksFilterType) -> None:
        self.vm.clear()
        self.tree.delete(*self.tree.get_children())
        self.tree.grid_remove()
        self.empty_var.set(EMPTY_MESSAGES[filtering])
        self.lbl_empty.grid(row=2, column=0, sticky="nsew", padx=4)

    def _selected_task(self) -> Optional[Task]:
        selection = self.tree.selection()
        if not selection:
            return None
        return self.vm.task_for(selection[0])

    def _on_filter_selected(self, _event=None) -> None:
        if not self._presenter:
            return
        label = self.filter_var.get()
        filtering = next((f for text, f in self._FILTER_CHOICES if text == label), TasksFilterType.ALL_TASKS)
        self._presenter.set_filtering(filtering)
        self._presenter.load_tasks(False)

    def _on_add_click(self) -> None:
        if self._presenter:
            self._presenter.add_new_task()

    def _on_toggle_click(self) -> None:
        task = self._selected_task()
        if task is None or not self._presenter:
            return
        if task.is_completed:
            self._presenter.activate_task(task)
        else:
            self._presenter.complete_task(task)

    def _on_clear_click(self) -> None:
        if self._presenter:
            self._presenter.clear_completed_tasks()

    def _on_refresh_click(self) -> None:
        if self._presenter:
            self._presenter.load_tasks(True)

    def _on_row_double_click(self, _event=None) -> None:
        task = self._selected_task()
        if task is not None and self._presenter:
            self._presenter.open_task_details(task)


__all__ = ["TasksView"]
