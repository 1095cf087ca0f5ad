from __future__ import annotations
from typing import Optional, Protocol, Sequence

from .entities import Task

TaskId = str


# ---- Error model ----
class UseCaseError(Exception):
    """Base class for use case level errors (user-presentable)."""

    def __init__(self, code: str, message: str, meta: Optional[dict] = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.meta = meta


# ---- Callbacks ----
class LoadTasksCallback(Protocol):
    """Completion target for ``get_tasks``.

    A single ``get_tasks`` call may resolve more than once (cached data first,
    then the authoritative copy). Implementations must tolerate that.
    """

    def on_tasks_loaded(self, tasks: Sequence[Task]) -> None: ...
    def on_data_not_available(self) -> None: ...


class GetTaskCallback(Protocol):
    def on_task_loaded(self, task: Task) -> None: ...
    def on_data_not_available(self) -> None: ...


# ---- Ports (Hexagonal boundaries) ----
class TasksDataSource(Protocol):
    """Read/write access to one task store (local file, REST server, memory)."""

    def get_tasks(self, callback: LoadTasksCallback) -> None: ...
    def get_task(self, task_id: TaskId, callback: GetTaskCallback) -> None: ...
    def save_task(self, task: Task) -> None: ...
    def complete_task(self, task: Task) -> None: ...
    def activate_task(self, task: Task) -> None: ...
    def clear_completed_tasks(self) -> None: ...
    def refresh_tasks(self) -> None: ...
    def delete_all_tasks(self) -> None: ...
    def delete_task(self, task_id: TaskId) -> None: ...


class TasksRepositoryPort(TasksDataSource, Protocol):
    """Data source facade consumed by the presenter.

    ``refresh_tasks`` and the mutations are fire-and-forget; only reads report
    completion, through callbacks.
    """


class BusyCounter(Protocol):
    """Shared counter that lets instrumentation detect quiescence."""

    def increment(self) -> None: ...
    def decrement(self) -> None: ...
    def is_idle_now(self) -> bool: ...


class TasksView(Protocol):
    """Passive display surface driven by ``TasksPresenter``."""

    def set_presenter(self, presenter) -> None: ...
    def set_loading_indicator(self, active: bool) -> None: ...
    def show_tasks(self, tasks: Sequence[Task]) -> None: ...
    def show_add_task(self) -> None: ...
    def show_task_details_ui(self, task_id: TaskId) -> None: ...
    def show_task_marked_complete(self) -> None: ...
    def show_task_marked_active(self) -> None: ...
    def show_completed_tasks_cleared(self) -> None: ...
    def show_loading_tasks_error(self) -> None: ...
    def show_no_tasks(self) -> None: ...
    def show_no_active_tasks(self) -> None: ...
    def show_no_completed_tasks(self) -> None: ...
    def show_active_filter_label(self) -> None: ...
    def show_completed_filter_label(self) -> None: ...
    def show_all_filter_label(self) -> None: ...
    def show_successfully_saved_message(self) -> None: ...
    def is_active(self) -> bool: ...
