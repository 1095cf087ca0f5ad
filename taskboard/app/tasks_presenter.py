"""UI-facing presenter that loads, filters and mutates tasks for ``TasksView``.

Call context:
    ``taskboard.app.main`` builds one presenter per tasks screen and binds it
    to the view with ``view.set_presenter``. View callbacks (filter change,
    checkbox toggle, menu actions) call the public methods below.

Threading:
    Presenter state (current filter, first-load latch) is owned by the UI
    thread. Repository reads may resolve later, possibly more than once and
    possibly after the view was torn down, so every completion re-checks
    ``view.is_active`` before touching the view.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from taskboard.domain.entities import Task, TasksFilterType
from taskboard.domain.filtering import filter_tasks
from taskboard.domain.ports import BusyCounter, TasksRepositoryPort, TasksView
from taskboard.utils.idling import GLOBAL_BUSY_COUNTER

REQUEST_ADD_TASK = 1
RESULT_OK = -1
RESULT_CANCELED = 0


class _LoadCallback:
    """Routes one load request's completions back into the presenter."""

    def __init__(self, presenter: "TasksPresenter", show_loading_ui: bool) -> None:
        self._presenter = presenter
        self._show_loading_ui = show_loading_ui

    def on_tasks_loaded(self, tasks: Sequence[Task]) -> None:
        self._presenter._on_tasks_loaded(tasks, self._show_loading_ui)

    def on_data_not_available(self) -> None:
        self._presenter._on_data_not_available()


class TasksPresenter:
    """Listens to user actions from the tasks view and keeps it up to date."""

    def __init__(
        self,
        tasks_repository: TasksRepositoryPort,
        tasks_view: TasksView,
        *,
        busy_counter: Optional[BusyCounter] = None,
    ) -> None:
        if tasks_repository is None:
            raise ValueError("tasks_repository cannot be None")
        if tasks_view is None:
            raise ValueError("tasks_view cannot be None")
        self._log = logging.getLogger(__name__)
        self._repository = tasks_repository
        self._view = tasks_view
        self._busy = busy_counter if busy_counter is not None else GLOBAL_BUSY_COUNTER
        self._filtering = TasksFilterType.ALL_TASKS
        self._first_load = True
        self._view.set_presenter(self)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def start(self) -> None:
        self.load_tasks(False)

    def result(self, request_code: int, result_code: int) -> None:
        """Handle the outcome of a screen opened by this presenter."""
        if request_code == REQUEST_ADD_TASK and result_code == RESULT_OK:
            self._view.show_successfully_saved_message()

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------
    def load_tasks(self, force_update: bool) -> None:
        """Load tasks with a visible loading indicator.

        The very first call always forces a repository refresh.
        """
        force = force_update or self._first_load
        self._first_load = False
        self._load(force, show_loading_ui=True)

    def _load(self, force_update: bool, show_loading_ui: bool) -> None:
        if show_loading_ui:
            self._view.set_loading_indicator(True)
        if force_update:
            self._repository.refresh_tasks()

        # The read may resolve on another thread; mark busy before dispatching.
        self._busy.increment()
        self._log.debug(
            "Loading tasks (force=%s, loading_ui=%s, filter=%s)",
            force_update,
            show_loading_ui,
            self._filtering.value,
        )
        self._repository.get_tasks(_LoadCallback(self, show_loading_ui))

    def _on_tasks_loaded(self, tasks: Sequence[Task], show_loading_ui: bool) -> None:
        # May run twice per request (cache, then remote); never drop below idle.
        if not self._busy.is_idle_now():
            self._busy.decrement()

        tasks_to_show = filter_tasks(tasks, self._filtering)

        if not self._view.is_active():
            self._log.debug("View inactive, dropping %d loaded tasks", len(tasks_to_show))
            return
        if show_loading_ui:
            self._view.set_loading_indicator(False)
        self._process_tasks(tasks_to_show)

    def _on_data_not_available(self) -> None:
        if not self._view.is_active():
            self._log.debug("View inactive, dropping load error")
            return
        self._log.info("Tasks unavailable from repository")
        self._view.show_loading_tasks_error()

    def _process_tasks(self, tasks: List[Task]) -> None:
        if not tasks:
            self._process_empty_tasks()
            return
        self._view.show_tasks(tasks)
        self._show_filter_label()

    def _show_filter_label(self) -> None:
        match self._filtering:
            case TasksFilterType.ACTIVE_TASKS:
                self._view.show_active_filter_label()
            case TasksFilterType.COMPLETED_TASKS:
                self._view.show_completed_filter_label()
            case _:
                self._view.show_all_filter_label()

    def _process_empty_tasks(self) -> None:
        match self._filtering:
            case TasksFilterType.ACTIVE_TASKS:
                self._view.show_no_active_tasks()
            case TasksFilterType.COMPLETED_TASKS:
                self._view.show_no_completed_tasks()
            case _:
                self._view.show_no_tasks()

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def add_new_task(self) -> None:
        self._view.show_add_task()

    def open_task_details(self, requested_task: Task) -> None:
        if requested_task is None:
            raise ValueError("requested_task cannot be None")
        self._view.show_task_details_ui(requested_task.id)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def complete_task(self, completed_task: Task) -> None:
        if completed_task is None:
            raise ValueError("completed_task cannot be None")
        self._repository.complete_task(completed_task)
        self._view.show_task_marked_complete()
        self._load(False, show_loading_ui=False)

    def activate_task(self, active_task: Task) -> None:
        if active_task is None:
            raise ValueError("active_task cannot be None")
        self._repository.activate_task(active_task)
        self._view.show_task_marked_active()
        self._load(False, show_loading_ui=False)

    def clear_completed_tasks(self) -> None:
        self._repository.clear_completed_tasks()
        self._view.show_completed_tasks_cleared()
        self._load(False, show_loading_ui=False)

    # ------------------------------------------------------------------
    # Filtering
    # ------------------------------------------------------------------
    def set_filtering(self, request_type: TasksFilterType) -> None:
        """Set the current filter. Does not reload; call ``load_tasks`` for that."""
        self._filtering = request_type

    def get_filtering(self) -> TasksFilterType:
        return self._filtering

    @property
    def first_load_pending(self) -> bool:
        return self._first_load


__all__ = [
    "REQUEST_ADD_TASK",
    "RESULT_CANCELED",
    "RESULT_OK",
    "TasksPresenter",
]
