# taskboard/app/main.py
from __future__ import annotations

import argparse
import logging
import os
import tkinter as tk
from pathlib import Path
from typing import List, Optional

from ..adapters.storage_local import TasksLocalDataSource
from ..domain.entities import Task
from ..domain.ports import UseCaseError
from ..utils import logging as logging_utils
from ..utils.idling import GLOBAL_BUSY_COUNTER
from ..viewmodels.settings_vm import SettingsVM
from .controller import AppController
from .tasks_presenter import REQUEST_ADD_TASK, RESULT_CANCELED, RESULT_OK, TasksPresenter
from .ui_dispatcher import UiDispatcher
from .views.add_task_dialog import AddTaskDialog
from .views.task_detail_dialog import TaskDetailDialog
from .views.tasks_view import TasksView

logging_utils.configure_root()
log = logging.getLogger(__name__)

DEFAULT_DATA_DIR = os.path.join(Path.home(), ".taskboard")


class _DetailCallback:
    def __init__(self, dialog: TaskDetailDialog) -> None:
        self._dialog = dialog

    def on_task_loaded(self, task: Task) -> None:
        if self._dialog.winfo_exists():
            self._dialog.show_task(task.title, task.description, task.completed)

    def on_data_not_available(self) -> None:
        if self._dialog.winfo_exists():
            self._dialog.show_missing()


class App:
    """Wire settings, repository, presenter and the tasks window."""

    def __init__(self, settings_vm: SettingsVM) -> None:
        self.settings_vm = settings_vm
        self.root = tk.Tk()
        self.root.title("Taskboard")
        self.root.geometry("640x520")
        self.root.protocol("WM_DELETE_WINDOW", self.close)

        self.dispatcher = UiDispatcher(self.root.after, self.root.after_cancel)
        self.controller = AppController(settings_vm, callback_executor=self.dispatcher.post)
        if not self.controller.ensure_ready():
            raise SystemExit("Invalid settings; check the data directory and task server URL.")

        self.view = TasksView(
            self.root,
            on_show_add_task=self._open_add_task,
            on_show_task_details=self._open_task_details,
        )
        self.view.pack(fill=tk.BOTH, expand=True)
        self.presenter = TasksPresenter(
            self.controller.repository,
            self.view,
            busy_counter=GLOBAL_BUSY_COUNTER,
        )

    def run(self) -> None:
        self.dispatcher.start()
        self.presenter.start()
        self.root.mainloop()

    def close(self) -> None:
        self.dispatcher.stop()
        self.controller.reset()
        self.root.destroy()

    # ------------------------------------------------------------------
    # Navigation targets
    # ------------------------------------------------------------------
    def _open_add_task(self) -> None:
        AddTaskDialog(
            self.root,
            on_save=self._save_new_task,
            on_close=lambda: self.presenter.result(REQUEST_ADD_TASK, RESULT_CANCELED),
        )

    def _save_new_task(self, title: str, description: str) -> Optional[str]:
        try:
            self.controller.uc_save_task(title, description)
        except UseCaseError as exc:
            log.info("Task not saved (%s): %s", exc.code, exc.message)
            return exc.message
        self.presenter.result(REQUEST_ADD_TASK, RESULT_OK)
        self.presenter.load_tasks(False)
        return None

    def _open_task_details(self, task_id: str) -> None:
        dialog = TaskDetailDialog(self.root, task_id)
        self.controller.repository.get_task(task_id, _DetailCallback(dialog))


def build_settings(argv: Optional[List[str]] = None) -> SettingsVM:
    """Resolve settings from the saved file, then env vars, then CLI flags."""
    parser = argparse.ArgumentParser(description="Taskboard desktop client")
    parser.add_argument("--data-dir", default=os.getenv("TASKBOARD_DATA_DIR", DEFAULT_DATA_DIR))
    parser.add_argument("--api-url", default=os.getenv("TASKBOARD_API_URL"))
    parser.add_argument("--api-key", default=os.getenv("TASKBOARD_API_KEY"))
    parser.add_argument("--debug", action="store_true")
    parser.add_argument("--save-settings", action="store_true", help="Persist the resolved settings and continue")
    args = parser.parse_args(argv)

    storage = TasksLocalDataSource(root_dir=args.data_dir)
    settings = SettingsVM(on_save=storage.save_user_settings)
    try:
        settings.apply_dict(storage.load_user_settings())
    except ValueError as exc:
        log.warning("Ignoring saved settings: %s", exc)
    settings.data_dir = args.data_dir
    if args.api_url is not None:
        settings.api_base_url = args.api_url
    if args.api_key is not None:
        settings.api_key = args.api_key
    if args.debug:
        settings.set_debug_logging(True)
    if args.save_settings:
        settings.cmd_save()
    logging_utils.apply_settings(settings)
    return settings


def main(argv: Optional[List[str]] = None) -> None:
    settings = build_settings(argv)
    log.info("Starting taskboard (data_dir=%s)", settings.data_dir)
    App(settings).run()


if __name__ == "__main__":
    main()
