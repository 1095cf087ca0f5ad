from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from typing import Any, Dict, List

from taskboard.domain.entities import Task
from taskboard.domain.ports import GetTaskCallback, LoadTasksCallback, TaskId, TasksDataSource
from taskboard.viewmodels.settings_vm import default_settings_payload

TASKS_FILENAME = "tasks.json"
SETTINGS_FILENAME = "user_settings.json"


class TasksLocalDataSource(TasksDataSource):
    """Local filesystem storage for tasks and user settings (JSON)."""

    def __init__(self, root_dir: str = ".") -> None:
        self.root = root_dir
        self._lock = threading.Lock()
        self._log = logging.getLogger(__name__)

    @property
    def tasks_path(self) -> str:
        return os.path.join(self.root, TASKS_FILENAME)

    # ---- Tasks ----
    def get_tasks(self, callback: LoadTasksCallback) -> None:
        tasks = self.load_tasks()
        if not tasks:
            # Nothing persisted yet; the repository falls back to the remote.
            callback.on_data_not_available()
            return
        callback.on_tasks_loaded(tasks)

    def get_task(self, task_id: TaskId, callback: GetTaskCallback) -> None:
        for task in self.load_tasks():
            if task.id == task_id:
                callback.on_task_loaded(task)
                return
        callback.on_data_not_available()

    def load_tasks(self) -> List[Task]:
        with self._lock:
            records = self._read_records()
        tasks: List[Task] = []
        for record in records:
            try:
                tasks.append(Task.from_dict(record))
            except ValueError as exc:
                self._log.warning("Skipping malformed task record in %s: %s", self.tasks_path, exc)
        return tasks

    def save_task(self, task: Task) -> None:
        with self._lock:
            records = [r for r in self._read_records() if r.get("id") != task.id]
            records.append(task.to_dict())
            self._write_records(records)

    def complete_task(self, task: Task) -> None:
        self._set_completed(task.id, True)

    def activate_task(self, task: Task) -> None:
        self._set_completed(task.id, False)

    def clear_completed_tasks(self) -> None:
        with self._lock:
            records = [r for r in self._read_records() if not r.get("completed")]
            self._write_records(records)

    def refresh_tasks(self) -> None:
        # The repository decides when to bypass local data.
        return None

    def delete_all_tasks(self) -> None:
        with self._lock:
            self._write_records([])

    def delete_task(self, task_id: TaskId) -> None:
        with self._lock:
            records = [r for r in self._read_records() if r.get("id") != task_id]
            self._write_records(records)

    def _set_completed(self, task_id: TaskId, completed: bool) -> None:
        with self._lock:
            records = self._read_records()
            for record in records:
                if record.get("id") == task_id:
                    record["completed"] = completed
            self._write_records(records)

    def _read_records(self) -> List[Dict[str, Any]]:
        path = self.tasks_path
        if not os.path.exists(path):
            return []
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        items = data.get("tasks") if isinstance(data, dict) else None
        if not isinstance(items, list):
            raise ValueError(f"{path} does not contain a 'tasks' list.")
        return [item for item in items if isinstance(item, dict)]

    def _write_records(self, records: List[Dict[str, Any]]) -> None:
        self._atomic_dump(self.tasks_path, {"tasks": records}, prefix="tasks_")

    # ---- User settings (JSON) ----
    def save_user_settings(self, payload: Dict[str, Any]) -> None:
        path = os.path.join(self.root, SETTINGS_FILENAME)
        self._atomic_dump(path, payload, prefix="user_settings_")

    def load_user_settings(self) -> Dict[str, Any]:
        path = os.path.join(self.root, SETTINGS_FILENAME)
        if not os.path.exists(path):
            return default_settings_payload()
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)

    def _atomic_dump(self, path: str, payload: Any, *, prefix: str) -> None:
        os.makedirs(self.root, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(prefix=prefix, suffix=".tmp", dir=self.root)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(payload, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, path)
        except Exception:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise


__all__ = ["SETTINGS_FILENAME", "TASKS_FILENAME", "TasksLocalDataSource"]
