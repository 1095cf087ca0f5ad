from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from taskboard.domain.entities import Task
from taskboard.domain.ports import GetTaskCallback, LoadTasksCallback, TaskId, TasksDataSource


@dataclass
class TasksMockDataSource(TasksDataSource):
    """Offline substitute for ``TasksRestDataSource`` with an in-memory store."""

    seed: Optional[Iterable[Task]] = None
    available: bool = True
    _tasks: Dict[TaskId, Task] = field(default_factory=dict, init=False, repr=False)

    def __post_init__(self) -> None:
        for task in self.seed or ():
            self._tasks[task.id] = task

    def all_tasks(self) -> List[Task]:
        return list(self._tasks.values())

    # ---------- TasksDataSource ----------

    def get_tasks(self, callback: LoadTasksCallback) -> None:
        if not self.available:
            callback.on_data_not_available()
            return
        callback.on_tasks_loaded(list(self._tasks.values()))

    def get_task(self, task_id: TaskId, callback: GetTaskCallback) -> None:
        task = self._tasks.get(task_id) if self.available else None
        if task is None:
            callback.on_data_not_available()
            return
        callback.on_task_loaded(task)

    def save_task(self, task: Task) -> None:
        self._tasks[task.id] = task

    def complete_task(self, task: Task) -> None:
        self._tasks[task.id] = task.with_completed(True)

    def activate_task(self, task: Task) -> None:
        self._tasks[task.id] = task.with_completed(False)

    def clear_completed_tasks(self) -> None:
        self._tasks = {k: t for k, t in self._tasks.items() if not t.is_completed}

    def refresh_tasks(self) -> None:
        return None

    def delete_all_tasks(self) -> None:
        self._tasks.clear()

    def delete_task(self, task_id: TaskId) -> None:
        self._tasks.pop(task_id, None)


__all__ = ["TasksMockDataSource"]
