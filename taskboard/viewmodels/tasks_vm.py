"""Task table projection for ``TasksView``.

Call context:
    ``TasksView.show_tasks`` converts the presenter's filtered tasks into
    ``TaskRow`` objects and keeps a lookup so row selections map back to
    domain tasks.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from taskboard.domain.entities import Task, TasksFilterType

FILTER_LABELS: Dict[TasksFilterType, str] = {
    TasksFilterType.ALL_TASKS: "All tasks",
    TasksFilterType.ACTIVE_TASKS: "Active tasks",
    TasksFilterType.COMPLETED_TASKS: "Completed tasks",
}

EMPTY_MESSAGES: Dict[TasksFilterType, str] = {
    TasksFilterType.ALL_TASKS: "You have no tasks!",
    TasksFilterType.ACTIVE_TASKS: "You have no active tasks!",
    TasksFilterType.COMPLETED_TASKS: "You have no completed tasks!",
}

MESSAGES: Dict[str, str] = {
    "marked_complete": "Task marked complete",
    "marked_active": "Task marked active",
    "cleared": "Completed tasks cleared",
    "saved": "TO-DO saved",
    "load_error": "Error while loading tasks",
}


@dataclass
class TaskRow:
    """Display row model consumed by the task list widget."""
    task_id: str
    title: str
    status: str
    done_mark: str


class TasksVM:
    """
    Lightweight view-model for the task list.

    Holds the last rendered tasks so the view can resolve a selected row back
    to its ``Task``.
    """

    def __init__(self) -> None:
        self._tasks: Dict[str, Task] = {}
        self.filter_title: str = FILTER_LABELS[TasksFilterType.ALL_TASKS]

    def set_tasks(self, tasks: Sequence[Task]) -> List[TaskRow]:
        self._tasks = {task.id: task for task in tasks}
        return [self._to_row(task) for task in tasks]

    def clear(self) -> None:
        self._tasks = {}

    def task_for(self, task_id: str) -> Optional[Task]:
        return self._tasks.get(task_id)

    def set_filter_title(self, filtering: TasksFilterType) -> str:
        self.filter_title = FILTER_LABELS[filtering]
        return self.filter_title

    @staticmethod
    def _to_row(task: Task) -> TaskRow:
        return TaskRow(
            task_id=task.id,
            title=task.title_for_list,
            status="completed" if task.is_completed else "active",
            done_mark="☑" if task.is_completed else "☐",
        )


__all__ = ["EMPTY_MESSAGES", "FILTER_LABELS", "MESSAGES", "TaskRow", "TasksVM"]
