"""Task selection keyed by ``TasksFilterType``."""

from __future__ import annotations

from typing import Iterable, List

from .entities import Task, TasksFilterType


def _accepts(task: Task, filtering: TasksFilterType) -> bool:
    match filtering:
        case TasksFilterType.ACTIVE_TASKS:
            return task.is_active
        case TasksFilterType.COMPLETED_TASKS:
            return task.is_completed
        case _:
            return True


def filter_tasks(tasks: Iterable[Task], filtering: TasksFilterType) -> List[Task]:
    """Return the tasks matching ``filtering``, preserving input order.

    Unrecognized filter values behave like ``ALL_TASKS``.
    """
    return [task for task in tasks if _accepts(task, filtering)]


__all__ = ["filter_tasks"]
