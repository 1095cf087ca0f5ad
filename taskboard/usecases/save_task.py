"""Use case for creating or updating a task from the add/edit form.

The use case validates user input and maps failures into ``UseCaseError`` for
consistent UI error presentation.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

from ..domain.entities import Task
from ..domain.ports import TasksRepositoryPort, UseCaseError
from .error_mapping import map_api_error


@dataclass
class SaveTask:
    """Use-case callable that persists a task through the repository.

    Attributes:
        repository: Repository receiving the write.
    """
    repository: TasksRepositoryPort

    def __call__(self, title: str, description: str, task_id: Optional[str] = None) -> Task:
        """Build and save a task.

        Args:
            title: Headline entered by the user.
            description: Body text entered by the user.
            task_id: Existing id when editing; a new id is generated otherwise.

        Returns:
            The task handed to the repository.

        Raises:
            UseCaseError: ``EMPTY_TASK`` when both fields are blank, or a
                mapped adapter error when the repository rejects the write.
        """
        title = (title or "").strip()
        description = (description or "").strip()
        task = Task(title=title, description=description, id=task_id) if task_id else Task(title=title, description=description)
        if task.is_empty:
            raise UseCaseError("EMPTY_TASK", "Tasks cannot be empty.")
        try:
            self.repository.save_task(task)
        except Exception as exc:
            raise map_api_error(exc, default_code="SAVE_TASK_FAILED") from exc
        return task
