from __future__ import annotations

"""Domain value objects for tasks and list filtering."""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Mapping
from uuid import uuid4


def _new_task_id() -> str:
    return uuid4().hex


@dataclass(frozen=True)
class Task:
    """Immutable task record owned by the repository."""

    title: str = ""
    """Short headline shown in the task list."""
    description: str = ""
    """Free-form body text."""
    id: str = field(default_factory=_new_task_id)
    """Stable identifier, generated when the task is first created."""
    completed: bool = False
    """Completion flag; a task that is not completed is active."""

    def __post_init__(self) -> None:
        if not isinstance(self.id, str) or not self.id.strip():
            raise ValueError("Task id must be a non-empty string.")

    @property
    def is_completed(self) -> bool:
        return self.completed

    @property
    def is_active(self) -> bool:
        return not self.completed

    @property
    def is_empty(self) -> bool:
        return not self.title.strip() and not self.description.strip()

    @property
    def title_for_list(self) -> str:
        """Title when present, description otherwise."""
        return self.title if self.title.strip() else self.description

    def with_completed(self, completed: bool) -> "Task":
        return replace(self, completed=bool(completed))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "completed": self.completed,
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Task":
        if not isinstance(payload, Mapping):
            raise ValueError("Task payload must be a mapping.")
        task_id = payload.get("id")
        if not task_id:
            raise ValueError("Task payload requires an 'id'.")
        return cls(
            id=str(task_id),
            title=str(payload.get("title") or ""),
            description=str(payload.get("description") or ""),
            completed=bool(payload.get("completed", False)),
        )


class TasksFilterType(Enum):
    """Selects which tasks the list shows."""

    ALL_TASKS = "all"
    ACTIVE_TASKS = "active"
    COMPLETED_TASKS = "completed"

    @classmethod
    def parse(cls, value: Any) -> "TasksFilterType":
        """Map a raw value to a filter, falling back to ``ALL_TASKS``."""
        if isinstance(value, cls):
            return value
        text = str(value or "").strip().lower()
        for member in cls:
            if text in (member.value, member.name.lower()):
                return member
        return cls.ALL_TASKS


__all__ = ["Task", "TasksFilterType"]
