from __future__ import annotations

from taskboard.domain.entities import Task, TasksFilterType
from taskboard.viewmodels.tasks_vm import TasksVM


def test_rows_follow_task_order_and_state() -> None:
    vm = TasksVM()
    tasks = [
        Task(title="", description="only body", id="1"),
        Task(title="done", id="2", completed=True),
    ]

    rows = vm.set_tasks(tasks)

    assert [row.task_id for row in rows] == ["1", "2"]
    assert rows[0].title == "only body"
    assert rows[0].status == "active"
    assert rows[1].status == "completed"
    assert rows[0].done_mark != rows[1].done_mark


def test_task_lookup_resets_on_clear() -> None:
    vm = TasksVM()
    task = Task(title="x", id="1")
    vm.set_tasks([task])
    assert vm.task_for("1") is task

    vm.clear()
    assert vm.task_for("1") is None


def test_filter_title() -> None:
    vm = TasksVM()
    assert vm.set_filter_title(TasksFilterType.COMPLETED_TASKS) == "Completed tasks"
    assert vm.filter_title == "Completed tasks"
