from __future__ import annotations

from taskboard.domain.entities import Task, TasksFilterType
from taskboard.domain.filtering import filter_tasks


def _tasks():
    return [
        Task(title="a", id="a"),
        Task(title="b", id="b", completed=True),
        Task(title="c", id="c"),
        Task(title="d", id="d", completed=True),
    ]


def test_all_keeps_every_task_in_order() -> None:
    tasks = _tasks()
    assert filter_tasks(tasks, TasksFilterType.ALL_TASKS) == tasks


def test_active_and_completed_partition_the_input() -> None:
    tasks = _tasks()
    active = filter_tasks(tasks, TasksFilterType.ACTIVE_TASKS)
    completed = filter_tasks(tasks, TasksFilterType.COMPLETED_TASKS)

    assert [t.id for t in active] == ["a", "c"]
    assert [t.id for t in completed] == ["b", "d"]
    assert not {t.id for t in active} & {t.id for t in completed}
    assert len(active) + len(completed) == len(tasks)


def test_unrecognized_filter_behaves_like_all() -> None:
    tasks = _tasks()
    assert filter_tasks(tasks, "bogus") == tasks  # type: ignore[arg-type]


def test_filter_accepts_any_iterable() -> None:
    assert filter_tasks(iter(_tasks()), TasksFilterType.ACTIVE_TASKS)[0].id == "a"
    assert filter_tasks([], TasksFilterType.COMPLETED_TASKS) == []

