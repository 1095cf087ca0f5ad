from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

from taskboard.adapters.storage_local import TasksLocalDataSource
from taskboard.adapters.tasks_mock import TasksMockDataSource
from taskboard.adapters.tasks_repository import TasksRepository, inline_executor
from taskboard.app.tasks_presenter import TasksPresenter
from taskboard.domain.entities import Task, TasksFilterType
from taskboard.utils.idling import CountingIdlingResource


def _wire(tmp_path: Path, tasks):
    repository = TasksRepository(
        TasksMockDataSource(seed=tasks),
        TasksLocalDataSource(root_dir=str(tmp_path)),
        executor=inline_executor,
    )
    view = MagicMock()
    view.is_active.return_value = True
    counter = CountingIdlingResource("flow")
    presenter = TasksPresenter(repository, view, busy_counter=counter)
    return presenter, repository, view, counter


def test_start_then_complete_reflects_mutation(tmp_path: Path) -> None:
    buy = Task(title="buy milk", id="1")
    walk = Task(title="walk dog", id="2")
    presenter, _repository, view, counter = _wire(tmp_path, [buy, walk])

    presenter.start()
    view.show_tasks.assert_called_once_with([buy, walk])
    assert counter.is_idle_now()

    presenter.set_filtering(TasksFilterType.ACTIVE_TASKS)
    presenter.complete_task(buy)

    view.show_task_marked_complete.assert_called_once_with()
    assert view.show_tasks.call_args.args[0] == [walk]
    view.show_active_filter_label.assert_called_once_with()
    assert counter.is_idle_now()


def test_clear_completed_leaves_empty_state(tmp_path: Path) -> None:
    done = Task(title="done", id="1", completed=True)
    presenter, _repository, view, counter = _wire(tmp_path, [done])
    presenter.set_filtering(TasksFilterType.COMPLETED_TASKS)
    presenter.start()
    view.show_tasks.assert_called_once_with([done])

    presenter.clear_completed_tasks()

    view.show_no_completed_tasks.assert_called_once_with()
    assert counter.is_idle_now()


def test_forced_reload_delivers_twice_without_corrupting_counter(tmp_path: Path) -> None:
    task = Task(title="x", id="1")
    presenter, _repository, view, counter = _wire(tmp_path, [task])
    presenter.start()

    presenter.load_tasks(True)

    # stale cache + remote answer on the forced reload
    assert view.show_tasks.call_count == 3
    assert counter.is_idle_now()
