from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from taskboard.adapters.storage_local import TasksLocalDataSource
from taskboard.domain.entities import Task
from taskboard.viewmodels.settings_vm import SettingsVM, default_settings_payload


def test_empty_store_reports_unavailable(tmp_path: Path) -> None:
    storage = TasksLocalDataSource(root_dir=str(tmp_path))
    callback = MagicMock()

    storage.get_tasks(callback)

    callback.on_data_not_available.assert_called_once_with()
    assert not (tmp_path / "tasks.json").exists()


def test_save_complete_activate_and_clear(tmp_path: Path) -> None:
    storage = TasksLocalDataSource(root_dir=str(tmp_path))
    first = Task(title="first", id="1")
    second = Task(title="second", id="2")
    storage.save_task(first)
    storage.save_task(second)

    storage.complete_task(first)
    assert [t.completed for t in storage.load_tasks()] == [True, False]

    storage.activate_task(first)
    storage.complete_task(second)
    storage.clear_completed_tasks()
    assert storage.load_tasks() == [first]

    with (tmp_path / "tasks.json").open("r", encoding="utf-8") as fh:
        parsed = json.load(fh)
    assert parsed == {"tasks": [first.to_dict()]}
    assert list(tmp_path.glob("tasks_*.tmp")) == []


def test_save_replaces_existing_task(tmp_path: Path) -> None:
    storage = TasksLocalDataSource(root_dir=str(tmp_path))
    storage.save_task(Task(title="old", id="1"))
    storage.save_task(Task(title="new", id="1"))

    assert [t.title for t in storage.load_tasks()] == ["new"]


def test_get_task_and_delete(tmp_path: Path) -> None:
    storage = TasksLocalDataSource(root_dir=str(tmp_path))
    task = Task(title="x", id="1")
    storage.save_task(task)

    found = MagicMock()
    storage.get_task("1", found)
    found.on_task_loaded.assert_called_once_with(task)

    storage.delete_task("1")
    missing = MagicMock()
    storage.get_task("1", missing)
    missing.on_data_not_available.assert_called_once_with()


def test_malformed_records_are_skipped(tmp_path: Path) -> None:
    (tmp_path / "tasks.json").write_text(
        json.dumps({"tasks": [{"title": "no id"}, {"id": "ok", "title": "fine"}, "junk"]}),
        encoding="utf-8",
    )
    storage = TasksLocalDataSource(root_dir=str(tmp_path))

    assert [t.id for t in storage.load_tasks()] == ["ok"]


def test_unexpected_file_shape_raises(tmp_path: Path) -> None:
    (tmp_path / "tasks.json").write_text("[]", encoding="utf-8")
    storage = TasksLocalDataSource(root_dir=str(tmp_path))

    with pytest.raises(ValueError):
        storage.load_tasks()


def test_user_settings_defaults_and_roundtrip(tmp_path: Path) -> None:
    storage = TasksLocalDataSource(root_dir=str(tmp_path))
    assert storage.load_user_settings() == default_settings_payload()
    settings_path = tmp_path / "user_settings.json"
    assert not settings_path.exists()

    vm = SettingsVM()
    vm.apply_dict(
        {
            "data_dir": str(tmp_path),
            "api_base_url": "http://tasks.example/",
            "api_key": "key-A",
            "request_timeout_s": 15,
            "retries": 1,
        }
    )
    payload = vm.to_dict()

    storage.save_user_settings(payload)
    assert settings_path.exists()
    assert list(tmp_path.glob("user_settings_*.tmp")) == []
    assert storage.load_user_settings() == payload
