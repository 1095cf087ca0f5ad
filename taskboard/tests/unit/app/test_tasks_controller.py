from __future__ import annotations

from pathlib import Path

from taskboard.adapters.tasks_mock import TasksMockDataSource
from taskboard.adapters.tasks_repository import TasksRepository, inline_executor
from taskboard.adapters.tasks_rest import TasksRestDataSource
from taskboard.app.controller import AppController
from taskboard.viewmodels.settings_vm import SettingsVM


def test_controller_without_server_uses_in_memory_remote(tmp_path: Path) -> None:
    settings = SettingsVM()
    settings.data_dir = str(tmp_path)

    controller = AppController(settings, executor=inline_executor)

    assert controller.ensure_ready() is True
    assert isinstance(controller.repository, TasksRepository)
    assert isinstance(controller.remote, TasksMockDataSource)
    assert controller.local.root == str(tmp_path)
    assert controller.uc_save_task is not None


def test_controller_with_server_builds_rest_source(tmp_path: Path) -> None:
    settings = SettingsVM()
    settings.apply_dict(
        {"data_dir": str(tmp_path), "api_base_url": "http://tasks.local", "api_key": "k", "retries": 0}
    )

    controller = AppController(settings)

    assert controller.ensure_ready() is True
    assert isinstance(controller.remote, TasksRestDataSource)
    assert controller.remote.session.api_key == "k"
    assert controller.remote.session.cfg.retries == 0


def test_controller_refuses_invalid_settings_and_resets() -> None:
    settings = SettingsVM()
    settings.api_base_url = "ftp://nope"
    controller = AppController(settings)

    assert controller.ensure_ready() is False
    assert controller.repository is None

    settings.api_base_url = ""
    assert controller.ensure_ready() is True
    first = controller.repository
    assert controller.ensure_ready() is True
    assert controller.repository is first

    controller.reset()
    assert controller.repository is None
