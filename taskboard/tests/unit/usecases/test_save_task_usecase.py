from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from taskboard.adapters.api_errors import ApiClientError, ApiServerError, ApiTimeoutError
from taskboard.domain.ports import UseCaseError
from taskboard.usecases.error_mapping import map_api_error
from taskboard.usecases.save_task import SaveTask


def test_save_task_trims_and_forwards() -> None:
    repository = MagicMock()
    uc = SaveTask(repository)

    task = uc("  Title ", "Body\n")

    assert task.title == "Title"
    assert task.description == "Body"
    repository.save_task.assert_called_once_with(task)


def test_save_task_keeps_existing_id() -> None:
    uc = SaveTask(MagicMock())
    assert uc("t", "", task_id="abc").id == "abc"


def test_empty_task_rejected() -> None:
    repository = MagicMock()
    uc = SaveTask(repository)

    with pytest.raises(UseCaseError) as info:
        uc(" ", "\n")

    assert info.value.code == "EMPTY_TASK"
    repository.save_task.assert_not_called()


def test_repository_failure_is_mapped() -> None:
    repository = MagicMock()
    repository.save_task.side_effect = RuntimeError("disk full")

    with pytest.raises(UseCaseError) as info:
        SaveTask(repository)("t", "d")

    assert info.value.code == "SAVE_TASK_FAILED"
    assert info.value.message == "disk full"


def test_map_api_error_codes() -> None:
    assert map_api_error(ApiTimeoutError("t"), default_code="X").code == "REQUEST_TIMEOUT"
    assert map_api_error(ApiClientError("m", status=404), default_code="X").code == "TASK_NOT_FOUND"
    assert map_api_error(ApiClientError("m", status=401), default_code="X").code == "AUTH_FAILED"
    assert map_api_error(ApiClientError("m", status=418), default_code="X").code == "REQUEST_FAILED"
    assert map_api_error(ApiServerError("m", status=500), default_code="X").code == "SERVER_ERROR"
    original = UseCaseError("KEEP", "kept")
    assert map_api_error(original, default_code="X") is original


def test_map_api_error_appends_server_detail() -> None:
    not_found = ApiClientError("m", status=404, detail="Task x not found")
    invalid = ApiClientError("m", status=422, detail="id: Field required")

    assert map_api_error(not_found, default_code="X").message == "Task not found: Task x not found"
    assert map_api_error(invalid, default_code="X").message == "Invalid task: id: Field required"
    assert map_api_error(ApiClientError("m", status=404), default_code="X").message == "Task not found"
