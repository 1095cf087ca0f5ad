from __future__ import annotations

import logging

import pytest

from taskboard.utils import logging as logging_utils
from taskboard.viewmodels.settings_vm import SettingsVM


@pytest.mark.parametrize(
    "environ,expected",
    [
        ({}, None),
        ({"TASKBOARD_LOG_LEVEL": "warning"}, logging.WARNING),
        ({"TASKBOARD_LOG_LEVEL": " 15 "}, 15),
        ({"TASKBOARD_LOG_LEVEL": "chatty"}, logging.INFO),
        ({"TASKBOARD_DEBUG": "Yes"}, logging.DEBUG),
        ({"TASKBOARD_DEBUG": "0"}, None),
        ({"TASKBOARD_LOG_LEVEL": "error", "TASKBOARD_DEBUG": "1"}, logging.ERROR),
    ],
)
def test_env_level(environ, expected) -> None:
    assert logging_utils.env_level(environ) == expected


def test_settings_flag_used_only_without_env_override() -> None:
    assert logging_utils.resolve_level(True, {}) == logging.DEBUG
    assert logging_utils.resolve_level(False, {}) == logging.INFO
    assert logging_utils.resolve_level(True, {"TASKBOARD_LOG_LEVEL": "warning"}) == logging.WARNING


def test_env_requests_debug() -> None:
    assert logging_utils.env_requests_debug({"TASKBOARD_DEBUG": "on"}) is True
    assert logging_utils.env_requests_debug({"TASKBOARD_LOG_LEVEL": "info"}) is False
    assert logging_utils.env_requests_debug({}) is False


def test_apply_settings_sets_root_level(monkeypatch) -> None:
    monkeypatch.delenv("TASKBOARD_LOG_LEVEL", raising=False)
    monkeypatch.delenv("TASKBOARD_DEBUG", raising=False)
    root = logging.getLogger()
    previous = root.level
    settings = SettingsVM()
    try:
        settings.set_debug_logging(True)
        assert logging_utils.apply_settings(settings) == logging.DEBUG
        assert root.level == logging.DEBUG

        settings.set_debug_logging(False)
        assert logging_utils.apply_settings(settings) == logging.INFO
        assert root.level == logging.INFO
    finally:
        root.setLevel(previous)


def test_configure_root_honours_env(monkeypatch) -> None:
    monkeypatch.setenv("TASKBOARD_LOG_LEVEL", "error")
    root = logging.getLogger()
    previous = root.level
    try:
        assert logging_utils.configure_root(debug_logging=True) == logging.ERROR
        assert root.level == logging.ERROR
        assert root.handlers
    finally:
        root.setLevel(previous)
