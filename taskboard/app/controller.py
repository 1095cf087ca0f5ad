"""Adapter and repository wiring for the desktop app runtime.

This module owns lazy construction of the data sources and the repository
that depend on values in :class:`taskboard.viewmodels.settings_vm.SettingsVM`.
"""

from __future__ import annotations

import logging
from typing import Optional

from ..adapters.storage_local import TasksLocalDataSource
from ..adapters.tasks_mock import TasksMockDataSource
from ..adapters.tasks_repository import Executor, TasksRepository
from ..adapters.tasks_rest import TasksRestDataSource
from ..domain.ports import TasksDataSource
from ..usecases.save_task import SaveTask
from ..viewmodels.settings_vm import SettingsVM


class AppController:
    """Create and cache the repository and use-cases from settings state.

    Call chain:
        ``taskboard.app.main.App`` creates one instance and calls
        ``ensure_ready`` before building the presenter.
    """

    def __init__(
        self,
        settings_vm: SettingsVM,
        *,
        executor: Optional[Executor] = None,
        callback_executor: Optional[Executor] = None,
    ) -> None:
        self.settings_vm = settings_vm
        self._executor = executor
        self._callback_executor = callback_executor
        self._local: Optional[TasksLocalDataSource] = None
        self._remote: Optional[TasksDataSource] = None
        self._repository: Optional[TasksRepository] = None
        self.uc_save_task: Optional[SaveTask] = None
        self._log = logging.getLogger(__name__)

    @property
    def repository(self) -> Optional[TasksRepository]:
        return self._repository

    @property
    def local(self) -> Optional[TasksLocalDataSource]:
        return self._local

    @property
    def remote(self) -> Optional[TasksDataSource]:
        return self._remote

    def reset(self) -> None:
        """Drop cached adapters so the next ``ensure_ready`` rebuilds them."""
        if self._repository is not None:
            self._repository.close(wait=False)
        self._local = None
        self._remote = None
        self._repository = None
        self.uc_save_task = None

    def ensure_ready(self) -> bool:
        """Ensure the repository and use-cases exist.

        Returns:
            ``False`` when settings are invalid, ``True`` otherwise.
        """
        if self._repository is not None:
            return True
        if not self.settings_vm.is_valid():
            self._log.warning("Settings invalid; repository not built")
            return False

        self._local = TasksLocalDataSource(root_dir=self.settings_vm.data_dir)
        if self.settings_vm.uses_remote:
            self._remote = TasksRestDataSource(
                self.settings_vm.api_base_url,
                api_key=self.settings_vm.api_key,
                request_timeout_s=self.settings_vm.request_timeout_s,
                retries=self.settings_vm.retries,
            )
            self._log.info("Using task server at %s", self.settings_vm.api_base_url)
        else:
            self._remote = TasksMockDataSource()
            self._log.info("No task server configured; using in-memory remote")

        self._repository = TasksRepository(
            self._remote,
            self._local,
            executor=self._executor,
            callback_executor=self._callback_executor,
        )
        self.uc_save_task = SaveTask(self._repository)
        return True
