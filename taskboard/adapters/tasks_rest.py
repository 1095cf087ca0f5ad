"""REST data source backed by the ``rest_api`` task server."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests

from taskboard.domain.entities import Task
from taskboard.domain.ports import GetTaskCallback, LoadTasksCallback, TaskId, TasksDataSource

from .api_errors import ApiError, error_for_response
from .http_client import HttpConfig, RetryingSession


class TasksRestDataSource(TasksDataSource):
    """Synchronous HTTP client for ``/tasks`` endpoints.

    Reads report failures through ``on_data_not_available``; writes raise
    ``ApiError`` subclasses so the caller decides how to surface them.
    """

    def __init__(
        self,
        base_url: str,
        *,
        api_key: Optional[str] = None,
        request_timeout_s: int = 10,
        retries: int = 2,
    ) -> None:
        if not base_url or not base_url.strip():
            raise ValueError("base_url must be a non-empty URL.")
        self.base_url = base_url.strip().rstrip("/")
        self.session = RetryingSession(
            api_key or None,
            HttpConfig(request_timeout_s=request_timeout_s, retries=retries),
        )
        self._log = logging.getLogger(__name__)

    # ---------- reads ----------
    def fetch_tasks(self) -> List[Task]:
        ctx = "GET /tasks"
        resp = self.session.get(self._make_url("/tasks"))
        self._ensure_ok(resp, ctx)
        data = self._json(resp)
        items = data.get("tasks")
        if not isinstance(items, list):
            raise ApiError("Invalid JSON response: 'tasks' must be a list", context=ctx)
        return [Task.from_dict(item) for item in items if isinstance(item, dict)]

    def fetch_task(self, task_id: TaskId) -> Task:
        ctx = f"GET /tasks/{task_id}"
        resp = self.session.get(self._make_url(f"/tasks/{quote(task_id, safe='')}"))
        self._ensure_ok(resp, ctx)
        return Task.from_dict(self._json(resp))

    def get_tasks(self, callback: LoadTasksCallback) -> None:
        try:
            tasks = self.fetch_tasks()
        except (ApiError, ValueError) as exc:
            self._log.warning("Remote task list unavailable: %s", exc)
            callback.on_data_not_available()
            return
        callback.on_tasks_loaded(tasks)

    def get_task(self, task_id: TaskId, callback: GetTaskCallback) -> None:
        try:
            task = self.fetch_task(task_id)
        except (ApiError, ValueError) as exc:
            self._log.warning("Remote task %s unavailable: %s", task_id, exc)
            callback.on_data_not_available()
            return
        callback.on_task_loaded(task)

    # ---------- writes ----------
    def save_task(self, task: Task) -> None:
        resp = self.session.post(self._make_url("/tasks"), json_body=task.to_dict())
        self._ensure_ok(resp, "POST /tasks")

    def complete_task(self, task: Task) -> None:
        self._post_action(task.id, "complete")

    def activate_task(self, task: Task) -> None:
        self._post_action(task.id, "activate")

    def clear_completed_tasks(self) -> None:
        resp = self.session.post(self._make_url("/tasks/clear-completed"))
        self._ensure_ok(resp, "POST /tasks/clear-completed")

    def refresh_tasks(self) -> None:
        # The server is always authoritative; the repository owns refresh state.
        return None

    def delete_all_tasks(self) -> None:
        resp = self.session.delete(self._make_url("/tasks"))
        self._ensure_ok(resp, "DELETE /tasks")

    def delete_task(self, task_id: TaskId) -> None:
        ctx = f"DELETE /tasks/{task_id}"
        resp = self.session.delete(self._make_url(f"/tasks/{quote(task_id, safe='')}"))
        if resp.status_code == 404:
            return
        self._ensure_ok(resp, ctx)

    # ---------- helpers ----------
    def _post_action(self, task_id: TaskId, action: str) -> None:
        ctx = f"POST /tasks/{task_id}/{action}"
        resp = self.session.post(self._make_url(f"/tasks/{quote(task_id, safe='')}/{action}"))
        self._ensure_ok(resp, ctx)

    def _make_url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    @staticmethod
    def _ensure_ok(resp: requests.Response, ctx: str) -> None:
        if 200 <= resp.status_code < 300:
            return
        raise error_for_response(resp, ctx)

    @staticmethod
    def _json(resp: requests.Response) -> Dict[str, Any]:
        try:
            data = resp.json()
        except ValueError as exc:
            txt = getattr(resp, "text", "")[:400]
            raise ApiError(f"Invalid JSON response: {txt}") from exc
        if not isinstance(data, dict):
            raise ApiError("Invalid JSON response: expected object")
        return data


__all__ = ["TasksRestDataSource"]
