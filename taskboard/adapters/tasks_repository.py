"""Caching repository that combines a local and a remote task data source.

Call context:
    ``AppController.ensure_ready`` builds one repository and hands it to
    ``TasksPresenter``. The presenter only sees ``TasksRepositoryPort``.

Read policy for ``get_tasks``:
    - Clean cache: answer from memory, once.
    - Dirty cache (after ``refresh_tasks``): answer from the stale cache
      first when it has entries, then fetch the remote and answer again.
    - No cache: read the local source; fall back to the remote when the local
      source has nothing.

Threading:
    Disk and network work runs on ``executor``. The default is a private
    single-worker ``ThreadPoolExecutor``, so background reads and writes reach
    the sources one at a time in call order. Results computed there are
    handed back through ``callback_executor`` so the caller can marshal them
    onto its own thread (the Tk app posts them to ``UiDispatcher``). Cache
    reads and writes are guarded by a lock.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Dict, List, Optional, Sequence

from taskboard.domain.entities import Task
from taskboard.domain.ports import (
    GetTaskCallback,
    LoadTasksCallback,
    TaskId,
    TasksDataSource,
    TasksRepositoryPort,
)

Job = Callable[[], None]
Executor = Callable[[Job], None]


def inline_executor(job: Job) -> None:
    """Run ``job`` immediately on the calling thread."""
    job()


class _RemoteLoad:
    def __init__(self, repo: "TasksRepository", callback: LoadTasksCallback) -> None:
        self._repo = repo
        self._callback = callback

    def on_tasks_loaded(self, tasks: Sequence[Task]) -> None:
        self._repo._refresh_cache(tasks)
        self._repo._refresh_local(tasks)
        self._repo._post(lambda: self._callback.on_tasks_loaded(list(tasks)))

    def on_data_not_available(self) -> None:
        self._repo._post(self._callback.on_data_not_available)


class _LocalLoad:
    def __init__(self, repo: "TasksRepository", callback: LoadTasksCallback) -> None:
        self._repo = repo
        self._callback = callback

    def on_tasks_loaded(self, tasks: Sequence[Task]) -> None:
        if not tasks:
            self._repo._load_from_remote(self._callback)
            return
        self._repo._refresh_cache(tasks)
        self._repo._post(lambda: self._callback.on_tasks_loaded(list(tasks)))

    def on_data_not_available(self) -> None:
        self._repo._load_from_remote(self._callback)


class _SingleTaskLoad:
    def __init__(
        self,
        repo: "TasksRepository",
        callback: GetTaskCallback,
        fallback: Optional[Callable[[], None]] = None,
    ) -> None:
        self._repo = repo
        self._callback = callback
        self._fallback = fallback

    def on_task_loaded(self, task: Task) -> None:
        self._repo._cache_put(task)
        self._repo._post(lambda: self._callback.on_task_loaded(task))

    def on_data_not_available(self) -> None:
        if self._fallback is not None:
            self._fallback()
            return
        self._repo._post(self._callback.on_data_not_available)


class TasksRepository(TasksRepositoryPort):
    """Concrete ``TasksRepositoryPort`` with an in-memory cache."""

    def __init__(
        self,
        remote: TasksDataSource,
        local: TasksDataSource,
        *,
        executor: Optional[Executor] = None,
        callback_executor: Optional[Executor] = None,
    ) -> None:
        if remote is None:
            raise ValueError("remote data source cannot be None")
        if local is None:
            raise ValueError("local data source cannot be None")
        self._remote = remote
        self._local = local
        self._pool: Optional[ThreadPoolExecutor] = None
        if executor is None:
            self._pool = ThreadPoolExecutor(max_workers=1, thread_name_prefix="taskboard-io")
            executor = self._pool.submit
        self._execute = executor
        self._post = callback_executor or inline_executor
        self._lock = threading.Lock()
        self._cache: Optional[Dict[TaskId, Task]] = None
        self._cache_is_dirty = False
        self._log = logging.getLogger(__name__)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    def get_tasks(self, callback: LoadTasksCallback) -> None:
        with self._lock:
            cached = list(self._cache.values()) if self._cache is not None else None
            dirty = self._cache_is_dirty

        if cached is not None and not dirty:
            callback.on_tasks_loaded(cached)
            return

        if dirty:
            if cached:
                callback.on_tasks_loaded(cached)
            self._execute(lambda: self._load_from_remote(callback))
            return

        self._execute(lambda: self._guarded_read(callback, lambda: self._local.get_tasks(_LocalLoad(self, callback))))

    def get_task(self, task_id: TaskId, callback: GetTaskCallback) -> None:
        if not task_id:
            raise ValueError("task_id cannot be empty")
        with self._lock:
            cached = self._cache.get(task_id) if self._cache is not None else None
        if cached is not None:
            callback.on_task_loaded(cached)
            return

        def from_remote() -> None:
            self._remote.get_task(task_id, _SingleTaskLoad(self, callback))

        def from_local() -> None:
            try:
                self._local.get_task(task_id, _SingleTaskLoad(self, callback, fallback=from_remote))
            except Exception as exc:
                self._log.warning("Reading task %s failed: %s", task_id, exc)
                self._post(callback.on_data_not_available)

        self._execute(from_local)

    def refresh_tasks(self) -> None:
        with self._lock:
            self._cache_is_dirty = True

    @property
    def cache_is_dirty(self) -> bool:
        with self._lock:
            return self._cache_is_dirty

    # ------------------------------------------------------------------
    # Writes (fire-and-forget)
    # ------------------------------------------------------------------
    def save_task(self, task: Task) -> None:
        if task is None:
            raise ValueError("task cannot be None")
        self._cache_put(task)
        self._submit("save_task", lambda: self._both(lambda src: src.save_task(task)))

    def complete_task(self, task: Task) -> None:
        if task is None:
            raise ValueError("task cannot be None")
        self._cache_put(task.with_completed(True))
        self._submit("complete_task", lambda: self._both(lambda src: src.complete_task(task)))

    def activate_task(self, task: Task) -> None:
        if task is None:
            raise ValueError("task cannot be None")
        self._cache_put(task.with_completed(False))
        self._submit("activate_task", lambda: self._both(lambda src: src.activate_task(task)))

    def clear_completed_tasks(self) -> None:
        with self._lock:
            if self._cache is not None:
                self._cache = {k: t for k, t in self._cache.items() if not t.is_completed}
        self._submit("clear_completed_tasks", lambda: self._both(lambda src: src.clear_completed_tasks()))

    def delete_all_tasks(self) -> None:
        with self._lock:
            self._cache = {}
        self._submit("delete_all_tasks", lambda: self._both(lambda src: src.delete_all_tasks()))

    def delete_task(self, task_id: TaskId) -> None:
        with self._lock:
            if self._cache is not None:
                self._cache.pop(task_id, None)
        self._submit("delete_task", lambda: self._both(lambda src: src.delete_task(task_id)))

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _load_from_remote(self, callback: LoadTasksCallback) -> None:
        self._guarded_read(callback, lambda: self._remote.get_tasks(_RemoteLoad(self, callback)))

    def _guarded_read(self, callback: LoadTasksCallback, read: Job) -> None:
        try:
            read()
        except Exception as exc:
            self._log.warning("Loading tasks failed: %s", exc)
            self._post(callback.on_data_not_available)

    def _refresh_cache(self, tasks: Sequence[Task]) -> None:
        with self._lock:
            self._cache = {task.id: task for task in tasks}
            self._cache_is_dirty = False

    def _refresh_local(self, tasks: Sequence[Task]) -> None:
        try:
            self._local.delete_all_tasks()
            for task in tasks:
                self._local.save_task(task)
        except Exception as exc:
            self._log.warning("Updating local task store failed: %s", exc)

    def _cache_put(self, task: Task) -> None:
        with self._lock:
            if self._cache is None:
                self._cache = {}
            self._cache[task.id] = task

    def _both(self, write: Callable[[TasksDataSource], None]) -> None:
        write(self._local)
        write(self._remote)

    def _submit(self, label: str, job: Job) -> None:
        def run() -> None:
            try:
                job()
            except Exception as exc:
                self._log.warning("Background %s failed: %s", label, exc)

        self._execute(run)

    def cached_tasks(self) -> List[Task]:
        with self._lock:
            return list(self._cache.values()) if self._cache is not None else []

    def close(self, *, wait: bool = True) -> None:
        """Stop the owned worker; with ``wait`` pending writes finish first."""
        if self._pool is not None:
            self._pool.shutdown(wait=wait)


__all__ = ["Executor", "TasksRepository", "inline_executor"]
