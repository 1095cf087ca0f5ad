"""Queue that hands background results back to the Tk thread.

The app passes Tk ``after`` and ``after_cancel`` callables into this class.
Worker threads call ``post``; a recurring ``after`` tick drains the queue on
the UI thread so presenter state is only touched from one thread.
"""

from __future__ import annotations


import logging
import queue
from typing import Callable, Optional


Job = Callable[[], None]
ScheduleFn = Callable[[int, Job], str]
CancelFn = Callable[[str], None]


class UiDispatcher:
    """Marshal callables from any thread onto a UI scheduler (for example Tk)."""

    def __init__(self, schedule: ScheduleFn, cancel: CancelFn, *, interval_ms: int = 50) -> None:
        """Store schedule/cancel functions.

        Args:
            schedule: Function compatible with ``after(delay_ms, callback)``.
            cancel: Function compatible with ``after_cancel(token)``.
            interval_ms: Delay between queue drains.
        """
        self._schedule = schedule
        self._cancel = cancel
        self._interval_ms = max(1, int(interval_ms))
        self._queue: "queue.SimpleQueue[Job]" = queue.SimpleQueue()
        self._token: Optional[str] = None
        self._log = logging.getLogger(__name__)

    def post(self, job: Job) -> None:
        """Queue ``job`` for the UI thread. Safe to call from any thread."""
        self._queue.put(job)

    def start(self) -> None:
        if self._token is None:
            self._token = self._schedule(self._interval_ms, self._tick)

    def stop(self) -> None:
        token, self._token = self._token, None
        if token is None:
            return
        try:
            self._cancel(token)
        except Exception as exc:
            self._log.debug("Cancel of dispatcher tick failed: %s", exc)

    def drain(self) -> int:
        """Run every queued job on the calling thread; return how many ran."""
        ran = 0
        while True:
            try:
                job = self._queue.get_nowait()
            except queue.Empty:
                return ran
            try:
                job()
            except Exception:
                self._log.exception("UI job failed")
            ran += 1

    def _tick(self) -> None:
        self.drain()
        if self._token is not None:
            self._token = self._schedule(self._interval_ms, self._tick)


__all__ = ["UiDispatcher"]
