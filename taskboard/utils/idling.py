"""Busy/idle counters used by instrumentation to wait for quiescence.

Call context:
    ``TasksPresenter`` increments the counter before dispatching a load and
    decrements it when the load resolves. UI test harnesses poll
    ``is_idle_now`` before asserting on the view.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

IdleCallback = Callable[[], None]


class CountingIdlingResource:
    """Thread-safe counter that is idle while its count is zero."""

    def __init__(self, name: str, *, debug_counting: bool = False) -> None:
        self.name = name
        self._debug_counting = debug_counting
        self._count = 0
        self._lock = threading.Lock()
        self._on_idle: Optional[IdleCallback] = None
        self._log = logging.getLogger(__name__)

    @property
    def count(self) -> int:
        with self._lock:
            return self._count

    def register_idle_transition_callback(self, callback: Optional[IdleCallback]) -> None:
        self._on_idle = callback

    def increment(self) -> None:
        with self._lock:
            self._count += 1
            count = self._count
        if self._debug_counting:
            self._log.debug("Resource %s in-use-count incremented to %d", self.name, count)

    def decrement(self) -> None:
        """Decrement the counter and fire the idle callback on reaching zero.

        Raises:
            RuntimeError: If the counter would drop below zero.
        """
        with self._lock:
            if self._count <= 0:
                raise RuntimeError("Counter has been corrupted!")
            self._count -= 1
            count = self._count
        if count == 0 and self._on_idle is not None:
            self._on_idle()
        if self._debug_counting:
            self._log.debug("Resource %s in-use-count decremented to %d", self.name, count)

    def is_idle_now(self) -> bool:
        with self._lock:
            return self._count == 0


class NoopBusyCounter:
    """Counter stand-in for builds without instrumentation; always idle."""

    def increment(self) -> None:
        return None

    def decrement(self) -> None:
        return None

    def is_idle_now(self) -> bool:
        return True


GLOBAL_BUSY_COUNTER = CountingIdlingResource("GLOBAL")


__all__ = [
    "CountingIdlingResource",
    "GLOBAL_BUSY_COUNTER",
    "NoopBusyCounter",
]
