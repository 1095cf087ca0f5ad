from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from taskboard.utils.idling import CountingIdlingResource, NoopBusyCounter


def test_counter_tracks_busy_and_idle() -> None:
    resource = CountingIdlingResource("test")
    assert resource.is_idle_now()

    resource.increment()
    resource.increment()
    assert not resource.is_idle_now()
    assert resource.count == 2

    resource.decrement()
    resource.decrement()
    assert resource.is_idle_now()


def test_decrement_below_zero_is_corruption() -> None:
    resource = CountingIdlingResource("test")
    with pytest.raises(RuntimeError, match="corrupted"):
        resource.decrement()


def test_idle_transition_callback_fires_on_zero() -> None:
    resource = CountingIdlingResource("test", debug_counting=True)
    on_idle = MagicMock()
    resource.register_idle_transition_callback(on_idle)

    resource.increment()
    resource.increment()
    resource.decrement()
    on_idle.assert_not_called()
    resource.decrement()
    on_idle.assert_called_once_with()


def test_noop_counter_is_always_idle() -> None:
    counter = NoopBusyCounter()
    counter.increment()
    counter.decrement()
    counter.decrement()
    assert counter.is_idle_now()
