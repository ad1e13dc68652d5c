import threading

import pytest

from theme_switcher.timer import PeriodicTimer


def test_timer_ticks_and_stops_on_exit():
    ticked = threading.Event()
    calls = []

    def tick():
        calls.append(1)
        ticked.set()

    with PeriodicTimer(0.01, tick, name="test-tick") as timer:
        assert ticked.wait(2)
        assert timer.is_running

    assert not timer.is_running
    count = len(calls)
    threading.Event().wait(0.05)
    assert len(calls) == count


def test_timer_survives_failing_callback():
    calls = []
    done = threading.Event()

    def tick():
        calls.append(1)
        if len(calls) >= 3:
            done.set()
        raise RuntimeError("boom")

    with PeriodicTimer(0.01, tick):
        assert done.wait(2)


def test_timer_stop_is_idempotent():
    timer = PeriodicTimer(10, lambda: None)
    timer.start()
    timer.start()
    timer.stop()
    timer.stop()
    assert not timer.is_running


def test_timer_rejects_non_positive_interval():
    with pytest.raises(ValueError):
        PeriodicTimer(0, lambda: None)
