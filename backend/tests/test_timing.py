"""Tests for named timers."""

import logging

import pytest

from gqlfetch.timing import Timer, timed


def test_stop_logs_label_and_elapsed(caplog) -> None:
    caplog.set_level(logging.INFO, logger="gqlfetch.timing")

    timer = Timer("fetch").start()
    elapsed = timer.stop()

    assert elapsed >= 0
    assert not timer.running
    assert any(r.getMessage().startswith("fetch: ") for r in caplog.records)


def test_stop_before_start_raises() -> None:
    with pytest.raises(RuntimeError):
        Timer("never").stop()


def test_elapsed_is_frozen_after_stop() -> None:
    timer = Timer("t").start()
    first = timer.stop()

    assert timer.elapsed_ms == first


def test_timed_stops_on_error(caplog) -> None:
    caplog.set_level(logging.INFO, logger="gqlfetch.timing")

    with pytest.raises(ValueError):
        with timed("failing") as timer:
            raise ValueError("boom")

    assert not timer.running
    assert any("failing: " in r.getMessage() for r in caplog.records)
