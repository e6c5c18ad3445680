"""Named timers that log elapsed wall-clock time."""

from __future__ import annotations

import logging
import time
from collections.abc import Iterator
from contextlib import contextmanager

logger = logging.getLogger(__name__)


class Timer:
    """Start/stop timer identified by a label."""

    def __init__(self, label: str = "default"):
        self.label = label
        self._start: float | None = None
        self._end: float | None = None

    def start(self) -> Timer:
        self._start = time.perf_counter()
        self._end = None
        return self

    @property
    def running(self) -> bool:
        return self._start is not None and self._end is None

    @property
    def elapsed_ms(self) -> float:
        """Milliseconds since start, or the final value once stopped."""
        if self._start is None:
            return 0.0
        end = self._end if self._end is not None else time.perf_counter()
        return (end - self._start) * 1000

    def stop(self) -> float:
        if self._start is None:
            raise RuntimeError(f"Timer '{self.label}' was never started")
        if self._end is None:
            self._end = time.perf_counter()
        elapsed = self.elapsed_ms
        logger.info(f"{self.label}: {elapsed:.3f}ms")
        return elapsed


@contextmanager
def timed(label: str) -> Iterator[Timer]:
    """Time the enclosed block and log the result, even on error."""
    timer = Timer(label).start()
    try:
        yield timer
    finally:
        timer.stop()
