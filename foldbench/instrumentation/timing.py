"""
Timing utilities for fold benchmarking.

Provides a monotonic timer and a context manager that guarantees the
timer is stopped on every exit path, including exceptions.
"""

import time
from contextlib import contextmanager
from typing import Callable, Iterator

# Monotonic, unaffected by wall-clock adjustments
Clock = Callable[[], float]


class Timer:
    """Simple timer for manual timing control."""

    def __init__(self, name: str = "timer", clock: Clock = time.perf_counter):
        self.name = name
        self.clock = clock
        self.start_time: float = 0.0
        self.end_time: float = 0.0
        self._running = False

    def start(self) -> "Timer":
        """Start the timer."""
        self.start_time = self.clock()
        self.end_time = 0.0
        self._running = True
        return self

    def stop(self) -> "Timer":
        """Stop the timer."""
        if self._running:
            self.end_time = self.clock()
            self._running = False
        return self

    @property
    def running(self) -> bool:
        return self._running

    @property
    def elapsed_ms(self) -> float:
        """Elapsed time in milliseconds.

        While running, each read returns a fresh (non-decreasing) value.
        After stop() the value is frozen.
        """
        end = self.end_time if not self._running else self.clock()
        return max(0.0, (end - self.start_time) * 1000)


@contextmanager
def timed(name: str = "operation", clock: Clock = time.perf_counter) -> Iterator[Timer]:
    """Context manager for timing synchronous operations.

    Usage:
        with timed("fold") as timer:
            # do work
        print(f"Elapsed: {timer.elapsed_ms}ms")
    """
    timer = Timer(name, clock=clock).start()
    try:
        yield timer
    finally:
        timer.stop()
