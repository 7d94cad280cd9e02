"""Thread-safe render progress reporting.

Every render worker reports the number of scanlines it still has to draw.
The tracker keeps one count per worker and rewrites a single status line
on its stream after every update:

    Scanlines remaining: 42 41 42 40 Estimated: 1.25 minutes

The time estimate is driven by worker 0 alone: the time it took to finish
its last scanline multiplied by the number of scanlines it has left.

Example:
    >>> import io
    >>> from spheretrace.core.progress import RenderProgress
    >>> ticks = iter([0.0, 3.0])
    >>> progress = RenderProgress(2, stream=io.StringIO(), clock=lambda: next(ticks))
    >>> progress.update(0, 10)
    >>> progress.remaining, progress.eta_minutes
    ((10, 0), 0.5)
"""

from __future__ import annotations

import sys
import threading
import time
from collections.abc import Callable
from typing import TextIO

# Clock returning seconds as a float
Clock = Callable[[], float]


class RenderProgress:
    """Remaining-scanline counters shared by all render workers.

    A single lock covers the whole read-update-print sequence of
    :meth:`update`, so status lines from different workers never
    interleave.

    Attributes:
        worker_count: Number of workers reporting to this tracker.
    """

    def __init__(
        self,
        worker_count: int,
        stream: TextIO | None = None,
        clock: Clock = time.perf_counter,
    ) -> None:
        """Initialize the tracker.

        Args:
            worker_count: Number of workers that will report.
            stream: Where status lines go. Defaults to ``sys.stderr``,
                looked up at construction time.
            clock: Monotonic clock in seconds, injectable for tests.

        Raises:
            ValueError: If worker_count is not positive.
        """
        if worker_count <= 0:
            raise ValueError(f"worker_count must be positive, got {worker_count}")

        self.worker_count = worker_count
        self._stream = stream if stream is not None else sys.stderr
        self._clock = clock
        self._lock = threading.Lock()
        self._lines_left = [0] * worker_count
        self._eta_seconds = 0.0
        self._last_reset = clock()

    def update(self, worker_index: int, remaining: int) -> None:
        """Record that a worker has ``remaining`` scanlines left.

        Args:
            worker_index: Index of the reporting worker.
            remaining: Scanlines the worker still has to render.

        Raises:
            IndexError: If worker_index is out of range.
        """
        if not 0 <= worker_index < self.worker_count:
            raise IndexError(
                f"worker_index {worker_index} out of range for {self.worker_count} workers"
            )

        with self._lock:
            if worker_index == 0:
                now = self._clock()
                self._eta_seconds = (now - self._last_reset) * remaining
                self._last_reset = now

            self._lines_left[worker_index] = remaining
            counts = " ".join(str(count) for count in self._lines_left)
            self._stream.write(
                f"\rScanlines remaining: {counts} "
                f"Estimated: {self._eta_seconds / 60.0:.2f} minutes"
            )
            self._stream.flush()

    @property
    def remaining(self) -> tuple[int, ...]:
        """Snapshot of the per-worker remaining scanline counts."""
        with self._lock:
            return tuple(self._lines_left)

    @property
    def eta_seconds(self) -> float:
        """Latest estimate of the time left, in seconds."""
        with self._lock:
            return self._eta_seconds

    @property
    def eta_minutes(self) -> float:
        """Latest estimate of the time left, in minutes."""
        return self.eta_seconds / 60.0

    def finish(self) -> None:
        """End the status line."""
        with self._lock:
            self._stream.write("\nDone.\n")
            self._stream.flush()

    def __repr__(self) -> str:
        return f"RenderProgress(worker_count={self.worker_count}, remaining={list(self.remaining)})"
