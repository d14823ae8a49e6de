"""A logical clock that advances one tick per interval."""

from __future__ import annotations

import threading

DEFAULT_INTERVAL = 60.0


class Clock:
    """Counts ticks in a background thread, one per ``interval`` seconds."""

    def __init__(self, interval: float = DEFAULT_INTERVAL) -> None:
        if interval <= 0:
            raise ValueError("clock interval must be positive")
        self._interval = interval
        self._tick = 0
        self._stopped = threading.Event()
        self._thread = threading.Thread(target=self._run, daemon=True)
        self._thread.start()

    def _run(self) -> None:
        while not self._stopped.wait(self._interval):
            self._tick += 1

    def now(self) -> int:
        return self._tick

    def stop(self) -> None:
        """Stop ticking; the tick keeps its last value."""
        self._stopped.set()
        self._thread.join()