"""Thread-safe completion counter for progress display."""

import threading
from typing import Callable

ProgressCallback = Callable[[int, int], None]


class ProgressCounter:
    """Counts finished frames across worker threads and reports ``(completed, total)``."""

    def __init__(self, total: int, callback: ProgressCallback | None = None) -> None:
        self.total = total
        self.callback = callback
        self._completed = 0
        self._lock = threading.Lock()

    @property
    def completed(self) -> int:
        return self._completed

    def increment(self) -> int:
        # Reported under the lock so displayed counts never go backwards.
        with self._lock:
            self._completed += 1
            completed = self._completed
            if self.callback is not None:
                self.callback(completed, self.total)
        return completed
