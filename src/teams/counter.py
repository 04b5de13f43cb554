"""Thread-safe count of cards delivered since startup."""

from __future__ import annotations

import threading


class SendCounter:
    """Monotonic counter shared by every dispatch in the process.

    Increments happen under a lock so concurrent dispatches, whether asyncio
    tasks or worker threads, never lose an update.
    """

    def __init__(self) -> None:
        self._value = 0
        self._lock = threading.Lock()

    @property
    def value(self) -> int:
        with self._lock:
            return self._value

    def increment(self) -> int:
        """Add one and return the new total."""
        with self._lock:
            self._value += 1
            return self._value
