"""One-shot guard used for "first event wins" bookkeeping (TTFT, finalization)."""
from __future__ import annotations

import threading


class OnceFlag:
    """Lock-protected check-and-set flag.

    ``fire()`` returns ``True`` for exactly one caller across all threads.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._fired = False

    def fire(self) -> bool:
        with self._lock:
            if self._fired:
                return False
            self._fired = True
            return True

    @property
    def fired(self) -> bool:
        return self._fired


__all__ = ["OnceFlag"]
