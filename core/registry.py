"""
core.registry
~~~~~~~~~~~~~
Single-slot holder for the pid of the job that is currently running.

The controller's worker thread writes it, cancel() takes it; both go
through the same lock so a store and a take never interleave.
"""

from __future__ import annotations

import threading


class JobRegistry:

    def __init__(self):
        self._lock = threading.Lock()
        self._pid: int | None = None

    def store(self, pid: int) -> None:
        with self._lock:
            if self._pid is not None:
                print(f"[REGISTRY] Overwriting stale pid={self._pid} with pid={pid}")
            self._pid = pid

    def take(self) -> int | None:
        """Return the registered pid (or None) and leave the slot empty."""
        with self._lock:
            pid, self._pid = self._pid, None
            return pid

    def peek(self) -> int | None:
        with self._lock:
            return self._pid

    def clear_if(self, pid: int) -> bool:
        """Empty the slot only if it still holds *pid*."""
        with self._lock:
            if self._pid != pid:
                return False
            self._pid = None
            return True
