"""
core.events
~~~~~~~~~~~
Event sinks the controller can emit into.

A sink is any callable taking a JobEvent. It is called from the job's
worker thread, so it must be quick and thread-safe. The Qt UI uses
ui.bridge.JobEventBridge; headless callers use QueueSink.
"""

from __future__ import annotations

import queue
from collections.abc import Callable

from core.models import EventKind, JobEvent

EventSink = Callable[[JobEvent], None]


class QueueSink:
    """Parks every event on a thread-safe queue for the consumer to pull."""

    def __init__(self):
        self._queue: queue.Queue[JobEvent] = queue.Queue()

    def __call__(self, event: JobEvent) -> None:
        self._queue.put(event)

    def get(self, timeout: float | None = None) -> JobEvent:
        """Raises queue.Empty if nothing arrives within *timeout*."""
        return self._queue.get(timeout=timeout)

    def drain(self) -> list[JobEvent]:
        """Everything queued so far, without blocking."""
        events: list[JobEvent] = []
        while True:
            try:
                events.append(self._queue.get_nowait())
            except queue.Empty:
                return events

    def wait_for(self, kind: EventKind, timeout: float | None = None) -> list[JobEvent]:
        """
        Pull events until one of *kind* arrives; return all pulled events.
        Raises queue.Empty on timeout.
        """
        events: list[JobEvent] = []
        while True:
            event = self.get(timeout)
            events.append(event)
            if event.kind is kind:
                return events
