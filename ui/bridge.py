"""
ui.bridge
~~~~~~~~~
QObject that turns controller events into Qt signals.

The controller calls the bridge from its worker thread; because the
bridge lives in the GUI thread, every connected slot runs there too
(queued connection), so widgets are only ever touched by the GUI.

Signals
-------
progress(str)   one stderr line
error(str)      formatted error, the job is over
finished(str)   emitted twice: exit summary, then command text
"""

from __future__ import annotations

from PySide6.QtCore import QObject, Signal

from core.models import EventKind, JobEvent


class JobEventBridge(QObject):

    progress = Signal(str)
    error    = Signal(str)
    finished = Signal(str)

    def __call__(self, event: JobEvent) -> None:
        if event.kind is EventKind.PROGRESS:
            self.progress.emit(event.payload)
        elif event.kind is EventKind.ERROR:
            self.error.emit(event.payload)
        elif event.kind is EventKind.FINISH:
            self.finished.emit(event.payload)
