"""
core.models
~~~~~~~~~~~
Pure dataclasses and enums — no Qt, no I/O.
These travel freely between core and ui.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path


# ── Enums ─────────────────────────────────────────────────────────────────────

class JobState(Enum):
    IDLE       = auto()  # no job, ready for the next one
    VALIDATING = auto()  # checking the input file
    SPAWNING   = auto()  # asking the OS to start the process
    RUNNING    = auto()  # process started, pid registered
    DRAINING   = auto()  # forwarding stderr lines
    FINISHED   = auto()  # process exited, terminal events sent


class EventKind(Enum):
    PROGRESS = "progress"
    ERROR    = "error"
    FINISH   = "finish"


class ErrorKind(Enum):
    NOT_FOUND      = "NotFound"
    SPAWN_FAILURE  = "SpawnFailure"
    STREAM_FAILURE = "StreamFailure"
    CONFIG_FAILURE = "ConfigFailure"  # recovered silently, never emitted

    def format(self, message: str) -> str:
        return f"{self.value}: {message}"


# ── Job request ───────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class JobParams:
    """
    One transcode request, exactly as the user typed it.

    Times and scale are free-form and substituted verbatim, e.g.:

        JobParams("ffmpeg", "/rushes/a.mp4", "00:00:01", "00:00:05",
                  "mp4", "h264", "1280:720")
    """
    program: str
    input_path: str
    start_time: str
    end_time: str
    output_format: str
    codec: str
    scale: str = ""


# ── Built command ─────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class ProcessSpec:
    """Something the platform adapter can hand straight to Popen."""
    argv: list[str]
    creationflags: int = 0
    start_new_session: bool = False


@dataclass(frozen=True)
class JobCommand:
    text: str             # shown in the log, pasteable into a terminal
    spec: ProcessSpec
    output_path: Path


# ── Outcome ───────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class JobResult:
    returncode: int
    stdout: str = field(default="", repr=False)

    def summary(self) -> str:
        text = f"ffmpeg exited with code {self.returncode}"
        if self.stdout.strip():
            text += "\n" + self.stdout.rstrip()
        return text


@dataclass(frozen=True)
class JobEvent:
    kind: EventKind
    payload: str

    @classmethod
    def progress(cls, line: str) -> JobEvent:
        return cls(EventKind.PROGRESS, line)

    @classmethod
    def error(cls, kind: ErrorKind, message: str) -> JobEvent:
        return cls(EventKind.ERROR, kind.format(message))

    @classmethod
    def finish(cls, text: str) -> JobEvent:
        return cls(EventKind.FINISH, text)
