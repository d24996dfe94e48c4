"""
core.controller
~~~~~~~~~~~~~~~
JobController runs one ffmpeg clip job at a time on a background thread
and reports what happens through an event sink.

Events
------
progress(line)    every non-empty stderr line, verbatim
error(message)    "<Kind>: <details>", the job is over
finish(summary)   exit code + captured stdout, sent once the process exits
finish(command)   the command text, right after the summary

cancel() can be called from any thread at any time.
"""

from __future__ import annotations

import subprocess
import threading
from collections.abc import Mapping
from pathlib import Path

from core.command_builder import build_job_command
from core.events import EventSink
from core.models import ErrorKind, JobCommand, JobEvent, JobParams, JobResult, JobState
from core.platform import ProcessAdapter, get_process_adapter
from core.registry import JobRegistry
from core.splitter import drain_lines


class JobController:

    def __init__(
        self,
        sink: EventSink,
        adapter: ProcessAdapter | None = None,
        registry: JobRegistry | None = None,
        codecs: Mapping[str, str] | None = None,
    ):
        self._sink     = sink
        self._adapter  = adapter if adapter is not None else get_process_adapter()
        self._registry = registry if registry is not None else JobRegistry()
        self._codecs   = codecs
        self._state    = JobState.IDLE
        self._thread: threading.Thread | None = None

    # ── Properties ────────────────────────────────────────────────────────────

    @property
    def state(self) -> JobState:
        return self._state

    @property
    def registry(self) -> JobRegistry:
        return self._registry

    @property
    def busy(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    # ── Start ─────────────────────────────────────────────────────────────────

    def start(self, params: JobParams) -> threading.Thread | None:
        """
        Validate and build on the caller's thread, then hand off to a worker.

        Returns the worker thread, or None if the job was rejected (an
        error event has already been emitted in that case).
        """
        print(f"[CONTROLLER] start: '{params.input_path}' "
              f"[{params.start_time} → {params.end_time}] codec={params.codec}")

        self._set_state(JobState.VALIDATING)
        if not Path(params.input_path).exists():
            self._fail(ErrorKind.NOT_FOUND, f"input file does not exist: {params.input_path}")
            return None

        try:
            command = build_job_command(params, self._codecs, adapter=self._adapter)
        except (OSError, ValueError) as exc:
            self._fail(ErrorKind.NOT_FOUND, str(exc))
            return None
        print(f"[CONTROLLER] Command:\n  {command.text}")

        self._set_state(JobState.SPAWNING)
        self._thread = threading.Thread(
            target=self._run, args=(command,), name="ffclip-job", daemon=True
        )
        self._thread.start()
        return self._thread

    def join(self, timeout: float | None = None) -> None:
        if self._thread is not None:
            self._thread.join(timeout)

    # ── Cancel ────────────────────────────────────────────────────────────────

    def cancel(self) -> bool:
        """Kill the registered job, if any. Returns True if a kill was sent."""
        pid = self._registry.take()
        if pid is None:
            print("[CONTROLLER] cancel() — no running job")
            return False
        print(f"[CONTROLLER] cancel() → terminating pid={pid}")
        self._adapter.terminate(pid)
        return True

    # ── Worker thread ─────────────────────────────────────────────────────────

    def _run(self, command: JobCommand) -> None:
        try:
            process = self._adapter.spawn(command.spec)
        except OSError as exc:
            print(f"[CONTROLLER] ❌ Spawn failed: {exc}")
            self._fail(ErrorKind.SPAWN_FAILURE, str(exc))
            return

        try:
            self._watch(process, command)
        finally:
            _close_pipes(process)

    def _watch(self, process: subprocess.Popen, command: JobCommand) -> None:
        pid = process.pid
        self._registry.store(pid)
        self._set_state(JobState.RUNNING)

        # ffmpeg's stdout is normally empty, but if it isn't, an unread pipe
        # fills up (~64 KB) and the process blocks forever.
        stdout_chunks: list[bytes] = []

        def _collect_stdout():
            if process.stdout is None:
                return
            try:
                for chunk in iter(lambda: process.stdout.read(4096), b""):
                    stdout_chunks.append(chunk)
            except (OSError, ValueError):
                pass

        stdout_thread = threading.Thread(target=_collect_stdout, daemon=True)
        stdout_thread.start()

        self._set_state(JobState.DRAINING)
        line_count = 0

        def _forward(line: str):
            nonlocal line_count
            line_count += 1
            self._sink(JobEvent.progress(line))

        if process.stderr is not None:
            drain_lines(process.stderr, _forward)

        try:
            returncode = process.wait()
            stdout_thread.join()
        except (OSError, subprocess.SubprocessError) as exc:
            print(f"[CONTROLLER] ❌ wait() failed for pid={pid}: {exc}")
            self._registry.take()
            self._fail(ErrorKind.STREAM_FAILURE, str(exc))
            return

        print(f"[CONTROLLER] pid={pid} exited with code {returncode} "
              f"({line_count} progress lines emitted)")

        self._registry.clear_if(pid)
        result = JobResult(
            returncode=returncode,
            stdout=b"".join(stdout_chunks).decode("utf-8", errors="replace"),
        )
        self._set_state(JobState.FINISHED)
        self._sink(JobEvent.finish(result.summary()))
        self._sink(JobEvent.finish(command.text))
        self._set_state(JobState.IDLE)

    # ── Helpers ───────────────────────────────────────────────────────────────

    def _fail(self, kind: ErrorKind, message: str) -> None:
        print(f"[CONTROLLER] _fail(): {kind.value}: {message}")
        self._sink(JobEvent.error(kind, message))
        self._set_state(JobState.IDLE)

    def _set_state(self, state: JobState) -> None:
        if state is not self._state:
            print(f"[CONTROLLER] State: {self._state.name} → {state.name}")
        self._state = state


def _close_pipes(process: subprocess.Popen) -> None:
    for stream in (process.stdout, process.stderr):
        if stream is not None:
            try:
                stream.close()
            except OSError as exc:
                print(f"[CONTROLLER] Could not close pipe for pid={process.pid}: {exc}")
