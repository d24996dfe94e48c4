"""
core.platform
~~~~~~~~~~~~~
Everything that differs between POSIX and Windows when launching and
killing the job's process lives here, behind one small interface:

    invoke(text)   → ProcessSpec that runs *text* through the shell
    spawn(spec)    → live subprocess.Popen with stdout/stderr piped
    terminate(pid) → best-effort hard kill, never raises

Pick the right one with get_process_adapter().
"""

from __future__ import annotations

import ctypes
import os
import signal
import subprocess
import sys
from abc import ABC, abstractmethod

from core.models import ProcessSpec

# Windows constants (not exposed by subprocess/os on other platforms)
CREATE_NO_WINDOW  = 0x08000000
PROCESS_TERMINATE = 0x0001


class ProcessAdapter(ABC):

    @abstractmethod
    def invoke(self, command_text: str) -> ProcessSpec:
        ...

    @abstractmethod
    def terminate(self, pid: int) -> None:
        ...

    def spawn(self, spec: ProcessSpec) -> subprocess.Popen:
        """
        Start *spec* with both output channels piped.

        Raises:
            OSError – if the OS could not start the process
        """
        # stdin=DEVNULL so ffmpeg never sits waiting on an interactive prompt
        process = subprocess.Popen(
            spec.argv,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            creationflags=spec.creationflags,
            start_new_session=spec.start_new_session,
        )
        print(f"[PLATFORM] Spawned pid={process.pid}: {spec.argv[0]}")
        return process


class PosixProcessAdapter(ProcessAdapter):

    def invoke(self, command_text: str) -> ProcessSpec:
        # New session → the shell leads its own process group, so a kill
        # reaches ffmpeg even when sh did not exec it directly.
        return ProcessSpec(argv=["sh", "-c", command_text], start_new_session=True)

    def terminate(self, pid: int) -> None:
        try:
            os.killpg(pid, signal.SIGKILL)
            print(f"[PLATFORM] Sent SIGKILL to process group {pid}")
            return
        except ProcessLookupError:
            print(f"[PLATFORM] Process group {pid} already gone")
            return
        except OSError as exc:
            print(f"[PLATFORM] killpg({pid}) failed, falling back to kill: {exc}")

        try:
            os.kill(pid, signal.SIGKILL)
            print(f"[PLATFORM] Sent SIGKILL to pid={pid}")
        except OSError as exc:
            print(f"[PLATFORM] kill({pid}) failed: {exc}")


class WindowsProcessAdapter(ProcessAdapter):

    def invoke(self, command_text: str) -> ProcessSpec:
        return ProcessSpec(argv=["cmd", "/C", command_text], creationflags=CREATE_NO_WINDOW)

    def terminate(self, pid: int) -> None:
        try:
            kernel32 = ctypes.windll.kernel32
        except AttributeError:
            print("[PLATFORM] kernel32 unavailable — cannot terminate")
            return

        # HANDLE is pointer-sized; the default int conversion truncates it on 64-bit
        kernel32.OpenProcess.restype = ctypes.c_void_p
        kernel32.TerminateProcess.argtypes = [ctypes.c_void_p, ctypes.c_uint]
        kernel32.CloseHandle.argtypes = [ctypes.c_void_p]
        handle = kernel32.OpenProcess(PROCESS_TERMINATE, False, pid)
        if not handle:
            print(f"[PLATFORM] OpenProcess({pid}) failed — process already gone?")
            return
        try:
            if kernel32.TerminateProcess(handle, 1):
                print(f"[PLATFORM] Terminated pid={pid}")
            else:
                print(f"[PLATFORM] TerminateProcess({pid}) failed")
        finally:
            kernel32.CloseHandle(handle)


def get_process_adapter(platform: str | None = None) -> ProcessAdapter:
    platform = platform or sys.platform
    if platform == "win32":
        return WindowsProcessAdapter()
    return PosixProcessAdapter()
