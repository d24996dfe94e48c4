from .models import JobParams, JobCommand, JobEvent, JobResult, EventKind, ErrorKind, JobState
from .controller import JobController
from .registry import JobRegistry
from .splitter import LineSplitter, drain_lines
from .command_builder import build_job_command, build_output_path
from .platform import ProcessAdapter, get_process_adapter
from .events import QueueSink

__all__ = [
    "JobParams", "JobCommand", "JobEvent", "JobResult", "EventKind", "ErrorKind", "JobState",
    "JobController",
    "JobRegistry",
    "LineSplitter", "drain_lines",
    "build_job_command", "build_output_path",
    "ProcessAdapter", "get_process_adapter",
    "QueueSink",
]
