"""
core.command_builder
~~~~~~~~~~~~~~~~~~~~
Builds the ffmpeg command line for one clip job.

Keeping command construction separate means you can:
  - log / print the exact command before running it
  - paste it straight into a terminal for debugging
  - unit-test flag generation without running any process
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from pathlib import Path

from core.models import JobCommand, JobParams
from core.platform import ProcessAdapter, get_process_adapter
from core.presets import CODEC_PRESETS, STREAM_COPY


def build_job_command(
    params: JobParams,
    codecs: Mapping[str, str] | None = None,
    now: datetime | None = None,
    adapter: ProcessAdapter | None = None,
) -> JobCommand:
    """
    Build the full command for cutting one clip.

    The command structure is:
        <program>
          -ss <start> -to <end>   ← verbatim, not validated
          -i "<input>"
          <codec fragment>        ← from *codecs*, stream copy if unknown
          <scale fragment>        ← empty when no scale was given
          "<output>"              ← next to the input, timestamped

    Example text:
        ffmpeg -ss 00:00:01 -to 00:00:05 -i "/tmp/a.mp4" -c copy  "/tmp/a_20250101_120000.mp4"

    Raises:
        FileNotFoundError – if the input path has no parent directory
    """
    output_path = build_output_path(params.input_path, params.output_format, now)

    text = (
        f"{params.program} -ss {params.start_time} -to {params.end_time} "
        f"-i \"{params.input_path}\" {codec_fragment(params.codec, codecs)} "
        f"{scale_fragment(params.scale)} \"{output_path}\""
    )

    adapter = adapter or get_process_adapter()
    return JobCommand(text=text, spec=adapter.invoke(text), output_path=output_path)


def codec_fragment(selector: str, codecs: Mapping[str, str] | None = None) -> str:
    """Unknown selectors never fail the job, they just remux."""
    table = CODEC_PRESETS if codecs is None else codecs
    return table.get(selector) or STREAM_COPY


def scale_fragment(scale: str) -> str:
    if not scale:
        return ""
    return f"-vf scale=\"{scale}\""


def build_output_path(input_path: str, output_format: str, now: datetime | None = None) -> Path:
    """
    Given an input file, return where the clip is written.

    Example:
        input_path    = "/rushes/clip001.mov"
        output_format = "mp4"
        → Path("/rushes/clip001_20250101_120000.mp4")
    """
    path = Path(input_path)
    if not input_path or path.parent == path:
        raise FileNotFoundError(f"cannot determine parent directory: {input_path!r}")

    stamp = (now or datetime.now()).strftime("%Y%m%d_%H%M%S")
    stem  = path.stem or "output"
    return path.parent / f"{stem}_{stamp}.{output_format}"
