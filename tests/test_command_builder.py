"""Command builder tests."""

from __future__ import annotations

import re
import sys
from datetime import datetime
from pathlib import Path

import pytest

from core.command_builder import (
    build_job_command,
    build_output_path,
    codec_fragment,
    scale_fragment,
)
from core.models import JobParams
from core.platform import CREATE_NO_WINDOW, PosixProcessAdapter, WindowsProcessAdapter
from core.presets import CODEC_PRESETS, STREAM_COPY

posix_only = pytest.mark.skipif(sys.platform == "win32", reason="POSIX path rendering")

NOW = datetime(2026, 10, 19, 12, 30, 45)


def params(**overrides) -> JobParams:
    values = dict(
        program="ffmpeg",
        input_path="/tmp/a.mp4",
        start_time="00:00:01",
        end_time="00:00:05",
        output_format="mp4",
        codec="h264",
        scale="",
    )
    values.update(overrides)
    return JobParams(**values)


class TestCodecFragment:

    def test_builtin_selectors(self):
        assert codec_fragment("copy") == "-c copy"
        assert codec_fragment("h264") == "-c:v libx264 -pix_fmt yuv420p -c:a aac"
        assert codec_fragment("h265") == "-c:v libx265 -pix_fmt yuv420p -tag:v hvc1 -c:a aac"

    def test_unknown_selector_falls_back_to_stream_copy(self):
        assert codec_fragment("vp9") == STREAM_COPY
        assert codec_fragment("") == STREAM_COPY

    def test_external_table_is_used_instead_of_builtin(self):
        table = {"av1": "-c:v libaom-av1"}
        assert codec_fragment("av1", table) == "-c:v libaom-av1"
        assert codec_fragment("h264", table) == STREAM_COPY

    def test_empty_external_table_means_stream_copy(self):
        assert codec_fragment("h264", {}) == STREAM_COPY


class TestScaleFragment:

    def test_empty_scale_omitted(self):
        assert scale_fragment("") == ""

    def test_scale_is_verbatim(self):
        assert scale_fragment("1280:720") == '-vf scale="1280:720"'
        assert scale_fragment("iw/2:-1") == '-vf scale="iw/2:-1"'


class TestBuildOutputPath:

    @posix_only
    def test_same_folder_timestamped(self):
        assert build_output_path("/rushes/clip001.mov", "mp4", NOW) == Path(
            "/rushes/clip001_20261019_123045.mp4"
        )

    def test_uses_current_time_by_default(self):
        out = build_output_path("/tmp/a.mp4", "mkv")
        assert re.fullmatch(r"a_\d{8}_\d{6}\.mkv", out.name)

    def test_relative_input(self):
        assert build_output_path("a.mp4", "mp4", NOW).name == "a_20261019_123045.mp4"

    @pytest.mark.parametrize("bad", ["", "/"])
    def test_no_parent_directory_raises_not_found(self, bad):
        with pytest.raises(FileNotFoundError):
            build_output_path(bad, "mp4", NOW)


class TestBuildJobCommand:

    @posix_only
    def test_exact_command_text(self):
        cmd = build_job_command(params(), now=NOW, adapter=PosixProcessAdapter())
        assert cmd.text == (
            'ffmpeg -ss 00:00:01 -to 00:00:05 -i "/tmp/a.mp4" '
            "-c:v libx264 -pix_fmt yuv420p -c:a aac "
            ' "/tmp/a_20261019_123045.mp4"'
        )
        assert cmd.output_path == Path("/tmp/a_20261019_123045.mp4")

    @posix_only
    def test_default_timestamp_shape(self):
        cmd = build_job_command(params(), adapter=PosixProcessAdapter())
        assert '-ss 00:00:01 -to 00:00:05 -i "/tmp/a.mp4"' in cmd.text
        assert CODEC_PRESETS["h264"] in cmd.text
        assert "-vf" not in cmd.text
        assert re.search(r'"/tmp/a_\d{8}_\d{6}\.mp4"$', cmd.text)

    def test_scale_included(self):
        cmd = build_job_command(params(scale="640:360"), now=NOW, adapter=PosixProcessAdapter())
        assert '-vf scale="640:360"' in cmd.text

    def test_unknown_codec_remuxes(self):
        cmd = build_job_command(params(codec="nope"), now=NOW, adapter=PosixProcessAdapter())
        assert " -c copy " in cmd.text

    def test_posix_spec_runs_through_sh(self):
        cmd = build_job_command(params(), now=NOW, adapter=PosixProcessAdapter())
        assert cmd.spec.argv == ["sh", "-c", cmd.text]
        assert cmd.spec.start_new_session is True

    def test_windows_spec_runs_through_cmd_without_console(self):
        cmd = build_job_command(params(), now=NOW, adapter=WindowsProcessAdapter())
        assert cmd.spec.argv == ["cmd", "/C", cmd.text]
        assert cmd.spec.creationflags == CREATE_NO_WINDOW

    def test_missing_parent_raises(self):
        with pytest.raises(FileNotFoundError):
            build_job_command(params(input_path=""), adapter=PosixProcessAdapter())
