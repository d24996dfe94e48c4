"""Line splitter tests: chunk boundaries, terminators, lossy decoding."""

from __future__ import annotations

import io

import pytest

from core.splitter import LineSplitter, drain_lines

MIXED = b"ffmpeg version 6\nframe=1\rframe=2\r\n\nframe=3\r\rInput #0\ntail"
MIXED_LINES = ["ffmpeg version 6", "frame=1", "frame=2", "frame=3", "Input #0"]


def collect(stream, chunk_size=4096) -> list[str]:
    lines: list[str] = []
    drain_lines(stream, lines.append, chunk_size=chunk_size)
    return lines


class TestLineSplitter:

    def test_splits_on_cr_and_lf(self):
        splitter = LineSplitter()
        assert splitter.feed(b"a\rb\nc\r\n") == ["a", "b", "c"]

    def test_keeps_partial_line(self):
        splitter = LineSplitter()
        assert splitter.feed(b"frame=1\rfra") == ["frame=1"]
        assert splitter.pending == "fra"
        assert splitter.feed(b"me=2\r") == ["frame=2"]
        assert splitter.pending == ""

    def test_crlf_split_across_chunks(self):
        splitter = LineSplitter()
        assert splitter.feed(b"first\r") == ["first"]
        assert splitter.feed(b"\nsecond\n") == ["second"]

    @pytest.mark.parametrize("cut", range(len(MIXED) + 1))
    def test_any_single_cut(self, cut):
        splitter = LineSplitter()
        lines = splitter.feed(MIXED[:cut]) + splitter.feed(MIXED[cut:])
        assert lines == MIXED_LINES

    def test_every_pair_of_cuts(self):
        for i in range(len(MIXED) + 1):
            for j in range(i, len(MIXED) + 1):
                splitter = LineSplitter()
                lines = (
                    splitter.feed(MIXED[:i])
                    + splitter.feed(MIXED[i:j])
                    + splitter.feed(MIXED[j:])
                )
                assert lines == MIXED_LINES, (i, j)

    def test_invalid_bytes_are_replaced(self):
        splitter = LineSplitter()
        assert splitter.feed(b"bad \xff byte\n") == ["bad \ufffd byte"]

    def test_multibyte_character_split_across_chunks(self):
        splitter = LineSplitter()
        encoded = "café\n".encode("utf-8")
        lines = [line for b in encoded for line in splitter.feed(bytes([b]))]
        assert lines == ["café"]


class TestDrainLines:

    @pytest.mark.parametrize("chunk_size", [1, 2, 3, 7, 4096])
    def test_chunk_size_does_not_change_lines(self, chunk_size):
        assert collect(io.BytesIO(MIXED), chunk_size) == MIXED_LINES

    def test_empty_stream(self):
        assert collect(io.BytesIO(b"")) == []

    def test_only_terminators(self):
        assert collect(io.BytesIO(b"\r\n\r\n\n\r")) == []

    def test_trailing_fragment_is_dropped(self):
        assert collect(io.BytesIO(b"done\nno newline")) == ["done"]

    def test_read_error_stops_quietly(self):
        class Flaky:
            def __init__(self):
                self.calls = 0

            def read(self, n):
                self.calls += 1
                if self.calls == 1:
                    return b"one\ntwo\n"
                raise OSError("pipe broke")

        assert collect(Flaky()) == ["one", "two"]

    def test_closed_stream_stops_quietly(self):
        stream = io.BytesIO(b"x\n")
        stream.close()
        assert collect(stream) == []

    def test_reads_in_bounded_chunks(self):
        sizes: list[int] = []

        class Recording(io.BytesIO):
            def read(self, n=-1):
                sizes.append(n)
                return super().read(n)

        collect(Recording(b"a" * 10000 + b"\n"))
        assert set(sizes) == {4096}
