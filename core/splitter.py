"""
core.splitter
~~~~~~~~~~~~~
Turns ffmpeg's stderr (an unbounded byte stream where progress lines
end in '\\r' and log lines in '\\n') into discrete text lines.

No Qt, no subprocess: feed it any object with read(n) -> bytes.
"""

from __future__ import annotations

import codecs
import re
from collections.abc import Callable
from typing import BinaryIO

CHUNK_SIZE = 4096

_TERMINATOR = re.compile(r"[\r\n]")


class LineSplitter:
    """
    Push parser: feed() raw chunks, get back the complete lines.

    Empty lines (e.g. the gap in "\\r\\n") are dropped. Whatever follows
    the last terminator is kept until the next chunk completes it.
    """

    def __init__(self):
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._buffer = ""

    @property
    def pending(self) -> str:
        return self._buffer

    def feed(self, chunk: bytes) -> list[str]:
        self._buffer += self._decoder.decode(chunk)

        lines: list[str] = []
        while True:
            match = _TERMINATOR.search(self._buffer)
            if match is None:
                break
            line = self._buffer[:match.start()]
            self._buffer = self._buffer[match.end():]
            if line:
                lines.append(line)
        return lines


def drain_lines(
    stream: BinaryIO,
    on_line: Callable[[str], None],
    chunk_size: int = CHUNK_SIZE,
) -> None:
    """
    Read *stream* until EOF, calling *on_line* for every non-empty line.

    Blocks the calling thread. A read error ends the loop just like EOF.
    A trailing fragment without a terminator is never reported.
    """
    splitter = LineSplitter()
    while True:
        try:
            chunk = stream.read(chunk_size)
        except (OSError, ValueError):
            break
        if not chunk:
            break
        for line in splitter.feed(chunk):
            on_line(line)
