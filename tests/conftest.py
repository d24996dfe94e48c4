"""Pytest configuration and fixtures."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).parent.parent

# Flat layout: make `core` importable without an install
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

FAKE_FFMPEG = Path(__file__).parent / "fixtures" / "fake_ffmpeg.py"


@pytest.fixture
def input_file(tmp_path: Path) -> Path:
    """An existing (fake) media file."""
    path = tmp_path / "clip.mp4"
    path.write_bytes(b"\x00\x00\x00\x18ftypmp42")
    return path


@pytest.fixture
def fake_ffmpeg_program() -> str:
    """Program string that runs fixtures/fake_ffmpeg.py through the shell."""
    return f'"{sys.executable}" "{FAKE_FFMPEG}"'
