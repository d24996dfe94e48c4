"""
core.paths
~~~~~~~~~~
Single source of truth for filesystem paths used across the app.
Import these instead of hard-coding strings anywhere else.
"""

import shutil
import sys
from pathlib import Path

# Project root = the directory that contains main.py
PROJECT_ROOT = Path(__file__).resolve().parent.parent

BIN_DIR      = PROJECT_ROOT / "bin"
# Shipped inside the core package so installed builds find it too
RESOURCE_DIR = Path(__file__).resolve().parent / "resources"
CODECS_FILE  = RESOURCE_DIR / "codecs.json"

FFMPEG_NAME = "ffmpeg.exe" if sys.platform == "win32" else "ffmpeg"
FFMPEG_BIN  = BIN_DIR / FFMPEG_NAME


def default_program() -> str:
    """
    The ffmpeg to pre-fill in the UI.

    A bundled binary in bin/ wins; otherwise whatever `ffmpeg` resolves
    to on PATH, or the bare name so the shell reports the problem.
    """
    if FFMPEG_BIN.is_file():
        return str(FFMPEG_BIN)
    return shutil.which("ffmpeg") or "ffmpeg"
