"""
core.config
~~~~~~~~~~~
Reads the codec lookup table and persists the form defaults to JSON
files in the platform's standard config directory.

Config location
---------------
  Windows  : %APPDATA%\\FFclip\\
  macOS    : ~/Library/Application Support/FFclip/
  Linux    : ~/.config/FFclip/

codecs.json there overrides the bundled core/resources/codecs.json.
Only form defaults are stored in settings.json, never jobs.
"""

from __future__ import annotations

import json
import sys
from dataclasses import asdict, dataclass
from pathlib import Path

from core.paths import CODECS_FILE, default_program
from core.presets import CODEC_PRESETS


# ── Config directory ──────────────────────────────────────────────────────────

def _config_dir() -> Path:
    if sys.platform == "win32":
        base = Path.home() / "AppData" / "Roaming"
    elif sys.platform == "darwin":
        base = Path.home() / "Library" / "Application Support"
    else:
        base = Path.home() / ".config"

    return base / "FFclip"


CONFIG_DIR    = _config_dir()
SETTINGS_FILE = CONFIG_DIR / "settings.json"
USER_CODECS   = CONFIG_DIR / "codecs.json"


# ── Codec lookup table ────────────────────────────────────────────────────────

def codecs_file() -> Path:
    """User override if present, bundled resource otherwise."""
    return USER_CODECS if USER_CODECS.is_file() else CODECS_FILE


def load_codec_table(path: Path | None = None) -> dict[str, str]:
    """
    Read a codec document shaped like

        {"video": [{"key": "h264", "codec": "-c:v libx264 ..."}, ...]}

    and return {selector: fragment}.

    Returns an empty dict if the file is missing, unreadable or
    malformed; every selector then falls back to stream copy.
    """
    path = path or codecs_file()
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        print(f"[CONFIG] Could not read codec table '{path}': {exc}")
        return {}

    entries = payload.get("video") if isinstance(payload, dict) else None
    if not isinstance(entries, list):
        print(f"[CONFIG] '{path}' has no \"video\" list — using stream copy")
        return {}

    table: dict[str, str] = {}
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        key, codec = entry.get("key"), entry.get("codec")
        if isinstance(key, str) and isinstance(codec, str):
            table[key] = codec
    return table


def codec_table() -> dict[str, str]:
    """
    The one table both the codec picker and the command builder use.

    Falls back to the built-in presets when no codec file could be read,
    so the picker never offers selectors that would silently remux.
    """
    table = load_codec_table()
    if not table:
        print("[CONFIG] No usable codec table — using built-in presets")
        return dict(CODEC_PRESETS)
    return table


# ── Form defaults ─────────────────────────────────────────────────────────────

@dataclass
class Settings:
    program: str = ""
    output_format: str = "mp4"
    codec: str = "copy"
    scale: str = ""


def save_settings(settings: Settings) -> None:
    """
    Serialise *settings* to SETTINGS_FILE, overwriting any previous data.
    Silently ignores I/O errors so a config issue never crashes the app.
    """
    try:
        CONFIG_DIR.mkdir(parents=True, exist_ok=True)
        SETTINGS_FILE.write_text(json.dumps(asdict(settings), indent=2), encoding="utf-8")
    except OSError:
        pass


def load_settings() -> Settings:
    """
    Read SETTINGS_FILE.
    Returns defaults if the file is missing, empty, or malformed.
    """
    defaults = Settings(program=default_program())
    if not SETTINGS_FILE.exists():
        return defaults
    try:
        payload = json.loads(SETTINGS_FILE.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return defaults
    if not isinstance(payload, dict):
        return defaults

    return Settings(
        program       = str(payload.get("program") or defaults.program),
        output_format = str(payload.get("output_format") or defaults.output_format),
        codec         = str(payload.get("codec") or defaults.codec),
        scale         = str(payload.get("scale", "")),
    )
