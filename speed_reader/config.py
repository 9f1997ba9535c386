"""Configuration defaults, environment overrides, and .env loading.

WHY: Centralizes every default the reader falls back to (reading speed,
window size, inter-word delay, punctuation preset, settings file location)
so they can be overridden without touching logic.

HOW: python-dotenv loads the .env file on import. Defaults are
module-level constants read from the environment with hardcoded
fallbacks. default_config_dir() resolves the per-platform directory that
holds the persisted settings and reading-state documents.

RULES:
- Window defaults: 1800 x 1100
- Playback defaults: 400 WPM, 10 ms inter-word delay
- SPEED_READER_CONFIG_DIR overrides the platform config directory
- All defaults can be overridden via environment variables
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the working directory (where the reader is launched)
load_dotenv()


def _env_int(name: str, default: int) -> int:
    """Read an integer environment variable, ignoring malformed values."""
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


# ---------------------------------------------------------------------------
# Settings defaults
# ---------------------------------------------------------------------------

DEFAULT_WINDOW_WIDTH = _env_int("SPEED_READER_WINDOW_WIDTH", 1800)
DEFAULT_WINDOW_HEIGHT = _env_int("SPEED_READER_WINDOW_HEIGHT", 1100)
DEFAULT_WPM = _env_int("SPEED_READER_WPM", 400)
DEFAULT_INTER_WORD_DELAY_MS = _env_int("SPEED_READER_INTER_WORD_DELAY_MS", 10)
DEFAULT_PUNCTUATION_PRESET = os.getenv("SPEED_READER_PUNCTUATION", "normal").strip().lower()

# ---------------------------------------------------------------------------
# Settings file location
# ---------------------------------------------------------------------------

APP_DIR_NAME = "SpeedReader"
CONFIG_FILENAME = "config.json"
STATE_FILENAME = "state.json"


def default_config_dir() -> Path:
    """Resolve the directory that holds the persisted documents.

    WHY: Each platform has its own convention for per-user configuration.
    Users and tests also need a way to point the reader somewhere else.

    HOW: SPEED_READER_CONFIG_DIR wins when set. Otherwise Windows uses
    %APPDATA%, macOS uses ~/Library/Application Support, and everything
    else follows XDG ($XDG_CONFIG_HOME or ~/.config).

    RULES:
    - The override is used verbatim (no SpeedReader subdirectory appended)
    - Platform directories get the SpeedReader subdirectory
    """
    override = os.getenv("SPEED_READER_CONFIG_DIR", "").strip()
    if override:
        return Path(override).expanduser()

    if sys.platform == "win32":
        base = Path(os.getenv("APPDATA") or Path.home() / "AppData" / "Roaming")
    elif sys.platform == "darwin":
        base = Path.home() / "Library" / "Application Support"
    else:
        base = Path(os.getenv("XDG_CONFIG_HOME") or Path.home() / ".config")
    return base / APP_DIR_NAME


def default_config_path() -> Path:
    """Full path of the settings document: <config dir>/config.json."""
    return default_config_dir() / CONFIG_FILENAME


def default_state_path() -> Path:
    """Full path of the reading-state document: <config dir>/state.json."""
    return default_config_dir() / STATE_FILENAME
