"""Persisted window and playback settings, and the reading state.

WHY: Reading speed and window size should survive restarts, and so
should the list of recently read texts and the place where the last
session stopped. A broken or hand-edited file must never stop the reader
from starting, and a failed save must never leave the host guessing
about partial state.

HOW: AppConfig mirrors the settings document: a ``window`` section
(width, height) and a ``playback`` section (wpm, inter_word_delay_ms).
SettingsStore reads and writes it as JSON and validates it with
jsonschema. StateStore does the same for a sibling document holding the
recent texts and the recoverable position. Every read, parse or
validation failure falls back to defaults; every write failure returns
False.

RULES:
- Defaults: window 1800 x 1100, 400 WPM, 10 ms inter-word delay
- playback.inter_word_delay_ms may be absent and defaults to 10
- Integral floats (400.0) are accepted and stored as ints
- Unknown keys are tolerated and dropped on the next save
- load() never raises; save() and write_raw() return bool only
- Parent directories are created before writing
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import jsonschema

from speed_reader.config import (
    DEFAULT_INTER_WORD_DELAY_MS,
    DEFAULT_WINDOW_HEIGHT,
    DEFAULT_WINDOW_WIDTH,
    DEFAULT_WPM,
    default_config_path,
    default_state_path,
)
from speed_reader.core.history import MAX_RECENT_TEXTS, RecentText
from speed_reader.core.session import RecoverablePosition

logger = logging.getLogger(__name__)

# Errors json.loads() and the from_dict() builders raise on bad documents.
# Deeply nested arrays exhaust the decoder's recursion limit.
_PARSE_ERRORS = (ValueError, TypeError, KeyError, RecursionError, jsonschema.ValidationError)

SETTINGS_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "required": ["window", "playback"],
    "properties": {
        "window": {
            "type": "object",
            "required": ["width", "height"],
            "properties": {
                "width": {"type": "integer", "minimum": 1},
                "height": {"type": "integer", "minimum": 1},
            },
        },
        "playback": {
            "type": "object",
            "required": ["wpm"],
            "properties": {
                "wpm": {"type": "integer", "minimum": 1},
                "inter_word_delay_ms": {"type": "integer", "minimum": 0},
            },
        },
    },
}
"""JSON schema for the settings document."""

STATE_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "properties": {
        "recent_texts": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["id", "title", "preview", "word_count", "created_at", "text"],
                "properties": {
                    "id": {"type": "string"},
                    "title": {"type": "string"},
                    "preview": {"type": "string"},
                    "word_count": {"type": "integer", "minimum": 0},
                    "created_at": {"type": "string"},
                    "text": {"type": "string"},
                },
            },
        },
        "position": {
            "type": ["object", "null"],
            "required": ["text", "title", "word_index", "word_count", "wpm", "timestamp"],
            "properties": {
                "text": {"type": "string"},
                "title": {"type": "string"},
                "word_index": {"type": "integer", "minimum": 0},
                "word_count": {"type": "integer", "minimum": 0},
                "wpm": {"type": "integer", "minimum": 1},
                "timestamp": {"type": "string"},
            },
        },
    },
}
"""JSON schema for the reading-state document."""


def _read_text(path: Path) -> Optional[str]:
    """Read a document, or None when it is missing or unreadable."""
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Could not read %s: %s", path, e)
        return None


def _write_text(path: Path, content: str) -> bool:
    """Write a document, creating parent directories; False on any failure."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.warning("Could not create directory %s: %s", path.parent, e)
        return False
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        logger.warning("Could not write %s: %s", path, e)
        return False
    logger.info("Saved %s", path)
    return True


@dataclass
class WindowConfig:
    width: int = DEFAULT_WINDOW_WIDTH
    height: int = DEFAULT_WINDOW_HEIGHT


@dataclass
class PlaybackSettings:
    wpm: int = DEFAULT_WPM
    inter_word_delay_ms: int = DEFAULT_INTER_WORD_DELAY_MS


@dataclass
class AppConfig:
    """The whole settings document.

    WHY: The host restores its window and reading speed from here on
    start, and writes it back whenever the user changes either.

    HOW: Two nested sections matching the persisted JSON layout.
    """

    window: WindowConfig = field(default_factory=WindowConfig)
    playback: PlaybackSettings = field(default_factory=PlaybackSettings)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "window": {
                "width": self.window.width,
                "height": self.window.height,
            },
            "playback": {
                "wpm": self.playback.wpm,
                "inter_word_delay_ms": self.playback.inter_word_delay_ms,
            },
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AppConfig":
        """Build an AppConfig from a parsed settings document.

        JSON Schema's "integer" accepts integral floats such as 400.0;
        every field is converted to int after validation.

        Raises:
            jsonschema.ValidationError: If the document does not match
                SETTINGS_SCHEMA.
        """
        jsonschema.validate(instance=data, schema=SETTINGS_SCHEMA)
        window = data["window"]
        playback = data["playback"]
        return cls(
            window=WindowConfig(width=int(window["width"]), height=int(window["height"])),
            playback=PlaybackSettings(
                wpm=int(playback["wpm"]),
                inter_word_delay_ms=int(playback.get(
                    "inter_word_delay_ms", DEFAULT_INTER_WORD_DELAY_MS
                )),
            ),
        )


class SettingsStore:
    """Reads and writes the settings document at one path.

    Args:
        path: Explicit settings file path. Defaults to
              speed_reader.config.default_config_path(), resolved on
              each call so environment overrides apply.
    """

    def __init__(self, path: Optional[Union[str, Path]] = None) -> None:
        self._path = Path(path) if path is not None else None

    def config_path(self) -> Path:
        return self._path if self._path is not None else default_config_path()

    def load(self) -> AppConfig:
        """Load settings, falling back to defaults on any failure."""
        path = self.config_path()
        content = _read_text(path)
        if content is None:
            return AppConfig()

        try:
            return AppConfig.from_dict(json.loads(content))
        except _PARSE_ERRORS as e:
            logger.warning("Ignoring invalid settings file %s: %s", path, e)
            return AppConfig()

    def save(self, config: AppConfig) -> bool:
        """Write settings; returns False if the directory or file cannot be written."""
        return self.write_raw(json.dumps(config.to_dict(), indent=2) + "\n")

    def read_raw(self) -> Optional[str]:
        """Return the settings file's text, or None if it cannot be read."""
        try:
            return self.config_path().read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            return None

    def write_raw(self, content: str) -> bool:
        """Write arbitrary text to the settings file.

        RULES:
        - Parent directories are created first; failure there returns False
        - Content is written as-is; it is validated on the next load()
        """
        return _write_text(self.config_path(), content)


class StateStore:
    """Reads and writes the reading-state document at one path.

    WHY: Recent texts and the resumable position change on every read,
    while the settings document only changes when the user asks. Keeping
    them apart means a noisy state file can never clobber settings.

    HOW: The document holds ``recent_texts`` (most recent first) and
    ``position`` (or null). Each save reads the current document,
    replaces one key, and writes the whole document back.

    Args:
        path: Explicit state file path. Defaults to
              speed_reader.config.default_state_path().
    """

    def __init__(self, path: Optional[Union[str, Path]] = None) -> None:
        self._path = Path(path) if path is not None else None

    def state_path(self) -> Path:
        return self._path if self._path is not None else default_state_path()

    def load_recents(self) -> List[RecentText]:
        """Recent texts, most recent first; [] on any failure."""
        document = self._load_document()
        try:
            return [RecentText.from_dict(d) for d in document.get("recent_texts", [])]
        except _PARSE_ERRORS as e:
            logger.warning("Ignoring invalid recent texts in %s: %s", self.state_path(), e)
            return []

    def save_recents(self, recents: List[RecentText]) -> bool:
        document = self._load_document()
        document["recent_texts"] = [r.to_dict() for r in recents[:MAX_RECENT_TEXTS]]
        return self._save_document(document)

    def load_position(self) -> Optional[RecoverablePosition]:
        """The saved position, or None when absent or unreadable.

        Staleness is not checked here; see RecoverablePosition.is_valid().
        """
        data = self._load_document().get("position")
        if data is None:
            return None
        try:
            return RecoverablePosition.from_dict(data)
        except _PARSE_ERRORS as e:
            logger.warning("Ignoring invalid position in %s: %s", self.state_path(), e)
            return None

    def save_position(self, position: RecoverablePosition) -> bool:
        document = self._load_document()
        document["position"] = position.to_dict()
        return self._save_document(document)

    def clear_position(self) -> bool:
        document = self._load_document()
        if document.get("position") is None:
            return True
        document["position"] = None
        return self._save_document(document)

    def _load_document(self) -> Dict[str, Any]:
        path = self.state_path()
        content = _read_text(path)
        if content is None:
            return {}
        try:
            document = json.loads(content)
            jsonschema.validate(instance=document, schema=STATE_SCHEMA)
        except _PARSE_ERRORS as e:
            logger.warning("Ignoring invalid state file %s: %s", path, e)
            return {}
        return document

    def _save_document(self, document: Dict[str, Any]) -> bool:
        return _write_text(self.state_path(), json.dumps(document, indent=2) + "\n")
