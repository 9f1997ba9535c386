"""Shared test fixtures for the speed_reader test suite.

WHY: Tokenizer, engine, facade and CLI tests all need the same sample
texts and a reader whose clipboard never touches the real system.

HOW: Pytest fixtures provide a plain multi-sentence text, a reference
config with round numbers (300 WPM → 200 ms base), a loaded engine, and
a SpeedReader wired to a mock ClipboardProvider.

RULES:
- No test touches the real clipboard or the user's settings directory.
- The reference config uses multiplier 1.0 so table values show through.
"""

from unittest.mock import MagicMock

import pytest

from speed_reader.adapters.clipboard import ClipboardProvider
from speed_reader.core.engine import PlaybackEngine
from speed_reader.core.ir import PlaybackConfig
from speed_reader.reader import SpeedReader

SENTENCES_TEXT = "The cat sat. It was warm! Did it move? No, it slept."
# Indices:        0   1   2    3  4   5     6   7  8     9   10  11


@pytest.fixture(autouse=True)
def isolated_config_dir(tmp_path, monkeypatch):
    """Point the default settings directory at a temp dir for every test."""
    config_dir = tmp_path / "config"
    monkeypatch.setenv("SPEED_READER_CONFIG_DIR", str(config_dir))
    return config_dir


@pytest.fixture
def reference_config():
    """300 WPM (200 ms base), punctuation pauses on, multiplier 1.0."""
    return PlaybackConfig(wpm=300, pause_on_punctuation=True, punctuation_multiplier=1.0)


@pytest.fixture
def sentences_engine(reference_config):
    engine = PlaybackEngine(config=reference_config)
    engine.load_text(SENTENCES_TEXT)
    return engine


@pytest.fixture
def fake_clipboard():
    clipboard = MagicMock(spec=ClipboardProvider)
    clipboard.get_text.return_value = None
    clipboard.has_text.return_value = False
    return clipboard


@pytest.fixture
def reader(reference_config, fake_clipboard):
    return SpeedReader(config=reference_config, clipboard=fake_clipboard)
