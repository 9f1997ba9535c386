"""SpeedReader — the one object a host UI holds per reading session.

WHY: A host (desktop app, terminal player, test) should not need to know
that tokenization, timing and clipboard access live in different
modules. It holds one SpeedReader and calls plain synchronous methods
that return plain or optional values.

HOW: SpeedReader owns a PlaybackEngine and a ClipboardProvider and
delegates to them. The engine's word list and cursor are never exposed.
It also keeps the recent-texts list and can snapshot or restore a
RecoverablePosition; both persist through an optional StateStore.

RULES:
- Every method is synchronous; no events, no callbacks
- Absent results (None) mean "no-op, state unchanged"
- Hosts drive enabled/disabled navigation from is_at_start()/is_at_end()
- One instance per reading session; callers serialize access
- Loading text adds it to the recent list; reopening a recent entry or
  recovering a position does not add a new entry
- Without a StateStore, recents and positions live in memory only
"""

from __future__ import annotations

from dataclasses import replace
from typing import List, Optional

from speed_reader.adapters.clipboard import ClipboardProvider
from speed_reader.core.engine import PlaybackEngine
from speed_reader.core.history import RecentText, add_recent, move_to_front
from speed_reader.core.ir import PlaybackConfig, TokenizerMode, WordToken
from speed_reader.core.session import RecoverablePosition
from speed_reader.settings import StateStore


class SpeedReader:
    """Host-facing facade over the playback engine and the clipboard.

    Args:
        config: Initial playback config (defaults to PlaybackConfig()).
        mode: Tokenizer mode for the whole session.
        clipboard: Clipboard provider; a pyperclip-backed one by default.
        state: Where recent texts and the saved position persist. None
               keeps them in memory for the life of this object.
    """

    def __init__(
        self,
        config: Optional[PlaybackConfig] = None,
        mode: TokenizerMode = TokenizerMode.RICH,
        clipboard: Optional[ClipboardProvider] = None,
        state: Optional[StateStore] = None,
    ) -> None:
        self._engine = PlaybackEngine(config=config, mode=mode)
        self._clipboard = clipboard if clipboard is not None else ClipboardProvider()
        self._state = state
        self._recents: List[RecentText] = state.load_recents() if state is not None else []
        self._saved_position: Optional[RecoverablePosition] = None
        self._text = ""
        self._title = ""

    # Clipboard pass-throughs

    def read_clipboard(self) -> Optional[str]:
        return self._clipboard.get_text()

    def has_clipboard_text(self) -> bool:
        return self._clipboard.has_text()

    def load_from_clipboard(self) -> bool:
        """Load the clipboard text, if any. Returns True when text was loaded."""
        text = self._clipboard.get_text()
        if text is None:
            return False
        self.load_text(text)
        return True

    # Loading and configuration

    def load_text(self, text: str, add_to_recent: bool = True) -> None:
        """Load text and reset the cursor; non-empty text joins the recents."""
        self._engine.load_text(text)
        self._text = text
        self._title = RecentText.from_text(text).title
        if add_to_recent and self._engine.get_word_count() > 0:
            self._set_recents(add_recent(self._recents, text))

    def get_title(self) -> str:
        """Title of the loaded text (its first words), "" when nothing is loaded."""
        return self._title

    def get_word_count(self) -> int:
        return self._engine.get_word_count()

    def set_config(self, config: PlaybackConfig) -> None:
        self._engine.set_config(config)

    def get_config(self) -> PlaybackConfig:
        return self._engine.get_config()

    # Navigation

    def get_current_word(self) -> Optional[WordToken]:
        return self._engine.get_current_word()

    def advance(self) -> Optional[WordToken]:
        return self._engine.advance()

    def go_back(self) -> Optional[WordToken]:
        return self._engine.go_back()

    def seek_to(self, index: int) -> Optional[WordToken]:
        return self._engine.seek_to(index)

    def reset(self) -> None:
        self._engine.reset()

    def jump_to_end(self) -> Optional[WordToken]:
        return self._engine.jump_to_end()

    def replay_last_words(self, count: int = 5) -> Optional[WordToken]:
        return self._engine.replay_last_words(count)

    def rewind_seconds(self, seconds: float) -> Optional[WordToken]:
        return self._engine.rewind_seconds(seconds)

    def previous_sentence(self) -> Optional[WordToken]:
        return self._engine.previous_sentence()

    def next_sentence(self) -> Optional[WordToken]:
        return self._engine.next_sentence()

    def scrub_to(self, progress: float) -> Optional[WordToken]:
        return self._engine.scrub_to(progress)

    # State queries

    def is_at_start(self) -> bool:
        return self._engine.is_at_start()

    def is_at_end(self) -> bool:
        return self._engine.is_at_end()

    def get_progress_percent(self) -> float:
        return self._engine.get_progress_percent()

    def get_context_words(self, count: int = 20) -> List[str]:
        return self._engine.get_context_words(count)

    def estimate_time_remaining(self) -> str:
        return self._engine.estimate_time_remaining()

    # Recent texts

    def get_recent_texts(self) -> List[RecentText]:
        """Recently loaded texts, most recent first."""
        return list(self._recents)

    def load_recent(self, index: int) -> bool:
        """Reopen recent entry `index` and move it to the front.

        Returns False, with nothing loaded, when index is out of range.
        """
        if not 0 <= index < len(self._recents):
            return False
        entry = self._recents[index]
        self.load_text(entry.text, add_to_recent=False)
        self._title = entry.title
        self._set_recents(move_to_front(self._recents, entry))
        return True

    def clear_recent_texts(self) -> None:
        self._set_recents([])

    def _set_recents(self, recents: List[RecentText]) -> None:
        self._recents = recents
        if self._state is not None:
            self._state.save_recents(recents)

    # Position recovery

    def current_position(self) -> Optional[RecoverablePosition]:
        """Snapshot of the session, or None while still on the first word."""
        token = self._engine.get_current_word()
        if token is None or token.index == 0:
            return None
        return RecoverablePosition(
            text=self._text,
            title=self._title,
            word_index=token.index,
            word_count=token.total,
            wpm=self._engine.get_config().wpm,
        )

    def save_position(self) -> Optional[RecoverablePosition]:
        """Remember where the session is so it can be resumed later.

        Returns the saved position, or None when there is nothing worth
        saving or the state file could not be written.
        """
        position = self.current_position()
        if position is None:
            return None
        if self._state is not None and not self._state.save_position(position):
            return None
        self._saved_position = position
        return position

    def saved_position(self) -> Optional[RecoverablePosition]:
        """The saved position if it is still fresh; stale ones are discarded."""
        if self._state is not None:
            position = self._state.load_position()
        else:
            position = self._saved_position
        if position is None:
            return None
        if not position.is_valid():
            self.clear_saved_position()
            return None
        return position

    def clear_saved_position(self) -> None:
        self._saved_position = None
        if self._state is not None:
            self._state.clear_position()

    def recover_position(self) -> Optional[WordToken]:
        """Reload the saved text at the saved word and WPM, then forget it.

        Returns None, with nothing changed, when no fresh position exists.
        """
        position = self.saved_position()
        if position is None:
            return None
        self.load_text(position.text, add_to_recent=False)
        self._title = position.title
        self._engine.set_config(replace(self._engine.get_config(), wpm=position.wpm))
        token = self._engine.seek_to(position.word_index)
        self.clear_saved_position()
        return token if token is not None else self._engine.get_current_word()
