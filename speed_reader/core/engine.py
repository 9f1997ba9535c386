"""Playback engine — reading cursor, navigation, and per-word timing.

WHY: The host UI needs to step through a text one word at a time and
know how long to hold each word. Keeping the cursor and the timing rules
in one small object lets the UI stay a thin loop of "show token, sleep
display_time_ms, advance".

HOW: PlaybackEngine owns the classified word list and a cursor index.
Every navigation call that lands on a word builds a WordToken through
compute_display_time_ms(), which multiplies a WPM-derived base time by
length, punctuation and complexity factors. There is no running/paused
state here; play/pause timing belongs to the caller.

RULES:
- current_index stays in [0, len(words) - 1]; it is 0 when empty
- load_text always resets the cursor to 0
- Navigation past a boundary returns None and leaves the cursor alone
- Tokenizer mode is fixed at construction, so modes never mix
- No exceptions, no I/O, no locking (single owner, single thread)
"""

from __future__ import annotations

import math
from typing import List, Optional

from speed_reader.core.ir import (
    PUNCTUATION_PAUSE,
    WORD_TYPE_COMPLEXITY,
    PlaybackConfig,
    TokenizerMode,
    Word,
    WordToken,
)
from speed_reader.core.tokenizer import tokenize

# Absorbs binary float error before truncation (200 * 1.15 == 229.99999999999997).
_FLOOR_EPSILON = 1e-6

# Words whose text ends with one of these close a sentence.
_SENTENCE_ENDINGS = (".", "!", "?")

# Minimum number of words rewind_seconds() steps back.
MIN_REWIND_WORDS = 5


def _length_factor(char_count: int) -> float:
    if char_count > 8:
        return 1.3
    if char_count > 5:
        return 1.15
    return 1.0


def compute_display_time_ms(
    word: Word,
    config: PlaybackConfig,
    mode: TokenizerMode = TokenizerMode.RICH,
) -> int:
    """Compute how long a word stays on screen.

    WHY: Long words, numbers, acronyms and sentence ends need more time
    than short plain words at the same reading speed.

    HOW: base = 60000 / wpm, then multiplied by a length factor, a
    punctuation factor and a complexity factor, and truncated.

    RULES:
    - Length factor: 1.3 above 8 chars, 1.15 above 5, else 1.0
    - Rich mode: punctuation = table[type] * multiplier when pausing is on;
      complexity = table[word_type]
    - Simple mode: punctuation = multiplier when pausing is on and the
      word has trailing punctuation; complexity = 1.0
    - wpm below 1 is treated as 1
    - Result is truncated to whole milliseconds and never negative

    Example:
        300 WPM, 9-char numeral ending in a period, multiplier 1.0:
        200 * 1.3 * 2.0 * 1.4 = 728
    """
    base_time_ms = 60000.0 / max(config.wpm, 1)
    length_factor = _length_factor(word.char_count)

    if TokenizerMode(mode) is TokenizerMode.SIMPLE:
        if config.pause_on_punctuation and word.has_trailing_punctuation:
            punct_factor = config.punctuation_multiplier
        else:
            punct_factor = 1.0
        complexity_factor = 1.0
    else:
        if config.pause_on_punctuation:
            punct_factor = PUNCTUATION_PAUSE[word.punctuation_type] * config.punctuation_multiplier
        else:
            punct_factor = 1.0
        complexity_factor = WORD_TYPE_COMPLEXITY[word.word_type]

    raw = base_time_ms * length_factor * punct_factor * complexity_factor
    return max(0, int(math.floor(raw + _FLOOR_EPSILON)))


def _ends_sentence(word: Word) -> bool:
    return word.text.endswith(_SENTENCE_ENDINGS)


class PlaybackEngine:
    """Reading session state: the loaded words and the cursor.

    WHY: One engine instance per reading session gives the host a single
    handle whose only mutable state is the word list and cursor.

    HOW: load_text() tokenizes and resets; the navigation methods move the
    cursor and return a WordToken for the word they land on.

    RULES:
    - The host never touches _words or _current_index directly
    - Navigation returns None at boundaries ("no-op"), never raises
    """

    def __init__(
        self,
        config: Optional[PlaybackConfig] = None,
        mode: TokenizerMode = TokenizerMode.RICH,
    ) -> None:
        self._mode = TokenizerMode(mode)
        self._config = config if config is not None else PlaybackConfig()
        self._words: List[Word] = []
        self._current_index = 0

    # ------------------------------------------------------------------
    # Loading and configuration
    # ------------------------------------------------------------------

    @property
    def mode(self) -> TokenizerMode:
        return self._mode

    def load_text(self, text: str) -> None:
        """Tokenize text, replace the word list, and reset the cursor."""
        self._words = tokenize(text, self._mode)
        self._current_index = 0

    def get_word_count(self) -> int:
        return len(self._words)

    def set_config(self, config: PlaybackConfig) -> None:
        """Replace the playback config; applies to the next token built."""
        self._config = config

    def get_config(self) -> PlaybackConfig:
        return self._config

    # ------------------------------------------------------------------
    # Core navigation
    # ------------------------------------------------------------------

    def get_current_word(self) -> Optional[WordToken]:
        return self._make_token(self._current_index)

    def advance(self) -> Optional[WordToken]:
        """Step forward one word, or return None when already at the end."""
        if self._current_index + 1 < len(self._words):
            self._current_index += 1
            return self._make_token(self._current_index)
        return None

    def go_back(self) -> Optional[WordToken]:
        """Step back one word, or return None when already at the start."""
        if self._current_index > 0:
            self._current_index -= 1
            return self._make_token(self._current_index)
        return None

    def seek_to(self, index: int) -> Optional[WordToken]:
        """Jump to index; out-of-range requests leave the cursor unchanged."""
        if 0 <= index < len(self._words):
            self._current_index = index
            return self._make_token(index)
        return None

    def reset(self) -> None:
        self._current_index = 0

    # ------------------------------------------------------------------
    # State queries
    # ------------------------------------------------------------------

    def get_current_index(self) -> int:
        return self._current_index

    def is_at_start(self) -> bool:
        return self._current_index == 0

    def is_at_end(self) -> bool:
        return not self._words or self._current_index >= len(self._words) - 1

    def get_progress_percent(self) -> float:
        """Cursor position as a fraction in [0.0, 1.0].

        A one-word text always reports 0.0, as does an empty one.
        """
        if not self._words:
            return 0.0
        return self._current_index / max(len(self._words) - 1, 1)

    def get_remaining_words(self) -> int:
        """Words left to read, the current one included."""
        return len(self._words) - self._current_index

    def estimate_time_remaining(self) -> str:
        """Human-readable reading time left at the configured WPM.

        RULES:
        - "" when no text is loaded or wpm is not positive
        - "< 1 min left" under one minute
        - "N min left" otherwise, N rounded up
        """
        if not self._words or self._config.wpm <= 0:
            return ""
        minutes = self.get_remaining_words() / self._config.wpm
        if minutes < 1:
            return "< 1 min left"
        return "{} min left".format(int(math.ceil(minutes)))

    # ------------------------------------------------------------------
    # Reading helpers (replay, sentences, scrubbing)
    # ------------------------------------------------------------------

    def jump_to_end(self) -> Optional[WordToken]:
        return self.seek_to(len(self._words) - 1)

    def replay_last_words(self, count: int = 5) -> Optional[WordToken]:
        """Move back count words (or to the start) for a quick re-read.

        Returns None when nothing is loaded or the cursor is already at 0.
        """
        if not self._words or self._current_index == 0:
            return None
        return self.seek_to(max(0, self._current_index - count))

    def rewind_seconds(self, seconds: float) -> Optional[WordToken]:
        """Move back roughly `seconds` worth of reading, at least 5 words."""
        if not self._words or self._config.wpm <= 0:
            return None
        words_per_second = self._config.wpm / 60.0
        count = max(int(words_per_second * seconds), MIN_REWIND_WORDS)
        return self.replay_last_words(count)

    def sentence_start_index(self) -> int:
        """Index of the first word of the sentence holding the cursor."""
        idx = self._current_index
        while idx > 0:
            idx -= 1
            if _ends_sentence(self._words[idx]):
                return idx + 1
        return 0

    def previous_sentence(self) -> Optional[WordToken]:
        """Go to the start of the current sentence, or of the one before it
        when the cursor already sits on a sentence start."""
        if not self._words:
            return None
        start = self.sentence_start_index()
        if start == self._current_index and start > 0:
            self._current_index = start - 1
            start = self.sentence_start_index()
        return self.seek_to(start)

    def next_sentence(self) -> Optional[WordToken]:
        """Go to the first word after the next sentence end, or the last word."""
        if not self._words:
            return None
        last_index = len(self._words) - 1
        idx = self._current_index
        while idx < last_index:
            if _ends_sentence(self._words[idx]):
                return self.seek_to(idx + 1)
            idx += 1
        return self.seek_to(last_index)

    def get_context_words(self, count: int = 20) -> List[str]:
        """Texts of up to `count` words before the cursor; cursor unchanged."""
        start = max(0, self._current_index - count)
        return [w.text for w in self._words[start:self._current_index]]

    def scrub_to(self, progress: float) -> Optional[WordToken]:
        """Seek to the word at a progress fraction, clamped to [0, 1].

        NaN is treated as 0.0.
        """
        if not self._words:
            return None
        if math.isnan(progress):
            progress = 0.0
        progress = min(max(progress, 0.0), 1.0)
        return self.seek_to(int((len(self._words) - 1) * progress))

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _make_token(self, index: int) -> Optional[WordToken]:
        if not 0 <= index < len(self._words):
            return None
        word = self._words[index]
        return WordToken(
            text=word.text,
            index=index,
            total=len(self._words),
            display_time_ms=compute_display_time_ms(word, self._config, self._mode),
        )
