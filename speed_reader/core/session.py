"""Reading session records: a resumable position and session statistics.

WHY: Readers get interrupted. A stopped session should be resumable at
the word where it stopped, at the speed it was read at, as long as the
stop is recent enough to still be meaningful. Long uninterrupted runs
deserve a nudge to take a break.

HOW: RecoverablePosition snapshots the loaded text, its title, the
cursor and the WPM with a UTC timestamp. ReadingSession accumulates the
words shown and the seconds spent showing them while a host plays.

RULES:
- A position older than 24 hours is stale (is_valid() is False)
- progress_percent is truncated, 0 for an empty text
- average_wpm is 0 until more than 10 seconds have been read
- A break is suggested after 20 minutes of active reading
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

POSITION_MAX_AGE = timedelta(hours=24)
MIN_SECONDS_FOR_AVERAGE = 10.0
BREAK_AFTER_SECONDS = 20 * 60


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class RecoverablePosition:
    """Where a reading session stopped.

    Attributes:
        text: The full loaded text, so the session can be rebuilt.
        title: Display title of the text.
        word_index: Cursor position when the session stopped.
        word_count: Number of words in the text.
        wpm: Reading speed in use when the session stopped.
        timestamp: When the position was taken (UTC).
    """

    text: str
    title: str
    word_index: int
    word_count: int
    wpm: int
    timestamp: datetime = field(default_factory=_utc_now)

    def is_valid(self, now: Optional[datetime] = None) -> bool:
        now = now if now is not None else _utc_now()
        return now - self.timestamp < POSITION_MAX_AGE

    @property
    def progress_percent(self) -> int:
        if self.word_count <= 0:
            return 0
        return int(self.word_index / self.word_count * 100)

    @property
    def words_left(self) -> int:
        return self.word_count - self.word_index

    @property
    def summary(self) -> str:
        """One-line description, e.g. "My article • 42% • 310 words left"."""
        return "{} • {}% • {} words left".format(
            self.title, self.progress_percent, self.words_left
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "text": self.text,
            "title": self.title,
            "word_index": self.word_index,
            "word_count": self.word_count,
            "wpm": self.wpm,
            "timestamp": self.timestamp.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RecoverablePosition":
        timestamp = datetime.fromisoformat(data["timestamp"])
        if timestamp.tzinfo is None:
            timestamp = timestamp.replace(tzinfo=timezone.utc)
        return cls(
            text=data["text"],
            title=data["title"],
            word_index=int(data["word_index"]),
            word_count=int(data["word_count"]),
            wpm=int(data["wpm"]),
            timestamp=timestamp,
        )


@dataclass
class ReadingSession:
    """Running totals for one stretch of playback."""

    words_read: int = 0
    active_seconds: float = 0.0

    def record_word(self, seconds: float) -> None:
        """Count one displayed word and the time it was on screen."""
        self.words_read += 1
        self.active_seconds += max(seconds, 0.0)

    @property
    def average_wpm(self) -> int:
        if self.active_seconds <= MIN_SECONDS_FOR_AVERAGE:
            return 0
        return int(self.words_read / (self.active_seconds / 60.0))

    @property
    def formatted_duration(self) -> str:
        total = int(self.active_seconds)
        return "{}:{:02d}".format(total // 60, total % 60)

    @property
    def should_suggest_break(self) -> bool:
        return self.active_seconds >= BREAK_AFTER_SECONDS
