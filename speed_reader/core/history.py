"""Recent texts — titles, previews, and a capped most-recent-first list.

WHY: Readers come back to the same article several times. Hosts show a
short list of recently loaded texts, each with a recognisable title and
preview, so the user can reload one without pasting it again.

HOW: RecentText.from_text() derives the title (first five words) and the
preview (first 100 characters on one line). add_recent() returns a new
list with the text at the front, duplicates removed, capped to a limit.
move_to_front() reorders an existing entry when it is reopened.

RULES:
- Title: first five whitespace-separated words, "…" appended when there
  are five or more
- Preview: first 100 characters, newlines replaced by spaces
- Identical text replaces its older entry instead of duplicating it
- Default limit is 10 entries
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List

MAX_RECENT_TEXTS = 10
TITLE_WORDS = 5
PREVIEW_CHARS = 100


def _make_title(text: str) -> str:
    words = text.split()[:TITLE_WORDS]
    return " ".join(words) + ("…" if len(words) >= TITLE_WORDS else "")


def _make_preview(text: str) -> str:
    return text[:PREVIEW_CHARS].replace("\n", " ")


@dataclass
class RecentText:
    """One previously loaded text."""

    title: str
    preview: str
    word_count: int
    text: str
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def from_text(cls, text: str) -> "RecentText":
        return cls(
            title=_make_title(text),
            preview=_make_preview(text),
            word_count=len(text.split()),
            text=text,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "preview": self.preview,
            "word_count": self.word_count,
            "created_at": self.created_at.isoformat(),
            "text": self.text,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RecentText":
        return cls(
            id=data["id"],
            title=data["title"],
            preview=data["preview"],
            word_count=int(data["word_count"]),
            created_at=datetime.fromisoformat(data["created_at"]),
            text=data["text"],
        )


def add_recent(
    recents: List[RecentText],
    text: str,
    limit: int = MAX_RECENT_TEXTS,
) -> List[RecentText]:
    """Return a new list with text at the front.

    Args:
        recents: Current list, most recent first. Not modified.
        text: The text just loaded.
        limit: Maximum number of entries kept.

    Returns:
        The updated list, most recent first, at most `limit` long.
    """
    entry = RecentText.from_text(text)
    kept = [r for r in recents if r.text != text]
    return ([entry] + kept)[:limit]


def move_to_front(recents: List[RecentText], entry: RecentText) -> List[RecentText]:
    """Return a new list with entry first, keeping its id and timestamp."""
    return [entry] + [r for r in recents if r.id != entry.id]
