"""Data structures and multiplier tables for classified words.

WHY: The tokenizer, the playback engine and the host UI all pass words
around. A single typed representation keeps classification (done once,
at load time) separate from timing (done on every navigation call).

HOW: Two closed enums classify each word: PunctuationType for the
trailing punctuation and WordType for its structure. Each enum has a
lookup table mapping members to a timing multiplier. Word is the frozen
output of tokenization; WordToken is what navigation hands back to the
host; PlaybackConfig carries the caller's timing settings.

RULES:
- Word and WordToken are immutable once created
- Multipliers live in tables keyed by enum member, not on the members
- PlaybackConfig is replaced wholesale, never patched field by field
- TokenizerMode selects rich (full tables) or simple (boolean flag) timing
"""

from __future__ import annotations

import enum
from dataclasses import dataclass


class PunctuationType(str, enum.Enum):
    """Class of a word's trailing punctuation."""

    NONE = "none"
    COMMA = "comma"  # , ; :
    PERIOD = "period"
    QUESTION = "question"
    EXCLAMATION = "exclamation"
    ELLIPSIS = "ellipsis"  # ... or …


class WordType(str, enum.Enum):
    """Structural classification of a word, mutually exclusive."""

    NORMAL = "normal"
    NUMERAL = "numeral"
    ALL_CAPS = "all_caps"
    HYPHENATED = "hyphenated"
    MIXED = "mixed"  # letters and digits, e.g. "COVID19"


class TokenizerMode(str, enum.Enum):
    """Classification fidelity used by the tokenizer and timing.

    RULES:
    - rich: punctuation_type and word_type drive the pause/complexity tables
    - simple: only has_trailing_punctuation is tracked; one flat multiplier
    """

    RICH = "rich"
    SIMPLE = "simple"


PUNCTUATION_PAUSE: dict[PunctuationType, float] = {
    PunctuationType.NONE: 1.0,
    PunctuationType.COMMA: 1.5,
    PunctuationType.PERIOD: 2.0,
    PunctuationType.QUESTION: 2.2,
    PunctuationType.EXCLAMATION: 2.2,
    PunctuationType.ELLIPSIS: 2.5,
}
"""Base pause multiplier per punctuation class, scaled by the config multiplier."""

WORD_TYPE_COMPLEXITY: dict[WordType, float] = {
    WordType.NORMAL: 1.0,
    WordType.NUMERAL: 1.4,
    WordType.ALL_CAPS: 1.25,
    WordType.HYPHENATED: 1.3,
    WordType.MIXED: 1.35,
}
"""Extra reading time per word type."""


@dataclass(frozen=True)
class Word:
    """One whitespace-delimited token with its classification.

    WHY: Classifying at load time keeps navigation cheap and makes the
    timing function a pure lookup over already-known attributes.

    HOW: Built by tokenizer.tokenize(), never constructed by the engine
    or the host.

    RULES:
    - text: the literal token, original punctuation retained
    - char_count: code points in text, punctuation included
    - punctuation_type: NONE in simple mode
    - word_type: NORMAL in simple mode
    - has_trailing_punctuation: the simple-mode flag, also set in rich mode
    """

    text: str
    char_count: int
    punctuation_type: PunctuationType = PunctuationType.NONE
    word_type: WordType = WordType.NORMAL
    has_trailing_punctuation: bool = False


@dataclass
class PlaybackConfig:
    """Caller-supplied timing settings.

    Attributes:
        wpm: Target words per minute; drives the base duration.
        pause_on_punctuation: Whether punctuation extends the duration.
        punctuation_multiplier: Scales the punctuation pause table.
    """

    wpm: int = 400
    pause_on_punctuation: bool = True
    punctuation_multiplier: float = 1.0


@dataclass(frozen=True)
class WordToken:
    """A word ready for display, returned by every navigation call.

    Attributes:
        text: The verbatim token text.
        index: Position of the word in the loaded text.
        total: Word count at the time of the call.
        display_time_ms: How long to hold the word, truncated milliseconds.
    """

    text: str
    index: int
    total: int
    display_time_ms: int
