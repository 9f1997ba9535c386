"""Whitespace tokenization and word classification.

WHY: The playback engine needs every word classified before timing can
be computed. Doing it once per load keeps navigation O(1) and makes the
classification rules testable on their own.

HOW: The text is split into maximal non-whitespace runs. Each run is
classified twice: punctuation from its trailing characters, and word
type from a cleaned copy (alphanumerics and hyphens only). In simple
mode both classifications are skipped and only a boolean "ends with
punctuation" flag is recorded.

RULES:
- Word boundaries are whitespace only, in both modes
- Ellipsis ("..." or "…") wins over the single-character checks
- Otherwise only the final character decides the punctuation class
- Word type priority: empty → hyphenated → mixed → numeral → all caps → normal
- char_count counts the original token, punctuation included
- Never raises; empty or whitespace-only text yields []
"""

from __future__ import annotations

from typing import List

from speed_reader.core.ir import PunctuationType, TokenizerMode, Word, WordType

_ELLIPSIS_SUFFIXES = ("...", "…")

_FINAL_CHAR_PUNCTUATION = {
    ".": PunctuationType.PERIOD,
    "?": PunctuationType.QUESTION,
    "!": PunctuationType.EXCLAMATION,
    ",": PunctuationType.COMMA,
    ";": PunctuationType.COMMA,
    ":": PunctuationType.COMMA,
}

# Characters that set the simple-mode flag.
_SIMPLE_TRAILING_PUNCTUATION = frozenset(".!?,;:")


def _is_digit(char: str) -> bool:
    return "0" <= char <= "9"


def classify_punctuation(token: str) -> PunctuationType:
    """Classify the trailing punctuation of a token.

    Examples:
        >>> classify_punctuation("wait...")
        <PunctuationType.ELLIPSIS: 'ellipsis'>
        >>> classify_punctuation("world!!!")
        <PunctuationType.EXCLAMATION: 'exclamation'>
    """
    if token.endswith(_ELLIPSIS_SUFFIXES):
        return PunctuationType.ELLIPSIS
    if not token:
        return PunctuationType.NONE
    return _FINAL_CHAR_PUNCTUATION.get(token[-1], PunctuationType.NONE)


def classify_word_type(token: str) -> WordType:
    """Classify the structure of a token.

    WHY: Numbers, acronyms and compound words take longer to read than
    plain words of the same length.

    HOW: Drop every character that is neither alphanumeric nor a hyphen,
    then test the cleaned string against the rules in priority order.

    RULES:
    - Empty after cleaning (pure punctuation) → NORMAL
    - Hyphen, length > 1, at least one letter → HYPHENATED
    - Letters and ASCII digits → MIXED
    - ASCII digits, no letters → NUMERAL
    - Two or more letters, all uppercase → ALL_CAPS
    - Anything else → NORMAL
    """
    clean = "".join(c for c in token if c.isalnum() or c == "-")
    if not clean:
        return WordType.NORMAL

    letters = [c for c in clean if c.isalpha()]
    has_letters = bool(letters)
    has_digits = any(_is_digit(c) for c in clean)
    has_hyphen = "-" in clean and len(clean) > 1

    if has_hyphen and has_letters:
        return WordType.HYPHENATED
    if has_letters and has_digits:
        return WordType.MIXED
    if has_digits and not has_letters:
        return WordType.NUMERAL
    if len(letters) >= 2 and all(c.isupper() for c in letters):
        return WordType.ALL_CAPS
    return WordType.NORMAL


def _classify_rich(token: str) -> Word:
    punctuation_type = classify_punctuation(token)
    return Word(
        text=token,
        char_count=len(token),
        punctuation_type=punctuation_type,
        word_type=classify_word_type(token),
        has_trailing_punctuation=punctuation_type is not PunctuationType.NONE,
    )


def _classify_simple(token: str) -> Word:
    return Word(
        text=token,
        char_count=len(token),
        has_trailing_punctuation=token[-1] in _SIMPLE_TRAILING_PUNCTUATION,
    )


def tokenize(text: str, mode: TokenizerMode = TokenizerMode.RICH) -> List[Word]:
    """Split text into classified words, in source order.

    Args:
        text: Arbitrary input text.
        mode: RICH for the full punctuation/word-type classification,
              SIMPLE for the boolean trailing-punctuation flag only.

    Returns:
        One Word per whitespace-delimited token. No reordering and no
        deduplication.
    """
    classify = _classify_simple if TokenizerMode(mode) is TokenizerMode.SIMPLE else _classify_rich
    return [classify(token) for token in text.split()]
