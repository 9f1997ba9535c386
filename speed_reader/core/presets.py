"""Reading speed presets, punctuation pause presets, and speed zones.

WHY: Users rarely want to type an exact WPM or multiplier. Named presets
give sensible starting points, and the speed zone tells them when a
chosen speed starts costing comprehension.

HOW: Three closed enums. SpeedPreset values are the WPM itself.
PunctuationPreset maps to a multiplier and can build a PlaybackConfig.
SpeedZone classifies any WPM into safe / caution / risky. speed_up() and
slow_down() step a WPM value within [MIN_WPM, MAX_WPM].

RULES:
- Presets are constants; never mutate them at runtime
- "off" is the only punctuation preset that disables pauses
- Zones: safe up to 350 WPM, caution up to 450, risky above
- WPM steps are 50, clamped to 100..1000
"""

from __future__ import annotations

import enum

from speed_reader.core.ir import PlaybackConfig

MIN_WPM = 100
MAX_WPM = 1000
WPM_STEP = 50


class SpeedPreset(int, enum.Enum):
    """Named reading speeds; the value is the WPM."""

    SLOW = 200
    NORMAL = 300
    FAST = 450
    VERY_FAST = 600
    SPEED = 800
    INSANE = 1000

    @property
    def label(self) -> str:
        return "{} ({})".format(_SPEED_PRESET_NAMES[self], self.value)


_SPEED_PRESET_NAMES: dict[SpeedPreset, str] = {
    SpeedPreset.SLOW: "Slow",
    SpeedPreset.NORMAL: "Normal",
    SpeedPreset.FAST: "Fast",
    SpeedPreset.VERY_FAST: "Very Fast",
    SpeedPreset.SPEED: "Speed",
    SpeedPreset.INSANE: "Insane",
}


class PunctuationPreset(str, enum.Enum):
    """How strongly punctuation extends the display time."""

    OFF = "off"
    LIGHT = "light"
    NORMAL = "normal"
    HEAVY = "heavy"

    @property
    def multiplier(self) -> float:
        return PUNCTUATION_PRESET_MULTIPLIERS[self]

    @property
    def enables_pauses(self) -> bool:
        return self is not PunctuationPreset.OFF

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @property
    def description(self) -> str:
        return _PUNCTUATION_PRESET_DESCRIPTIONS[self]

    def to_playback_config(self, wpm: int) -> PlaybackConfig:
        """Build the PlaybackConfig this preset stands for at a given WPM."""
        return PlaybackConfig(
            wpm=wpm,
            pause_on_punctuation=self.enables_pauses,
            punctuation_multiplier=self.multiplier,
        )


PUNCTUATION_PRESET_MULTIPLIERS: dict[PunctuationPreset, float] = {
    PunctuationPreset.OFF: 0.0,
    PunctuationPreset.LIGHT: 0.6,
    PunctuationPreset.NORMAL: 1.0,
    PunctuationPreset.HEAVY: 1.5,
}

_PUNCTUATION_PRESET_DESCRIPTIONS: dict[PunctuationPreset, str] = {
    PunctuationPreset.OFF: "No pauses at punctuation",
    PunctuationPreset.LIGHT: "Brief pauses at sentence ends",
    PunctuationPreset.NORMAL: "Natural reading rhythm",
    PunctuationPreset.HEAVY: "Extended pauses for comprehension",
}


class SpeedZone(str, enum.Enum):
    """Comprehension risk of a reading speed."""

    SAFE = "safe"
    CAUTION = "caution"
    RISKY = "risky"

    @classmethod
    def for_wpm(cls, wpm: int) -> "SpeedZone":
        if wpm <= 350:
            return cls.SAFE
        if wpm <= 450:
            return cls.CAUTION
        return cls.RISKY

    @property
    def label(self) -> str:
        return _SPEED_ZONE_TEXT[self][0]

    @property
    def description(self) -> str:
        return _SPEED_ZONE_TEXT[self][1]


_SPEED_ZONE_TEXT = {
    SpeedZone.SAFE: ("Optimal", "Best comprehension"),
    SpeedZone.CAUTION: ("Fast", "Some comprehension loss"),
    SpeedZone.RISKY: ("Speed", "Skimming mode"),
}


def speed_up(wpm: int) -> int:
    """Raise WPM by one step, capped at MAX_WPM."""
    return min(MAX_WPM, wpm + WPM_STEP) if wpm < MAX_WPM else wpm


def slow_down(wpm: int) -> int:
    """Lower WPM by one step, floored at MIN_WPM."""
    return max(MIN_WPM, wpm - WPM_STEP) if wpm > MIN_WPM else wpm
