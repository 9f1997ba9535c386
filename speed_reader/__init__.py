"""Speed Reader — RSVP word flashing with complexity-aware timing.

WHY: Rapid serial visual presentation shows one word at a time. Holding
every word for the same duration feels rushed on long words, numbers and
sentence ends. This package classifies each word once and converts it
into a display duration that the host UI can sleep on.

HOW: Two stages: tokenize (text → classified Word list) and play
(PlaybackEngine cursor + per-word timing). The SpeedReader facade is the
one object a host holds; it adds clipboard access on top of the engine.

RULES:
- The core never raises; boundary navigation returns None
- Settings persistence and clipboard access live outside the core
- Tokenizer mode is fixed per engine, never mixed within a session
"""

__version__ = "0.1.0"
