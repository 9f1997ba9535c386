"""Core tokenization, timing and navigation modules.

WHY: The core holds the only parts with non-trivial policy: how text is
split and classified, and how a classified word becomes a duration.
Everything else (clipboard, settings file, CLI) is a collaborator.

HOW: ir.py defines the data structures and multiplier tables,
tokenizer.py builds Word lists from raw text, engine.py owns the cursor
and computes WordTokens, presets.py and history.py hold the reading
presets and recent-text bookkeeping, session.py the resumable position
and session statistics.

RULES:
- No I/O anywhere in the core
- No exceptions escape the core for ordinary input
"""
