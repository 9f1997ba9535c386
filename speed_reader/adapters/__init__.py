"""Adapters between the reader core and the host system.

WHY: The core is pure and synchronous; the clipboard is neither. Keeping
system access here means the core can be tested without a display.

HOW: clipboard.py wraps pyperclip behind a two-method provider.

RULES:
- Adapters never raise for ordinary unavailability; they return None
"""

from speed_reader.adapters.clipboard import ClipboardProvider

__all__ = ["ClipboardProvider"]
