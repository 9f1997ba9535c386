"""Clipboard provider backed by pyperclip.

WHY: Pasting an article is the main way text reaches the reader. The
core must not depend on a windowing system, so clipboard access sits in
an adapter the SpeedReader facade delegates to.

HOW: pyperclip picks the platform mechanism (pbpaste, xclip/xsel,
win32). Any pyperclip failure is logged and reported as "no text".

RULES:
- get_text() returns None when the clipboard is unavailable
- get_text() returns None for empty or whitespace-only content
- Returned text is not trimmed; only the emptiness check trims
"""

from __future__ import annotations

import logging
from typing import Optional

import pyperclip

logger = logging.getLogger(__name__)


class ClipboardProvider:
    """Read-only access to the system clipboard."""

    def get_text(self) -> Optional[str]:
        try:
            text = pyperclip.paste()
        except pyperclip.PyperclipException as e:
            logger.debug("Clipboard unavailable: %s", e)
            return None
        if not text or not text.strip():
            return None
        return text

    def has_text(self) -> bool:
        return self.get_text() is not None
