from __future__ import annotations

import pyperclip

from vaul.domain.ports import ClipboardPort


class PyperclipClipboard(ClipboardPort):
    """System clipboard access through ``pyperclip``.

    ``pyperclip.PyperclipException`` propagates when no copy mechanism is
    available (for example a headless Linux session without xclip/xsel).
    """

    def write(self, text: str) -> None:
        pyperclip.copy(text)


class MemoryClipboard(ClipboardPort):
    """In-memory clipboard for tests and headless runs."""

    def __init__(self) -> None:
        self.text = ""

    def write(self, text: str) -> None:
        self.text = text


__all__ = ["MemoryClipboard", "PyperclipClipboard"]
