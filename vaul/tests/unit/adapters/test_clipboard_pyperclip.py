import pyperclip
import pytest

from vaul.adapters.clipboard_pyperclip import MemoryClipboard, PyperclipClipboard


def test_pyperclip_clipboard_copies_text(monkeypatch):
    copied = []
    monkeypatch.setattr(pyperclip, "copy", lambda text: copied.append(text))

    PyperclipClipboard().write("git status")

    assert copied == ["git status"]


def test_pyperclip_failure_propagates(monkeypatch):
    def _fail(_text):
        raise pyperclip.PyperclipException("no clipboard mechanism")

    monkeypatch.setattr(pyperclip, "copy", _fail)

    with pytest.raises(pyperclip.PyperclipException):
        PyperclipClipboard().write("ls")


def test_memory_clipboard_keeps_last_text():
    clipboard = MemoryClipboard()
    clipboard.write("a")
    clipboard.write("b")

    assert clipboard.text == "b"
