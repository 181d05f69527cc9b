"""Adapter package for external I/O implementations.

Purpose:
    Concrete implementations for domain ports: command stores (local JSON
    files, HTTP, in-memory), the system clipboard, fuzzy matching, and
    settings persistence.

Dependencies:
    Individual submodules depend on ``requests``, ``rapidfuzz``,
    ``pyperclip``, filesystem APIs, and domain protocol definitions.

Call context:
    Imported by ``vaul.app.controller`` for runtime wiring and by tests (for
    mocks and transport-level behavior verification).
"""
