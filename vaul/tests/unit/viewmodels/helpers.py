from __future__ import annotations

from typing import Callable, Dict, List, Tuple

from vaul.domain.entities import Category, Command, LibrarySnapshot


class FakeScheduler:
    """Timer double: records scheduled callbacks and fires them on demand."""

    def __init__(self) -> None:
        self.pending: Dict[str, Tuple[int, Callable[[], None]]] = {}
        self.cancelled: List[str] = []

    def schedule(self, key: str, delay_ms: int, callback: Callable[[], None]) -> None:
        self.pending[key] = (delay_ms, callback)

    def cancel(self, key: str) -> None:
        self.cancelled.append(key)
        self.pending.pop(key, None)

    def fire(self, key: str) -> None:
        _delay, callback = self.pending.pop(key)
        callback()


def make_snapshot() -> LibrarySnapshot:
    return LibrarySnapshot(
        commands=(
            Command(id="1", content="git status", category="c1"),
            Command(id="2", content="ls -la"),
            Command(id="3", content="docker ps", category="c2"),
        ),
        categories=(
            Category(id="c1", name="Git", color="#f05032"),
            Category(id="c2", name="Docker"),
        ),
    )


__all__ = ["FakeScheduler", "make_snapshot"]
