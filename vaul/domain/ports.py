from __future__ import annotations
from typing import Any, Callable, Dict, List, Optional, Protocol, Sequence, TypeVar

from .entities import Category, CategoryId, Command, CommandId

T = TypeVar("T")
ChangeListener = Callable[[], None]
Unsubscribe = Callable[[], None]


# ---- Error model ----
class UseCaseError(Exception):
    """Base class for use case level errors (user-presentable)."""

    def __init__(self, code: str, message: str, *, meta: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.meta = meta or {}


# ---- Ports (Hexagonal boundaries) ----
class StorePort(Protocol):
    """CRUD operations against the command/category backend.

    Category references cross this boundary in their raw encoding: ``""``
    means uncategorized.
    """

    def list_commands(self) -> List[Command]: ...
    def list_categories(self) -> List[Category]: ...
    def create_command(self, content: str, category: str = "") -> Command: ...
    def delete_command(self, command_id: CommandId) -> None: ...
    def create_category(self, name: str, color: str = "") -> Category: ...
    def update_category(self, category_id: CategoryId, name: str, color: str = "") -> None: ...
    def delete_category(self, category_id: CategoryId, reassign_to: str = "") -> None: ...
    def merge_categories(self, source_id: CategoryId, target_id: CategoryId) -> None: ...
    def subscribe(self, listener: ChangeListener) -> Unsubscribe: ...  # "data changed" channel


class ClipboardPort(Protocol):
    """System clipboard write access."""

    def write(self, text: str) -> None: ...


class MatcherPort(Protocol):
    """Approximate text search returning best-first ranked matches."""

    def match(self, query: str, candidates: Sequence[T], key: Callable[[T], str]) -> List[T]: ...
