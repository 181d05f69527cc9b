from __future__ import annotations

from typing import Dict, List, Optional, Tuple
from uuid import uuid4

from vaul.domain.entities import Category, CategoryId, Command, CommandId
from vaul.domain.ports import StorePort

from .change_notifier import ChangeNotifier


class StoreMock(ChangeNotifier, StorePort):
    """Offline substitute for the real stores with deterministic responses."""

    def __init__(
        self,
        commands: Optional[List[Command]] = None,
        categories: Optional[List[Category]] = None,
    ) -> None:
        super().__init__()
        self._commands: List[Command] = list(commands or [])
        self._categories: List[Category] = list(categories or [])
        self._failures: Dict[str, List[Exception]] = {}
        self.calls: List[Tuple[str, tuple]] = []

    # ---------- StorePort ----------

    def list_commands(self) -> List[Command]:
        self._enter("list_commands")
        return list(self._commands)

    def list_categories(self) -> List[Category]:
        self._enter("list_categories")
        return list(self._categories)

    def create_command(self, content: str, category: str = "") -> Command:
        self._enter("create_command", content, category)
        if category and not self._has_category(category):
            raise KeyError(f"Unknown category '{category}'")
        cmd = Command(id=f"cmd-{uuid4().hex[:8]}", content=content, category=category)
        self._commands.insert(0, cmd)
        self.notify_changed()
        return cmd

    def delete_command(self, command_id: CommandId) -> None:
        self._enter("delete_command", command_id)
        self._commands = [cmd for cmd in self._commands if cmd.id != command_id]
        self.notify_changed()

    def create_category(self, name: str, color: str = "") -> Category:
        self._enter("create_category", name, color)
        if not name.strip():
            raise ValueError("Category name is required")
        for existing in self._categories:
            if existing.name.casefold() == name.strip().casefold():
                return existing
        category = Category(id=f"cat-{uuid4().hex[:8]}", name=name.strip(), color=color)
        self._categories.append(category)
        self.notify_changed()
        return category

    def update_category(self, category_id: CategoryId, name: str, color: str = "") -> None:
        self._enter("update_category", category_id, name, color)
        self._require(category_id)
        self._categories = [
            Category(id=cat.id, name=name, color=color) if cat.id == category_id else cat
            for cat in self._categories
        ]
        self.notify_changed()

    def delete_category(self, category_id: CategoryId, reassign_to: str = "") -> None:
        self._enter("delete_category", category_id, reassign_to)
        self._require(category_id)
        if reassign_to == category_id:
            raise ValueError("Cannot reassign commands to the category being deleted")
        if reassign_to:
            self._require(reassign_to)
        self._repoint(category_id, reassign_to)
        self.notify_changed()

    def merge_categories(self, source_id: CategoryId, target_id: CategoryId) -> None:
        self._enter("merge_categories", source_id, target_id)
        if source_id == target_id:
            raise ValueError("Cannot merge a category into itself")
        self._require(source_id)
        self._require(target_id)
        self._repoint(source_id, target_id)
        self.notify_changed()

    # ---------- Test helpers ----------

    def fail_next(self, method: str, exc: Exception) -> None:
        """Make the next call to ``method`` raise ``exc``."""
        self._failures.setdefault(method, []).append(exc)

    def calls_to(self, method: str) -> List[tuple]:
        return [args for name, args in self.calls if name == method]

    def _enter(self, method: str, *args) -> None:
        self.calls.append((method, args))
        pending = self._failures.get(method)
        if pending:
            raise pending.pop(0)

    def _has_category(self, category_id: CategoryId) -> bool:
        return any(cat.id == category_id for cat in self._categories)

    def _require(self, category_id: CategoryId) -> None:
        if not self._has_category(category_id):
            raise KeyError(f"Unknown category '{category_id}'")

    def _repoint(self, category_id: CategoryId, new_ref: str) -> None:
        self._commands = [
            Command(id=cmd.id, content=cmd.content, category=new_ref, created_at=cmd.created_at)
            if cmd.category.raw == category_id
            else cmd
            for cmd in self._commands
        ]
        self._categories = [cat for cat in self._categories if cat.id != category_id]


__all__ = ["StoreMock"]
