from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Any, Iterable, List, Optional, Union

from vaul.domain.entities import Category, CategoryId, Command, CommandId
from vaul.domain.ports import StorePort
from vaul.domain.time_utils import utc_now

from .change_notifier import ChangeNotifier

COMMANDS_FILE = "commands.json"
CATEGORIES_FILE = "categories.json"


def default_data_dir() -> Path:
    return Path.home() / ".vaul"


class StoreLocal(ChangeNotifier, StorePort):
    """Local filesystem store for commands and categories (JSON files).

    New commands are prepended so listings come back newest first. Every
    mutation builds the new lists, writes them to disk, and only then swaps
    them in, so a failed write leaves the in-memory state untouched.
    """

    def __init__(self, root_dir: Union[str, Path, None] = None) -> None:
        super().__init__()
        self._log = logging.getLogger(__name__)
        self.root = Path(root_dir) if root_dir else default_data_dir()
        self.commands_path = self.root / COMMANDS_FILE
        self.categories_path = self.root / CATEGORIES_FILE
        self._lock = threading.RLock()
        self._last_id = ""
        self._commands: List[Command] = self._load(self.commands_path, Command.from_payload)
        self._categories: List[Category] = self._load(self.categories_path, Category.from_payload)

    # ---- Commands ----
    def list_commands(self) -> List[Command]:
        with self._lock:
            return list(self._commands)

    def create_command(self, content: str, category: str = "") -> Command:
        with self._lock:
            category = (category or "").strip()
            if category and self._find_category(category) is None:
                raise KeyError(f"Unknown category '{category}'")
            cmd = Command(
                id=self._generate_id(self._commands),
                content=content,
                category=category,
                created_at=utc_now(),
            )
            commands = [cmd, *self._commands]
            self._write(self.commands_path, commands)
            self._commands = commands
        self._log.info("Stored command %s", cmd.id)
        self.notify_changed()
        return cmd

    def delete_command(self, command_id: CommandId) -> None:
        with self._lock:
            commands = [cmd for cmd in self._commands if cmd.id != command_id]
            if len(commands) == len(self._commands):
                # unknown id: nothing to delete
                return
            self._write(self.commands_path, commands)
            self._commands = commands
        self._log.info("Deleted command %s", command_id)
        self.notify_changed()

    # ---- Categories ----
    def list_categories(self) -> List[Category]:
        with self._lock:
            return list(self._categories)

    def create_category(self, name: str, color: str = "") -> Category:
        cleaned = (name or "").strip()
        if not cleaned:
            raise ValueError("Category name is required")
        with self._lock:
            existing = self._find_category_by_name(cleaned)
            if existing is not None:
                return existing
            category = Category(
                id=self._generate_id(self._categories),
                name=cleaned,
                color=(color or "").strip(),
                created_at=utc_now(),
            )
            categories = [*self._categories, category]
            self._write(self.categories_path, categories)
            self._categories = categories
        self._log.info("Created category %s (%s)", category.id, category.name)
        self.notify_changed()
        return category

    def update_category(self, category_id: CategoryId, name: str, color: str = "") -> None:
        cleaned = (name or "").strip()
        if not cleaned:
            raise ValueError("Category name is required")
        with self._lock:
            current = self._require_category(category_id)
            updated = Category(
                id=current.id,
                name=cleaned,
                color=(color or "").strip(),
                created_at=current.created_at,
            )
            categories = [updated if cat.id == category_id else cat for cat in self._categories]
            self._write(self.categories_path, categories)
            self._categories = categories
        self._log.info("Updated category %s", category_id)
        self.notify_changed()

    def delete_category(self, category_id: CategoryId, reassign_to: str = "") -> None:
        reassign_to = (reassign_to or "").strip()
        with self._lock:
            self._require_category(category_id)
            if reassign_to == category_id:
                raise ValueError("Cannot reassign commands to the category being deleted")
            if reassign_to:
                self._require_category(reassign_to)
            self._repoint_and_remove(category_id, reassign_to)
        self._log.info("Deleted category %s (commands -> %r)", category_id, reassign_to)
        self.notify_changed()

    def merge_categories(self, source_id: CategoryId, target_id: CategoryId) -> None:
        with self._lock:
            if source_id == target_id:
                raise ValueError("Cannot merge a category into itself")
            self._require_category(source_id)
            self._require_category(target_id)
            self._repoint_and_remove(source_id, target_id)
        self._log.info("Merged category %s into %s", source_id, target_id)
        self.notify_changed()

    # ---- Internal helpers ----
    def _repoint_and_remove(self, category_id: CategoryId, new_ref: str) -> None:
        commands = [
            Command(id=cmd.id, content=cmd.content, category=new_ref, created_at=cmd.created_at)
            if cmd.category.raw == category_id
            else cmd
            for cmd in self._commands
        ]
        categories = [cat for cat in self._categories if cat.id != category_id]
        self._write(self.commands_path, commands)
        self._write(self.categories_path, categories)
        self._commands = commands
        self._categories = categories

    def _find_category(self, category_id: CategoryId) -> Optional[Category]:
        for cat in self._categories:
            if cat.id == category_id:
                return cat
        return None

    def _find_category_by_name(self, name: str) -> Optional[Category]:
        wanted = name.casefold()
        for cat in self._categories:
            if cat.name.strip().casefold() == wanted:
                return cat
        return None

    def _require_category(self, category_id: CategoryId) -> Category:
        found = self._find_category(category_id)
        if found is None:
            raise KeyError(f"Unknown category '{category_id}'")
        return found

    def _generate_id(self, existing: Iterable[Any]) -> str:
        """Time-based id, suffixed when two creations share a tick."""
        base = utc_now().strftime("%Y%m%d%H%M%S.%f")
        taken = {item.id for item in existing}
        taken.add(self._last_id)
        candidate = base
        counter = 1
        while candidate in taken:
            candidate = f"{base}-{counter}"
            counter += 1
        self._last_id = candidate
        return candidate

    def _load(self, path: Path, parse) -> list:
        if not path.exists():
            return []
        try:
            with path.open("r", encoding="utf-8") as fh:
                raw = json.load(fh)
        except (OSError, ValueError) as exc:
            self._log.warning("Ignoring unreadable store file %s: %s", path, exc)
            return []
        if not isinstance(raw, list):
            self._log.warning("Ignoring store file %s: expected a JSON list", path)
            return []
        items = []
        for entry in raw:
            try:
                items.append(parse(entry))
            except ValueError as exc:
                self._log.warning("Skipping invalid entry in %s: %s", path, exc)
        return items

    def _write(self, path: Path, items: Iterable[Any]) -> None:
        payload = [item.to_payload() for item in items]
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f"{path.stem}_", suffix=".tmp", dir=str(path.parent))
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(payload, fh, ensure_ascii=False, indent=2)
            os.replace(tmp_name, path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise


__all__ = ["CATEGORIES_FILE", "COMMANDS_FILE", "StoreLocal", "default_data_dir"]
