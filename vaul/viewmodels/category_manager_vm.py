"""Inline edit / delete / merge state machine of the category manager.

Call context:
    ``CategoryManagerDialog`` renders ``rows()`` and forwards button presses
    to the ``begin_*``/``request_*``/``confirm_*``/``cancel_*`` methods. Use
    cases are injected as callables; ``on_reload`` is wired to the library
    presenter so the lists refresh after each successful mutation.

Only one category row can be in a non-normal state at a time: starting an
interaction on another row abandons the previous one (and its edit buffer).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Mapping, Optional, Sequence

from ..domain.entities import UNCATEGORIZED, Category, CategoryId, CategoryRef
from ..domain.ports import UseCaseError


class RowState(str, Enum):
    NORMAL = "normal"
    EDITING = "editing"
    CONFIRMING_DELETE = "confirming_delete"
    CHOOSING_MERGE_TARGET = "choosing_merge_target"


@dataclass
class EditBuffer:
    name: str
    color: str


@dataclass
class CategoryManagerRow:
    """Display row for one managed category."""
    category_id: CategoryId
    name: str
    color: str
    count_label: str
    state: RowState


class CategoryManagerVM:
    def __init__(
        self,
        *,
        update_category: Optional[Callable[[CategoryId, str, str], None]] = None,
        delete_category: Optional[Callable[[CategoryId, CategoryRef], None]] = None,
        merge_categories: Optional[Callable[[CategoryId, CategoryId], None]] = None,
        on_reload: Optional[Callable[[], None]] = None,
        on_changed: Optional[Callable[[], None]] = None,
    ) -> None:
        self._log = logging.getLogger(__name__)
        self.update_category = update_category
        self.delete_category = delete_category
        self.merge_categories = merge_categories
        self.on_reload = on_reload
        self.on_changed = on_changed

        self.active_id: Optional[CategoryId] = None
        self.mode: RowState = RowState.NORMAL
        self.edit: Optional[EditBuffer] = None
        self.error: str = ""

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def row_state(self, category_id: CategoryId) -> RowState:
        if category_id == self.active_id:
            return self.mode
        return RowState.NORMAL

    def rows(self, categories: Sequence[Category], counts: Mapping[CategoryRef, int]) -> List[CategoryManagerRow]:
        rows: List[CategoryManagerRow] = []
        for category in categories:
            count = counts.get(category.ref, 0)
            rows.append(
                CategoryManagerRow(
                    category_id=category.id,
                    name=category.name,
                    color=category.color,
                    count_label=f"{count} {'command' if count == 1 else 'commands'}",
                    state=self.row_state(category.id),
                )
            )
        return rows

    def merge_candidates(self, categories: Sequence[Category]) -> List[Category]:
        """Every category except the one being merged."""
        if self.mode is not RowState.CHOOSING_MERGE_TARGET:
            return []
        return [category for category in categories if category.id != self.active_id]

    # ------------------------------------------------------------------
    # Edit
    # ------------------------------------------------------------------
    def begin_edit(self, category: Category) -> None:
        self._enter(category.id, RowState.EDITING)
        self.edit = EditBuffer(name=category.name, color=category.color or "")
        self._notify()

    def set_edit_name(self, text: str) -> None:
        if self.edit is not None:
            self.edit.name = text or ""

    def set_edit_color(self, color: str) -> None:
        if self.edit is not None:
            self.edit.color = color or ""

    def save_edit(self) -> bool:
        """Persist the buffer; a blank name is ignored and keeps editing."""
        if self.mode is not RowState.EDITING or self.edit is None or self.active_id is None:
            return False
        name = self.edit.name.strip()
        if not name:
            return False
        if self.update_category is None:
            raise RuntimeError("CategoryManagerVM.update_category is not wired")
        try:
            self.update_category(self.active_id, name, self.edit.color)
        except UseCaseError as exc:
            self._fail("Failed to update category", exc)
            raise
        self._log.info("Updated category %s", self.active_id)
        self._finish()
        return True

    def cancel_edit(self) -> None:
        if self.mode is RowState.EDITING:
            self._reset()
            self._notify()

    # ------------------------------------------------------------------
    # Delete
    # ------------------------------------------------------------------
    def request_delete(self, category_id: CategoryId) -> None:
        self._enter(category_id, RowState.CONFIRMING_DELETE)
        self._notify()

    def confirm_delete(
        self, category_id: Optional[CategoryId] = None, reassign_to: CategoryRef = UNCATEGORIZED
    ) -> bool:
        """Delete the row awaiting confirmation; ignored from any other state."""
        target = category_id or self.active_id
        if self.mode is not RowState.CONFIRMING_DELETE or not target or target != self.active_id:
            return False
        if self.delete_category is None:
            raise RuntimeError("CategoryManagerVM.delete_category is not wired")
        try:
            self.delete_category(target, reassign_to)
        except UseCaseError as exc:
            self._fail("Failed to delete category", exc)
            raise
        self._log.info("Deleted category %s", target)
        self._finish()
        return True

    def cancel_delete(self) -> None:
        if self.mode is RowState.CONFIRMING_DELETE:
            self._reset()
            self._notify()

    # ------------------------------------------------------------------
    # Merge
    # ------------------------------------------------------------------
    def request_merge(self, category_id: CategoryId) -> None:
        self._enter(category_id, RowState.CHOOSING_MERGE_TARGET)
        self._notify()

    def confirm_merge(self, source_id: CategoryId, target_id: CategoryId) -> bool:
        """Merge the row choosing a target; ignored from any other state."""
        if self.mode is not RowState.CHOOSING_MERGE_TARGET or source_id != self.active_id:
            return False
        if target_id == source_id:
            return False
        if self.merge_categories is None:
            raise RuntimeError("CategoryManagerVM.merge_categories is not wired")
        try:
            self.merge_categories(source_id, target_id)
        except UseCaseError as exc:
            self._fail("Failed to merge categories", exc)
            raise
        self._log.info("Merged category %s into %s", source_id, target_id)
        self._finish()
        return True

    def cancel_merge(self) -> None:
        if self.mode is RowState.CHOOSING_MERGE_TARGET:
            self._reset()
            self._notify()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def reset(self) -> None:
        """Abandon whatever row interaction is in progress."""
        self._reset()

    def _enter(self, category_id: CategoryId, mode: RowState) -> None:
        if self.active_id is not None and self.active_id != category_id:
            self._log.debug("Abandoning %s on category %s", self.mode.value, self.active_id)
        self.active_id = category_id
        self.mode = mode
        self.edit = None
        self.error = ""

    def _reset(self) -> None:
        self.active_id = None
        self.mode = RowState.NORMAL
        self.edit = None
        self.error = ""

    def _finish(self) -> None:
        self._reset()
        if self.on_reload:
            self.on_reload()
        self._notify()

    def _fail(self, label: str, exc: UseCaseError) -> None:
        self.error = exc.message
        self._log.warning("%s (%s): %s", label, exc.code, exc.message)
        self._notify()

    def _notify(self) -> None:
        if self.on_changed:
            self.on_changed()


__all__ = [
    "CategoryManagerRow",
    "CategoryManagerVM",
    "EditBuffer",
    "RowState",
]
