from __future__ import annotations

import logging
from typing import Callable, Optional

from ..domain.entities import Category, CategoryId
from ..domain.errors import ValidationRejected
from ..domain.ports import UseCaseError

DEFAULT_CATEGORY_COLOR = "#78b4ff"


class CreateCategoryVM:
    """State of the "Create New Category" modal (no I/O here)."""

    def __init__(
        self,
        *,
        create_category: Optional[Callable[[str, str], Category]] = None,
        on_created: Optional[Callable[[CategoryId], None]] = None,
        on_reload: Optional[Callable[[], None]] = None,
    ) -> None:
        self._log = logging.getLogger(__name__)
        self.create_category = create_category
        self.on_created = on_created
        self.on_reload = on_reload
        self.is_open = False
        self._reset_form()

    def _reset_form(self) -> None:
        self.name = ""
        self.color = DEFAULT_CATEGORY_COLOR
        self.is_creating = False
        self.error = ""

    def open(self) -> None:
        self._reset_form()
        self.is_open = True

    def close(self) -> bool:
        """Close unless a create call is in flight."""
        if self.is_creating:
            return False
        self.is_open = False
        return True

    def set_name(self, text: str) -> None:
        self.name = text or ""
        self.error = ""

    def set_color(self, color: str) -> None:
        self.color = color or ""

    @property
    def can_submit(self) -> bool:
        return bool(self.name.strip()) and not self.is_creating

    @property
    def submit_label(self) -> str:
        return "Creating..." if self.is_creating else "Create Category"

    def submit(self) -> CategoryId:
        """Create the category and return its id for preselection.

        A blank name raises ``ValidationRejected`` without calling the store.
        Any failure keeps the modal open with ``error`` set and the form
        enabled again.
        """
        name = self.name.strip()
        if not name:
            self.error = "Category name is required"
            raise ValidationRejected(self.error)
        if self.create_category is None:
            raise RuntimeError("CreateCategoryVM.create_category is not wired")

        self.error = ""
        self.is_creating = True
        try:
            category = self.create_category(name, self.color)
        except UseCaseError as exc:
            self.is_creating = False
            self.error = exc.message
            self._log.warning("Create category failed (%s): %s", exc.code, exc.message)
            raise
        self.is_creating = False
        self.is_open = False
        self._log.info("Created category %s (%s)", category.id, category.name)
        if self.on_created:
            self.on_created(category.id)
        if self.on_reload:
            self.on_reload()
        return category.id


__all__ = ["DEFAULT_CATEGORY_COLOR", "CreateCategoryVM"]
