from __future__ import annotations
from dataclasses import dataclass

from ..domain.entities import UNCATEGORIZED, CategoryId, CategoryRef
from ..domain.errors import ValidationRejected
from ..domain.ports import StorePort
from .error_mapping import map_store_error


@dataclass
class DeleteCategory:
    """Delete a category, moving its commands to ``reassign_to`` first."""

    store: StorePort

    def __call__(self, category_id: CategoryId, reassign_to: CategoryRef = UNCATEGORIZED) -> None:
        if not category_id:
            raise ValidationRejected("The uncategorized bucket cannot be deleted.")
        if reassign_to.category_id == category_id:
            raise ValidationRejected("Cannot reassign commands to the category being deleted.")
        try:
            self.store.delete_category(category_id, reassign_to.raw)
        except Exception as e:
            raise map_store_error(e, context="Failed to delete category") from e
