from __future__ import annotations
from dataclasses import dataclass

from ..domain.entities import CategoryId
from ..domain.errors import ValidationRejected
from ..domain.ports import StorePort
from .error_mapping import map_store_error


@dataclass
class MergeCategories:
    """Repoint every command of ``source_id`` to ``target_id`` and drop the source."""

    store: StorePort

    def __call__(self, source_id: CategoryId, target_id: CategoryId) -> None:
        if not source_id or not target_id:
            raise ValidationRejected("The uncategorized bucket cannot be merged.")
        if source_id == target_id:
            raise ValidationRejected("Cannot merge a category into itself.")
        try:
            self.store.merge_categories(source_id, target_id)
        except Exception as e:
            raise map_store_error(e, context="Failed to merge categories") from e
