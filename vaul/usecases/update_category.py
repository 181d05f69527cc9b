from __future__ import annotations
from dataclasses import dataclass

from ..domain.entities import CategoryId
from ..domain.errors import ValidationRejected
from ..domain.ports import StorePort
from .error_mapping import map_store_error


@dataclass
class UpdateCategory:
    store: StorePort

    def __call__(self, category_id: CategoryId, name: str, color: str = "") -> None:
        cleaned = (name or "").strip()
        if not cleaned:
            raise ValidationRejected("Category name is required")
        try:
            self.store.update_category(category_id, cleaned, (color or "").strip())
        except Exception as e:
            raise map_store_error(e, context="Failed to update category") from e
