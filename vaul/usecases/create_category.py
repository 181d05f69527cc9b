from __future__ import annotations
from dataclasses import dataclass

from ..domain.entities import Category
from ..domain.errors import ValidationRejected
from ..domain.ports import StorePort
from .error_mapping import map_store_error


@dataclass
class CreateCategory:
    store: StorePort

    def __call__(self, name: str, color: str = "") -> Category:
        cleaned = (name or "").strip()
        if not cleaned:
            raise ValidationRejected("Category name is required")
        try:
            category = self.store.create_category(cleaned, (color or "").strip())
        except Exception as e:
            raise map_store_error(e, context="Failed to create category") from e
        if category is None or not getattr(category, "id", ""):
            raise ValidationRejected("Failed to create category: Invalid response")
        return category
