from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

from ..domain.entities import CategoryRef, Command
from ..domain.errors import ValidationRejected
from ..domain.ports import StorePort
from .error_mapping import map_store_error


@dataclass
class AddCommand:
    store: StorePort

    def __call__(self, content: str, category: Optional[CategoryRef] = None) -> Command:
        text = (content or "").strip()
        if not text:
            raise ValidationRejected("Command text is required.")
        raw_category = category.raw if category is not None else ""
        try:
            return self.store.create_command(text, raw_category)
        except Exception as e:
            raise map_store_error(e, context="Save command") from e
