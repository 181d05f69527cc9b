"""Fetch commands and categories together as one library snapshot."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

from ..domain.entities import LibrarySnapshot
from ..domain.ports import StorePort
from .error_mapping import map_store_error


@dataclass
class LoadLibrary:
    store: StorePort

    def __call__(self) -> LibrarySnapshot:
        """Fetch both lists concurrently; return only when both succeeded."""
        with ThreadPoolExecutor(max_workers=2, thread_name_prefix="vaul-load") as pool:
            commands_future = pool.submit(self.store.list_commands)
            categories_future = pool.submit(self.store.list_categories)
            try:
                commands = commands_future.result()
                categories = categories_future.result()
            except Exception as exc:
                raise map_store_error(exc, context="Load commands") from exc
        return LibrarySnapshot(
            commands=tuple(commands or ()),
            categories=tuple(categories or ()),
        )
