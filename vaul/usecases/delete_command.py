from __future__ import annotations
from dataclasses import dataclass

from ..domain.entities import CommandId
from ..domain.ports import StorePort
from .error_mapping import map_store_error


@dataclass
class DeleteCommand:
    store: StorePort

    def __call__(self, command_id: CommandId) -> None:
        try:
            self.store.delete_command(command_id)
        except Exception as e:
            raise map_store_error(e, context="Delete command") from e
