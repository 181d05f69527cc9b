from __future__ import annotations
from dataclasses import dataclass

from ..domain.entities import Command
from ..domain.errors import ClipboardDenied
from ..domain.ports import ClipboardPort


@dataclass
class CopyCommand:
    clipboard: ClipboardPort

    def __call__(self, command: Command) -> None:
        try:
            self.clipboard.write(command.content)
        except Exception as e:
            raise ClipboardDenied(f"Failed to copy: {e}") from e
