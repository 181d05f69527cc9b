"""Domain package exports for value objects and view derivation."""

from .entities import (
    Category,
    CategoryId,
    CategoryRef,
    Command,
    CommandId,
    LibrarySnapshot,
)
from .view_state import DerivedView, ViewState, command_counts, derive_view

__all__ = [
    "Category",
    "CategoryId",
    "CategoryRef",
    "Command",
    "CommandId",
    "DerivedView",
    "LibrarySnapshot",
    "ViewState",
    "command_counts",
    "derive_view",
]
