from __future__ import annotations

"""Domain value objects shared across adapters, use-cases, and view models."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Mapping, Optional, Tuple

from .time_utils import format_timestamp, parse_timestamp

CommandId = str
CategoryId = str

UNCATEGORIZED_LABEL = "Uncategorized"


@dataclass(frozen=True)
class CategoryRef:
    """Reference from a command (or a filter) to a category bucket.

    The store boundary encodes "uncategorized" as an empty string. Inside the
    application that sentinel never travels on its own: it is always wrapped
    here so that "no filter" (``None``) and "uncategorized" stay distinct.
    """

    category_id: Optional[CategoryId] = None
    """Referenced category id, or ``None`` for the virtual uncategorized bucket."""

    def __post_init__(self) -> None:
        if self.category_id is not None:
            if not isinstance(self.category_id, str) or not self.category_id.strip():
                raise ValueError("CategoryRef.category_id must be a non-empty string or None.")

    @classmethod
    def uncategorized(cls) -> "CategoryRef":
        return cls(None)

    @classmethod
    def of(cls, category_id: CategoryId) -> "CategoryRef":
        return cls(category_id)

    @classmethod
    def from_raw(cls, value: Any) -> "CategoryRef":
        """Build a reference from the store encoding (``""``/``None`` = uncategorized)."""
        if isinstance(value, CategoryRef):
            return value
        text = str(value or "").strip()
        return cls(text or None)

    @property
    def is_uncategorized(self) -> bool:
        return self.category_id is None

    @property
    def raw(self) -> str:
        """Store encoding of this reference."""
        return self.category_id or ""

    def __str__(self) -> str:
        return self.category_id or UNCATEGORIZED_LABEL.lower()


UNCATEGORIZED = CategoryRef.uncategorized()


@dataclass(frozen=True)
class Command:
    """A stored text snippet the user later copies."""

    id: CommandId
    content: str
    category: CategoryRef = UNCATEGORIZED
    created_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        if not isinstance(self.id, str) or not self.id.strip():
            raise ValueError("Command.id must be a non-empty string.")
        if not isinstance(self.category, CategoryRef):
            object.__setattr__(self, "category", CategoryRef.from_raw(self.category))

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Command":
        if not isinstance(payload, Mapping):
            raise ValueError("Command payload must be a mapping.")
        return cls(
            id=str(payload.get("id") or ""),
            content=str(payload.get("content") or ""),
            category=CategoryRef.from_raw(payload.get("category")),
            created_at=parse_timestamp(payload.get("createdAt") or payload.get("created_at")),
        )

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "id": self.id,
            "content": self.content,
            "createdAt": format_timestamp(self.created_at),
        }
        if not self.category.is_uncategorized:
            payload["category"] = self.category.raw
        return payload


@dataclass(frozen=True)
class Category:
    """A named, optionally colored tag grouping commands."""

    id: CategoryId
    name: str
    color: str = ""
    created_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        if not isinstance(self.id, str) or not self.id.strip():
            raise ValueError("Category.id must be a non-empty string.")

    @property
    def ref(self) -> CategoryRef:
        return CategoryRef.of(self.id)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Category":
        if not isinstance(payload, Mapping):
            raise ValueError("Category payload must be a mapping.")
        return cls(
            id=str(payload.get("id") or ""),
            name=str(payload.get("name") or ""),
            color=str(payload.get("color") or ""),
            created_at=parse_timestamp(payload.get("createdAt") or payload.get("created_at")),
        )

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "createdAt": format_timestamp(self.created_at),
        }
        if self.color:
            payload["color"] = self.color
        return payload


@dataclass(frozen=True)
class LibrarySnapshot:
    """Authoritative command and category lists fetched together."""

    commands: Tuple[Command, ...] = field(default_factory=tuple)
    categories: Tuple[Category, ...] = field(default_factory=tuple)

    def category_by_ref(self, ref: CategoryRef) -> Optional[Category]:
        if ref.is_uncategorized:
            return None
        for category in self.categories:
            if category.id == ref.category_id:
                return category
        return None


__all__ = [
    "Category",
    "CategoryId",
    "CategoryRef",
    "Command",
    "CommandId",
    "LibrarySnapshot",
    "UNCATEGORIZED",
    "UNCATEGORIZED_LABEL",
]
