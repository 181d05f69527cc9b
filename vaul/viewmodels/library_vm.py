"""Command library projection for the main window and the tray window.

Call context:
    ``LibraryPresenter`` feeds reloaded snapshots into this view model; the
    main window binds the search box, category pills and collapse toggles to
    its setters and renders ``sections()``/``pills()`` after every change.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from ..domain.entities import (
    UNCATEGORIZED,
    UNCATEGORIZED_LABEL,
    Category,
    CategoryRef,
    Command,
    LibrarySnapshot,
)
from ..domain.ports import MatcherPort
from ..domain.view_state import DerivedView, ViewState, command_counts, derive_view


@dataclass
class PillRow:
    """Display model for one category filter pill."""
    ref: Optional[CategoryRef]
    label: str
    count: int
    color: str
    active: bool

    @property
    def deletable(self) -> bool:
        """Only real categories offer a delete shortcut."""
        return self.ref is not None and not self.ref.is_uncategorized


@dataclass
class SectionRow:
    """Display model for one grouped block of the command list."""
    ref: CategoryRef
    title: str
    color: str
    commands: Tuple[Command, ...]
    collapsed: bool


def _plural(count: int) -> str:
    return "command" if count == 1 else "commands"


class LibraryVM:
    """
    Holds the cached commands/categories and the ephemeral list state.

    Every setter recomputes the derived view synchronously before notifying
    ``on_changed``, so a render never sees derived data older than the query.
    """

    def __init__(
        self,
        *,
        matcher: Optional[MatcherPort] = None,
        on_changed: Optional[Callable[[], None]] = None,
    ) -> None:
        self._log = logging.getLogger(__name__)
        self.matcher = matcher
        self.on_changed = on_changed
        self.snapshot = LibrarySnapshot()
        self.state = ViewState()
        self.derived = DerivedView()
        self.counts: Dict[CategoryRef, int] = {}

        self._reload_lock = threading.Lock()
        self._issued_generation = 0
        self._applied_generation = 0

    # ------------------------------------------------------------------
    # Source data
    # ------------------------------------------------------------------
    @property
    def commands(self) -> Tuple[Command, ...]:
        return self.snapshot.commands

    @property
    def categories(self) -> Tuple[Category, ...]:
        return self.snapshot.categories

    def begin_reload(self) -> int:
        """Issue a token for a reload about to start."""
        with self._reload_lock:
            self._issued_generation += 1
            return self._issued_generation

    def apply_snapshot(self, token: int, snapshot: LibrarySnapshot) -> bool:
        """Replace the cached lists unless a newer reload was already applied.

        Returns ``False`` (and leaves state untouched) for stale responses.
        """
        with self._reload_lock:
            if token <= self._applied_generation:
                self._log.debug(
                    "Dropping stale reload #%s (already applied #%s)", token, self._applied_generation
                )
                return False
            self._applied_generation = token
            self.snapshot = snapshot
            self.state = self._prune_state(self.state, snapshot)
        self._log.debug(
            "Applied reload #%s: %d commands, %d categories",
            token,
            len(snapshot.commands),
            len(snapshot.categories),
        )
        self._recompute()
        return True

    # ------------------------------------------------------------------
    # UI state setters
    # ------------------------------------------------------------------
    def set_search_query(self, text: str) -> None:
        self.state = self.state.with_query(text)
        self._recompute()

    def set_active_category(self, ref: Optional[CategoryRef]) -> None:
        """Filter by ``ref``; ``None`` shows all, repeating the active one clears it."""
        self.state = self.state.with_active_category(ref)
        self._recompute()

    def toggle_collapsed(self, ref: CategoryRef) -> None:
        self.state = self.state.with_collapsed_toggled(ref)
        self._notify()

    def set_selected_category(self, ref: Optional[CategoryRef]) -> None:
        self.state = self.state.with_selected_category(ref)
        self._notify()

    @property
    def search_query(self) -> str:
        return self.state.query

    @property
    def active_category(self) -> Optional[CategoryRef]:
        return self.state.active_category

    @property
    def selected_category(self) -> Optional[CategoryRef]:
        return self.state.selected_category

    @property
    def filtered(self) -> Tuple[Command, ...]:
        return self.derived.filtered

    # ------------------------------------------------------------------
    # Display helpers
    # ------------------------------------------------------------------
    def category_for(self, ref: CategoryRef) -> Optional[Category]:
        return self.snapshot.category_by_ref(ref)

    def category_name(self, ref: CategoryRef) -> str:
        category = self.category_for(ref)
        if category is not None:
            return category.name
        return UNCATEGORIZED_LABEL

    def category_selector_label(self, ref: Optional[CategoryRef]) -> str:
        if ref is None:
            return "Select category"
        if ref.is_uncategorized:
            return UNCATEGORIZED_LABEL
        category = self.category_for(ref)
        return category.name if category is not None else "Select category"

    def filter_categories(self, term: str) -> List[Category]:
        """Case-insensitive substring filter for the category selector search."""
        needle = (term or "").casefold()
        return [cat for cat in self.categories if needle in cat.name.casefold()]

    def pills(self) -> List[PillRow]:
        """'All' pill, one pill per category, and 'Uncategorized' when it has commands."""
        active = self.state.active_category
        rows = [
            PillRow(
                ref=None,
                label="All",
                count=sum(self.counts.values()),
                color="",
                active=active is None,
            )
        ]
        for category in self.categories:
            rows.append(
                PillRow(
                    ref=category.ref,
                    label=category.name,
                    count=self.counts.get(category.ref, 0),
                    color=category.color,
                    active=active == category.ref,
                )
            )
        uncategorized = self.counts.get(UNCATEGORIZED, 0)
        if uncategorized > 0:
            rows.append(
                PillRow(
                    ref=UNCATEGORIZED,
                    label=UNCATEGORIZED_LABEL,
                    count=uncategorized,
                    color="",
                    active=active == UNCATEGORIZED,
                )
            )
        return rows

    def sections(self) -> List[SectionRow]:
        rows: List[SectionRow] = []
        for ref, commands in self.derived.grouped.items():
            category = self.category_for(ref)
            rows.append(
                SectionRow(
                    ref=ref,
                    title=category.name if category is not None else UNCATEGORIZED_LABEL,
                    color=category.color if category is not None else "",
                    commands=commands,
                    collapsed=self.state.is_collapsed(ref),
                )
            )
        return rows

    def footer_label(self) -> str:
        total = len(self.commands)
        if total == 0:
            return ""
        shown = len(self.filtered)
        if shown == total:
            return f"{total} {_plural(total)} stored"
        return f"{shown} of {total} {_plural(total)}"

    def empty_state_label(self) -> str:
        if self.filtered:
            return ""
        if self.state.query:
            return "No commands found"
        if not self.commands:
            return "No commands saved yet.\nType a command above and press Enter to save it."
        return "No commands match your search"

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _recompute(self) -> None:
        self.derived = derive_view(self.snapshot.commands, self.state, self.matcher)
        self.counts = command_counts(self.snapshot.commands)
        self._notify()

    def _notify(self) -> None:
        if self.on_changed:
            self.on_changed()

    @staticmethod
    def _prune_state(state: ViewState, snapshot: LibrarySnapshot) -> ViewState:
        """Drop filter, selection and collapse references to removed categories."""
        known = {category.ref for category in snapshot.categories}

        def _still_valid(ref: Optional[CategoryRef]) -> bool:
            return ref is None or ref.is_uncategorized or ref in known

        if not _still_valid(state.active_category):
            state = state.with_active_category(None)
        if not _still_valid(state.selected_category):
            state = state.with_selected_category(None)
        state = state.with_collapsed_within(known | {UNCATEGORIZED})
        return state


__all__ = ["LibraryVM", "PillRow", "SectionRow"]
