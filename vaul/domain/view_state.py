"""Pure derivation of the command list views from source lists and UI state.

``ViewState`` is an immutable record of the ephemeral UI inputs (search query,
active category filter, collapsed sections, category preselected for the next
entry). ``derive_view`` turns commands plus a state into the filtered list and
its grouping; ``command_counts`` feeds the filter badges. Neither function
touches anything outside its arguments, so the same inputs always produce the
same output.
"""

from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass, field, replace
from typing import Dict, FrozenSet, Iterable, Optional, Sequence, Tuple

from .entities import CategoryRef, Command
from .ports import MatcherPort


@dataclass(frozen=True)
class ViewState:
    """Snapshot of the user-controlled inputs of the command list."""

    query: str = ""
    active_category: Optional[CategoryRef] = None
    """``None`` shows all categories; ``CategoryRef.uncategorized()`` filters to uncategorized."""
    collapsed: FrozenSet[CategoryRef] = field(default_factory=frozenset)
    selected_category: Optional[CategoryRef] = None
    """Category preselected for the next submitted command (``None`` = not chosen)."""

    def with_query(self, text: str) -> "ViewState":
        return replace(self, query=text or "")

    def with_active_category(self, ref: Optional[CategoryRef]) -> "ViewState":
        """Select a filter; choosing the active one again clears it."""
        if ref is not None and ref == self.active_category:
            return replace(self, active_category=None)
        return replace(self, active_category=ref)

    def with_collapsed_toggled(self, ref: CategoryRef) -> "ViewState":
        if ref in self.collapsed:
            return replace(self, collapsed=self.collapsed - {ref})
        return replace(self, collapsed=self.collapsed | {ref})

    def with_collapsed_within(self, refs: Iterable[CategoryRef]) -> "ViewState":
        """Forget collapsed sections outside ``refs``."""
        kept = self.collapsed & frozenset(refs)
        if kept == self.collapsed:
            return self
        return replace(self, collapsed=kept)

    def with_selected_category(self, ref: Optional[CategoryRef]) -> "ViewState":
        return replace(self, selected_category=ref)

    def is_collapsed(self, ref: CategoryRef) -> bool:
        return ref in self.collapsed


@dataclass(frozen=True)
class DerivedView:
    """Filtered commands and their grouping by category, in display order."""

    filtered: Tuple[Command, ...] = ()
    grouped: "OrderedDict[CategoryRef, Tuple[Command, ...]]" = field(default_factory=OrderedDict)

    @property
    def section_keys(self) -> Tuple[CategoryRef, ...]:
        return tuple(self.grouped.keys())


def filter_by_category(commands: Iterable[Command], active: Optional[CategoryRef]) -> Tuple[Command, ...]:
    if active is None:
        return tuple(commands)
    return tuple(cmd for cmd in commands if cmd.category == active)


def group_by_category(commands: Iterable[Command]) -> "OrderedDict[CategoryRef, Tuple[Command, ...]]":
    """Group commands by category, sections ordered by first occurrence."""
    buckets: "OrderedDict[CategoryRef, list[Command]]" = OrderedDict()
    for cmd in commands:
        buckets.setdefault(cmd.category, []).append(cmd)
    return OrderedDict((ref, tuple(items)) for ref, items in buckets.items())


def derive_view(
    commands: Sequence[Command],
    state: ViewState,
    matcher: Optional[MatcherPort] = None,
) -> DerivedView:
    """Apply category filter, then fuzzy search, then group.

    A blank (after trimming) query skips the matcher entirely and keeps the
    category-filtered order. Otherwise the matcher's best-first order is kept.
    """
    candidates = filter_by_category(commands, state.active_category)
    query = (state.query or "").strip()
    if query and matcher is not None:
        filtered = tuple(matcher.match(query, candidates, key=lambda cmd: cmd.content))
    else:
        filtered = candidates
    return DerivedView(filtered=filtered, grouped=group_by_category(filtered))


def command_counts(commands: Iterable[Command]) -> Dict[CategoryRef, int]:
    """Count commands per category over the unfiltered list."""
    counts: Dict[CategoryRef, int] = {}
    for cmd in commands:
        counts[cmd.category] = counts.get(cmd.category, 0) + 1
    return counts


__all__ = [
    "DerivedView",
    "ViewState",
    "command_counts",
    "derive_view",
    "filter_by_category",
    "group_by_category",
]
