from __future__ import annotations

from vaul.adapters.fuzzy_rapidfuzz import RapidFuzzMatcher
from vaul.domain.entities import UNCATEGORIZED, Category, CategoryRef, Command, LibrarySnapshot
from vaul.tests.unit.viewmodels.helpers import make_snapshot
from vaul.viewmodels.library_vm import LibraryVM


def test_apply_snapshot_replaces_lists_and_notifies():
    changes = []
    vm = LibraryVM(on_changed=lambda: changes.append(1))

    applied = vm.apply_snapshot(vm.begin_reload(), make_snapshot())

    assert applied is True
    assert [cmd.id for cmd in vm.filtered] == ["1", "2", "3"]
    assert vm.counts[CategoryRef.of("c1")] == 1
    assert changes == [1]


def test_stale_reload_is_dropped():
    vm = LibraryVM()
    older = vm.begin_reload()
    newer = vm.begin_reload()
    fresh = make_snapshot()
    stale = LibrarySnapshot(commands=(Command(id="old", content="old"),), categories=())

    assert vm.apply_snapshot(newer, fresh) is True
    assert vm.apply_snapshot(older, stale) is False
    assert vm.snapshot is fresh


def test_out_of_order_older_token_still_applies_if_nothing_newer_landed():
    vm = LibraryVM()
    older = vm.begin_reload()
    vm.begin_reload()

    assert vm.apply_snapshot(older, make_snapshot()) is True


def test_reload_drops_filters_for_removed_categories():
    vm = LibraryVM()
    vm.apply_snapshot(vm.begin_reload(), make_snapshot())
    vm.set_active_category(CategoryRef.of("c2"))
    vm.set_selected_category(CategoryRef.of("c2"))

    without_docker = LibrarySnapshot(
        commands=(Command(id="1", content="git status", category="c1"), Command(id="3", content="docker ps")),
        categories=(Category(id="c1", name="Git"),),
    )
    vm.apply_snapshot(vm.begin_reload(), without_docker)

    assert vm.active_category is None
    assert vm.selected_category is None
    assert len(vm.filtered) == 2


def test_reload_keeps_uncategorized_filter():
    vm = LibraryVM()
    vm.apply_snapshot(vm.begin_reload(), make_snapshot())
    vm.set_active_category(UNCATEGORIZED)

    vm.apply_snapshot(vm.begin_reload(), make_snapshot())

    assert vm.active_category == UNCATEGORIZED
    assert [cmd.id for cmd in vm.filtered] == ["2"]


def test_search_scenario_with_single_uncategorized_command():
    vm = LibraryVM(matcher=RapidFuzzMatcher())
    snapshot = LibrarySnapshot(commands=(Command(id="1", content="ls -la", category=""),), categories=())
    vm.apply_snapshot(vm.begin_reload(), snapshot)

    vm.set_search_query("ls")
    assert [cmd.id for cmd in vm.filtered] == ["1"]

    vm.set_search_query("zzz")
    assert vm.filtered == ()


def test_filter_toggle_scenario():
    vm = LibraryVM()
    snapshot = LibrarySnapshot(
        commands=(Command(id="1", content="git status", category="c1"), Command(id="2", content="ls", category="")),
        categories=(Category(id="c1", name="Git"),),
    )
    vm.apply_snapshot(vm.begin_reload(), snapshot)

    vm.set_active_category(CategoryRef.of("c1"))
    assert [cmd.id for cmd in vm.filtered] == ["1"]
    assert list(vm.derived.grouped.keys()) == [CategoryRef.of("c1")]

    vm.set_active_category(CategoryRef.of("c1"))
    assert vm.active_category is None
    assert [cmd.id for cmd in vm.filtered] == ["1", "2"]


def test_collapse_toggle_does_not_change_filtered_list():
    vm = LibraryVM()
    vm.apply_snapshot(vm.begin_reload(), make_snapshot())
    before = vm.filtered

    vm.toggle_collapsed(CategoryRef.of("c1"))

    assert vm.filtered == before
    assert [row.collapsed for row in vm.sections()] == [True, False, False]


def test_reload_forgets_collapsed_sections_of_removed_categories():
    vm = LibraryVM()
    vm.apply_snapshot(vm.begin_reload(), make_snapshot())
    for ref in (CategoryRef.of("c1"), CategoryRef.of("c2"), UNCATEGORIZED):
        vm.toggle_collapsed(ref)

    without_docker = LibrarySnapshot(
        commands=(Command(id="1", content="git status", category="c1"),),
        categories=(Category(id="c1", name="Git"),),
    )
    vm.apply_snapshot(vm.begin_reload(), without_docker)

    assert vm.state.collapsed == frozenset({CategoryRef.of("c1"), UNCATEGORIZED})
