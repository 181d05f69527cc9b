from __future__ import annotations

import pytest

from vaul.adapters.store_mock import StoreMock
from vaul.domain.errors import BackendUnavailable, ValidationRejected
from vaul.usecases.create_category import CreateCategory
from vaul.viewmodels.create_category_vm import DEFAULT_CATEGORY_COLOR, CreateCategoryVM


def _vm(store: StoreMock):
    events = []
    vm = CreateCategoryVM(
        create_category=CreateCategory(store),
        on_created=lambda cid: events.append(("created", cid)),
        on_reload=lambda: events.append(("reload",)),
    )
    return vm, events


def test_open_resets_form():
    vm, _ = _vm(StoreMock())
    vm.open()
    vm.set_name("Git")
    vm.close()

    vm.open()

    assert vm.is_open
    assert vm.name == ""
    assert vm.color == DEFAULT_CATEGORY_COLOR
    assert vm.submit_label == "Create Category"
    assert not vm.can_submit


def test_blank_name_rejected_and_modal_stays_open():
    store = StoreMock()
    vm, events = _vm(store)
    vm.open()
    vm.set_color("#fff")

    with pytest.raises(ValidationRejected):
        vm.submit()

    assert vm.is_open
    assert vm.error == "Category name is required"
    assert store.calls == []
    assert events == []


def test_success_returns_id_closes_and_reloads():
    store = StoreMock()
    vm, events = _vm(store)
    vm.open()
    vm.set_name(" Git ")
    vm.set_color("#f05032")

    category_id = vm.submit()

    assert not vm.is_open
    assert store.list_categories()[0].id == category_id
    assert events == [("created", category_id), ("reload",)]


def test_backend_failure_keeps_modal_open_and_form_enabled():
    store = StoreMock()
    store.fail_next("create_category", OSError("disk full"))
    vm, events = _vm(store)
    vm.open()
    vm.set_name("Git")

    with pytest.raises(BackendUnavailable):
        vm.submit()

    assert vm.is_open
    assert not vm.is_creating
    assert vm.can_submit
    assert vm.error.startswith("Failed to create category")
    assert events == []


def test_typing_clears_previous_error():
    vm, _ = _vm(StoreMock())
    vm.open()
    with pytest.raises(ValidationRejected):
        vm.submit()

    vm.set_name("G")

    assert vm.error == ""


def test_close_refused_while_creating():
    vm, _ = _vm(StoreMock())
    vm.open()
    vm.is_creating = True

    assert vm.close() is False
    assert vm.is_open
    assert vm.submit_label == "Creating..."
