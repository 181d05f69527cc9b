from __future__ import annotations

from vaul.adapters.clipboard_pyperclip import MemoryClipboard
from vaul.adapters.store_local import StoreLocal
from vaul.adapters.store_mock import StoreMock
from vaul.adapters.store_rest import StoreRestAdapter
from vaul.app.controller import AppController
from vaul.viewmodels.settings_vm import SettingsVM


def test_controller_ensure_ready_wires_usecases() -> None:
    settings = SettingsVM()
    settings.store_backend = "mock"

    controller = AppController(settings, clipboard=MemoryClipboard())

    assert controller.ensure_ready() is True
    assert isinstance(controller.store, StoreMock)
    assert controller.matcher is not None
    assert controller.uc_load is not None
    assert controller.uc_add_command is not None
    assert controller.uc_delete_command is not None
    assert controller.uc_copy_command is not None
    assert controller.uc_create_category is not None
    assert controller.uc_update_category is not None
    assert controller.uc_delete_category is not None
    assert controller.uc_merge_categories is not None


def test_controller_caches_store_between_calls() -> None:
    settings = SettingsVM()
    settings.store_backend = "mock"
    controller = AppController(settings, clipboard=MemoryClipboard())

    controller.ensure_ready()
    first = controller.store
    controller.ensure_ready()

    assert controller.store is first


def test_rest_backend_without_url_is_not_ready() -> None:
    settings = SettingsVM()
    settings.store_backend = "rest"

    controller = AppController(settings, clipboard=MemoryClipboard())

    assert controller.ensure_ready() is False
    assert controller.store is None
    assert controller.uc_load is None


def test_rest_backend_builds_http_adapter() -> None:
    settings = SettingsVM()
    settings.store_backend = "rest"
    settings.api_base_url = "http://vault.local/"
    settings.api_key = "secret"

    controller = AppController(settings, clipboard=MemoryClipboard())

    assert controller.ensure_ready() is True
    assert isinstance(controller.store, StoreRestAdapter)


def test_local_backend_uses_configured_dir(tmp_path) -> None:
    settings = SettingsVM()
    settings.data_dir = str(tmp_path)

    controller = AppController(settings, clipboard=MemoryClipboard())

    assert controller.ensure_ready() is True
    assert isinstance(controller.store, StoreLocal)
    assert controller.store.root == tmp_path


def test_reset_forces_rebuild_from_current_settings(tmp_path) -> None:
    settings = SettingsVM()
    settings.data_dir = str(tmp_path)
    controller = AppController(settings, clipboard=MemoryClipboard())
    controller.ensure_ready()

    settings.store_backend = "mock"
    controller.reset()

    assert controller.store is None
    assert controller.uc_load is None
    assert controller.ensure_ready() is True
    assert isinstance(controller.store, StoreMock)


def test_store_override_takes_precedence_over_backend() -> None:
    store = StoreMock()
    controller = AppController(SettingsVM(), store=store, clipboard=MemoryClipboard())

    assert controller.ensure_ready() is True
    assert controller.store is store
    assert controller.uc_load.store is store
