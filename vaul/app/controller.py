"""Adapter and use-case wiring for the desktop app runtime.

This module owns lazy construction of the store adapter, the clipboard, the
fuzzy matcher and every use case, based on values in
:class:`vaul.viewmodels.settings_vm.SettingsVM`.
"""

from __future__ import annotations

import logging
from typing import Optional

from ..adapters.clipboard_pyperclip import PyperclipClipboard
from ..adapters.fuzzy_rapidfuzz import RapidFuzzMatcher
from ..adapters.store_local import StoreLocal
from ..adapters.store_mock import StoreMock
from ..adapters.store_rest import StoreRestAdapter
from ..domain.ports import ClipboardPort, MatcherPort, StorePort
from ..usecases.add_command import AddCommand
from ..usecases.copy_command import CopyCommand
from ..usecases.create_category import CreateCategory
from ..usecases.delete_category import DeleteCategory
from ..usecases.delete_command import DeleteCommand
from ..usecases.load_library import LoadLibrary
from ..usecases.merge_categories import MergeCategories
from ..usecases.update_category import UpdateCategory
from ..viewmodels.settings_vm import SettingsVM


class AppController:
    """Create and cache runtime adapters/use-cases from settings state.

    Call chain:
        ``vaul.app.main.App`` creates one instance and passes it to the
        presenter and the view models. They call ``ensure_ready`` before
        touching any use case.
    """

    def __init__(
        self,
        settings_vm: SettingsVM,
        *,
        store: Optional[StorePort] = None,
        clipboard: Optional[ClipboardPort] = None,
    ) -> None:
        """Initialize controller with settings-backed lazy dependencies.

        Args:
            settings_vm: Settings state holding the backend choice, data
                directory, API URL/key and timeouts.
            store: Optional store override used instead of the configured
                backend (tests pass a seeded ``StoreMock``).
            clipboard: Optional clipboard override (tests use
                ``MemoryClipboard``); defaults to pyperclip.
        """
        self._log = logging.getLogger(__name__)
        self.settings_vm = settings_vm
        self._store_override = store
        self._clipboard_override = clipboard
        self._store: Optional[StorePort] = None
        self._clipboard: Optional[ClipboardPort] = None
        self._matcher: Optional[MatcherPort] = None
        self.uc_load: Optional[LoadLibrary] = None
        self.uc_add_command: Optional[AddCommand] = None
        self.uc_delete_command: Optional[DeleteCommand] = None
        self.uc_copy_command: Optional[CopyCommand] = None
        self.uc_create_category: Optional[CreateCategory] = None
        self.uc_update_category: Optional[UpdateCategory] = None
        self.uc_delete_category: Optional[DeleteCategory] = None
        self.uc_merge_categories: Optional[MergeCategories] = None

    @property
    def store(self) -> Optional[StorePort]:
        """Return the cached store adapter."""
        return self._store

    @property
    def matcher(self) -> Optional[MatcherPort]:
        return self._matcher

    def reset(self) -> None:
        """Drop all cached adapters and use-cases.

        Side Effects:
            Clears runtime objects so the next ``ensure_ready`` call rebuilds
            everything from current settings values. Subscribers of the old
            store are not carried over.
        """
        self._store = None
        self._clipboard = None
        self._matcher = None
        self.uc_load = None
        self.uc_add_command = None
        self.uc_delete_command = None
        self.uc_copy_command = None
        self.uc_create_category = None
        self.uc_update_category = None
        self.uc_delete_category = None
        self.uc_merge_categories = None

    def ensure_ready(self) -> bool:
        """Ensure the store and use-cases exist.

        Returns:
            ``True`` when dependencies are available, ``False`` when the REST
            backend is selected without a base URL.
        """
        if self._store is not None and self.uc_load is not None:
            return True

        store = self._build_store()
        if store is None:
            return False
        self._store = store
        self._clipboard = self._clipboard_override or PyperclipClipboard()
        self._matcher = RapidFuzzMatcher(self.settings_vm.fuzzy_threshold)

        self.uc_load = LoadLibrary(store)
        self.uc_add_command = AddCommand(store)
        self.uc_delete_command = DeleteCommand(store)
        self.uc_copy_command = CopyCommand(self._clipboard)
        self.uc_create_category = CreateCategory(store)
        self.uc_update_category = UpdateCategory(store)
        self.uc_delete_category = DeleteCategory(store)
        self.uc_merge_categories = MergeCategories(store)
        return True

    def _build_store(self) -> Optional[StorePort]:
        if self._store_override is not None:
            return self._store_override
        backend = self.settings_vm.store_backend
        if backend == "mock":
            self._log.info("Using in-memory mock store")
            return StoreMock()
        if backend == "rest":
            base_url = self.settings_vm.api_base_url
            if not base_url:
                self._log.warning("REST store selected but no API base URL configured")
                return None
            self._log.info("Using REST store at %s", base_url)
            return StoreRestAdapter(
                base_url,
                api_key=self.settings_vm.api_key or None,
                request_timeout_s=self.settings_vm.request_timeout_s,
                retries=self.settings_vm.retries,
            )
        store = StoreLocal(root_dir=self.settings_vm.data_dir or None)
        self._log.info("Using local store at %s", store.root)
        return store


__all__ = ["AppController"]
