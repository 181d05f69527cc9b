"""Presenter that keeps every LibraryVM in sync with the store."""

from __future__ import annotations

import logging
from typing import Callable, List, Optional

from ..domain.ports import UseCaseError, Unsubscribe
from ..viewmodels.library_vm import LibraryVM
from .controller import AppController

MarshalFn = Callable[[Callable[[], None]], None]


def _call_inline(fn: Callable[[], None]) -> None:
    fn()


class LibraryPresenter:
    """Reload commands and categories into the attached view models.

    Call chain:
        ``App`` attaches the main window VM and, when opened, the tray VM.
        ``CommandsVM``/``CategoryManagerVM``/``CreateCategoryVM`` call
        :meth:`reload` after their mutations; store change notifications
        are marshalled onto the UI thread and trigger the same reload.
    """

    def __init__(
        self,
        *,
        controller: AppController,
        marshal: Optional[MarshalFn] = None,
        on_error: Optional[Callable[[UseCaseError], None]] = None,
    ) -> None:
        self._log = logging.getLogger(__name__)
        self.controller = controller
        self._marshal = marshal or _call_inline
        self._on_error = on_error
        self._vms: List[LibraryVM] = []
        self._unsubscribe: Optional[Unsubscribe] = None
        self.last_error: Optional[UseCaseError] = None

    def attach(self, vm: LibraryVM) -> None:
        if vm not in self._vms:
            self._vms.append(vm)

    def detach(self, vm: LibraryVM) -> None:
        if vm in self._vms:
            self._vms.remove(vm)

    def start(self) -> bool:
        """Subscribe to store changes and run the initial load."""
        if not self.controller.ensure_ready():
            self._log.warning("Store is not configured; library stays empty")
            return False
        self.stop()
        store = self.controller.store
        if store is not None:
            self._unsubscribe = store.subscribe(self._on_store_changed)
        self.reload()
        return True

    def stop(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def reload(self) -> bool:
        """Fetch both lists and hand the snapshot to every attached VM.

        A failed load is logged and leaves the previous lists in place.
        """
        if not self.controller.ensure_ready() or self.controller.uc_load is None:
            return False
        tokens = [(vm, vm.begin_reload()) for vm in self._vms]
        try:
            snapshot = self.controller.uc_load()
        except UseCaseError as exc:
            self.last_error = exc
            self._log.warning("Reload failed (%s): %s", exc.code, exc.message)
            if self._on_error:
                self._on_error(exc)
            return False
        self.last_error = None
        for vm, token in tokens:
            vm.apply_snapshot(token, snapshot)
        return True

    def _on_store_changed(self) -> None:
        self._log.debug("Store reported a change; scheduling reload")
        self._marshal(self.reload)


__all__ = ["LibraryPresenter"]
