"""Listener registry implementing the store "data changed" channel."""

from __future__ import annotations

import logging
import threading
from typing import List

from vaul.domain.ports import ChangeListener, Unsubscribe


class ChangeNotifier:
    """Keep subscribed listeners and fan out change notifications.

    Listeners run synchronously on the thread that performed the mutation.
    A failing listener is logged and does not stop the others.
    """

    def __init__(self) -> None:
        self._listeners: List[ChangeListener] = []
        self._listeners_lock = threading.Lock()
        self._notify_log = logging.getLogger(__name__)

    def subscribe(self, listener: ChangeListener) -> Unsubscribe:
        with self._listeners_lock:
            self._listeners.append(listener)

        def _unsubscribe() -> None:
            with self._listeners_lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return _unsubscribe

    def notify_changed(self) -> None:
        with self._listeners_lock:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener()
            except Exception:
                self._notify_log.exception("Change listener failed")


__all__ = ["ChangeNotifier"]
