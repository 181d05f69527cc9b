"""Scheduler helper that owns the copy-feedback timers of one window.

The app passes Tk ``after`` and ``after_cancel`` callables into this class so
every "Copied!" timer is tracked per command id and can be canceled safely
when the row is copied again or the window closes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Optional

ScheduleFn = Callable[[int, Callable[[], None]], str]
CancelFn = Callable[[str], None]


@dataclass
class FeedbackHandle:
    """Timer token associated with a single feedback key.

    Attributes:
        key: Command id the feedback belongs to.
        token: Scheduler token returned by the UI scheduler implementation.
    """
    key: str
    token: str


class FeedbackScheduler:
    """Manage per-row one-shot timers using a UI scheduler (for example Tk)."""

    def __init__(self, schedule: ScheduleFn, cancel: CancelFn) -> None:
        """Store schedule/cancel functions and initialize the handle registry.

        Args:
            schedule: Function compatible with ``after(delay_ms, callback)``.
            cancel: Function compatible with ``after_cancel(token)``.
        """
        self._log = logging.getLogger(__name__)
        self._schedule = schedule
        self._cancel = cancel
        self._handles: Dict[str, FeedbackHandle] = {}

    def schedule(self, key: str, delay_ms: int, callback: Callable[[], None]) -> None:
        """Schedule ``callback`` for ``key``, replacing any pending timer."""
        delay = max(1, int(delay_ms))
        self.cancel(key)

        def _fire() -> None:
            handle = self._handles.get(key)
            if handle is not None and handle.token == token:
                del self._handles[key]
            callback()

        token = self._schedule(delay, _fire)
        self._handles[key] = FeedbackHandle(key=key, token=token)

    def cancel(self, key: str) -> None:
        handle = self._handles.pop(key, None)
        if not handle:
            return
        try:
            self._cancel(handle.token)
        except Exception as exc:  # TclError for ids that already fired
            self._log.debug("Timer for %s already gone: %s", key, exc)

    def cancel_all(self) -> None:
        """Cancel all pending timers, e.g. when the window is destroyed."""
        for key in list(self._handles.keys()):
            self.cancel(key)

    def handle_for(self, key: str) -> Optional[FeedbackHandle]:
        """Return the current handle for a key, if scheduled."""
        return self._handles.get(key)


__all__ = ["FeedbackHandle", "FeedbackScheduler"]
