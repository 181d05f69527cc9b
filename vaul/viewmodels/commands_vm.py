from __future__ import annotations

import logging
from typing import Callable, Optional, Protocol, Set

from ..domain.entities import CategoryRef, Command, CommandId
from ..domain.ports import UseCaseError

COPY_FEEDBACK_MS = 2000
TRAY_COPY_FEEDBACK_MS = 1500


class TimerScheduler(Protocol):
    def schedule(self, key: str, delay_ms: int, callback: Callable[[], None]) -> None: ...
    def cancel(self, key: str) -> None: ...


class CommandsVM:
    """Command entry, copy feedback and deletion for one window.

    Rows are either normal or showing copy feedback; feedback reverts on its
    own after ``feedback_ms``. Each row runs its own timer.
    """

    def __init__(
        self,
        *,
        add_command: Optional[Callable[[str, Optional[CategoryRef]], Command]] = None,
        delete_command: Optional[Callable[[CommandId], None]] = None,
        copy_command: Optional[Callable[[Command], None]] = None,
        scheduler: Optional[TimerScheduler] = None,
        feedback_ms: int = COPY_FEEDBACK_MS,
        on_reload: Optional[Callable[[], None]] = None,
        on_changed: Optional[Callable[[], None]] = None,
    ) -> None:
        self._log = logging.getLogger(__name__)
        self.add_command = add_command
        self.delete_command = delete_command
        self.copy_command = copy_command
        self.scheduler = scheduler
        self.feedback_ms = int(feedback_ms)
        self.on_reload = on_reload
        self.on_changed = on_changed

        self.input_text: str = ""
        self.copied_ids: Set[CommandId] = set()
        self.error: str = ""

    # ------------------------------------------------------------------
    def set_input(self, text: str) -> None:
        self.input_text = text or ""

    def submit_new_command(
        self, text: Optional[str] = None, category: Optional[CategoryRef] = None
    ) -> Optional[Command]:
        """Store the entry text; blank text is ignored without calling the store.

        On success the input is cleared and a reload requested. On failure the
        input stays as typed and the error is re-raised.
        """
        raw = self.input_text if text is None else text
        if not (raw or "").strip():
            return None
        if self.add_command is None:
            raise RuntimeError("CommandsVM.add_command is not wired")
        try:
            created = self.add_command(raw.strip(), category)
        except UseCaseError as exc:
            self._fail("Failed to add command", exc)
            raise
        self._log.info("Added command %s", created.id)
        self.input_text = ""
        self.error = ""
        self._reload()
        self._notify()
        return created

    def copy(self, command: Command) -> None:
        if self.copy_command is None:
            raise RuntimeError("CommandsVM.copy_command is not wired")
        try:
            self.copy_command(command)
        except UseCaseError as exc:
            self._fail("Failed to copy", exc)
            raise
        self.error = ""
        self.copied_ids.add(command.id)
        if self.scheduler is not None:
            self.scheduler.schedule(
                command.id, self.feedback_ms, lambda cid=command.id: self._clear_feedback(cid)
            )
        self._notify()

    def delete(self, command_id: CommandId) -> None:
        """Delete through the store; the row only disappears after the reload."""
        if self.delete_command is None:
            raise RuntimeError("CommandsVM.delete_command is not wired")
        try:
            self.delete_command(command_id)
        except UseCaseError as exc:
            self._fail("Failed to delete command", exc)
            raise
        self._log.info("Deleted command %s", command_id)
        self.error = ""
        self._reload()

    def is_copied(self, command_id: CommandId) -> bool:
        return command_id in self.copied_ids

    # ------------------------------------------------------------------
    def _clear_feedback(self, command_id: CommandId) -> None:
        if command_id in self.copied_ids:
            self.copied_ids.discard(command_id)
            self._notify()

    def _fail(self, label: str, exc: UseCaseError) -> None:
        self.error = exc.message
        self._log.warning("%s (%s): %s", label, exc.code, exc.message)
        self._notify()

    def _reload(self) -> None:
        if self.on_reload:
            self.on_reload()

    def _notify(self) -> None:
        if self.on_changed:
            self.on_changed()


__all__ = ["COPY_FEEDBACK_MS", "TRAY_COPY_FEEDBACK_MS", "CommandsVM", "TimerScheduler"]
