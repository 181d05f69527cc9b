# vaul/app/main.py
from __future__ import annotations

import argparse
import logging
from typing import Dict, List, Optional, Sequence

# ---- Views (UI-only) ----
from .views.main_window import CategoryOption, MainWindowView
from .views.create_category_dialog import CreateCategoryDialog
from .views.category_manager_dialog import CategoryManagerDialog
from .views.tray_window import TrayWindowView

# ---- ViewModels ----
from ..viewmodels.library_vm import LibraryVM
from ..viewmodels.commands_vm import CommandsVM
from ..viewmodels.create_category_vm import CreateCategoryVM
from ..viewmodels.category_manager_vm import CategoryManagerVM
from ..viewmodels.settings_vm import SettingsVM

# ---- Wiring ----
from .controller import AppController
from .feedback_scheduler import FeedbackScheduler
from .library_presenter import LibraryPresenter
from ..adapters.settings_local import SettingsLocal
from ..adapters.api_errors import ApiError
from ..domain.entities import UNCATEGORIZED, UNCATEGORIZED_LABEL, CategoryId, CategoryRef, Command, CommandId
from ..domain.ports import UseCaseError
from ..utils import logging as logging_utils


class App:
    """Bootstrap: wire Views <-> ViewModels, the store adapter, and reloads."""

    def __init__(self, *, mock: bool = False, data_dir: Optional[str] = None) -> None:
        self._log = logging.getLogger(__name__)
        self.settings_vm = SettingsVM()
        self._settings_store = SettingsLocal(root_dir=data_dir)
        self._load_user_settings()
        if data_dir:
            self.settings_vm.data_dir = data_dir
        if mock:
            self.settings_vm.store_backend = "mock"

        self.controller = AppController(self.settings_vm)
        self._ensure_store()

        # Main window with callback wiring
        self.win = MainWindowView(
            on_search_changed=lambda text: self.library_vm.set_search_query(text),
            on_pill_clicked=lambda ref: self.library_vm.set_active_category(ref),
            on_toggle_section=lambda ref: self.library_vm.toggle_collapsed(ref),
            on_input_changed=lambda text: self.commands_vm.set_input(text),
            on_submit=self._on_submit,
            on_category_selected=lambda ref: self.library_vm.set_selected_category(ref),
            on_category_search=self._on_category_search,
            on_new_category=self._on_new_category,
            on_pill_delete=self._on_pill_delete,
            on_manage_categories=self._on_manage_categories,
            on_copy=self._on_copy,
            on_delete=self._on_delete,
            on_open_tray=self._on_open_tray,
            on_close=self._on_close,
        )
        self._category_term = ""
        self._feedback = FeedbackScheduler(self.win.after, self.win.after_cancel)

        self.presenter = LibraryPresenter(
            controller=self.controller,
            marshal=lambda fn: self.win.after(0, fn),
            on_error=lambda exc: self._toast_error(exc, context="Reload"),
        )

        # ---- ViewModels ----
        self.library_vm = LibraryVM(matcher=self.controller.matcher, on_changed=self._on_library_changed)
        self.commands_vm = CommandsVM(
            add_command=self.controller.uc_add_command,
            delete_command=self.controller.uc_delete_command,
            copy_command=self.controller.uc_copy_command,
            scheduler=self._feedback,
            feedback_ms=self.settings_vm.copy_feedback_ms,
            on_reload=self.presenter.reload,
            on_changed=self._render_main,
        )
        self.create_vm = CreateCategoryVM(
            create_category=self.controller.uc_create_category,
            on_created=self._on_category_created,
            on_reload=self.presenter.reload,
        )
        self.manager_vm = CategoryManagerVM(
            update_category=self.controller.uc_update_category,
            delete_category=self.controller.uc_delete_category,
            merge_categories=self.controller.uc_merge_categories,
            on_reload=self.presenter.reload,
            on_changed=self._render_manager,
        )
        self.presenter.attach(self.library_vm)

        self._create_dialog: Optional[CreateCategoryDialog] = None
        self._manager_dialog: Optional[CategoryManagerDialog] = None
        self._tray: Optional[TrayWindowView] = None
        self._tray_vm: Optional[LibraryVM] = None
        self._tray_commands_vm: Optional[CommandsVM] = None
        self._tray_feedback: Optional[FeedbackScheduler] = None

        self.presenter.start()
        self._render_main()

    # ==================================================================
    # Settings & wiring
    # ==================================================================
    def _load_user_settings(self) -> None:
        payload: Optional[Dict] = None
        try:
            payload = self._settings_store.load_user_settings()
        except (OSError, ValueError) as exc:
            self._log.warning("Could not load settings from %s: %s", self._settings_store.path, exc)
        if payload is None:
            self._write_default_settings()
        else:
            try:
                self.settings_vm.apply_dict(payload)
            except ValueError as exc:
                self._log.warning("Ignoring invalid settings: %s", exc)
        self._apply_logging_preferences()

    def _write_default_settings(self) -> None:
        if self._settings_store.path.exists():
            return
        try:
            self._settings_store.save_user_settings(self.settings_vm.to_dict())
        except OSError as exc:
            self._log.warning("Could not write default settings: %s", exc)

    def _apply_logging_preferences(self) -> None:
        level = logging_utils.apply_gui_preferences(self.settings_vm.debug_logging)
        self._log.debug("Effective GUI log level: %s", logging_utils.level_name(level))

    def _ensure_store(self) -> None:
        if self.controller.ensure_ready():
            return
        self._log.warning("Falling back to the local store; configure api_base_url to use REST")
        self.settings_vm.store_backend = "local"
        self.controller.reset()
        self.controller.ensure_ready()

    # ==================================================================
    # Main window
    # ==================================================================
    def _on_library_changed(self) -> None:
        self._render_main()
        self._render_manager()

    def _render_main(self) -> None:
        vm = self.library_vm
        self.win.set_search_visible(bool(vm.commands))
        self.win.render_pills(vm.pills())
        self.win.render_sections(
            vm.sections(),
            copied_ids=self.commands_vm.copied_ids,
            empty_text=vm.empty_state_label(),
        )
        self.win.set_footer(vm.footer_label())
        self.win.set_input_text(self.commands_vm.input_text)
        self._render_category_selector()

    def _render_category_selector(self) -> None:
        vm = self.library_vm
        options: List[CategoryOption] = [(UNCATEGORIZED_LABEL, UNCATEGORIZED)]
        options.extend((category.name, category.ref) for category in vm.filter_categories(self._category_term))
        self.win.set_category_options(options, vm.category_selector_label(vm.selected_category))

    def _on_category_search(self, term: str) -> None:
        self._category_term = term or ""
        self._render_category_selector()

    def _on_submit(self, text: str) -> None:
        try:
            self.commands_vm.submit_new_command(text, self.library_vm.selected_category)
        except UseCaseError as exc:
            self._toast_error(exc, context="Save")

    def _on_copy(self, command: Command) -> None:
        try:
            self.commands_vm.copy(command)
        except UseCaseError as exc:
            self._toast_error(exc)

    def _on_delete(self, command_id: CommandId) -> None:
        try:
            self.commands_vm.delete(command_id)
        except UseCaseError as exc:
            self._toast_error(exc, context="Delete")

    # ==================================================================
    # Create category dialog
    # ==================================================================
    def _on_new_category(self) -> None:
        if self._create_dialog is not None:
            self._create_dialog.lift()
            return
        self.create_vm.open()
        self._create_dialog = CreateCategoryDialog(
            self.win,
            name=self.create_vm.name,
            color=self.create_vm.color,
            on_name_changed=self._on_create_name_changed,
            on_color_changed=self.create_vm.set_color,
            on_submit=self._on_create_submit,
            on_close=self._on_create_close,
        )
        self._render_create_dialog()

    def _render_create_dialog(self) -> None:
        dlg = self._create_dialog
        if dlg is None:
            return
        dlg.set_error(self.create_vm.error)
        dlg.set_submit_state(self.create_vm.submit_label, self.create_vm.can_submit)
        dlg.set_cancel_enabled(not self.create_vm.is_creating)

    def _on_create_name_changed(self, text: str) -> None:
        self.create_vm.set_name(text)
        self._render_create_dialog()

    def _on_create_submit(self) -> None:
        dlg = self._create_dialog
        if dlg is None:
            return
        dlg.set_submit_state("Creating...", False)
        dlg.update_idletasks()
        try:
            self.create_vm.submit()
        except UseCaseError as exc:
            self._log.debug("Create category rejected: %s", exc.message)
            self._render_create_dialog()
            return
        self._destroy_create_dialog()

    def _on_create_close(self) -> None:
        if self.create_vm.close():
            self._destroy_create_dialog()

    def _destroy_create_dialog(self) -> None:
        if self._create_dialog is not None:
            self._create_dialog.grab_release()
            self._create_dialog.destroy()
            self._create_dialog = None

    def _on_category_created(self, category_id: CategoryId) -> None:
        self.library_vm.set_selected_category(CategoryRef.of(category_id))

    # ==================================================================
    # Category manager dialog
    # ==================================================================
    def _on_manage_categories(self) -> None:
        if self._manager_dialog is not None:
            self._manager_dialog.lift()
            return
        self._manager_dialog = CategoryManagerDialog(
            self.win,
            on_begin_edit=self._on_begin_edit,
            on_edit_name=self.manager_vm.set_edit_name,
            on_edit_color=self.manager_vm.set_edit_color,
            on_save_edit=lambda: self._manager_call(self.manager_vm.save_edit),
            on_cancel_edit=self.manager_vm.cancel_edit,
            on_request_delete=self.manager_vm.request_delete,
            on_confirm_delete=lambda cid, ref: self._manager_call(self.manager_vm.confirm_delete, cid, ref),
            on_cancel_delete=self.manager_vm.cancel_delete,
            on_request_merge=self.manager_vm.request_merge,
            on_confirm_merge=lambda src, tgt: self._manager_call(self.manager_vm.confirm_merge, src, tgt),
            on_cancel_merge=self.manager_vm.cancel_merge,
            on_close=self._on_manager_closed,
        )
        self._render_manager()

    def _on_pill_delete(self, category_id: CategoryId) -> None:
        # Deletion is confirmed in the manager, which offers reassignment
        self._on_manage_categories()
        self.manager_vm.request_delete(category_id)

    def _render_manager(self) -> None:
        dlg = self._manager_dialog
        if dlg is None:
            return
        categories = self.library_vm.categories
        active_id = self.manager_vm.active_id
        dlg.render(
            self.manager_vm.rows(categories, self.library_vm.counts),
            edit=self.manager_vm.edit,
            merge_options=[(c.id, c.name) for c in self.manager_vm.merge_candidates(categories)],
            reassign_options=[(UNCATEGORIZED_LABEL, UNCATEGORIZED)]
            + [(c.name, c.ref) for c in categories if c.id != active_id],
            error=self.manager_vm.error,
        )

    def _on_begin_edit(self, category_id: CategoryId) -> None:
        category = self.library_vm.category_for(CategoryRef.of(category_id))
        if category is not None:
            self.manager_vm.begin_edit(category)

    def _manager_call(self, fn, *args) -> None:
        try:
            fn(*args)
        except UseCaseError as exc:
            self._toast_error(exc)

    def _on_manager_closed(self) -> None:
        self.manager_vm.reset()
        self._manager_dialog = None

    # ==================================================================
    # Tray window
    # ==================================================================
    def _on_open_tray(self) -> None:
        if self._tray is not None:
            self._tray.lift()
            return
        self._tray = TrayWindowView(
            self.win,
            on_search_changed=self._on_tray_search,
            on_copy=self._on_tray_copy,
            on_close=self._on_tray_closed,
        )
        self._tray_feedback = FeedbackScheduler(self._tray.after, self._tray.after_cancel)
        self._tray_commands_vm = CommandsVM(
            copy_command=self.controller.uc_copy_command,
            scheduler=self._tray_feedback,
            feedback_ms=self.settings_vm.tray_copy_feedback_ms,
            on_changed=self._render_tray,
        )
        self._tray_vm = LibraryVM(matcher=self.controller.matcher, on_changed=self._render_tray)
        self._tray_vm.apply_snapshot(self._tray_vm.begin_reload(), self.library_vm.snapshot)
        self.presenter.attach(self._tray_vm)

    def _on_tray_search(self, text: str) -> None:
        if self._tray_vm is not None:
            self._tray_vm.set_search_query(text)

    def _render_tray(self) -> None:
        if self._tray is None or self._tray_vm is None or self._tray_commands_vm is None:
            return
        self._tray.render(
            self._tray_vm.filtered,
            copied_ids=self._tray_commands_vm.copied_ids,
            empty_text=self._tray_vm.empty_state_label(),
            footer=self._tray_vm.footer_label(),
        )

    def _on_tray_copy(self, command: Command) -> None:
        if self._tray_commands_vm is None:
            return
        try:
            self._tray_commands_vm.copy(command)
        except UseCaseError as exc:
            self._toast_error(exc)

    def _on_tray_closed(self) -> None:
        if self._tray_feedback is not None:
            self._tray_feedback.cancel_all()
        if self._tray_vm is not None:
            self.presenter.detach(self._tray_vm)
        self._tray = None
        self._tray_vm = None
        self._tray_commands_vm = None
        self._tray_feedback = None

    # ==================================================================
    # Lifecycle & error handling helpers
    # ==================================================================
    def _on_close(self) -> None:
        self._feedback.cancel_all()
        if self._tray_feedback is not None:
            self._tray_feedback.cancel_all()
        self.presenter.stop()

    def _toast_error(self, err: Exception, *, context: Optional[str] = None) -> None:
        message = self._format_error_message(err)
        if context:
            message = f"{context}: {message}"
        self.win.show_toast(message)

    def _format_error_message(self, err: Exception) -> str:
        if isinstance(err, UseCaseError):
            self._log.warning("UseCase error (%s): %s", err.code, err.message)
            return err.message
        if isinstance(err, ApiError):
            self._log.warning("API error (%s): %s", getattr(err, "context", ""), err)
            return str(err)
        self._log.exception("Unexpected error")
        return str(err)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="vaul", description="Command vault desktop app")
    parser.add_argument("--mock", action="store_true", help="use the in-memory store (nothing is saved)")
    parser.add_argument("--data-dir", metavar="DIR", default=None, help="directory holding commands and settings")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = build_arg_parser().parse_args(argv)
    logging_utils.configure_root()
    app = App(mock=args.mock, data_dir=args.data_dir)
    app.win.mainloop()


if __name__ == "__main__":
    main()
