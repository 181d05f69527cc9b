"""Category manager dialog: inline edit, delete with reassignment, and merge.

UI-only. Each row is drawn according to the ``RowState`` computed by
``CategoryManagerVM``; every button forwards the category id to a callback.
"""

from __future__ import annotations

import tkinter as tk
from tkinter import ttk
from typing import Callable, List, Optional, Sequence, Tuple

from ...domain.entities import CategoryId, CategoryRef
from ...viewmodels.category_manager_vm import CategoryManagerRow, EditBuffer, RowState
from .view_utils import center_over_parent, safe_call

ReassignOption = Tuple[str, CategoryRef]
MergeOption = Tuple[CategoryId, str]


class CategoryManagerDialog(tk.Toplevel):
    OnVoid = Optional[Callable[[], None]]
    OnId = Optional[Callable[[CategoryId], None]]
    OnText = Optional[Callable[[str], None]]

    def __init__(
        self,
        parent: tk.Widget,
        *,
        on_begin_edit: OnId = None,
        on_edit_name: OnText = None,
        on_edit_color: OnText = None,
        on_save_edit: OnVoid = None,
        on_cancel_edit: OnVoid = None,
        on_request_delete: OnId = None,
        on_confirm_delete: Optional[Callable[[CategoryId, CategoryRef], None]] = None,
        on_cancel_delete: OnVoid = None,
        on_request_merge: OnId = None,
        on_confirm_merge: Optional[Callable[[CategoryId, CategoryId], None]] = None,
        on_cancel_merge: OnVoid = None,
        on_close: OnVoid = None,
    ) -> None:
        super().__init__(parent)
        self.title("Manage Categories")
        self.transient(parent)

        self._on_begin_edit = on_begin_edit
        self._on_edit_name = on_edit_name
        self._on_edit_color = on_edit_color
        self._on_save_edit = on_save_edit
        self._on_cancel_edit = on_cancel_edit
        self._on_request_delete = on_request_delete
        self._on_confirm_delete = on_confirm_delete
        self._on_cancel_delete = on_cancel_delete
        self._on_request_merge = on_request_merge
        self._on_confirm_merge = on_confirm_merge
        self._on_cancel_merge = on_cancel_merge
        self._on_close = on_close

        self.columnconfigure(0, weight=1)
        self.rows_host = ttk.Frame(self, padding=12)
        self.rows_host.grid(row=0, column=0, sticky="nsew")
        self.rows_host.columnconfigure(0, weight=1)

        self.error_var = tk.StringVar(value="")
        ttk.Label(self, textvariable=self.error_var, style="Error.TLabel").grid(
            row=1, column=0, sticky="w", padx=12
        )
        footer = ttk.Frame(self, padding=(12, 6))
        footer.grid(row=2, column=0, sticky="ew")
        ttk.Button(footer, text="Close", command=self._on_close_clicked).pack(side="right")

        self.protocol("WM_DELETE_WINDOW", self._on_close_clicked)
        self.update_idletasks()
        self.geometry(center_over_parent(parent, 560, 440))

    # ------------------------------------------------------------------
    def render(
        self,
        rows: Sequence[CategoryManagerRow],
        *,
        edit: Optional[EditBuffer] = None,
        merge_options: Sequence[MergeOption] = (),
        reassign_options: Sequence[ReassignOption] = (),
        error: str = "",
    ) -> None:
        for child in list(self.rows_host.winfo_children()):
            child.destroy()
        self.error_var.set(error or "")

        if not rows:
            ttk.Label(self.rows_host, text="No categories yet.", style="Subtle.TLabel").grid(row=0, column=0, pady=16)
            return

        for index, row in enumerate(rows):
            frame = ttk.Frame(self.rows_host, style="Card.TFrame", padding=(10, 6))
            frame.grid(row=index, column=0, sticky="ew", pady=2)
            frame.columnconfigure(1, weight=1)
            if row.state is RowState.EDITING and edit is not None:
                self._render_editing(frame, edit)
            elif row.state is RowState.CONFIRMING_DELETE:
                self._render_confirm_delete(frame, row, reassign_options)
            elif row.state is RowState.CHOOSING_MERGE_TARGET:
                self._render_merge(frame, row, merge_options)
            else:
                self._render_normal(frame, row)

    def _swatch(self, parent: tk.Widget, color: str) -> tk.Frame:
        return tk.Frame(parent, width=12, height=12, bg=color or "#78b4ff")

    def _render_normal(self, frame: ttk.Frame, row: CategoryManagerRow) -> None:
        self._swatch(frame, row.color).grid(row=0, column=0, padx=(0, 8))
        ttk.Label(frame, text=row.name, style="Card.TLabel").grid(row=0, column=1, sticky="w")
        ttk.Label(frame, text=row.count_label, style="Card.TLabel").grid(row=0, column=2, padx=8)
        cid = row.category_id
        ttk.Button(frame, text="Edit", command=lambda: safe_call(self._on_begin_edit, cid)).grid(row=0, column=3)
        ttk.Button(frame, text="Merge", command=lambda: safe_call(self._on_request_merge, cid)).grid(
            row=0, column=4, padx=(4, 0)
        )
        ttk.Button(
            frame, text="Delete", style="Danger.TButton", command=lambda: safe_call(self._on_request_delete, cid)
        ).grid(row=0, column=5, padx=(4, 0))

    def _render_editing(self, frame: ttk.Frame, edit: EditBuffer) -> None:
        name_var = tk.StringVar(value=edit.name)
        color_var = tk.StringVar(value=edit.color)
        name_var.trace_add("write", lambda *_: safe_call(self._on_edit_name, name_var.get()))
        color_var.trace_add("write", lambda *_: safe_call(self._on_edit_color, color_var.get()))

        self._swatch(frame, edit.color).grid(row=0, column=0, padx=(0, 8))
        name_entry = ttk.Entry(frame, textvariable=name_var)
        name_entry.grid(row=0, column=1, sticky="ew")
        name_entry.bind("<Return>", lambda e: safe_call(self._on_save_edit))
        name_entry.bind("<Escape>", lambda e: safe_call(self._on_cancel_edit))
        ttk.Entry(frame, textvariable=color_var, width=9).grid(row=0, column=2, padx=(6, 0))
        ttk.Button(frame, text="Save", style="Primary.TButton", command=lambda: safe_call(self._on_save_edit)).grid(
            row=0, column=3, padx=(6, 0)
        )
        ttk.Button(frame, text="Cancel", command=lambda: safe_call(self._on_cancel_edit)).grid(
            row=0, column=4, padx=(4, 0)
        )
        name_entry.focus_set()
        # keep the vars alive as long as the row widgets
        frame._vars = (name_var, color_var)  # type: ignore[attr-defined]

    def _render_confirm_delete(
        self, frame: ttk.Frame, row: CategoryManagerRow, options: Sequence[ReassignOption]
    ) -> None:
        ttk.Label(frame, text=f"Delete '{row.name}'? Move its commands to:", style="Card.TLabel").grid(
            row=0, column=0, columnspan=2, sticky="w"
        )
        choices: List[ReassignOption] = list(options)
        target = ttk.Combobox(frame, values=[label for label, _ in choices], state="readonly", width=20)
        if choices:
            target.current(0)
        target.grid(row=0, column=2, padx=(6, 0))

        def _confirm() -> None:
            index = target.current()
            if 0 <= index < len(choices):
                safe_call(self._on_confirm_delete, row.category_id, choices[index][1])

        ttk.Button(frame, text="Delete", style="Danger.TButton", command=_confirm).grid(row=0, column=3, padx=(6, 0))
        ttk.Button(frame, text="Cancel", command=lambda: safe_call(self._on_cancel_delete)).grid(
            row=0, column=4, padx=(4, 0)
        )

    def _render_merge(self, frame: ttk.Frame, row: CategoryManagerRow, options: Sequence[MergeOption]) -> None:
        ttk.Label(frame, text=f"Merge '{row.name}' into:", style="Card.TLabel").grid(row=0, column=0, sticky="w")
        col = 1
        for target_id, target_name in options:
            ttk.Button(
                frame,
                text=target_name,
                command=lambda tid=target_id: safe_call(self._on_confirm_merge, row.category_id, tid),
            ).grid(row=0, column=col, padx=(4, 0))
            col += 1
        ttk.Button(frame, text="Cancel", command=lambda: safe_call(self._on_cancel_merge)).grid(
            row=0, column=col, padx=(8, 0)
        )

    def _on_close_clicked(self) -> None:
        safe_call(self._on_close)
        try:
            if self.winfo_exists():
                self.destroy()
        except tk.TclError:
            pass


__all__ = ["CategoryManagerDialog", "MergeOption", "ReassignOption"]
