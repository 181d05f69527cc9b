from __future__ import annotations

import tkinter as tk
from tkinter import colorchooser, ttk
from typing import Callable, Optional

from .view_utils import center_over_parent, safe_call


class CreateCategoryDialog(tk.Toplevel):
    """Modal "Create New Category" form (UI-only)."""

    OnVoid = Optional[Callable[[], None]]
    OnText = Optional[Callable[[str], None]]

    def __init__(
        self,
        parent: tk.Widget,
        *,
        name: str = "",
        color: str = "",
        on_name_changed: OnText = None,
        on_color_changed: OnText = None,
        on_submit: OnVoid = None,
        on_close: OnVoid = None,
    ) -> None:
        super().__init__(parent)
        self.title("Create New Category")
        self.transient(parent)
        self.resizable(False, False)

        self._on_name_changed = on_name_changed
        self._on_color_changed = on_color_changed
        self._on_submit = on_submit
        self._on_close = on_close

        self.name_var = tk.StringVar(value=name)
        self.color_var = tk.StringVar(value=color)
        self.error_var = tk.StringVar(value="")

        self._build_ui()
        self.name_var.trace_add("write", lambda *_: safe_call(self._on_name_changed, self.name_var.get()))
        self.color_var.trace_add("write", lambda *_: safe_call(self._on_color_changed, self.color_var.get()))

        self.protocol("WM_DELETE_WINDOW", lambda: safe_call(self._on_close))
        self.bind("<Return>", lambda e: safe_call(self._on_submit))
        self.bind("<Escape>", lambda e: safe_call(self._on_close))

        self.update_idletasks()
        self.geometry(center_over_parent(parent, 380, 200))
        self.grab_set()
        self._name_entry.focus_set()

    def _build_ui(self) -> None:
        pad = dict(padx=12, pady=6)
        form = ttk.Frame(self)
        form.grid(row=0, column=0, sticky="nsew", **pad)
        form.columnconfigure(1, weight=1)

        ttk.Label(form, text="Name").grid(row=0, column=0, sticky="w")
        self._name_entry = ttk.Entry(form, textvariable=self.name_var, width=30)
        self._name_entry.grid(row=0, column=1, columnspan=2, sticky="ew", padx=(8, 0))

        ttk.Label(form, text="Color").grid(row=1, column=0, sticky="w", pady=(8, 0))
        ttk.Entry(form, textvariable=self.color_var, width=10).grid(row=1, column=1, sticky="w", padx=(8, 0), pady=(8, 0))
        ttk.Button(form, text="Pick…", command=self._pick_color).grid(row=1, column=2, sticky="w", pady=(8, 0))

        ttk.Label(form, textvariable=self.error_var, style="Error.TLabel").grid(
            row=2, column=0, columnspan=3, sticky="w", pady=(8, 0)
        )

        footer = ttk.Frame(self)
        footer.grid(row=1, column=0, sticky="ew", **pad)
        self._btn_submit = ttk.Button(
            footer, text="Create Category", style="Primary.TButton", command=lambda: safe_call(self._on_submit)
        )
        self._btn_submit.pack(side="right", padx=(6, 0))
        self._btn_cancel = ttk.Button(footer, text="Cancel", command=lambda: safe_call(self._on_close))
        self._btn_cancel.pack(side="right")

    def _pick_color(self) -> None:
        _rgb, hex_color = colorchooser.askcolor(color=self.color_var.get() or None, parent=self)
        if hex_color:
            self.color_var.set(hex_color)

    # ------------------------------------------------------------------
    # Public setters driven by CreateCategoryVM
    # ------------------------------------------------------------------
    def set_error(self, message: str) -> None:
        self.error_var.set(message or "")

    def set_submit_state(self, label: str, enabled: bool) -> None:
        self._btn_submit.configure(text=label, state=tk.NORMAL if enabled else tk.DISABLED)

    def set_cancel_enabled(self, enabled: bool) -> None:
        self._btn_cancel.configure(state=tk.NORMAL if enabled else tk.DISABLED)


__all__ = ["CreateCategoryDialog"]
