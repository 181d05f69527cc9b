from __future__ import annotations

import tkinter as tk
from tkinter import ttk
from typing import Callable, Collection, Optional, Sequence

from ...domain.entities import Command, CommandId
from .view_utils import safe_call


class TrayWindowView(tk.Toplevel):
    """Compact always-on-top quick-access list: search, click to copy."""

    def __init__(
        self,
        parent: tk.Widget,
        *,
        on_search_changed: Optional[Callable[[str], None]] = None,
        on_copy: Optional[Callable[[Command], None]] = None,
        on_close: Optional[Callable[[], None]] = None,
    ) -> None:
        super().__init__(parent)
        self.title("VAUL Quick Access")
        self.geometry("360x420")
        self.attributes("-topmost", True)

        self._on_search_changed = on_search_changed
        self._on_copy = on_copy
        self._on_close = on_close

        self.columnconfigure(0, weight=1)
        self.rowconfigure(1, weight=1)

        self.search_var = tk.StringVar(value="")
        search = ttk.Entry(self, textvariable=self.search_var)
        search.grid(row=0, column=0, sticky="ew", padx=8, pady=8)
        self.search_var.trace_add("write", lambda *_: safe_call(self._on_search_changed, self.search_var.get()))
        search.focus_set()

        self.list_host = ttk.Frame(self)
        self.list_host.grid(row=1, column=0, sticky="nsew", padx=8)
        self.list_host.columnconfigure(0, weight=1)

        self.footer_var = tk.StringVar(value="")
        ttk.Label(self, textvariable=self.footer_var, style="Subtle.TLabel").grid(
            row=2, column=0, sticky="w", padx=8, pady=(4, 8)
        )

        self.protocol("WM_DELETE_WINDOW", self._on_close_clicked)
        self.bind("<Escape>", lambda e: self._on_close_clicked())

    def render(
        self,
        commands: Sequence[Command],
        *,
        copied_ids: Collection[CommandId] = (),
        empty_text: str = "",
        footer: str = "",
    ) -> None:
        for child in list(self.list_host.winfo_children()):
            child.destroy()
        self.footer_var.set(footer)
        if not commands:
            ttk.Label(self.list_host, text=empty_text, style="Subtle.TLabel", justify="center").grid(
                row=0, column=0, pady=24
            )
            return
        for row, command in enumerate(commands):
            copied = command.id in copied_ids
            ttk.Button(
                self.list_host,
                text="Copied!" if copied else command.content,
                style="Copied.TButton" if copied else "TButton",
                command=lambda cmd=command: safe_call(self._on_copy, cmd),
            ).grid(row=row, column=0, sticky="ew", pady=1)

    def _on_close_clicked(self) -> None:
        safe_call(self._on_close)
        try:
            if self.winfo_exists():
                self.destroy()
        except tk.TclError:
            pass


__all__ = ["TrayWindowView"]
