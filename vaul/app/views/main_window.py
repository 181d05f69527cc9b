"""
MainWindowView
---------------
Tkinter main window of the command library. This file contains **only View
code**: no storage, no filtering logic. It renders the DTOs produced by
``LibraryVM`` and signals every interaction through constructor callbacks.

The window provides:
  * search box (shown once commands exist) and category pills with counts
  * entry form with category selector
  * grouped, collapsible command list
  * footer with the stored/shown count and a status message
"""
from __future__ import annotations

import tkinter as tk
from tkinter import ttk
from typing import Callable, Collection, List, Optional, Sequence, Tuple

from ...domain.entities import CategoryId, CategoryRef, Command, CommandId
from ...viewmodels.library_vm import PillRow, SectionRow
from .theme import apply_modern_theme
from .view_utils import safe_call

CategoryOption = Tuple[str, CategoryRef]


class MainWindowView(tk.Tk):
    """Top-level application window.

    UI-only: the app presenter pushes pills, sections and labels through the
    public ``set_*``/``render_*`` methods and receives user intent through
    the ``on_*`` callbacks.
    """

    OnVoid = Optional[Callable[[], None]]
    OnText = Optional[Callable[[str], None]]
    OnRef = Optional[Callable[[Optional[CategoryRef]], None]]

    def __init__(
        self,
        *,
        on_search_changed: OnText = None,
        on_pill_clicked: OnRef = None,
        on_pill_delete: Optional[Callable[[CategoryId], None]] = None,
        on_toggle_section: Optional[Callable[[CategoryRef], None]] = None,
        on_input_changed: OnText = None,
        on_submit: OnText = None,
        on_category_selected: OnRef = None,
        on_category_search: OnText = None,
        on_new_category: OnVoid = None,
        on_manage_categories: OnVoid = None,
        on_copy: Optional[Callable[[Command], None]] = None,
        on_delete: Optional[Callable[[CommandId], None]] = None,
        on_open_tray: OnVoid = None,
        on_close: OnVoid = None,
    ) -> None:
        super().__init__()
        apply_modern_theme(self)

        self.title("VAUL - Command Vault")
        self.geometry("760x720")
        self.minsize(520, 480)

        self._on_search_changed = on_search_changed
        self._on_pill_clicked = on_pill_clicked
        self._on_pill_delete = on_pill_delete
        self._on_toggle_section = on_toggle_section
        self._on_input_changed = on_input_changed
        self._on_submit = on_submit
        self._on_category_selected = on_category_selected
        self._on_category_search = on_category_search
        self._on_new_category = on_new_category
        self._on_manage_categories = on_manage_categories
        self._on_copy = on_copy
        self._on_delete = on_delete
        self._on_open_tray = on_open_tray
        self._on_close = on_close

        self._category_options: List[CategoryOption] = []

        self.rowconfigure(3, weight=1)
        self.columnconfigure(0, weight=1)

        self._build_header(self)
        self._build_filters(self)
        self._build_entry(self)
        self._build_list(self)
        self._build_statusbar(self)

        self.protocol("WM_DELETE_WINDOW", self._on_close_clicked)
        self.bind("<Control-f>", lambda e: self.search_entry.focus_set())

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------
    def _build_header(self, parent: tk.Widget) -> None:
        header = ttk.Frame(parent)
        header.grid(row=0, column=0, sticky="ew", padx=12, pady=(12, 4))
        header.columnconfigure(0, weight=1)
        ttk.Label(header, text="VAUL", style="Title.TLabel").grid(row=0, column=0, sticky="w")
        ttk.Button(header, text="Quick Access", command=lambda: safe_call(self._on_open_tray)).grid(
            row=0, column=1, padx=(6, 0)
        )
        ttk.Button(header, text="Manage Categories", command=lambda: safe_call(self._on_manage_categories)).grid(
            row=0, column=2, padx=(6, 0)
        )

    def _build_filters(self, parent: tk.Widget) -> None:
        filters = ttk.Frame(parent)
        filters.grid(row=1, column=0, sticky="ew", padx=12, pady=4)
        filters.columnconfigure(0, weight=1)

        self.search_var = tk.StringVar(value="")
        self.search_entry = ttk.Entry(filters, textvariable=self.search_var)
        self.search_entry.grid(row=0, column=0, sticky="ew")
        self.search_var.trace_add("write", lambda *_: safe_call(self._on_search_changed, self.search_var.get()))
        self._search_row = self.search_entry

        self.pills_frame = ttk.Frame(filters)
        self.pills_frame.grid(row=1, column=0, sticky="ew", pady=(6, 0))

    def _build_entry(self, parent: tk.Widget) -> None:
        entry = ttk.Frame(parent)
        entry.grid(row=2, column=0, sticky="ew", padx=12, pady=4)
        entry.columnconfigure(0, weight=1)

        self.input_var = tk.StringVar(value="")
        self.input_entry = ttk.Entry(entry, textvariable=self.input_var, font=("TkFixedFont", 10))
        self.input_entry.grid(row=0, column=0, sticky="ew")
        self.input_entry.bind("<Return>", lambda e: safe_call(self._on_submit, self.input_var.get()))
        self.input_var.trace_add("write", lambda *_: safe_call(self._on_input_changed, self.input_var.get()))

        self.category_var = tk.StringVar(value="Select category")
        self.category_box = ttk.Combobox(entry, textvariable=self.category_var, width=22)
        self.category_box.grid(row=0, column=1, padx=(6, 0))
        self.category_box.bind("<<ComboboxSelected>>", self._on_category_chosen)
        self.category_box.bind(
            "<KeyRelease>", lambda e: safe_call(self._on_category_search, self.category_var.get())
        )

        ttk.Button(entry, text="+", width=3, command=lambda: safe_call(self._on_new_category)).grid(
            row=0, column=2, padx=(6, 0)
        )
        ttk.Button(
            entry,
            text="Save",
            style="Primary.TButton",
            command=lambda: safe_call(self._on_submit, self.input_var.get()),
        ).grid(row=0, column=3, padx=(6, 0))

    def _build_list(self, parent: tk.Widget) -> None:
        outer, inner = self._make_scroll_host(parent)
        outer.grid(row=3, column=0, sticky="nsew", padx=12, pady=4)
        self.list_host = inner

    def _make_scroll_host(self, parent: tk.Widget):
        """Canvas + inner Frame pattern; returns ``(outer, inner)``."""
        outer = ttk.Frame(parent)
        outer.rowconfigure(0, weight=1)
        outer.columnconfigure(0, weight=1)

        canvas = tk.Canvas(outer, highlightthickness=0, bg=self.cget("bg"))
        vbar = ttk.Scrollbar(outer, orient="vertical", command=canvas.yview)
        canvas.configure(yscrollcommand=vbar.set)
        canvas.grid(row=0, column=0, sticky="nsew")
        vbar.grid(row=0, column=1, sticky="ns")

        inner = ttk.Frame(canvas)
        window_id = canvas.create_window((0, 0), window=inner, anchor="nw")

        def _on_inner_configure(event):
            canvas.configure(scrollregion=canvas.bbox("all"))

        def _on_canvas_configure(event):
            canvas.itemconfigure(window_id, width=event.width)

        def _on_mousewheel(event):
            delta = -1 * (event.delta // 120) if event.delta else 0
            canvas.yview_scroll(delta, "units")

        inner.bind("<Configure>", _on_inner_configure)
        canvas.bind("<Configure>", _on_canvas_configure)
        canvas.bind_all("<MouseWheel>", _on_mousewheel)
        return outer, inner

    def _build_statusbar(self, parent: tk.Widget) -> None:
        status = ttk.Frame(parent)
        status.grid(row=4, column=0, sticky="ew", padx=12, pady=(4, 12))
        status.columnconfigure(1, weight=1)

        self.footer_var = tk.StringVar(value="")
        ttk.Label(status, textvariable=self.footer_var, style="Subtle.TLabel").grid(row=0, column=0, sticky="w")
        self.status_message_var = tk.StringVar(value="")
        ttk.Label(status, textvariable=self.status_message_var, style="Subtle.TLabel").grid(
            row=0, column=1, sticky="e"
        )

    # ------------------------------------------------------------------
    # Public API (called by the app presenter)
    # ------------------------------------------------------------------
    def set_search_visible(self, visible: bool) -> None:
        if visible:
            self._search_row.grid()
        else:
            self._search_row.grid_remove()

    def render_pills(self, pills: Sequence[PillRow]) -> None:
        for child in list(self.pills_frame.winfo_children()):
            child.destroy()
        col = 0
        for pill in pills:
            style = "ActivePill.TButton" if pill.active else "Pill.TButton"
            ttk.Button(
                self.pills_frame,
                text=f"{pill.label} {pill.count}",
                style=style,
                command=lambda ref=pill.ref: safe_call(self._on_pill_clicked, ref),
            ).grid(row=0, column=col)
            col += 1
            if pill.deletable:
                ttk.Button(
                    self.pills_frame,
                    text="\u00d7",
                    width=2,
                    style=style,
                    command=lambda cid=pill.ref.category_id: safe_call(self._on_pill_delete, cid),
                ).grid(row=0, column=col)
                col += 1
            ttk.Frame(self.pills_frame, width=4).grid(row=0, column=col)
            col += 1

    def render_sections(
        self,
        sections: Sequence[SectionRow],
        *,
        copied_ids: Collection[CommandId] = (),
        empty_text: str = "",
    ) -> None:
        """Rebuild the grouped command list."""
        for child in list(self.list_host.winfo_children()):
            child.destroy()
        self.list_host.columnconfigure(0, weight=1)

        if not sections:
            ttk.Label(self.list_host, text=empty_text, style="Subtle.TLabel", justify="center").grid(
                row=0, column=0, pady=32
            )
            return

        row = 0
        for section in sections:
            marker = "▸" if section.collapsed else "▾"
            ttk.Button(
                self.list_host,
                text=f"{marker} {section.title} ({len(section.commands)})",
                style="Link.TButton",
                command=lambda ref=section.ref: safe_call(self._on_toggle_section, ref),
            ).grid(row=row, column=0, sticky="w", pady=(8, 2))
            row += 1
            if section.collapsed:
                continue
            for command in section.commands:
                self._command_row(self.list_host, command, command.id in copied_ids).grid(
                    row=row, column=0, sticky="ew", pady=2
                )
                row += 1

    def _command_row(self, parent: tk.Widget, command: Command, copied: bool) -> ttk.Frame:
        card = ttk.Frame(parent, style="Card.TFrame", padding=(10, 6))
        card.columnconfigure(0, weight=1)
        text = ttk.Label(card, text=command.content, style="Command.TLabel", cursor="hand2")
        text.grid(row=0, column=0, sticky="w")
        text.bind("<Button-1>", lambda e, cmd=command: safe_call(self._on_copy, cmd))
        ttk.Button(
            card,
            text="Copied!" if copied else "Copy",
            style="Copied.TButton" if copied else "TButton",
            command=lambda cmd=command: safe_call(self._on_copy, cmd),
        ).grid(row=0, column=1, padx=(6, 0))
        ttk.Button(
            card,
            text="Delete",
            style="Danger.TButton",
            command=lambda cid=command.id: safe_call(self._on_delete, cid),
        ).grid(row=0, column=2, padx=(6, 0))
        return card

    def set_category_options(self, options: Sequence[CategoryOption], label: str) -> None:
        """Fill the selector; ``options`` pairs a display label with its ref."""
        self._category_options = list(options)
        self.category_box.configure(values=[text for text, _ in self._category_options])
        if self.focus_get() is not self.category_box:
            self.category_var.set(label)

    def set_input_text(self, text: str) -> None:
        if self.input_var.get() != text:
            self.input_var.set(text)

    def set_footer(self, text: str) -> None:
        self.footer_var.set(text)

    def show_toast(self, message: str, level: str = "info") -> None:
        """Lightweight user feedback in the statusbar."""
        self.status_message_var.set(message)

    # ------------------------------------------------------------------
    def _on_category_chosen(self, _event=None) -> None:
        index = self.category_box.current()
        if 0 <= index < len(self._category_options):
            safe_call(self._on_category_selected, self._category_options[index][1])

    def _on_close_clicked(self) -> None:
        safe_call(self._on_close)
        self.destroy()


__all__ = ["CategoryOption", "MainWindowView"]
