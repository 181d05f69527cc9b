"""Shared visual theme for the VAUL desktop views.

The module centralizes ttk style tokens so all windows render the same dark
look without carrying styling logic in each individual view class.
"""

from __future__ import annotations

import tkinter as tk
from tkinter import ttk

BG = "#14161c"
CARD_BG = "#1c1f27"
BORDER = "#2a2f3a"
PRIMARY = "#78b4ff"
TEXT = "#e6e9ef"
MUTED = "#8a93a6"
DANGER = "#ff6b6b"
SUCCESS = "#5fd38d"
MONO_FONT = ("TkFixedFont", 10)


def apply_modern_theme(root: tk.Misc) -> None:
    """Apply a cohesive ttk + tk visual theme to the full application.

    Args:
        root: Root Tk object or any widget tied to the app Tcl interpreter.
    """
    style = ttk.Style(root)
    if "clam" in style.theme_names():
        style.theme_use("clam")

    root.option_add("*Font", "TkDefaultFont 10")
    root.configure(bg=BG)

    style.configure(".", background=BG, foreground=TEXT)
    style.configure("TFrame", background=BG)
    style.configure("Card.TFrame", background=CARD_BG, relief="flat", borderwidth=1)
    style.configure("TLabel", background=BG, foreground=TEXT)
    style.configure("Card.TLabel", background=CARD_BG, foreground=TEXT)
    style.configure("Command.TLabel", background=CARD_BG, foreground=TEXT, font=MONO_FONT)
    style.configure("Subtle.TLabel", background=BG, foreground=MUTED)
    style.configure("Error.TLabel", background=BG, foreground=DANGER)
    style.configure("Title.TLabel", background=BG, foreground=TEXT, font=("TkDefaultFont", 14, "bold"))
    style.configure("Section.TLabel", background=BG, foreground=TEXT, font=("TkDefaultFont", 10, "bold"))

    style.configure("TButton", padding=(10, 6), background=CARD_BG, foreground=TEXT, bordercolor=BORDER, relief="flat")
    style.map("TButton", background=[("active", BORDER)])
    style.configure("Primary.TButton", background=PRIMARY, foreground=BG, bordercolor=PRIMARY)
    style.map("Primary.TButton", background=[("active", "#5e9ff0")])
    style.configure("Copied.TButton", background=SUCCESS, foreground=BG, bordercolor=SUCCESS)
    style.configure("Danger.TButton", background=CARD_BG, foreground=DANGER, bordercolor=BORDER)
    style.configure("Pill.TButton", padding=(10, 3), background=CARD_BG, foreground=MUTED, bordercolor=BORDER)
    style.configure("ActivePill.TButton", padding=(10, 3), background=PRIMARY, foreground=BG, bordercolor=PRIMARY)
    style.configure("Link.TButton", padding=(2, 0), background=BG, foreground=MUTED, relief="flat", borderwidth=0)

    style.configure("TEntry", fieldbackground=CARD_BG, foreground=TEXT, insertcolor=TEXT, bordercolor=BORDER)
    style.configure("TCombobox", fieldbackground=CARD_BG, foreground=TEXT, bordercolor=BORDER)
    style.configure("Vertical.TScrollbar", background=CARD_BG, troughcolor=BG, bordercolor=BG)


__all__ = ["apply_modern_theme", "BG", "CARD_BG", "MUTED", "PRIMARY", "TEXT"]
