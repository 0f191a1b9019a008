"""
MainWindowView
---------------
Tkinter main window for SalesDesk. This file contains **only View code**: no
persistence, no validation. It exposes callback hooks that the App connects
to presenters.

Layout:
  * Toolbar (Departments, Sellers, Reload, Settings)
  * Notebook with one tab per entity table (Departments, Sellers)
  * StatusBar at the bottom
"""
from __future__ import annotations
import tkinter as tk
from tkinter import ttk
from typing import Callable, Optional


class MainWindowView(tk.Tk):
    """Top-level application window.

    The entity tables are created by the App and mounted through
    ``mount_tab``; this class only owns the containers.
    """

    OnVoid = Optional[Callable[[], None]]

    def __init__(
        self,
        *,
        on_show_departments: OnVoid = None,
        on_show_sellers: OnVoid = None,
        on_reload: OnVoid = None,
        on_open_settings: OnVoid = None,
    ) -> None:
        super().__init__()

        self.title("SalesDesk")
        self.geometry("900x600")
        self.minsize(640, 400)

        self._on_show_departments = on_show_departments
        self._on_show_sellers = on_show_sellers
        self._on_reload = on_reload
        self._on_open_settings = on_open_settings

        # ---- 3 rows: Toolbar, Notebook, Status ----
        self.rowconfigure(1, weight=1)
        self.columnconfigure(0, weight=1)

        self._build_toolbar(self)
        self._build_main_area(self)
        self._build_statusbar(self)

        self.bind("<F5>", lambda e: self._on_reload and self._on_reload())

    # ------------------------------------------------------------------
    def _build_toolbar(self, parent: tk.Widget) -> None:
        toolbar = ttk.Frame(parent)
        toolbar.grid(row=0, column=0, sticky="ew", padx=8, pady=(8, 4))
        ttk.Button(toolbar, text="Departments", command=self._on_show_departments).grid(
            row=0, column=0, padx=(0, 6)
        )
        ttk.Button(toolbar, text="Sellers", command=self._on_show_sellers).grid(row=0, column=1, padx=(0, 6))
        ttk.Button(toolbar, text="Reload", command=self._on_reload).grid(row=0, column=2, padx=(24, 6))
        ttk.Button(toolbar, text="Settings", command=self._on_open_settings).grid(
            row=0, column=3, padx=(24, 6)
        )

    def _build_main_area(self, parent: tk.Widget) -> None:
        self.notebook = ttk.Notebook(parent)
        self.notebook.grid(row=1, column=0, sticky="nsew", padx=8, pady=4)

    def _build_statusbar(self, parent: tk.Widget) -> None:
        bar = ttk.Frame(parent)
        bar.grid(row=2, column=0, sticky="ew", padx=8, pady=(0, 6))
        self.status_message_var = tk.StringVar(value="Ready")
        ttk.Label(bar, textvariable=self.status_message_var, anchor="w").pack(side=tk.LEFT, fill=tk.X)

    # ------------------------------------------------------------------
    def mount_tab(self, view: tk.Widget, title: str) -> None:
        self.notebook.add(view, text=title)

    def select_tab(self, view: tk.Widget) -> None:
        self.notebook.select(view)

    def show_toast(self, message: str) -> None:
        """Lightweight user feedback in the statusbar."""
        self.status_message_var.set(message)
