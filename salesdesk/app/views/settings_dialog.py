from __future__ import annotations

import tkinter as tk
from tkinter import ttk
from typing import Callable, Optional

from ...viewmodels.settings_vm import BACKENDS


class SettingsDialog(tk.Toplevel):
    """Modal dialog to edit app settings (UI-only)."""

    OnVoid = Optional[Callable[[], None]]
    OnSave = Optional[Callable[[dict], None]]

    def __init__(
        self,
        parent: tk.Widget,
        *,
        on_browse_data_dir: OnVoid = None,
        on_save: OnSave = None,
    ) -> None:
        super().__init__(parent)
        self.title("Settings")
        self.transient(parent)
        self.resizable(False, False)

        self._on_browse_data_dir = on_browse_data_dir
        self._on_save = on_save

        self.protocol("WM_DELETE_WINDOW", self._on_close_clicked)

        self.backend_var = tk.StringVar(value=BACKENDS[0])
        self.data_dir_var = tk.StringVar(value=".")
        self.api_base_url_var = tk.StringVar(value="")
        self.api_key_var = tk.StringVar(value="")
        self.request_timeout_var = tk.StringVar(value="10")
        self.debug_logging_var = tk.BooleanVar(value=False)

        self._build_ui()

        self.update_idletasks()
        self.geometry(self._center_over_parent(parent))
        self.grab_set()
        self.focus_set()

    # ------------------------------------------------------------------
    def _build_ui(self) -> None:
        pad = dict(padx=8, pady=6)

        storage = ttk.Labelframe(self, text="Storage")
        storage.grid(row=0, column=0, sticky="ew", **pad)
        storage.columnconfigure(1, weight=1)
        ttk.Label(storage, text="Backend").grid(row=0, column=0, sticky="w")
        ttk.Combobox(
            storage, textvariable=self.backend_var, values=BACKENDS, state="readonly", width=10
        ).grid(row=0, column=1, sticky="w")
        ttk.Label(storage, text="Data directory").grid(row=1, column=0, sticky="w", pady=(6, 0))
        ttk.Entry(storage, textvariable=self.data_dir_var, width=40).grid(
            row=1, column=1, sticky="ew", padx=(0, 8), pady=(6, 0)
        )
        ttk.Button(
            storage,
            text="Choose…",
            command=lambda: self._safe(self._on_browse_data_dir),
        ).grid(row=1, column=2, sticky="w", pady=(6, 0))

        api = ttk.Labelframe(self, text="REST API")
        api.grid(row=1, column=0, sticky="ew", **pad)
        api.columnconfigure(1, weight=1)
        ttk.Label(api, text="Base URL").grid(row=0, column=0, sticky="w")
        ttk.Entry(api, textvariable=self.api_base_url_var, width=40).grid(row=0, column=1, sticky="ew")
        ttk.Label(api, text="API Key").grid(row=1, column=0, sticky="w", pady=(6, 0))
        ttk.Entry(api, textvariable=self.api_key_var, width=24, show="*").grid(
            row=1, column=1, sticky="w", pady=(6, 0)
        )
        ttk.Label(api, text="Request timeout (s)").grid(row=2, column=0, sticky="w", pady=(6, 0))
        ttk.Entry(api, textvariable=self.request_timeout_var, width=8).grid(
            row=2, column=1, sticky="w", pady=(6, 0)
        )

        ttk.Checkbutton(self, text="Debug logging", variable=self.debug_logging_var).grid(
            row=2, column=0, sticky="w", **pad
        )

        buttons = ttk.Frame(self)
        buttons.grid(row=3, column=0, sticky="e", **pad)
        self.save_button = ttk.Button(buttons, text="Save", command=self._on_save_clicked)
        self.save_button.pack(side=tk.LEFT, padx=(0, 6))
        ttk.Button(buttons, text="Close", command=self._on_close_clicked).pack(side=tk.LEFT)

    # ------------------------------------------------------------------
    def set_values(self, payload: dict) -> None:
        self.backend_var.set(str(payload.get("backend") or BACKENDS[0]))
        self.data_dir_var.set(str(payload.get("data_dir") or "."))
        self.api_base_url_var.set(str(payload.get("api_base_url") or ""))
        self.api_key_var.set(str(payload.get("api_key") or ""))
        self.request_timeout_var.set(str(payload.get("request_timeout_s", 10)))
        self.debug_logging_var.set(bool(payload.get("debug_logging")))

    def set_data_dir(self, path: str) -> None:
        self.data_dir_var.set(path)

    def values(self) -> dict:
        return {
            "backend": self.backend_var.get(),
            "data_dir": self.data_dir_var.get(),
            "api_base_url": self.api_base_url_var.get(),
            "api_key": self.api_key_var.get(),
            "request_timeout_s": self.request_timeout_var.get(),
            "debug_logging": bool(self.debug_logging_var.get()),
        }

    # ------------------------------------------------------------------
    def _on_save_clicked(self) -> None:
        if self._on_save:
            self._on_save(self.values())

    def _on_close_clicked(self) -> None:
        try:
            self.grab_release()
        except tk.TclError:
            pass
        self.destroy()

    def _safe(self, fn: OnVoid) -> None:
        if fn:
            fn()

    def _center_over_parent(self, parent: tk.Widget) -> str:
        try:
            px, py = parent.winfo_rootx(), parent.winfo_rooty()
            pw, ph = parent.winfo_width(), parent.winfo_height()
            w, h = self.winfo_reqwidth(), self.winfo_reqheight()
            x = px + max(0, (pw - w) // 2)
            y = py + max(0, (ph - h) // 3)
            return f"+{x}+{y}"
        except tk.TclError:
            return ""
