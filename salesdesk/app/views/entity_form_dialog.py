"""Modal create/edit form bound to an ``EntityFormVM``."""

from __future__ import annotations

import tkinter as tk
from tkinter import ttk
from typing import Callable, Dict, Optional, Sequence, Tuple

from ...domain.ports import UseCaseError
from ...viewmodels.form_vm import EntityFormVM

# (field name, label, kind) where kind is "readonly", "entry" or "choice"
FieldSpec = Tuple[str, str, str]


class EntityFormDialog(tk.Toplevel):
    """Window-modal form. ``parent.wait_window(dialog)`` blocks until it closes."""

    title_text = "Record"
    field_specs: Sequence[FieldSpec] = ()

    def __init__(
        self,
        parent: tk.Misc,
        vm: EntityFormVM,
        *,
        on_error: Optional[Callable[[UseCaseError], None]] = None,
    ) -> None:
        super().__init__(parent)
        self.vm = vm
        self._on_error = on_error
        self.title(self.title_text)
        self.transient(parent)
        self.resizable(False, False)
        self.protocol("WM_DELETE_WINDOW", self._on_cancel_clicked)

        self.vars: Dict[str, tk.StringVar] = {}
        self.error_vars: Dict[str, tk.StringVar] = {}
        self._choice_widgets: Dict[str, ttk.Combobox] = {}

        self._build_ui()
        self._load_fields()

        self.bind("<Return>", lambda _e: self._on_save_clicked())
        self.bind("<Escape>", lambda _e: self._on_cancel_clicked())

        self.update_idletasks()
        self.geometry(self._center_over_parent(parent))
        self.grab_set()
        self.focus_set()

    # ------------------------------------------------------------------
    def _build_ui(self) -> None:
        body = ttk.Frame(self, padding=12)
        body.grid(row=0, column=0, sticky="nsew")
        body.columnconfigure(1, weight=1)

        for row, (name, label, kind) in enumerate(self.field_specs):
            ttk.Label(body, text=label).grid(row=row * 2, column=0, sticky="w", padx=(0, 8), pady=(6, 0))
            var = tk.StringVar(value="")
            self.vars[name] = var
            if kind == "choice":
                widget = ttk.Combobox(body, textvariable=var, state="readonly", width=32)
                self._choice_widgets[name] = widget
            else:
                widget = ttk.Entry(body, textvariable=var, width=34)
                if kind == "readonly":
                    widget.state(["readonly"])
            widget.grid(row=row * 2, column=1, sticky="ew", pady=(6, 0))
            err = tk.StringVar(value="")
            self.error_vars[name] = err
            ttk.Label(body, textvariable=err, foreground="#b00020").grid(row=row * 2 + 1, column=1, sticky="w")

        buttons = ttk.Frame(self, padding=(12, 0, 12, 12))
        buttons.grid(row=1, column=0, sticky="e")
        ttk.Button(buttons, text="Save", command=self._on_save_clicked).pack(side=tk.LEFT, padx=(0, 6))
        ttk.Button(buttons, text="Cancel", command=self._on_cancel_clicked).pack(side=tk.LEFT)

    def _load_fields(self) -> None:
        for name, var in self.vars.items():
            var.set(self.display_value(name, self.vm.fields.get(name, "")))

    def _show_errors(self) -> None:
        for name, var in self.error_vars.items():
            var.set(self.vm.error_for(name))

    # ---- Value mapping for choice fields (subclasses) ----
    def display_value(self, name: str, value: str) -> str:
        return value

    def field_value(self, name: str, shown: str) -> str:
        return shown

    # ------------------------------------------------------------------
    def _on_save_clicked(self) -> None:
        for name, var in self.vars.items():
            if name != "id":
                self.vm.set_field(name, self.field_value(name, var.get()))
        try:
            saved = self.vm.submit()
        except UseCaseError as exc:
            if self._on_error:
                self._on_error(exc)
            return
        self._show_errors()
        if saved is not None:
            self._close()

    def _on_cancel_clicked(self) -> None:
        self.vm.cancel()
        self._close()

    def _close(self) -> None:
        try:
            self.grab_release()
        except tk.TclError:
            pass
        if self.winfo_exists():
            self.destroy()

    def _center_over_parent(self, parent: tk.Misc) -> str:
        try:
            px, py = parent.winfo_rootx(), parent.winfo_rooty()
            pw, ph = parent.winfo_width(), parent.winfo_height()
            w, h = self.winfo_reqwidth(), self.winfo_reqheight()
            x = px + max(0, (pw - w) // 2)
            y = py + max(0, (ph - h) // 3)
            return f"+{x}+{y}"
        except tk.TclError:
            return ""


class DepartmentFormDialog(EntityFormDialog):
    title_text = "Department"
    field_specs = (
        ("id", "Id", "readonly"),
        ("name", "Name", "entry"),
    )


class SellerFormDialog(EntityFormDialog):
    """Seller form; the department picker shows ``id - name`` labels but stores ids."""

    title_text = "Seller"
    field_specs = (
        ("id", "Id", "readonly"),
        ("name", "Name", "entry"),
        ("email", "Email", "entry"),
        ("birth_date", "Birth date (DD/MM/YYYY)", "entry"),
        ("base_salary", "Base salary", "entry"),
        ("department_id", "Department", "choice"),
    )

    def _load_fields(self) -> None:
        options = [
            (dept_id, f"{dept_id} - {name}")
            for dept_id, name in self.vm.department_options()  # type: ignore[attr-defined]
        ]
        self._label_to_id = {label: dept_id for dept_id, label in options}
        self._id_to_label = dict(options)
        combo = self._choice_widgets.get("department_id")
        if combo is not None:
            combo.configure(values=[label for _id, label in options])
        super()._load_fields()

    def display_value(self, name: str, value: str) -> str:
        if name == "department_id":
            return self._id_to_label.get(value, "")
        return value

    def field_value(self, name: str, shown: str) -> str:
        if name == "department_id":
            return self._label_to_id.get(shown, "")
        return shown


__all__ = ["DepartmentFormDialog", "EntityFormDialog", "FieldSpec", "SellerFormDialog"]
