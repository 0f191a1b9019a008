"""Entity table with a "New" button and per-row edit/delete action columns.

Rows are keyed by the presenter's row key (the entity id). A click on an
action cell emits ``on_row_action(action, row_key, event)``; the view never
keeps entities itself, so a click always resolves to whatever the latest
render put under that key.
"""

from __future__ import annotations

import tkinter as tk
from tkinter import ttk
from typing import Any, Callable, List, Optional, Sequence, Tuple

from ...viewmodels.row_actions import ACTION_DELETE, ACTION_EDIT

# (attribute name on the row object, heading, width, anchor)
ColumnSpec = Tuple[str, str, int, str]

ACTION_GLYPHS = {ACTION_EDIT: "✎", ACTION_DELETE: "✖"}


class EntityTableView(ttk.Frame):
    """Treeview table; UI-only."""

    OnVoid = Optional[Callable[[], None]]
    OnRowAction = Optional[Callable[[str, str, Any], None]]

    def __init__(
        self,
        parent: tk.Widget,
        *,
        title: str,
        columns: Sequence[ColumnSpec],
        new_label: str = "New",
        on_new: OnVoid = None,
        on_row_action: OnRowAction = None,
        extra_buttons: Sequence[Tuple[str, Callable[[], None]]] = (),
        **kwargs,
    ) -> None:
        super().__init__(parent, **kwargs)
        self._columns = list(columns)
        self._on_new = on_new
        self._on_row_action = on_row_action

        toolbar = ttk.Frame(self)
        toolbar.pack(side=tk.TOP, fill=tk.X, padx=4, pady=4)
        ttk.Label(toolbar, text=title, font=("TkDefaultFont", 11, "bold")).pack(side=tk.LEFT, padx=(0, 12))
        ttk.Button(toolbar, text=new_label, command=self._on_new_click).pack(side=tk.LEFT, padx=(0, 6))
        for label, command in extra_buttons:
            ttk.Button(toolbar, text=label, command=command).pack(side=tk.LEFT, padx=(0, 6))

        self._action_columns = (ACTION_EDIT, ACTION_DELETE)
        column_ids = tuple(spec[0] for spec in self._columns) + self._action_columns
        self.tree = ttk.Treeview(self, columns=column_ids, show="headings", selectmode="browse", height=16)
        for key, heading, width, anchor in self._columns:
            self.tree.heading(key, text=heading)
            self.tree.column(key, width=width, anchor=anchor, stretch=key == "name")
        for action in self._action_columns:
            self.tree.heading(action, text="")
            self.tree.column(action, width=36, minwidth=36, anchor=tk.CENTER, stretch=False)

        vsb = ttk.Scrollbar(self, orient="vertical", command=self.tree.yview)
        self.tree.configure(yscrollcommand=vsb.set)
        self.tree.pack(side=tk.LEFT, fill=tk.BOTH, expand=True)
        vsb.pack(side=tk.RIGHT, fill=tk.Y)

        self.tree.bind("<ButtonRelease-1>", self._on_click)
        self.tree.bind("<Double-1>", self._on_double_click)
        self.tree.bind("<Delete>", self._on_delete_key)

    # ------------------------------------------------------------------
    def set_rows(self, rows: List[Tuple[str, Any]]) -> None:
        """Replace every item; ``rows`` are ``(row_key, row)`` pairs."""
        self.tree.delete(*self.tree.get_children())
        for key, row in rows:
            values = [getattr(row, spec[0], "") for spec in self._columns]
            values += [ACTION_GLYPHS[action] for action in self._action_columns]
            self.tree.insert("", "end", iid=key, values=values)

    # ------------------------------------------------------------------
    def _on_new_click(self) -> None:
        if self._on_new:
            self._on_new()

    def _emit(self, action: str, row_key: str, event: Any) -> None:
        if self._on_row_action and row_key:
            self._on_row_action(action, row_key, event)

    def _on_click(self, event: tk.Event) -> None:
        if self.tree.identify_region(event.x, event.y) != "cell":
            return
        row_key = self.tree.identify_row(event.y)
        column_ref = self.tree.identify_column(event.x)  # "#1", "#2", ...
        try:
            index = int(column_ref.lstrip("#")) - 1
        except ValueError:
            return
        column_ids = self.tree["columns"]
        if 0 <= index < len(column_ids) and column_ids[index] in self._action_columns:
            self._emit(column_ids[index], row_key, event)

    def _on_double_click(self, event: tk.Event) -> None:
        row_key = self.tree.identify_row(event.y)
        column_ref = self.tree.identify_column(event.x)
        column_ids = self.tree["columns"]
        try:
            column = column_ids[int(column_ref.lstrip("#")) - 1]
        except (ValueError, IndexError):
            column = ""
        if column not in self._action_columns:
            self._emit(ACTION_EDIT, row_key, event)

    def _on_delete_key(self, event: tk.Event) -> None:
        selection = self.tree.selection()
        if selection:
            self._emit(ACTION_DELETE, selection[0], event)


__all__ = ["ColumnSpec", "EntityTableView"]
