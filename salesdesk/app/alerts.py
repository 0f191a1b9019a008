"""Modal message boxes used by presenters (tkinter.messagebox)."""

from __future__ import annotations

from tkinter import messagebox
from typing import Optional


class TkAlerts:
    """Error alerts and yes/no prompts parented to one window."""

    def __init__(self, parent) -> None:
        self.parent = parent

    def show_alert(self, title: str, header: str, message: str) -> None:
        messagebox.showerror(title, _compose(header, message), parent=self.parent)

    def confirm(self, title: str, header: str, message: str) -> Optional[bool]:
        return messagebox.askokcancel(
            title, _compose(header, message), icon=messagebox.WARNING, parent=self.parent
        )


def _compose(header: str, message: str) -> str:
    if header and message:
        return f"{header}\n\n{message}"
    return header or message


__all__ = ["TkAlerts"]
