"""Tkinter widgets. UI-only: every user action leaves through a callback."""
