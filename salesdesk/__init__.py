"""SalesDesk: desktop management of departments and sellers."""

__version__ = "0.1.0"
