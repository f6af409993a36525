"""Adapters - I/O implementations of ports."""

from .sqlite_store import SQLiteTaskStore

__all__ = [
    "SQLiteTaskStore",
]
