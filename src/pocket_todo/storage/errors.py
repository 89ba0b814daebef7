# src/pocket_todo/storage/errors.py

from __future__ import annotations


class StorageError(Exception):
    """Key-value storage could not be read or written. The cause is chained."""
