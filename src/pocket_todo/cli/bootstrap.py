# src/pocket_todo/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- picks the key-value backend,
- wires the TaskStore into AppState and loads it.
"""

from __future__ import annotations

import logging

from ..config import DEFAULT_STORE_BACKEND, STORE_BACKENDS, get_settings
from ..core.ports import KeyValueStore
from ..core.state import AppState
from ..storage.kv_json import JsonFileKeyValueStore
from ..storage.kv_sqlite import SqliteKeyValueStore
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.sqlite_path.parent.mkdir(parents=True, exist_ok=True)
    settings.json_path.parent.mkdir(parents=True, exist_ok=True)


def resolve_backend(name: str | None) -> str:
    backend = (name or "").strip().lower()
    if backend in STORE_BACKENDS:
        return backend
    logger.warning(
        "Unknown store backend %r; using %s (choices: %s)",
        name,
        DEFAULT_STORE_BACKEND,
        ", ".join(STORE_BACKENDS),
    )
    return DEFAULT_STORE_BACKEND


def create_kv_store(settings) -> KeyValueStore:
    backend = resolve_backend(getattr(settings, "store_backend", None))
    if backend == "json":
        return JsonFileKeyValueStore(settings.json_path)
    return SqliteKeyValueStore(settings.sqlite_path)


def create_initial_state(*, settings=None, load: bool = True) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().

    With load=True the task list is read from storage before returning;
    storage errors propagate to the caller.
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    kv = create_kv_store(settings)
    task_store = TaskStore(kv)
    if load:
        task_store.load()

    return AppState(settings=settings, kv=kv, task_store=task_store)
