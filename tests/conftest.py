# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from pocket_todo.core.state import AppState
from pocket_todo.tasks.task_store import TaskStore

from .fakes import InMemoryKeyValueStore, StepClock


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with bootstrap and commands.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="pocket-todo-test",
        log_level="DEBUG",
        console_enabled=False,
        store_backend="sqlite",
        # Paths (tmp per test run)
        data_dir=tmp_path,
        sqlite_path=tmp_path / "task_preferences.sqlite3",
        json_path=tmp_path / "task_preferences.json",
    )


@pytest.fixture()
def kv() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture()
def clock() -> StepClock:
    return StepClock()


@pytest.fixture()
def store(kv: InMemoryKeyValueStore, clock: StepClock) -> TaskStore:
    task_store = TaskStore(kv, id_clock=clock)
    task_store.load()
    return task_store


@pytest.fixture()
def state(settings: SimpleNamespace, kv: InMemoryKeyValueStore, store: TaskStore) -> AppState:
    """AppState wired with the in-memory key-value fake."""
    return AppState(settings=settings, kv=kv, task_store=store)
