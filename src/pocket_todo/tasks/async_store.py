# src/pocket_todo/tasks/async_store.py

from __future__ import annotations

"""
Awaitable facade over TaskStore for event-loop hosts.

Storage I/O runs in a worker thread (asyncio.to_thread) so the loop never
blocks on SQLite or file writes. One asyncio.Lock keeps operations in call
order; each awaited call returns only after its persist has finished.
"""

import asyncio
import logging

from .task_models import Task
from .task_store import TaskStore

logger = logging.getLogger(__name__)


class AsyncTaskStore:
    def __init__(self, store: TaskStore) -> None:
        self._store = store
        self._lock = asyncio.Lock()

    @property
    def store(self) -> TaskStore:
        return self._store

    @property
    def dirty(self) -> bool:
        return self._store.dirty

    async def load(self) -> list[Task]:
        async with self._lock:
            return await asyncio.to_thread(self._store.load)

    async def add(self, text: str) -> Task | None:
        # Declined input never touches storage; skip the thread hop.
        if not (text or "").strip():
            return None
        async with self._lock:
            return await asyncio.to_thread(self._store.add, text)

    async def toggle_complete(self, task_id: int) -> Task | None:
        async with self._lock:
            return await asyncio.to_thread(self._store.toggle_complete, task_id)

    async def remove_completed(self) -> int:
        async with self._lock:
            return await asyncio.to_thread(self._store.remove_completed)

    async def persist(self) -> None:
        async with self._lock:
            await asyncio.to_thread(self._store.persist)

    def snapshot(self) -> list[Task]:
        """In-memory only; safe to call without awaiting."""
        return self._store.snapshot()
