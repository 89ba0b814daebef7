# tasks/task_store.py

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from dataclasses import replace

from ..core.ports import KeyValueStore, KVValue
from ..storage.errors import StorageError
from .task_models import (
    TASK_KEY_PREFIX,
    Task,
    completed_key,
    is_task_entry_key,
    parse_task_key,
    task_key,
)

logger = logging.getLogger(__name__)

TaskListener = Callable[[list[Task]], None]


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


class TaskStore:
    """
    Persisted to-do list.

    Owns the ordered in-memory list of tasks and mirrors it into a key-value
    store after every mutation:
    - "task_<id>"      -> task text
    - "completed_<id>" -> completed flag

    persist() is a full replace: all task keys are removed and the current list
    is written back, inside one KeyValueStore.edit() call.

    Callers only get copies of tasks; the list itself never leaves the store.

    Thread-safety:
    - one reentrant lock guards the list and every persist, so a mutation and
      its write are never interleaved with another caller
    """

    def __init__(self, kv: KeyValueStore, *, id_clock: Callable[[], int] | None = None) -> None:
        self._kv = kv
        self._id_clock = id_clock or _now_ms
        self._lock = threading.RLock()
        self._tasks: list[Task] = []
        self._last_id = 0
        self._dirty = False
        self._listeners: list[TaskListener] = []

    @property
    def dirty(self) -> bool:
        """True if the last persist failed and storage may lag behind memory."""
        return self._dirty

    # ---- low-level helpers ----

    def _next_id(self) -> int:
        newest = max((t.id for t in self._tasks), default=0)
        task_id = max(int(self._id_clock()), self._last_id + 1, newest + 1)
        self._last_id = task_id
        return task_id

    def _find(self, task_id: int) -> Task | None:
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def _copies(self) -> list[Task]:
        return [replace(t) for t in self._tasks]

    def _notify(self) -> None:
        if not self._listeners:
            return
        snap = self._copies()
        for listener in list(self._listeners):
            try:
                listener(list(snap))
            except Exception:
                logger.exception("Task listener %r failed", listener)

    @staticmethod
    def _decode_entries(entries: dict[str, KVValue]) -> list[Task]:
        tasks: list[Task] = []
        seen: set[int] = set()
        for key, value in entries.items():
            task_id = parse_task_key(key)
            if task_id is None:
                if key.startswith(TASK_KEY_PREFIX):
                    logger.warning("Skipping task entry with malformed key=%s", key)
                continue
            if task_id in seen:
                logger.warning("Skipping duplicate task id=%s key=%s", task_id, key)
                continue
            seen.add(task_id)

            text = value.strip() if isinstance(value, str) else ""
            if not text:
                logger.warning("Skipping task id=%s with empty text", task_id)
                continue

            completed = entries.get(completed_key(task_id), False)
            tasks.append(Task(id=task_id, text=text, completed=completed is True))

        tasks.sort(key=lambda t: t.id)
        return tasks

    # ---- public API ----

    def load(self) -> list[Task]:
        """
        Rebuild the list from storage and return a copy of it.

        Storage is only read. Tasks come back ordered by id, which is creation
        order for ids issued by this store.
        """
        with self._lock:
            entries = self._kv.read_all()
            self._tasks = self._decode_entries(entries)
            self._last_id = max(self._last_id, max((t.id for t in self._tasks), default=0))
            self._dirty = False
            logger.info("Loaded %d tasks (%d completed)", len(self._tasks), self.completed_count())
            self._notify()
            return self._copies()

    def reload(self) -> list[Task]:
        """Drop in-memory state and re-read storage (used after a failed persist)."""
        return self.load()

    def persist(self) -> None:
        with self._lock:
            try:
                stale = [k for k in self._kv.read_all() if is_task_entry_key(k)]
                put: dict[str, KVValue] = {}
                for task in self._tasks:
                    put[task_key(task.id)] = task.text
                    put[completed_key(task.id)] = task.completed
                self._kv.edit(put=put, remove=stale)
            except StorageError:
                self._dirty = True
                logger.exception("Persist failed; %d tasks kept in memory only", len(self._tasks))
                raise
            self._dirty = False
            logger.debug("Persisted %d tasks (cleared %d keys)", len(self._tasks), len(stale))

    def add(self, text: str) -> Task | None:
        """
        Append a new incomplete task.

        Whitespace-only text is declined: returns None and nothing is written.
        """
        text = (text or "").strip()
        if not text:
            return None

        with self._lock:
            task = Task(id=self._next_id(), text=text, completed=False)
            self._tasks.append(task)
            logger.debug("Task added id=%s", task.id)
            self.persist()
            self._notify()
            return replace(task)

    def toggle_complete(self, task_id: int) -> Task | None:
        """Flip the completed flag. Unknown id -> None, nothing written."""
        with self._lock:
            task = self._find(int(task_id))
            if task is None:
                logger.debug("toggle_complete: no task id=%s", task_id)
                return None
            task.completed = not task.completed
            logger.debug("Task id=%s completed=%s", task.id, task.completed)
            self.persist()
            self._notify()
            return replace(task)

    def remove_completed(self) -> int:
        """Drop every completed task, keep the rest in order. Returns how many went."""
        with self._lock:
            kept = [t for t in self._tasks if not t.completed]
            removed = len(self._tasks) - len(kept)
            self._tasks = kept
            logger.debug("Removed %d completed tasks", removed)
            self.persist()
            self._notify()
            return removed

    def snapshot(self) -> list[Task]:
        with self._lock:
            return self._copies()

    def get(self, task_id: int) -> Task | None:
        with self._lock:
            task = self._find(int(task_id))
            return replace(task) if task is not None else None

    def count(self) -> int:
        with self._lock:
            return len(self._tasks)

    def completed_count(self) -> int:
        with self._lock:
            return sum(1 for t in self._tasks if t.completed)

    def subscribe(self, callback: TaskListener) -> Callable[[], None]:
        """
        Call `callback` with a fresh snapshot after every successful load and
        mutation. A mutation whose persist fails does not notify.

        Returns a function that removes the subscription.
        """
        with self._lock:
            self._listeners.append(callback)

        def _unsubscribe() -> None:
            with self._lock:
                if callback in self._listeners:
                    self._listeners.remove(callback)

        return _unsubscribe
