# src/pocket_todo/core/ports.py

"""
Ports (interfaces) used by the core.

The task store depends on Protocols instead of concrete implementations.
This keeps storage backends swappable and makes testing easier.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..tasks.task_models import Task

KVValue = str | bool
# Entries hold either the task text or its completed flag.


class KeyValueStore(Protocol):
    """
    Durable string-keyed storage.

    edit() must apply removals and writes together: either all of them land
    or none do (single-process guarantee is enough).
    """

    def read_all(self) -> dict[str, KVValue]: ...

    def edit(
            self,
            *,
            put: Mapping[str, KVValue] | None = None,
            remove: Iterable[str] = (),
    ) -> None: ...

    def delete(self, key: str) -> None: ...
    def close(self) -> None: ...


class TaskRepo(Protocol):
    # Startup / resync
    def load(self) -> list[Task]: ...
    def reload(self) -> list[Task]: ...

    # Mutations (each persists before returning)
    def add(self, text: str) -> Task | None: ...
    def toggle_complete(self, task_id: int) -> Task | None: ...
    def remove_completed(self) -> int: ...
    def persist(self) -> None: ...

    # Read-only views (copies)
    def snapshot(self) -> list[Task]: ...
    def get(self, task_id: int) -> Task | None: ...
    def count(self) -> int: ...
    def completed_count(self) -> int: ...
    def subscribe(self, callback: Callable[[list[Task]], None]) -> Callable[[], None]: ...

    @property
    def dirty(self) -> bool: ...
