# src/pocket_todo/core/state.py

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any

from .ports import KeyValueStore, TaskRepo


@dataclass
class AppState:
    # Settings object (Settings or a test namespace with the same fields).
    settings: Any

    kv: KeyValueStore
    task_store: TaskRepo

    # Shared by front ends that may call in from more than one thread.
    lock: threading.RLock = field(default_factory=threading.RLock)
