# tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass

TASK_KEY_PREFIX = "task_"
COMPLETED_KEY_PREFIX = "completed_"


@dataclass(slots=True)
class Task:
    id: int
    text: str
    completed: bool = False


def task_key(task_id: int) -> str:
    return f"{TASK_KEY_PREFIX}{int(task_id)}"


def completed_key(task_id: int) -> str:
    return f"{COMPLETED_KEY_PREFIX}{int(task_id)}"


def _canonical_id(raw: str) -> int | None:
    try:
        task_id = int(raw)
    except ValueError:
        return None
    # int() also takes "05", "+5", " 5" and "1_0"; task_key() never writes those.
    if raw != str(task_id):
        return None
    return task_id


def parse_task_key(key: str) -> int | None:
    """
    Return the task id encoded in a "task_<id>" key.

    Only the spelling written by task_key() is accepted, so "task_05",
    "task_+5", "task_ 5" and "task_1_0" all give None.
    """
    if not key.startswith(TASK_KEY_PREFIX):
        return None
    return _canonical_id(key[len(TASK_KEY_PREFIX):])


def is_task_entry_key(key: str) -> bool:
    """
    True for keys the task list owns: task_<id> and completed_<id> with a
    canonical id. Anything else under those prefixes is left alone.
    """
    for prefix in (TASK_KEY_PREFIX, COMPLETED_KEY_PREFIX):
        if key.startswith(prefix):
            return _canonical_id(key[len(prefix):]) is not None
    return False
