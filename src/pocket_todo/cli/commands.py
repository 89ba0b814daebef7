# src/pocket_todo/cli/commands.py

from __future__ import annotations

import contextlib
import inspect
import logging
from collections.abc import Callable
from typing import cast

from ..core.state import AppState
from ..storage.errors import StorageError

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by connectors (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, args, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append("Plain text (no leading /) adds a task.")
        return "\n".join(lines)


registry = CommandRegistry()


def friendly_storage_error_message(exc: StorageError) -> str:
    cause = exc.__cause__
    detail = f" ({cause})" if cause else ""
    return f"Storage error: {exc}{detail}. Changes may not be saved; try /reload."


def format_task_list(state: AppState) -> str:
    tasks = state.task_store.snapshot()
    if not tasks:
        return "No tasks. Type something to add one."
    lines = []
    for i, t in enumerate(tasks, start=1):
        mark = "x" if t.completed else " "
        lines.append(f"{i:>2}. [{mark}] {t.text}")
    done = sum(1 for t in tasks if t.completed)
    lines.append(f"{len(tasks)} tasks, {done} completed.")
    return "\n".join(lines)


def _task_at(state: AppState, raw: str):
    """Resolve a 1-based list position (as shown by /list) to a task."""
    try:
        pos = int(raw)
    except ValueError:
        return None
    tasks = state.task_store.snapshot()
    if pos < 1 or pos > len(tasks):
        return None
    return tasks[pos - 1]


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_add(state: AppState, args: list[str]) -> str:
    task = state.task_store.add(" ".join(args))
    if task is None:
        return "Nothing to add. Usage: /add <text>."
    return f"Added: {task.text}"


def cmd_done(state: AppState, args: list[str]) -> str:
    """
    /done N  -> toggle task number N from /list
    """
    if not args:
        return "Usage: /done <number from /list>."
    target = _task_at(state, args[0])
    if target is None:
        return f"No task number {args[0]}. Use /list to see numbers."
    task = state.task_store.toggle_complete(target.id)
    if task is None:
        return f"Task {args[0]} is gone. Use /list to refresh."
    return f"{'Completed' if task.completed else 'Reopened'}: {task.text}"


def cmd_clear(state: AppState, args: list[str]) -> str:
    removed = state.task_store.remove_completed()
    if not removed:
        return "No completed tasks to remove."
    return f"Removed {removed} completed task{'s' if removed != 1 else ''}."


def cmd_list(state: AppState, args: list[str]) -> str:
    return format_task_list(state)


def cmd_reload(
    state: AppState,
    args: list[str],
    emit: CommandEmitter | None = None,
) -> str:
    if emit:
        with contextlib.suppress(Exception):
            emit("Reloading tasks from storage...")
    tasks = state.task_store.reload()
    return f"Reloaded {len(tasks)} tasks."


def cmd_status(state: AppState, args: list[str]) -> str:
    settings = state.settings
    store = state.task_store
    backend = getattr(settings, "store_backend", "?")
    path = getattr(state.kv, "path", None)
    return (
        "Status:\n"
        f"  Backend: {backend} ({path})\n"
        f"  Tasks: {store.count()} ({store.completed_count()} completed)\n"
        f"  Unsaved changes: {'YES' if store.dirty else 'no'}"
    )


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("add", cmd_add, help_text="Add a task: /add <text>.")
registry.register("done", cmd_done, help_text="Toggle completion: /done <number>.", aliases=["toggle"])
registry.register("clear", cmd_clear, help_text="Remove all completed tasks.")
registry.register("list", cmd_list, help_text="Show tasks.", aliases=["ls"])
registry.register("reload", cmd_reload, help_text="Re-read tasks from storage.")
registry.register("status", cmd_status, help_text="Show backend, counts and save state.")
