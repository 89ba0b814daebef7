# tests/test_commands.py

from __future__ import annotations

from pocket_todo.cli.commands import CommandRegistry, registry
from pocket_todo.connectors.console_connector import handle_line, run_console_loop
from pocket_todo.core.state import AppState
from pocket_todo.tasks.task_store import TaskStore

from .fakes import FlakyKeyValueStore


def test_command_registry_routes_2_and_3_params(state) -> None:
    reg = CommandRegistry()
    called = {"h2": 0, "h3": 0}

    def h2(state, args):
        called["h2"] += 1
        return "h2"

    def h3(state, args, emit):
        called["h3"] += 1
        if emit is not None:
            emit("note")
        return "h3"

    reg.register("a", h2, "a")
    reg.register("b", h3, "b")

    assert reg.handle(state, "/a x") == "h2"
    assert reg.handle(state, "/b y", emit=lambda _: None) == "h3"
    assert called["h2"] == 1
    assert called["h3"] == 1


def test_command_registry_unknown_and_non_command(state) -> None:
    reg = CommandRegistry()
    assert reg.handle(state, "hello") is None
    assert "Unknown command" in (reg.handle(state, "/nope") or "")
    assert "Empty command" in (reg.handle(state, "/") or "")


def test_add_list_done_clear_flow(state: AppState) -> None:
    assert registry.handle(state, "/add buy milk") == "Added: buy milk"
    assert handle_line(state, "walk the dog") == "Added: walk the dog"
    assert "Nothing to add" in registry.handle(state, "/add")

    listing = registry.handle(state, "/list")
    assert " 1. [ ] buy milk" in listing
    assert " 2. [ ] walk the dog" in listing

    assert registry.handle(state, "/done 1") == "Completed: buy milk"
    assert "[x] buy milk" in registry.handle(state, "/ls")
    assert registry.handle(state, "/toggle 1") == "Reopened: buy milk"
    registry.handle(state, "/done 1")

    assert "No task number 9" in registry.handle(state, "/done 9")
    assert "No task number x" in registry.handle(state, "/done x")

    assert registry.handle(state, "/clear") == "Removed 1 completed task."
    assert registry.handle(state, "/clear") == "No completed tasks to remove."
    assert [t.text for t in state.task_store.snapshot()] == ["walk the dog"]


def test_reload_emits_progress(state: AppState) -> None:
    state.task_store.add("a")
    notes: list[str] = []

    reply = registry.handle(state, "/reload", emit=notes.append)

    assert reply == "Reloaded 1 tasks."
    assert notes == ["Reloading tasks from storage..."]


def test_status_reports_counts(state: AppState) -> None:
    state.task_store.add("a")
    reply = registry.handle(state, "/status")
    assert "Tasks: 1 (0 completed)" in reply
    assert "Unsaved changes: no" in reply


def test_storage_error_becomes_reply(settings) -> None:
    kv = FlakyKeyValueStore()
    state = AppState(settings=settings, kv=kv, task_store=TaskStore(kv))
    kv.fail_writes = True

    reply = handle_line(state, "/add lost")

    assert reply.startswith("Storage error: write refused (disk full)")
    assert "/reload" in reply
    assert state.task_store.dirty is True


def test_console_loop_reads_until_exit(state: AppState, capsys) -> None:
    lines = iter(["first task", "", "/list", "/exit", "never read"])

    run_console_loop(state, read_line=lambda _prompt: next(lines))

    out = capsys.readouterr().out
    assert "Added: first task" in out
    assert "[ ] first task" in out
    assert [t.text for t in state.task_store.snapshot()] == ["first task"]


def test_console_loop_stops_on_eof(state: AppState) -> None:
    def _eof(_prompt: str) -> str:
        raise EOFError

    run_console_loop(state, read_line=_eof)
