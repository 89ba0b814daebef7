# src/pocket_todo/connectors/console_connector.py

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from ..cli.commands import cmd_add, format_task_list, friendly_storage_error_message
from ..cli.commands import registry as command_registry
from ..core.state import AppState
from ..storage.errors import StorageError

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


def handle_line(state: AppState, line: str, emit: Callable[[str], None] | None = None) -> str:
    """
    Turn one line of user input into a reply.

    Slash commands go through the registry; anything else is added as a task.
    Storage failures become a reply, never an exception.
    """
    try:
        with state.lock:
            reply = command_registry.handle(state, line, emit=emit)
            if reply is None:
                reply = cmd_add(state, [line])
    except StorageError as e:
        logger.info("Storage error while handling %r: %s", line, e)
        return friendly_storage_error_message(e)
    return reply


def run_console_loop(state: AppState, *, read_line: Callable[[str], str] = input) -> None:
    logger.info("Console connector started.")
    _print_ts("[CONSOLE] Type a task to add it. Use /help for commands. Use /exit to quit.\n")
    print(format_task_list(state))

    def emit(text: str) -> None:
        print(f"[{_ts_local()}] {text}", flush=True)

    while True:
        try:
            user_input = read_line(">>> ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            reply = handle_line(state, user_input, emit=emit)
        except Exception:
            logger.exception("Command handler crashed.")
            reply = "Internal error while handling a command."

        _print_ts(reply)

    logger.info("Console connector finished.")
