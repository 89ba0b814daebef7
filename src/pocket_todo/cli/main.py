# src/pocket_todo/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState (loading tasks from storage), then runs
the console connector.
"""

from __future__ import annotations

import logging
import sys

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..core.state import AppState
from ..logging_setup import setup_logging
from ..storage.errors import StorageError

logger = logging.getLogger(__name__)


def _shutdown(state: AppState) -> None:
    """Best-effort shutdown (no exceptions should escape)."""
    if state.task_store.dirty:
        try:
            state.task_store.persist()
        except StorageError:
            logger.error("Final save failed; last changes were not written.")

    try:
        state.kv.close()
    except Exception:
        logger.debug("Key-value store close failed.", exc_info=True)


def main() -> int:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    log_file = setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info("Starting %s (log file %s)...", settings.app_name, log_file)

    try:
        state = create_initial_state(settings=settings)
    except StorageError:
        logger.exception("Cannot load tasks from %s", settings.store_path)
        print(f"Cannot load tasks from {settings.store_path}. See the log for details.", file=sys.stderr)
        return 1

    try:
        if settings.console_enabled:
            run_console_loop(state)
        else:
            logger.info("Console disabled; nothing to run.")
    finally:
        _shutdown(state)
        logger.info("Bye.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
