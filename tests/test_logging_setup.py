# tests/test_logging_setup.py

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from pocket_todo.logging_setup import LOG_FILE_NAME, _AppOnlyConsoleFilter, setup_logging


@pytest.fixture
def restore_root_logging():
    root = logging.getLogger()
    before = set(root.handlers)
    saved_level = root.level
    yield root
    for h in list(root.handlers):
        if h not in before:
            root.removeHandler(h)
            h.close()
    root.setLevel(saved_level)
    logging.captureWarnings(False)


def _record(name: str, level: int) -> logging.LogRecord:
    return logging.LogRecord(name, level, __file__, 1, "msg", None, None)


@pytest.mark.parametrize(
    ("name", "level", "passes"),
    [
        ("pocket_todo", logging.INFO, True),
        ("pocket_todo.tasks.task_store", logging.DEBUG, True),
        ("pocket_todo_extra", logging.WARNING, False),
        ("urllib3", logging.WARNING, False),
        ("urllib3", logging.ERROR, True),
        ("py.warnings", logging.WARNING, False),
    ],
)
def test_console_filter_keeps_third_party_quiet(name: str, level: int, passes: bool) -> None:
    assert _AppOnlyConsoleFilter().filter(_record(name, level)) is passes


def test_setup_logging_returns_log_file_and_writes_to_it(
    tmp_path: Path, restore_root_logging: logging.Logger
) -> None:
    log_dir = tmp_path / "nested" / "logs"

    log_file = setup_logging(log_dir=log_dir, console_level=logging.WARNING)

    assert log_file == log_dir / LOG_FILE_NAME
    assert log_dir.is_dir()
    assert restore_root_logging.level == logging.DEBUG
    assert len(restore_root_logging.handlers) == 2

    logging.getLogger("pocket_todo.test").debug("written to file only")
    for h in restore_root_logging.handlers:
        h.flush()
    assert "written to file only" in log_file.read_text("utf-8")


def test_setup_logging_replaces_existing_handlers(
    tmp_path: Path, restore_root_logging: logging.Logger
) -> None:
    setup_logging(log_dir=tmp_path)
    setup_logging(log_dir=tmp_path)
    assert len(restore_root_logging.handlers) == 2
