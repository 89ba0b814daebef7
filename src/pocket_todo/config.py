# src/pocket_todo/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Nothing is written at import time.
- Tests pass their own settings object instead of reading the environment.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "POCKET"

STORE_BACKENDS = ("sqlite", "json")
DEFAULT_STORE_BACKEND = "sqlite"

# Matches the preferences file name the mobile app used.
STORE_BASENAME = "task_preferences"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


load_dotenv(override=False)


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Connector flags ----
    console_enabled: bool

    # ---- Storage ----
    store_backend: str

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    sqlite_path: Path
    json_path: Path

    @property
    def store_path(self) -> Path:
        """Path of the active backend's file."""
        return self.json_path if self.store_backend == "json" else self.sqlite_path

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "pocket-todo").strip() or "pocket-todo"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        console_enabled = _env_bool(_k("CONSOLE_ENABLED"), True)

        # Unknown names are kept as-is; bootstrap warns and falls back.
        store_backend = _env(_k("STORE_BACKEND"), DEFAULT_STORE_BACKEND).strip().lower()

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/pocket_todo"))
        sqlite_path = _env_path(_k("SQLITE_PATH"), data_dir / f"{STORE_BASENAME}.sqlite3")
        json_path = _env_path(_k("JSON_PATH"), data_dir / f"{STORE_BASENAME}.json")

        return Settings(
            app_name=app_name,
            log_level=log_level,
            console_enabled=console_enabled,
            store_backend=store_backend,
            data_dir=data_dir,
            sqlite_path=sqlite_path,
            json_path=json_path,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
