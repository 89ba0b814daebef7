# src/pocket_todo/storage/kv_sqlite.py

from __future__ import annotations

import contextlib
import logging
import sqlite3
from collections.abc import Iterable, Mapping
from pathlib import Path

from ..core.ports import KVValue
from .errors import StorageError

logger = logging.getLogger(__name__)

_KIND_STR = "str"
_KIND_BOOL = "bool"


def _encode(key: str, value: KVValue) -> tuple[str, str]:
    if isinstance(value, bool):
        return _KIND_BOOL, "1" if value else "0"
    if isinstance(value, str):
        return _KIND_STR, value
    raise TypeError(f"Unsupported value type for key {key!r}: {type(value).__name__}")


def _decode(kind: str | None, raw: str | None) -> KVValue:
    if kind == _KIND_BOOL:
        return raw == "1"
    return raw or ""


class SqliteKeyValueStore:
    """
    SQLite-backed key-value store.

    One table of (key, kind, value) rows; kind keeps booleans distinct from
    strings so entries come back with the type they were written with.

    Thread-safety:
    - each method opens its own SQLite connection
    - edit() runs in a single transaction
    """

    def __init__(self, db_path: str | Path = "task_preferences.sqlite3") -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()
        logger.info("SqliteKeyValueStore ready db=%s", self._db_path)

    @property
    def path(self) -> Path:
        return self._db_path

    def close(self) -> None:
        """Compatibility hook for shutdown (no persistent connections to close)."""
        return

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        try:
            conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        except sqlite3.Error as e:
            raise StorageError(f"Cannot open {self._db_path}") from e
        conn.row_factory = sqlite3.Row
        self._configure_conn(conn)
        return conn

    @staticmethod
    def _configure_conn(conn: sqlite3.Connection) -> None:
        with contextlib.suppress(sqlite3.Error):
            conn.execute("PRAGMA journal_mode=WAL")

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS entries (
                    key TEXT PRIMARY KEY,
                    kind TEXT NOT NULL DEFAULT 'str',
                    value TEXT NOT NULL
                )
                """
            )
            conn.commit()
        except sqlite3.Error as e:
            raise StorageError(f"Cannot create schema in {self._db_path}") from e
        finally:
            conn.close()

    # ---- public API ----

    def read_all(self) -> dict[str, KVValue]:
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute("SELECT key, kind, value FROM entries")
            return {str(r["key"]): _decode(r["kind"], r["value"]) for r in cur.fetchall()}
        except sqlite3.Error as e:
            raise StorageError(f"Read failed db={self._db_path}") from e
        finally:
            conn.close()

    def edit(
        self,
        *,
        put: Mapping[str, KVValue] | None = None,
        remove: Iterable[str] = (),
    ) -> None:
        rows = [(k, *_encode(k, v)) for k, v in (put or {}).items()]
        doomed = [(k,) for k in remove]

        conn = self._get_conn()
        try:
            # "with conn" commits on success and rolls back on any exception.
            with conn:
                if doomed:
                    conn.executemany("DELETE FROM entries WHERE key = ?", doomed)
                if rows:
                    conn.executemany(
                        """
                        INSERT INTO entries(key, kind, value) VALUES (?, ?, ?)
                        ON CONFLICT(key) DO UPDATE SET kind = excluded.kind, value = excluded.value
                        """,
                        rows,
                    )
            logger.debug("KV edit db=%s put=%d remove=%d", self._db_path, len(rows), len(doomed))
        except sqlite3.Error as e:
            raise StorageError(f"Write failed db={self._db_path}") from e
        finally:
            conn.close()

    def delete(self, key: str) -> None:
        self.edit(remove=[key])
