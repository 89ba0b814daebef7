# src/pocket_todo/storage/kv_json.py

from __future__ import annotations

import contextlib
import json
import logging
import os
import threading
from collections.abc import Iterable, Mapping
from pathlib import Path

from ..core.ports import KVValue
from .errors import StorageError

logger = logging.getLogger(__name__)


class JsonFileKeyValueStore:
    """
    Key-value store kept as a single JSON object on disk.

    Every write rewrites the whole document into "<name>.tmp" and moves it over
    the target with os.replace, so readers see either the old or the new file.
    """

    def __init__(self, path: str | Path = "task_preferences.json") -> None:
        self._path = Path(path)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()
        logger.info("JsonFileKeyValueStore ready path=%s", self._path)

    @property
    def path(self) -> Path:
        return self._path

    def close(self) -> None:
        return

    def _read_unlocked(self) -> dict[str, KVValue]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text("utf-8"))
        except (OSError, ValueError) as e:
            raise StorageError(f"Read failed path={self._path}") from e

        if not isinstance(data, dict):
            raise StorageError(f"Unexpected JSON root in {self._path}: {type(data).__name__}")

        out: dict[str, KVValue] = {}
        for key, value in data.items():
            if isinstance(value, (str, bool)):
                out[str(key)] = value
            else:
                logger.warning("Skipping non string/bool entry key=%s in %s", key, self._path)
        return out

    def _write_unlocked(self, data: dict[str, KVValue]) -> None:
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            tmp.write_text(json.dumps(data, ensure_ascii=False, indent=2, sort_keys=True), "utf-8")
            os.replace(tmp, self._path)
        except OSError as e:
            with contextlib.suppress(OSError):
                tmp.unlink()
            raise StorageError(f"Write failed path={self._path}") from e

    def read_all(self) -> dict[str, KVValue]:
        with self._lock:
            return self._read_unlocked()

    def edit(
        self,
        *,
        put: Mapping[str, KVValue] | None = None,
        remove: Iterable[str] = (),
    ) -> None:
        put = dict(put or {})
        for key, value in put.items():
            if not isinstance(value, (str, bool)):
                raise TypeError(f"Unsupported value type for key {key!r}: {type(value).__name__}")

        with self._lock:
            data = self._read_unlocked()
            removed = 0
            for key in remove:
                if data.pop(key, None) is not None:
                    removed += 1
            data.update(put)
            self._write_unlocked(data)
        logger.debug("KV edit path=%s put=%d removed=%d", self._path, len(put), removed)

    def delete(self, key: str) -> None:
        self.edit(remove=[key])
