from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator

from ..core.exceptions import StorageError

logger = logging.getLogger(__name__)


class JsonFileBackend:
    """One ``<key>.json`` file per collection under ``data_dir``.

    Writers are serialized by a lock; the file is replaced atomically so
    lock-free readers always see a complete document.
    """

    def __init__(self, data_dir: str | os.PathLike):
        self._data_dir = Path(data_dir)
        self._lock = threading.Lock()

    def _path(self, key: str) -> Path:
        return self._data_dir / f"{key}.json"

    def _load(self, key: str) -> list[dict[str, Any]]:
        path = self._path(key)
        try:
            with open(path, "r", encoding="utf-8") as f:
                raw = f.read()
        except FileNotFoundError:
            return []
        except OSError as e:
            logger.error("read failed for collection %s: %s", key, e)
            raise StorageError("failed to read collection") from e

        if not raw.strip():
            return []
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.error("collection %s is not valid JSON: %s", key, e)
            raise StorageError("stored collection is corrupted") from e
        if not isinstance(data, list):
            raise StorageError("stored collection is not a list")
        return data

    def _write(self, key: str, items: list[dict[str, Any]]) -> None:
        path = self._path(key)
        try:
            self._data_dir.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{key}.", suffix=".tmp", dir=self._data_dir)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(items, f, ensure_ascii=False, indent=2)
                    f.flush()
                    os.fsync(f.fileno())
                os.replace(tmp_name, path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except (OSError, TypeError, ValueError) as e:
            logger.error("write failed for collection %s: %s", key, e)
            raise StorageError("failed to write collection") from e

    def read(self, key: str) -> list[dict[str, Any]]:
        return self._load(key)

    @contextmanager
    def update(self, key: str) -> Iterator[list[dict[str, Any]]]:
        with self._lock:
            items = self._load(key)
            yield items
            self._write(key, items)
