from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from typing import Any, Iterator

import mysql.connector

from ..core.exceptions import StorageError
from ..database.connection import transaction

logger = logging.getLogger(__name__)


def _decode(payload) -> list[dict[str, Any]]:
    if payload is None or payload == "":
        return []
    if isinstance(payload, (bytes, bytearray)):
        payload = payload.decode("utf-8")
    data = json.loads(payload)
    if not isinstance(data, list):
        raise ValueError("stored collection is not a list")
    return data


class MySQLCollectionBackend:
    """Collections stored as JSON text, one row per key in ``collections``.

    ``update`` locks the row with ``SELECT ... FOR UPDATE`` for the whole
    read-modify-write, so concurrent writers queue on the row lock.
    """

    def __init__(self, conn_factory):
        self._conn_factory = conn_factory

    def read(self, key: str) -> list[dict[str, Any]]:
        try:
            with transaction(self._conn_factory) as cur:
                cur.execute("SELECT payload FROM collections WHERE name=%s", (key,))
                row = cur.fetchone()
                return _decode(row["payload"]) if row else []
        except (mysql.connector.Error, ValueError) as e:
            logger.error("read failed for collection %s: %s", key, e)
            raise StorageError("failed to read collection") from e

    @contextmanager
    def update(self, key: str) -> Iterator[list[dict[str, Any]]]:
        try:
            with transaction(self._conn_factory) as cur:
                # Make sure the row exists so FOR UPDATE has something to lock.
                cur.execute("INSERT IGNORE INTO collections(name, payload) VALUES(%s, %s)", (key, "[]"))
                cur.execute("SELECT payload FROM collections WHERE name=%s FOR UPDATE", (key,))
                row = cur.fetchone()
                try:
                    items = _decode(row["payload"]) if row else []
                except ValueError as e:
                    logger.error("collection %s is not valid JSON: %s", key, e)
                    raise StorageError("stored collection is corrupted") from e

                yield items

                cur.execute(
                    "UPDATE collections SET payload=%s WHERE name=%s",
                    (json.dumps(items, ensure_ascii=False), key),
                )
        except mysql.connector.Error as e:
            logger.error("write failed for collection %s: %s", key, e)
            raise StorageError("failed to write collection") from e
