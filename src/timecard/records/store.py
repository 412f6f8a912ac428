from __future__ import annotations

import logging
from typing import Any, Sequence

from ..core.constants import DEFAULT_COLLECTION_KEY
from ..core.enums import PunchType
from ..core.exceptions import StorageError, ValidationError
from ..storage.backend import CollectionBackend
from .model import AttendanceRecord

logger = logging.getLogger(__name__)


def _sorted(records: Sequence[AttendanceRecord]) -> list[AttendanceRecord]:
    # list.sort is stable: equal timestamps keep insertion order.
    return sorted(records, key=lambda r: r.instant)


def _check_record(record: AttendanceRecord) -> None:
    if not isinstance(record.type, PunchType):
        raise ValidationError("無効な打刻タイプです")
    if record.type == PunchType.COMMENT and (not record.comment or not record.comment.strip()):
        raise ValidationError("コメントを入力してください")


class RecordStore:
    """Canonical collection of attendance records.

    The whole collection is one unit of storage: mutations are a single
    read-modify-write inside ``backend.update`` and leave the stored
    collection untouched when they fail.
    """

    def __init__(self, backend: CollectionBackend, *, key: str = DEFAULT_COLLECTION_KEY):
        self._backend = backend
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    def _decode(self, items: list[dict[str, Any]]) -> list[AttendanceRecord]:
        try:
            return [AttendanceRecord.from_dict(item) for item in items]
        except (KeyError, TypeError, ValidationError) as e:
            logger.error("collection %s holds an unreadable record: %s", self._key, e)
            raise StorageError("stored collection is corrupted") from e

    def append(self, record: AttendanceRecord) -> None:
        _check_record(record)
        try:
            with self._backend.update(self._key) as items:
                records = self._decode(items)
                if any(r.id == record.id for r in records):
                    raise ValidationError(f"duplicate record id: {record.id}")
                records.append(record)
                items[:] = [r.to_dict() for r in _sorted(records)]
        except ValidationError:
            logger.warning("append rejected for record %s", record.id)
            raise
        except StorageError:
            logger.exception("append failed for record %s", record.id)
            raise
        logger.info("appended record %s (%s)", record.id, record.type.value)

    def list_all(self) -> list[AttendanceRecord]:
        return _sorted(self._decode(self._backend.read(self._key)))

    def list_by_date(self, date_key: str) -> list[AttendanceRecord]:
        return [r for r in self.list_all() if r.date == date_key]

    def delete_by_id(self, record_id: str) -> bool:
        deleted = False
        try:
            with self._backend.update(self._key) as items:
                records = self._decode(items)
                kept = [r for r in records if r.id != record_id]
                deleted = len(kept) != len(records)
                items[:] = [r.to_dict() for r in kept]
        except StorageError:
            logger.exception("delete failed for record %s", record_id)
            raise
        if deleted:
            logger.info("deleted record %s", record_id)
        else:
            logger.info("delete: record %s not found", record_id)
        return deleted
