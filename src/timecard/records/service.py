from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import format_local_datetime, now_local_date, utc_now
from ..common.validators import require_max_length, require_non_empty
from ..core.constants import COMMENT_MAX_LENGTH, EXPORT_FILENAME_PREFIX
from ..core.enums import PunchType, normalize_punch_type
from ..reports.aggregator import counts_by_type, group_by_date
from ..reports.exporter import ReportExporter
from .model import AttendanceRecord
from .store import RecordStore


@dataclass(frozen=True)
class PunchResult:
    record: AttendanceRecord
    message: str
    confirmed_at: str


@dataclass(frozen=True)
class ExportedReport:
    filename: str
    content: bytes


class AttendanceService:
    def __init__(self, store: RecordStore, *, exporter: ReportExporter | None = None):
        self._store = store
        self._exporter = exporter or ReportExporter()

    def punch(self, punch_type, comment: Optional[str] = None, *, now: datetime | None = None) -> PunchResult:
        """Validate a punch/comment request, store it and build the confirmation."""
        ptype = normalize_punch_type(punch_type)

        if ptype == PunchType.COMMENT:
            comment = require_non_empty(comment, "コメントを入力してください")
            require_max_length(
                comment, COMMENT_MAX_LENGTH, f"コメントは{COMMENT_MAX_LENGTH}文字以内で入力してください"
            )

        record = AttendanceRecord.create(ptype, comment=comment, now=now or utc_now())
        self._store.append(record)

        return PunchResult(
            record=record,
            message=f"{ptype.value}を記録しました",
            confirmed_at=format_local_datetime(record.instant),
        )

    def list_records(self, date_key: Optional[str] = None) -> list[AttendanceRecord]:
        if date_key:
            return self._store.list_by_date(date_key)
        return self._store.list_all()

    def today_records(self, *, now: datetime | None = None) -> list[AttendanceRecord]:
        return self._store.list_by_date(now_local_date(now))

    def summary(self) -> dict:
        """Totals per type and day groups (newest day first) for the admin view."""
        records = self._store.list_all()
        counts = counts_by_type(records)
        return {
            "total": len(records),
            "counts": {t.value: n for t, n in counts.items()},
            "days": [
                {"date": g.date, "records": [r.to_dict() for r in g.records]}
                for g in group_by_date(records)
            ],
        }

    def delete_record(self, record_id: str) -> bool:
        return self._store.delete_by_id(record_id)

    def export_report(self, *, now: datetime | None = None) -> ExportedReport:
        snapshot = self._store.list_all()
        content = self._exporter.export(snapshot)
        filename = f"{EXPORT_FILENAME_PREFIX}_{now_local_date(now)}.xlsx"
        return ExportedReport(filename=filename, content=content)
