from __future__ import annotations

import io
import logging
from typing import Sequence

import pandas as pd
from openpyxl.styles import Font, PatternFill

from ..common.datetime_utils import format_local_date, format_local_time
from ..core.exceptions import ExportError
from ..records.model import AttendanceRecord
from .aggregator import StatRow, build_statistics

logger = logging.getLogger(__name__)

RECORDS_SHEET = "勤怠記録"
STATS_SHEET = "統計情報"

RECORD_COLUMNS = [
    ("日付", 12),
    ("時刻", 10),
    ("区分", 20),
    ("コメント", 40),
    ("タイムスタンプ", 26),
]
STATS_COLUMNS = [
    ("項目", 28),
    ("値", 10),
]

HEADER_FONT = Font(bold=True)
HEADER_FILL = PatternFill(fill_type="solid", fgColor="FFE0E0E0")


def _style_sheet(ws, columns) -> None:
    for idx, (_, width) in enumerate(columns, start=1):
        cell = ws.cell(row=1, column=idx)
        cell.font = HEADER_FONT
        cell.fill = HEADER_FILL
        ws.column_dimensions[cell.column_letter].width = width


def _keep_as_text(ws) -> None:
    # openpyxl stores any "=..." string as a formula; user text must stay text.
    for row in ws.iter_rows(min_row=2):
        for cell in row:
            if isinstance(cell.value, str) and cell.value.startswith("="):
                cell.data_type = "s"


class ReportExporter:
    """Builds the two-sheet attendance workbook (records + statistics)."""

    def records_frame(self, records: Sequence[AttendanceRecord]) -> pd.DataFrame:
        data = [
            {
                "日付": format_local_date(r.instant),
                "時刻": format_local_time(r.instant),
                "区分": r.type.value,
                "コメント": r.comment or "",
                "タイムスタンプ": r.timestamp,
            }
            for r in records
        ]
        return pd.DataFrame(data, columns=[name for name, _ in RECORD_COLUMNS])

    def stats_frame(self, stats: Sequence[StatRow]) -> pd.DataFrame:
        data = [{"項目": s.label, "値": s.value} for s in stats]
        return pd.DataFrame(data, columns=[name for name, _ in STATS_COLUMNS])

    def export(self, records: Sequence[AttendanceRecord]) -> bytes:
        # Build in memory only; the caller gets the full document or an error.
        try:
            records_df = self.records_frame(records)
            stats_df = self.stats_frame(build_statistics(records))

            output = io.BytesIO()
            with pd.ExcelWriter(output, engine="openpyxl") as writer:
                records_df.to_excel(writer, index=False, sheet_name=RECORDS_SHEET)
                stats_df.to_excel(writer, index=False, sheet_name=STATS_SHEET)
                _style_sheet(writer.sheets[RECORDS_SHEET], RECORD_COLUMNS)
                _keep_as_text(writer.sheets[RECORDS_SHEET])
                _style_sheet(writer.sheets[STATS_SHEET], STATS_COLUMNS)
            return output.getvalue()
        except Exception as e:
            logger.exception("export failed for %d records", len(records))
            raise ExportError("Excel出力に失敗しました") from e
