from __future__ import annotations

import io

import pytest
from openpyxl import load_workbook

from timecard.core.enums import PunchType
from timecard.core.exceptions import ExportError
from timecard.records.model import AttendanceRecord
from timecard.reports.exporter import RECORDS_SHEET, STATS_SHEET, ReportExporter


def rec(record_id: str, ts: str, ptype: PunchType, comment=None) -> AttendanceRecord:
    return AttendanceRecord(id=record_id, type=ptype, timestamp=ts, comment=comment)


def rows(ws):
    return [tuple(c.value for c in row) for row in ws.iter_rows()]


def test_empty_export_has_headers_and_zero_stats():
    wb = load_workbook(io.BytesIO(ReportExporter().export([])))

    assert wb.sheetnames == [RECORDS_SHEET, STATS_SHEET]
    records_ws = wb[RECORDS_SHEET]
    assert rows(records_ws) == [("日付", "時刻", "区分", "コメント", "タイムスタンプ")]

    stats = rows(wb[STATS_SHEET])
    assert stats[0] == ("項目", "値")
    assert stats[1:] == [
        ("総記録数", 0),
        ("Clock In回数", 0),
        ("Clock Out回数", 0),
        ("Away From Keyboard回数", 0),
        ("Back回数", 0),
    ]


def test_clock_in_out_day_export():
    records = [
        rec("1", "2024-03-01T00:00:00.000Z", PunchType.CLOCK_IN),
        rec("2", "2024-03-01T05:00:00.000Z", PunchType.COMMENT, "打ち合わせ"),
        rec("3", "2024-03-01T09:00:00.000Z", PunchType.CLOCK_OUT),
    ]
    wb = load_workbook(io.BytesIO(ReportExporter().export(records)))

    data = rows(wb[RECORDS_SHEET])[1:]
    assert data[0][:3] == ("2024/03/01", "09:00:00", "Clock In")
    assert data[0][3] in ("", None)
    assert data[0][4] == "2024-03-01T00:00:00.000Z"
    assert data[1][2:4] == ("Comment", "打ち合わせ")
    assert data[2][:3] == ("2024/03/01", "18:00:00", "Clock Out")

    stats = dict(rows(wb[STATS_SHEET])[1:])
    assert stats["総記録数"] == 3
    assert stats["2024-03-01 Clock In"] == 1
    assert stats["2024-03-01 Clock Out"] == 1
    assert "2024-03-01 Comment" not in stats


def test_header_rows_are_bold_and_shaded():
    wb = load_workbook(io.BytesIO(ReportExporter().export([])))

    for name in (RECORDS_SHEET, STATS_SHEET):
        cell = wb[name]["A1"]
        assert cell.font.bold is True
        assert cell.fill.fill_type == "solid"
        assert cell.fill.fgColor.rgb == "FFE0E0E0"


def test_serialization_failure_raises_export_error(monkeypatch):
    exporter = ReportExporter()

    def boom(_records):
        raise RuntimeError("disk full")

    monkeypatch.setattr(exporter, "records_frame", boom)

    with pytest.raises(ExportError):
        exporter.export([])


def test_formula_like_comment_stays_text():
    records = [rec("1", "2024-03-01T05:00:00.000Z", PunchType.COMMENT, "=1+1")]
    wb = load_workbook(io.BytesIO(ReportExporter().export(records)))

    cell = wb[RECORDS_SHEET]["D2"]
    assert cell.data_type == "s"
    assert cell.value == "=1+1"
