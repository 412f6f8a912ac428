from __future__ import annotations

from timecard.core.enums import PunchType
from timecard.records.model import AttendanceRecord
from timecard.reports.aggregator import (
    StatRow,
    build_statistics,
    counts_by_date,
    counts_by_type,
    group_by_date,
)


def rec(record_id: str, ts: str, ptype: PunchType, comment=None) -> AttendanceRecord:
    return AttendanceRecord(id=record_id, type=ptype, timestamp=ts, comment=comment)


RECORDS = [
    rec("1", "2024-03-01T00:00:00.000Z", PunchType.CLOCK_IN),
    rec("2", "2024-03-01T03:00:00.000Z", PunchType.AWAY_FROM_KEYBOARD),
    rec("3", "2024-03-01T04:00:00.000Z", PunchType.BACK),
    rec("4", "2024-03-01T05:00:00.000Z", PunchType.COMMENT, "memo"),
    rec("5", "2024-03-01T09:00:00.000Z", PunchType.CLOCK_OUT),
    rec("6", "2024-03-01T23:55:00.000Z", PunchType.CLOCK_IN),
]


def test_counts_by_type_is_zero_filled():
    assert counts_by_type([]) == {t: 0 for t in PunchType}

    counts = counts_by_type(RECORDS)
    assert counts[PunchType.CLOCK_IN] == 2
    assert counts[PunchType.CLOCK_OUT] == 1
    assert counts[PunchType.COMMENT] == 1


def test_counts_by_date_first_appearance_order():
    by_date = counts_by_date(RECORDS)

    assert list(by_date) == ["2024-03-01", "2024-03-02"]
    assert by_date["2024-03-01"][PunchType.CLOCK_IN] == 1
    assert by_date["2024-03-01"][PunchType.BACK] == 1
    assert by_date["2024-03-02"][PunchType.CLOCK_IN] == 1
    assert by_date["2024-03-02"][PunchType.CLOCK_OUT] == 0


def test_statistics_rows_in_emission_order():
    rows = build_statistics(RECORDS)

    assert rows == [
        StatRow("総記録数", 6),
        StatRow("Clock In回数", 2),
        StatRow("Clock Out回数", 1),
        StatRow("Away From Keyboard回数", 1),
        StatRow("Back回数", 1),
        StatRow("2024-03-01 Clock In", 1),
        StatRow("2024-03-01 Clock Out", 1),
        StatRow("2024-03-02 Clock In", 1),
        StatRow("2024-03-02 Clock Out", 0),
    ]


def test_statistics_for_no_records():
    rows = build_statistics([])

    assert [r.label for r in rows] == [
        "総記録数",
        "Clock In回数",
        "Clock Out回数",
        "Away From Keyboard回数",
        "Back回数",
    ]
    assert all(r.value == 0 for r in rows)


def test_group_by_date():
    groups = group_by_date(RECORDS)

    assert [g.date for g in groups] == ["2024-03-02", "2024-03-01"]
    assert [r.id for r in groups[1].records] == ["1", "2", "3", "4", "5"]
    assert [g.date for g in group_by_date(RECORDS, newest_first=False)] == ["2024-03-01", "2024-03-02"]
