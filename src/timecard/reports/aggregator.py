"""Per-type and per-day counts over a record snapshot.

All functions are pure: they read the sequence they are given and keep
no state between calls.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from ..core.enums import PUNCH_TYPES, PunchType
from ..records.model import AttendanceRecord

# Only these types are broken out per day in the statistics sheet.
DAILY_TYPES = (PunchType.CLOCK_IN, PunchType.CLOCK_OUT)


@dataclass(frozen=True)
class StatRow:
    label: str
    value: int


@dataclass(frozen=True)
class DayGroup:
    date: str
    records: list[AttendanceRecord]


def _zeroed() -> dict[PunchType, int]:
    return {t: 0 for t in PunchType}


def counts_by_type(records: Iterable[AttendanceRecord]) -> dict[PunchType, int]:
    counts = _zeroed()
    for r in records:
        counts[r.type] += 1
    return counts


def counts_by_date(records: Iterable[AttendanceRecord]) -> dict[str, dict[PunchType, int]]:
    """Nested counts keyed by day, in order of first appearance."""
    out: dict[str, dict[PunchType, int]] = {}
    for r in records:
        day = out.get(r.date)
        if day is None:
            day = _zeroed()
            out[r.date] = day
        day[r.type] += 1
    return out


def build_statistics(records: Sequence[AttendanceRecord]) -> list[StatRow]:
    """Statistics rows in emission order.

    1. total record count
    2. one row per punch type (Comment excluded)
    3. per observed day, in first-appearance order: Clock In then Clock Out
    """

    totals = counts_by_type(records)
    rows = [StatRow("総記録数", len(records))]
    rows.extend(StatRow(f"{t.value}回数", totals[t]) for t in PUNCH_TYPES)

    for day, counts in counts_by_date(records).items():
        rows.extend(StatRow(f"{day} {t.value}", counts[t]) for t in DAILY_TYPES)
    return rows


def group_by_date(records: Iterable[AttendanceRecord], *, newest_first: bool = True) -> list[DayGroup]:
    grouped: dict[str, list[AttendanceRecord]] = {}
    for r in records:
        grouped.setdefault(r.date, []).append(r)
    days = sorted(grouped, reverse=newest_first)
    return [DayGroup(date=d, records=grouped[d]) for d in days]
