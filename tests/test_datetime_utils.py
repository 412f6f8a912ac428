from __future__ import annotations

import time
from datetime import datetime, timedelta, timezone

import pytest

from timecard.common.datetime_utils import (
    date_key_of,
    format_local_date,
    format_local_datetime,
    format_local_time,
    now_local_date,
    parse_iso_date,
    parse_timestamp,
    to_timestamp,
)


def test_late_utc_evening_is_next_local_day():
    assert date_key_of("2024-03-01T23:30:00Z") == "2024-03-02"
    assert date_key_of("2024-03-01T14:59:59.999Z") == "2024-03-01"
    assert date_key_of("2024-03-01T15:00:00.000Z") == "2024-03-02"


def test_to_timestamp_is_utc_millis_with_z():
    jst = timezone(timedelta(hours=9))
    instant = datetime(2024, 3, 2, 8, 30, 0, 123456, tzinfo=jst)

    assert to_timestamp(instant) == "2024-03-01T23:30:00.123Z"


def test_parse_timestamp_accepts_z_offsets_and_naive():
    assert parse_timestamp("2024-03-01T23:30:00.000Z") == datetime(2024, 3, 1, 23, 30, tzinfo=timezone.utc)
    assert parse_timestamp("2024-03-02T08:30:00+09:00") == datetime(2024, 3, 1, 23, 30, tzinfo=timezone.utc)
    assert parse_timestamp("2024-03-01T23:30:00") == datetime(2024, 3, 1, 23, 30, tzinfo=timezone.utc)


def test_local_formats_are_zero_padded():
    ts = "2024-03-01T00:05:09.000Z"

    assert format_local_time(ts) == "09:05:09"
    assert format_local_date(ts) == "2024/03/01"
    assert format_local_datetime(ts) == "2024/03/01 09:05:09"


def test_now_local_date_uses_fixed_offset():
    assert now_local_date(datetime(2024, 3, 1, 15, 0, tzinfo=timezone.utc)) == "2024-03-02"
    assert now_local_date(datetime(2024, 3, 1, 14, 0, tzinfo=timezone.utc)) == "2024-03-01"


@pytest.mark.skipif(not hasattr(time, "tzset"), reason="tzset not available")
def test_output_ignores_host_timezone(monkeypatch):
    ts = "2024-03-01T23:30:00.000Z"
    expected = (date_key_of(ts), format_local_datetime(ts))

    monkeypatch.setenv("TZ", "America/Los_Angeles")
    time.tzset()
    try:
        assert (date_key_of(ts), format_local_datetime(ts)) == expected
    finally:
        monkeypatch.undo()
        time.tzset()


def test_parse_iso_date_rejects_garbage():
    assert parse_iso_date("2024-03-02").day == 2
    with pytest.raises(ValueError):
        parse_iso_date("03/02/2024")
