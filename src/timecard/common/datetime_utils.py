"""Fixed-offset (UTC+9) clock helpers.

Every grouping and "today" lookup goes through these functions so the
result never depends on the host's configured time zone or locale.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Optional, Union

from ..core.constants import LOCAL_TZ

Instant = Union[datetime, str]


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def utc_now() -> datetime:
    """Current aware UTC time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(timezone.utc)


def parse_timestamp(value: str) -> datetime:
    """Parse a stored ISO-8601 timestamp into an aware datetime.

    Accepts the ``Z`` suffix; values without an offset are read as UTC.
    """

    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _as_local(instant: Instant) -> datetime:
    if isinstance(instant, str):
        instant = parse_timestamp(instant)
    elif instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(LOCAL_TZ)


def to_timestamp(instant: datetime) -> str:
    """Canonical stored form: UTC, millisecond precision, ``Z`` suffix."""
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)
    utc = instant.astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


def date_key_of(instant: Instant) -> str:
    return _as_local(instant).strftime("%Y-%m-%d")


def now_local_date(now: Optional[datetime] = None) -> str:
    return date_key_of(now or utc_now())


def format_local_time(instant: Instant) -> str:
    return _as_local(instant).strftime("%H:%M:%S")


def format_local_date(instant: Instant) -> str:
    return _as_local(instant).strftime("%Y/%m/%d")


def format_local_datetime(instant: Instant) -> str:
    return _as_local(instant).strftime("%Y/%m/%d %H:%M:%S")
