from __future__ import annotations

from enum import Enum

from .exceptions import ValidationError


class PunchType(str, Enum):
    """打刻イベントの種別。値はコレクションに保存されるラベル。"""

    CLOCK_IN = "Clock In"
    CLOCK_OUT = "Clock Out"
    AWAY_FROM_KEYBOARD = "Away From Keyboard"
    BACK = "Back"
    COMMENT = "Comment"


# Types counted in the global statistics rows; Comment is excluded from them.
PUNCH_TYPES = (
    PunchType.CLOCK_IN,
    PunchType.CLOCK_OUT,
    PunchType.AWAY_FROM_KEYBOARD,
    PunchType.BACK,
)

_LEGACY_LABELS = {
    "出勤": PunchType.CLOCK_IN,
    "退勤": PunchType.CLOCK_OUT,
    "休憩開始": PunchType.AWAY_FROM_KEYBOARD,
    "休憩終了": PunchType.BACK,
    "コメント": PunchType.COMMENT,
}


def _compact(value: str) -> str:
    return value.replace(" ", "").replace("_", "").lower()


_BY_COMPACT_NAME = {}
for _member in PunchType:
    _BY_COMPACT_NAME[_compact(_member.name)] = _member
    _BY_COMPACT_NAME[_compact(_member.value)] = _member


def normalize_punch_type(value) -> PunchType:
    """Map a canonical, legacy or enum-name label onto ``PunchType``.

    Accepts "Clock In", "出勤", "CLOCK_IN" and "ClockIn" alike.
    """

    if isinstance(value, PunchType):
        return value
    if not isinstance(value, str) or not value.strip():
        raise ValidationError("打刻タイプが指定されていません")

    label = value.strip()
    if label in _LEGACY_LABELS:
        return _LEGACY_LABELS[label]

    punch_type = _BY_COMPACT_NAME.get(_compact(label))
    if punch_type is None:
        raise ValidationError(f"無効な打刻タイプです: {label}")
    return punch_type
