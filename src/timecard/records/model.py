from __future__ import annotations

import random
import string
import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from ..common.datetime_utils import date_key_of, parse_timestamp, to_timestamp, utc_now
from ..core.enums import PunchType, normalize_punch_type
from ..core.exceptions import ValidationError

_ID_ALPHABET = string.ascii_lowercase + string.digits


def generate_record_id(now_ms: Optional[int] = None) -> str:
    """``<epoch-millis>-<9 base36 chars>``, e.g. ``1709335800000-k3j9x0a1q``."""
    millis = int(time.time() * 1000) if now_ms is None else now_ms
    suffix = "".join(random.choices(_ID_ALPHABET, k=9))
    return f"{millis}-{suffix}"


@dataclass(frozen=True)
class AttendanceRecord:
    """ドメインエンティティ: 打刻またはコメント1件。"""

    id: str
    type: PunchType
    timestamp: str
    comment: Optional[str] = None
    _instant: datetime = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        try:
            instant = parse_timestamp(self.timestamp)
        except (TypeError, ValueError) as e:
            raise ValidationError(f"invalid timestamp: {self.timestamp!r}") from e
        object.__setattr__(self, "_instant", instant)

    @property
    def instant(self) -> datetime:
        return self._instant

    @property
    def date(self) -> str:
        # Always derived; a stored "date" is never trusted.
        return date_key_of(self._instant)

    @classmethod
    def create(
        cls,
        punch_type: PunchType,
        *,
        comment: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> "AttendanceRecord":
        now = now or utc_now()
        if punch_type != PunchType.COMMENT:
            comment = None
        elif comment is not None:
            comment = comment.strip()
        return cls(
            id=generate_record_id(int(now.timestamp() * 1000)),
            type=punch_type,
            timestamp=to_timestamp(now),
            comment=comment,
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AttendanceRecord":
        comment = data.get("comment")
        return cls(
            id=str(data["id"]),
            type=normalize_punch_type(data["type"]),
            timestamp=str(data["timestamp"]),
            comment=comment if comment else None,
        )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "id": self.id,
            "type": self.type.value,
            "timestamp": self.timestamp,
            "date": self.date,
        }
        if self.comment:
            out["comment"] = self.comment
        return out
