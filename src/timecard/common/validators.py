from __future__ import annotations

from typing import Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], message: str) -> str:
    if not value or not value.strip():
        raise ValidationError(message)
    return value.strip()


def require_max_length(value: str, max_len: int, message: str) -> str:
    if len(value) > max_len:
        raise ValidationError(message)
    return value
