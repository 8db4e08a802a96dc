from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Any, Sequence, TypeVar

T = TypeVar("T")


def to_finite_float(value: Any) -> float | None:
    """Parse a provider value into a finite float, or None when it is not one."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        casted = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(casted):
        return None
    return casted


def epoch_to_iso(value: Any) -> str:
    return datetime.fromtimestamp(int(value), tz=timezone.utc).isoformat()


def tail(items: Sequence[T], limit: int) -> list[T]:
    """Keep the most recent `limit` items, preserving order."""
    if limit <= 0:
        return []
    return list(items[-limit:])
