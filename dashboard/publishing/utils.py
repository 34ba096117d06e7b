from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Optional


def utcnow() -> datetime:
    return datetime.now(tz=timezone.utc)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def parse_timestamp(value: object) -> Optional[datetime]:
    """Parse a backend timestamp, returning ``None`` for anything unusable.

    Accepts ISO-8601 strings (including a trailing ``Z``), epoch milliseconds and
    ``datetime`` instances. Naive values are treated as UTC.
    """

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return _as_utc(value)
    if isinstance(value, (int, float)):
        if not math.isfinite(value):
            return None
        try:
            return datetime.fromtimestamp(value / 1000.0, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            return _as_utc(datetime.fromisoformat(text))
        except ValueError:
            return None
    return None


def resolve_now(now: Optional[datetime]) -> datetime:
    return utcnow() if now is None else _as_utc(now)


def relative_time(value: Optional[datetime], now: Optional[datetime] = None) -> str:
    """Return a compact "5m ago" / "2h from now" label for ``value``."""

    if value is None:
        return "-"
    diff = (resolve_now(now) - _as_utc(value)).total_seconds()
    suffix = "ago" if diff > 0 else "from now"
    seconds = int(abs(diff))
    if seconds < 60:
        return f"{seconds}s {suffix}"
    minutes = seconds // 60
    if minutes < 60:
        return f"{minutes}m {suffix}"
    hours = minutes // 60
    if hours < 24:
        return f"{hours}h {suffix}"
    return f"{hours // 24}d {suffix}"


def format_timestamp(value: Optional[datetime]) -> str:
    if value is None:
        return "-"
    return _as_utc(value).isoformat()
