"""Stable string forms of task field values for diffing and history rows."""

from __future__ import annotations

from datetime import UTC, date, datetime
from enum import Enum


def as_utc(value: datetime) -> datetime:
    """Naive datetimes are taken to be UTC."""

    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def canonical_value(value: object) -> str | None:
    """``None`` stays ``None``; dates become ISO-8601; everything else ``str``."""

    if value is None:
        return None
    if isinstance(value, datetime):
        return as_utc(value).isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)
