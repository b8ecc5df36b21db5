"""Time helpers shared by models and services."""

from __future__ import annotations

from datetime import UTC, date, datetime, tzinfo
from zoneinfo import ZoneInfo


def utcnow() -> datetime:
    """Return the current UTC time as a naive datetime (the storage convention)."""
    return datetime.now(UTC).replace(tzinfo=None)


def to_naive_utc(value: datetime) -> datetime:
    """Normalize an aware datetime to naive UTC; naive values are assumed UTC already."""
    if value.tzinfo is None:
        return value
    return value.astimezone(UTC).replace(tzinfo=None)


def resolve_zone(name: str | None) -> tzinfo | None:
    """Return the named zone, or `None` for the server-local zone."""
    if not name or not name.strip():
        return None
    return ZoneInfo(name.strip())


def local_date(value: datetime, zone: tzinfo | None = None) -> date:
    """Calendar date of a naive-UTC timestamp in *zone* (server-local when `None`)."""
    return value.replace(tzinfo=UTC).astimezone(zone).date()
