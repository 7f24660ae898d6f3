# src/linkfeed/db/time.py
"""Clock helpers shared by models, services and schemas."""

from datetime import UTC, datetime


def utcnow() -> datetime:
    """Current time, timezone-aware in UTC."""
    return datetime.now(UTC)


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes read back from SQLite."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def epoch_millis() -> int:
    return int(utcnow().timestamp() * 1000)
