"""Time utilities - DRY principle"""
from datetime import datetime, timedelta, timezone
from typing import Optional


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


def days_ago(days: int, now: Optional[datetime] = None) -> datetime:
    """Start of a trailing window of ``days`` days"""
    return (now or now_utc()) - timedelta(days=days)


def to_iso_utc(value: Optional[datetime]) -> Optional[str]:
    """ISO-8601 string; naive datetimes from MongoDB are UTC"""
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat()


def to_date_str(value: Optional[datetime]) -> str:
    if value is None:
        return ""
    return value.strftime("%Y-%m-%d")


def seconds_to_hours(seconds: float) -> float:
    return round((seconds or 0) / 3600, 2)
