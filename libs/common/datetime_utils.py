"""Datetime utilities for timezone-aware UTC timestamps.

Usage:
    from libs.common.datetime_utils import utc_now

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now
    )
"""

from datetime import date, datetime, time, timedelta, timezone
from zoneinfo import ZoneInfo

from libs.common.config import get_settings


def utc_now() -> datetime:
    """Return timezone-aware UTC datetime.

    Always use this for timestamps in the database.
    """
    return datetime.now(timezone.utc)


def local_today() -> date:
    """Return today's calendar date in the gym's configured timezone."""
    return datetime.now(ZoneInfo(get_settings().TIMEZONE)).date()


def ensure_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes, convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def as_utc_datetime(value: date | datetime) -> datetime:
    """Normalize a date (midnight UTC) or datetime to an aware UTC datetime."""
    if isinstance(value, datetime):
        return ensure_utc(value)
    return datetime.combine(value, time.min, tzinfo=timezone.utc)


def start_of_day(value: date | datetime) -> datetime:
    day = value.date() if isinstance(value, datetime) else value
    return datetime.combine(day, time.min, tzinfo=timezone.utc)


def end_of_day(value: date | datetime) -> datetime:
    return start_of_day(value) + timedelta(days=1) - timedelta(microseconds=1)
