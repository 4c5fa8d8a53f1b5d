"""
Time helpers - UTC normalization and calendar day resolution
"""
from datetime import date, datetime, time, timedelta, timezone
from typing import Optional, Tuple, Union
from zoneinfo import ZoneInfo

from workforce_attendance.core.config import settings


def get_reference_timezone() -> ZoneInfo:
    """Timezone used to cut the event log into calendar days"""
    return ZoneInfo(settings.ATTENDANCE_TIMEZONE)


def utc_now() -> datetime:
    """Current UTC time truncated to millisecond precision"""
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


def ensure_utc(value: Optional[datetime]) -> Optional[datetime]:
    """
    Normalize a datetime to aware UTC.

    Naive values are stored UTC wall time (SQLite drops the offset),
    so they are tagged rather than converted.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def day_of(value: Union[date, datetime], tz: ZoneInfo) -> date:
    """Calendar day a date or instant belongs to in the reference timezone"""
    # datetime is a subclass of date, check it first
    if isinstance(value, datetime):
        return ensure_utc(value).astimezone(tz).date()
    return value


def day_bounds(day: date, tz: ZoneInfo) -> Tuple[datetime, datetime]:
    """
    Half-open UTC interval [start, end) covering one calendar day

    Returns:
        tuple: (day start in UTC, next day start in UTC)
    """
    start = datetime.combine(day, time.min, tzinfo=tz)
    end = datetime.combine(day + timedelta(days=1), time.min, tzinfo=tz)
    return start.astimezone(timezone.utc), end.astimezone(timezone.utc)


def today(tz: ZoneInfo) -> date:
    return utc_now().astimezone(tz).date()
