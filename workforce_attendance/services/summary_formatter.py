"""
Summary Formatter - Read-time presentation of daily summaries

Adds the live accrual of a still-open session on top of the stored totals.
Nothing computed here is ever written back.
"""
from datetime import datetime
from typing import Optional

from workforce_attendance.core.timeutils import ensure_utc, utc_now
from workforce_attendance.schemas.attendance import (
    RecomputedDailySummary,
    FormattedDailySummary,
    MeAttendanceResponse
)
from workforce_attendance.services.session_pairer import whole_minutes


def format_duration(total_minutes: int) -> str:
    """
    Human readable duration

    Examples:
        0 -> "0m", 45 -> "45m", 120 -> "2h", 125 -> "2h 5m"
    """
    hours, minutes = divmod(total_minutes, 60)
    if hours and minutes:
        return f"{hours}h {minutes}m"
    if hours:
        return f"{hours}h"
    return f"{minutes}m"


def live_work_minutes(summary: RecomputedDailySummary, now: Optional[datetime] = None) -> int:
    """Stored minutes plus the elapsed part of the open session"""
    total = summary.ads_total_work_minutes
    if summary.current_session_started_at is None:
        return total

    now = ensure_utc(now) if now is not None else utc_now()
    started = ensure_utc(summary.current_session_started_at)
    # clock skew must not subtract from closed sessions
    return total + max(whole_minutes(started, now), 0)


def format_summary(summary: RecomputedDailySummary, now: Optional[datetime] = None) -> FormattedDailySummary:
    total_work_minutes = live_work_minutes(summary, now)
    started = summary.current_session_started_at

    return FormattedDailySummary(
        id=summary.ads_id,
        user_id=summary.ads_user_id,
        date=summary.ads_date,
        first_check_in=summary.ads_first_check_in,
        last_check_out=summary.ads_last_check_out,
        total_work_minutes=total_work_minutes,
        total_worked_seconds=total_work_minutes * 60,
        total_break_minutes=summary.ads_total_break_minutes,
        sessions_count=summary.ads_sessions_count,
        status=summary.ads_status,
        hours_worked=format_duration(total_work_minutes),
        current_session_started_at=ensure_utc(started).isoformat() if started else None
    )


def format_me(summary: RecomputedDailySummary, now: Optional[datetime] = None) -> MeAttendanceResponse:
    total_work_minutes = live_work_minutes(summary, now)

    return MeAttendanceResponse(
        date=summary.ads_date,
        check_in_at=summary.ads_first_check_in,
        check_out_at=summary.ads_last_check_out,
        total_work_minutes=total_work_minutes,
        hours_worked=format_duration(total_work_minutes),
        status=summary.ads_status
    )


def format_today(summary: RecomputedDailySummary, now: Optional[datetime] = None) -> Optional[FormattedDailySummary]:
    """Formatted summary, or None when nothing at all happened that day"""
    if (
        summary.ads_first_check_in is None
        and summary.ads_last_check_out is None
        and summary.ads_sessions_count == 0
    ):
        return None
    return format_summary(summary, now)
