"""
Session Pairer - Pure derivation of a day's work sessions from its event log

Events for one user and one calendar day are walked once, in log order.
Every CHECK_OUT closes the most recent unmatched CHECK_IN; an unmatched
CHECK_IN is replaced by a later one and a CHECK_OUT with nothing open is
ignored. Breaks are only measured between sessions long enough to count
as real work, but every closed session counts toward the worked total.
"""
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Iterable, Optional, Union

from workforce_attendance.core.enums import AttendanceEventType, DailySummaryStatus

# Sessions shorter than this still count as work but never bound a break
MIN_BREAK_BOUNDING_SESSION_MINUTES = 15

# Six hours of closed sessions make a PRESENT day
PRESENT_THRESHOLD_MINUTES = 360

_ONE_MINUTE = timedelta(minutes=1)


@dataclass(frozen=True)
class PairingEvent:
    event_type: AttendanceEventType
    timestamp: datetime


@dataclass(frozen=True)
class PairingResult:
    first_check_in: Optional[datetime] = None
    last_check_out: Optional[datetime] = None
    total_work_minutes: int = 0
    total_break_minutes: int = 0
    sessions_count: int = 0
    open_check_in: Optional[datetime] = None

    @property
    def has_open_check_in(self) -> bool:
        return self.open_check_in is not None


@dataclass(frozen=True)
class DailyComputation:
    """Everything a summary row needs, plus the start of a still-open session"""
    first_check_in: Optional[datetime]
    last_check_out: Optional[datetime]
    total_work_minutes: int
    total_break_minutes: int
    sessions_count: int
    status: DailySummaryStatus
    current_session_started_at: Optional[datetime]


def whole_minutes(earlier: datetime, later: datetime) -> int:
    """Floor of the elapsed minutes between two instants"""
    return (later - earlier) // _ONE_MINUTE


def _event_type(event) -> AttendanceEventType:
    return AttendanceEventType(event.event_type)


def pair_sessions(events: Iterable[Union[PairingEvent, object]]) -> PairingResult:
    """
    Pair check-ins with check-outs in a single pass

    Args:
        events: Objects exposing ``event_type`` and ``timestamp``, already
            ordered by (timestamp, insertion sequence)

    Returns:
        PairingResult: Session totals and the pending check-in, if any
    """
    pending_check_in: Optional[datetime] = None
    first_check_in: Optional[datetime] = None
    last_check_out: Optional[datetime] = None
    last_session_end: Optional[datetime] = None
    total_work_minutes = 0
    total_break_minutes = 0
    sessions_count = 0

    for event in events:
        event_type = _event_type(event)
        timestamp = event.timestamp

        if event_type == AttendanceEventType.CHECK_IN:
            pending_check_in = timestamp
            if first_check_in is None:
                first_check_in = timestamp
            continue

        if pending_check_in is None:
            # orphan check-out
            continue

        session_minutes = whole_minutes(pending_check_in, timestamp)
        sessions_count += 1
        total_work_minutes += session_minutes
        last_check_out = timestamp

        if session_minutes >= MIN_BREAK_BOUNDING_SESSION_MINUTES:
            if last_session_end is not None:
                total_break_minutes += whole_minutes(last_session_end, pending_check_in)
            last_session_end = timestamp

        pending_check_in = None

    return PairingResult(
        first_check_in=first_check_in,
        last_check_out=last_check_out,
        total_work_minutes=total_work_minutes,
        total_break_minutes=total_break_minutes,
        sessions_count=sessions_count,
        open_check_in=pending_check_in
    )


def classify_status(result: PairingResult) -> DailySummaryStatus:
    """First matching rule wins: ABSENT, NEEDS_VERIFICATION, PRESENT, PARTIAL"""
    if result.first_check_in is None and not result.has_open_check_in:
        return DailySummaryStatus.ABSENT
    if result.has_open_check_in:
        return DailySummaryStatus.NEEDS_VERIFICATION
    if result.total_work_minutes >= PRESENT_THRESHOLD_MINUTES:
        return DailySummaryStatus.PRESENT
    return DailySummaryStatus.PARTIAL


def compute_daily_summary(events: Iterable[Union[PairingEvent, object]]) -> DailyComputation:
    result = pair_sessions(events)
    status = classify_status(result)

    current_session_started_at = None
    if status == DailySummaryStatus.NEEDS_VERIFICATION:
        current_session_started_at = result.open_check_in

    return DailyComputation(
        first_check_in=result.first_check_in,
        last_check_out=result.last_check_out,
        total_work_minutes=result.total_work_minutes,
        total_break_minutes=result.total_break_minutes,
        sessions_count=result.sessions_count,
        status=status,
        current_session_started_at=current_session_started_at
    )
