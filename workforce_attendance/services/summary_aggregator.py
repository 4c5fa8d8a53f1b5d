"""
Summary Aggregator - Sole writer of the daily summary cache

Every recompute reads the full day of events under a per-(user, day) lock
and replaces the stored summary, so the last writer always reflects every
event committed before it took the lock.
"""
from typing import List, Optional, Set, Tuple, Union
from datetime import date, datetime
from zoneinfo import ZoneInfo
from sqlalchemy.orm import Session

from atams.logging import get_logger
from workforce_attendance.core.keyed_lock import KeyedLock
from workforce_attendance.core.timeutils import day_bounds, day_of, ensure_utc, get_reference_timezone
from workforce_attendance.repositories.attendance_event_repository import AttendanceEventRepository
from workforce_attendance.repositories.attendance_summary_repository import AttendanceSummaryRepository
from workforce_attendance.schemas.attendance import AttendanceDailySummary, RecomputedDailySummary
from workforce_attendance.services.session_pairer import PairingEvent, compute_daily_summary

logger = get_logger(__name__)

# Shared by every aggregator in the process
day_locks = KeyedLock()


class SummaryAggregator:
    def __init__(
        self,
        event_repo: Optional[AttendanceEventRepository] = None,
        summary_repo: Optional[AttendanceSummaryRepository] = None,
        tz: Optional[ZoneInfo] = None,
        locks: Optional[KeyedLock] = None
    ) -> None:
        self.event_repo = event_repo or AttendanceEventRepository()
        self.summary_repo = summary_repo or AttendanceSummaryRepository()
        self._tz = tz
        self.locks = locks or day_locks

    @property
    def tz(self) -> ZoneInfo:
        return self._tz or get_reference_timezone()

    def recompute(
        self,
        db: Session,
        user_id: int,
        day: Union[date, datetime]
    ) -> RecomputedDailySummary:
        """
        Recompute and persist the summary of one user-day

        Args:
            db: Database session
            user_id: Owner of the events
            day: Calendar day, or an instant resolved to its day in the
                reference timezone

        Returns:
            RecomputedDailySummary: Stored row plus the open session start
        """
        target_day = day_of(day, self.tz)
        start, end = day_bounds(target_day, self.tz)

        with self.locks.hold((user_id, target_day)):
            self.summary_repo.lock_day(db, user_id, target_day)

            events = self.event_repo.get_events_between(db, user_id, start, end)
            computation = compute_daily_summary(
                PairingEvent(event_type=e.ae_event_type, timestamp=ensure_utc(e.ae_timestamp))
                for e in events
            )

            summary = self.summary_repo.upsert_summary(
                db,
                user_id,
                target_day,
                {
                    "ads_first_check_in": computation.first_check_in,
                    "ads_last_check_out": computation.last_check_out,
                    "ads_total_work_minutes": computation.total_work_minutes,
                    "ads_total_break_minutes": computation.total_break_minutes,
                    "ads_sessions_count": computation.sessions_count,
                    "ads_status": computation.status.value
                }
            )

        logger.debug(
            "Daily summary recomputed",
            extra={'extra_data': {
                'user_id': user_id,
                'date': target_day.isoformat(),
                'events': len(events),
                'status': computation.status.value,
                'total_work_minutes': computation.total_work_minutes
            }}
        )

        return RecomputedDailySummary.model_validate(
            {
                **AttendanceDailySummary.model_validate(summary).model_dump(),
                "current_session_started_at": computation.current_session_started_at
            }
        )

    def rebuild(
        self,
        db: Session,
        date_from: date,
        date_to: date,
        user_id: Optional[int] = None
    ) -> int:
        """
        Recompute every (user, day) in the inclusive range that has events
        or an existing summary row

        Returns:
            int: Number of summaries rebuilt
        """
        range_start, _ = day_bounds(date_from, self.tz)
        _, range_end = day_bounds(date_to, self.tz)

        keys: Set[Tuple[int, date]] = set()
        for event_user_id, timestamp in self.event_repo.get_event_instants(db, range_start, range_end, user_id):
            keys.add((event_user_id, day_of(timestamp, self.tz)))
        keys.update(self.summary_repo.get_user_days(db, date_from, date_to, user_id))

        for key_user_id, key_day in sorted(keys):
            self.recompute(db, key_user_id, key_day)

        logger.info(
            "Daily summaries rebuilt",
            extra={'extra_data': {
                'date_from': date_from.isoformat(),
                'date_to': date_to.isoformat(),
                'user_id': user_id,
                'rebuilt_count': len(keys)
            }}
        )
        return len(keys)

    def list_summaries(
        self,
        db: Session,
        user_id: Optional[int] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        skip: int = 0,
        limit: int = 20
    ) -> List[AttendanceDailySummary]:
        """Stored summaries, newest day first, without recomputing"""
        summaries = self.summary_repo.get_summaries(db, user_id, date_from, date_to, skip, limit)
        return [AttendanceDailySummary.model_validate(s) for s in summaries]

    def count_summaries(
        self,
        db: Session,
        user_id: Optional[int] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None
    ) -> int:
        return self.summary_repo.count_summaries(db, user_id, date_from, date_to)

