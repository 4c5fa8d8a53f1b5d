"""
Attendance Service - Main business logic for attendance operations
"""
from typing import List, Optional, Tuple
from datetime import date, timedelta
from sqlalchemy.orm import Session

from atams.exceptions import BadRequestException
from atams.logging import get_logger
from workforce_attendance.core.config import settings
from workforce_attendance.core.enums import AttendanceEventType
from workforce_attendance.core.timeutils import day_bounds, get_reference_timezone, today, utc_now
from workforce_attendance.repositories.attendance_event_repository import AttendanceEventRepository
from workforce_attendance.schemas.attendance import (
    AttendanceDailySummary,
    AttendanceEvent,
    AttendanceEventPayload,
    AttendanceEventRef,
    CheckEventResponse,
    FormattedDailySummary,
    MeAttendanceResponse,
    TodayAttendanceResponse
)
from workforce_attendance.services.summary_aggregator import SummaryAggregator
from workforce_attendance.services.summary_formatter import format_me, format_summary, format_today

logger = get_logger(__name__)


class AttendanceService:
    def __init__(
        self,
        event_repo: Optional[AttendanceEventRepository] = None,
        aggregator: Optional[SummaryAggregator] = None
    ) -> None:
        self.event_repo = event_repo or AttendanceEventRepository()
        self.aggregator = aggregator or SummaryAggregator(event_repo=self.event_repo)

    def check_in(
        self,
        db: Session,
        user_id: int,
        payload: Optional[AttendanceEventPayload] = None
    ) -> CheckEventResponse:
        """
        Append a CHECK_IN event and refresh the day's summary

        Never inspects prior state: a second check-in simply replaces the
        pending one when the day is paired.
        """
        return self._record_event(db, user_id, AttendanceEventType.CHECK_IN, payload)

    def check_out(
        self,
        db: Session,
        user_id: int,
        payload: Optional[AttendanceEventPayload] = None
    ) -> CheckEventResponse:
        """Append a CHECK_OUT event and refresh the day's summary"""
        return self._record_event(db, user_id, AttendanceEventType.CHECK_OUT, payload)

    def _record_event(
        self,
        db: Session,
        user_id: int,
        event_type: AttendanceEventType,
        payload: Optional[AttendanceEventPayload]
    ) -> CheckEventResponse:
        payload = payload or AttendanceEventPayload()
        timestamp = utc_now()

        event = self.event_repo.append_event(db, {
            "ae_user_id": user_id,
            "ae_event_type": event_type.value,
            "ae_timestamp": timestamp,
            "ae_latitude": payload.latitude,
            "ae_longitude": payload.longitude,
            "ae_accuracy": payload.accuracy,
            "ae_location_id": payload.location_id,
            "ae_task_id": payload.task_id,
            "ae_device_type": payload.device_type.value
        })

        logger.info(
            "Attendance event recorded",
            extra={'extra_data': {
                'user_id': user_id,
                'event_id': event.ae_id,
                'event_type': event_type.value
            }}
        )

        # event is durable from here; a failed recompute is healed by the next one
        summary = self.aggregator.recompute(db, user_id, timestamp)

        return CheckEventResponse(
            event=AttendanceEventRef(id=event.ae_id, event_type=event_type, timestamp=timestamp),
            summary=format_summary(summary)
        )

    def get_daily_summary(
        self,
        db: Session,
        user_id: int,
        target_date: Optional[date] = None
    ) -> FormattedDailySummary:
        """Recompute the day (idempotent) and format it with live accrual"""
        target_date = target_date or today(get_reference_timezone())
        summary = self.aggregator.recompute(db, user_id, target_date)
        return format_summary(summary)

    def get_me(self, db: Session, user_id: int, target_date: Optional[date] = None) -> MeAttendanceResponse:
        target_date = target_date or today(get_reference_timezone())
        summary = self.aggregator.recompute(db, user_id, target_date)
        return format_me(summary)

    def get_today(self, db: Session, user_id: int) -> TodayAttendanceResponse:
        summary = self.aggregator.recompute(db, user_id, today(get_reference_timezone()))
        return TodayAttendanceResponse(attendance=format_today(summary))

    def get_user_events(
        self,
        db: Session,
        user_id: int,
        target_date: Optional[date] = None,
        skip: int = 0,
        limit: int = 50
    ) -> Tuple[List[AttendanceEvent], int]:
        """Get user's raw events for one day, newest first, with the total count"""
        tz = get_reference_timezone()
        target_date = target_date or today(tz)
        start, end = day_bounds(target_date, tz)

        events = self.event_repo.get_user_events(db, user_id, start, end, skip, limit)
        total = self.event_repo.count_user_events(db, user_id, start, end)
        return [AttendanceEvent.model_validate(e) for e in events], total

    def list_summaries(
        self,
        db: Session,
        user_id: Optional[int] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        skip: int = 0,
        limit: int = 20
    ) -> Tuple[List[AttendanceDailySummary], int]:
        """Get stored summaries (with filters) and the matching total"""
        summaries = self.aggregator.list_summaries(db, user_id, date_from, date_to, skip, limit)
        total = self.aggregator.count_summaries(db, user_id, date_from, date_to)
        return summaries, total

    def resolve_date_range(
        self,
        date_from: Optional[date],
        date_to: Optional[date]
    ) -> Tuple[date, date]:
        """
        Fill in the listing window

        Missing end defaults to today, missing start to the trailing
        ATTENDANCE_LIST_DEFAULT_DAYS window ending at the end date.

        Raises:
            BadRequestException: If the start is after the end
        """
        date_to = date_to or today(get_reference_timezone())
        date_from = date_from or date_to - timedelta(days=settings.ATTENDANCE_LIST_DEFAULT_DAYS)

        if date_from > date_to:
            raise BadRequestException("'from' must be on or before 'to'")

        return date_from, date_to
