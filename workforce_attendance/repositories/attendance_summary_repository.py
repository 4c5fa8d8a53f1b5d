"""
Attendance Summary Repository - Data access layer for derived daily summaries
"""
import zlib
from typing import Any, Dict, List, Optional, Tuple
from datetime import date
from sqlalchemy.orm import Session

from atams.db import BaseRepository
from workforce_attendance.models.attendance_daily_summary import AttendanceDailySummary


class AttendanceSummaryRepository(BaseRepository[AttendanceDailySummary]):
    def __init__(self):
        super().__init__(AttendanceDailySummary)

    def lock_day(self, db: Session, user_id: int, day: date) -> None:
        """
        Take a transaction-scoped advisory lock on (user, day)

        Only PostgreSQL supports it; the lock is released by the next commit
        or rollback, i.e. when the summary upsert finishes.
        """
        if db.get_bind().dialect.name != "postgresql":
            return

        lock_key = zlib.crc32(f"attendance-summary:{user_id}:{day.isoformat()}".encode("utf-8"))
        self.execute_raw_sql(db, "SELECT pg_advisory_xact_lock(:lock_key)", {"lock_key": lock_key})

    def upsert_summary(
        self,
        db: Session,
        user_id: int,
        day: date,
        fields: Dict[str, Any]
    ) -> AttendanceDailySummary:
        """Create or fully replace the summary row for (user, day) and commit"""
        summary, _ = self.update_or_create(
            db,
            filters={"ads_user_id": user_id, "ads_date": day},
            defaults=fields
        )
        return summary

    def get_summaries(
        self,
        db: Session,
        user_id: Optional[int] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        skip: int = 0,
        limit: int = 20
    ) -> List[AttendanceDailySummary]:
        """Get stored summaries with filters, newest day first"""
        query = self._filtered_query(db, user_id, date_from, date_to)
        return query.order_by(
            AttendanceDailySummary.ads_date.desc(),
            AttendanceDailySummary.ads_user_id.asc()
        ).offset(skip).limit(limit).all()

    def count_summaries(
        self,
        db: Session,
        user_id: Optional[int] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None
    ) -> int:
        return self._filtered_query(db, user_id, date_from, date_to).count()

    def get_user_days(
        self,
        db: Session,
        date_from: date,
        date_to: date,
        user_id: Optional[int] = None
    ) -> List[Tuple[int, date]]:
        """Get (user_id, day) keys of stored summaries in the inclusive range"""
        query = db.query(
            AttendanceDailySummary.ads_user_id,
            AttendanceDailySummary.ads_date
        ).filter(
            AttendanceDailySummary.ads_date >= date_from,
            AttendanceDailySummary.ads_date <= date_to
        )

        if user_id is not None:
            query = query.filter(AttendanceDailySummary.ads_user_id == user_id)

        return [(row[0], row[1]) for row in query.all()]

    def _filtered_query(
        self,
        db: Session,
        user_id: Optional[int],
        date_from: Optional[date],
        date_to: Optional[date]
    ):
        query = db.query(AttendanceDailySummary)

        if user_id is not None:
            query = query.filter(AttendanceDailySummary.ads_user_id == user_id)
        if date_from:
            query = query.filter(AttendanceDailySummary.ads_date >= date_from)
        if date_to:
            query = query.filter(AttendanceDailySummary.ads_date <= date_to)

        return query
