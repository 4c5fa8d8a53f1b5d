"""
Attendance Event Repository - Data access layer for the append-only event log
"""
from typing import List, Optional, Tuple
from datetime import datetime
from sqlalchemy.orm import Session
from sqlalchemy import and_

from atams.db import BaseRepository
from workforce_attendance.models.attendance_event import AttendanceEvent


class AttendanceEventRepository(BaseRepository[AttendanceEvent]):
    def __init__(self):
        super().__init__(AttendanceEvent)

    def append_event(self, db: Session, event_data: dict) -> AttendanceEvent:
        """Insert one event and commit it; rows are never updated afterwards"""
        db_event = AttendanceEvent(**event_data)
        db.add(db_event)
        db.commit()
        db.refresh(db_event)
        return db_event

    def get_events_between(
        self,
        db: Session,
        user_id: int,
        start: datetime,
        end: datetime
    ) -> List[AttendanceEvent]:
        """Get user's events in [start, end) in log order (timestamp, then insertion sequence)"""
        return db.query(AttendanceEvent).filter(
            and_(
                AttendanceEvent.ae_user_id == user_id,
                AttendanceEvent.ae_timestamp >= start,
                AttendanceEvent.ae_timestamp < end
            )
        ).order_by(AttendanceEvent.ae_timestamp.asc(), AttendanceEvent.ae_id.asc()).all()

    def get_user_events(
        self,
        db: Session,
        user_id: int,
        start: datetime,
        end: datetime,
        skip: int = 0,
        limit: int = 50
    ) -> List[AttendanceEvent]:
        """Get user's events in [start, end), newest first, with pagination"""
        return db.query(AttendanceEvent).filter(
            and_(
                AttendanceEvent.ae_user_id == user_id,
                AttendanceEvent.ae_timestamp >= start,
                AttendanceEvent.ae_timestamp < end
            )
        ).order_by(
            AttendanceEvent.ae_timestamp.desc(),
            AttendanceEvent.ae_id.desc()
        ).offset(skip).limit(limit).all()

    def count_user_events(self, db: Session, user_id: int, start: datetime, end: datetime) -> int:
        return db.query(AttendanceEvent).filter(
            and_(
                AttendanceEvent.ae_user_id == user_id,
                AttendanceEvent.ae_timestamp >= start,
                AttendanceEvent.ae_timestamp < end
            )
        ).count()

    def get_event_instants(
        self,
        db: Session,
        start: datetime,
        end: datetime,
        user_id: Optional[int] = None
    ) -> List[Tuple[int, datetime]]:
        """Get (user_id, timestamp) of every event in [start, end), optionally for one user"""
        query = db.query(AttendanceEvent.ae_user_id, AttendanceEvent.ae_timestamp).filter(
            AttendanceEvent.ae_timestamp >= start,
            AttendanceEvent.ae_timestamp < end
        )

        if user_id is not None:
            query = query.filter(AttendanceEvent.ae_user_id == user_id)

        return [(row[0], row[1]) for row in query.all()]
