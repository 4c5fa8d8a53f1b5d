"""
Attendance Record Repository - Data access layer for legacy attendance records
"""
from typing import Any, Dict, Optional
from sqlalchemy.orm import Session

from atams.db import BaseRepository
from workforce_attendance.models.attendance_record import AttendanceRecord


class AttendanceRecordRepository(BaseRepository[AttendanceRecord]):
    def __init__(self):
        super().__init__(AttendanceRecord)

    def get_by_id(self, db: Session, attendance_id: int) -> Optional[AttendanceRecord]:
        return self.get(db, attendance_id)

    def apply_override(
        self,
        db: Session,
        record: AttendanceRecord,
        changes: Dict[str, Any],
        actor_id: int,
        reason: str
    ) -> AttendanceRecord:
        """
        Stage an override on the record without committing

        Caller owns the transaction so the audit entry lands with it.
        """
        for field, value in changes.items():
            setattr(record, field, value)

        record.ar_is_overridden = True
        record.ar_override_by = actor_id
        record.ar_override_reason = reason

        db.add(record)
        db.flush()
        return record
