"""
Override Service - Manual corrections of legacy attendance records

Touches only the legacy record and the audit trail; the event log and
the daily summaries are never read or written here.
"""
from typing import Any, Dict, Optional
from sqlalchemy.orm import Session

from atams.exceptions import NotFoundException
from atams.logging import get_logger
from atams.transaction import transaction
from workforce_attendance.repositories.attendance_record_repository import AttendanceRecordRepository
from workforce_attendance.repositories.audit_log_repository import AuditLogRepository
from workforce_attendance.schemas.attendance import AttendanceOverrideRequest, AttendanceRecord

logger = get_logger(__name__)

OVERRIDE_AUDIT_ACTION = "ATTENDANCE_OVERRIDE"
OVERRIDE_AUDIT_ENTITY = "attendance"


class AttendanceOverrideService:
    def __init__(
        self,
        record_repo: Optional[AttendanceRecordRepository] = None,
        audit_repo: Optional[AuditLogRepository] = None
    ) -> None:
        self.record_repo = record_repo or AttendanceRecordRepository()
        self.audit_repo = audit_repo or AuditLogRepository()

    def override(
        self,
        db: Session,
        attendance_id: int,
        actor_id: int,
        request: AttendanceOverrideRequest
    ) -> AttendanceRecord:
        """
        Overwrite check-in/check-out times of a legacy record

        Args:
            db: Database session
            attendance_id: Legacy record ID
            actor_id: User performing the override
            request: New times and the mandatory reason

        Returns:
            AttendanceRecord: Updated record

        Raises:
            NotFoundException: If the record does not exist
        """
        record = self.record_repo.get_by_id(db, attendance_id)
        if not record:
            raise NotFoundException("Attendance record not found")

        changes: Dict[str, Any] = {}
        if request.check_in_at is not None:
            changes["ar_check_in_at"] = request.check_in_at
        if request.check_out_at is not None:
            changes["ar_check_out_at"] = request.check_out_at

        with transaction(db):
            record = self.record_repo.apply_override(db, record, changes, actor_id, request.reason)
            self.audit_repo.add_entry(
                db,
                actor_id=actor_id,
                action=OVERRIDE_AUDIT_ACTION,
                entity_type=OVERRIDE_AUDIT_ENTITY,
                entity_id=attendance_id,
                payload={
                    "reason": request.reason,
                    "changes": {
                        "check_in_at": request.check_in_at.isoformat() if request.check_in_at else None,
                        "check_out_at": request.check_out_at.isoformat() if request.check_out_at else None
                    }
                }
            )

        db.refresh(record)

        logger.info(
            "Attendance record overridden",
            extra={'extra_data': {
                'attendance_id': attendance_id,
                'actor_id': actor_id,
                'fields': sorted(changes)
            }}
        )

        return AttendanceRecord.model_validate(record)
