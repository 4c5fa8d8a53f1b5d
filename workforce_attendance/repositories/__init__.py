from .attendance_event_repository import AttendanceEventRepository
from .attendance_summary_repository import AttendanceSummaryRepository
from .attendance_record_repository import AttendanceRecordRepository
from .audit_log_repository import AuditLogRepository

__all__ = [
    "AttendanceEventRepository",
    "AttendanceSummaryRepository",
    "AttendanceRecordRepository",
    "AuditLogRepository"
]
