from .attendance_event import AttendanceEvent
from .attendance_daily_summary import AttendanceDailySummary
from .attendance_record import AttendanceRecord
from .audit_log import AuditLog

__all__ = [
    "AttendanceEvent",
    "AttendanceDailySummary",
    "AttendanceRecord",
    "AuditLog"
]
