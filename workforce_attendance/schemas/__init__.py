from atams.schemas import DataResponse, PaginationResponse

from .attendance import (
    AttendanceEventPayload,
    AttendanceEvent,
    AttendanceEventRef,
    AttendanceDailySummary,
    RecomputedDailySummary,
    FormattedDailySummary,
    MeAttendanceResponse,
    TodayAttendanceResponse,
    CheckEventResponse,
    AttendanceOverrideRequest,
    AttendanceRecord,
    RebuildResult
)

__all__ = [
    # Attendance schemas
    "AttendanceEventPayload",
    "AttendanceEvent",
    "AttendanceEventRef",
    "AttendanceDailySummary",
    "RecomputedDailySummary",
    "FormattedDailySummary",
    "MeAttendanceResponse",
    "TodayAttendanceResponse",
    "CheckEventResponse",
    "AttendanceOverrideRequest",
    "AttendanceRecord",
    "RebuildResult",
    # Common schemas
    "DataResponse",
    "PaginationResponse"
]
