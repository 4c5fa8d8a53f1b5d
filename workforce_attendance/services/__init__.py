from .summary_aggregator import SummaryAggregator
from .attendance_service import AttendanceService
from .override_service import AttendanceOverrideService

__all__ = [
    "SummaryAggregator",
    "AttendanceService",
    "AttendanceOverrideService"
]
