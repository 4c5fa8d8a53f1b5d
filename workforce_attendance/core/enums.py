"""
Attendance enumerations shared by models, schemas and services
"""
from enum import Enum


class AttendanceEventType(str, Enum):
    CHECK_IN = "CHECK_IN"
    CHECK_OUT = "CHECK_OUT"


class DeviceType(str, Enum):
    MOBILE = "MOBILE"
    DESKTOP = "DESKTOP"


class DailySummaryStatus(str, Enum):
    """Closed set of day classifications derived from the event log"""
    PRESENT = "PRESENT"
    PARTIAL = "PARTIAL"
    ABSENT = "ABSENT"
    NEEDS_VERIFICATION = "NEEDS_VERIFICATION"
