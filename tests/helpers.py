from datetime import datetime, timezone

from workforce_attendance.core.enums import AttendanceEventType
from workforce_attendance.services.session_pairer import PairingEvent


def utc(year, month, day, hour=0, minute=0, second=0):
    return datetime(year, month, day, hour, minute, second, tzinfo=timezone.utc)


def check_in(timestamp):
    return PairingEvent(AttendanceEventType.CHECK_IN, timestamp)


def check_out(timestamp):
    return PairingEvent(AttendanceEventType.CHECK_OUT, timestamp)
