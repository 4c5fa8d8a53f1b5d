"""
Attendance Schemas for events, daily summaries and overrides
"""
import re
from typing import Optional
from datetime import date, datetime, timezone
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from workforce_attendance.core.enums import AttendanceEventType, DeviceType, DailySummaryStatus


def normalize_db_datetime(v):
    """
    Fix datetime timezone format coming back from the database

    PostgreSQL text form '2025-10-01 09:17:39.587802+00' gets a ':00' suffix,
    naive values (SQLite) are UTC wall time and get tagged as such.
    """
    if v == '' or v is None:
        return None

    if isinstance(v, str):
        if re.search(r'([+-]\d{2})$', v):
            v = v + ':00'
    elif isinstance(v, datetime) and v.tzinfo is None:
        v = v.replace(tzinfo=timezone.utc)

    return v


# Event schemas

class AttendanceEventPayload(BaseModel):
    """Request body for check-in and check-out"""
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    accuracy: Optional[float] = Field(None, ge=0, description="Location accuracy in meters")
    location_id: Optional[str] = Field(None, max_length=64)
    task_id: Optional[str] = Field(None, max_length=64)
    device_type: DeviceType = DeviceType.MOBILE

    @model_validator(mode='after')
    def check_coordinates(self):
        if (self.latitude is None) != (self.longitude is None):
            raise ValueError("latitude and longitude must be provided together")
        if self.accuracy is not None and self.latitude is None:
            raise ValueError("accuracy requires latitude and longitude")
        return self


class AttendanceEventInDB(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    ae_id: int
    ae_user_id: int
    ae_event_type: AttendanceEventType
    ae_timestamp: datetime
    ae_latitude: Optional[float] = None
    ae_longitude: Optional[float] = None
    ae_accuracy: Optional[float] = None
    ae_location_id: Optional[str] = None
    ae_task_id: Optional[str] = None
    ae_device_type: DeviceType = DeviceType.MOBILE
    ae_created_at: Optional[datetime] = None

    @field_validator('ae_timestamp', 'ae_created_at', mode='before')
    @classmethod
    def fix_datetime_timezone(cls, v):
        return normalize_db_datetime(v)


class AttendanceEvent(AttendanceEventInDB):
    pass


class AttendanceEventRef(BaseModel):
    """Created event as echoed back by check-in/check-out"""
    id: int
    event_type: AttendanceEventType
    timestamp: datetime


# Daily summary schemas

class AttendanceDailySummaryInDB(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    ads_id: int
    ads_user_id: int
    ads_date: date
    ads_first_check_in: Optional[datetime] = None
    ads_last_check_out: Optional[datetime] = None
    ads_total_work_minutes: int = 0
    ads_total_break_minutes: int = 0
    ads_sessions_count: int = 0
    ads_status: DailySummaryStatus = DailySummaryStatus.ABSENT
    ads_created_at: Optional[datetime] = None
    ads_updated_at: Optional[datetime] = None

    @field_validator('ads_first_check_in', 'ads_last_check_out', 'ads_created_at', 'ads_updated_at', mode='before')
    @classmethod
    def fix_datetime_timezone(cls, v):
        return normalize_db_datetime(v)


class AttendanceDailySummary(AttendanceDailySummaryInDB):
    pass


class RecomputedDailySummary(AttendanceDailySummary):
    """Persisted summary plus the open session start, which is never stored"""
    current_session_started_at: Optional[datetime] = None


class FormattedDailySummary(BaseModel):
    """Read-time view of a daily summary including live accrual of an open session"""
    id: int
    user_id: int
    date: date
    first_check_in: Optional[datetime] = None
    last_check_out: Optional[datetime] = None
    total_work_minutes: int
    total_worked_seconds: int
    total_break_minutes: int
    sessions_count: int
    status: DailySummaryStatus
    hours_worked: str
    current_session_started_at: Optional[str] = None


class MeAttendanceResponse(BaseModel):
    """Compact view of the current user's day"""
    date: date
    check_in_at: Optional[datetime] = None
    check_out_at: Optional[datetime] = None
    total_work_minutes: int
    hours_worked: str
    status: DailySummaryStatus


class TodayAttendanceResponse(BaseModel):
    """Today's attendance, null when nothing was recorded yet"""
    attendance: Optional[FormattedDailySummary] = None


class CheckEventResponse(BaseModel):
    """Response schema for check-in and check-out"""
    event: AttendanceEventRef
    summary: FormattedDailySummary


# Legacy override schemas

class AttendanceOverrideRequest(BaseModel):
    check_in_at: Optional[datetime] = None
    check_out_at: Optional[datetime] = None
    reason: str = Field(..., min_length=1, max_length=500)


class AttendanceRecordInDB(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    ar_id: int
    ar_user_id: int
    ar_date: date
    ar_check_in_at: Optional[datetime] = None
    ar_check_out_at: Optional[datetime] = None
    ar_is_overridden: bool = False
    ar_override_by: Optional[int] = None
    ar_override_reason: Optional[str] = None
    ar_created_at: Optional[datetime] = None
    ar_updated_at: Optional[datetime] = None

    @field_validator('ar_check_in_at', 'ar_check_out_at', 'ar_created_at', 'ar_updated_at', mode='before')
    @classmethod
    def fix_datetime_timezone(cls, v):
        return normalize_db_datetime(v)


class AttendanceRecord(AttendanceRecordInDB):
    pass


# Maintenance

class RebuildResult(BaseModel):
    """Summary rebuild operation result"""
    rebuilt_count: int
    date_from: date
    date_to: date
    message: str
