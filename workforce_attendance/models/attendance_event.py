"""
Attendance Event Model - Append-only log of check-in/check-out facts
"""
from sqlalchemy import Column, BigInteger, Integer, String, DateTime, Float, Index
from sqlalchemy.sql import func
from atams.db import Base


class AttendanceEvent(Base):
    """Attendance Event model for workforce schema - Table: workforce.attendance_events"""
    __tablename__ = "attendance_events"
    __table_args__ = (
        Index("ix_attendance_events_user_timestamp", "ae_user_id", "ae_timestamp"),
        {"schema": "workforce"},
    )

    # INTEGER on SQLite so the rowid alias autoincrements; ae_id doubles as insertion sequence
    ae_id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, index=True, autoincrement=True)
    ae_user_id = Column(BigInteger, nullable=False, index=True)  # References external users table
    ae_event_type = Column(String(16), nullable=False)  # 'CHECK_IN' or 'CHECK_OUT'
    ae_timestamp = Column(DateTime(timezone=True), nullable=False)  # UTC, millisecond precision
    ae_latitude = Column(Float, nullable=True)
    ae_longitude = Column(Float, nullable=True)
    ae_accuracy = Column(Float, nullable=True)  # Meters
    ae_location_id = Column(String(64), nullable=True)
    ae_task_id = Column(String(64), nullable=True)
    ae_device_type = Column(String(10), nullable=False, default="MOBILE")  # 'MOBILE' or 'DESKTOP'
    ae_created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
