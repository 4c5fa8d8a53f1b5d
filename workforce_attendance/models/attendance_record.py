"""
Attendance Record Model - Legacy hand-editable attendance per user and day
"""
from sqlalchemy import Column, BigInteger, Integer, String, Date, DateTime, Boolean
from sqlalchemy.sql import func
from atams.db import Base


class AttendanceRecord(Base):
    """Attendance Record model for workforce schema - Table: workforce.attendance_records"""
    __tablename__ = "attendance_records"
    __table_args__ = {"schema": "workforce"}

    ar_id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, index=True, autoincrement=True)
    ar_user_id = Column(BigInteger, nullable=False, index=True)
    ar_date = Column(Date, nullable=False, index=True)
    ar_check_in_at = Column(DateTime(timezone=True), nullable=True)
    ar_check_out_at = Column(DateTime(timezone=True), nullable=True)
    ar_is_overridden = Column(Boolean, nullable=False, default=False)
    ar_override_by = Column(BigInteger, nullable=True)
    ar_override_reason = Column(String(500), nullable=True)
    ar_created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    ar_updated_at = Column(DateTime(timezone=True), onupdate=func.now(), nullable=True)
