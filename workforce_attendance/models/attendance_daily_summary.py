"""
Attendance Daily Summary Model - Derived per-user, per-day aggregate of the event log
"""
from sqlalchemy import Column, BigInteger, Integer, String, Date, DateTime, UniqueConstraint
from sqlalchemy.sql import func
from atams.db import Base


class AttendanceDailySummary(Base):
    """Attendance Daily Summary model for workforce schema - Table: workforce.attendance_daily_summaries"""
    __tablename__ = "attendance_daily_summaries"
    __table_args__ = (
        UniqueConstraint("ads_user_id", "ads_date", name="uq_attendance_daily_summaries_user_date"),
        {"schema": "workforce"},
    )

    ads_id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, index=True, autoincrement=True)
    ads_user_id = Column(BigInteger, nullable=False, index=True)
    ads_date = Column(Date, nullable=False, index=True)  # Calendar day in ATTENDANCE_TIMEZONE
    ads_first_check_in = Column(DateTime(timezone=True), nullable=True)
    ads_last_check_out = Column(DateTime(timezone=True), nullable=True)
    ads_total_work_minutes = Column(Integer, nullable=False, default=0)
    ads_total_break_minutes = Column(Integer, nullable=False, default=0)
    ads_sessions_count = Column(Integer, nullable=False, default=0)
    ads_status = Column(String(24), nullable=False, default="ABSENT")
    ads_created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    ads_updated_at = Column(DateTime(timezone=True), onupdate=func.now(), nullable=True)
