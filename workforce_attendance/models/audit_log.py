"""
Audit Log Model - Trail of administrative changes
"""
from sqlalchemy import Column, BigInteger, Integer, String, DateTime, JSON
from sqlalchemy.sql import func
from atams.db import Base


class AuditLog(Base):
    """Audit Log model for workforce schema - Table: workforce.audit_logs"""
    __tablename__ = "audit_logs"
    __table_args__ = {"schema": "workforce"}

    al_id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, index=True, autoincrement=True)
    al_actor_id = Column(BigInteger, nullable=False, index=True)
    al_action = Column(String(64), nullable=False)  # e.g. 'ATTENDANCE_OVERRIDE'
    al_entity_type = Column(String(64), nullable=False)
    al_entity_id = Column(String(64), nullable=False)
    al_payload = Column(JSON, nullable=True)
    al_created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
