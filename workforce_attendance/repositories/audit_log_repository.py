"""
Audit Log Repository - Data access layer for the administrative audit trail
"""
from typing import Any, Dict, Optional
from sqlalchemy.orm import Session

from atams.db import BaseRepository
from workforce_attendance.models.audit_log import AuditLog


class AuditLogRepository(BaseRepository[AuditLog]):
    def __init__(self):
        super().__init__(AuditLog)

    def add_entry(
        self,
        db: Session,
        actor_id: int,
        action: str,
        entity_type: str,
        entity_id: Any,
        payload: Optional[Dict[str, Any]] = None
    ) -> AuditLog:
        """Stage an audit entry in the current transaction (no commit)"""
        entry = AuditLog(
            al_actor_id=actor_id,
            al_action=action,
            al_entity_type=entity_type,
            al_entity_id=str(entity_id),
            al_payload=payload
        )
        db.add(entry)
        db.flush()
        return entry
