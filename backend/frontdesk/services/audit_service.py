"""
Audit service - system_logs
Records operator actions; created_at is civil time
"""
import logging
from typing import List, Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from frontdesk.domain.civil_time import Clock, civil_now
from frontdesk.models.ontology import SystemLog

logger = logging.getLogger(__name__)


class AuditService:
    """Audit log service"""

    def __init__(self, db: Session, clock: Optional[Clock] = None):
        self.db = db
        self.clock = clock

    def log(self, action: str, details: str, user_id: Optional[int] = None,
            booking_id: Optional[int] = None, commit: bool = False) -> SystemLog:
        """
        Add a log row to the current transaction

        Args:
            action: action code, e.g. CHECKIN_COMPLETED
            details: human readable description
            user_id: operator id
            booking_id: related booking, if any
            commit: commit immediately instead of joining the caller's transaction
        """
        entry = SystemLog(
            action=action,
            details=details,
            user_id=user_id,
            booking_id=booking_id,
            created_at=civil_now(self.clock)
        )
        self.db.add(entry)
        if commit:
            self.db.commit()
        return entry

    def log_failure(self, action: str, details: str, user_id: Optional[int] = None,
                    booking_id: Optional[int] = None) -> None:
        """Record a failed action after the caller rolled back; never raises"""
        try:
            self.log(action, details, user_id=user_id, booking_id=booking_id, commit=True)
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception(f"Could not record {action} for booking {booking_id}")

    def get_logs(self, action: Optional[str] = None, booking_id: Optional[int] = None,
                 limit: int = 100) -> List[SystemLog]:
        """Newest first"""
        query = self.db.query(SystemLog)
        if action:
            query = query.filter(SystemLog.action == action)
        if booking_id:
            query = query.filter(SystemLog.booking_id == booking_id)
        return query.order_by(SystemLog.created_at.desc(), SystemLog.id.desc()).limit(limit).all()
