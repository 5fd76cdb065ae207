"""
System log routes (admin)
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from frontdesk.database import get_db
from frontdesk.models.ontology import Employee
from frontdesk.models.schemas import SystemLogResponse
from frontdesk.services.audit_service import AuditService
from frontdesk.security.auth import require_admin

router = APIRouter(prefix="/system-logs", tags=["System Logs"])


@router.get("", response_model=List[SystemLogResponse])
def list_system_logs(
    action: Optional[str] = None,
    booking_id: Optional[int] = None,
    limit: int = Query(100, ge=1, le=1000),
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_admin)
):
    """Operator actions, newest first"""
    return AuditService(db).get_logs(action, booking_id, limit)
