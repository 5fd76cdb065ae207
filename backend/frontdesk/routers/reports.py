"""
Report routes (admin)
"""
from datetime import datetime
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from frontdesk.database import get_db
from frontdesk.domain.civil_time import Clock, get_clock
from frontdesk.models.ontology import Employee
from frontdesk.models.schemas import GuestHistoryResponse
from frontdesk.routers.errors import http_error
from frontdesk.services.report_service import DEFAULT_PAGE_SIZE, ReportService
from frontdesk.security.auth import require_admin

router = APIRouter(prefix="/reports", tags=["Reports"])


@router.get("/dashboard")
def get_dashboard(
    clock: Clock = Depends(get_clock),
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_admin)
):
    """Rooms, guests and revenue today, this week and this month"""
    return ReportService(db, clock).get_dashboard_stats()


@router.get("/guest-history")
def get_guest_history(
    period: str = "weekly",
    from_date: Optional[datetime] = None,
    to_date: Optional[datetime] = None,
    page: int = Query(1, ge=1),
    page_size: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=100),
    clock: Clock = Depends(get_clock),
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_admin)
):
    """Settled guests, newest checkout first"""
    service = ReportService(db, clock)
    try:
        result = service.get_guest_history(period, from_date, to_date, page, page_size)
    except ValueError as e:
        raise http_error(e)
    result['items'] = [GuestHistoryResponse.model_validate(row) for row in result['items']]
    return result


@router.delete("/guest-history/{history_id}")
def delete_guest_history(
    history_id: int,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_admin)
):
    """Remove a guest history record"""
    service = ReportService(db)
    try:
        service.delete_guest_history(history_id)
    except ValueError as e:
        raise http_error(e)
    return {"message": "Guest history record deleted"}
