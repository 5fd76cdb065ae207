"""
Check-in routes
"""
from typing import Optional
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from frontdesk.database import get_db
from frontdesk.domain.civil_time import Clock, format_for_input, format_for_storage, get_clock
from frontdesk.models.ontology import Employee
from frontdesk.models.schemas import (
    BookingResponse, CheckInRequest, CheckinDraftUpdate, StayPlanRequest
)
from frontdesk.routers.errors import http_error
from frontdesk.services.checkin_service import CheckInService
from frontdesk.services.draft_service import DraftService
from frontdesk.security.auth import require_staff

router = APIRouter(prefix="/checkin", tags=["Check-in"])


@router.post("/stay-plan")
def plan_stay(
    data: StayPlanRequest,
    clock: Clock = Depends(get_clock),
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_staff)
):
    """Days from a planned checkout, or checkout from days"""
    service = CheckInService(db, clock)
    try:
        plan = service.plan_stay(data)
    except ValueError as e:
        raise http_error(e)
    return {
        'stay_days': plan.stay_days,
        'checkin_time': format_for_storage(plan.checkin),
        'checkout_time': format_for_storage(plan.checkout),
        'checkout_input': format_for_input(plan.checkout)
    }


@router.post("/preview")
def preview_checkin(
    data: CheckInRequest,
    clock: Clock = Depends(get_clock),
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_staff)
):
    """Provisional bill before confirming"""
    service = CheckInService(db, clock)
    try:
        return service.preview(data)
    except ValueError as e:
        raise http_error(e)


@router.post("", response_model=BookingResponse)
def check_in(
    data: CheckInRequest,
    clock: Clock = Depends(get_clock),
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_staff)
):
    """Confirm a check-in"""
    service = CheckInService(db, clock)
    try:
        return service.check_in(data, current_user.id)
    except ValueError as e:
        raise http_error(e)


@router.get("/draft")
def get_draft(
    clock: Clock = Depends(get_clock),
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_staff)
) -> Optional[dict]:
    """The operator's unfinished check-in, null when none"""
    return DraftService(db, clock).get_draft(current_user.id)


@router.put("/draft")
def save_draft(
    data: CheckinDraftUpdate,
    clock: Clock = Depends(get_clock),
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_staff)
):
    """Save the unfinished check-in"""
    draft = DraftService(db, clock).save_draft(current_user.id, data.model_dump())
    return {"message": "Draft saved", "expires_at": format_for_storage(draft.expires_at)}


@router.delete("/draft")
def discard_draft(
    clock: Clock = Depends(get_clock),
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_staff)
):
    """Drop the unfinished check-in"""
    removed = DraftService(db, clock).discard(current_user.id)
    return {"removed": removed}


@router.delete("/draft/guests/{guest_id}")
def remove_draft_guest(
    guest_id: int,
    clock: Clock = Depends(get_clock),
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_staff)
):
    """Drop one guest from the unfinished check-in"""
    try:
        return DraftService(db, clock).remove_guest(current_user.id, guest_id)
    except ValueError as e:
        raise http_error(e)
