"""
Checkout routes
"""
from decimal import Decimal
from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from frontdesk.database import get_db
from frontdesk.domain.civil_time import Clock, get_clock
from frontdesk.models.ontology import Employee
from frontdesk.models.schemas import BookingResponse, CheckOutRequest
from frontdesk.routers.errors import http_error
from frontdesk.services.checkout_service import CheckOutService
from frontdesk.security.auth import require_staff

router = APIRouter(prefix="/checkout", tags=["Checkout"])


@router.get("/occupied", response_model=List[BookingResponse])
def list_occupied(
    search: Optional[str] = None,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_staff)
):
    """Bookings of occupied rooms, searchable by room number"""
    return CheckOutService(db).get_occupied_bookings(search)


@router.post("/{booking_id}/start")
def start_checkout(
    booking_id: int,
    clock: Clock = Depends(get_clock),
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_staff)
):
    """Begin checkout of a booking"""
    service = CheckOutService(db, clock)
    try:
        booking = service.start_checkout(booking_id, current_user.id)
    except ValueError as e:
        raise http_error(e)
    return {"booking_id": booking.id, "room_number": booking.room.room_number}


@router.get("/{booking_id}/bill")
def review_bill(
    booking_id: int,
    extra_charges: Decimal = Query(Decimal("0"), ge=0),
    clock: Clock = Depends(get_clock),
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_staff)
):
    """Final bill if the booking were settled now"""
    service = CheckOutService(db, clock)
    try:
        return service.review(booking_id, extra_charges)
    except ValueError as e:
        raise http_error(e)


@router.post("/{booking_id}")
def check_out(
    booking_id: int,
    data: CheckOutRequest,
    clock: Clock = Depends(get_clock),
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_staff)
):
    """Settle and close a booking"""
    service = CheckOutService(db, clock)
    try:
        return service.check_out(booking_id, data, current_user.id)
    except ValueError as e:
        raise http_error(e)


@router.get("/{booking_id}/invoice")
def get_invoice(
    booking_id: int,
    extra_charges: Decimal = Query(Decimal("0"), ge=0),
    clock: Clock = Depends(get_clock),
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_staff)
):
    """Invoice figures for the final bill document"""
    service = CheckOutService(db, clock)
    try:
        return service.build_invoice(booking_id, extra_charges, current_user.id)
    except ValueError as e:
        raise http_error(e)
