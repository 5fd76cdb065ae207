"""
Booking routes
"""
from typing import Dict, List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from frontdesk.database import get_db
from frontdesk.domain.civil_time import Clock, get_clock
from frontdesk.models.ontology import Employee
from frontdesk.models.schemas import BookingResponse, BookingUpdate
from frontdesk.routers.errors import http_error
from frontdesk.services.booking_service import BookingService
from frontdesk.security.auth import require_staff

router = APIRouter(prefix="/bookings", tags=["Bookings"])


@router.get("", response_model=Dict[str, List[BookingResponse]])
def list_bookings(
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_staff)
):
    """Active bookings grouped by floor"""
    return BookingService(db).get_bookings_by_floor()


@router.get("/{booking_id}", response_model=BookingResponse)
def get_booking(
    booking_id: int,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_staff)
):
    """Booking detail"""
    booking = BookingService(db).get_booking(booking_id)
    if not booking:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Booking not found")
    return booking


@router.put("/{booking_id}", response_model=BookingResponse)
def update_booking(
    booking_id: int,
    data: BookingUpdate,
    clock: Clock = Depends(get_clock),
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_staff)
):
    """Edit stay, room, advance or accompanying guests"""
    service = BookingService(db, clock)
    try:
        return service.update_booking(booking_id, data, current_user.id)
    except ValueError as e:
        raise http_error(e)
