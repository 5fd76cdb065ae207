"""
Room routes
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from frontdesk.database import get_db
from frontdesk.domain.civil_time import Clock, get_clock
from frontdesk.models.ontology import Employee, RoomStatus
from frontdesk.models.schemas import RoomResponse
from frontdesk.routers.errors import http_error
from frontdesk.services.room_service import RoomService
from frontdesk.security.auth import require_staff

router = APIRouter(prefix="/rooms", tags=["Rooms"])


@router.get("", response_model=List[RoomResponse])
def list_rooms(
    room_type: Optional[str] = None,
    floor: Optional[str] = None,
    status_filter: Optional[RoomStatus] = Query(RoomStatus.AVAILABLE, alias="status"),
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_staff)
):
    """Rooms, available ones by default"""
    return RoomService(db).get_rooms(room_type, floor, status_filter)


@router.get("/options")
def get_room_options(
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_staff)
):
    """Room types and floors with an available room"""
    return RoomService(db).get_room_options()


@router.get("/{room_id}", response_model=RoomResponse)
def get_room(
    room_id: int,
    db: Session = Depends(get_db),
    current_user: Employee = Depends(require_staff)
):
    """Room detail"""
    room = RoomService(db).get_room(room_id)
    if not room:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Room not found")
    return room


@router.post("/{room_id}/select", response_model=RoomResponse)
def select_room(
    room_id: int,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
    current_user: Employee = Depends(require_staff)
):
    """Start a check-in on a room"""
    service = RoomService(db, clock)
    try:
        return service.select_room(room_id, current_user.id)
    except ValueError as e:
        raise http_error(e)
