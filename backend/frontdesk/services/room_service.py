"""
Room service
Room listing and selection for check-in
"""
import logging
from typing import List, Optional
from sqlalchemy.orm import Session
from frontdesk.domain.civil_time import Clock
from frontdesk.models.ontology import Room, RoomStatus
from frontdesk.services.audit_service import AuditService

logger = logging.getLogger(__name__)


class RoomService:
    """Room service"""

    def __init__(self, db: Session, clock: Optional[Clock] = None):
        self.db = db
        self.audit = AuditService(db, clock)

    def get_rooms(self, room_type: Optional[str] = None, floor: Optional[str] = None,
                  status: Optional[RoomStatus] = None) -> List[Room]:
        """List rooms, optionally filtered"""
        query = self.db.query(Room)

        if room_type:
            query = query.filter(Room.room_type == room_type)
        if floor:
            query = query.filter(Room.floor == floor)
        if status:
            query = query.filter(Room.status == status)

        return query.order_by(Room.floor, Room.room_number).all()

    def get_room(self, room_id: int) -> Optional[Room]:
        return self.db.query(Room).filter(Room.id == room_id).first()

    def get_room_options(self) -> dict:
        """Room types and floors that currently have an available room"""
        rooms = self.get_rooms(status=RoomStatus.AVAILABLE)
        return {
            'room_types': sorted({r.room_type for r in rooms}),
            'floors': sorted({r.floor for r in rooms})
        }

    def select_room(self, room_id: int, operator_id: int) -> Room:
        """Start a check-in on an available room"""
        room = self.get_room(room_id)
        if not room:
            raise ValueError("Room not found")

        if room.status != RoomStatus.AVAILABLE:
            raise ValueError(f"Room {room.room_number} is {room.status.value}")

        self.audit.log(
            "CHECKIN_INITIATED",
            f"User {operator_id} selected Room {room.room_number} ({room.room_type}) on {room.floor} floor",
            user_id=operator_id,
            commit=True
        )
        logger.info(f"Room {room.room_number} selected for check-in by {operator_id}")
        return room
